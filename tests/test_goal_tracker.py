import datetime as dt
from decimal import Decimal

import pytest

from finance_ledger import operations
from finance_ledger.models.enums import GoalPriority, GoalStatus
from finance_ledger.schemas.goal import GoalCreate, GoalUpdate


@pytest.fixture
def make_goal(session, owner_id):
    def _make(name="Emergency fund", target="1000", current="0", priority=GoalPriority.medium, deadline=dt.date(2026, 6, 30)):
        result = operations.create_goal(
            session,
            owner_id,
            GoalCreate(
                name=name,
                target_amount=Decimal(target),
                current_amount=Decimal(current),
                deadline=deadline,
                priority=priority,
            ),
        )
        assert result.success, result.error
        return result.data
    return _make


class TestContribute:

    def test_partial_contribution(self, session, owner_id, make_goal):
        goal = make_goal(current="900")
        goal = operations.contribute_to_goal(session, owner_id, goal.id, Decimal("50")).data
        assert goal.current_amount == Decimal("950.00")
        assert goal.status == GoalStatus.active

    def test_contribution_is_clamped_and_completes(self, session, owner_id, make_goal):
        goal = make_goal(current="900")
        goal = operations.contribute_to_goal(session, owner_id, goal.id, Decimal("500")).data
        assert goal.current_amount == Decimal("1000.00")
        assert goal.status == GoalStatus.completed

    def test_paused_goal_stays_paused(self, session, owner_id, make_goal):
        goal = make_goal()
        operations.set_goal_status(session, owner_id, goal.id, GoalStatus.paused)
        goal = operations.contribute_to_goal(session, owner_id, goal.id, Decimal("10")).data
        assert goal.status == GoalStatus.paused

    def test_paused_goal_completes_at_target(self, session, owner_id, make_goal):
        goal = make_goal(target="100")
        operations.set_goal_status(session, owner_id, goal.id, GoalStatus.paused)
        goal = operations.contribute_to_goal(session, owner_id, goal.id, Decimal("100")).data
        assert goal.status == GoalStatus.completed

    @pytest.mark.parametrize("amount", ["0.001", "0.004"])
    def test_sub_cent_contribution_is_rejected(self, session, owner_id, make_goal, amount):
        goal = make_goal(current="100")
        result = operations.contribute_to_goal(session, owner_id, goal.id, Decimal(amount))
        assert result.error_type == "ValidationError"
        session.refresh(goal)
        assert goal.current_amount == Decimal("100.00")

    def test_contribution_beyond_column_range(self, session, owner_id, make_goal):
        goal = make_goal()
        result = operations.contribute_to_goal(session, owner_id, goal.id, Decimal("1e27"))
        assert result.error_type == "ValidationError"

    @pytest.mark.parametrize("amount", ["0", "-10"])
    def test_non_positive_contribution(self, session, owner_id, make_goal, amount):
        goal = make_goal()
        result = operations.contribute_to_goal(session, owner_id, goal.id, Decimal(amount))
        assert result.error_type == "ValidationError"


class TestStatus:

    def test_pause_and_resume(self, session, owner_id, make_goal):
        goal = make_goal()
        assert operations.set_goal_status(session, owner_id, goal.id, GoalStatus.paused).data.status == GoalStatus.paused
        assert operations.set_goal_status(session, owner_id, goal.id, GoalStatus.active).data.status == GoalStatus.active

    def test_cannot_set_completed_directly(self, session, owner_id, make_goal):
        goal = make_goal()
        result = operations.set_goal_status(session, owner_id, goal.id, GoalStatus.completed)
        assert result.error_type == "ValidationError"

    def test_completed_goal_cannot_be_paused(self, session, owner_id, make_goal):
        goal = make_goal(current="1000")
        assert goal.status == GoalStatus.completed
        result = operations.set_goal_status(session, owner_id, goal.id, GoalStatus.paused)
        assert result.error_type == "ValidationError"

    def test_mark_complete_fills_target(self, session, owner_id, make_goal):
        goal = make_goal(current="120")
        goal = operations.mark_goal_complete(session, owner_id, goal.id).data
        assert goal.current_amount == Decimal("1000.00")
        assert goal.status == GoalStatus.completed


class TestEdit:

    def test_amount_edit_completes_regardless_of_status(self, session, owner_id, make_goal):
        goal = make_goal()
        goal = operations.update_goal(
            session, owner_id, goal.id, GoalUpdate(current_amount=Decimal("1000"), status=GoalStatus.paused)
        ).data
        assert goal.status == GoalStatus.completed

    def test_raising_target_reopens_completed_goal(self, session, owner_id, make_goal):
        goal = make_goal(target="500", current="500")
        goal = operations.update_goal(session, owner_id, goal.id, GoalUpdate(target_amount=Decimal("800"))).data
        assert goal.status == GoalStatus.active

    def test_completed_status_needs_target(self, session, owner_id, make_goal):
        goal = make_goal(current="10")
        result = operations.update_goal(session, owner_id, goal.id, GoalUpdate(status=GoalStatus.completed))
        assert result.error_type == "ValidationError"

    def test_invalid_amounts(self, session, owner_id, make_goal):
        goal = make_goal()
        assert operations.update_goal(
            session, owner_id, goal.id, GoalUpdate(target_amount=Decimal("0"))
        ).error_type == "ValidationError"
        assert operations.update_goal(
            session, owner_id, goal.id, GoalUpdate(current_amount=Decimal("-1"))
        ).error_type == "ValidationError"

    @pytest.mark.parametrize("status", [GoalStatus.paused, GoalStatus.active])
    def test_status_only_edit_keeps_funded_goal_completed(self, session, owner_id, make_goal, status):
        goal = make_goal(target="100", current="100")
        assert goal.status == GoalStatus.completed

        goal = operations.update_goal(session, owner_id, goal.id, GoalUpdate(status=status)).data
        assert goal.status == GoalStatus.completed
        assert goal.current_amount == goal.target_amount == Decimal("100.00")

    def test_target_beyond_column_range(self, session, owner_id, make_goal):
        goal = make_goal()
        result = operations.update_goal(session, owner_id, goal.id, GoalUpdate(target_amount=Decimal("1e27")))
        assert result.error_type == "ValidationError"
        assert result.error == "Target amount is out of range"

    def test_foreign_goal_is_not_found(self, session, other_owner_id, make_goal):
        goal = make_goal()
        result = operations.update_goal(session, other_owner_id, goal.id, GoalUpdate(name="Mine now"))
        assert result.error_type == "NotFoundError"


class TestListing:

    def test_priority_then_deadline(self, session, owner_id, make_goal):
        make_goal(name="Holiday", priority=GoalPriority.low)
        make_goal(name="Car", priority=GoalPriority.high, deadline=dt.date(2027, 1, 1))
        make_goal(name="Rent buffer", priority=GoalPriority.critical)
        make_goal(name="Laptop", priority=GoalPriority.high, deadline=dt.date(2026, 1, 1))

        names = [g.name for g in operations.list_goals(session, owner_id).data]
        assert names == ["Rent buffer", "Laptop", "Car", "Holiday"]

    def test_delete(self, session, owner_id, make_goal):
        goal = make_goal()
        assert operations.delete_goal(session, owner_id, goal.id).success
        assert operations.list_goals(session, owner_id).data == []
