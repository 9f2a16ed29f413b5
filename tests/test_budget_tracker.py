import datetime as dt
from decimal import Decimal

import pytest
from sqlmodel import select

from finance_ledger import operations
from finance_ledger.models.budget import Budget
from finance_ledger.models.enums import UtilizationStatus
from finance_ledger.utils.budget_helpers import compute_utilization


class TestUtilization:

    @pytest.mark.parametrize(
        "amount, spent, percentage, status",
        [
            ("1000", "750", "75.00", UtilizationStatus.safe),
            ("1000", "799.99", "80.00", UtilizationStatus.safe),
            ("1000", "800", "80.00", UtilizationStatus.warning),
            ("1000", "850", "85.00", UtilizationStatus.warning),
            ("1000", "1000", "100.00", UtilizationStatus.exceeded),
            ("200", "250", "125.00", UtilizationStatus.exceeded),
            ("0", "40", "0.00", UtilizationStatus.safe),
        ],
    )
    def test_bands(self, amount, spent, percentage, status):
        budget = Budget(category="Food & Dining", amount=Decimal(amount), spent=Decimal(spent), month="2025-03")
        utilization = compute_utilization(budget)
        assert utilization.percentage == Decimal(percentage)
        assert utilization.status == status
        assert utilization.remaining == Decimal(amount) - Decimal(spent)

    def test_list_includes_utilization(self, session, owner_id, make_account, post):
        account = make_account(balance="1000.00")
        operations.create_budget(session, owner_id, "Food & Dining", Decimal("1000"), "2025-03")
        post("expense", "850.00", account)

        budgets = operations.list_budgets(session, owner_id, "2025-03").data
        assert len(budgets) == 1
        assert budgets[0].spent == Decimal("850.00")
        assert budgets[0].utilization.status == UtilizationStatus.warning


class TestCreateBudget:

    def test_new_budget_counts_existing_expenses(self, session, owner_id, make_account, post):
        account = make_account(balance="500.00")
        post("expense", "20.00", account, date=dt.date(2025, 3, 1))
        post("expense", "30.50", account, date=dt.date(2025, 3, 31))
        post("expense", "99.00", account, date=dt.date(2025, 4, 1))

        budget = operations.create_budget(session, owner_id, "Food & Dining", Decimal("400"), "2025-03").data
        assert budget.spent == Decimal("50.50")

    def test_upsert_only_changes_amount(self, session, owner_id, make_account, post):
        account = make_account()
        first = operations.create_budget(session, owner_id, "Food & Dining", Decimal("100"), "2025-03").data
        post("expense", "40.00", account)

        second = operations.create_budget(session, owner_id, "Food & Dining", Decimal("250"), "2025-03").data
        assert second.id == first.id
        assert second.amount == Decimal("250.00")
        assert second.spent == Decimal("40.00")
        assert len(session.exec(select(Budget)).all()) == 1

    @pytest.mark.parametrize("month", ["2025-3", "2025/03", "2025-13", "march"])
    def test_month_format(self, session, owner_id, month):
        result = operations.create_budget(session, owner_id, "Food & Dining", Decimal("10"), month)
        assert result.error_type == "ValidationError"

    def test_negative_amount(self, session, owner_id):
        result = operations.create_budget(session, owner_id, "Food & Dining", Decimal("-1"), "2025-03")
        assert result.error_type == "ValidationError"

    def test_amount_beyond_column_range(self, session, owner_id):
        result = operations.create_budget(session, owner_id, "Food & Dining", Decimal("1e27"), "2025-03")
        assert result.error_type == "ValidationError"
        assert result.error == "Budget amount is out of range"

    def test_budgets_are_per_owner(self, session, owner_id, other_owner_id):
        operations.create_budget(session, owner_id, "Food & Dining", Decimal("100"), "2025-03")
        operations.create_budget(session, other_owner_id, "Food & Dining", Decimal("300"), "2025-03")

        mine = operations.list_budgets(session, owner_id, "2025-03").data
        assert [b.amount for b in mine] == [Decimal("100.00")]


class TestEditBudget:

    def test_update_amount(self, session, owner_id):
        budget = operations.create_budget(session, owner_id, "Shopping", Decimal("100"), "2025-03").data
        updated = operations.update_budget(session, owner_id, budget.id, Decimal("80")).data
        assert updated.amount == Decimal("80.00")

    def test_delete_then_expense_is_untracked(self, session, owner_id, make_account, post):
        account = make_account()
        budget = operations.create_budget(session, owner_id, "Food & Dining", Decimal("100"), "2025-03").data
        assert operations.delete_budget(session, owner_id, budget.id).success

        post("expense", "10.00", account)
        assert session.exec(select(Budget)).all() == []

    def test_foreign_budget_is_not_found(self, session, owner_id, other_owner_id):
        budget = operations.create_budget(session, owner_id, "Shopping", Decimal("100"), "2025-03").data
        assert operations.update_budget(session, other_owner_id, budget.id, Decimal("1")).error_type == "NotFoundError"
        assert operations.delete_budget(session, other_owner_id, budget.id).error_type == "NotFoundError"
