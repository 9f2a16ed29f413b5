from decimal import Decimal
from uuid import UUID

from sqlalchemy import case
from sqlmodel import Session, select

from finance_ledger.core.exceptions import NotFoundError, ValidationError
from finance_ledger.models.enums import GoalPriority, GoalStatus
from finance_ledger.models.goal import Goal
from finance_ledger.schemas.goal import GoalCreate, GoalUpdate
from finance_ledger.utils.money import checked_money, to_money

PRIORITY_ORDER = {
    GoalPriority.critical: 1,
    GoalPriority.high: 2,
    GoalPriority.medium: 3,
    GoalPriority.low: 4,
}


def get_owned_goal(session: Session, user_id: UUID, goal_id: int) -> Goal:
    goal = session.exec(select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)).first()
    if not goal:
        raise NotFoundError("Goal not found")
    return goal


def _check_amounts(target: Decimal, current: Decimal) -> None:
    if target is None or target <= 0:
        raise ValidationError("Target amount must be greater than zero")
    if current is None or current < 0:
        raise ValidationError("Current amount cannot be negative")


def create_goal(session: Session, user_id: UUID, data: GoalCreate) -> Goal:
    name = data.name.strip()
    if not name:
        raise ValidationError("Goal name is required")
    target = checked_money(data.target_amount, "Target amount")
    current = checked_money(data.current_amount, "Current amount")
    _check_amounts(target, current)

    goal = Goal(
        user_id=user_id,
        name=name,
        target_amount=target,
        current_amount=current,
        deadline=data.deadline,
        priority=data.priority,
        status=GoalStatus.completed if current >= target else GoalStatus.active,
    )
    session.add(goal)
    session.flush()
    return goal


def contribute(session: Session, user_id: UUID, goal_id: int, amount: Decimal) -> Goal:
    """
    Adds to the goal, never past its target. Reaching the target completes the goal;
    falling short leaves the status alone, so a paused goal stays paused.
    """
    amount = checked_money(amount, "Contribution")
    if amount <= 0:
        raise ValidationError("Contribution must be greater than zero")

    goal = get_owned_goal(session, user_id, goal_id)
    target = to_money(goal.target_amount)
    new_amount = min(to_money(goal.current_amount) + amount, target)

    goal.current_amount = new_amount
    if new_amount >= target:
        goal.status = GoalStatus.completed
    session.add(goal)
    session.flush()
    return goal


def set_status(session: Session, user_id: UUID, goal_id: int, status: GoalStatus) -> Goal:
    """Moves a goal between active and paused. Completion goes through contribute or mark_complete."""
    if status == GoalStatus.completed:
        raise ValidationError("Use contribute or mark complete to complete a goal")

    goal = get_owned_goal(session, user_id, goal_id)
    if goal.status == GoalStatus.completed:
        raise ValidationError("A completed goal cannot be paused or resumed")

    goal.status = status
    session.add(goal)
    session.flush()
    return goal


def mark_complete(session: Session, user_id: UUID, goal_id: int) -> Goal:
    goal = get_owned_goal(session, user_id, goal_id)
    goal.current_amount = to_money(goal.target_amount)
    goal.status = GoalStatus.completed
    session.add(goal)
    session.flush()
    return goal


def update_goal(session: Session, user_id: UUID, goal_id: int, data: GoalUpdate) -> Goal:
    """
    Partial edit. Whenever the result has current >= target the goal is completed,
    whatever status came with the edit.
    """
    goal = get_owned_goal(session, user_id, goal_id)
    changes = data.model_dump(exclude_unset=True)

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise ValidationError("Goal name is required")
        goal.name = name

    target = (
        checked_money(changes["target_amount"], "Target amount")
        if changes.get("target_amount") is not None
        else to_money(goal.target_amount)
    )
    current = (
        checked_money(changes["current_amount"], "Current amount")
        if changes.get("current_amount") is not None
        else to_money(goal.current_amount)
    )
    _check_amounts(target, current)
    goal.target_amount = target
    goal.current_amount = current

    for field in ("deadline", "priority"):
        if changes.get(field) is not None:
            setattr(goal, field, changes[field])

    status = changes.get("status")

    if current >= target:
        goal.status = GoalStatus.completed
    elif status == GoalStatus.completed:
        raise ValidationError("A goal can only be completed once its target is reached")
    elif status is not None:
        goal.status = status
    elif goal.status == GoalStatus.completed:
        # target moved past the saved amount
        goal.status = GoalStatus.active

    session.add(goal)
    session.flush()
    return goal


def delete_goal(session: Session, user_id: UUID, goal_id: int) -> None:
    goal = get_owned_goal(session, user_id, goal_id)
    session.delete(goal)
    session.flush()


def list_goals(session: Session, user_id: UUID) -> list[Goal]:
    """Most urgent first: by priority, then by nearest deadline."""
    priority_rank = case(
        *[(Goal.priority == priority, rank) for priority, rank in PRIORITY_ORDER.items()],
        else_=len(PRIORITY_ORDER) + 1,
    )
    return list(
        session.exec(
            select(Goal)
            .where(Goal.user_id == user_id)
            .order_by(priority_rank, Goal.deadline.asc(), Goal.id.asc())
        ).all()
    )
