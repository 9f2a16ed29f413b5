import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import Session, select, func

from finance_ledger.core.exceptions import NotFoundError, ValidationError
from finance_ledger.models.budget import Budget
from finance_ledger.models.enums import TransactionType, UtilizationStatus
from finance_ledger.models.transaction import Transaction
from finance_ledger.schemas.budget import BudgetRead, BudgetUtilization, BudgetWithUtilization
from finance_ledger.utils.dates import current_month, is_valid_month, month_bounds
from finance_ledger.utils.money import checked_money, to_money

logger = logging.getLogger(__name__)

WARNING_THRESHOLD = Decimal("80")
EXCEEDED_THRESHOLD = Decimal("100")


def _shift_spent(session: Session, user_id: UUID, category: str, month: str, delta: Decimal) -> int:
    result = session.execute(
        update(Budget)
        .where(Budget.user_id == user_id, Budget.category == category, Budget.month == month)
        .values(spent=Budget.spent + delta)
    )
    return result.rowcount


def record_expense(session: Session, user_id: UUID, category: str, month: str, amount: Decimal) -> bool:
    """
    Adds an expense to the (category, month) budget. Without a budget row nothing
    happens: no row is created and no error is raised. Returns whether a row matched.
    """
    matched = _shift_spent(session, user_id, category, month, to_money(amount))
    if not matched:
        logger.debug("No budget for %s in %s; expense not tracked", category, month)
    return bool(matched)


def reverse_expense(session: Session, user_id: UUID, category: str, month: str, amount: Decimal) -> bool:
    return bool(_shift_spent(session, user_id, category, month, -to_money(amount)))


def compute_utilization(budget: Budget) -> BudgetUtilization:
    amount = to_money(budget.amount)
    spent = to_money(budget.spent)
    if amount > 0:
        percentage = spent / amount * 100
    else:
        percentage = Decimal("0")

    if percentage >= EXCEEDED_THRESHOLD:
        status = UtilizationStatus.exceeded
    elif percentage >= WARNING_THRESHOLD:
        status = UtilizationStatus.warning
    else:
        status = UtilizationStatus.safe

    return BudgetUtilization(
        percentage=percentage.quantize(Decimal("0.01")),
        status=status,
        remaining=amount - spent,
    )


def month_expense_total(session: Session, user_id: UUID, category: str, month: str) -> Decimal:
    start, end = month_bounds(month)
    total = session.exec(
        select(func.coalesce(func.sum(Transaction.amount), 0)).where(
            Transaction.user_id == user_id,
            Transaction.type == TransactionType.expense,
            Transaction.category == category,
            Transaction.date >= start,
            Transaction.date < end,
        )
    ).one()
    return to_money(total)


def _validate_amount(amount: Decimal) -> Decimal:
    amount = checked_money(amount, "Budget amount")
    if amount < 0:
        raise ValidationError("Budget amount cannot be negative")
    return amount


def get_owned_budget(session: Session, user_id: UUID, budget_id: int) -> Budget:
    budget = session.exec(
        select(Budget).where(Budget.id == budget_id, Budget.user_id == user_id)
    ).first()
    if not budget:
        raise NotFoundError("Budget not found")
    return budget


def create_budget(session: Session, user_id: UUID, category: str, amount: Decimal, month: str) -> Budget:
    """
    Upserts by (user, category, month). A new row starts with spent seeded from the
    expenses already recorded for that month; an existing row only gets its cap changed.
    """
    category = (category or "").strip()
    if not category:
        raise ValidationError("Budget category is required")
    if not is_valid_month(month):
        raise ValidationError("Month must be in YYYY-MM format")
    amount = _validate_amount(amount)

    budget = session.exec(
        select(Budget).where(
            Budget.user_id == user_id, Budget.category == category, Budget.month == month
        )
    ).first()
    if budget:
        budget.amount = amount
    else:
        budget = Budget(
            user_id=user_id,
            category=category,
            amount=amount,
            spent=month_expense_total(session, user_id, category, month),
            month=month,
        )
    session.add(budget)
    session.flush()
    return budget


def update_budget(session: Session, user_id: UUID, budget_id: int, amount: Decimal) -> Budget:
    budget = get_owned_budget(session, user_id, budget_id)
    budget.amount = _validate_amount(amount)
    session.add(budget)
    session.flush()
    return budget


def delete_budget(session: Session, user_id: UUID, budget_id: int) -> None:
    budget = get_owned_budget(session, user_id, budget_id)
    session.delete(budget)
    session.flush()


def list_budgets(session: Session, user_id: UUID, month: Optional[str] = None) -> list[Budget]:
    month = month or current_month()
    if not is_valid_month(month):
        raise ValidationError("Month must be in YYYY-MM format")
    return list(
        session.exec(
            select(Budget)
            .where(Budget.user_id == user_id, Budget.month == month)
            .order_by(Budget.category.asc())
        ).all()
    )


def with_utilization(budget: Budget) -> BudgetWithUtilization:
    data = BudgetRead.model_validate(budget, from_attributes=True).model_dump()
    return BudgetWithUtilization(**data, utilization=compute_utilization(budget))
