from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlmodel import Session, select, func

from finance_ledger.models.account import Account
from finance_ledger.models.enums import GoalStatus, TransactionType, UtilizationStatus
from finance_ledger.models.goal import Goal
from finance_ledger.models.transaction import Transaction
from finance_ledger.schemas.summary import DashboardSummary
from finance_ledger.schemas.transaction import TransactionRead
from finance_ledger.utils.budget_helpers import list_budgets, with_utilization
from finance_ledger.utils.dates import current_month, month_bounds
from finance_ledger.utils.money import to_money

RECENT_TRANSACTIONS = 5


def _month_total(session: Session, user_id: UUID, type_: TransactionType, month: str) -> Decimal:
    start, end = month_bounds(month)
    total = session.exec(
        select(func.coalesce(func.sum(Transaction.amount), 0)).where(
            Transaction.user_id == user_id,
            Transaction.type == type_,
            Transaction.date >= start,
            Transaction.date < end,
        )
    ).one()
    return to_money(total)


def budget_health(utilizations) -> Decimal:
    """Average headroom across budgets; an exceeded budget counts as zero. 100 with no budgets."""
    if not utilizations:
        return Decimal("100.00")
    headroom = [
        Decimal("100") - u.percentage if u.percentage <= 100 else Decimal("0")
        for u in utilizations
    ]
    return (sum(headroom) / len(headroom)).quantize(Decimal("0.01"))


def build_dashboard_summary(session: Session, user_id: UUID, month: Optional[str] = None) -> DashboardSummary:
    month = month or current_month()

    total_balance = session.exec(
        select(func.coalesce(func.sum(Account.balance), 0)).where(
            Account.user_id == user_id, Account.is_active == True
        )
    ).one()

    income = _month_total(session, user_id, TransactionType.income, month)
    expenses = _month_total(session, user_id, TransactionType.expense, month)

    active_goals = session.exec(
        select(func.count(Goal.id)).where(Goal.user_id == user_id, Goal.status == GoalStatus.active)
    ).one()

    budgets = [with_utilization(b) for b in list_budgets(session, user_id, month)]
    alerts = sorted(
        (b for b in budgets if b.utilization.status != UtilizationStatus.safe),
        key=lambda b: b.utilization.percentage,
        reverse=True,
    )

    recent = session.exec(
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id.desc())
        .limit(RECENT_TRANSACTIONS)
    ).all()

    return DashboardSummary(
        month=month,
        total_balance=to_money(total_balance),
        monthly_income=income,
        monthly_expenses=expenses,
        net=income - expenses,
        active_goals=active_goals,
        budget_health=budget_health([b.utilization for b in budgets]),
        budget_alerts=alerts,
        recent_transactions=[TransactionRead.model_validate(t, from_attributes=True) for t in recent],
    )
