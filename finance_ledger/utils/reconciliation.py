import logging
from collections import defaultdict
from decimal import Decimal
from uuid import UUID

from sqlmodel import Session, select

from finance_ledger.core.exceptions import ConsistencyError
from finance_ledger.models.account import Account
from finance_ledger.models.budget import Budget
from finance_ledger.models.enums import TransactionType
from finance_ledger.models.transaction import Transaction
from finance_ledger.schemas.reconciliation import Drift, ReconciliationReport
from finance_ledger.utils.account_helpers import transaction_effects
from finance_ledger.utils.dates import month_of
from finance_ledger.utils.money import to_money

logger = logging.getLogger(__name__)


def expected_balances(session: Session, user_id: UUID) -> dict[int, Decimal]:
    """Opening balance plus the signed effect of every committed transaction, per account."""
    accounts = session.exec(select(Account).where(Account.user_id == user_id)).all()
    balances = {a.id: to_money(a.opening_balance) for a in accounts}

    for tx in session.exec(select(Transaction).where(Transaction.user_id == user_id)).all():
        for account_id, delta in transaction_effects(tx):
            if account_id in balances:
                balances[account_id] += delta
    return balances


def expected_spent(session: Session, user_id: UUID) -> dict[tuple[str, str], Decimal]:
    """Sum of expense amounts per (category, month bucket)."""
    totals: dict[tuple[str, str], Decimal] = defaultdict(lambda: Decimal("0.00"))
    expenses = session.exec(
        select(Transaction).where(
            Transaction.user_id == user_id, Transaction.type == TransactionType.expense
        )
    ).all()
    for tx in expenses:
        totals[(tx.category, month_of(tx.date))] += to_money(tx.amount)
    return totals


def reconcile(session: Session, user_id: UUID, apply: bool = True) -> ReconciliationReport:
    """
    Rebuilds balances and budget totals from the transaction log and compares them with
    what is stored. With apply=True every drifted value is overwritten with the rebuilt one.
    """
    report = ReconciliationReport(applied=apply)

    balances = expected_balances(session, user_id)
    accounts = session.exec(select(Account).where(Account.user_id == user_id)).all()
    for account in accounts:
        report.accounts_checked += 1
        stored = to_money(account.balance)
        expected = balances[account.id]
        if stored != expected:
            report.drifts.append(
                Drift(entity="account", entity_id=account.id, field="balance", stored=stored, expected=expected)
            )
            if apply:
                account.balance = expected
                session.add(account)

    spent = expected_spent(session, user_id)
    budgets = session.exec(select(Budget).where(Budget.user_id == user_id)).all()
    for budget in budgets:
        report.budgets_checked += 1
        stored = to_money(budget.spent)
        expected = spent.get((budget.category, budget.month), Decimal("0.00"))
        if stored != expected:
            report.drifts.append(
                Drift(entity="budget", entity_id=budget.id, field="spent", stored=stored, expected=expected)
            )
            if apply:
                budget.spent = expected
                session.add(budget)

    if report.drifts:
        logger.warning(
            "Ledger of user %s had %d drifted value(s)%s",
            user_id,
            len(report.drifts),
            " (repaired)" if apply else "",
        )
    session.flush()
    return report


def verify_consistency(session: Session, user_id: UUID) -> ReconciliationReport:
    report = reconcile(session, user_id, apply=False)
    if report.drifts:
        details = ", ".join(f"{d.entity} {d.entity_id} {d.field}: {d.stored} != {d.expected}" for d in report.drifts)
        raise ConsistencyError(f"Ledger is inconsistent: {details}", drifts=report.drifts)
    return report
