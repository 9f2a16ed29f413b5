import logging
from decimal import Decimal
from uuid import UUID

from sqlmodel import Session, select, func, or_

from finance_ledger.constants.categories import TRANSFER_CATEGORY
from finance_ledger.core.exceptions import NotFoundError, ValidationError
from finance_ledger.models.enums import TransactionType
from finance_ledger.models.transaction import Transaction
from finance_ledger.schemas.transaction import TransactionCreate, TransactionFilters, TransactionPage, TransactionRead
from finance_ledger.utils.account_helpers import (
    apply_transaction_effect,
    get_owned_account,
    reverse_transaction_effect,
)
from finance_ledger.utils.budget_helpers import record_expense, reverse_expense
from finance_ledger.utils.dates import is_valid_month, month_bounds, month_of, today
from finance_ledger.utils.money import checked_money

logger = logging.getLogger(__name__)


def validate_intent(intent: TransactionCreate) -> Decimal:
    """Checks an intent and returns its amount rounded to cents."""
    if intent.amount is None:
        raise ValidationError("Amount must be greater than zero")
    amount = checked_money(intent.amount)
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    if intent.account_id is None:
        raise ValidationError("An account is required")
    if intent.type == TransactionType.transfer:
        if intent.to_account_id is None:
            raise ValidationError("Transfers need a destination account")
        if intent.to_account_id == intent.account_id:
            raise ValidationError("Cannot transfer to the same account")
    elif not (intent.category or "").strip():
        raise ValidationError("Category is required")
    return amount


def _check_postable(session: Session, user_id: UUID, account_id: int) -> None:
    account = get_owned_account(session, user_id, account_id)
    if not account.is_active:
        raise ValidationError(f"Account '{account.name}' is not active")


def create_transaction(session: Session, user_id: UUID, intent: TransactionCreate) -> Transaction:
    """
    Records a transaction and its effects: the row itself, the account balance(s) and,
    for expenses, the matching budget's spent total. The caller owns the commit so all
    three writes land together or not at all.
    """
    amount = validate_intent(intent)

    _check_postable(session, user_id, intent.account_id)
    is_transfer = intent.type == TransactionType.transfer
    if is_transfer:
        _check_postable(session, user_id, intent.to_account_id)

    tx = Transaction(
        user_id=user_id,
        type=intent.type,
        amount=amount,
        category=TRANSFER_CATEGORY if is_transfer else intent.category.strip(),
        description=(intent.description or "").strip(),
        account_id=intent.account_id,
        to_account_id=intent.to_account_id if is_transfer else None,
        date=intent.date or today(),
    )
    session.add(tx)
    session.flush()

    apply_transaction_effect(session, tx)
    if tx.type == TransactionType.expense:
        record_expense(session, user_id, tx.category, month_of(tx.date), tx.amount)

    logger.info("Transaction %s recorded: %s %s", tx.id, tx.type.value, tx.amount)
    return tx


def get_owned_transaction(session: Session, user_id: UUID, transaction_id: int) -> Transaction:
    tx = session.exec(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    ).first()
    if not tx:
        raise NotFoundError("Transaction not found")
    return tx


def delete_transaction(session: Session, user_id: UUID, transaction_id: int) -> None:
    """
    Undoes a transaction. Effects are reversed before the row goes away, and the budget
    is looked up with the transaction's own category and month.
    """
    tx = get_owned_transaction(session, user_id, transaction_id)

    reverse_transaction_effect(session, tx)
    if tx.type == TransactionType.expense:
        reverse_expense(session, user_id, tx.category, month_of(tx.date), tx.amount)

    session.delete(tx)
    session.flush()
    logger.info("Transaction %s reversed and removed", transaction_id)


def list_transactions(
    session: Session,
    user_id: UUID,
    filters: TransactionFilters | None = None,
    page: int = 1,
    page_size: int = 20,
) -> TransactionPage:
    filters = filters or TransactionFilters()
    query = select(Transaction).where(Transaction.user_id == user_id)

    if filters.month:
        if not is_valid_month(filters.month):
            raise ValidationError("Month must be in YYYY-MM format")
        start, end = month_bounds(filters.month)
        query = query.where(Transaction.date >= start, Transaction.date < end)
    if filters.account_id is not None:
        query = query.where(
            or_(Transaction.account_id == filters.account_id, Transaction.to_account_id == filters.account_id)
        )
    if filters.type:
        query = query.where(Transaction.type == filters.type)
    if filters.category:
        query = query.where(Transaction.category == filters.category)

    total = session.exec(select(func.count()).select_from(query.subquery())).one()

    transactions = session.exec(
        query.order_by(Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).all()

    return TransactionPage(
        items=[TransactionRead.model_validate(t, from_attributes=True) for t in transactions],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=max(1, (total + page_size - 1) // page_size),
    )
