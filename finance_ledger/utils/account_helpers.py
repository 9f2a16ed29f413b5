import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy import update
from sqlmodel import Session, select, or_

from finance_ledger.core.exceptions import NotFoundError, ValidationError
from finance_ledger.models.account import Account
from finance_ledger.models.enums import AccountType, TransactionType
from finance_ledger.models.transaction import Transaction
from finance_ledger.schemas.account import AccountCreate, AccountUpdate
from finance_ledger.utils.money import checked_money, to_money

logger = logging.getLogger(__name__)

FIXED_DEPOSIT_FIELDS = ("interest_rate", "deposit_date", "maturity_date")
MAX_INTEREST_RATE = Decimal("100")


def get_owned_account(session: Session, user_id: UUID, account_id: int) -> Account:
    account = session.exec(
        select(Account).where(Account.id == account_id, Account.user_id == user_id)
    ).first()
    if not account:
        raise NotFoundError("Account not found")
    return account


def update_account_balance(session: Session, user_id: UUID, account_id: int, amount_delta: Decimal):
    """
    Shifts the stored balance by amount_delta with a single UPDATE ... SET balance = balance + delta,
    so concurrent writers never overwrite each other's increments. Negative results are allowed.
    """
    result = session.execute(
        update(Account)
        .where(Account.id == account_id, Account.user_id == user_id)
        .values(balance=Account.balance + amount_delta)
    )
    if result.rowcount != 1:
        raise NotFoundError("Account not found")


def transaction_effects(tx: Transaction) -> list[tuple[int, Decimal]]:
    """Signed balance deltas a committed transaction applies, as (account_id, delta) pairs."""
    amount = to_money(tx.amount)
    if tx.type == TransactionType.income:
        return [(tx.account_id, amount)]
    if tx.type == TransactionType.expense:
        return [(tx.account_id, -amount)]
    if tx.type == TransactionType.transfer:
        return [(tx.account_id, -amount), (tx.to_account_id, amount)]
    raise ValidationError(f"Unknown transaction type: {tx.type}")


def apply_transaction_effect(session: Session, tx: Transaction) -> None:
    for account_id, delta in transaction_effects(tx):
        update_account_balance(session, tx.user_id, account_id, delta)


def reverse_transaction_effect(session: Session, tx: Transaction) -> None:
    for account_id, delta in transaction_effects(tx):
        update_account_balance(session, tx.user_id, account_id, -delta)


def set_primary(session: Session, user_id: UUID, account_id: int) -> Account:
    """
    Makes account_id the owner's only primary account. Must run inside the same
    database transaction as the account write that asked for it.
    """
    account = get_owned_account(session, user_id, account_id)
    if not account.is_active:
        raise ValidationError("An inactive account cannot be primary")
    if account.type != AccountType.day_to_day:
        raise ValidationError("Only day-to-day accounts can be primary")

    session.execute(
        update(Account)
        .where(Account.user_id == user_id, Account.id != account_id, Account.is_primary == True)
        .values(is_primary=False)
    )
    account.is_primary = True
    session.add(account)
    session.flush()
    return account


def _check_fixed_deposit_fields(type_: AccountType, values: dict) -> None:
    if type_ == AccountType.fixed_deposit:
        return
    supplied = [name for name in FIXED_DEPOSIT_FIELDS if values.get(name) is not None]
    if supplied:
        raise ValidationError(f"Only fixed-deposit accounts accept: {', '.join(supplied)}")


def _check_interest_rate(rate) -> None:
    if rate is None:
        return
    if not rate.is_finite() or rate < 0 or rate > MAX_INTEREST_RATE:
        raise ValidationError("Interest rate must be between 0 and 100")


def _check_deposit_dates(account: Account) -> None:
    if account.deposit_date and account.maturity_date and account.maturity_date < account.deposit_date:
        raise ValidationError("Maturity date cannot be before the deposit date")


def create_account(session: Session, user_id: UUID, data: AccountCreate) -> Account:
    name = data.name.strip()
    if not name:
        raise ValidationError("Account name is required")

    existing = session.exec(
        select(Account).where(Account.user_id == user_id, Account.name == name)
    ).first()
    if existing:
        raise ValidationError("You already have an account with this name")

    values = data.model_dump()
    _check_fixed_deposit_fields(data.type, values)

    _check_interest_rate(data.interest_rate)
    balance = checked_money(data.balance, "Balance")
    account = Account(
        user_id=user_id,
        name=name,
        type=data.type,
        balance=balance,
        opening_balance=balance,
        interest_rate=data.interest_rate,
        deposit_date=data.deposit_date,
        maturity_date=data.maturity_date,
    )
    _check_deposit_dates(account)
    session.add(account)
    session.flush()

    if data.is_primary:
        set_primary(session, user_id, account.id)
    return account


def update_account(session: Session, user_id: UUID, account_id: int, data: AccountUpdate) -> Account:
    """
    Partial update. An explicit balance is a manual correction: the opening balance
    moves by the same amount so reconciliation keeps agreeing with it.
    """
    account = get_owned_account(session, user_id, account_id)
    changes = data.model_dump(exclude_unset=True)

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        clash = session.exec(
            select(Account).where(
                Account.user_id == user_id, Account.name == name, Account.id != account_id
            )
        ).first()
        if clash:
            raise ValidationError("You already have an account with this name")
        account.name = name

    if changes.get("type") is not None:
        account.type = changes["type"]
        if account.type == AccountType.day_to_day:
            for field in FIXED_DEPOSIT_FIELDS:
                setattr(account, field, None)
        elif account.is_primary:
            account.is_primary = False

    _check_fixed_deposit_fields(account.type, changes)
    _check_interest_rate(changes.get("interest_rate"))
    for field in FIXED_DEPOSIT_FIELDS:
        if field in changes:
            setattr(account, field, changes[field])
    _check_deposit_dates(account)

    if changes.get("balance") is not None:
        new_balance = checked_money(changes["balance"], "Balance")
        correction = new_balance - to_money(account.balance)
        account.opening_balance = checked_money(
            to_money(account.opening_balance) + correction, "Opening balance"
        )
        account.balance = new_balance
        logger.info("Balance of account %s corrected by %s", account_id, correction)

    if changes.get("is_active") is not None:
        account.is_active = changes["is_active"]
        if not account.is_active:
            account.is_primary = False

    session.add(account)
    session.flush()

    if changes.get("is_primary") is True:
        set_primary(session, user_id, account_id)
    elif changes.get("is_primary") is False:
        account.is_primary = False
        session.add(account)
        session.flush()
    return account


def account_has_history(session: Session, account_id: int) -> bool:
    return session.exec(
        select(Transaction.id)
        .where(or_(Transaction.account_id == account_id, Transaction.to_account_id == account_id))
        .limit(1)
    ).first() is not None


def delete_account(session: Session, user_id: UUID, account_id: int) -> bool:
    """
    Hard-deletes an account without history; otherwise only deactivates it.
    Returns True when the row was removed.
    """
    account = get_owned_account(session, user_id, account_id)
    if account_has_history(session, account_id):
        account.is_active = False
        account.is_primary = False
        session.add(account)
        session.flush()
        return False

    session.delete(account)
    session.flush()
    return True


def list_accounts(session: Session, user_id: UUID) -> list[Account]:
    return list(
        session.exec(
            select(Account)
            .where(Account.user_id == user_id)
            .order_by(Account.is_primary.desc(), Account.created_at.asc(), Account.id.asc())
        ).all()
    )


def calculate_interest(account: Account) -> Decimal:
    """Simple interest a fixed deposit earns between its deposit and maturity dates."""
    if (
        account.type != AccountType.fixed_deposit
        or account.interest_rate is None
        or not account.deposit_date
        or not account.maturity_date
    ):
        return Decimal("0.00")
    days = (account.maturity_date - account.deposit_date).days
    years = Decimal(days) / Decimal(365)
    return to_money(to_money(account.balance) * (Decimal(account.interest_rate) / Decimal(100)) * years)
