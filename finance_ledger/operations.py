"""
Entry points of the ledger engine.

Each operation receives the database session and the owner id, runs as one database
transaction and returns an OperationResult instead of raising: a failure carries the
message and the error type, and leaves nothing half-written.
"""
import logging
from decimal import Decimal
from functools import wraps
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from finance_ledger.core.exceptions import LedgerError, StorageError
from finance_ledger.core.results import OperationResult
from finance_ledger.database import atomic
from finance_ledger.models.enums import CategoryType, GoalStatus
from finance_ledger.schemas.account import AccountCreate, AccountUpdate
from finance_ledger.schemas.goal import GoalCreate, GoalUpdate
from finance_ledger.schemas.transaction import TransactionCreate, TransactionFilters
from finance_ledger.utils import (
    account_helpers,
    budget_helpers,
    category_helpers,
    goal_helpers,
    reconciliation,
    summary_helpers,
    transaction_helpers,
)

logger = logging.getLogger(__name__)


def operation(failure_message: str):
    """
    Runs the wrapped function inside atomic(session). Ledger errors become failed
    results with their own message; database errors are logged and reported with the
    generic failure_message.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(session: Session, *args, **kwargs) -> OperationResult:
            try:
                with atomic(session):
                    data = func(session, *args, **kwargs)
            except LedgerError as exc:
                logger.info("%s rejected: %s", func.__name__, exc.message)
                return OperationResult.fail(exc.message, exc.error_type)
            except SQLAlchemyError:
                logger.exception("%s failed, changes rolled back", func.__name__)
                return OperationResult.fail(failure_message, StorageError.error_type)
            return OperationResult.ok(data)
        return wrapper
    return decorator


# Accounts

@operation("Failed to create account")
def create_account(session: Session, owner_id: UUID, data: AccountCreate):
    return account_helpers.create_account(session, owner_id, data)


@operation("Failed to update account")
def update_account(session: Session, owner_id: UUID, account_id: int, data: AccountUpdate):
    return account_helpers.update_account(session, owner_id, account_id, data)


@operation("Failed to delete account")
def delete_account(session: Session, owner_id: UUID, account_id: int):
    return account_helpers.delete_account(session, owner_id, account_id)


@operation("Failed to set primary account")
def set_primary_account(session: Session, owner_id: UUID, account_id: int):
    return account_helpers.set_primary(session, owner_id, account_id)


@operation("Failed to load accounts")
def list_accounts(session: Session, owner_id: UUID):
    return account_helpers.list_accounts(session, owner_id)


@operation("Failed to load account")
def get_account(session: Session, owner_id: UUID, account_id: int):
    return account_helpers.get_owned_account(session, owner_id, account_id)


# Transactions

@operation("Failed to create transaction")
def create_transaction(session: Session, owner_id: UUID, intent: TransactionCreate):
    return transaction_helpers.create_transaction(session, owner_id, intent)


@operation("Failed to delete transaction")
def delete_transaction(session: Session, owner_id: UUID, transaction_id: int):
    transaction_helpers.delete_transaction(session, owner_id, transaction_id)


@operation("Failed to load transactions")
def list_transactions(
    session: Session,
    owner_id: UUID,
    filters: Optional[TransactionFilters] = None,
    page: int = 1,
    page_size: int = 20,
):
    return transaction_helpers.list_transactions(session, owner_id, filters, page, page_size)


# Budgets

@operation("Failed to create budget")
def create_budget(session: Session, owner_id: UUID, category: str, amount: Decimal, month: str):
    return budget_helpers.create_budget(session, owner_id, category, amount, month)


@operation("Failed to update budget")
def update_budget(session: Session, owner_id: UUID, budget_id: int, amount: Decimal):
    return budget_helpers.update_budget(session, owner_id, budget_id, amount)


@operation("Failed to delete budget")
def delete_budget(session: Session, owner_id: UUID, budget_id: int):
    budget_helpers.delete_budget(session, owner_id, budget_id)


@operation("Failed to load budgets")
def list_budgets(session: Session, owner_id: UUID, month: Optional[str] = None):
    return [
        budget_helpers.with_utilization(b)
        for b in budget_helpers.list_budgets(session, owner_id, month)
    ]


# Goals

@operation("Failed to create goal")
def create_goal(session: Session, owner_id: UUID, data: GoalCreate):
    return goal_helpers.create_goal(session, owner_id, data)


@operation("Failed to update goal")
def update_goal(session: Session, owner_id: UUID, goal_id: int, data: GoalUpdate):
    return goal_helpers.update_goal(session, owner_id, goal_id, data)


@operation("Failed to delete goal")
def delete_goal(session: Session, owner_id: UUID, goal_id: int):
    goal_helpers.delete_goal(session, owner_id, goal_id)


@operation("Failed to contribute to goal")
def contribute_to_goal(session: Session, owner_id: UUID, goal_id: int, amount: Decimal):
    return goal_helpers.contribute(session, owner_id, goal_id, amount)


@operation("Failed to update goal status")
def set_goal_status(session: Session, owner_id: UUID, goal_id: int, status: GoalStatus):
    return goal_helpers.set_status(session, owner_id, goal_id, status)


@operation("Failed to complete goal")
def mark_goal_complete(session: Session, owner_id: UUID, goal_id: int):
    return goal_helpers.mark_complete(session, owner_id, goal_id)


@operation("Failed to load goals")
def list_goals(session: Session, owner_id: UUID):
    return goal_helpers.list_goals(session, owner_id)


# Categories

@operation("Failed to create category")
def create_category(session: Session, owner_id: UUID, name: str, type_: CategoryType):
    return category_helpers.create_category(session, owner_id, name, type_)


@operation("Failed to delete category")
def delete_category(session: Session, owner_id: UUID, category_id: int):
    category_helpers.delete_category(session, owner_id, category_id)


@operation("Failed to load categories")
def list_categories(session: Session, owner_id: UUID, type_: Optional[CategoryType] = None):
    return category_helpers.list_categories(session, owner_id, type_)


# Consistency and reporting

@operation("Failed to reconcile ledger")
def reconcile_ledger(session: Session, owner_id: UUID, apply: bool = True):
    return reconciliation.reconcile(session, owner_id, apply=apply)


@operation("Failed to verify ledger")
def verify_ledger(session: Session, owner_id: UUID):
    return reconciliation.verify_consistency(session, owner_id)


@operation("Failed to build dashboard")
def dashboard_summary(session: Session, owner_id: UUID, month: Optional[str] = None):
    return summary_helpers.build_dashboard_summary(session, owner_id, month)
