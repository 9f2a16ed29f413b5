from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from finance_ledger import operations
from finance_ledger.core.http import unwrap
from finance_ledger.core.security import get_current_user
from finance_ledger.database import get_session
from finance_ledger.models.enums import TransactionType
from finance_ledger.schemas.transaction import (
    TransactionCreate,
    TransactionFilters,
    TransactionPage,
    TransactionRead,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=TransactionRead, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_transaction(
    transaction_data: TransactionCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    transaction = unwrap(operations.create_transaction(session, user_id, transaction_data))
    return TransactionRead.model_validate(transaction, from_attributes=True)


@router.get("", response_model=TransactionPage)
@router.get("/", response_model=TransactionPage, include_in_schema=False)
def list_transactions(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
    month: Optional[str] = Query(None),
    account_id: Optional[int] = Query(None, alias="accountId"),
    type: Optional[TransactionType] = Query(None),
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    filters = TransactionFilters(month=month, account_id=account_id, type=type, category=category)
    return unwrap(operations.list_transactions(session, user_id, filters, page, page_size))


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    unwrap(operations.delete_transaction(session, user_id, transaction_id))
