from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from finance_ledger import operations
from finance_ledger.core.http import unwrap
from finance_ledger.core.security import get_current_user
from finance_ledger.database import get_session
from finance_ledger.schemas.account import (
    AccountCreate,
    AccountDeleteResult,
    AccountInterestRead,
    AccountRead,
    AccountUpdate,
)
from finance_ledger.utils.account_helpers import calculate_interest
from finance_ledger.utils.money import to_money

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=AccountRead, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_account(
    account_data: AccountCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    account = unwrap(operations.create_account(session, user_id, account_data))
    return AccountRead.model_validate(account, from_attributes=True)


@router.get("", response_model=List[AccountRead])
@router.get("/", response_model=List[AccountRead], include_in_schema=False)
def list_accounts(user_id: UUID = Depends(get_current_user), session: Session = Depends(get_session)):
    accounts = unwrap(operations.list_accounts(session, user_id))
    return [AccountRead.model_validate(a, from_attributes=True) for a in accounts]


@router.patch("/{account_id}", response_model=AccountRead)
def update_account(
    account_id: int,
    account_data: AccountUpdate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    account = unwrap(operations.update_account(session, user_id, account_id, account_data))
    return AccountRead.model_validate(account, from_attributes=True)


@router.post("/{account_id}/primary", response_model=AccountRead)
def set_primary_account(
    account_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    account = unwrap(operations.set_primary_account(session, user_id, account_id))
    return AccountRead.model_validate(account, from_attributes=True)


@router.get("/{account_id}/interest", response_model=AccountInterestRead)
def projected_interest(
    account_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    account = unwrap(operations.get_account(session, user_id, account_id))
    interest = calculate_interest(account)
    principal = to_money(account.balance)
    return AccountInterestRead(
        id=account.id,
        principal=principal,
        interest_rate=account.interest_rate,
        projected_interest=interest,
        maturity_value=principal + interest,
    )


@router.delete("/{account_id}", response_model=AccountDeleteResult)
def delete_account(
    account_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    deleted = unwrap(operations.delete_account(session, user_id, account_id))
    return AccountDeleteResult(id=account_id, deleted=deleted)
