from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict

from finance_ledger.models.enums import AccountType


class AccountCreate(BaseModel):
    name: str
    type: AccountType = AccountType.day_to_day
    balance: Decimal = Decimal("0.00")
    interest_rate: Optional[Decimal] = None
    deposit_date: Optional[date] = None
    maturity_date: Optional[date] = None
    is_primary: bool = False


class AccountUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[AccountType] = None
    balance: Optional[Decimal] = None
    interest_rate: Optional[Decimal] = None
    deposit_date: Optional[date] = None
    maturity_date: Optional[date] = None
    is_active: Optional[bool] = None
    is_primary: Optional[bool] = None


class AccountRead(BaseModel):
    id: int
    name: str
    type: AccountType
    balance: Decimal
    interest_rate: Optional[Decimal] = None
    deposit_date: Optional[date] = None
    maturity_date: Optional[date] = None
    is_active: bool
    is_primary: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AccountDeleteResult(BaseModel):
    id: int
    deleted: bool  # False means the account had history and was only deactivated


class AccountInterestRead(BaseModel):
    id: int
    principal: Decimal
    interest_rate: Optional[Decimal] = None
    projected_interest: Decimal
    maturity_value: Decimal
