from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlmodel import SQLModel, Field

from finance_ledger.models.enums import AccountType
from finance_ledger.utils.dates import utcnow


class Account(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    name: str
    type: AccountType = Field(default=AccountType.day_to_day)
    balance: Decimal = Field(default=Decimal("0.00"), max_digits=14, decimal_places=2)
    # Baseline the balance is rebuilt from during reconciliation
    opening_balance: Decimal = Field(default=Decimal("0.00"), max_digits=14, decimal_places=2)

    # fixed-deposit only
    interest_rate: Optional[Decimal] = Field(default=None, max_digits=7, decimal_places=4)
    deposit_date: Optional[date] = None
    maturity_date: Optional[date] = None

    is_active: bool = Field(default=True)
    is_primary: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)
