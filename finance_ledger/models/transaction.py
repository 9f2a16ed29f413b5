import datetime as dt
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlmodel import SQLModel, Field

from finance_ledger.models.enums import TransactionType
from finance_ledger.utils.dates import utcnow


class Transaction(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    type: TransactionType
    amount: Decimal = Field(max_digits=14, decimal_places=2)
    category: str
    description: str = ""

    # Source account for every type; destination only for transfers
    account_id: int = Field(foreign_key="account.id", index=True)
    to_account_id: Optional[int] = Field(default=None, foreign_key="account.id", index=True)

    date: dt.date = Field(index=True)
    created_at: dt.datetime = Field(default_factory=utcnow)
