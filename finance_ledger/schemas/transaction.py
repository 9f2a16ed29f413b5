import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from finance_ledger.models.enums import TransactionType


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: Decimal
    category: Optional[str] = None  # ignored for transfers
    description: str = ""
    account_id: Optional[int] = None
    to_account_id: Optional[int] = None  # transfers only
    date: Optional[dt.date] = None  # defaults to today


class TransactionRead(BaseModel):
    id: int
    type: TransactionType
    amount: Decimal
    category: str
    description: str
    account_id: int
    to_account_id: Optional[int] = None
    date: dt.date
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionFilters(BaseModel):
    month: Optional[str] = None
    account_id: Optional[int] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = None


class TransactionPage(BaseModel):
    items: List[TransactionRead]
    total: int
    page: int
    page_size: int
    total_pages: int
