from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import SQLModel, Field

from finance_ledger.models.enums import CategoryType
from finance_ledger.utils.dates import utcnow


class Category(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    # NULL for the shared default categories
    user_id: Optional[UUID] = Field(default=None, foreign_key="user.id", index=True)
    name: str
    type: CategoryType = Field(default=CategoryType.expense)
    is_default: bool = Field(default=False, index=True)
    icon: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
