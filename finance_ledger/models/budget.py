from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

from finance_ledger.utils.dates import utcnow


class Budget(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("user_id", "category", "month", name="uq_budget_user_category_month"),
    )
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    category: str
    amount: Decimal = Field(max_digits=14, decimal_places=2)
    spent: Decimal = Field(default=Decimal("0.00"), max_digits=14, decimal_places=2)
    month: str = Field(index=True)  # YYYY-MM
    created_at: datetime = Field(default_factory=utcnow)
