from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlmodel import SQLModel, Field

from finance_ledger.models.enums import GoalPriority, GoalStatus
from finance_ledger.utils.dates import utcnow


class Goal(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: UUID = Field(foreign_key="user.id", index=True)
    name: str
    target_amount: Decimal = Field(max_digits=14, decimal_places=2)
    current_amount: Decimal = Field(default=Decimal("0.00"), max_digits=14, decimal_places=2)
    deadline: date
    priority: GoalPriority = Field(default=GoalPriority.medium)
    status: GoalStatus = Field(default=GoalStatus.active)
    created_at: datetime = Field(default_factory=utcnow)
