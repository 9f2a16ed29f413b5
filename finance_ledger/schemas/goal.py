from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict

from finance_ledger.models.enums import GoalPriority, GoalStatus


class GoalCreate(BaseModel):
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0.00")
    deadline: date
    priority: GoalPriority = GoalPriority.medium


class GoalUpdate(BaseModel):
    name: Optional[str] = None
    target_amount: Optional[Decimal] = None
    current_amount: Optional[Decimal] = None
    deadline: Optional[date] = None
    priority: Optional[GoalPriority] = None
    status: Optional[GoalStatus] = None


class GoalContribution(BaseModel):
    amount: Decimal


class GoalStatusUpdate(BaseModel):
    status: GoalStatus


class GoalRead(BaseModel):
    id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: date
    priority: GoalPriority
    status: GoalStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
