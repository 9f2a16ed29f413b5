from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from finance_ledger.models.enums import UtilizationStatus


class BudgetCreate(BaseModel):
    category: str
    amount: Decimal
    month: str  # YYYY-MM


class BudgetUpdate(BaseModel):
    amount: Decimal


class BudgetUtilization(BaseModel):
    percentage: Decimal
    status: UtilizationStatus
    remaining: Decimal


class BudgetRead(BaseModel):
    id: int
    category: str
    amount: Decimal
    spent: Decimal
    month: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BudgetWithUtilization(BudgetRead):
    utilization: BudgetUtilization
