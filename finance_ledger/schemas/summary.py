from decimal import Decimal
from typing import List

from pydantic import BaseModel

from finance_ledger.schemas.budget import BudgetWithUtilization
from finance_ledger.schemas.transaction import TransactionRead


class DashboardSummary(BaseModel):
    month: str
    total_balance: Decimal
    monthly_income: Decimal
    monthly_expenses: Decimal
    net: Decimal
    active_goals: int
    budget_health: Decimal
    budget_alerts: List[BudgetWithUtilization]
    recent_transactions: List[TransactionRead]
