from decimal import Decimal
from typing import List

from pydantic import BaseModel


class Drift(BaseModel):
    entity: str  # "account" or "budget"
    entity_id: int
    field: str
    stored: Decimal
    expected: Decimal

    @property
    def difference(self) -> Decimal:
        return self.stored - self.expected


class ReconciliationReport(BaseModel):
    accounts_checked: int = 0
    budgets_checked: int = 0
    drifts: List[Drift] = []
    applied: bool = False

    @property
    def is_consistent(self) -> bool:
        return not self.drifts
