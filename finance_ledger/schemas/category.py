from typing import Optional
from pydantic import BaseModel, ConfigDict

from finance_ledger.models.enums import CategoryType


class CategoryCreate(BaseModel):
    name: str
    type: CategoryType


class CategoryRead(BaseModel):
    id: int
    name: str
    type: CategoryType
    is_default: bool
    icon: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
