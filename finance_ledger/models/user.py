from sqlmodel import SQLModel, Field
from uuid import uuid4, UUID
from datetime import datetime

from finance_ledger.utils.dates import utcnow


class User(SQLModel, table=True):
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(index=True, unique=True)
    hashed_pin: str
    clearance_level: int = Field(default=1)
    created_at: datetime = Field(default_factory=utcnow)
