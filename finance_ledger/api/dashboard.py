from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from finance_ledger import operations
from finance_ledger.core.http import unwrap
from finance_ledger.core.security import get_current_user
from finance_ledger.database import get_session
from finance_ledger.schemas.summary import DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def financial_summary(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
    month: Optional[str] = Query(None),
):
    return unwrap(operations.dashboard_summary(session, user_id, month))
