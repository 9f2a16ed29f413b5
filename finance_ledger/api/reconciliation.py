from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from finance_ledger import operations
from finance_ledger.core.http import unwrap
from finance_ledger.core.security import get_current_user
from finance_ledger.database import get_session
from finance_ledger.schemas.reconciliation import ReconciliationReport

router = APIRouter(prefix="/reconciliation", tags=["reconciliation"])


@router.get("", response_model=ReconciliationReport)
def check_ledger(user_id: UUID = Depends(get_current_user), session: Session = Depends(get_session)):
    """Reports drifted balances and budget totals without touching them."""
    return unwrap(operations.reconcile_ledger(session, user_id, apply=False))


@router.post("", response_model=ReconciliationReport)
def repair_ledger(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
    dry_run: bool = Query(False),
):
    return unwrap(operations.reconcile_ledger(session, user_id, apply=not dry_run))
