from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from finance_ledger import operations
from finance_ledger.core.http import unwrap
from finance_ledger.core.security import get_current_user
from finance_ledger.database import get_session
from finance_ledger.schemas.budget import BudgetCreate, BudgetUpdate, BudgetWithUtilization
from finance_ledger.utils.budget_helpers import with_utilization

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.post("", response_model=BudgetWithUtilization)
@router.post("/", response_model=BudgetWithUtilization, include_in_schema=False)
def create_budget(
    budget_data: BudgetCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Creates the budget for (category, month), or changes the cap of the existing one."""
    budget = unwrap(
        operations.create_budget(session, user_id, budget_data.category, budget_data.amount, budget_data.month)
    )
    return with_utilization(budget)


@router.get("", response_model=List[BudgetWithUtilization])
@router.get("/", response_model=List[BudgetWithUtilization], include_in_schema=False)
def list_budgets(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
    month: Optional[str] = Query(None),
):
    return unwrap(operations.list_budgets(session, user_id, month))


@router.patch("/{budget_id}", response_model=BudgetWithUtilization)
def update_budget(
    budget_id: int,
    budget_data: BudgetUpdate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    budget = unwrap(operations.update_budget(session, user_id, budget_id, budget_data.amount))
    return with_utilization(budget)


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget(
    budget_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    unwrap(operations.delete_budget(session, user_id, budget_id))
