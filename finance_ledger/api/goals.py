from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from finance_ledger import operations
from finance_ledger.core.http import unwrap
from finance_ledger.core.security import get_current_user
from finance_ledger.database import get_session
from finance_ledger.schemas.goal import GoalContribution, GoalCreate, GoalRead, GoalStatusUpdate, GoalUpdate

router = APIRouter(prefix="/goals", tags=["goals"])


def _read(goal) -> GoalRead:
    return GoalRead.model_validate(goal, from_attributes=True)


@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=GoalRead, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_goal(
    goal_data: GoalCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return _read(unwrap(operations.create_goal(session, user_id, goal_data)))


@router.get("", response_model=List[GoalRead])
@router.get("/", response_model=List[GoalRead], include_in_schema=False)
def list_goals(user_id: UUID = Depends(get_current_user), session: Session = Depends(get_session)):
    return [_read(g) for g in unwrap(operations.list_goals(session, user_id))]


@router.patch("/{goal_id}", response_model=GoalRead)
def update_goal(
    goal_id: int,
    goal_data: GoalUpdate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return _read(unwrap(operations.update_goal(session, user_id, goal_id, goal_data)))


@router.post("/{goal_id}/contribute", response_model=GoalRead)
def contribute_to_goal(
    goal_id: int,
    contribution: GoalContribution,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return _read(unwrap(operations.contribute_to_goal(session, user_id, goal_id, contribution.amount)))


@router.put("/{goal_id}/status", response_model=GoalRead)
def set_goal_status(
    goal_id: int,
    status_data: GoalStatusUpdate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return _read(unwrap(operations.set_goal_status(session, user_id, goal_id, status_data.status)))


@router.post("/{goal_id}/complete", response_model=GoalRead)
def mark_goal_complete(
    goal_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    return _read(unwrap(operations.mark_goal_complete(session, user_id, goal_id)))


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(
    goal_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    unwrap(operations.delete_goal(session, user_id, goal_id))
