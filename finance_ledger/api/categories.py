from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from finance_ledger import operations
from finance_ledger.core.http import unwrap
from finance_ledger.core.security import get_current_user
from finance_ledger.database import get_session
from finance_ledger.models.enums import CategoryType
from finance_ledger.schemas.category import CategoryCreate, CategoryRead

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=CategoryRead, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_category(
    category_data: CategoryCreate,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    category = unwrap(operations.create_category(session, user_id, category_data.name, category_data.type))
    return CategoryRead.model_validate(category, from_attributes=True)


@router.get("", response_model=List[CategoryRead])
@router.get("/", response_model=List[CategoryRead], include_in_schema=False)
def list_categories(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
    type: Optional[CategoryType] = Query(None),
):
    """Shared default categories followed by the user's own."""
    categories = unwrap(operations.list_categories(session, user_id, type))
    return [CategoryRead.model_validate(c, from_attributes=True) for c in categories]


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    unwrap(operations.delete_category(session, user_id, category_id))
