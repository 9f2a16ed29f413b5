import logging
from typing import Optional
from uuid import UUID

from sqlmodel import Session, select, or_

from finance_ledger.constants.categories import DEFAULT_CATEGORIES
from finance_ledger.core.exceptions import NotFoundError, ValidationError
from finance_ledger.models.category import Category
from finance_ledger.models.enums import CategoryType

logger = logging.getLogger(__name__)


def seed_default_categories(session: Session) -> int:
    """
    Inserts the shared default categories that are still missing.
    Idempotent: safe to call on every start-up. Returns how many rows were added.
    """
    existing = {
        (c.name, c.type)
        for c in session.exec(select(Category).where(Category.is_default == True)).all()
    }
    added = 0
    for cat in DEFAULT_CATEGORIES:
        if (cat["name"], cat["type"]) in existing:
            continue
        session.add(Category(name=cat["name"], type=cat["type"], user_id=None, is_default=True))
        added += 1
    if added:
        session.flush()
        logger.info("Seeded %d default categories", added)
    return added


def visible_categories_query(user_id: UUID, type_: Optional[CategoryType] = None):
    query = select(Category).where(
        or_(Category.user_id == None, Category.user_id == user_id)
    )
    if type_:
        query = query.where(Category.type == type_)
    return query


def list_categories(session: Session, user_id: UUID, type_: Optional[CategoryType] = None) -> list[Category]:
    """Defaults first, then alphabetical."""
    query = visible_categories_query(user_id, type_).order_by(
        Category.is_default.desc(), Category.name.asc()
    )
    return list(session.exec(query).all())


def create_category(session: Session, user_id: UUID, name: str, type_: CategoryType) -> Category:
    """
    Creates a category owned by the user. User categories are never defaults.
    """
    name = (name or "").strip()
    if not name:
        raise ValidationError("Category name is required")

    exists = session.exec(
        visible_categories_query(user_id, type_).where(Category.name == name)
    ).first()
    if exists:
        raise ValidationError("Category already exists")

    category = Category(name=name, type=type_, user_id=user_id, is_default=False)
    session.add(category)
    session.flush()
    return category


def delete_category(session: Session, user_id: UUID, category_id: int) -> None:
    """
    Removes a user category. Transactions keep their label, since it is stored as text.
    - Default categories cannot be deleted.
    - Another user's category reads as missing.
    """
    category = session.get(Category, category_id)
    if not category or (category.user_id is not None and category.user_id != user_id):
        raise NotFoundError("Category not found")
    if category.is_default:
        raise ValidationError("Default categories cannot be deleted")
    session.delete(category)
    session.flush()
