"""
Category service: CRUD and search over one user's categories.

Names are unique case-insensitively within a store, and a category cannot be
deleted while any record still refers to it. Every check-then-write sequence
runs inside a single `store.writing()` scope so no other writer can slip in
between the check and the mutation.
"""
import logging
import uuid
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.core.errors import BadInput, Conflict, NotFound
from app.core.validation import (
    validate_category_name, validate_categories_limit, validate_offset, validate_search_term,
)
from app.db.store import UserStore
from app.models.category import Category
from app.models.record import Record

logger = logging.getLogger(__name__)

ERR_NAME_TAKEN = "Category name already exists (case-insensitive)"
ERR_IN_USE = "Cannot delete category: it has associated records"


def _find_by_name(db: Session, name: str, exclude_id: Optional[str] = None) -> Optional[Category]:
    query = db.query(Category).filter(func.lower(Category.name) == func.lower(name))
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first()


def ensure_exists(db: Session, category_id: str) -> Category:
    """Load a category or raise NotFound."""
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFound("Category")
    return category


def ensure_not_in_use(db: Session, category_id: str) -> None:
    """Referential guard: refuse while records still point at the category."""
    count = db.query(func.count(Record.id)).filter(Record.category_id == category_id).scalar() or 0
    if count > 0:
        raise Conflict(ERR_IN_USE)


def get_category(store: UserStore, category_id: str) -> Category:
    with store.reading() as db:
        return ensure_exists(db, category_id)


def create_category(store: UserStore, name: str) -> Category:
    """Create a category with a fresh id after checking the name is free."""
    category_name = validate_category_name(name)

    with store.writing() as db:
        if _find_by_name(db, category_name):
            logger.warning(f"Category name conflict for user {store.user_id}: {category_name!r}")
            raise Conflict(ERR_NAME_TAKEN)
        category = Category(id=str(uuid.uuid4()), name=category_name)
        db.add(category)
        db.flush()

    return category


def list_categories(
    store: UserStore,
    search: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> Tuple[List[Category], int, int, int]:
    """
    Return one page of categories ordered by name.

    The total count covers every category matching the search, regardless of
    limit and offset. Returns (categories, total_count, limit, offset) with
    the defaults resolved.
    """
    limit = validate_categories_limit(limit)
    offset = validate_offset(offset)
    search_term = validate_search_term(search)

    with store.reading() as db:
        query = db.query(Category)
        if search_term:
            query = query.filter(Category.name.icontains(search_term, autoescape=True))
        total_count = query.count()
        categories = query.order_by(Category.name.asc(), Category.id.asc()).limit(limit).offset(offset).all()

    return categories, total_count, limit, offset


def update_category(store: UserStore, category_id: str, name: Optional[str]) -> Category:
    """Rename a category. Keeping the same name is always allowed."""
    if name is None:
        raise BadInput("Category name is required for update", field="name")
    category_name = validate_category_name(name)

    with store.writing() as db:
        category = ensure_exists(db, category_id)
        if _find_by_name(db, category_name, exclude_id=category_id):
            logger.warning(f"Category rename conflict for user {store.user_id}: {category_name!r}")
            raise Conflict(ERR_NAME_TAKEN)
        category.name = category_name
        db.flush()

    return category


def delete_category(store: UserStore, category_id: str) -> None:
    """Delete a category that no record refers to."""
    with store.writing() as db:
        category = ensure_exists(db, category_id)
        ensure_not_in_use(db, category_id)
        db.delete(category)
