"""
Category management routes.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Response, status
from app.api.dependencies import get_user_store
from app.db.store import UserStore
from app.schemas.category import (
    CategoryCreate, CategoryListResponse, CategoryResponse, CategoryUpdate,
)
from app.services import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    store: UserStore = Depends(get_user_store),
):
    """Create a new category."""
    return category_service.create_category(store, category_data.name)


@router.get("", response_model=CategoryListResponse)
def get_categories(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search: Optional[str] = None,
    store: UserStore = Depends(get_user_store),
):
    """List categories by name, optionally filtered by a case-insensitive search term."""
    categories, total_count, limit, offset = category_service.list_categories(
        store, search=search, limit=limit, offset=offset
    )
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        total_count=total_count,
        limit=limit,
        offset=offset,
    )


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    store: UserStore = Depends(get_user_store),
):
    """Rename a category."""
    return category_service.update_category(store, category_id, category_data.name)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str,
    store: UserStore = Depends(get_user_store),
):
    """Delete a category that has no records."""
    category_service.delete_category(store, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
