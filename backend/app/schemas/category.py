"""
Pydantic schemas for Category entity.
"""
from pydantic import BaseModel
from typing import List, Optional


class CategoryCreate(BaseModel):
    """Schema for category creation."""
    name: str


class CategoryUpdate(BaseModel):
    """Schema for category update. Name is the only mutable field."""
    name: Optional[str] = None


class CategoryResponse(BaseModel):
    """Schema for category response."""
    id: str
    name: str

    class Config:
        from_attributes = True


class CategoryListResponse(BaseModel):
    """One page of categories plus the filtered total."""
    categories: List[CategoryResponse]
    total_count: int
    limit: int
    offset: int
