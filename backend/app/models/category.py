"""
Category model, one table per user store.
"""
from sqlalchemy import Column, String
from app.db.base import StoreBase


class Category(StoreBase):
    """Spending category. Names are unique case-insensitively within a store."""
    __tablename__ = "categories"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
