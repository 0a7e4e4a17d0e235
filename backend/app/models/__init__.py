"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.category import Category
from app.models.record import Record

__all__ = [
    "User",
    "Category",
    "Record",
]
