"""
User model for authentication, stored in the shared identity database.
"""
from sqlalchemy import Column, String
from app.db.base import IdentityBase


class User(IdentityBase):
    """User model with immutable username."""
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    username = Column("name", String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
