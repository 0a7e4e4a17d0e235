"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel


class UserCreate(BaseModel):
    """Schema for user registration."""
    username: str
    password: str


class UserLogin(BaseModel):
    """Schema for user login."""
    username: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user, never includes the password hash."""
    id: str
    username: str

    class Config:
        from_attributes = True
