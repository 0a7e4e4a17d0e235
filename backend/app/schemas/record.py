"""
Pydantic schemas for Record entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional

# Timestamps are stored as SQLite INTEGER (signed 64-bit)
MIN_TIMESTAMP = -2**63
MAX_TIMESTAMP = 2**63 - 1


class RecordCreate(BaseModel):
    """Schema for record creation. Id and timestamp are assigned by the server."""
    name: str
    amount: float = Field(..., allow_inf_nan=False)
    category_id: str


class RecordUpdate(BaseModel):
    """Schema for partial record update. Omitted fields keep their stored value."""
    name: Optional[str] = None
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    category_id: Optional[str] = None
    timestamp: Optional[int] = Field(None, ge=MIN_TIMESTAMP, le=MAX_TIMESTAMP)


class RecordResponse(BaseModel):
    """Schema for record response."""
    id: str
    name: str
    amount: float
    category_id: str
    timestamp: int

    class Config:
        from_attributes = True


class RecordListResponse(BaseModel):
    """Records in a time window, newest first, plus the full matching count."""
    records: List[RecordResponse]
    total_count: int
