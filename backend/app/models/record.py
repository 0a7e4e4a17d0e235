"""
Record model for tracking spending, one table per user store.
"""
from sqlalchemy import Column, String, Float, Integer, Index
from app.db.base import StoreBase


class Record(StoreBase):
    """A single transaction. category_id is checked by the services, not a foreign key."""
    __tablename__ = "records"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    category_id = Column(String, nullable=False)
    timestamp = Column(Integer, nullable=False)

    __table_args__ = (
        Index("idx_records_timestamp", "timestamp"),
    )
