"""
Record service for record-related business logic.
"""
import logging
import time
import uuid
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from app.core.errors import BadInput, NotFound
from app.core.validation import (
    validate_amount, validate_category_id, validate_record_name, validate_records_limit,
)
from app.db.store import UserStore
from app.models.category import Category
from app.models.record import Record

logger = logging.getLogger(__name__)


def _now() -> int:
    return int(time.time())


def _ensure_category_exists(db: Session, category_id: str) -> None:
    exists = db.query(Category.id).filter(Category.id == category_id).first()
    if not exists:
        raise BadInput("Category does not exist", field="category_id")


def _ensure_record(db: Session, record_id: str) -> Record:
    record = db.query(Record).filter(Record.id == record_id).first()
    if not record:
        raise NotFound("Record")
    return record


def get_record(store: UserStore, record_id: str) -> Record:
    with store.reading() as db:
        return _ensure_record(db, record_id)


def create_record(store: UserStore, name: str, amount: float, category_id: str) -> Record:
    """Create a record stamped with the current server time."""
    record_name = validate_record_name(name)
    validate_amount(amount)
    category_id = validate_category_id(category_id)

    # The category check and the insert share one write scope so the category
    # cannot be deleted in between.
    with store.writing() as db:
        _ensure_category_exists(db, category_id)
        record = Record(
            id=str(uuid.uuid4()),
            name=record_name,
            amount=amount,
            category_id=category_id,
            timestamp=_now(),
        )
        db.add(record)
        db.flush()

    return record


def list_records(
    store: UserStore,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    limit: Optional[int] = None,
) -> Tuple[List[Record], int]:
    """
    List records with start_time <= timestamp <= end_time, newest first.

    start_time defaults to 0 and end_time to the time the query runs.
    total_count is the number of matching records before the limit applies.
    """
    limit = validate_records_limit(limit)

    with store.reading() as db:
        start = start_time if start_time is not None else 0
        end = end_time if end_time is not None else _now()
        query = db.query(Record).filter(Record.timestamp.between(start, end))
        total_count = query.count()
        records = query.order_by(Record.timestamp.desc(), Record.id.asc()).limit(limit).all()

    return records, total_count


def update_record(
    store: UserStore,
    record_id: str,
    name: Optional[str] = None,
    amount: Optional[float] = None,
    category_id: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> Record:
    """Apply a partial update. Fields left as None keep their stored value."""
    if name is None and amount is None and category_id is None and timestamp is None:
        raise BadInput("At least one field must be provided for update")

    if name is not None:
        name = validate_record_name(name)
    if amount is not None:
        validate_amount(amount)
    if category_id is not None:
        category_id = validate_category_id(category_id)

    with store.writing() as db:
        if category_id is not None:
            _ensure_category_exists(db, category_id)
        record = _ensure_record(db, record_id)

        if name is not None:
            record.name = name
        if amount is not None:
            record.amount = amount
        if category_id is not None:
            record.category_id = category_id
        if timestamp is not None:
            record.timestamp = timestamp
        db.flush()

    return record


def delete_record(store: UserStore, record_id: str) -> None:
    """Delete a record by id. Records have no dependents, so there is no guard."""
    with store.writing() as db:
        deleted = db.query(Record).filter(Record.id == record_id).delete()
        if deleted == 0:
            raise NotFound("Record")
