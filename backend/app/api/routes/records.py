"""
Record management routes.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from app.api.dependencies import get_user_store
from app.db.store import UserStore
from app.schemas.record import (
    MAX_TIMESTAMP, MIN_TIMESTAMP, RecordCreate, RecordListResponse, RecordResponse, RecordUpdate,
)
from app.services import record_service

router = APIRouter(prefix="/records", tags=["records"])


@router.post("", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
def create_record(
    record_data: RecordCreate,
    store: UserStore = Depends(get_user_store),
):
    """Create a new record in an existing category."""
    return record_service.create_record(
        store, record_data.name, record_data.amount, record_data.category_id
    )


@router.get("", response_model=RecordListResponse)
def get_records(
    start_time: Optional[int] = Query(None, ge=MIN_TIMESTAMP, le=MAX_TIMESTAMP),
    end_time: Optional[int] = Query(None, ge=MIN_TIMESTAMP, le=MAX_TIMESTAMP),
    limit: Optional[int] = None,
    store: UserStore = Depends(get_user_store),
):
    """
    Get records in a time window, newest first.

    limit defaults to 500 and is held to the same 1..1000 range as category
    listing, so limit=0 or limit>1000 is a 400.
    """
    records, total_count = record_service.list_records(
        store, start_time=start_time, end_time=end_time, limit=limit
    )
    return RecordListResponse(
        records=[RecordResponse.model_validate(r) for r in records],
        total_count=total_count,
    )


@router.put("/{record_id}", response_model=RecordResponse)
def update_record(
    record_id: str,
    record_data: RecordUpdate,
    store: UserStore = Depends(get_user_store),
):
    """Update any subset of a record's fields."""
    return record_service.update_record(
        store,
        record_id,
        name=record_data.name,
        amount=record_data.amount,
        category_id=record_data.category_id,
        timestamp=record_data.timestamp,
    )


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(
    record_id: str,
    store: UserStore = Depends(get_user_store),
):
    """Delete a record."""
    record_service.delete_record(store, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
