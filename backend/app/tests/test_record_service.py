"""
Tests for record business logic against a real per-user store.
"""
import time
import pytest
from app.core.errors import BadInput, NotFound
from app.services import category_service, record_service
from app.tests.factories import add_record


@pytest.fixture
def food(store):
    return category_service.create_category(store, "Food")


def test_create_record(store, food):
    before = int(time.time())
    record = record_service.create_record(store, " Lunch ", 12.5, food.id)
    after = int(time.time())

    assert record.name == "Lunch"
    assert record.amount == 12.5
    assert record.category_id == food.id
    assert before <= record.timestamp <= after
    assert record_service.get_record(store, record.id).name == "Lunch"


def test_create_record_allows_negative_amount(store, food):
    record = record_service.create_record(store, "Refund", -20.0, food.id)
    assert record.amount == -20.0


def test_create_record_rejects_zero_amount(store, food):
    with pytest.raises(BadInput, match="zero"):
        record_service.create_record(store, "Lunch", 0.0, food.id)


def test_create_record_requires_existing_category(store):
    with pytest.raises(BadInput, match="Category does not exist"):
        record_service.create_record(store, "Lunch", 12.5, "missing")


def test_create_record_validates_fields(store, food):
    with pytest.raises(BadInput):
        record_service.create_record(store, "  ", 12.5, food.id)
    with pytest.raises(BadInput):
        record_service.create_record(store, "x" * 256, 12.5, food.id)
    with pytest.raises(BadInput):
        record_service.create_record(store, "Lunch", 12.5, "   ")


def test_unicode_round_trip(store):
    category = category_service.create_category(store, "Café ☕")
    record = record_service.create_record(store, "Crème brûlée 🍮 für Zoë", 7.25, category.id)

    fetched = record_service.get_record(store, record.id)
    assert fetched.name == "Crème brûlée 🍮 für Zoë"
    assert fetched.category_id == category.id
    assert category_service.get_category(store, category.id).name == "Café ☕"


def test_list_records_inclusive_single_point(store, food):
    target = add_record(store, "Exact", 5.0, food.id, 1_700_000_000)
    add_record(store, "Before", 5.0, food.id, 1_699_999_999)
    add_record(store, "After", 5.0, food.id, 1_700_000_001)

    records, total = record_service.list_records(
        store, start_time=1_700_000_000, end_time=1_700_000_000
    )
    assert total == 1
    assert [r.id for r in records] == [target]


def test_list_records_limit_keeps_full_total_and_newest(store, food):
    for ts in [100, 500, 300, 200, 400]:
        add_record(store, f"r{ts}", 1.0, food.id, ts)

    records, total = record_service.list_records(store, limit=3)
    assert total == 5
    assert [r.timestamp for r in records] == [500, 400, 300]


def test_list_records_defaults(store, food):
    record_service.create_record(store, "Now", 1.0, food.id)
    add_record(store, "Future", 1.0, food.id, int(time.time()) + 3600)

    records, total = record_service.list_records(store)
    assert total == 1
    assert records[0].name == "Now"


def test_list_records_rejects_bad_limit(store):
    with pytest.raises(BadInput):
        record_service.list_records(store, limit=0)
    with pytest.raises(BadInput):
        record_service.list_records(store, limit=1001)


def test_update_record_amount_only(store, food):
    record_id = add_record(store, "Lunch", 12.5, food.id, 1234)
    before = record_service.get_record(store, record_id)

    updated = record_service.update_record(store, record_id, amount=15.0)
    after = record_service.get_record(store, record_id)

    assert updated.amount == 15.0
    assert after.amount == 15.0
    assert after.name == before.name
    assert after.category_id == before.category_id
    assert after.timestamp == before.timestamp


def test_update_record_all_fields(store, food):
    rent = category_service.create_category(store, "Rent")
    record_id = add_record(store, "Lunch", 12.5, food.id, 1234)

    updated = record_service.update_record(
        store, record_id, name=" April ", amount=-900.0, category_id=rent.id, timestamp=5678
    )
    assert (updated.name, updated.amount, updated.category_id, updated.timestamp) == (
        "April", -900.0, rent.id, 5678
    )


def test_update_record_requires_a_field(store, food):
    record_id = add_record(store, "Lunch", 12.5, food.id, 1234)
    with pytest.raises(BadInput, match="At least one field"):
        record_service.update_record(store, record_id)


def test_update_record_rejects_zero_amount(store, food):
    record_id = add_record(store, "Lunch", 12.5, food.id, 1234)
    with pytest.raises(BadInput):
        record_service.update_record(store, record_id, amount=0.0)
    assert record_service.get_record(store, record_id).amount == 12.5


def test_update_record_rejects_unknown_category(store, food):
    record_id = add_record(store, "Lunch", 12.5, food.id, 1234)
    with pytest.raises(BadInput, match="Category does not exist"):
        record_service.update_record(store, record_id, category_id="missing")


def test_update_record_missing(store):
    with pytest.raises(NotFound):
        record_service.update_record(store, "missing", name="x")


def test_delete_record(store, food):
    record_id = add_record(store, "Lunch", 12.5, food.id, 1234)
    record_service.delete_record(store, record_id)
    with pytest.raises(NotFound):
        record_service.get_record(store, record_id)
    with pytest.raises(NotFound):
        record_service.delete_record(store, record_id)
