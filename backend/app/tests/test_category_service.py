"""
Tests for category business logic against a real per-user store.
"""
import threading
import pytest
from app.core.errors import BadInput, Conflict, NotFound
from app.services import category_service, record_service
from app.tests.factories import add_record


def test_create_category_trims_and_assigns_id(store):
    category = category_service.create_category(store, "  Food  ")
    assert category.name == "Food"
    assert category.id
    assert category_service.get_category(store, category.id).name == "Food"


def test_create_category_rejects_blank_name(store):
    with pytest.raises(BadInput):
        category_service.create_category(store, "   ")


@pytest.mark.parametrize("second", ["food", "FOOD", " Food ", "fOoD"])
def test_duplicate_name_is_case_insensitive(store, second):
    category_service.create_category(store, "Food")
    with pytest.raises(Conflict):
        category_service.create_category(store, second)


def test_list_categories_orders_by_name_and_counts(store):
    for name in ["Transport", "Food", "Rent", "Books"]:
        category_service.create_category(store, name)

    categories, total, limit, offset = category_service.list_categories(store)
    assert [c.name for c in categories] == ["Books", "Food", "Rent", "Transport"]
    assert total == 4
    assert (limit, offset) == (100, 0)


def test_list_categories_paginates_with_full_total(store):
    for name in ["a1", "a2", "a3", "a4", "a5"]:
        category_service.create_category(store, name)

    categories, total, _, _ = category_service.list_categories(store, limit=2, offset=2)
    assert [c.name for c in categories] == ["a3", "a4"]
    assert total == 5


def test_list_categories_search_is_case_insensitive_substring(store):
    for name in ["Groceries", "Eating out", "GROWTH fund", "Rent"]:
        category_service.create_category(store, name)

    categories, total, _, _ = category_service.list_categories(store, search="gro", limit=1)
    assert total == 2
    assert len(categories) == 1
    assert categories[0].name in {"Groceries", "GROWTH fund"}


def test_list_categories_search_treats_wildcards_literally(store):
    category_service.create_category(store, "100% fun")
    category_service.create_category(store, "Food")

    categories, total, _, _ = category_service.list_categories(store, search="%")
    assert total == 1
    assert categories[0].name == "100% fun"


def test_list_categories_blank_search_matches_all(store):
    category_service.create_category(store, "Food")
    _, total, _, _ = category_service.list_categories(store, search="   ")
    assert total == 1


def test_list_categories_rejects_bad_pagination(store):
    with pytest.raises(BadInput):
        category_service.list_categories(store, limit=0)
    with pytest.raises(BadInput):
        category_service.list_categories(store, limit=1001)
    with pytest.raises(BadInput):
        category_service.list_categories(store, offset=1_000_001)


def test_update_category_renames(store):
    category = category_service.create_category(store, "Food")
    updated = category_service.update_category(store, category.id, "Groceries")
    assert updated.id == category.id
    assert category_service.get_category(store, category.id).name == "Groceries"


def test_update_category_same_name_allowed(store):
    category = category_service.create_category(store, "Food")
    updated = category_service.update_category(store, category.id, "FOOD")
    assert updated.name == "FOOD"


def test_update_category_conflicts_with_other(store):
    category_service.create_category(store, "Food")
    rent = category_service.create_category(store, "Rent")
    with pytest.raises(Conflict):
        category_service.update_category(store, rent.id, "food")


def test_update_category_missing(store):
    with pytest.raises(NotFound):
        category_service.update_category(store, "missing", "Food")


def test_update_category_requires_name(store):
    category = category_service.create_category(store, "Food")
    with pytest.raises(BadInput, match="required"):
        category_service.update_category(store, category.id, None)


def test_delete_category(store):
    food = category_service.create_category(store, "Food")
    rent = category_service.create_category(store, "Rent")

    category_service.delete_category(store, food.id)
    with pytest.raises(NotFound):
        category_service.get_category(store, food.id)
    assert category_service.get_category(store, rent.id).name == "Rent"


def test_delete_category_missing(store):
    with pytest.raises(NotFound):
        category_service.delete_category(store, "missing")


def test_delete_category_in_use_then_free(store):
    food = category_service.create_category(store, "Food")
    first = add_record(store, "Lunch", 12.5, food.id, 1000)
    second = add_record(store, "Dinner", 30.0, food.id, 2000)

    with pytest.raises(Conflict, match="associated records"):
        category_service.delete_category(store, food.id)

    record_service.delete_record(store, first)
    with pytest.raises(Conflict):
        category_service.delete_category(store, food.id)

    record_service.delete_record(store, second)
    category_service.delete_category(store, food.id)


def test_concurrent_create_same_name_single_winner(store):
    barrier = threading.Barrier(2)
    outcomes = []

    def create():
        barrier.wait()
        try:
            category_service.create_category(store, "Food")
            outcomes.append("created")
        except Conflict:
            outcomes.append("conflict")

    threads = [threading.Thread(target=create) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["conflict", "created"]
    _, total, _, _ = category_service.list_categories(store)
    assert total == 1
