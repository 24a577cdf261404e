from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lostfound.items.models import ItemCreate, ItemStatus, ItemUpdate, MatchStatus
from lostfound.items.query import ItemQuery
from lostfound.items.store import InMemoryStore


def _store() -> InMemoryStore:
    return InMemoryStore.seeded()


def test_query_methods_return_new_queries():
    base = ItemQuery()
    refined = base.filter_by_field("status", ItemStatus.lost).limit(2)
    assert base.filters == ()
    assert base.max_results is None
    assert refined.filters == (("status", ItemStatus.lost),)
    assert refined.max_results == 2


def test_query_rejects_unknown_fields():
    with pytest.raises(ValueError):
        ItemQuery().filter_by_field("password", "x")
    with pytest.raises(ValueError):
        ItemQuery().order_by("contact_info")
    with pytest.raises(ValueError):
        ItemQuery().limit(0)


def test_get_items_defaults_to_newest_first():
    result = _store().get_items()
    assert result.count == 5
    assert [i.id for i in result.data] == ["item-1", "item-2", "item-3", "item-4", "item-5"]


def test_get_items_filters_and_limits():
    store = _store()
    query = ItemQuery().filter_by_field("status", ItemStatus.lost).limit(2)
    result = store.get_items(query)
    assert result.count == 3
    assert [i.id for i in result.data] == ["item-1", "item-3"]


def test_get_items_text_search_covers_location():
    store = _store()
    result = store.get_items(ItemQuery().matching_text("brooklyn"))
    assert [i.id for i in result.data] == ["item-3"]


def test_get_items_created_since():
    store = _store()
    since = datetime(2024, 1, 13, tzinfo=timezone.utc)
    result = store.get_items(ItemQuery().created_since(since))
    assert {i.id for i in result.data} == {"item-1", "item-2", "item-3"}


def test_get_items_ascending_order():
    store = _store()
    result = store.get_items(ItemQuery().order_by("created_at", descending=False))
    assert result.data[0].id == "item-5"


def test_create_and_update_item():
    store = _store()
    item = store.create_item(
        ItemCreate(
            title="Umbrella",
            description="Black folding umbrella",
            category="Other",
            location="Houston",
            date_lost_found="2024-02-01",
            contact_info="x@example.com",
        ),
        "user-3",
        status=ItemStatus.found,
    )
    assert item.status == ItemStatus.found
    assert store.get_item(item.id) == item

    updated = store.update_item(item.id, ItemUpdate(is_resolved=True))
    assert updated.is_resolved is True
    assert updated.title == "Umbrella"
    assert updated.updated_at >= item.updated_at


def test_update_missing_item_returns_none():
    assert _store().update_item("nope", {"title": "x"}) is None


def test_match_and_message_counts():
    store = _store()
    assert store.count_matches("user-1", MatchStatus.pending) == 1
    assert store.count_matches("user-3", MatchStatus.pending) == 0
    assert store.count_unread("user-1") == 1
    assert store.mark_thread_read("user-1", "user-2") == 1
    assert store.count_unread("user-1") == 0


def test_thread_is_oldest_first():
    thread = _store().get_thread("user-1", "user-2")
    assert [m.id for m in thread] == ["message-1", "message-2"]


def test_summary_counts():
    summary = _store().summary()
    assert summary["total_items"] == 5
    assert summary["items_by_status"] == {"lost": 3, "found": 2}
    assert summary["resolved_items"] == 1
    assert summary["matches_by_status"]["pending"] == 1
