from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from .models import (
    Item,
    ItemCreate,
    ItemStatus,
    ItemUpdate,
    Match,
    MatchStatus,
    Message,
    MessageCreate,
    Profile,
    ProfileUpdate,
)
from .query import ItemQuery, QueryResult
from .seed import seed_items, seed_matches, seed_messages, seed_profiles

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("title", "description", "location", "category")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class ItemRepository(Protocol):
    """The narrow contract search and reporting need from a listing store."""

    def get_items(self, query: ItemQuery | None = None) -> QueryResult[Item]: ...

    def get_item(self, item_id: str) -> Item | None: ...

    def create_item(
        self, data: ItemCreate, user_id: str, status: ItemStatus | None = None,
    ) -> Item: ...

    def update_item(self, item_id: str, updates: ItemUpdate | dict[str, Any]) -> Item | None: ...


def _matches_query(item: Item, query: ItemQuery) -> bool:
    for name, value in query.filters:
        if getattr(item, name) != value:
            return False
    if query.text:
        needle = query.text.lower()
        if not any(needle in getattr(item, f).lower() for f in _TEXT_FIELDS):
            return False
    if query.created_after is not None and item.created_at < query.created_after:
        return False
    return True


class InMemoryStore:
    """Process-local store for items, profiles, matches and messages."""

    def __init__(
        self,
        items: list[Item] | None = None,
        profiles: list[Profile] | None = None,
        matches: list[Match] | None = None,
        messages: list[Message] | None = None,
    ) -> None:
        self._items: list[Item] = list(items or [])
        self._profiles: list[Profile] = list(profiles or [])
        self._matches: list[Match] = list(matches or [])
        self._messages: list[Message] = list(messages or [])

    @classmethod
    def seeded(cls) -> InMemoryStore:
        return cls(
            items=seed_items(),
            profiles=seed_profiles(),
            matches=seed_matches(),
            messages=seed_messages(),
        )

    # ── Items ────────────────────────────────────────────────────────────

    def get_items(self, query: ItemQuery | None = None) -> QueryResult[Item]:
        query = query or ItemQuery()
        rows = [item for item in self._items if _matches_query(item, query)]
        rows = sorted(rows, key=lambda i: getattr(i, query.order_field), reverse=query.descending)
        count = len(rows)
        if query.max_results is not None:
            rows = rows[: query.max_results]
        return QueryResult(data=rows, count=count)

    def get_item(self, item_id: str) -> Item | None:
        return next((i for i in self._items if i.id == item_id), None)

    def create_item(
        self, data: ItemCreate, user_id: str, status: ItemStatus | None = None,
    ) -> Item:
        now = _now()
        fields = data.model_dump(include=set(ItemCreate.model_fields))
        if status is not None:
            fields["status"] = status
        item = Item(
            id=_new_id("item"),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self._items.append(item)
        logger.info("Item %s reported as %s by %s", item.id, item.status.value, user_id)
        return item

    def update_item(self, item_id: str, updates: ItemUpdate | dict[str, Any]) -> Item | None:
        if isinstance(updates, ItemUpdate):
            updates = updates.model_dump(exclude_unset=True, exclude_none=True)
        for idx, item in enumerate(self._items):
            if item.id == item_id:
                updated = item.model_copy(update={**updates, "updated_at": _now()})
                self._items[idx] = updated
                return updated
        return None

    # ── Profiles ─────────────────────────────────────────────────────────

    def get_profile(self, user_id: str) -> Profile | None:
        return next((p for p in self._profiles if p.user_id == user_id), None)

    def get_profiles(self, user_ids: set[str]) -> dict[str, Profile]:
        return {p.user_id: p for p in self._profiles if p.user_id in user_ids}

    def create_profile(self, user_id: str, full_name: str, phone: str | None = None) -> Profile:
        now = _now()
        profile = Profile(
            id=_new_id("profile"),
            user_id=user_id,
            full_name=full_name,
            phone=phone,
            created_at=now,
            updated_at=now,
        )
        self._profiles.append(profile)
        return profile

    def update_profile(self, user_id: str, updates: ProfileUpdate) -> Profile | None:
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        for idx, profile in enumerate(self._profiles):
            if profile.user_id == user_id:
                updated = profile.model_copy(update={**changes, "updated_at": _now()})
                self._profiles[idx] = updated
                return updated
        return None

    # ── Matches ──────────────────────────────────────────────────────────

    def get_matches(self, user_id: str, status: MatchStatus | None = None) -> list[Match]:
        rows = [
            m for m in self._matches
            if user_id in (m.lost_item_user_id, m.found_item_user_id)
            and (status is None or m.status == status)
        ]
        return sorted(rows, key=lambda m: m.created_at, reverse=True)

    def get_match(self, match_id: str) -> Match | None:
        return next((m for m in self._matches if m.id == match_id), None)

    def create_match(self, lost_item: Item, found_item: Item, similarity_score: int) -> Match:
        now = _now()
        match = Match(
            id=_new_id("match"),
            lost_item_id=lost_item.id,
            found_item_id=found_item.id,
            lost_item_user_id=lost_item.user_id,
            found_item_user_id=found_item.user_id,
            status=MatchStatus.pending,
            similarity_score=similarity_score,
            created_at=now,
            updated_at=now,
        )
        self._matches.append(match)
        logger.info("Match %s created between %s and %s", match.id, lost_item.id, found_item.id)
        return match

    def update_match_status(self, match_id: str, status: MatchStatus) -> Match | None:
        for idx, match in enumerate(self._matches):
            if match.id == match_id:
                updated = match.model_copy(update={"status": status, "updated_at": _now()})
                self._matches[idx] = updated
                return updated
        return None

    def count_matches(self, user_id: str, status: MatchStatus = MatchStatus.pending) -> int:
        return len(self.get_matches(user_id, status))

    # ── Messages ─────────────────────────────────────────────────────────

    def get_messages(self, user_id: str) -> list[Message]:
        rows = [m for m in self._messages if user_id in (m.sender_id, m.receiver_id)]
        return sorted(rows, key=lambda m: m.created_at, reverse=True)

    def get_thread(self, user_id: str, other_user_id: str) -> list[Message]:
        pair = {user_id, other_user_id}
        rows = [m for m in self._messages if {m.sender_id, m.receiver_id} == pair]
        return sorted(rows, key=lambda m: m.created_at)

    def get_message(self, message_id: str) -> Message | None:
        return next((m for m in self._messages if m.id == message_id), None)

    def send_message(self, sender_id: str, data: MessageCreate) -> Message:
        now = _now()
        message = Message(
            id=_new_id("message"),
            sender_id=sender_id,
            receiver_id=data.receiver_id,
            item_id=data.item_id,
            content=data.content.strip(),
            is_read=False,
            created_at=now,
            updated_at=now,
        )
        self._messages.append(message)
        return message

    def mark_message_read(self, message_id: str) -> Message | None:
        for idx, message in enumerate(self._messages):
            if message.id == message_id:
                updated = message.model_copy(update={"is_read": True, "updated_at": _now()})
                self._messages[idx] = updated
                return updated
        return None

    def mark_thread_read(self, receiver_id: str, sender_id: str) -> int:
        """Mark every unread message from *sender_id* to *receiver_id* as read."""
        marked = 0
        for idx, message in enumerate(self._messages):
            if (
                message.sender_id == sender_id
                and message.receiver_id == receiver_id
                and not message.is_read
            ):
                self._messages[idx] = message.model_copy(
                    update={"is_read": True, "updated_at": _now()}
                )
                marked += 1
        return marked

    def count_unread(self, user_id: str) -> int:
        return sum(1 for m in self._messages if m.receiver_id == user_id and not m.is_read)

    # ── Summary ──────────────────────────────────────────────────────────

    def summary(self) -> dict[str, Any]:
        by_status = {s.value: 0 for s in ItemStatus}
        for item in self._items:
            by_status[item.status.value] += 1
        matches = {s.value: 0 for s in MatchStatus}
        for match in self._matches:
            matches[match.status.value] += 1
        return {
            "total_items": len(self._items),
            "items_by_status": by_status,
            "resolved_items": sum(1 for i in self._items if i.is_resolved),
            "matches_by_status": matches,
            "total_messages": len(self._messages),
        }


_store: InMemoryStore | None = None


def _build_store() -> InMemoryStore:
    from ..data_ingestion.config import DEFAULT_INGESTION_CONFIG
    from ..data_ingestion.ingest import run_ingestion

    store = InMemoryStore.seeded()
    if DEFAULT_INGESTION_CONFIG.seed_csv is not None:
        try:
            run_ingestion(store, DEFAULT_INGESTION_CONFIG)
        except (OSError, ValueError):
            logger.warning(
                "Seed import from %s failed; serving demo data only",
                DEFAULT_INGESTION_CONFIG.seed_csv,
                exc_info=True,
            )
    return store


def get_store() -> InMemoryStore:
    """Return the process-wide store, seeding it on first call."""
    global _store
    if _store is None:
        _store = _build_store()
    return _store


def reset_store() -> InMemoryStore:
    """Discard all changes and rebuild the store from seed data."""
    global _store
    _store = _build_store()
    return _store
