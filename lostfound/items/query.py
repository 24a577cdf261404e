from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Fields an ItemQuery may filter or order on.
FILTERABLE_FIELDS = frozenset({"user_id", "status", "category", "is_resolved", "location"})
ORDERABLE_FIELDS = frozenset({"created_at", "updated_at", "date_lost_found", "title"})


@dataclass(frozen=True)
class ItemQuery:
    """Immutable description of an item lookup.

    Every method returns a new query; the receiver is never changed, so a
    base query can be shared and refined per request.
    """

    filters: tuple[tuple[str, Any], ...] = ()
    text: str | None = None
    created_after: datetime | None = None
    order_field: str = "created_at"
    descending: bool = True
    max_results: int | None = None

    def filter_by_field(self, name: str, value: Any) -> ItemQuery:
        if name not in FILTERABLE_FIELDS:
            raise ValueError(f"Cannot filter items by {name!r}")
        return replace(self, filters=self.filters + ((name, value),))

    def matching_text(self, text: str | None) -> ItemQuery:
        text = (text or "").strip()
        return replace(self, text=text or None)

    def created_since(self, moment: datetime | None) -> ItemQuery:
        return replace(self, created_after=moment)

    def order_by(self, name: str, descending: bool = True) -> ItemQuery:
        if name not in ORDERABLE_FIELDS:
            raise ValueError(f"Cannot order items by {name!r}")
        return replace(self, order_field=name, descending=descending)

    def limit(self, count: int | None) -> ItemQuery:
        if count is not None and count < 1:
            raise ValueError("limit must be positive")
        return replace(self, max_results=count)


@dataclass
class QueryResult(Generic[T]):
    data: list[T] = field(default_factory=list)
    count: int = 0
