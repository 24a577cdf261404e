from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol, Sequence, TypeVar

from .config import DEFAULT_SEARCH_CONFIG, SearchConfig

# Whole-query containment weights.
PHRASE_WEIGHTS = {"title": 100, "category": 75, "description": 50}
# Per-word containment weights, for words longer than MIN_WORD_LENGTH.
WORD_WEIGHTS = {"title": 25, "description": 15, "category": 20}
MIN_WORD_LENGTH = 2


class Scorable(Protocol):
    title: str
    description: str
    category: str
    created_at: datetime


class HasScore(Protocol):
    similarity_score: int


S = TypeVar("S", bound=HasScore)


def score(
    item: Scorable,
    query: str,
    now: datetime | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> int:
    """Heuristic 0-100 relevance of *item* to *query*.

    Whole-query and per-word hits are summed independently, so a single
    word query that appears in the title earns both weights.
    """
    if not query:
        return 0

    needle = query.lower()
    fields = {
        "title": item.title.lower(),
        "description": item.description.lower(),
        "category": item.category.lower(),
    }

    total = 0
    for name, weight in PHRASE_WEIGHTS.items():
        if needle in fields[name]:
            total += weight

    for word in needle.split():
        if len(word) <= MIN_WORD_LENGTH:
            continue
        for name, weight in WORD_WEIGHTS.items():
            if word in fields[name]:
                total += weight

    now = now or datetime.now(timezone.utc)
    if now - item.created_at < timedelta(days=config.recency_days):
        total += config.recency_bonus

    return min(total, config.max_score)


def rank(items: Sequence[S]) -> list[S]:
    """Sort by score, highest first; equal scores keep their input order."""
    return sorted(items, key=lambda i: i.similarity_score, reverse=True)


def smart_matches(
    items: Sequence[S],
    threshold: int = DEFAULT_SEARCH_CONFIG.smart_match_threshold,
    limit: int = DEFAULT_SEARCH_CONFIG.smart_match_limit,
) -> list[S]:
    """Items scoring strictly above *threshold*, best first, at most *limit*."""
    return rank([i for i in items if i.similarity_score > threshold])[:limit]
