from __future__ import annotations

import math
import time
from datetime import datetime, timedelta, timezone

import pandas as pd

from ..analytics.store import record_event
from ..items.query import ItemQuery
from ..items.store import ItemRepository
from ..llm.groq_client import explain_matches
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .geo import Coordinates, distances_km, resolve_location
from .models import ScoredItem, SearchRequest, SearchResponse, TimeRange
from .scoring import rank, score, smart_matches


def time_range_start(time_range: TimeRange, now: datetime) -> datetime:
    """Earliest ``created_at`` a listing may have to fall inside *time_range*."""
    if time_range is TimeRange.today:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if time_range is TimeRange.week:
        return now - timedelta(days=7)
    # Calendar month, so 31 March steps back to 29 February / 28 February.
    return (pd.Timestamp(now) - pd.DateOffset(months=1)).to_pydatetime()


def build_query(request: SearchRequest, now: datetime) -> ItemQuery:
    query = ItemQuery().matching_text(request.query)
    if request.category:
        query = query.filter_by_field("category", request.category)
    if request.status:
        query = query.filter_by_field("status", request.status)
    if request.time_range:
        query = query.created_since(time_range_start(request.time_range, now))
    return query.order_by("created_at", descending=True).limit(request.limit)


def score_items(
    items: list,
    query: str,
    user_location: Coordinates | None = None,
    now: datetime | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[ScoredItem]:
    """Attach ``similarity_score`` and ``distance_km`` to each item, keeping order."""
    now = now or datetime.now(timezone.utc)

    distances: list[float | None] = [None] * len(items)
    if user_location is not None:
        points = [resolve_location(item.location) for item in items]
        distances = [
            None if math.isinf(d) else round(float(d), 3)
            for d in distances_km(user_location, points)
        ]

    return [
        ScoredItem(
            **item.model_dump(),
            similarity_score=score(item, query, now=now, config=config),
            distance_km=distance,
        )
        for item, distance in zip(items, distances)
    ]


def nearby_items(
    items: list[ScoredItem], radius_km: float = DEFAULT_SEARCH_CONFIG.nearby_radius_km,
) -> list[ScoredItem]:
    """Items with a known distance under *radius_km*, closest first."""
    close = [i for i in items if i.distance_km is not None and i.distance_km < radius_km]
    return sorted(close, key=lambda i: i.distance_km)


def search_items(
    repo: ItemRepository,
    request: SearchRequest,
    now: datetime | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> SearchResponse:
    start_time = time.time()
    now = now or datetime.now(timezone.utc)

    result = repo.get_items(build_query(request, now))

    user_location = None
    if request.lat is not None and request.lng is not None:
        user_location = Coordinates(request.lat, request.lng)

    scored = score_items(result.data, request.query, user_location, now=now, config=config)
    results = rank(scored)
    matches = smart_matches(
        results, threshold=config.smart_match_threshold, limit=config.smart_match_limit,
    )

    reasons = explain_matches(request.query, [m.model_dump(mode="json") for m in matches])
    if reasons:
        for m in matches:
            m.reason = reasons.get(m.id)

    nearby = nearby_items(results, config.nearby_radius_km) if user_location else []

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "query": request.query,
        "category": request.category,
        "status": request.status.value if request.status else None,
        "time_range": request.time_range.value if request.time_range else None,
        "near_me": user_location is not None,
        "total_candidates": result.count,
        "results_returned": len(results),
        "smart_matches": len(matches),
        "nearby": len(nearby),
        "response_time_ms": elapsed_ms,
    })

    return SearchResponse(
        query=request.query,
        results=results,
        smart_matches=matches,
        nearby=nearby,
        total_candidates=result.count,
    )
