from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top queries, case-folded so "Wallet" and "wallet" count together
    query_counter: Counter[str] = Counter()
    for s in searches:
        q = (s.get("query") or "").strip().lower()
        if q:
            query_counter[q] += 1
    top_queries = [{"query": q, "count": c} for q, c in query_counter.most_common(10)]

    category_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("category"):
            category_counter[s["category"]] += 1
    top_categories = [{"name": n, "count": c} for n, c in category_counter.most_common(10)]

    status_usage = dict(Counter(s["status"] for s in searches if s.get("status")))

    # Filter usage rates
    filter_counts = {"query": 0, "category": 0, "status": 0, "time_range": 0, "near_me": 0}
    for s in searches:
        for key in filter_counts:
            if s.get(key):
                filter_counts[key] += 1
    filter_usage = {k: _rate(v, total) for k, v in filter_counts.items()}

    zero_results = sum(1 for s in searches if not s.get("results_returned"))
    smart = [s.get("smart_matches", 0) for s in searches]

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_queries": top_queries,
        "top_categories": top_categories,
        "status_usage": status_usage,
        "filter_usage": filter_usage,
        "zero_result_rate": _rate(zero_results, total),
        "avg_smart_matches": round(sum(smart) / total, 1) if total else 0.0,
    }
