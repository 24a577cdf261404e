from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    smart_match_threshold: int = 30
    smart_match_limit: int = 10
    nearby_radius_km: float = 10.0
    recency_days: int = 7
    recency_bonus: int = 10
    max_score: int = 100
    default_limit: int = 50


DEFAULT_SEARCH_CONFIG = SearchConfig()
