from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from ..items.models import Item, ItemStatus


class TimeRange(str, Enum):
    today = "today"
    week = "week"
    month = "month"


class SearchRequest(BaseModel):
    query: str = Field(default="", max_length=200)
    category: str | None = None
    status: ItemStatus | None = None
    time_range: TimeRange | None = None
    lat: float | None = Field(default=None, description="User latitude in degrees")
    lng: float | None = Field(default=None, description="User longitude in degrees")
    limit: int = Field(default=50, ge=1, le=100)

    @model_validator(mode="after")
    def _location_pair(self) -> SearchRequest:
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be given together")
        return self


class ScoredItem(Item):
    similarity_score: int = Field(default=0, ge=0, le=100)
    distance_km: float | None = None
    reason: str | None = None


class SearchResponse(BaseModel):
    query: str
    results: list[ScoredItem]
    smart_matches: list[ScoredItem]
    nearby: list[ScoredItem]
    total_candidates: int
