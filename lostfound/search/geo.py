from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


# Placeholder lookup until a geocoding service is wired in. Order matters:
# the first substring found in the location text wins.
KNOWN_CITIES: dict[str, Coordinates] = {
    "new york": Coordinates(40.7128, -74.006),
    "los angeles": Coordinates(34.0522, -118.2437),
    "chicago": Coordinates(41.8781, -87.6298),
    "houston": Coordinates(29.7604, -95.3698),
    "phoenix": Coordinates(33.4484, -112.074),
}


def resolve_location(location: str | None) -> Coordinates | None:
    """Return coordinates for the first known city named in *location*."""
    if not location:
        return None
    text = location.lower()
    for city, coords in KNOWN_CITIES.items():
        if city in text:
            return coords
    return None


def distance_km(a: Coordinates | None, b: Coordinates | None) -> float:
    """Great-circle distance in km, or ``inf`` when either point is unknown."""
    if a is None or b is None:
        return math.inf

    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    # Out-of-range inputs can push h outside [0, 1]; clamp so they never raise.
    h = min(max(h, 0.0), 1.0)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distances_km(origin: Coordinates, points: Sequence[Coordinates | None]) -> np.ndarray:
    """Vectorised :func:`distance_km` from *origin* to each of *points*."""
    if not points:
        return np.empty(0)

    lat = np.array([p.lat if p is not None else np.nan for p in points], dtype=float)
    lng = np.array([p.lng if p is not None else np.nan for p in points], dtype=float)

    d_lat = np.radians(lat - origin.lat)
    d_lng = np.radians(lng - origin.lng)
    h = (
        np.sin(d_lat / 2) ** 2
        + np.cos(np.radians(origin.lat)) * np.cos(np.radians(lat)) * np.sin(d_lng / 2) ** 2
    )
    h = np.clip(h, 0.0, 1.0)
    result = EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
    return np.where(np.isnan(result), np.inf, result)
