from __future__ import annotations

import math

import pytest

from lostfound.search.geo import (
    Coordinates,
    distance_km,
    distances_km,
    resolve_location,
)

NEW_YORK = Coordinates(40.7128, -74.006)
CHICAGO = Coordinates(41.8781, -87.6298)


def test_resolve_known_city():
    assert resolve_location("Somewhere in Chicago") == Coordinates(41.8781, -87.6298)


def test_resolve_is_case_insensitive():
    assert resolve_location("LOS ANGELES airport") == Coordinates(34.0522, -118.2437)


def test_resolve_unknown_location():
    assert resolve_location("Central Park, NYC") is None
    assert resolve_location("") is None
    assert resolve_location(None) is None


def test_distance_to_self_is_zero():
    assert distance_km(NEW_YORK, NEW_YORK) == 0


def test_distance_is_symmetric():
    assert distance_km(NEW_YORK, CHICAGO) == pytest.approx(distance_km(CHICAGO, NEW_YORK))


def test_distance_new_york_to_chicago():
    assert distance_km(NEW_YORK, CHICAGO) == pytest.approx(1144.3, abs=2.0)


def test_unresolvable_point_is_infinite():
    assert math.isinf(distance_km(NEW_YORK, None))
    assert math.isinf(distance_km(None, CHICAGO))


def test_out_of_range_coordinates_do_not_raise():
    d = distance_km(Coordinates(200.0, 500.0), Coordinates(-95.0, 10.0))
    assert d >= 0


def test_vectorised_distances_agree():
    points = [NEW_YORK, None, CHICAGO]
    result = distances_km(NEW_YORK, points)
    assert result[0] == pytest.approx(0.0)
    assert math.isinf(result[1])
    assert result[2] == pytest.approx(distance_km(NEW_YORK, CHICAGO))


def test_vectorised_distances_empty():
    assert len(distances_km(NEW_YORK, [])) == 0
