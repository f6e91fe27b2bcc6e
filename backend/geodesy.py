"""Great-circle and flat-Earth distance helpers shared by the scoring engine.

Everything here is stateless; coordinates are validated by
:class:`~domain.siting.models.Coordinate` before they reach these helpers.
"""

from __future__ import annotations

import math
from typing import Tuple

from domain.siting.models import Bounds, Coordinate, InvalidCoordinateError

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.0


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the great-circle distance in kilometres between two points."""

    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # Guard against a > 1 from floating point error on antipodal points.
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, a)))


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates, rounded to 2 decimals."""

    return round(haversine(a.latitude, a.longitude, b.latitude, b.longitude), 2)


def validate_coordinate(lat: object, lng: object) -> Coordinate:
    try:
        return Coordinate(latitude=float(lat), longitude=float(lng))  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        if isinstance(exc, InvalidCoordinateError):
            raise
        raise InvalidCoordinateError("Both lat and lng are required numbers") from exc


def span_km(bounds: Bounds) -> Tuple[float, float]:
    """Return ``(width_km, height_km)`` of a rectangle using a flat-Earth model."""

    mean_lat = (bounds.north + bounds.south) / 2
    height_km = (bounds.north - bounds.south) * KM_PER_DEGREE
    width_km = (bounds.east - bounds.west) * KM_PER_DEGREE * math.cos(math.radians(mean_lat))
    return abs(width_km), abs(height_km)


def flat_area_km2(bounds: Bounds) -> float:
    width_km, height_km = span_km(bounds)
    return abs(width_km * height_km)


__all__ = [
    "EARTH_RADIUS_KM",
    "KM_PER_DEGREE",
    "distance",
    "flat_area_km2",
    "haversine",
    "span_km",
    "validate_coordinate",
]
