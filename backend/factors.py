"""Synthetic site factors for a coordinate.

The generators stand in for measured irradiance, wind and grid datasets.
Each one combines regional heuristics from :mod:`backend.config` with bounded
noise drawn from the caller's ``numpy.random.Generator``; passing a seeded
generator makes every output reproducible.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from backend.config import DEFAULT_FACTOR_TABLES, FactorTables
from backend.geodesy import haversine
from domain.siting.models import Coordinate


@dataclass(frozen=True)
class GeneratedFactors:
    renewable_potential: float
    grid_distance_km: float
    wind_speed: float
    infrastructure_access: float


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Seeded generator for tests and pinned deployments, fresh entropy otherwise."""

    return np.random.default_rng(seed)


def renewable_potential(
    coordinate: Coordinate,
    rng: np.random.Generator,
    tables: FactorTables = DEFAULT_FACTOR_TABLES,
) -> float:
    """Annual solar potential in kWh/m²/year."""

    table = tables.renewable
    lat, lng = coordinate.latitude, coordinate.longitude

    base = table.base
    for region in table.region_bases:
        if region.box.contains(lat, lng):
            base = region.value

    noise = float(rng.uniform(-table.noise, table.noise))
    latitude_factor = math.cos(math.radians(abs(lat))) * table.latitude_weight
    potential = _round_half_up(base + noise + latitude_factor)
    return _clamp(potential, table.minimum, table.maximum)


def grid_distance(
    coordinate: Coordinate,
    rng: np.random.Generator,
    tables: FactorTables = DEFAULT_FACTOR_TABLES,
) -> float:
    """Distance in km to the nearest grid hub, plus jitter."""

    table = tables.grid
    nearest = min(
        round(haversine(coordinate.latitude, coordinate.longitude, hub.lat, hub.lng), 2)
        for hub in table.hubs
    )
    jitter = float(rng.uniform(0.0, table.max_jitter_km))
    return round(nearest + jitter, 2)


def wind_speed(
    coordinate: Coordinate,
    rng: np.random.Generator,
    tables: FactorTables = DEFAULT_FACTOR_TABLES,
) -> float:
    """Mean wind speed at hub height in m/s."""

    table = tables.wind
    lat, lng = coordinate.latitude, coordinate.longitude

    speed = table.base
    for region in table.region_bonuses:
        if region.box.contains(lat, lng):
            speed += region.value
    if abs(lat) >= table.high_latitude_threshold:
        speed += table.high_latitude_bonus

    speed += float(rng.uniform(-table.noise, table.noise))
    return round(_clamp(speed, table.minimum, table.maximum), 1)


def infrastructure_access(
    coordinate: Coordinate,
    rng: np.random.Generator,
    tables: FactorTables = DEFAULT_FACTOR_TABLES,
) -> float:
    """Road, port and utility access on a 1-10 scale."""

    table = tables.infrastructure
    lat, lng = coordinate.latitude, coordinate.longitude

    access = table.base
    city_bonus = 0.0
    nearest_city_km = math.inf
    for city in table.cities:
        city_km = haversine(lat, lng, city.lat, city.lng)
        nearest_city_km = min(nearest_city_km, city_km)
        if city_km < table.city_falloff_km:
            city_bonus = max(city_bonus, city.weight * (1 - city_km / table.city_falloff_km))
    access += city_bonus

    for corridor in table.corridors:
        if corridor.box.contains(lat, lng):
            access += corridor.value
    if nearest_city_km > table.remote_threshold_km:
        access -= table.remote_penalty

    access += float(rng.uniform(-table.noise, table.noise))
    return round(_clamp(access, table.minimum, table.maximum), 1)


def generate_site_factors(
    coordinate: Coordinate,
    rng: np.random.Generator,
    tables: FactorTables = DEFAULT_FACTOR_TABLES,
) -> GeneratedFactors:
    # Draw order is fixed so a seeded generator yields identical bundles.
    return GeneratedFactors(
        renewable_potential=renewable_potential(coordinate, rng, tables),
        grid_distance_km=grid_distance(coordinate, rng, tables),
        wind_speed=wind_speed(coordinate, rng, tables),
        infrastructure_access=infrastructure_access(coordinate, rng, tables),
    )


__all__ = [
    "GeneratedFactors",
    "generate_site_factors",
    "grid_distance",
    "infrastructure_access",
    "make_rng",
    "renewable_potential",
    "wind_speed",
]
