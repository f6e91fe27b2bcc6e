"""Brute-force grid search for the best hydrogen site inside a rectangle."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from backend.config import (
    DEFAULT_FACTOR_TABLES,
    FALLBACK_DEMAND_DISTANCE_KM,
    MAX_GRID_RESOLUTION,
    RANKED_SITES_LIMIT,
    SCORE_DISTRIBUTION_BANDS,
    SUITABLE_SITE_THRESHOLD,
    FactorTables,
)
from backend.geodesy import distance, flat_area_km2, span_km
from backend.regulatory import analyze_overlay, zones_containing
from backend.scoring import score_location
from domain.siting.models import (
    AreaAnalysisResult,
    AreaStatistics,
    Bounds,
    Coordinate,
    DemandCenterRef,
    InvalidBoundsError,
    RegulatoryZone,
    ScoringMode,
    SuitabilityResult,
)

logger = logging.getLogger(__name__)

_SEED_UPPER_BOUND = 2**63 - 1


@dataclass(frozen=True)
class _Cell:
    index: int
    coordinate: Coordinate
    seed: int


def clamp_resolution(requested: int, ceiling: int = MAX_GRID_RESOLUTION) -> int:
    if requested < 1:
        raise InvalidBoundsError("Grid resolution must be at least 1")
    ceiling = min(ceiling, MAX_GRID_RESOLUTION)
    if requested > ceiling:
        logger.warning("Grid resolution %d clamped to %d", requested, ceiling)
    return min(requested, ceiling)


def grid_cell_centers(bounds: Bounds, resolution: int) -> List[Coordinate]:
    """Row-major cell centres: rows from south to north, columns west to east."""

    lat_step = (bounds.north - bounds.south) / resolution
    lng_step = (bounds.east - bounds.west) / resolution
    centers: List[Coordinate] = []
    for row in range(resolution):
        lat = bounds.south + (row + 0.5) * lat_step
        for col in range(resolution):
            lng = bounds.west + (col + 0.5) * lng_step
            centers.append(Coordinate(lat, lng))
    return centers


def nearest_demand_center(
    coordinate: Coordinate,
    demand_centers: Sequence[DemandCenterRef],
) -> Optional[Tuple[float, DemandCenterRef]]:
    """Exact nearest neighbour by linear scan; ties keep the earlier centre."""

    best: Optional[Tuple[float, DemandCenterRef]] = None
    for center in demand_centers:
        center_km = distance(coordinate, center.coordinate)
        if best is None or center_km < best[0]:
            best = (center_km, center)
    return best


def _score_cell(
    cell: _Cell,
    demand_centers: Sequence[DemandCenterRef],
    mode: ScoringMode,
    zones: Optional[Sequence[RegulatoryZone]],
    tables: FactorTables,
    fallback_distance_km: float,
) -> SuitabilityResult:
    nearest = nearest_demand_center(cell.coordinate, demand_centers)
    if nearest is None:
        distance_km, center = fallback_distance_km, None
    else:
        distance_km, center = nearest

    regulatory_score = None
    regulatory_analysis = None
    if zones is not None:
        regulatory_analysis = analyze_overlay(zones_containing(zones, cell.coordinate))
        regulatory_score = regulatory_analysis.overall_score

    return score_location(
        cell.coordinate,
        distance_km,
        np.random.default_rng(cell.seed),
        regulatory_score=regulatory_score,
        mode=mode,
        tables=tables,
        nearest_demand_center=center,
        regulatory_analysis=regulatory_analysis,
    )


def _band_for(score: float) -> str:
    for band, lower_bound in SCORE_DISTRIBUTION_BANDS:
        if score >= lower_bound:
            return band
    raise AssertionError("score distribution bands must end with an open lower bound")


def calculate_area_statistics(bounds: Bounds, results: Sequence[SuitabilityResult]) -> AreaStatistics:
    scores = np.array([result.score for result in results], dtype=float)
    distribution = {band: 0 for band, _ in SCORE_DISTRIBUTION_BANDS}
    for score in scores:
        distribution[_band_for(float(score))] += 1

    width_km, height_km = span_km(bounds)
    has_scores = scores.size > 0
    return AreaStatistics(
        sites_analyzed=int(scores.size),
        average_score=round(float(scores.mean()), 2) if has_scores else 0.0,
        max_score=round(float(scores.max()), 2) if has_scores else 0.0,
        min_score=round(float(scores.min()), 2) if has_scores else 0.0,
        area_km2=round(flat_area_km2(bounds), 2),
        suitable_sites=int(np.count_nonzero(scores >= SUITABLE_SITE_THRESHOLD)),
        score_distribution=distribution,
        width_km=round(width_km, 2),
        height_km=round(height_km, 2),
    )


def analyze_area(
    bounds: Bounds,
    demand_centers: Sequence[DemandCenterRef],
    grid_resolution: int,
    rng: np.random.Generator,
    mode: ScoringMode = ScoringMode.THREE_FACTOR,
    zones: Optional[Sequence[RegulatoryZone]] = None,
    tables: FactorTables = DEFAULT_FACTOR_TABLES,
    max_resolution: int = MAX_GRID_RESOLUTION,
    ranked_limit: int = RANKED_SITES_LIMIT,
    fallback_distance_km: float = FALLBACK_DEMAND_DISTANCE_KM,
    max_workers: int = 1,
) -> AreaAnalysisResult:
    """Score every cell of a uniform lattice over ``bounds`` and rank them.

    Per-cell seeds are drawn from ``rng`` in row-major order before any cell
    is scored, so the output does not depend on ``max_workers``.
    """

    started = time.perf_counter()
    resolution = clamp_resolution(grid_resolution, max_resolution)
    centers = grid_cell_centers(bounds, resolution)
    seeds = rng.integers(0, _SEED_UPPER_BOUND, size=len(centers))
    cells = [
        _Cell(index=idx, coordinate=center, seed=int(seed))
        for idx, (center, seed) in enumerate(zip(centers, seeds))
    ]

    def evaluate(cell: _Cell) -> SuitabilityResult:
        return _score_cell(cell, demand_centers, mode, zones, tables, fallback_distance_km)

    if max_workers > 1 and len(cells) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(evaluate, cells))
    else:
        results = [evaluate(cell) for cell in cells]

    if not demand_centers:
        logger.warning(
            "No demand centres supplied; using %.0f km fallback for all cells",
            fallback_distance_km,
        )

    # sorted() is stable, so equal scores keep row-major order.
    ranked = sorted(results, key=lambda result: result.score, reverse=True)
    statistics = calculate_area_statistics(bounds, results)

    logger.info(
        "Analyzed %d cells (%dx%d) in %.3fs; best score %.2f",
        len(results),
        resolution,
        resolution,
        time.perf_counter() - started,
        statistics.max_score,
    )

    return AreaAnalysisResult(
        bounds=bounds,
        grid_resolution=resolution,
        best_site=ranked[0] if ranked else None,
        ranked_sites=ranked[:ranked_limit],
        area_statistics=statistics,
    )


__all__ = [
    "analyze_area",
    "calculate_area_statistics",
    "clamp_resolution",
    "grid_cell_centers",
    "nearest_demand_center",
]
