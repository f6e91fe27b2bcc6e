"""Suitability scoring for candidate hydrogen production sites.

A site score combines renewable potential, demand proximity, grid proximity
and (in four-factor mode) the regulatory overlay into a 0-100 figure.
The weighting scheme is a deployment-wide ``ScoringMode``; see
``SCORING_WEIGHTS`` in :mod:`backend.config`.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Optional

import numpy as np

from backend.config import (
    DEFAULT_FACTOR_TABLES,
    DEMAND_DECAY_KM,
    GRID_DECAY_KM,
    NEUTRAL_REGULATORY_SCORE,
    RENEWABLE_REFERENCE_KWH,
    SCORING_WEIGHTS,
    SUITABILITY_TIERS,
    FactorTables,
)
from backend.factors import generate_site_factors
from domain.siting.models import (
    Coordinate,
    DemandCenterRef,
    Interpretation,
    RegulatoryAnalysis,
    ScoringDefectError,
    ScoringMode,
    SiteFactors,
    SuitabilityBreakdown,
    SuitabilityResult,
)

logger = logging.getLogger(__name__)


def get_weights(mode: ScoringMode) -> Dict[str, float]:
    return dict(SCORING_WEIGHTS[mode])


def get_interpretation(score: float) -> Interpretation:
    for lower_bound, tier, color, description in SUITABILITY_TIERS:
        if score >= lower_bound:
            return Interpretation(tier=tier, color=color, description=description)
    raise AssertionError("suitability tier table must end with an open lower bound")


def calculate_renewable_score(potential_kwh: float, weight: float) -> float:
    return (potential_kwh / RENEWABLE_REFERENCE_KWH) * weight


def calculate_demand_score(distance_km: float, weight: float) -> float:
    """Exponential decay; mid-range distances are not punished as hard as linear."""

    if distance_km < 0:
        raise ScoringDefectError(f"Negative demand distance: {distance_km}")
    return max(0.0, weight * math.exp(-distance_km / DEMAND_DECAY_KM))


def calculate_grid_score(distance_km: float, weight: float) -> float:
    if distance_km < 0:
        raise ScoringDefectError(f"Negative grid distance: {distance_km}")
    return max(0.0, weight * math.exp(-distance_km / GRID_DECAY_KM))


def calculate_regulatory_contribution(regulatory_score: float, weight: float) -> float:
    if not 0 <= regulatory_score <= 100:
        raise ValueError(f"Regulatory score must be within [0, 100], got {regulatory_score}")
    return (regulatory_score / 100) * weight


def score_location(
    coordinate: Coordinate,
    distance_to_demand_km: float,
    rng: np.random.Generator,
    regulatory_score: Optional[float] = None,
    mode: ScoringMode = ScoringMode.THREE_FACTOR,
    tables: FactorTables = DEFAULT_FACTOR_TABLES,
    nearest_demand_center: Optional[DemandCenterRef] = None,
    regulatory_analysis: Optional[RegulatoryAnalysis] = None,
) -> SuitabilityResult:
    """Score one location.

    ``regulatory_score`` only contributes in ``FOUR_FACTOR`` mode, where a
    missing score falls back to the neutral overlay score. In
    ``THREE_FACTOR`` mode it is ignored; an attached ``regulatory_analysis``
    is still carried through for display.
    """

    weights = get_weights(mode)
    factors = generate_site_factors(coordinate, rng, tables)

    renewable_score = calculate_renewable_score(factors.renewable_potential, weights["renewable"])
    demand_score = calculate_demand_score(distance_to_demand_km, weights["demand"])
    grid_score = calculate_grid_score(factors.grid_distance_km, weights["grid"])

    regulatory_contribution = 0.0
    if mode is ScoringMode.FOUR_FACTOR:
        effective = NEUTRAL_REGULATORY_SCORE if regulatory_score is None else regulatory_score
        regulatory_contribution = calculate_regulatory_contribution(effective, weights["regulatory"])

    total = round(renewable_score + demand_score + grid_score + regulatory_contribution, 2)
    if not 0.0 <= total <= 100.0:
        raise ScoringDefectError(
            f"Suitability total {total} outside [0, 100] for mode {mode.value}"
        )

    logger.debug(
        "Scored (%.4f, %.4f) in %s mode: %.2f",
        coordinate.latitude,
        coordinate.longitude,
        mode.value,
        total,
    )

    return SuitabilityResult(
        coordinate=coordinate,
        score=total,
        renewable_potential=factors.renewable_potential,
        distance_to_demand_km=round(distance_to_demand_km, 2),
        distance_to_grid_km=factors.grid_distance_km,
        breakdown=SuitabilityBreakdown(
            renewable_score=round(renewable_score, 2),
            demand_score=round(demand_score, 2),
            grid_score=round(grid_score, 2),
            regulatory_contribution=round(regulatory_contribution, 2),
        ),
        factors=SiteFactors(
            wind_speed=factors.wind_speed,
            solar_irradiance=factors.renewable_potential,
            infrastructure_access=factors.infrastructure_access,
        ),
        interpretation=get_interpretation(total),
        scoring_mode=mode,
        nearest_demand_center=nearest_demand_center,
        regulatory_analysis=regulatory_analysis,
    )


__all__ = [
    "calculate_demand_score",
    "calculate_grid_score",
    "calculate_regulatory_contribution",
    "calculate_renewable_score",
    "get_interpretation",
    "get_weights",
    "score_location",
]
