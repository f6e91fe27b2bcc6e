"""Lookup tables driving the synthetic factor generators and the scorers.

The tables are plain data so they can be swapped for measured datasets
without touching the algorithms in ``backend.factors`` and ``backend.scoring``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Tuple

from domain.siting.models import ScoringMode, ZoneType


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


@dataclass(frozen=True)
class RegionBonus:
    name: str
    box: BoundingBox
    value: float


@dataclass(frozen=True)
class ReferencePoint:
    name: str
    lat: float
    lng: float
    weight: float = 1.0


@dataclass(frozen=True)
class RenewableTable:
    base: float
    # Ordered; the last matching region replaces the base value.
    region_bases: Tuple[RegionBonus, ...]
    latitude_weight: float
    noise: float
    minimum: float
    maximum: float


@dataclass(frozen=True)
class GridTable:
    hubs: Tuple[ReferencePoint, ...]
    max_jitter_km: float


@dataclass(frozen=True)
class WindTable:
    base: float
    # Every matching region adds its bonus.
    region_bonuses: Tuple[RegionBonus, ...]
    high_latitude_threshold: float
    high_latitude_bonus: float
    noise: float
    minimum: float
    maximum: float


@dataclass(frozen=True)
class InfrastructureTable:
    base: float
    cities: Tuple[ReferencePoint, ...]
    city_falloff_km: float
    corridors: Tuple[RegionBonus, ...]
    remote_threshold_km: float
    remote_penalty: float
    noise: float
    minimum: float
    maximum: float


@dataclass(frozen=True)
class FactorTables:
    renewable: RenewableTable
    grid: GridTable
    wind: WindTable
    infrastructure: InfrastructureTable


GRID_REFERENCE_POINTS: Tuple[ReferencePoint, ...] = (
    ReferencePoint("Ahmedabad, Gujarat", 23.0225, 72.5714),
    ReferencePoint("Mumbai, Maharashtra", 19.0760, 72.8777),
    ReferencePoint("Delhi NCR", 28.7041, 77.1025),
    ReferencePoint("Chennai, Tamil Nadu", 13.0827, 80.2707),
    ReferencePoint("Hyderabad, Telangana", 17.3850, 78.4867),
    ReferencePoint("Kolkata, West Bengal", 22.5726, 88.3639),
    ReferencePoint("Pune, Maharashtra", 18.5204, 73.8567),
    ReferencePoint("Bangalore, Karnataka", 12.9716, 77.5946),
    ReferencePoint("Vadodara, Gujarat", 22.3072, 72.1262),
    ReferencePoint("Surat, Gujarat", 21.1702, 72.8311),
)

MAJOR_CITIES: Tuple[ReferencePoint, ...] = (
    ReferencePoint("Mumbai", 19.0760, 72.8777, weight=3.0),
    ReferencePoint("Delhi", 28.7041, 77.1025, weight=3.0),
    ReferencePoint("Bangalore", 12.9716, 77.5946, weight=2.5),
    ReferencePoint("Chennai", 13.0827, 80.2707, weight=2.5),
    ReferencePoint("Kolkata", 22.5726, 88.3639, weight=2.5),
    ReferencePoint("Hyderabad", 17.3850, 78.4867, weight=2.5),
    ReferencePoint("Ahmedabad", 23.0225, 72.5714, weight=2.0),
    ReferencePoint("Pune", 18.5204, 73.8567, weight=2.0),
)

DEFAULT_FACTOR_TABLES = FactorTables(
    renewable=RenewableTable(
        base=1750.0,
        region_bases=(
            RegionBonus("Gujarat", BoundingBox(20.0, 24.5, 68.0, 74.5), 1900.0),
            RegionBonus("Rajasthan desert", BoundingBox(24.0, 30.0, 69.0, 78.0), 1950.0),
        ),
        latitude_weight=50.0,
        noise=100.0,
        minimum=1600.0,
        maximum=2000.0,
    ),
    grid=GridTable(hubs=GRID_REFERENCE_POINTS, max_jitter_km=10.0),
    wind=WindTable(
        base=6.0,
        region_bonuses=(
            RegionBonus("Kutch and Saurashtra coast", BoundingBox(20.5, 23.8, 68.0, 70.8), 2.0),
            RegionBonus("Tamil Nadu coast", BoundingBox(8.0, 11.5, 77.0, 80.5), 2.5),
            RegionBonus("Konkan coast", BoundingBox(15.0, 20.0, 72.5, 73.8), 1.0),
            RegionBonus("Thar desert", BoundingBox(24.5, 30.0, 69.5, 75.0), 1.5),
        ),
        high_latitude_threshold=28.0,
        high_latitude_bonus=0.5,
        noise=1.0,
        minimum=4.0,
        maximum=12.0,
    ),
    infrastructure=InfrastructureTable(
        base=4.0,
        cities=MAJOR_CITIES,
        city_falloff_km=50.0,
        corridors=(
            RegionBonus("Delhi-Mumbai Industrial Corridor", BoundingBox(18.9, 28.7, 72.5, 77.3), 1.5),
            RegionBonus("Chennai-Bengaluru Industrial Corridor", BoundingBox(12.5, 13.5, 77.5, 80.3), 1.0),
        ),
        remote_threshold_km=300.0,
        remote_penalty=1.5,
        noise=0.5,
        minimum=1.0,
        maximum=10.0,
    ),
)

# ============================================================================
# SUITABILITY WEIGHTS
# ============================================================================

SCORING_WEIGHTS: Dict[ScoringMode, Dict[str, float]] = {
    ScoringMode.THREE_FACTOR: {
        "renewable": 40.0,
        "demand": 30.0,
        "grid": 30.0,
        "regulatory": 0.0,
    },
    ScoringMode.FOUR_FACTOR: {
        "renewable": 30.0,
        "demand": 25.0,
        "grid": 25.0,
        "regulatory": 20.0,
    },
}

RENEWABLE_REFERENCE_KWH = 2000.0
DEMAND_DECAY_KM = 100.0
GRID_DECAY_KM = 150.0
FALLBACK_DEMAND_DISTANCE_KM = 100.0

# (lower bound, tier, colour, description); checked top-down.
SUITABILITY_TIERS: Tuple[Tuple[float, str, str, str], ...] = (
    (
        80.0,
        "Excellent",
        "#22c55e",
        "Highly suitable location with excellent renewable potential and infrastructure access",
    ),
    (
        60.0,
        "Good",
        "#84cc16",
        "Good location with favorable conditions for hydrogen infrastructure",
    ),
    (40.0, "Fair", "#eab308", "Moderately suitable location with some limitations"),
    (
        20.0,
        "Poor",
        "#f97316",
        "Limited suitability due to infrastructure or resource constraints",
    ),
    (
        -math.inf,
        "Very Poor",
        "#ef4444",
        "Not recommended due to poor renewable potential or infrastructure access",
    ),
)

# ============================================================================
# REGULATORY SCORING
# ============================================================================

ZONE_BASE_SCORE = 50.0

ZONE_POLICY_BONUSES: Dict[str, float] = {
    "has_incentives": 20.0,
    "fast_track": 10.0,
    "land_support": 10.0,
    "infra_support": 10.0,
}

ZONE_SUBSIDY_WEIGHT = 15.0

ZONE_TYPE_BONUSES: Dict[ZoneType, float] = {
    ZoneType.HYDROGEN_PRIORITY: 25.0,
    ZoneType.RENEWABLE_ENERGY: 20.0,
    ZoneType.INDUSTRIAL: 15.0,
    ZoneType.SPECIAL_ECONOMIC: 15.0,
    ZoneType.PORT_AUTHORITY: 10.0,
    ZoneType.GOVERNMENT_INCENTIVE: 20.0,
    ZoneType.ENVIRONMENTAL_SENSITIVE: -20.0,
    ZoneType.RESTRICTED: -30.0,
}

ENVIRONMENTAL_LIMITATION_PENALTY = 5.0
SEASONAL_RESTRICTION_PENALTY = 3.0

APPROVAL_SLOW_DAYS = 365
APPROVAL_SLOW_PENALTY = -10.0
APPROVAL_LONG_DAYS = 180
APPROVAL_LONG_PENALTY = -5.0
APPROVAL_FAST_DAYS = 90
APPROVAL_FAST_BONUS = 5.0

NEUTRAL_REGULATORY_SCORE = 30

MAX_INCENTIVES = 5
MAX_RESTRICTIONS = 5
MAX_RECOMMENDATIONS = 3
MAX_CONTACTS = 3

UNKNOWN_REGULATORY_TIER: Dict[str, object] = {
    "key": "unknown",
    "level": "Unknown",
    "color": "#9ca3af",
    "description": "No specific regulatory zones identified. Standard approval processes apply.",
    "recommendations": (
        "Consult local authorities for specific requirements",
        "Consider proximity to industrial zones for better support",
        "Check for any upcoming policy changes",
    ),
    "approval_timeline": "6-12 months (estimated)",
}

REGULATORY_TIERS: Tuple[Tuple[float, str, str, str, Tuple[str, ...]], ...] = (
    (
        80.0,
        "Highly Favorable",
        "#22c55e",
        "Excellent regulatory environment with strong government support and incentives.",
        (
            "Proceed with detailed feasibility study",
            "Engage with local authorities early for fast-track processing",
            "Leverage available incentives and subsidies",
        ),
    ),
    (
        60.0,
        "Favorable",
        "#84cc16",
        "Good regulatory environment with some incentives and reasonable approval processes.",
        (
            "Review specific zone requirements in detail",
            "Consider timing to optimize incentive utilization",
            "Prepare comprehensive environmental assessments",
        ),
    ),
    (
        40.0,
        "Moderate",
        "#eab308",
        "Mixed regulatory environment. Some benefits but also restrictions to consider.",
        (
            "Conduct thorough regulatory due diligence",
            "Consider phased development approach",
            "Engage regulatory consultants familiar with local requirements",
        ),
    ),
    (
        20.0,
        "Challenging",
        "#f97316",
        "Complex regulatory environment with significant restrictions or lengthy processes.",
        (
            "Assess if benefits justify regulatory complexity",
            "Consider alternative locations with better regulatory support",
            "Plan for extended development timeline",
        ),
    ),
    (
        -math.inf,
        "Unfavorable",
        "#ef4444",
        "Difficult regulatory environment with major restrictions or lack of support.",
        (
            "Strongly consider alternative locations",
            "If proceeding, engage specialized regulatory experts",
            "Plan for significant time and resource investment",
        ),
    ),
)

# ============================================================================
# AREA ANALYSIS
# ============================================================================

MAX_GRID_RESOLUTION = 8
RANKED_SITES_LIMIT = 10
SUITABLE_SITE_THRESHOLD = 60.0

# (band name, lower bound) checked top-down.
SCORE_DISTRIBUTION_BANDS: Tuple[Tuple[str, float], ...] = (
    ("excellent", 80.0),
    ("good", 60.0),
    ("fair", 40.0),
    ("poor", -math.inf),
)

for _mode, _weights in SCORING_WEIGHTS.items():
    _total_weight = sum(_weights.values())
    if not math.isclose(_total_weight, 100.0, rel_tol=1e-9):
        raise RuntimeError(f"{_mode.value} weights sum to {_total_weight}, not 100")

__all__ = [
    "APPROVAL_FAST_BONUS",
    "APPROVAL_FAST_DAYS",
    "APPROVAL_LONG_DAYS",
    "APPROVAL_LONG_PENALTY",
    "APPROVAL_SLOW_DAYS",
    "APPROVAL_SLOW_PENALTY",
    "BoundingBox",
    "DEFAULT_FACTOR_TABLES",
    "DEMAND_DECAY_KM",
    "ENVIRONMENTAL_LIMITATION_PENALTY",
    "FALLBACK_DEMAND_DISTANCE_KM",
    "FactorTables",
    "GRID_DECAY_KM",
    "GRID_REFERENCE_POINTS",
    "GridTable",
    "InfrastructureTable",
    "MAJOR_CITIES",
    "MAX_CONTACTS",
    "MAX_GRID_RESOLUTION",
    "MAX_INCENTIVES",
    "MAX_RECOMMENDATIONS",
    "MAX_RESTRICTIONS",
    "NEUTRAL_REGULATORY_SCORE",
    "RANKED_SITES_LIMIT",
    "REGULATORY_TIERS",
    "RENEWABLE_REFERENCE_KWH",
    "ReferencePoint",
    "RegionBonus",
    "RenewableTable",
    "SCORE_DISTRIBUTION_BANDS",
    "SCORING_WEIGHTS",
    "SEASONAL_RESTRICTION_PENALTY",
    "SUITABILITY_TIERS",
    "SUITABLE_SITE_THRESHOLD",
    "UNKNOWN_REGULATORY_TIER",
    "WindTable",
    "ZONE_BASE_SCORE",
    "ZONE_POLICY_BONUSES",
    "ZONE_SUBSIDY_WEIGHT",
    "ZONE_TYPE_BONUSES",
]
