"""Domain models for hydrogen site suitability analysis."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from shapely.geometry import shape
from shapely.prepared import prep


class SitingValidationError(ValueError):
    """Raised when caller input is rejected before any computation."""


class InvalidCoordinateError(SitingValidationError):
    pass


class InvalidBoundsError(SitingValidationError):
    pass


class ScoringDefectError(ArithmeticError):
    """A score or distance fell outside its declared range."""


class ScoringMode(Enum):
    THREE_FACTOR = "three_factor"
    FOUR_FACTOR = "four_factor"


class DemandCategory(Enum):
    INDUSTRIAL = "industrial"
    TRANSPORT = "transport"
    RESIDENTIAL = "residential"
    MIXED = "mixed"


class ZoneType(Enum):
    HYDROGEN_PRIORITY = "hydrogen-priority-zone"
    INDUSTRIAL = "industrial-zone"
    ENVIRONMENTAL_SENSITIVE = "environmental-sensitive"
    RENEWABLE_ENERGY = "renewable-energy-zone"
    PORT_AUTHORITY = "port-authority"
    SPECIAL_ECONOMIC = "special-economic-zone"
    RESTRICTED = "restricted-zone"
    GOVERNMENT_INCENTIVE = "government-incentive-zone"


class Jurisdiction(Enum):
    CENTRAL = "central"
    STATE = "state"
    LOCAL = "local"
    PORT_AUTHORITY = "port-authority"
    INDUSTRIAL_AUTHORITY = "industrial-authority"


class ZoneStatus(Enum):
    ACTIVE = "active"
    PROPOSED = "proposed"
    EXPIRED = "expired"
    SUSPENDED = "suspended"


class EnvironmentalLimitation(Enum):
    WATER_USAGE_LIMIT = "water-usage-limit"
    NOISE_RESTRICTION = "noise-restriction"
    EMISSION_LIMIT = "emission-limit"
    LAND_USE_RESTRICTION = "land-use-restriction"


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        lat, lng = self.latitude, self.longitude
        if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
            raise InvalidCoordinateError("Latitude and longitude must be numbers")
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidCoordinateError("Latitude and longitude must be finite")
        if lat < -90 or lat > 90 or lng < -180 or lng > 180:
            raise InvalidCoordinateError(
                "Latitude must be between -90 and 90, longitude between -180 and 180"
            )

    @classmethod
    def from_lng_lat(cls, pair: Sequence[float]) -> "Coordinate":
        """Build from a GeoJSON ``[lng, lat]`` position."""

        if len(pair) < 2:
            raise InvalidCoordinateError(f"Invalid position: {pair!r}")
        return cls(latitude=float(pair[1]), longitude=float(pair[0]))

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.latitude, "lng": self.longitude}


@dataclass(frozen=True)
class Bounds:
    north: float
    south: float
    east: float
    west: float

    def __post_init__(self) -> None:
        # Range-check the corners before comparing them.
        Coordinate(self.north, self.east)
        Coordinate(self.south, self.west)
        if not self.north > self.south:
            raise InvalidBoundsError("North bound must be greater than south bound")
        if not self.east > self.west:
            raise InvalidBoundsError("East bound must be greater than west bound")

    @property
    def centroid(self) -> Coordinate:
        return Coordinate((self.north + self.south) / 2, (self.east + self.west) / 2)

    def to_dict(self) -> Dict[str, float]:
        return {"north": self.north, "south": self.south, "east": self.east, "west": self.west}


@dataclass(frozen=True)
class DemandCenterRef:
    name: str
    annual_demand: float
    category: DemandCategory
    coordinate: Coordinate

    def __post_init__(self) -> None:
        if self.annual_demand < 0:
            raise ValueError("annual_demand must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "demand": self.annual_demand,
            "type": self.category.value,
            "coordinates": [self.coordinate.longitude, self.coordinate.latitude],
        }


# ============================================================================
# REGULATORY ZONES
# ============================================================================


@dataclass(frozen=True)
class ZonePolicies:
    has_incentives: bool = False
    subsidy_percent: float = 0.0
    fast_track: bool = False
    land_support: bool = False
    infra_support: bool = False
    environmental_clearance_required: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.subsidy_percent <= 100:
            raise ValueError("subsidy_percent must be within [0, 100]")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hydrogenIncentives": self.has_incentives,
            "subsidyPercentage": self.subsidy_percent,
            "fastTrackApproval": self.fast_track,
            "environmentalClearanceRequired": self.environmental_clearance_required,
            "landAcquisitionSupport": self.land_support,
            "infrastructureSupport": self.infra_support,
        }


@dataclass(frozen=True)
class SeasonalRestriction:
    months: Tuple[str, ...]
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"months": list(self.months), "reason": self.reason}


@dataclass(frozen=True)
class ZoneRestrictions:
    max_capacity_mw: Optional[float] = None
    environmental_limitations: FrozenSet[EnvironmentalLimitation] = frozenset()
    seasonal_restrictions: Tuple[SeasonalRestriction, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maxCapacity": self.max_capacity_mw,
            "environmentalLimitations": sorted(tag.value for tag in self.environmental_limitations),
            "seasonalRestrictions": [item.to_dict() for item in self.seasonal_restrictions],
        }


@dataclass(frozen=True)
class ZoneContact:
    authority: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "authority": self.authority,
            "email": self.email,
            "phone": self.phone,
            "website": self.website,
        }


Ring = Tuple[Coordinate, ...]
Polygon = Tuple[Ring, ...]


@dataclass(frozen=True)
class ZoneBoundary:
    """One or more polygons; each polygon is an outer ring followed by holes."""

    polygons: Tuple[Polygon, ...]
    _geometry: Any = field(init=False, repr=False, compare=False)
    _prepared: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.polygons:
            raise ValueError("Boundary requires at least one polygon")
        for polygon in self.polygons:
            if not polygon:
                raise ValueError("Polygon requires an outer ring")
            for ring in polygon:
                if len(ring) < 4:
                    raise ValueError("Polygon rings need at least 4 positions")
                if ring[0] != ring[-1]:
                    raise ValueError("Polygon rings must be closed")
        geometry = shape(self.to_geojson())
        object.__setattr__(self, "_geometry", geometry)
        object.__setattr__(self, "_prepared", prep(geometry))

    @property
    def geometry(self) -> Any:
        """Shapely geometry in lng/lat order."""

        return self._geometry

    @property
    def prepared(self) -> Any:
        return self._prepared

    @classmethod
    def from_geojson(cls, geometry: Dict[str, Any]) -> "ZoneBoundary":
        geometry_type = geometry.get("type")
        raw = geometry.get("coordinates") or []
        if geometry_type == "Polygon":
            raw_polygons = [raw]
        elif geometry_type == "MultiPolygon":
            raw_polygons = raw
        else:
            raise ValueError(f"Unsupported boundary geometry: {geometry_type!r}")
        polygons = tuple(
            tuple(tuple(Coordinate.from_lng_lat(pos) for pos in ring) for ring in polygon)
            for polygon in raw_polygons
        )
        return cls(polygons=polygons)

    def to_geojson(self) -> Dict[str, Any]:
        coordinates = [
            [[[pos.longitude, pos.latitude] for pos in ring] for ring in polygon]
            for polygon in self.polygons
        ]
        if len(coordinates) == 1:
            return {"type": "Polygon", "coordinates": coordinates[0]}
        return {"type": "MultiPolygon", "coordinates": coordinates}


@dataclass(frozen=True)
class RegulatoryZone:
    name: str
    zone_type: ZoneType
    jurisdiction: Jurisdiction
    boundary: ZoneBoundary
    policies: ZonePolicies = field(default_factory=ZonePolicies)
    restrictions: ZoneRestrictions = field(default_factory=ZoneRestrictions)
    approval_timeline_days: int = 180
    status: ZoneStatus = ZoneStatus.ACTIVE
    contact: ZoneContact = field(default_factory=ZoneContact)
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.approval_timeline_days < 0:
            raise ValueError("approval_timeline_days must be non-negative")


# ============================================================================
# RESULTS
# ============================================================================


@dataclass(frozen=True)
class Interpretation:
    tier: str
    color: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"level": self.tier, "color": self.color, "description": self.description}


@dataclass(frozen=True)
class SuitabilityBreakdown:
    renewable_score: float
    demand_score: float
    grid_score: float
    regulatory_contribution: float = 0.0

    def total(self) -> float:
        return (
            self.renewable_score
            + self.demand_score
            + self.grid_score
            + self.regulatory_contribution
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "renewableScore": self.renewable_score,
            "demandScore": self.demand_score,
            "gridScore": self.grid_score,
            "regulatoryScore": self.regulatory_contribution,
        }


@dataclass(frozen=True)
class SiteFactors:
    wind_speed: float
    solar_irradiance: float
    infrastructure_access: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "windSpeed": self.wind_speed,
            "solarIrradiance": self.solar_irradiance,
            "infrastructureAccess": self.infrastructure_access,
        }


@dataclass(frozen=True)
class RegulatoryAnalysis:
    overall_score: int
    tier: str
    color: str
    description: str
    recommendations: Tuple[str, ...]
    incentives: Tuple[str, ...]
    restrictions: Tuple[str, ...]
    approval_timeline: str
    approval_timeline_days: Optional[int]
    key_contacts: Tuple[Dict[str, Optional[str]], ...]
    affected_zones: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "level": self.tier,
            "color": self.color,
            "description": self.description,
            "recommendations": list(self.recommendations),
            "incentives": list(self.incentives),
            "restrictions": list(self.restrictions),
            "approvalTimeline": self.approval_timeline,
            "approvalTimelineDays": self.approval_timeline_days,
            "keyContacts": [dict(contact) for contact in self.key_contacts],
            "affectedZones": self.affected_zones,
        }


@dataclass(frozen=True)
class SuitabilityResult:
    coordinate: Coordinate
    score: float
    renewable_potential: float
    distance_to_demand_km: float
    distance_to_grid_km: float
    breakdown: SuitabilityBreakdown
    factors: SiteFactors
    interpretation: Interpretation
    scoring_mode: ScoringMode
    nearest_demand_center: Optional[DemandCenterRef] = None
    regulatory_analysis: Optional[RegulatoryAnalysis] = None

    @property
    def display_score(self) -> float:
        return max(0.0, min(100.0, self.score))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "location": self.coordinate.to_dict(),
            "details": {
                "renewablePotential": self.renewable_potential,
                "distanceToDemand": self.distance_to_demand_km,
                "distanceToGrid": self.distance_to_grid_km,
                "breakdown": self.breakdown.to_dict(),
            },
            "factors": {
                **self.factors.to_dict(),
                "distanceToDemand": self.distance_to_demand_km,
            },
            "interpretation": self.interpretation.to_dict(),
            "scoringMode": self.scoring_mode.value,
            "nearestDemandCenter": (
                self.nearest_demand_center.to_dict() if self.nearest_demand_center else None
            ),
            "regulatoryAnalysis": (
                self.regulatory_analysis.to_dict() if self.regulatory_analysis else None
            ),
        }


@dataclass(frozen=True)
class AreaStatistics:
    sites_analyzed: int
    average_score: float
    max_score: float
    min_score: float
    area_km2: float
    suitable_sites: int
    score_distribution: Dict[str, int]
    width_km: float
    height_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sitesAnalyzed": self.sites_analyzed,
            "avgScore": self.average_score,
            "maxScore": self.max_score,
            "minScore": self.min_score,
            "areaSize": self.area_km2,
            "suitableSites": self.suitable_sites,
            "scoreDistribution": dict(self.score_distribution),
            "squareDimensions": {
                "longitudeSpan": self.width_km,
                "latitudeSpan": self.height_km,
            },
        }


@dataclass(frozen=True)
class AreaAnalysisResult:
    bounds: Bounds
    grid_resolution: int
    best_site: Optional[SuitabilityResult]
    ranked_sites: List[SuitabilityResult]
    area_statistics: AreaStatistics

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bounds": self.bounds.to_dict(),
            "gridResolution": self.grid_resolution,
            "bestSite": self.best_site.to_dict() if self.best_site else None,
            "sites": [site.to_dict() for site in self.ranked_sites],
            "areaStats": self.area_statistics.to_dict(),
        }


__all__ = [
    "AreaAnalysisResult",
    "AreaStatistics",
    "Bounds",
    "Coordinate",
    "DemandCategory",
    "DemandCenterRef",
    "EnvironmentalLimitation",
    "Interpretation",
    "InvalidBoundsError",
    "InvalidCoordinateError",
    "Jurisdiction",
    "RegulatoryAnalysis",
    "RegulatoryZone",
    "ScoringDefectError",
    "ScoringMode",
    "SeasonalRestriction",
    "SiteFactors",
    "SitingValidationError",
    "SuitabilityBreakdown",
    "SuitabilityResult",
    "ZoneBoundary",
    "ZoneContact",
    "ZonePolicies",
    "ZoneRestrictions",
    "ZoneStatus",
    "ZoneType",
]
