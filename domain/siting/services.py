"""Service layer wiring the siting data store to the scoring engine."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import numpy as np
from pydantic import BaseModel, Field

from backend.area_analysis import analyze_area
from backend.factors import make_rng
from backend.geodesy import validate_coordinate
from backend.regulatory import analyze_overlay, summarize_zones, zone_score
from backend.scoring import score_location
from core.config import Settings
from .models import Bounds, DemandCenterRef, RegulatoryZone, ScoringMode
from .store import SitingDataStore

logger = logging.getLogger(__name__)


class LocationRequest(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class AreaBounds(BaseModel):
    north: float
    south: float
    east: float
    west: float


class AreaAnalysisRequest(BaseModel):
    bounds: AreaBounds
    gridResolution: Optional[int] = Field(default=None)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def resolve_rng(settings: Settings) -> np.random.Generator:
    return make_rng(settings.random_seed)


def resolve_mode(settings: Settings) -> ScoringMode:
    return ScoringMode(settings.scoring_mode)


def zone_summary(zone: RegulatoryZone) -> Dict[str, Any]:
    return {
        "name": zone.name,
        "type": zone.zone_type.value,
        "jurisdiction": zone.jurisdiction.value,
        "policies": zone.policies.to_dict(),
        "restrictions": zone.restrictions.to_dict(),
        "approvalTimeline": zone.approval_timeline_days,
        "regulatoryScore": zone_score(zone),
        "contactInfo": zone.contact.to_dict(),
    }


def zone_feature(zone: RegulatoryZone) -> Dict[str, Any]:
    properties = zone_summary(zone)
    properties.update(
        {
            "status": zone.status.value,
            "effectiveDate": zone.effective_date.isoformat() if zone.effective_date else None,
            "expiryDate": zone.expiry_date.isoformat() if zone.expiry_date else None,
        }
    )
    return {"type": "Feature", "properties": properties, "geometry": zone.boundary.to_geojson()}


def run_suitability(
    request: LocationRequest,
    store: SitingDataStore,
    settings: Settings,
) -> Dict[str, Any]:
    coordinate = validate_coordinate(request.lat, request.lng)

    nearest = store.nearest_demand_center(coordinate)
    if nearest is None:
        logger.warning(
            "No demand centre for (%.4f, %.4f); using %.0f km fallback",
            coordinate.latitude,
            coordinate.longitude,
            settings.fallback_demand_distance_km,
        )
        distance_km, center = settings.fallback_demand_distance_km, None
    else:
        distance_km, center = nearest

    analysis = analyze_overlay(store.zones_containing(coordinate), coordinate)
    result = score_location(
        coordinate,
        distance_km,
        resolve_rng(settings),
        regulatory_score=analysis.overall_score,
        mode=resolve_mode(settings),
        nearest_demand_center=center,
        regulatory_analysis=analysis,
    )
    payload = result.to_dict()
    payload["timestamp"] = _timestamp()
    return payload


def run_area_analysis(
    request: AreaAnalysisRequest,
    store: SitingDataStore,
    settings: Settings,
) -> Dict[str, Any]:
    bounds = Bounds(
        north=request.bounds.north,
        south=request.bounds.south,
        east=request.bounds.east,
        west=request.bounds.west,
    )
    resolution = (
        settings.default_grid_resolution
        if request.gridResolution is None
        else request.gridResolution
    )
    demand_centers = store.demand_centers_near(
        bounds.centroid,
        radius_km=settings.demand_search_radius_km,
        limit=settings.demand_search_limit,
    )
    zones = None
    if resolve_mode(settings) is ScoringMode.FOUR_FACTOR:
        zones = store.zones_intersecting(bounds)

    result = analyze_area(
        bounds,
        demand_centers,
        resolution,
        resolve_rng(settings),
        mode=resolve_mode(settings),
        zones=zones,
        max_resolution=settings.max_grid_resolution,
        ranked_limit=settings.ranked_sites_limit,
        fallback_distance_km=settings.fallback_demand_distance_km,
        max_workers=settings.area_workers,
    )
    payload = result.to_dict()
    payload["demandCentersConsidered"] = len(demand_centers)
    payload["timestamp"] = _timestamp()
    return payload


def run_zone_lookup(
    request: LocationRequest,
    store: SitingDataStore,
) -> Dict[str, Any]:
    coordinate = validate_coordinate(request.lat, request.lng)
    zones = store.zones_containing(coordinate)
    return {
        "location": coordinate.to_dict(),
        "zones": [zone_summary(zone) for zone in zones],
        "analysis": analyze_overlay(zones, coordinate).to_dict(),
        "timestamp": _timestamp(),
    }


def list_zones(
    store: SitingDataStore,
    zone_type: Optional[str] = None,
    jurisdiction: Optional[str] = None,
    status: str = "active",
) -> Dict[str, Any]:
    zones = store.all_zones(zone_type=zone_type, jurisdiction=jurisdiction, status=status)
    return {"type": "FeatureCollection", "features": [zone_feature(zone) for zone in zones]}


def zone_statistics(store: SitingDataStore) -> Dict[str, Any]:
    stats = summarize_zones(store.zones)
    stats["timestamp"] = _timestamp()
    return stats


def demand_center_feature(center: DemandCenterRef) -> Dict[str, Any]:
    properties = center.to_dict()
    coordinates = properties.pop("coordinates")
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "Point", "coordinates": coordinates},
    }


def list_demand_centers(store: SitingDataStore) -> Dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [demand_center_feature(center) for center in store.demand_centers],
    }


__all__ = [
    "AreaAnalysisRequest",
    "AreaBounds",
    "LocationRequest",
    "demand_center_feature",
    "list_demand_centers",
    "list_zones",
    "resolve_mode",
    "resolve_rng",
    "run_area_analysis",
    "run_suitability",
    "run_zone_lookup",
    "zone_feature",
    "zone_statistics",
    "zone_summary",
]
