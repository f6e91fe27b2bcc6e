"""In-memory catalogue of demand centres and regulatory zones.

Answers the spatial lookups the scoring engine needs from its surroundings:
nearest demand centre, demand centres around a centroid, and zones that
contain a point or lie near one. Snapshots are loaded from JSON documents
using GeoJSON geometry (``[lng, lat]`` positions).
"""
from __future__ import annotations

import json
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from backend.area_analysis import nearest_demand_center
from backend.geodesy import distance
from backend.regulatory import zones_containing, zones_intersecting, zones_within_radius
from .models import (
    Bounds,
    Coordinate,
    DemandCategory,
    DemandCenterRef,
    EnvironmentalLimitation,
    Jurisdiction,
    RegulatoryZone,
    SeasonalRestriction,
    ZoneBoundary,
    ZoneContact,
    ZonePolicies,
    ZoneRestrictions,
    ZoneStatus,
    ZoneType,
)

logger = logging.getLogger(__name__)


def _coerce_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    try:
        if value is None:
            return default
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(str(value)[:10])


def parse_demand_center(payload: Dict[str, Any]) -> DemandCenterRef:
    location = payload.get("location") or {}
    return DemandCenterRef(
        name=str(payload["name"]).strip(),
        annual_demand=_coerce_float(payload.get("demand"), 0.0) or 0.0,
        category=DemandCategory(payload.get("type", DemandCategory.INDUSTRIAL.value)),
        coordinate=Coordinate.from_lng_lat(location.get("coordinates", [])),
    )


def parse_regulatory_zone(payload: Dict[str, Any]) -> RegulatoryZone:
    policies = payload.get("policies") or {}
    restrictions = payload.get("restrictions") or {}
    contact = payload.get("contactInfo") or {}
    return RegulatoryZone(
        name=str(payload["name"]).strip(),
        zone_type=ZoneType(payload["type"]),
        jurisdiction=Jurisdiction(payload["jurisdiction"]),
        boundary=ZoneBoundary.from_geojson(payload["boundary"]),
        policies=ZonePolicies(
            has_incentives=bool(policies.get("hydrogenIncentives", False)),
            subsidy_percent=_coerce_float(policies.get("subsidyPercentage"), 0.0) or 0.0,
            fast_track=bool(policies.get("fastTrackApproval", False)),
            land_support=bool(policies.get("landAcquisitionSupport", False)),
            infra_support=bool(policies.get("infrastructureSupport", False)),
            environmental_clearance_required=bool(
                policies.get("environmentalClearanceRequired", True)
            ),
        ),
        restrictions=ZoneRestrictions(
            max_capacity_mw=_coerce_float(restrictions.get("maxCapacity")),
            environmental_limitations=frozenset(
                EnvironmentalLimitation(tag)
                for tag in restrictions.get("environmentalLimitations", [])
            ),
            seasonal_restrictions=tuple(
                SeasonalRestriction(
                    months=tuple(item.get("months", [])),
                    reason=item.get("reason", ""),
                )
                for item in restrictions.get("seasonalRestrictions", [])
            ),
        ),
        approval_timeline_days=int(payload.get("approvalTimeline", 180)),
        status=ZoneStatus(payload.get("status", ZoneStatus.ACTIVE.value)),
        contact=ZoneContact(
            authority=contact.get("authority"),
            email=contact.get("email"),
            phone=contact.get("phone"),
            website=contact.get("website"),
        ),
        effective_date=_parse_date(payload.get("effectiveDate")),
        expiry_date=_parse_date(payload.get("expiryDate")),
    )


class SitingDataStore:
    """Thread-safe holder for demand centre and zone snapshots."""

    def __init__(
        self,
        demand_centers: Iterable[DemandCenterRef] = (),
        zones: Iterable[RegulatoryZone] = (),
    ) -> None:
        self._lock = threading.Lock()
        self._demand_centers: Tuple[DemandCenterRef, ...] = tuple(demand_centers)
        self._zones: Tuple[RegulatoryZone, ...] = tuple(zones)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SitingDataStore":
        store = cls()
        store.load_snapshot(path)
        return store

    def load_snapshot(self, path: Union[str, Path]) -> None:
        with open(path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
        self.load_payload(payload)
        logger.info(
            "Loaded %d demand centres and %d regulatory zones from %s",
            len(self._demand_centers),
            len(self._zones),
            path,
        )

    def load_payload(self, payload: Dict[str, Any]) -> None:
        demand_centers = tuple(
            parse_demand_center(item) for item in payload.get("demandCenters", [])
        )
        zones = tuple(parse_regulatory_zone(item) for item in payload.get("regulatoryZones", []))
        with self._lock:
            self._demand_centers = demand_centers
            self._zones = zones

    @property
    def demand_centers(self) -> Tuple[DemandCenterRef, ...]:
        return self._demand_centers

    @property
    def zones(self) -> Tuple[RegulatoryZone, ...]:
        return self._zones

    def nearest_demand_center(
        self, coordinate: Coordinate
    ) -> Optional[Tuple[float, DemandCenterRef]]:
        return nearest_demand_center(coordinate, self._demand_centers)

    def demand_centers_near(
        self,
        centroid: Coordinate,
        radius_km: float = 100.0,
        limit: int = 20,
    ) -> List[DemandCenterRef]:
        candidates = [
            (distance(centroid, center.coordinate), idx, center)
            for idx, center in enumerate(self._demand_centers)
        ]
        within = sorted(item for item in candidates if item[0] <= radius_km)
        return [center for _, _, center in within[:limit]]

    def zones_containing(self, coordinate: Coordinate) -> List[RegulatoryZone]:
        return zones_containing(self._zones, coordinate)

    def zones_near(self, centroid: Coordinate, radius_km: float) -> List[RegulatoryZone]:
        return zones_within_radius(self._zones, centroid, radius_km)

    def zones_intersecting(self, bounds: Bounds) -> List[RegulatoryZone]:
        return zones_intersecting(self._zones, bounds)

    def all_zones(
        self,
        zone_type: Optional[str] = None,
        jurisdiction: Optional[str] = None,
        status: Optional[str] = ZoneStatus.ACTIVE.value,
    ) -> List[RegulatoryZone]:
        zones: List[RegulatoryZone] = []
        for zone in self._zones:
            if status and zone.status.value != status:
                continue
            if zone_type and zone.zone_type.value != zone_type:
                continue
            if jurisdiction and zone.jurisdiction.value != jurisdiction:
                continue
            zones.append(zone)
        return zones


__all__ = [
    "SitingDataStore",
    "parse_demand_center",
    "parse_regulatory_zone",
]
