"""Regulatory zone scoring, overlay aggregation and zone geometry.

A zone's score is derived from its policies, restrictions, type and approval
timeline every time it is needed; it is never stored alongside the zone.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Sequence

from shapely.geometry import Point, box

from backend.config import (
    APPROVAL_FAST_BONUS,
    APPROVAL_FAST_DAYS,
    APPROVAL_LONG_DAYS,
    APPROVAL_LONG_PENALTY,
    APPROVAL_SLOW_DAYS,
    APPROVAL_SLOW_PENALTY,
    ENVIRONMENTAL_LIMITATION_PENALTY,
    MAX_CONTACTS,
    MAX_INCENTIVES,
    MAX_RECOMMENDATIONS,
    MAX_RESTRICTIONS,
    NEUTRAL_REGULATORY_SCORE,
    REGULATORY_TIERS,
    SEASONAL_RESTRICTION_PENALTY,
    UNKNOWN_REGULATORY_TIER,
    ZONE_BASE_SCORE,
    ZONE_POLICY_BONUSES,
    ZONE_SUBSIDY_WEIGHT,
    ZONE_TYPE_BONUSES,
)
from backend.geodesy import haversine
from domain.siting.models import (
    Bounds,
    Coordinate,
    RegulatoryAnalysis,
    RegulatoryZone,
    ZoneBoundary,
    ZoneStatus,
)

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _format_percent(value: float) -> str:
    return f"{value:g}"


# ============================================================================
# ZONE SCORING
# ============================================================================


def zone_score(zone: RegulatoryZone) -> int:
    """Favorability of a zone for hydrogen development, 0-100."""

    policies = zone.policies
    score = ZONE_BASE_SCORE

    for flag, bonus in ZONE_POLICY_BONUSES.items():
        if getattr(policies, flag):
            score += bonus
    score += (policies.subsidy_percent / 100) * ZONE_SUBSIDY_WEIGHT

    score += ZONE_TYPE_BONUSES.get(zone.zone_type, 0.0)

    score -= len(zone.restrictions.environmental_limitations) * ENVIRONMENTAL_LIMITATION_PENALTY
    score -= len(zone.restrictions.seasonal_restrictions) * SEASONAL_RESTRICTION_PENALTY

    days = zone.approval_timeline_days
    if days > APPROVAL_SLOW_DAYS:
        score += APPROVAL_SLOW_PENALTY
    elif days > APPROVAL_LONG_DAYS:
        score += APPROVAL_LONG_PENALTY
    elif days <= APPROVAL_FAST_DAYS:
        score += APPROVAL_FAST_BONUS

    return max(0, min(100, _round_half_up(score)))


def regulatory_tier(score: float) -> Dict[str, Any]:
    for lower_bound, level, color, description, recommendations in REGULATORY_TIERS:
        if score >= lower_bound:
            return {
                "level": level,
                "color": color,
                "description": description,
                "recommendations": recommendations,
            }
    raise AssertionError("regulatory tier table must end with an open lower bound")


def _zone_incentives(zone: RegulatoryZone) -> List[str]:
    policies = zone.policies
    incentives: List[str] = []
    if policies.has_incentives:
        incentives.append(f"{zone.name}: Hydrogen development incentives available")
    if policies.subsidy_percent > 0:
        incentives.append(
            f"{zone.name}: {_format_percent(policies.subsidy_percent)}% subsidy available"
        )
    if policies.fast_track:
        incentives.append(f"{zone.name}: Fast-track approval process")
    if policies.land_support:
        incentives.append(f"{zone.name}: Land acquisition support provided")
    if policies.infra_support:
        incentives.append(f"{zone.name}: Infrastructure development support")
    return incentives


def _zone_restrictions(zone: RegulatoryZone) -> List[str]:
    restrictions = zone.restrictions
    entries: List[str] = []
    if restrictions.max_capacity_mw:
        entries.append(f"{zone.name}: Maximum capacity {restrictions.max_capacity_mw:g} MW")
    for limitation in sorted(restrictions.environmental_limitations, key=lambda tag: tag.value):
        entries.append(f"{zone.name}: {limitation.value.replace('-', ' ', 1)}")
    for seasonal in restrictions.seasonal_restrictions:
        entries.append(
            f"{zone.name}: Seasonal restrictions during {', '.join(seasonal.months)}"
        )
    return entries


def neutral_analysis() -> RegulatoryAnalysis:
    return RegulatoryAnalysis(
        overall_score=NEUTRAL_REGULATORY_SCORE,
        tier=str(UNKNOWN_REGULATORY_TIER["level"]),
        color=str(UNKNOWN_REGULATORY_TIER["color"]),
        description=str(UNKNOWN_REGULATORY_TIER["description"]),
        recommendations=tuple(UNKNOWN_REGULATORY_TIER["recommendations"])[:MAX_RECOMMENDATIONS],  # type: ignore[arg-type]
        incentives=(),
        restrictions=(),
        approval_timeline=str(UNKNOWN_REGULATORY_TIER["approval_timeline"]),
        approval_timeline_days=None,
        key_contacts=(),
        affected_zones=0,
    )


def analyze_overlay(
    zones: Sequence[RegulatoryZone],
    coordinate: Optional[Coordinate] = None,
) -> RegulatoryAnalysis:
    """Aggregate the zones overlapping a location into one regulatory verdict."""

    if not zones:
        if coordinate is not None:
            logger.debug(
                "No regulatory zones at (%.4f, %.4f); using neutral analysis",
                coordinate.latitude,
                coordinate.longitude,
            )
        return neutral_analysis()

    scores = [zone_score(zone) for zone in zones]
    overall_score = _round_half_up(sum(scores) / len(scores))

    incentives: List[str] = []
    restrictions: List[str] = []
    contacts: List[Dict[str, Optional[str]]] = []
    for zone in zones:
        incentives.extend(_zone_incentives(zone))
        restrictions.extend(_zone_restrictions(zone))
        if zone.contact.authority:
            contacts.append({"zone": zone.name, **zone.contact.to_dict()})

    shortest_approval = min(zone.approval_timeline_days for zone in zones)
    tier = regulatory_tier(overall_score)

    return RegulatoryAnalysis(
        overall_score=overall_score,
        tier=tier["level"],
        color=tier["color"],
        description=tier["description"],
        recommendations=tuple(tier["recommendations"][:MAX_RECOMMENDATIONS]),
        incentives=tuple(incentives[:MAX_INCENTIVES]),
        restrictions=tuple(restrictions[:MAX_RESTRICTIONS]),
        approval_timeline=f"{math.ceil(shortest_approval / 30)} months",
        approval_timeline_days=shortest_approval,
        key_contacts=tuple(contacts[:MAX_CONTACTS]),
        affected_zones=len(zones),
    )


# ============================================================================
# ZONE GEOMETRY
# ============================================================================


def boundary_contains(boundary: ZoneBoundary, coordinate: Coordinate) -> bool:
    """Edges and vertices count as inside; points in a hole do not."""

    return boundary.prepared.covers(Point(coordinate.longitude, coordinate.latitude))


def boundary_centroid(boundary: ZoneBoundary) -> Coordinate:
    centroid = boundary.geometry.centroid
    return Coordinate(centroid.y, centroid.x)


def _status_matches(zone: RegulatoryZone, status: Optional[ZoneStatus]) -> bool:
    return status is None or zone.status == status


def zones_containing(
    zones: Iterable[RegulatoryZone],
    coordinate: Coordinate,
    status: Optional[ZoneStatus] = ZoneStatus.ACTIVE,
) -> List[RegulatoryZone]:
    return [
        zone
        for zone in zones
        if _status_matches(zone, status) and boundary_contains(zone.boundary, coordinate)
    ]


def zones_within_radius(
    zones: Iterable[RegulatoryZone],
    centroid: Coordinate,
    radius_km: float,
    status: Optional[ZoneStatus] = ZoneStatus.ACTIVE,
) -> List[RegulatoryZone]:
    matches: List[RegulatoryZone] = []
    for zone in zones:
        if not _status_matches(zone, status):
            continue
        if boundary_contains(zone.boundary, centroid):
            matches.append(zone)
            continue
        zone_center = boundary_centroid(zone.boundary)
        if haversine(
            centroid.latitude, centroid.longitude, zone_center.latitude, zone_center.longitude
        ) <= radius_km:
            matches.append(zone)
    return matches


def zones_intersecting(
    zones: Iterable[RegulatoryZone],
    bounds: Bounds,
    status: Optional[ZoneStatus] = ZoneStatus.ACTIVE,
) -> List[RegulatoryZone]:
    """Zones whose boundary touches any part of the rectangle."""

    area = box(bounds.west, bounds.south, bounds.east, bounds.north)
    return [
        zone
        for zone in zones
        if _status_matches(zone, status) and zone.boundary.prepared.intersects(area)
    ]


# ============================================================================
# ZONE STATISTICS
# ============================================================================


def summarize_zones(zones: Iterable[RegulatoryZone]) -> Dict[str, Any]:
    """Counts and averages of active zones grouped by type and jurisdiction."""

    by_type: Dict[str, List[RegulatoryZone]] = defaultdict(list)
    by_jurisdiction: Dict[str, List[RegulatoryZone]] = defaultdict(list)
    total = 0
    for zone in zones:
        if zone.status != ZoneStatus.ACTIVE:
            continue
        total += 1
        by_type[zone.zone_type.value].append(zone)
        by_jurisdiction[zone.jurisdiction.value].append(zone)

    zone_types = [
        {
            "type": zone_type,
            "count": len(members),
            "avgApprovalTime": round(
                sum(zone.approval_timeline_days for zone in members) / len(members), 1
            ),
            "avgSubsidy": round(
                sum(zone.policies.subsidy_percent for zone in members) / len(members), 1
            ),
            "incentiveZones": sum(1 for zone in members if zone.policies.has_incentives),
            "fastTrackZones": sum(1 for zone in members if zone.policies.fast_track),
        }
        for zone_type, members in by_type.items()
    ]
    zone_types.sort(key=lambda entry: entry["count"], reverse=True)

    jurisdictions = [
        {
            "jurisdiction": jurisdiction,
            "count": len(members),
            "totalIncentiveZones": sum(1 for zone in members if zone.policies.has_incentives),
        }
        for jurisdiction, members in by_jurisdiction.items()
    ]

    return {"zoneTypes": zone_types, "jurisdictions": jurisdictions, "totalZones": total}


__all__ = [
    "analyze_overlay",
    "boundary_centroid",
    "boundary_contains",
    "neutral_analysis",
    "regulatory_tier",
    "summarize_zones",
    "zone_score",
    "zones_containing",
    "zones_intersecting",
    "zones_within_radius",
]
