"""Pytest configuration and shared fixtures for backend tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from domain.siting.models import (  # noqa: E402
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


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# ============================================================================
# Helpers
# ============================================================================


def square_boundary(south, west, north, east):
    """Closed rectangular ring as a single-polygon boundary."""
    ring = (
        Coordinate(south, west),
        Coordinate(south, east),
        Coordinate(north, east),
        Coordinate(north, west),
        Coordinate(south, west),
    )
    return ZoneBoundary(polygons=((ring,),))


def make_zone(
    name="Test Zone",
    zone_type=ZoneType.INDUSTRIAL,
    boundary=None,
    policies=None,
    restrictions=None,
    approval_timeline_days=180,
    status=ZoneStatus.ACTIVE,
    contact=None,
    jurisdiction=Jurisdiction.STATE,
):
    return RegulatoryZone(
        name=name,
        zone_type=zone_type,
        jurisdiction=jurisdiction,
        boundary=boundary or square_boundary(22.0, 72.0, 24.0, 74.0),
        policies=policies or ZonePolicies(),
        restrictions=restrictions or ZoneRestrictions(),
        approval_timeline_days=approval_timeline_days,
        status=status,
        contact=contact or ZoneContact(),
    )


# ============================================================================
# Shared Fixtures
# ============================================================================


@pytest.fixture
def rng():
    """Seeded generator so synthetic factors are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def ahmedabad():
    return Coordinate(23.0225, 72.5714)


@pytest.fixture
def demand_centers():
    """Gujarat demand centres in scan order."""
    return [
        DemandCenterRef(
            name="Kandla Port Refinery",
            annual_demand=120000,
            category=DemandCategory.INDUSTRIAL,
            coordinate=Coordinate(23.0333, 70.2167),
        ),
        DemandCenterRef(
            name="Ahmedabad Transit Depot",
            annual_demand=8000,
            category=DemandCategory.TRANSPORT,
            coordinate=Coordinate(23.0300, 72.5800),
        ),
        DemandCenterRef(
            name="Vadodara Fertiliser Complex",
            annual_demand=60000,
            category=DemandCategory.INDUSTRIAL,
            coordinate=Coordinate(22.3072, 73.1812),
        ),
    ]


@pytest.fixture
def favorable_zone():
    """Hydrogen priority zone around Ahmedabad with every incentive enabled."""
    return make_zone(
        name="Gujarat Hydrogen Valley",
        zone_type=ZoneType.HYDROGEN_PRIORITY,
        boundary=square_boundary(22.5, 72.0, 23.5, 73.0),
        policies=ZonePolicies(
            has_incentives=True,
            subsidy_percent=30,
            fast_track=True,
            land_support=True,
            infra_support=True,
        ),
        approval_timeline_days=60,
        contact=ZoneContact(
            authority="Gujarat Energy Development Agency",
            email="info@geda.example",
            phone="+91-79-0000-0000",
            website="https://geda.example",
        ),
    )


@pytest.fixture
def restricted_zone():
    """Restricted coastal zone with environmental and seasonal limits."""
    return make_zone(
        name="Coastal Wetland Reserve",
        zone_type=ZoneType.RESTRICTED,
        boundary=square_boundary(22.8, 72.3, 23.2, 72.8),
        restrictions=ZoneRestrictions(
            max_capacity_mw=50,
            environmental_limitations=frozenset(
                {
                    EnvironmentalLimitation.WATER_USAGE_LIMIT,
                    EnvironmentalLimitation.NOISE_RESTRICTION,
                }
            ),
            seasonal_restrictions=(
                SeasonalRestriction(months=("jun", "jul", "aug"), reason="Monsoon nesting"),
            ),
        ),
        approval_timeline_days=400,
        jurisdiction=Jurisdiction.CENTRAL,
    )


@pytest.fixture
def snapshot_payload():
    """JSON snapshot in the document-store shape (GeoJSON ``[lng, lat]``)."""
    return {
        "demandCenters": [
            {
                "name": "Ahmedabad Transit Depot",
                "location": {"type": "Point", "coordinates": [72.58, 23.03]},
                "demand": 8000,
                "type": "transport",
            },
            {
                "name": "Kandla Port Refinery",
                "location": {"type": "Point", "coordinates": [70.2167, 23.0333]},
                "demand": 120000,
                "type": "industrial",
            },
        ],
        "regulatoryZones": [
            {
                "name": "Gujarat Hydrogen Valley",
                "type": "hydrogen-priority-zone",
                "jurisdiction": "state",
                "boundary": {
                    "type": "Polygon",
                    "coordinates": [
                        [[72.0, 22.5], [73.0, 22.5], [73.0, 23.5], [72.0, 23.5], [72.0, 22.5]]
                    ],
                },
                "policies": {
                    "hydrogenIncentives": True,
                    "subsidyPercentage": 30,
                    "fastTrackApproval": True,
                },
                "restrictions": {
                    "maxCapacity": None,
                    "environmentalLimitations": ["water-usage-limit"],
                    "seasonalRestrictions": [],
                },
                "approvalTimeline": 90,
                "contactInfo": {"authority": "GEDA", "email": "info@geda.example"},
                "effectiveDate": "2023-01-01",
                "status": "active",
            },
            {
                "name": "Proposed Port Zone",
                "type": "port-authority",
                "jurisdiction": "port-authority",
                "boundary": {
                    "type": "Polygon",
                    "coordinates": [
                        [[70.0, 22.9], [70.4, 22.9], [70.4, 23.2], [70.0, 23.2], [70.0, 22.9]]
                    ],
                },
                "approvalTimeline": 200,
                "effectiveDate": "2025-06-01",
                "status": "proposed",
            },
        ],
    }
