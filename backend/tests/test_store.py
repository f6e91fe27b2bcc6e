"""Tests for domain/siting/store.py snapshot parsing and spatial lookups."""

import sys
import json
from datetime import date
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[2]))

from domain.siting.models import (
    Bounds,
    Coordinate,
    DemandCategory,
    EnvironmentalLimitation,
    Jurisdiction,
    ZoneStatus,
    ZoneType,
)
from domain.siting.store import (
    SitingDataStore,
    parse_demand_center,
    parse_regulatory_zone,
)


@pytest.fixture
def store(snapshot_payload):
    store = SitingDataStore()
    store.load_payload(snapshot_payload)
    return store


# ============================================================================
# Test Parsing
# ============================================================================


class TestParseDemandCenter:
    """GeoJSON ``[lng, lat]`` positions become coordinates."""

    def test_basic(self, snapshot_payload):
        center = parse_demand_center(snapshot_payload["demandCenters"][0])
        assert center.name == "Ahmedabad Transit Depot"
        assert center.coordinate == Coordinate(23.03, 72.58)
        assert center.annual_demand == 8000
        assert center.category is DemandCategory.TRANSPORT

    def test_missing_demand_defaults_to_zero(self):
        center = parse_demand_center({
            "name": "Depot",
            "location": {"type": "Point", "coordinates": [72.0, 23.0]},
            "type": "mixed",
        })
        assert center.annual_demand == 0.0

    def test_invalid_location_rejected(self):
        with pytest.raises(ValueError):
            parse_demand_center({
                "name": "Nowhere",
                "location": {"type": "Point", "coordinates": [200.0, 23.0]},
            })

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            parse_demand_center({
                "name": "Depot",
                "location": {"type": "Point", "coordinates": [72.0, 23.0]},
                "type": "agricultural",
            })


class TestParseRegulatoryZone:
    """Zone documents use camelCase policy keys."""

    def test_full_zone(self, snapshot_payload):
        zone = parse_regulatory_zone(snapshot_payload["regulatoryZones"][0])
        assert zone.zone_type is ZoneType.HYDROGEN_PRIORITY
        assert zone.jurisdiction is Jurisdiction.STATE
        assert zone.policies.has_incentives
        assert zone.policies.subsidy_percent == 30.0
        assert zone.policies.fast_track
        assert not zone.policies.land_support
        assert zone.restrictions.environmental_limitations == frozenset(
            {EnvironmentalLimitation.WATER_USAGE_LIMIT}
        )
        assert zone.restrictions.max_capacity_mw is None
        assert zone.approval_timeline_days == 90
        assert zone.contact.authority == "GEDA"
        assert zone.effective_date == date(2023, 1, 1)
        assert zone.expiry_date is None

    def test_defaults(self, snapshot_payload):
        zone = parse_regulatory_zone(snapshot_payload["regulatoryZones"][1])
        assert zone.status is ZoneStatus.PROPOSED
        assert zone.policies.subsidy_percent == 0.0
        assert zone.policies.environmental_clearance_required
        assert zone.restrictions.seasonal_restrictions == ()
        assert zone.contact.authority is None

    def test_datetime_string_accepted(self, snapshot_payload):
        payload = dict(snapshot_payload["regulatoryZones"][0])
        payload["effectiveDate"] = "2024-03-15T00:00:00.000Z"
        assert parse_regulatory_zone(payload).effective_date == date(2024, 3, 15)

    def test_invalid_subsidy_rejected(self, snapshot_payload):
        payload = dict(snapshot_payload["regulatoryZones"][0])
        payload["policies"] = {"subsidyPercentage": 150}
        with pytest.raises(ValueError):
            parse_regulatory_zone(payload)


# ============================================================================
# Test Store Lookups
# ============================================================================


class TestSitingDataStore:
    """Snapshot loading and spatial queries."""

    def test_counts(self, store):
        assert len(store.demand_centers) == 2
        assert len(store.zones) == 2

    def test_from_file(self, tmp_path, snapshot_payload):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(snapshot_payload), encoding="utf-8")
        loaded = SitingDataStore.from_file(path)
        assert [center.name for center in loaded.demand_centers] == [
            "Ahmedabad Transit Depot",
            "Kandla Port Refinery",
        ]

    def test_reload_replaces_snapshot(self, store):
        store.load_payload({"demandCenters": [], "regulatoryZones": []})
        assert store.demand_centers == ()
        assert store.zones == ()

    def test_nearest_demand_center(self, store, ahmedabad):
        distance_km, center = store.nearest_demand_center(ahmedabad)
        assert center.name == "Ahmedabad Transit Depot"
        assert distance_km < 2.0

    def test_nearest_on_empty_store(self, ahmedabad):
        assert SitingDataStore().nearest_demand_center(ahmedabad) is None

    def test_demand_centers_near_sorted_and_filtered(self, store, ahmedabad):
        near = store.demand_centers_near(ahmedabad, radius_km=100)
        assert [center.name for center in near] == ["Ahmedabad Transit Depot"]

        wide = store.demand_centers_near(Coordinate(23.0, 71.2), radius_km=500)
        assert [center.name for center in wide] == [
            "Kandla Port Refinery",
            "Ahmedabad Transit Depot",
        ]

    def test_demand_centers_near_limit(self, store, ahmedabad):
        assert len(store.demand_centers_near(ahmedabad, radius_km=1000, limit=1)) == 1

    def test_zones_containing_active_only(self, store, ahmedabad):
        assert [zone.name for zone in store.zones_containing(ahmedabad)] == [
            "Gujarat Hydrogen Valley"
        ]
        # Inside the proposed port zone only.
        assert store.zones_containing(Coordinate(23.0, 70.2)) == []

    def test_zones_near(self, store):
        assert len(store.zones_near(Coordinate(23.0, 72.5), 50.0)) == 1

    def test_zones_intersecting(self, store):
        # Rectangle overlaps only the south-west corner of the valley.
        corner = Bounds(north=22.6, south=22.0, east=72.2, west=71.5)
        assert [zone.name for zone in store.zones_intersecting(corner)] == [
            "Gujarat Hydrogen Valley"
        ]
        # Proposed zones are never used for scoring.
        port = Bounds(north=23.3, south=23.1, east=70.3, west=70.1)
        assert store.zones_intersecting(port) == []

    def test_all_zones_filters(self, store):
        assert [zone.name for zone in store.all_zones()] == ["Gujarat Hydrogen Valley"]
        assert [zone.name for zone in store.all_zones(status="proposed")] == [
            "Proposed Port Zone"
        ]
        assert store.all_zones(zone_type="industrial-zone") == []
        assert len(store.all_zones(jurisdiction="state")) == 1
        assert len(store.all_zones(status=None)) == 2
