"""Tests for runtime settings and the static scoring tables."""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[2]))

from backend.config import (
    GRID_REFERENCE_POINTS,
    MAJOR_CITIES,
    MAX_GRID_RESOLUTION,
    REGULATORY_TIERS,
    SUITABILITY_TIERS,
)
from core.config import Settings


# ============================================================================
# Test Settings
# ============================================================================


class TestSettings:
    """Environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SCORING_MODE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.scoring_mode == "three_factor"
        assert settings.random_seed is None
        assert settings.fallback_demand_distance_km == 100.0
        assert settings.max_grid_resolution == 8
        assert settings.ranked_sites_limit == 10

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SCORING_MODE", "four-factor")
        monkeypatch.setenv("RANDOM_SEED", "123")
        monkeypatch.setenv("AREA_WORKERS", "4")
        settings = Settings(_env_file=None)
        assert settings.scoring_mode == "four_factor"
        assert settings.random_seed == 123
        assert settings.area_workers == 4

    def test_field_names_accepted(self):
        settings = Settings(_env_file=None, random_seed=9, scoring_mode="FOUR_FACTOR")
        assert settings.random_seed == 9
        assert settings.scoring_mode == "four_factor"

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, scoring_mode="weighted")

    def test_resolution_capped(self):
        settings = Settings(_env_file=None, max_grid_resolution=50)
        assert settings.max_grid_resolution == MAX_GRID_RESOLUTION

    @pytest.mark.parametrize("field", ["max_grid_resolution", "area_workers", "ranked_sites_limit"])
    def test_non_positive_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})


# ============================================================================
# Test Static Tables
# ============================================================================


class TestTables:
    """Reference tables used by the factor generators and tiers."""

    def test_ten_grid_hubs(self):
        assert len(GRID_REFERENCE_POINTS) == 10

    def test_eight_major_cities(self):
        assert len(MAJOR_CITIES) == 8
        assert all(city.weight > 0 for city in MAJOR_CITIES)

    @pytest.mark.parametrize("table", [SUITABILITY_TIERS, REGULATORY_TIERS])
    def test_tiers_descending_and_open_ended(self, table):
        bounds = [row[0] for row in table]
        assert bounds == sorted(bounds, reverse=True)
        assert bounds[-1] == float("-inf")
