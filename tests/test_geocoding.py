"""Tests for city lookup and timezone resolution."""

import pytest

from cosmic_wealth_mcp.utils.geocoding import (
    DEFAULT_COORDINATES,
    get_timezone_for_coords,
    resolve_city,
)


class TestGetTimezoneForCoords:
    """Timezone lookup from coordinates."""

    def test_london(self):
        assert get_timezone_for_coords(51.5074, -0.1278) == "Europe/London"

    def test_new_york(self):
        assert get_timezone_for_coords(40.7128, -74.0060) == "America/New_York"

    def test_tokyo(self):
        assert get_timezone_for_coords(35.6762, 139.6503) == "Asia/Tokyo"


class TestResolveCity:
    """Free-text birth place resolution."""

    def test_exact_match(self):
        location = resolve_city("London")

        assert location["matched"] is True
        assert location["latitude"] == pytest.approx(51.5074)
        assert location["timezone"] == "Europe/London"

    def test_substring_match(self):
        location = resolve_city("New York, NY")

        assert location["matched"] is True
        assert location["name"] == "New York, NY"
        assert location["longitude"] == pytest.approx(-74.0060)

    def test_case_insensitive(self):
        assert resolve_city("  TOKYO ")["timezone"] == "Asia/Tokyo"

    def test_unknown_place_uses_default(self):
        location = resolve_city("Atlantis")

        assert location["matched"] is False
        assert (location["latitude"], location["longitude"]) == DEFAULT_COORDINATES

    @pytest.mark.parametrize("empty", [None, "", "   "])
    def test_empty(self, empty):
        assert resolve_city(empty) is None
