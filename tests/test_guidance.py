"""Tests for template guidance."""

from datetime import datetime, timezone

import pytest

from cosmic_wealth_mcp.utils.guidance import build_user_context, fallback_guidance
from cosmic_wealth_mcp.utils.insights import weekly_forecast
from cosmic_wealth_mcp.utils.natal import calculate_natal_profile, natal_error_payload

NOW = datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def profile():
    return calculate_natal_profile("1993-12-30", "14:30", now=NOW)


class TestBuildUserContext:

    def test_defaults_for_empty_profile(self):
        context = build_user_context(natal_error_payload(ValueError("x")), now=NOW)

        assert context["name"] == "Quantum Explorer"
        assert context["archetype"] == "The Seeker"
        assert context["sun_element"] == "Unknown"
        assert context["cosmic_alignment"] == 50
        assert context["insights"] is None

    def test_full_profile(self, profile):
        context = build_user_context(
            profile,
            {"name": "Ada", "intention": "financial freedom", "risk_tolerance": "Low"},
            {"trend": "bearish"},
            now=NOW,
        )

        assert context["name"] == "Ada"
        assert context["sun_element"] == "Earth"
        assert context["moon_element"] == "Water"
        assert context["rising_element"] == "Air"
        assert context["archetype"] == "Wealth Initiative Leader"
        assert context["market_trend"] == "bearish"
        assert context["elemental_balance"] == {"Fire": 0, "Earth": 1, "Air": 1, "Water": 1}
        assert set(context["insights"]) == {"daily", "wealth", "transits", "weekly"}

    def test_preference_trend_used_without_market(self, profile):
        context = build_user_context(profile, {"market_trend": "bullish"}, now=NOW)
        assert context["market_trend"] == "bullish"


class TestFallbackGuidance:

    def test_unknown_profile(self):
        guidance = fallback_guidance(natal_error_payload(ValueError("x")), now=NOW)

        assert guidance["daily"].startswith("Quantum Explorer, as The Seeker")
        assert guidance["personal"] == (
            'Your intention of "wealth consciousness expansion" is supported by your '
            "Unknown Unknown moon. Trust your intuition for timing."
        )
        assert guidance["lucky_days"] == ["Wednesday"]
        assert guidance["focus_area"] == "Wealth consciousness"
        assert guidance["cosmic_alignment"] == 50

    def test_full_profile(self, profile):
        guidance = fallback_guidance(profile, {"intention": "a paid-off house"}, now=NOW)
        weekly = weekly_forecast(profile)

        assert guidance["lucky_days"] == weekly["lucky_days"]
        assert guidance["focus_area"] == weekly["focus_areas"][0]
        assert guidance["quantum_field"] == weekly["overview"]
        assert '"a paid-off house"' in guidance["personal"]
        assert "Cancer Water moon" in guidance["personal"]
        assert 0 <= guidance["cosmic_alignment"] <= 100
        assert guidance["timestamp"] == NOW.isoformat()

    def test_deterministic(self, profile):
        assert fallback_guidance(profile, now=NOW) == fallback_guidance(profile, now=NOW)
