"""Tests for the zodiac reference database and its scoring helpers."""

import pytest

from cosmic_wealth_mcp.constants import SIGN_ORDER
from cosmic_wealth_mcp.zodiac import (
    DEFAULT_ARCHETYPE,
    HOUSE_MEANINGS,
    ZODIAC_DATABASE,
    compatibility,
    cosmic_weather,
    get_sign,
    is_risk_aligned,
    risk_level,
    wealth_archetype,
)


class TestDatabase:
    """Shape of the static sign table."""

    def test_twelve_signs_in_order(self):
        assert list(ZODIAC_DATABASE) == SIGN_ORDER

    def test_houses_are_unique(self):
        houses = sorted(record["house"] for record in ZODIAC_DATABASE.values())
        assert houses == list(range(1, 13))

    def test_three_signs_per_element(self):
        for element in ("Fire", "Earth", "Air", "Water"):
            count = sum(1 for r in ZODIAC_DATABASE.values() if r["element"] == element)
            assert count == 3

    def test_four_signs_per_modality(self):
        for modality in ("Cardinal", "Fixed", "Mutable"):
            count = sum(1 for r in ZODIAC_DATABASE.values() if r["modality"] == modality)
            assert count == 4

    def test_relationship_lists_name_real_signs(self):
        for record in ZODIAC_DATABASE.values():
            for key in ("best_matches", "challenging_matches", "business_partners"):
                for sign in record["relationships"][key]:
                    assert sign in ZODIAC_DATABASE

    def test_every_sign_has_lucky_numbers(self):
        for record in ZODIAC_DATABASE.values():
            assert record["lucky_numbers"]
            assert record["wealth_profile"]["best_investments"]
            assert record["personality"]["core_values"]

    def test_house_meanings_cover_all_houses(self):
        assert sorted(HOUSE_MEANINGS) == list(range(1, 13))

    def test_get_sign_unknown(self):
        assert get_sign("Unknown") is None
        assert get_sign(None) is None
        assert get_sign("Ophiuchus") is None
        assert get_sign("Aries")["symbol"] == "♈"


class TestCompatibility:
    """compatibility() scoring."""

    def test_aries_leo_clamped_to_100(self):
        # same element +30, mutual best match +30, clamped
        assert compatibility("Aries", "Leo") == 100

    def test_aries_cancer(self):
        # 50 - 10 (Fire/Water) - 15 - 15 (mutually challenging) + 10 (both Cardinal)
        assert compatibility("Aries", "Cancer") == 20

    @pytest.mark.parametrize("sign", SIGN_ORDER)
    def test_self_compatibility_is_high(self, sign):
        assert compatibility(sign, sign) >= 90

    def test_symmetric(self):
        for a in SIGN_ORDER:
            for b in SIGN_ORDER:
                assert compatibility(a, b) == compatibility(b, a)

    def test_in_range(self):
        for a in SIGN_ORDER:
            for b in SIGN_ORDER:
                assert 0 <= compatibility(a, b) <= 100

    def test_unknown_sign_is_neutral(self):
        assert compatibility("Unknown", "Aries") == 50
        assert compatibility("Aries", "Unknown") == 50
        assert compatibility("Unknown", "Unknown") == 50


class TestCosmicWeather:
    """cosmic_weather() classification."""

    def test_highly_favorable_with_emotional_caution(self):
        weather = cosmic_weather("Aries", "Leo", "Cancer")

        assert weather["energy"] == "Highly Favorable"
        assert "Emotional volatility" in weather["cautions"]
        assert "Stay grounded" in weather["advice"]

    def test_challenging(self):
        weather = cosmic_weather("Aries", "Cancer", "Aries")

        assert weather["energy"] == "Challenging"
        # Aries/Aries = 90, so the moon adds intuition
        assert "Intuitive insights" in weather["opportunities"]

    def test_unknown_user_sign_is_favorable(self):
        weather = cosmic_weather("Unknown", "Leo", "Cancer")

        assert weather["energy"] == "Favorable"
        assert set(weather) == {"energy", "advice", "opportunities", "cautions", "lucky_timing"}

    def test_returns_fresh_lists(self):
        first = cosmic_weather("Aries", "Leo", "Cancer")
        first["opportunities"].append("mutated")
        second = cosmic_weather("Aries", "Leo", "Cancer")
        assert "mutated" not in second["opportunities"]


class TestWealthArchetype:
    """wealth_archetype() synthesis."""

    def test_element_majority(self):
        assert wealth_archetype("Aries", "Leo", "Cancer")["archetype"] == "Pioneering Wealth Warrior"
        assert wealth_archetype("Taurus", "Virgo", "Aries")["archetype"] == "Sovereign Wealth Builder"
        assert wealth_archetype("Gemini", "Libra", "Aries")["archetype"] == "Quantum Wealth Strategist"
        assert wealth_archetype("Cancer", "Pisces", "Aries")["archetype"] == "Intuitive Wealth Alchemist"

    def test_cardinal_majority(self):
        # Fire, Water, Earth with two Cardinal signs
        assert wealth_archetype("Aries", "Cancer", "Taurus")["archetype"] == "Wealth Initiative Leader"

    def test_fixed_majority(self):
        # Fire, Earth, Air with two Fixed signs
        assert wealth_archetype("Leo", "Taurus", "Gemini")["archetype"] == "Wealth Consolidation Master"

    def test_no_majority(self):
        archetype = wealth_archetype("Aries", "Taurus", "Gemini")

        assert archetype["archetype"] == "Adaptive Wealth Navigator"
        assert archetype["strengths"][:2] == ZODIAC_DATABASE["Aries"]["wealth_profile"]["strengths"][:2]
        assert archetype["opportunities"][2:] == ZODIAC_DATABASE["Gemini"]["wealth_profile"]["best_investments"][:2]

    def test_unknown_sign_gives_default(self):
        assert wealth_archetype("Aries", "Leo", "Unknown")["archetype"] == DEFAULT_ARCHETYPE


class TestRisk:
    """Risk label ordering."""

    def test_levels_ignore_explanation(self):
        assert risk_level("High - Willing to bet on the future") == risk_level("High")
        assert risk_level("Low") < risk_level("Moderate") < risk_level("Very High")

    def test_unknown_label_is_moderate(self):
        assert risk_level("Whatever") == risk_level("Moderate")
        assert risk_level(None) == risk_level("Moderate")

    def test_alignment_within_one_level(self):
        assert is_risk_aligned("High - Optimistic", "Moderate")
        assert not is_risk_aligned("Very High - Thrives on volatility", "Low")
