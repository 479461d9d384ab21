"""Template guidance for when no language model is attached.

build_user_context() flattens a natal profile, user preferences and market
context into the grounding dict a content generator would consume.
fallback_guidance() renders that same grounding into short deterministic
messages.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from ..constants import UNKNOWN_SIGN, WEEKDAYS
from ..zodiac import get_sign, wealth_archetype
from .insights import comprehensive_insights, cosmic_alignment_score
from .natal import elemental_balance

DEFAULT_NAME = "Quantum Explorer"
DEFAULT_INTENTION = "wealth consciousness expansion"
DEFAULT_ARCHETYPE_LABEL = "The Seeker"


def _archetype(profile: dict[str, Any]) -> Optional[dict[str, Any]]:
    if profile.get("wealth_archetype"):
        return profile["wealth_archetype"]
    signs = [profile.get(k) for k in ("sun_sign", "moon_sign", "rising_sign")]
    if all(get_sign(s) for s in signs):
        return wealth_archetype(*signs)
    return None


def build_user_context(
    profile: dict[str, Any],
    preferences: Optional[dict[str, Any]] = None,
    market: Optional[dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Collect everything guidance text is grounded on.

    Args:
        profile: Natal profile dict.
        preferences: Saved user preferences (name, intention, risk_tolerance).
        market: Optional {"trend", "volatility"} market context.
        now: Moment used for the alignment score.

    Returns:
        Flat context dict, including comprehensive insights when the sun
        sign resolves.
    """
    preferences = preferences or {}
    market = market or {}
    trend = market.get("trend") or preferences.get("market_trend") or "neutral"

    sun_data = get_sign(profile.get("sun_sign"))
    moon_data = get_sign(profile.get("moon_sign"))
    rising_data = get_sign(profile.get("rising_sign"))
    archetype = _archetype(profile)

    insights = (
        comprehensive_insights(profile, {"trend": trend, **market}, preferences.get("risk_tolerance"))
        if sun_data else None
    )

    return {
        "name": preferences.get("name") or DEFAULT_NAME,
        "intention": preferences.get("intention") or DEFAULT_INTENTION,
        "sun_sign": profile.get("sun_sign") or UNKNOWN_SIGN,
        "moon_sign": profile.get("moon_sign") or UNKNOWN_SIGN,
        "rising_sign": profile.get("rising_sign") or UNKNOWN_SIGN,
        "archetype": archetype["archetype"] if archetype else DEFAULT_ARCHETYPE_LABEL,
        "strengths": list(archetype["strengths"]) if archetype else [],
        "wealth_style": sun_data["wealth_profile"]["style"] if sun_data else "balanced approach",
        "risk_tolerance": preferences.get("risk_tolerance") or "Moderate",
        "natural_risk": sun_data["wealth_profile"]["risk_tolerance"] if sun_data else "moderate",
        "current_transits": profile.get("current_transits") or {},
        "market_trend": trend,
        "sun_element": sun_data["element"] if sun_data else UNKNOWN_SIGN,
        "sun_modality": sun_data["modality"] if sun_data else UNKNOWN_SIGN,
        "sun_motivation": sun_data["personality"]["motivation"] if sun_data else "growth",
        "moon_element": moon_data["element"] if moon_data else UNKNOWN_SIGN,
        "rising_element": rising_data["element"] if rising_data else UNKNOWN_SIGN,
        "lucky_numbers": list(sun_data["lucky_numbers"]) if sun_data else [],
        "power_colors": list(sun_data["colors"]) if sun_data else [],
        "best_investments": list(sun_data["wealth_profile"]["best_investments"]) if sun_data else [],
        "wealth_challenges": list(sun_data["wealth_profile"]["challenges"]) if sun_data else [],
        "core_values": list(sun_data["personality"]["core_values"]) if sun_data else [],
        "cosmic_alignment": cosmic_alignment_score(profile, trend, now),
        "elemental_balance": elemental_balance(
            profile.get("sun_sign"), profile.get("moon_sign"), profile.get("rising_sign")
        ),
        "insights": insights,
    }


def _first_message(items: Optional[list[dict[str, Any]]]) -> Optional[str]:
    if items:
        return items[0]["message"]
    return None


def fallback_guidance(
    profile: dict[str, Any],
    preferences: Optional[dict[str, Any]] = None,
    market: Optional[dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Render deterministic guidance messages from the user context."""
    if now is None:
        now = datetime.now(timezone.utc)

    context = build_user_context(profile, preferences, market, now)
    insights = context["insights"] or {}
    weekly = insights.get("weekly") or {}
    sun_data = get_sign(context["sun_sign"])
    moon_data = get_sign(context["moon_sign"])

    daily = _first_message(insights.get("daily")) or (
        f"{context['name']}, as {context['archetype']}, your {context['sun_sign']} "
        f"{context['sun_element']} energy is powerful today. "
        + (sun_data["personality"]["motivation"] if sun_data else "Channel your inner strength into manifestation.")
    )
    market_text = _first_message(insights.get("wealth")) or (
        f"Market energies align with your {context['wealth_style']}. "
        + (sun_data["wealth_profile"]["money_mindset"] if sun_data else "Your approach resonates with current cycles.")
    )
    personal = (
        f'Your intention of "{context["intention"]}" is supported by your '
        f"{context['moon_sign']} {context['moon_element']} moon. "
        + (moon_data["personality"]["motivation"] if moon_data else "Trust your intuition for timing.")
    )
    astro_weather = _first_message(insights.get("transits")) or (
        f"{context['sun_sign']} sun ({context['sun_element']} {context['sun_modality']}) merges with "
        f"{context['current_transits'].get('sun') or 'cosmic'} energies. "
        + (sun_data["wealth_profile"]["risk_tolerance"] if sun_data else "Favorable for your risk profile.")
    )
    quantum_field = weekly.get("overview") or (
        "The field is receptive to your unique frequency. "
        "Abundance codes are activating through your elemental balance."
    )

    lucky = weekly.get("lucky_days")
    if not lucky:
        lucky = [WEEKDAYS[n % 5] for n in context["lucky_numbers"]] or ["Wednesday"]

    focus = (
        (weekly.get("focus_areas") or [None])[0]
        or (context["core_values"] or [None])[0]
        or "Wealth consciousness"
    )

    return {
        "daily": daily,
        "market": market_text,
        "personal": personal,
        "astro_weather": astro_weather,
        "quantum_field": quantum_field,
        "lucky_days": lucky,
        "focus_area": focus,
        "cosmic_alignment": context["cosmic_alignment"],
        "elemental_balance": context["elemental_balance"],
        "timestamp": now.isoformat(),
    }
