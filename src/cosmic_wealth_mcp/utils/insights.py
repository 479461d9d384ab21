"""Insight synthesis.

Turns a natal profile (as returned by calculate_natal_profile) plus optional
market context into structured, deterministic insight data: the cosmic
alignment score, a weekly forecast and typed daily/wealth/transit insights.

Nothing here is stateful. For a fixed profile, market context and `now`
every function returns the same result.
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Optional

from ..constants import UNKNOWN_SIGN, WEEKDAYS
from ..zodiac import (
    CHALLENGING_ELEMENTS,
    DEFAULT_ARCHETYPE,
    HARMONIOUS_ELEMENTS,
    get_sign,
    is_risk_aligned,
    wealth_archetype,
)


class InsightError(Exception):
    """Raised when insight input is structurally unusable."""
    pass


ELEMENT_MODIFIERS: dict[str, str] = {
    "Fire": "with bold initiative",
    "Earth": "with practical steps",
    "Air": "through communication",
    "Water": "using intuition",
}

ELEMENT_LUCKY_DAYS: dict[str, list[str]] = {
    "Fire": ["Tuesday", "Thursday", "Sunday"],
    "Earth": ["Wednesday", "Friday", "Saturday"],
    "Air": ["Monday", "Wednesday", "Friday"],
    "Water": ["Monday", "Thursday", "Saturday"],
}

DAY_HIGHLIGHTS: dict[str, list[str]] = {
    "Monday": [
        "Set wealth intentions aligned with your values",
        "Review portfolio with fresh perspective",
        "Plan your financial week",
    ],
    "Tuesday": [
        "Research new investment opportunities",
        "Connect with financial advisors or mentors",
        "Analyze market trends",
    ],
    "Wednesday": [
        "Make important financial communications",
        "Network for business opportunities",
        "Execute mid-week trades",
    ],
    "Thursday": [
        "Take decisive action on investments",
        "Review and adjust strategies",
        "Focus on wealth expansion",
    ],
    "Friday": [
        "Complete financial transactions",
        "Celebrate weekly wins",
        "Prepare for weekend planning",
    ],
    "Saturday": [
        "Reflect on financial goals",
        "Engage in wealth-building education",
        "Connect with abundance mindset",
    ],
    "Sunday": [
        "Plan for the upcoming week",
        "Set new financial intentions",
        "Practice gratitude for current abundance",
    ],
}

GENERIC_WEEKLY_FORECAST: dict[str, Any] = {
    "overview": "This week brings unique opportunities for growth and transformation.",
    "daily_highlights": {
        "Monday": "Set intentions",
        "Tuesday": "Gather information",
        "Wednesday": "Make connections",
        "Thursday": "Take action",
        "Friday": "Review progress",
        "Saturday": "Relax and recharge",
        "Sunday": "Plan ahead",
    },
    "opportunities": ["Personal growth", "New connections", "Learning"],
    "challenges": ["Staying focused", "Managing energy"],
    "lucky_days": ["Wednesday", "Friday"],
    "focus_areas": ["Self-care", "Planning", "Relationships"],
}

MOON_PHASE_INSIGHTS: dict[str, dict[str, Any]] = {
    "New Moon": {
        "title": "New Moon - Seeding Intentions",
        "message": "New Moon energy supports new beginnings. Plant seeds for future wealth.",
        "advice": [
            "Start new investment strategies",
            "Set financial intentions for the lunar month",
            "Research new opportunities",
            "Begin accumulation phases",
        ],
        "timing": "Next 3 days",
        "confidence": 88,
        "areas": ["New Beginnings", "Planning", "Intentions"],
    },
    "First Quarter": {
        "title": "First Quarter Moon - Taking Action",
        "message": "First Quarter Moon brings decision points. Take action on your plans.",
        "advice": [
            "Make decisive investment moves",
            "Overcome obstacles to your goals",
            "Adjust strategies as needed",
            "Push through resistance",
        ],
        "timing": "Next 2-3 days",
        "confidence": 82,
        "areas": ["Action", "Decisions", "Challenges"],
    },
    "Full Moon": {
        "title": "Full Moon - Illumination & Harvest",
        "message": "Full Moon illuminates results. Time to harvest gains or release losses.",
        "advice": [
            "Review portfolio performance",
            "Take profits on successful trades",
            "Release underperforming assets",
            "Celebrate achievements",
        ],
        "timing": "Peak energy today",
        "confidence": 90,
        "areas": ["Culmination", "Release", "Awareness"],
    },
    "Last Quarter": {
        "title": "Last Quarter Moon - Release & Reflect",
        "message": "Last Quarter Moon supports letting go and preparing for renewal.",
        "advice": [
            "Clean up your portfolio",
            "Close out losing positions",
            "Reflect on lessons learned",
            "Prepare for new cycle",
        ],
        "timing": "Next 2-3 days",
        "confidence": 78,
        "areas": ["Release", "Reflection", "Preparation"],
    },
}


def _insight(
    kind: str,
    title: str,
    message: str,
    advice: list[str],
    timing: str,
    confidence: int,
    areas: list[str],
) -> dict[str, Any]:
    return {
        "type": kind,
        "title": title,
        "message": message,
        "advice": advice,
        "timing": timing,
        "confidence": confidence,
        "areas": areas,
    }


def _require_profile(profile: Any) -> dict[str, Any]:
    if not isinstance(profile, dict):
        raise InsightError(f"Profile must be a mapping, got {type(profile).__name__}")
    return profile


def _sign_name(profile: dict[str, Any], key: str) -> str:
    return profile.get(key) or UNKNOWN_SIGN


# ---------------------------------------------------------------------------
# Weekly forecast
# ---------------------------------------------------------------------------

def lucky_days(element: str, lucky_number: int, limit: int = 3) -> list[str]:
    """Two element days plus the weekday picked by the first lucky number."""
    days = list(ELEMENT_LUCKY_DAYS.get(element, [])[:2])
    number_day = WEEKDAYS[(lucky_number - 1) % 7]
    if number_day not in days:
        days.append(number_day)
    return days[:limit]


def day_highlight(element: str, day: str, index: int) -> str:
    pool = DAY_HIGHLIGHTS.get(day, ["Focus on your priorities"])
    selected = pool[index % len(pool)]
    return f"{selected} {ELEMENT_MODIFIERS.get(element, '')}".strip()


def weekly_forecast(
    profile: dict[str, Any],
    cosmic_weather: Optional[dict[str, Any]] = None,
    lucky_day_limit: int = 3,
) -> dict[str, Any]:
    """Build the seven-day forecast for a profile.

    Args:
        profile: Natal profile dict; only sun_sign and moon_sign are read.
        cosmic_weather: Optional weather dict whose advice is appended to the
            overview. Defaults to profile["cosmic_weather"] when present.
        lucky_day_limit: Maximum number of lucky days returned.

    Returns:
        Dict with overview, daily_highlights, opportunities, challenges,
        lucky_days and focus_areas. An unresolved sun gives the generic
        forecast.
    """
    profile = _require_profile(profile)
    sun_data = get_sign(profile.get("sun_sign"))
    moon_data = get_sign(profile.get("moon_sign"))

    if sun_data is None:
        return copy.deepcopy(GENERIC_WEEKLY_FORECAST)

    if cosmic_weather is None:
        cosmic_weather = profile.get("cosmic_weather") or {}

    element = sun_data["element"]
    highlights = {
        day: day_highlight(element, day, index)
        for index, day in enumerate(WEEKDAYS)
    }
    advice = cosmic_weather.get("advice") or "Trust your natural rhythms."

    return {
        "overview": (
            f"This week, your {sun_data['name']} sun channels {element} energy toward "
            f"{sun_data['personality']['motivation'].lower()}. {advice}"
        ),
        "daily_highlights": highlights,
        "opportunities": [
            *sun_data["wealth_profile"]["strengths"][:2],
            f"{element} element activities",
            "Wealth building through " + sun_data["wealth_profile"]["style"].lower(),
        ],
        "challenges": [
            *[f"Managing {c.lower()}" for c in sun_data["personality"]["challenges"][:2]],
            "Balancing intuition with logic",
        ],
        "lucky_days": lucky_days(element, sun_data["lucky_numbers"][0], lucky_day_limit),
        "focus_areas": [
            sun_data["personality"]["core_values"][0],
            "Financial " + sun_data["wealth_profile"]["best_investments"][0].lower(),
            f"Emotional {moon_data['personality']['keywords'][0].lower()}" if moon_data else "Inner balance",
            "Wealth consciousness",
        ],
    }


# ---------------------------------------------------------------------------
# Cosmic alignment
# ---------------------------------------------------------------------------

def cosmic_alignment_score(
    profile: dict[str, Any],
    market_trend: Optional[str] = "neutral",
    now: Optional[datetime] = None,
) -> int:
    """Score how well a profile lines up with today's sky and market, 0-100.

    Starts at 50. Resolved signs, a non-generic archetype, element focus or
    spread, market trend against natural risk, transits and a lucky weekday
    add or subtract from there. An all-Unknown profile with no transit data
    scores exactly the base.
    """
    profile = _require_profile(profile)
    sun = _sign_name(profile, "sun_sign")
    moon = _sign_name(profile, "moon_sign")
    rising = _sign_name(profile, "rising_sign")
    sun_data = get_sign(sun)
    moon_data = get_sign(moon)
    rising_data = get_sign(rising)

    score = 50

    if sun_data:
        score += 15
    if moon_data:
        score += 15
    if rising_data:
        score += 10

    archetype = (profile.get("wealth_archetype") or wealth_archetype(sun, moon, rising))["archetype"]
    if archetype != DEFAULT_ARCHETYPE:
        score += 10

    elements = {d["element"] for d in (sun_data, moon_data, rising_data) if d}
    resolved = sum(1 for d in (sun_data, moon_data, rising_data) if d)
    if resolved == 3 and len(elements) == 1:
        score += 5
    if len(elements) == 3:
        score += 8

    natural_risk = sun_data["wealth_profile"]["risk_tolerance"] if sun_data else ""
    trend = (market_trend or "neutral").lower()
    if trend == "bullish" and "High" in natural_risk:
        score += 15
    if trend == "bearish" and "Low" in natural_risk:
        score += 10
    if trend == "neutral" and "Moderate" in natural_risk:
        score += 12

    transits = profile.get("personal_transits") or {}
    if transits.get("sun_return"):
        score += 20
    if transits.get("moon_phase") == "New Moon":
        score += 10
    if transits.get("moon_phase") == "Full Moon":
        score += 8
    if transits.get("mercury_retrograde"):
        score -= 5

    if sun_data:
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        today = WEEKDAYS[now.weekday()]
        if today in weekly_forecast(profile)["lucky_days"]:
            score += 10

    return max(0, min(100, score))


# ---------------------------------------------------------------------------
# Daily insights
# ---------------------------------------------------------------------------

def element_relation(element_a: str, element_b: str) -> str:
    if element_a == element_b:
        return "harmonious"
    pair = frozenset({element_a, element_b})
    if pair in HARMONIOUS_ELEMENTS:
        return "harmonious"
    if pair in CHALLENGING_ELEMENTS:
        return "challenging"
    return "neutral"


def _solar_message(sign: str, transit_sun: str) -> str:
    data = get_sign(sign)
    transit = get_sign(transit_sun)
    if not data or not transit:
        return "Your solar energy is unique today. Stay aligned with your core values."

    relation = element_relation(data["element"], transit["element"])
    if relation == "harmonious":
        return (
            f"The {transit_sun} Sun harmonizes with your {sign} nature, enhancing your "
            f"{data['personality']['strengths'][0].lower()} qualities. {data['personality']['motivation']}"
        )
    if relation == "challenging":
        return (
            f"The {transit_sun} Sun challenges your {sign} nature. Use this tension creatively "
            f"to overcome {data['personality']['challenges'][0].lower()} tendencies."
        )
    return (
        f"The {transit_sun} Sun brings {transit['element']} energy to your {sign} "
        f"{data['element']} nature. Balance is key today."
    )


def _solar_advice(sign: str) -> list[str]:
    data = get_sign(sign)
    if not data:
        return ["Trust your instincts", "Stay centered", "Be authentic"]

    advice = {
        "Fire": ["Channel enthusiasm into concrete actions", "Lead with confidence but stay humble"],
        "Earth": ["Focus on practical, tangible results", "Build slowly but steadily toward goals"],
        "Air": ["Communicate your ideas clearly", "Network and exchange information"],
        "Water": ["Trust your intuition in decisions", "Protect your emotional energy"],
    }[data["element"]]
    return advice + [f"Leverage your {data['personality']['strengths'][0].lower()} nature"]


def _best_timing(sign: str) -> str:
    data = get_sign(sign)
    if not data:
        return "Trust your natural rhythm"
    return {
        "Fire": "Morning to early afternoon - high energy period",
        "Earth": "Midday - steady productive hours",
        "Air": "When mentally fresh - varies by day",
        "Water": "Evening to night - intuitive hours",
    }.get(data["element"], "Follow your natural rhythm")


def daily_insights(profile: dict[str, Any]) -> list[dict[str, Any]]:
    """Sun, Moon and rising insights for today; generic when any sign is unknown."""
    profile = _require_profile(profile)
    sun = _sign_name(profile, "sun_sign")
    moon = _sign_name(profile, "moon_sign")
    rising = _sign_name(profile, "rising_sign")
    sun_data, moon_data, rising_data = get_sign(sun), get_sign(moon), get_sign(rising)
    transits = profile.get("current_transits") or {}

    if not (sun_data and moon_data and rising_data):
        return [_insight(
            "daily",
            "Personal Energy Reading",
            "Your unique astrological combination creates special opportunities today.",
            ["Stay open to unexpected insights", "Trust your intuition", "Take measured risks"],
            "Throughout the day",
            75,
            ["General"],
        )]

    transit_moon = get_sign(transits.get("moon"))
    if transit_moon:
        lunar_message = (
            f"Your {moon} Moon resonates with {transit_moon['name']} lunar energy. "
            f"Your {moon_data['personality']['keywords'][0]} nature feels "
            f"{transit_moon['personality']['keywords'][0].lower()} influences. Honor your emotional "
            f"needs around {moon_data['personality']['core_values'][0].lower()}."
        )
    else:
        lunar_message = "Your emotional landscape is rich today. Trust your inner wisdom."

    return [
        _insight(
            "daily",
            f"{sun} Solar Energy",
            _solar_message(sun, transits.get("sun", UNKNOWN_SIGN)),
            _solar_advice(sun),
            _best_timing(sun),
            85,
            ["Identity", "Leadership", "Core Energy"],
        ),
        _insight(
            "daily",
            f"{moon} Lunar Guidance",
            lunar_message,
            [
                f"Process emotions through {moon_data['element'].lower()} element activities",
                f"Your {moon} Moon needs {moon_data['personality']['core_values'][0].lower()}",
                "Create emotional security before taking risks",
                "Listen to your body's wisdom",
            ],
            "Evening hours",
            80,
            ["Emotions", "Intuition", "Inner Life"],
        ),
        _insight(
            "daily",
            f"{rising} Rising Opportunities",
            (
                f"Your {rising} Rising sign projects {rising_data['personality']['keywords'][0]} energy. "
                f"Others see you as {rising_data['personality']['strengths'][0].lower()} and "
                f"{rising_data['personality']['strengths'][1].lower()}. Use this to your advantage "
                "in negotiations and first meetings."
            ),
            [
                f"Present your {rising_data['personality']['keywords'][0].lower()} side in meetings",
                f"Dress in {rising_data['colors'][0].lower()} to enhance your presence",
                f"Use {rising_data['personality']['strengths'][0].lower()} to open doors",
                "First impressions align with your rising sign energy",
            ],
            "First impressions and new encounters",
            78,
            ["Social", "Appearance", "First Impressions"],
        ),
    ]


# ---------------------------------------------------------------------------
# Wealth insights
# ---------------------------------------------------------------------------

def _investment_timing(profile: dict[str, Any], sun_data: dict[str, Any]) -> str:
    transits = profile.get("personal_transits") or {}
    current = profile.get("current_transits") or {}

    if transits.get("mercury_retrograde"):
        return (
            "Mercury retrograde suggests reviewing existing investments rather than initiating "
            "new ones. Perfect time to rebalance your portfolio."
        )
    if transits.get("moon_phase") == "New Moon":
        return (
            f"New Moon in {current.get('moon') or 'the current sign'} - Excellent for planting seeds "
            f"of new investments, especially in {sun_data['wealth_profile']['best_investments'][0]}."
        )
    if transits.get("moon_phase") == "Full Moon":
        return (
            "Full Moon illuminates what needs to be released. Consider taking profits or "
            "cutting losses on underperforming assets."
        )
    return (
        f"Current cosmic weather supports {sun_data['wealth_profile']['style']}. Your "
        f"{sun_data['element']} element thrives when you "
        f"{sun_data['wealth_profile']['money_mindset'].lower()}."
    )


def _wealth_timing(sun_data: dict[str, Any], moon_data: Optional[dict[str, Any]]) -> str:
    if not moon_data:
        return "Standard market hours"
    elements = (sun_data["element"], moon_data["element"])
    if elements == ("Fire", "Fire"):
        return "Early market hours - high energy and quick decisions"
    if "Earth" in elements:
        return "Mid-market hours - steady and calculated moves"
    if "Water" in elements:
        return "End of day - emotional clarity and intuitive insights"
    return "Vary your timing - different opportunities at different hours"


def timing_confidence(transits: Optional[dict[str, Any]]) -> int:
    transits = transits or {}
    confidence = 70
    if transits.get("mercury_retrograde"):
        confidence -= 15
    if transits.get("moon_phase") == "New Moon":
        confidence += 10
    if transits.get("moon_phase") == "Full Moon":
        confidence += 5
    if "Harmonious" in (transits.get("venus_position") or ""):
        confidence += 10
    if (transits.get("mars_energy") or "").startswith("High"):
        confidence += 5
    return max(0, min(100, confidence))


def _risk_message(sun_data: dict[str, Any], volatility: str) -> str:
    element = sun_data["element"]
    if volatility == "high" and element == "Fire":
        return "Your Fire nature may be excited by volatility, but remember to protect capital."
    if volatility == "high" and element == "Earth":
        return "Market volatility challenges your Earth stability. This too shall pass - stay grounded."
    if volatility == "low" and element == "Air":
        return "Low volatility may bore your Air nature. Look for intellectual challenges beyond trading."
    if volatility == "low" and element == "Water":
        return "Calm markets allow your Water intuition to flow clearly. Trust subtle signals."
    condition = "require extra caution" if volatility == "high" else "support steady strategies"
    return f"Current market conditions {condition}. Your {sun_data['name']} nature guides you well."


def wealth_insights(
    profile: dict[str, Any],
    market: Optional[dict[str, Any]] = None,
    risk_tolerance: Optional[str] = None,
) -> list[dict[str, Any]]:
    """Investment timing, wealth-building focus and risk insights.

    Args:
        profile: Natal profile dict.
        market: Optional {"trend": ..., "volatility": "low|moderate|high"}.
        risk_tolerance: The user's stated risk label; defaults to Moderate.

    Returns:
        Three insight dicts, or an empty list when the sun is unresolved.
    """
    profile = _require_profile(profile)
    sun_data = get_sign(profile.get("sun_sign"))
    moon_data = get_sign(profile.get("moon_sign"))
    if sun_data is None:
        return []

    market = market or {}
    volatility = (market.get("volatility") or "moderate").lower()
    stated = risk_tolerance or "Moderate"
    natural = sun_data["wealth_profile"]["risk_tolerance"]

    if is_risk_aligned(natural, stated):
        building = (
            f"Your {sun_data['name']} nature aligns perfectly with your {stated} risk tolerance. "
            f"{sun_data['wealth_profile']['money_mindset']} Focus on {sun_data['wealth_profile']['style']}."
        )
    else:
        building = (
            f"Balance your natural {sun_data['name']} {natural} tendencies with your stated "
            f"{stated} risk preference. Consider a blended approach."
        )

    investment_advice = {
        "Fire": [
            "Quick decisions may pay off now",
            "Consider growth sectors and emerging markets",
            "Don't overthink - trust your instincts",
        ],
        "Earth": [
            "Focus on value and fundamentals",
            "Real assets and tangibles are favored",
            "Slow and steady wins your race",
        ],
        "Air": [
            "Information is your edge - research thoroughly",
            "Technology and communication sectors align",
            "Diversification is your friend",
        ],
        "Water": [
            "Your intuition about market mood is heightened",
            "Look for emotional or cyclical patterns",
            "Hidden value may reveal itself to you",
        ],
    }[sun_data["element"]]

    risk_advice = [
        f"Your {sun_data['name']} sun manages risk through "
        f"{sun_data['wealth_profile']['strengths'][0].lower()}"
    ]
    if moon_data:
        risk_advice.append(f"Your {moon_data['name']} moon needs emotional security - protect core holdings")
    if volatility == "high":
        risk_advice += ["Reduce position sizes in volatile conditions", "Use stop-losses to protect gains"]
    else:
        risk_advice += ["Steady markets favor gradual position building", "Consider increasing allocation to growth assets"]

    return [
        _insight(
            "wealth",
            "Optimal Investment Timing",
            _investment_timing(profile, sun_data),
            investment_advice,
            _wealth_timing(sun_data, moon_data),
            timing_confidence(profile.get("personal_transits")),
            ["Investments", "Trading", "Financial Decisions"],
        ),
        _insight(
            "wealth",
            "Wealth Building Focus",
            building,
            [
                f"Consider {investment} aligned with your {sun_data['element']} energy"
                for investment in sun_data["wealth_profile"]["best_investments"][:3]
            ],
            "Long-term strategy",
            90,
            ["Portfolio", "Strategy", "Long-term Growth"],
        ),
        _insight(
            "wealth",
            "Risk Management Alert",
            _risk_message(sun_data, volatility),
            risk_advice,
            "Current market cycle",
            82,
            ["Risk", "Protection", "Balance"],
        ),
    ]


# ---------------------------------------------------------------------------
# Transit insights
# ---------------------------------------------------------------------------

def transit_insights(profile: dict[str, Any]) -> list[dict[str, Any]]:
    """Mercury retrograde, moon phase and solar return alerts, in that order."""
    profile = _require_profile(profile)
    transits = profile.get("personal_transits") or {}
    insights = []

    if transits.get("mercury_retrograde"):
        insights.append(_insight(
            "transit",
            "Mercury Retrograde Alert",
            "Communication planet is retrograde. Review and revise rather than initiate.",
            [
                "Double-check all financial documents",
                "Avoid signing new contracts if possible",
                "Review and reorganize your portfolio",
                "Back up important financial data",
            ],
            "Next 3 weeks",
            95,
            ["Communication", "Contracts", "Technology", "Travel"],
        ))

    phase = MOON_PHASE_INSIGHTS.get(transits.get("moon_phase"))
    if phase:
        insights.append(_insight("transit", **copy.deepcopy(phase)))

    if transits.get("sun_return"):
        insights.append(_insight(
            "transit",
            "Solar Return - Your Power Day!",
            "The Sun returns to your natal position, amplifying your personal power and magnetism.",
            [
                "Set intentions for the year ahead",
                "Make important financial decisions",
                "Launch new ventures",
                "Celebrate your unique gifts",
            ],
            "Today and the next few days",
            100,
            ["Personal Power", "New Beginnings", "Leadership"],
        ))

    return insights


def comprehensive_insights(
    profile: dict[str, Any],
    market: Optional[dict[str, Any]] = None,
    risk_tolerance: Optional[str] = None,
) -> dict[str, Any]:
    """All insight groups for a profile in one dict."""
    return {
        "daily": daily_insights(profile),
        "wealth": wealth_insights(profile, market, risk_tolerance),
        "transits": transit_insights(profile),
        "weekly": weekly_forecast(profile),
    }
