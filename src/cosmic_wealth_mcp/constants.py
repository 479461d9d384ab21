"""Shared constants for cosmic-wealth-mcp.

Centralizes the ordering tables used by the natal calculator and the insight
synthesis modules, so they are defined once and imported wherever needed.
"""

# Zodiac signs in canonical order (index 0 = Aries, index 11 = Pisces).
# House n counted from a rising sign is SIGN_ORDER[(rising_index + n - 1) % 12].
SIGN_ORDER: list[str] = [
    "Aries", "Taurus", "Gemini", "Cancer",
    "Leo", "Virgo", "Libra", "Scorpio",
    "Sagittarius", "Capricorn", "Aquarius", "Pisces",
]

SIGN_INDEX: dict[str, int] = {s: i for i, s in enumerate(SIGN_ORDER)}

UNKNOWN_SIGN = "Unknown"

ELEMENTS: list[str] = ["Fire", "Earth", "Air", "Water"]
MODALITIES: list[str] = ["Cardinal", "Fixed", "Mutable"]

# Planets placed in the simplified natal chart, in output order.
NATAL_PLANETS: list[str] = ["Mercury", "Venus", "Mars", "Jupiter", "Saturn"]

# Moon phases in waxing order, starting at the new moon.
MOON_PHASES: list[str] = [
    "New Moon",
    "Waxing Crescent",
    "First Quarter",
    "Waxing Gibbous",
    "Full Moon",
    "Waning Gibbous",
    "Last Quarter",
    "Waning Crescent",
]

SYNODIC_MONTH = 29.53059  # days

WEEKDAYS: list[str] = [
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
]

MARKET_TRENDS: list[str] = ["bullish", "bearish", "neutral"]

# Ordinal risk tolerance labels, lowest first.
RISK_LEVELS: dict[str, float] = {
    "Low": 1,
    "Low to Moderate": 2,
    "Moderate": 3,
    "Moderate to High": 3.5,
    "High": 4,
    "Very High": 5,
    "Variable": 3,
}
