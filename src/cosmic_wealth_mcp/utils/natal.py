"""Natal calculator.

Derives a simplified natal profile from birth date, time and place: sun,
moon and rising signs, planet signs and houses, wealth houses, elemental
balance and the personal transit status relative to an injected "now".

Every function here is total. Missing or malformed optional input degrades
to a documented default ("Unknown" sign, default coordinate, fallback house).
Only an unparseable birth date surfaces, and calculate_natal_profile() turns
it into an error payload instead of raising.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from ..constants import (
    ELEMENTS,
    MODALITIES,
    MOON_PHASES,
    NATAL_PLANETS,
    SIGN_ORDER,
    SYNODIC_MONTH,
    UNKNOWN_SIGN,
)
from ..zodiac import (
    HOUSE_MEANINGS,
    PLANETARY_INFLUENCES,
    ZODIAC_DATABASE,
    compatibility,
    cosmic_weather,
    get_sign,
    wealth_archetype,
)
from .date_parsing import InvalidBirthDateError, day_of_year, parse_birth_date, parse_birth_time
from .ephemeris import approximate_moon_sign, planet_sign_on_date
from .geocoding import get_timezone_for_coords, resolve_city
from .position_utils import adjacent_sign, house_sign, houses_from_rising

logger = logging.getLogger(__name__)

REFERENCE_NEW_MOON = datetime(2000, 1, 6)

# Approximate yearly Mercury retrograde windows, as inclusive day-of-year ranges.
MERCURY_RETROGRADE_DAYS: list[tuple[int, int]] = [
    (10, 31),
    (130, 151),
    (250, 271),
    (340, 361),
]

# (offset from the rising sign's house, fallback house when the result is 0)
PLANET_HOUSE_OFFSETS: dict[str, tuple[int, int]] = {
    "Mercury": (2, 3),
    "Venus": (1, 2),
    "Mars": (5, 6),
    "Jupiter": (8, 9),
    "Saturn": (9, 10),
}

DEFAULT_JUPITER_SIGN = "Scorpio"
DEFAULT_SATURN_SIGN = "Aquarius"

INVALID_DATE_MESSAGE = (
    "Please check your birth date and time format. Date should be DD/MM/YYYY "
    "or YYYY-MM-DD, time should be HH:MM (24-hour format)."
)


def _utc_naive(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return _utc_naive(value).date()
    return value


# ---------------------------------------------------------------------------
# Signs
# ---------------------------------------------------------------------------

def _in_range(month: int, day: int, start: tuple[int, int], end: tuple[int, int]) -> bool:
    start_month, start_day = start
    end_month, end_day = end
    if start_month == end_month:
        return month == start_month and start_day <= day <= end_day
    if month == start_month:
        return day >= start_day
    if month == end_month:
        return day <= end_day
    return start_month < month < end_month


def sun_sign(when: Union[date, datetime]) -> str:
    """Return the sun sign whose date range contains the given day."""
    day = _as_date(when)
    for name, record in ZODIAC_DATABASE.items():
        start = record["date_range"]["start"]
        end = record["date_range"]["end"]
        if name == "Capricorn":
            # The one range that crosses the year boundary
            if (day.month == 12 and day.day >= start[1]) or (day.month == 1 and day.day <= end[1]):
                return name
        elif _in_range(day.month, day.day, start, end):
            return name
    return UNKNOWN_SIGN


def moon_sign(when: Union[date, datetime]) -> str:
    """Ephemeris Moon sign, falling back to the arithmetic approximation."""
    day = _as_date(when)
    sign = planet_sign_on_date("Moon", day)
    if sign is not None:
        return sign
    return approximate_moon_sign(day)


def rising_sign(
    when: Union[date, datetime],
    birth_time: Optional[str],
    latitude: Optional[float] = None,
) -> str:
    """Heuristic rising sign from time of day, season and latitude.

    Each sign rises for a two-hour block. A seasonal quarter of the year and
    up to two extra steps for latitude are added on top.
    """
    parsed = parse_birth_time(birth_time)
    if parsed is None:
        return UNKNOWN_SIGN

    hours, minutes = parsed
    decimal_time = hours + minutes / 60
    yday = day_of_year(_as_date(when))

    latitude_factor = abs(latitude) / 90 if latitude is not None else 0

    base_index = math.floor(decimal_time / 2)
    seasonal_adjustment = math.floor((yday / 365) * 4) % 4
    rising_index = (base_index + seasonal_adjustment + math.floor(latitude_factor * 2)) % 12

    return SIGN_ORDER[rising_index]


def planetary_positions(when: Union[date, datetime], sun: str, moon: str) -> dict[str, str]:
    """Signs for Mercury through Saturn, each with its own fallback."""
    day = _as_date(when)
    fallbacks = {
        "Mercury": adjacent_sign(sun, -1),
        "Venus": adjacent_sign(sun, 1),
        "Mars": moon,
        "Jupiter": DEFAULT_JUPITER_SIGN,
        "Saturn": DEFAULT_SATURN_SIGN,
    }
    positions = {}
    for planet in NATAL_PLANETS:
        positions[planet] = planet_sign_on_date(planet, day) or fallbacks[planet]
    return positions


# ---------------------------------------------------------------------------
# Houses
# ---------------------------------------------------------------------------

def rising_house(rising: str) -> int:
    """House number of the rising sign itself, 1 when unresolved."""
    record = get_sign(rising)
    return record["house"] if record else 1


def planet_house(rising_house_number: int, offset: int, default: int) -> int:
    """Fixed-offset house placement; a zero result falls back to `default`."""
    return (rising_house_number + offset) % 12 or default


def planetary_house_placement(rising: str) -> dict[str, int]:
    rh = rising_house(rising)
    return {
        planet: planet_house(rh, offset, default)
        for planet, (offset, default) in PLANET_HOUSE_OFFSETS.items()
    }


# ---------------------------------------------------------------------------
# Transits
# ---------------------------------------------------------------------------

def moon_phase(moment: Union[date, datetime]) -> str:
    """Name the lunar phase from days elapsed since a reference new moon."""
    if not isinstance(moment, datetime):
        moment = datetime(moment.year, moment.month, moment.day)
    days_since = (_utc_naive(moment) - REFERENCE_NEW_MOON).total_seconds() / 86400
    phase = (days_since % SYNODIC_MONTH) / SYNODIC_MONTH

    # Bins are centred on each phase, so the first and last eighth-halves are New Moon.
    index = math.floor(phase * 8 + 0.5) % 8
    return MOON_PHASES[index]


def is_mercury_retrograde(when: Union[date, datetime]) -> bool:
    yday = day_of_year(_as_date(when))
    return any(start <= yday <= end for start, end in MERCURY_RETROGRADE_DAYS)


def venus_influence(user_sign: str, transit_sign: str) -> str:
    score = compatibility(user_sign, transit_sign)
    if score > 70:
        return "Harmonious - favorable for relationships and finances"
    if score > 50:
        return "Neutral - steady energy for partnerships"
    return "Challenging - review values and relationships"


def mars_energy(user_sign: str) -> str:
    record = get_sign(user_sign)
    if record is None:
        return "Moderate"
    return {
        "Fire": "High - Take bold action",
        "Earth": "Steady - Build systematically",
        "Air": "Mental - Strategic planning",
        "Water": "Intuitive - Trust your feelings",
    }.get(record["element"], "Balanced")


def transit_snapshot(now: datetime, natal_sun: Optional[str] = None) -> dict[str, Any]:
    """Current Sun/Moon signs, moon phase and Mercury status for `now`."""
    current_sun = sun_sign(now)
    snapshot = {
        "sun": current_sun,
        "moon": moon_sign(now),
        "moon_phase": moon_phase(now),
        "mercury_retrograde": is_mercury_retrograde(now),
    }
    if natal_sun is not None:
        snapshot["solar_return"] = current_sun == natal_sun
    return snapshot


def current_transits(now: datetime) -> dict[str, str]:
    """Today's sign for each tracked body, using the natal fallbacks."""
    sun = sun_sign(now)
    moon = moon_sign(now)
    planets = planetary_positions(now, sun, moon)
    return {
        "sun": sun,
        "moon": moon,
        "mercury": planets["Mercury"],
        "venus": planets["Venus"],
        "mars": planets["Mars"],
        "jupiter": planets["Jupiter"],
        "saturn": planets["Saturn"],
    }


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------

def elemental_balance(*signs: str) -> dict[str, int]:
    """Count Fire/Earth/Air/Water across the resolved signs."""
    counts = {element: 0 for element in ELEMENTS}
    for sign in signs:
        record = get_sign(sign)
        if record:
            counts[record["element"]] += 1
    return counts


def modality_balance(*signs: str) -> dict[str, int]:
    counts = {modality: 0 for modality in MODALITIES}
    for sign in signs:
        record = get_sign(sign)
        if record:
            counts[record["modality"]] += 1
    return counts


def dominant_element(balance: dict[str, int]) -> str:
    """Highest element count; ties go to the earlier of Fire, Earth, Air, Water."""
    highest = max(balance.get(e, 0) for e in ELEMENTS)
    if highest == 0:
        return "Balanced"
    for element in ELEMENTS:
        if balance.get(element, 0) == highest:
            return element
    return "Balanced"


# ---------------------------------------------------------------------------
# Full profile
# ---------------------------------------------------------------------------

def _coerce_coordinate(value: Any, name: str, limit: float) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric %s %r", name, value)
        return None
    if math.isnan(number) or math.isinf(number):
        logger.warning("Ignoring non-finite %s %r", name, value)
        return None
    if not -limit <= number <= limit:
        logger.warning("Ignoring out-of-range %s %r", name, value)
        return None
    return number


def resolve_birth_location(
    birth_place: Optional[str],
    birth_lat: Optional[float],
    birth_lng: Optional[float],
) -> Optional[dict[str, Any]]:
    """Explicit coordinates win; otherwise resolve the place name."""
    lat = _coerce_coordinate(birth_lat, "birth latitude", 90.0)
    lng = _coerce_coordinate(birth_lng, "birth longitude", 180.0)

    if lat is not None:
        return {
            "name": birth_place.strip() if birth_place else None,
            "latitude": lat,
            "longitude": lng,
            "timezone": get_timezone_for_coords(lat, lng) if lng is not None else None,
            "matched": True,
        }

    return resolve_city(birth_place)


def natal_error_payload(error: Exception) -> dict[str, Any]:
    return {
        "error": str(error) or "Failed to calculate astrological profile",
        "sun_sign": UNKNOWN_SIGN,
        "moon_sign": UNKNOWN_SIGN,
        "rising_sign": UNKNOWN_SIGN,
        "message": INVALID_DATE_MESSAGE,
    }


def _natal_chart(birth_day: date, sun: str, moon: str, rising: str, planets: dict[str, str]) -> dict[str, Any]:
    rh = rising_house(rising)
    sun_data = get_sign(sun)
    houses = planetary_house_placement(rising)

    chart: dict[str, Any] = {
        "sun": {
            "sign": sun,
            "house": (rh + birth_day.month // 2) % 12 or 1,
            "meaning": sun_data["personality"]["motivation"] if sun_data else "Self-expression",
        },
        "moon": {
            "sign": moon,
            "house": (rh + birth_day.day // 3) % 12 or 4,
            "meaning": "Emotional nature and instincts",
        },
        "rising": {
            "sign": rising,
            "meaning": "Public persona and first impressions",
        },
    }
    for planet in NATAL_PLANETS:
        chart[planet.lower()] = {
            "sign": planets[planet],
            "house": houses[planet],
            "meaning": PLANETARY_INFLUENCES[planet]["meaning"],
        }
    return chart


def _wealth_houses(rising: str) -> dict[str, Any]:
    second = house_sign(rising, 2)
    eighth = house_sign(rising, 8)
    second_data = get_sign(second)
    eighth_data = get_sign(eighth)
    return {
        "second": {
            "sign": second,
            "ruler": second_data["ruler"] if second_data else "Venus",
            "themes": list(HOUSE_MEANINGS[2]["themes"]),
            "insights": (
                second_data["wealth_profile"]["money_mindset"]
                if second_data else "Building personal resources"
            ),
        },
        "eighth": {
            "sign": eighth,
            "ruler": eighth_data["ruler"] if eighth_data else "Pluto",
            "themes": list(HOUSE_MEANINGS[8]["themes"]),
            "insights": "Transformation of shared resources and deep investments",
        },
        "fifth": {
            "sign": house_sign(rising, 5),
            "themes": list(HOUSE_MEANINGS[5]["themes"]),
            "insights": "Creative ventures and speculative gains",
        },
        "tenth": {
            "sign": house_sign(rising, 10),
            "themes": list(HOUSE_MEANINGS[10]["themes"]),
            "insights": "Professional success and public achievement",
        },
    }


def calculate_natal_profile(
    birth_date: str,
    birth_time: Optional[str] = None,
    birth_place: Optional[str] = None,
    birth_lat: Optional[float] = None,
    birth_lng: Optional[float] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Compute the full natal profile for one set of birth data.

    Args:
        birth_date: "YYYY-MM-DD" or a slash-delimited day/month date.
        birth_time: Optional time in one of the accepted formats.
        birth_place: Optional free-text city name.
        birth_lat: Optional latitude; overrides place resolution.
        birth_lng: Optional longitude.
        now: Moment used for transit calculations. Defaults to the current
            UTC time; pass it explicitly for reproducible output.

    Returns:
        Profile dict. For an unparseable birth date, an error payload with
        every sign set to "Unknown" is returned instead.
    """
    try:
        birth_day = parse_birth_date(birth_date)
    except InvalidBirthDateError as e:
        logger.warning("Astrology calculation failed: %s", e)
        return natal_error_payload(e)

    if now is None:
        now = datetime.now(timezone.utc)

    location = resolve_birth_location(birth_place, birth_lat, birth_lng)
    latitude = location["latitude"] if location else None

    sun = sun_sign(birth_day)
    moon = moon_sign(birth_day)
    rising = rising_sign(birth_day, birth_time, latitude)
    planets = planetary_positions(birth_day, sun, moon)

    sun_data = get_sign(sun)
    balance = elemental_balance(sun, moon, rising)
    modalities = modality_balance(sun, moon, rising)

    transits = current_transits(now)
    archetype = wealth_archetype(sun, moon, rising)

    return {
        "sun_sign": sun,
        "moon_sign": moon,
        "rising_sign": rising,
        "birth_date": birth_day.isoformat(),
        "birth_time": birth_time,
        "birth_location": location,
        "elemental": {
            "dominant": dominant_element(balance),
            "balance": balance,
            "modality_balance": modalities,
            "qualities": {
                "strengths": sun_data["personality"]["strengths"][:4] if sun_data else [],
                "challenges": sun_data["personality"]["challenges"][:3] if sun_data else [],
                "wealth_style": sun_data["wealth_profile"]["style"] if sun_data else "Balanced Investor",
            },
        },
        "natal_chart": _natal_chart(birth_day, sun, moon, rising, planets),
        "planetary_positions": planets,
        "houses": houses_from_rising(rising),
        "wealth_houses": _wealth_houses(rising),
        "cosmic_weather": cosmic_weather(sun, transits["sun"], transits["moon"]),
        "personal_transits": {
            "sun_return": transits["sun"] == sun,
            "moon_phase": moon_phase(now),
            "mercury_retrograde": is_mercury_retrograde(now),
            "venus_position": venus_influence(sun, transits["sun"]),
            "mars_energy": mars_energy(sun),
        },
        "current_transits": transits,
        "wealth_archetype": archetype,
        "personality": {
            "archetype": archetype["archetype"],
            "description": archetype["description"],
            "strengths": archetype["strengths"],
            "challenges": list(sun_data["personality"]["challenges"]) if sun_data else [],
            "opportunities": archetype["opportunities"],
            "wealth_style": sun_data["wealth_profile"]["style"] if sun_data else "Adaptive Investor",
            "ideal_portfolio": sun_data["wealth_profile"]["ideal_portfolio"] if sun_data else "Diversified approach",
            "risk_tolerance": sun_data["wealth_profile"]["risk_tolerance"] if sun_data else "Moderate",
            "lucky_numbers": list(sun_data["lucky_numbers"]) if sun_data else [],
            "colors": list(sun_data["colors"]) if sun_data else [],
            "gemstones": list(sun_data["gemstones"]) if sun_data else [],
        },
        "compatibility": {
            "best_matches": list(sun_data["relationships"]["best_matches"]) if sun_data else [],
            "business_partners": list(sun_data["relationships"]["business_partners"]) if sun_data else [],
            "challenging_matches": list(sun_data["relationships"]["challenging_matches"]) if sun_data else [],
        },
        "calculated_at": _utc_naive(now).isoformat(),
    }
