"""Approximate ephemeris lookup.

Small hand-entered date -> sign tables for the Moon and the five classical
planets, with a nearest-date search bounded to a few days and an arithmetic
Moon-sign approximation for dates outside the Moon table.

Precision:
    - Table hits: accurate to the sign for the dates listed
    - Nearest-date match: the listed sign up to MAX_DISTANCE_DAYS away
    - approximate_moon_sign(): a fixed-rate extrapolation, not astronomy
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Optional, Union

from ..constants import SIGN_INDEX, SIGN_ORDER, SYNODIC_MONTH

logger = logging.getLogger(__name__)

# Nearest-date matches further away than this are treated as no data.
MAX_DISTANCE_DAYS = 5

# Moon reference point for approximate_moon_sign().
MOON_REFERENCE_DATE = date(1993, 12, 30)
MOON_REFERENCE_SIGN = "Cancer"

MOON_EPHEMERIS: dict[str, str] = {
    "1993-12-01": "Cancer",
    "1993-12-02": "Cancer",
    "1993-12-03": "Leo",
    "1993-12-04": "Leo",
    "1993-12-05": "Leo",
    "1993-12-06": "Virgo",
    "1993-12-07": "Virgo",
    "1993-12-08": "Virgo",
    "1993-12-09": "Libra",
    "1993-12-10": "Libra",
    "1993-12-11": "Scorpio",
    "1993-12-12": "Scorpio",
    "1993-12-13": "Scorpio",
    "1993-12-14": "Sagittarius",
    "1993-12-15": "Sagittarius",
    "1993-12-16": "Capricorn",
    "1993-12-17": "Capricorn",
    "1993-12-18": "Aquarius",
    "1993-12-19": "Aquarius",
    "1993-12-20": "Aquarius",
    "1993-12-21": "Pisces",
    "1993-12-22": "Pisces",
    "1993-12-23": "Aries",
    "1993-12-24": "Aries",
    "1993-12-25": "Taurus",
    "1993-12-26": "Taurus",
    "1993-12-27": "Taurus",
    "1993-12-28": "Gemini",
    "1993-12-29": "Gemini",
    "1993-12-30": "Cancer",
    "1993-12-31": "Cancer",
    "1994-01-01": "Leo",
    "1994-01-02": "Leo",
    "1994-01-03": "Virgo",
}

MERCURY_EPHEMERIS: dict[str, str] = {
    "1993-12-01": "Sagittarius",
    "1993-12-10": "Sagittarius",
    "1993-12-15": "Capricorn",
    "1993-12-20": "Capricorn",
    "1993-12-25": "Capricorn",
    "1993-12-30": "Capricorn",
    "1993-12-31": "Capricorn",
}

VENUS_EPHEMERIS: dict[str, str] = {
    "1993-12-01": "Sagittarius",
    "1993-12-10": "Sagittarius",
    "1993-12-20": "Capricorn",
    "1993-12-25": "Capricorn",
    "1993-12-30": "Capricorn",
    "1993-12-31": "Capricorn",
}

MARS_EPHEMERIS: dict[str, str] = {
    "1993-12-01": "Capricorn",
    "1993-12-10": "Capricorn",
    "1993-12-20": "Capricorn",
    "1993-12-25": "Capricorn",
    "1993-12-30": "Capricorn",
    "1993-12-31": "Capricorn",
}

# Jupiter spends about a year per sign
JUPITER_EPHEMERIS: dict[str, str] = {
    "1993-01-01": "Libra",
    "1993-11-10": "Scorpio",
    "1993-12-30": "Scorpio",
    "1994-01-01": "Scorpio",
}

# Saturn spends about two and a half years per sign
SATURN_EPHEMERIS: dict[str, str] = {
    "1993-01-01": "Aquarius",
    "1993-06-01": "Aquarius",
    "1993-12-30": "Aquarius",
    "1994-01-01": "Aquarius",
}

EPHEMERIS_TABLES: dict[str, dict[str, str]] = {
    "Moon": MOON_EPHEMERIS,
    "Mercury": MERCURY_EPHEMERIS,
    "Venus": VENUS_EPHEMERIS,
    "Mars": MARS_EPHEMERIS,
    "Jupiter": JUPITER_EPHEMERIS,
    "Saturn": SATURN_EPHEMERIS,
}


def _as_date(value: Union[date, datetime]) -> date:
    """Reduce a datetime to its calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def closest_ephemeris_sign(
    table: dict[str, str],
    when: Union[date, datetime],
    max_days: int = MAX_DISTANCE_DAYS,
) -> Optional[str]:
    """Look up a sign in one ephemeris table.

    Args:
        table: Mapping of 'YYYY-MM-DD' to sign name.
        when: Query date.
        max_days: Largest day distance accepted for a nearest-date match.

    Returns:
        The exact-date sign if listed. Otherwise the sign of the nearest listed
        date (earliest wins on ties) when it is within max_days, else None.
    """
    day = _as_date(when)
    key = day.isoformat()
    if key in table:
        return table[key]

    closest_key: Optional[str] = None
    min_diff = math.inf
    for listed in sorted(table):
        diff = abs((date.fromisoformat(listed) - day).days)
        if diff < min_diff:
            min_diff = diff
            closest_key = listed

    if closest_key is not None and min_diff <= max_days:
        return table[closest_key]

    return None


def planet_sign_on_date(
    planet: str,
    when: Union[date, datetime],
    max_days: int = MAX_DISTANCE_DAYS,
) -> Optional[str]:
    """Return the tabulated sign of a planet on a date, or None.

    Planets without a table (Sun, outer planets, typos) return None; callers
    supply their own fallback.
    """
    table = EPHEMERIS_TABLES.get(planet)
    if table is None:
        return None

    sign = closest_ephemeris_sign(table, when, max_days)
    if sign is None:
        logger.debug("No %s ephemeris entry within %d days of %s", planet, max_days, _as_date(when))
    return sign


def approximate_moon_sign(when: Union[date, datetime]) -> str:
    """Extrapolate a Moon sign from the fixed reference point.

    Elapsed whole days are converted to synodic cycles and each cycle is
    taken to advance twelve signs. Dates before the reference count backwards
    around the wheel.
    """
    days = (_as_date(when) - MOON_REFERENCE_DATE).days
    cycles = days / SYNODIC_MONTH
    signs_passed = math.floor(cycles * 12)
    index = (SIGN_INDEX[MOON_REFERENCE_SIGN] + signs_passed) % 12
    return SIGN_ORDER[index]
