"""Offline city lookup for birth places.

Resolves a free-text birth place against a small table of major cities and
attaches the IANA timezone for the resulting coordinates.
"""

import logging
from typing import Any, Optional

from timezonefinder import TimezoneFinder

logger = logging.getLogger(__name__)

# Module-level instance; initialization loads polygon data once
_tf = TimezoneFinder()

CITY_COORDINATES: dict[str, tuple[float, float]] = {
    "washington dc": (38.9072, -77.0369),
    "new york": (40.7128, -74.0060),
    "los angeles": (34.0522, -118.2437),
    "chicago": (41.8781, -87.6298),
    "houston": (29.7604, -95.3698),
    "phoenix": (33.4484, -112.0740),
    "philadelphia": (39.9526, -75.1652),
    "san antonio": (29.4241, -98.4936),
    "san diego": (32.7157, -117.1611),
    "dallas": (32.7767, -96.7970),
    "london": (51.5074, -0.1278),
    "paris": (48.8566, 2.3522),
    "tokyo": (35.6762, 139.6503),
    "sydney": (-33.8688, 151.2093),
    "mumbai": (19.0760, 72.8777),
    "dubai": (25.2048, 55.2708),
    "singapore": (1.3521, 103.8198),
    "toronto": (43.6532, -79.3832),
    "berlin": (52.5200, 13.4050),
    "moscow": (55.7558, 37.6173),
}

# Geographic centre of the contiguous United States
DEFAULT_COORDINATES: tuple[float, float] = (39.8283, -98.5795)


def get_timezone_for_coords(lat: float, lon: float) -> str:
    """
    Return the IANA timezone string for any coordinates on earth.

    Falls back to UTC if coordinates are over open ocean with no timezone
    polygon (rare).

    Args:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees

    Returns:
        IANA timezone string, e.g. 'Europe/London', 'America/Chicago', 'UTC'
    """
    tz = _tf.timezone_at(lat=lat, lng=lon)
    return tz if tz else "UTC"


def _match_city(normalized: str) -> Optional[str]:
    if normalized in CITY_COORDINATES:
        return normalized

    for city in CITY_COORDINATES:
        if city in normalized or normalized in city:
            return city

    return None


def resolve_city(birth_place: Optional[str]) -> Optional[dict[str, Any]]:
    """
    Resolve a birth place name to coordinates.

    Matching is case-insensitive: exact table key first, then substring
    containment in either direction ("New York, NY" matches "new york").
    Unmatched names get the continental default coordinate.

    Args:
        birth_place: Free-text city name.

    Returns:
        Dict with name, latitude, longitude, timezone and matched, or None
        when no place was given at all.
    """
    if not birth_place or not birth_place.strip():
        return None

    normalized = birth_place.lower().strip()
    city = _match_city(normalized)

    if city is None:
        logger.debug("Birth place %r not in city table; using default coordinates", birth_place)
        lat, lon = DEFAULT_COORDINATES
    else:
        lat, lon = CITY_COORDINATES[city]

    return {
        "name": birth_place.strip(),
        "latitude": lat,
        "longitude": lon,
        "timezone": get_timezone_for_coords(lat, lon),
        "matched": city is not None,
    }
