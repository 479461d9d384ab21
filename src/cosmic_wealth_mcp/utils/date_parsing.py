"""Birth date and birth time parsing.

Dates accept ISO "YYYY-MM-DD" or slash-delimited day/month forms. Times
accept "HH:MM", "HH.MM", "HHMM" or a bare hour.
"""

import logging
from datetime import date, datetime
from typing import Optional

logger = logging.getLogger(__name__)


class InvalidBirthDateError(ValueError):
    """Raised when a birth date string cannot be turned into a calendar date."""
    pass


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_birth_date(value: str) -> date:
    """Parse a birth date string.

    Slash forms are read as DD/MM/YYYY. That covers both a first component
    above 12 and the ambiguous case where both components are 12 or less.
    MM/DD/YYYY is tried only when the day-first reading is not a real date.

    Args:
        value: "YYYY-MM-DD", "DD/MM/YYYY" or "MM/DD/YYYY".

    Returns:
        The parsed date.

    Raises:
        InvalidBirthDateError: If no reading produces a valid date.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidBirthDateError("Invalid birth date format: empty value")

    text = value.strip()

    if "/" in text:
        parts = text.split("/")
        if len(parts) != 3:
            raise InvalidBirthDateError(f"Invalid birth date format: {value!r}")
        try:
            first, second, year = (int(p) for p in parts)
        except ValueError:
            raise InvalidBirthDateError(f"Invalid birth date format: {value!r}")

        parsed = _build_date(year, second, first)
        if parsed is None:
            parsed = _build_date(year, first, second)
        if parsed is None:
            raise InvalidBirthDateError(f"Invalid birth date: {value!r}")
        return parsed

    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidBirthDateError(
            f"Invalid birth date format: {value!r}. Expected YYYY-MM-DD or DD/MM/YYYY."
        )


def _to_int(text: str) -> Optional[int]:
    text = text.strip()
    if not text.isdecimal():
        return None
    return int(text)


def parse_birth_time(value: Optional[str]) -> Optional[tuple[int, int]]:
    """Convert a birth time string to (hours, minutes).

    Accepted forms: "14:30" (seconds ignored), "14.30", "1430", "14".

    Returns:
        (hours, minutes), or None when the text is missing, matches no
        accepted form, or is out of range.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    if ":" in text or "." in text:
        separator = ":" if ":" in text else "."
        parts = text.split(separator)
        if len(parts) < 2:
            return None
        hours = _to_int(parts[0])
        minutes = _to_int(parts[1])
    elif len(text) == 4:
        hours = _to_int(text[:2])
        minutes = _to_int(text[2:])
    elif len(text) <= 2:
        hours = _to_int(text)
        minutes = 0
    else:
        hours = minutes = None

    if hours is None or minutes is None or not (0 <= hours <= 23 and 0 <= minutes <= 59):
        logger.warning("Ignoring invalid birth time %r", value)
        return None

    return hours, minutes


def day_of_year(value: date) -> int:
    """Return the 1-based ordinal day within the year (Jan 1 = 1)."""
    return value.timetuple().tm_yday
