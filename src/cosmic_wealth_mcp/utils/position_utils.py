"""Shared sign arithmetic.

Offset math over the canonical sign order. Used by the natal calculator for
house rotation and for the adjacent-sign fallbacks of the inner planets.
"""

from ..constants import SIGN_INDEX, SIGN_ORDER


def adjacent_sign(sign: str, offset: int) -> str:
    """Return the sign `offset` places away from `sign` in canonical order.

    Args:
        sign: Full sign name (e.g., 'Capricorn')
        offset: Signed step count; -1 is the previous sign.

    Returns:
        The shifted sign name. Values that are not sign names come back
        unchanged.

    Example:
        adjacent_sign("Capricorn", -1) -> "Sagittarius"
        adjacent_sign("Pisces", 1) -> "Aries"
    """
    index = SIGN_INDEX.get(sign)
    if index is None:
        return sign
    return SIGN_ORDER[(index + offset) % 12]


def house_sign(rising_sign: str, house_number: int) -> str:
    """Return the sign on a house cusp, counting houses from the rising sign.

    Args:
        rising_sign: Rising sign name (house 1).
        house_number: 1-based house number.

    Returns:
        Sign name. An unresolved rising sign is returned unchanged, so an
        "Unknown" rising sign yields "Unknown" for every house.

    Example:
        house_sign("Aquarius", 2) -> "Pisces"
    """
    index = SIGN_INDEX.get(rising_sign)
    if index is None:
        return rising_sign
    return SIGN_ORDER[(index + house_number - 1) % 12]


def houses_from_rising(rising_sign: str) -> dict[int, str]:
    """Map houses 1-12 to signs by rotating the wheel to the rising sign."""
    return {n: house_sign(rising_sign, n) for n in range(1, 13)}
