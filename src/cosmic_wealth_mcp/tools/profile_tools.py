"""Natal profile MCP tools.

Tools for calculating a natal profile, comparing signs, reading today's
cosmic weather and saving the user's birth data and preferences.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from mcp.types import Tool, TextContent

from ..config import ConfigManager
from ..constants import MARKET_TRENDS, RISK_LEVELS, SIGN_ORDER
from ..zodiac import compatibility, cosmic_weather, get_sign
from ..utils.date_parsing import InvalidBirthDateError, parse_birth_date
from ..utils.natal import calculate_natal_profile, moon_sign, sun_sign

logger = logging.getLogger(__name__)

PROFILE_TOOL_NAMES = [
    "calculate_natal_profile",
    "get_compatibility",
    "get_cosmic_weather",
    "save_birth_data",
    "save_preferences",
]

BIRTH_DATA_PROPERTIES = {
    "birth_date": {
        "type": "string",
        "description": "Birth date in YYYY-MM-DD or DD/MM/YYYY format",
    },
    "birth_time": {
        "type": "string",
        "description": "Birth time, e.g. '14:30' (optional; rising sign needs it)",
    },
    "birth_place": {
        "type": "string",
        "description": "Birth city, e.g. 'London' (optional)",
    },
    "birth_lat": {
        "type": "number",
        "description": "Birth latitude in decimal degrees (optional, overrides the city)",
    },
    "birth_lng": {
        "type": "number",
        "description": "Birth longitude in decimal degrees (optional)",
    },
}


class MissingBirthDataError(Exception):
    """Raised when a tool needs birth data and none was given or saved."""
    pass


# ============================================================================
# Tool Definitions
# ============================================================================

def get_profile_tools() -> list[Tool]:
    """Return list of natal profile tool definitions."""
    return [
        Tool(
            name="calculate_natal_profile",
            description=(
                "Calculate a natal wealth profile: sun, moon and rising signs, planet "
                "signs and houses, wealth houses, elemental balance, wealth archetype "
                "and current transits. Uses the saved birth data when no birth_date "
                "is given."
            ),
            inputSchema={
                "type": "object",
                "properties": BIRTH_DATA_PROPERTIES,
            }
        ),
        Tool(
            name="get_compatibility",
            description="Score how well two zodiac signs work together (0-100).",
            inputSchema={
                "type": "object",
                "properties": {
                    "sign_a": {"type": "string", "enum": SIGN_ORDER},
                    "sign_b": {"type": "string", "enum": SIGN_ORDER},
                },
                "required": ["sign_a", "sign_b"]
            }
        ),
        Tool(
            name="get_cosmic_weather",
            description=(
                "Classify the day's energy for a sun sign against the transiting "
                "Sun and Moon."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "sign": {
                        "type": "string",
                        "enum": SIGN_ORDER,
                        "description": "Sun sign to read the weather for",
                    },
                    "date": {
                        "type": "string",
                        "description": "Date in YYYY-MM-DD format (default: today)",
                    },
                },
                "required": ["sign"]
            }
        ),
        Tool(
            name="save_birth_data",
            description=(
                "Save birth data so later tools can run without repeating it. "
                "Ask for the birth date first, then time and place if known."
            ),
            inputSchema={
                "type": "object",
                "properties": BIRTH_DATA_PROPERTIES,
                "required": ["birth_date"]
            }
        ),
        Tool(
            name="save_preferences",
            description="Save the user's name, wealth intention, risk tolerance and market outlook.",
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "intention": {"type": "string"},
                    "risk_tolerance": {"type": "string", "enum": list(RISK_LEVELS)},
                    "market_trend": {"type": "string", "enum": MARKET_TRENDS},
                },
            }
        ),
    ]


# ============================================================================
# Shared helpers
# ============================================================================

def profile_from_arguments(
    arguments: dict,
    config: ConfigManager,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """Calculate a profile from tool arguments, falling back to saved birth data."""
    if arguments.get("birth_date"):
        return calculate_natal_profile(
            arguments["birth_date"],
            arguments.get("birth_time"),
            arguments.get("birth_place"),
            arguments.get("birth_lat"),
            arguments.get("birth_lng"),
            now=now,
        )

    birth_data = config.get_birth_data()
    if not birth_data:
        raise MissingBirthDataError(
            "No birth data given or saved. Provide birth_date or run save_birth_data first."
        )

    return calculate_natal_profile(
        birth_data["date"],
        birth_data.get("time"),
        birth_data.get("place"),
        birth_data.get("latitude"),
        birth_data.get("longitude"),
        now=now,
    )


def format_profile_summary(profile: dict[str, Any]) -> str:
    """Short markdown headline for a profile."""
    if "error" in profile:
        return f"# Natal Profile\n\n{profile['message']}\n\nError: {profile['error']}\n"

    archetype = profile["wealth_archetype"]
    response = "# Natal Profile\n\n"
    response += f"- Sun: {profile['sun_sign']}\n"
    response += f"- Moon: {profile['moon_sign']}\n"
    response += f"- Rising: {profile['rising_sign']}\n"
    response += f"- Dominant element: {profile['elemental']['dominant']}\n"
    response += f"- Wealth archetype: **{archetype['archetype']}**\n\n"
    response += f"{archetype['description']}\n"
    return response


# ============================================================================
# Tool Handlers
# ============================================================================

async def handle_calculate_natal_profile(
    config: ConfigManager,
    arguments: dict,
    now: Optional[datetime] = None,
) -> list[TextContent]:
    """Calculate and return the full natal profile."""
    try:
        profile = profile_from_arguments(arguments, config, now)
        return [
            TextContent(type="text", text=format_profile_summary(profile)),
            TextContent(type="text", text=json.dumps(profile, indent=2)),
        ]

    except MissingBirthDataError as e:
        return [TextContent(type="text", text=str(e))]
    except Exception as e:
        logger.exception("Natal profile calculation failed")
        return [TextContent(type="text", text=f"Error calculating natal profile: {e}")]


async def handle_get_compatibility(arguments: dict) -> list[TextContent]:
    """Score two signs."""
    sign_a = arguments.get("sign_a", "")
    sign_b = arguments.get("sign_b", "")

    unknown = [s for s in (sign_a, sign_b) if get_sign(s) is None]
    if unknown:
        return [TextContent(
            type="text",
            text=f"Unknown sign(s): {', '.join(repr(s) for s in unknown)}. Valid: {', '.join(SIGN_ORDER)}"
        )]

    score = compatibility(sign_a, sign_b)
    data_a, data_b = get_sign(sign_a), get_sign(sign_b)

    response = f"# {sign_a} & {sign_b}\n\n"
    response += f"Compatibility: **{score}/100**\n\n"
    response += f"- {sign_a}: {data_a['element']} {data_a['modality']}\n"
    response += f"- {sign_b}: {data_b['element']} {data_b['modality']}\n"
    return [TextContent(type="text", text=response)]


async def handle_get_cosmic_weather(
    arguments: dict,
    now: Optional[datetime] = None,
) -> list[TextContent]:
    """Cosmic weather for a sign on a given day."""
    sign = arguments.get("sign", "")
    if get_sign(sign) is None:
        return [TextContent(type="text", text=f"Unknown sign: {sign!r}. Valid: {', '.join(SIGN_ORDER)}")]

    try:
        if arguments.get("date"):
            when = parse_birth_date(arguments["date"])
        else:
            when = (now or datetime.now(timezone.utc)).date()
    except InvalidBirthDateError as e:
        return [TextContent(type="text", text=f"Invalid date: {e}")]

    current_sun = sun_sign(when)
    current_moon = moon_sign(when)
    weather = cosmic_weather(sign, current_sun, current_moon)

    response = f"# Cosmic Weather for {sign} - {when.isoformat()}\n\n"
    response += f"Sun in {current_sun}, Moon in {current_moon}\n\n"
    response += f"**{weather['energy']}**: {weather['advice']}\n\n"
    response += "Opportunities: " + ", ".join(weather["opportunities"]) + "\n"
    response += "Cautions: " + ", ".join(weather["cautions"]) + "\n"
    response += f"Lucky timing: {weather['lucky_timing']}\n"
    return [TextContent(type="text", text=response)]


async def handle_save_birth_data(config: ConfigManager, arguments: dict) -> list[TextContent]:
    """Validate and save birth data."""
    try:
        config.set_birth_data(
            date=arguments.get("birth_date", ""),
            time=arguments.get("birth_time"),
            place=arguments.get("birth_place"),
            latitude=arguments.get("birth_lat"),
            longitude=arguments.get("birth_lng"),
        )
        saved = config.get_birth_data()
        response = "Birth data saved.\n\n"
        response += f"- Date: {saved['date']}\n"
        response += f"- Time: {saved['time'] or 'unknown'}\n"
        response += f"- Place: {saved['place'] or 'unknown'}\n"
        return [TextContent(type="text", text=response)]

    except ValueError as e:
        return [TextContent(type="text", text=f"Invalid birth data: {e}")]
    except Exception as e:
        logger.exception("Saving birth data failed")
        return [TextContent(type="text", text=f"Error saving birth data: {e}")]


async def handle_save_preferences(config: ConfigManager, arguments: dict) -> list[TextContent]:
    """Validate and save preferences."""
    try:
        config.set_preferences(
            name=arguments.get("name"),
            intention=arguments.get("intention"),
            risk_tolerance=arguments.get("risk_tolerance"),
            market_trend=arguments.get("market_trend"),
        )
        prefs = config.get_preferences()
        response = "Preferences saved.\n\n"
        for key in ("name", "intention", "risk_tolerance", "market_trend"):
            response += f"- {key}: {prefs.get(key) or 'not set'}\n"
        return [TextContent(type="text", text=response)]

    except ValueError as e:
        return [TextContent(type="text", text=f"Invalid preferences: {e}")]
    except Exception as e:
        logger.exception("Saving preferences failed")
        return [TextContent(type="text", text=f"Error saving preferences: {e}")]


# ============================================================================
# Router
# ============================================================================

async def handle_profile_tool(
    name: str,
    arguments: Any,
    config: ConfigManager,
    now: Optional[datetime] = None,
) -> list[TextContent]:
    """Route natal profile tool calls to appropriate handlers."""
    arguments = arguments or {}

    if name == "calculate_natal_profile":
        return await handle_calculate_natal_profile(config, arguments, now)
    if name == "get_compatibility":
        return await handle_get_compatibility(arguments)
    if name == "get_cosmic_weather":
        return await handle_get_cosmic_weather(arguments, now)
    if name == "save_birth_data":
        return await handle_save_birth_data(config, arguments)
    if name == "save_preferences":
        return await handle_save_preferences(config, arguments)

    return [TextContent(type="text", text=f"Unknown profile tool: {name}")]
