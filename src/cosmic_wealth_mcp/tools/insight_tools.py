"""Insight MCP tools.

Weekly forecast, cosmic alignment, wealth insights and template guidance.
All of them work from a natal profile calculated from the tool arguments or
the saved birth data.
"""

import json
import logging
from datetime import datetime
from typing import Any, Optional

from mcp.types import Tool, TextContent

from ..config import ConfigManager
from ..constants import MARKET_TRENDS
from ..utils.guidance import fallback_guidance
from ..utils.insights import (
    InsightError,
    comprehensive_insights,
    cosmic_alignment_score,
    weekly_forecast,
)
from .profile_tools import BIRTH_DATA_PROPERTIES, MissingBirthDataError, profile_from_arguments

logger = logging.getLogger(__name__)

INSIGHT_TOOL_NAMES = [
    "get_weekly_forecast",
    "get_cosmic_alignment",
    "get_wealth_insights",
    "get_guidance",
]

MARKET_PROPERTIES = {
    "market_trend": {
        "type": "string",
        "enum": MARKET_TRENDS,
        "description": "Current market trend (default: saved preference or neutral)",
    },
    "volatility": {
        "type": "string",
        "enum": ["low", "moderate", "high"],
        "description": "Current market volatility (default: moderate)",
    },
}


# ============================================================================
# Tool Definitions
# ============================================================================

def get_insight_tools() -> list[Tool]:
    """Return list of insight tool definitions."""
    return [
        Tool(
            name="get_weekly_forecast",
            description=(
                "Seven-day wealth forecast: daily highlights, lucky days, "
                "opportunities, challenges and focus areas."
            ),
            inputSchema={
                "type": "object",
                "properties": BIRTH_DATA_PROPERTIES,
            }
        ),
        Tool(
            name="get_cosmic_alignment",
            description="Cosmic alignment score (0-100) for today's sky and market.",
            inputSchema={
                "type": "object",
                "properties": {**BIRTH_DATA_PROPERTIES, "market_trend": MARKET_PROPERTIES["market_trend"]},
            }
        ),
        Tool(
            name="get_wealth_insights",
            description=(
                "Daily, wealth and transit insights plus the weekly forecast, "
                "as structured JSON for grounding generated content."
            ),
            inputSchema={
                "type": "object",
                "properties": {**BIRTH_DATA_PROPERTIES, **MARKET_PROPERTIES},
            }
        ),
        Tool(
            name="get_guidance",
            description=(
                "Personal guidance messages (daily, market, personal, astro weather, "
                "lucky days, focus area) built from the natal profile and saved preferences."
            ),
            inputSchema={
                "type": "object",
                "properties": {**BIRTH_DATA_PROPERTIES, **MARKET_PROPERTIES},
            }
        ),
    ]


def _market(arguments: dict, config: ConfigManager) -> dict[str, Any]:
    trend = arguments.get("market_trend") or config.get_preferences().get("market_trend") or "neutral"
    return {"trend": trend, "volatility": arguments.get("volatility") or "moderate"}


def _lucky_day_limit(config: ConfigManager) -> int:
    return config.get_threshold("lucky_day_limit") or 3


# ============================================================================
# Tool Handlers
# ============================================================================

async def handle_get_weekly_forecast(
    config: ConfigManager,
    arguments: dict,
    now: Optional[datetime] = None,
) -> list[TextContent]:
    """Format the weekly forecast as markdown."""
    profile = profile_from_arguments(arguments, config, now)
    forecast = weekly_forecast(profile, lucky_day_limit=_lucky_day_limit(config))

    response = f"# Weekly Forecast - {profile.get('sun_sign', 'Unknown')} Sun\n\n"
    response += f"{forecast['overview']}\n\n"
    response += "## Daily Highlights\n\n"
    for day, highlight in forecast["daily_highlights"].items():
        response += f"- **{day}**: {highlight}\n"
    response += "\n## Lucky Days\n\n" + ", ".join(forecast["lucky_days"]) + "\n"
    response += "\n## Opportunities\n\n" + "".join(f"- {o}\n" for o in forecast["opportunities"])
    response += "\n## Challenges\n\n" + "".join(f"- {c}\n" for c in forecast["challenges"])
    response += "\n## Focus Areas\n\n" + "".join(f"- {f}\n" for f in forecast["focus_areas"])
    return [TextContent(type="text", text=response)]


async def handle_get_cosmic_alignment(
    config: ConfigManager,
    arguments: dict,
    now: Optional[datetime] = None,
) -> list[TextContent]:
    profile = profile_from_arguments(arguments, config, now)
    market = _market(arguments, config)
    score = cosmic_alignment_score(profile, market["trend"], now)
    return [TextContent(
        type="text",
        text=f"Cosmic alignment: **{score}/100** (market trend: {market['trend']})"
    )]


async def handle_get_wealth_insights(
    config: ConfigManager,
    arguments: dict,
    now: Optional[datetime] = None,
) -> list[TextContent]:
    profile = profile_from_arguments(arguments, config, now)
    insights = comprehensive_insights(
        profile,
        _market(arguments, config),
        config.get_preferences().get("risk_tolerance"),
    )
    return [TextContent(type="text", text=json.dumps(insights, indent=2))]


async def handle_get_guidance(
    config: ConfigManager,
    arguments: dict,
    now: Optional[datetime] = None,
) -> list[TextContent]:
    profile = profile_from_arguments(arguments, config, now)
    guidance = fallback_guidance(profile, config.get_preferences(), _market(arguments, config), now)

    response = "# Cosmic Guidance\n\n"
    response += f"**Daily**: {guidance['daily']}\n\n"
    response += f"**Market**: {guidance['market']}\n\n"
    response += f"**Personal**: {guidance['personal']}\n\n"
    response += f"**Astro weather**: {guidance['astro_weather']}\n\n"
    response += f"**Quantum field**: {guidance['quantum_field']}\n\n"
    response += f"Lucky days: {', '.join(guidance['lucky_days'])}\n"
    response += f"Focus area: {guidance['focus_area']}\n"
    response += f"Cosmic alignment: {guidance['cosmic_alignment']}/100\n"
    return [TextContent(type="text", text=response)]


# ============================================================================
# Router
# ============================================================================

async def handle_insight_tool(
    name: str,
    arguments: Any,
    config: ConfigManager,
    now: Optional[datetime] = None,
) -> list[TextContent]:
    """Route insight tool calls to appropriate handlers."""
    handlers = {
        "get_weekly_forecast": handle_get_weekly_forecast,
        "get_cosmic_alignment": handle_get_cosmic_alignment,
        "get_wealth_insights": handle_get_wealth_insights,
        "get_guidance": handle_get_guidance,
    }

    handler = handlers.get(name)
    if not handler:
        return [TextContent(type="text", text=f"Unknown insight tool: {name}")]

    try:
        return await handler(config, arguments or {}, now)
    except MissingBirthDataError as e:
        return [TextContent(type="text", text=str(e))]
    except InsightError as e:
        return [TextContent(type="text", text=f"Insight error: {e}")]
    except Exception as e:
        logger.exception("Insight tool %s failed", name)
        return [TextContent(type="text", text=f"Error running {name}: {e}")]
