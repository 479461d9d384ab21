"""MCP tool definitions and handlers."""

from .insight_tools import INSIGHT_TOOL_NAMES, get_insight_tools, handle_insight_tool
from .profile_tools import PROFILE_TOOL_NAMES, get_profile_tools, handle_profile_tool

__all__ = [
    'INSIGHT_TOOL_NAMES',
    'PROFILE_TOOL_NAMES',
    'get_insight_tools',
    'get_profile_tools',
    'handle_insight_tool',
    'handle_profile_tool',
]
