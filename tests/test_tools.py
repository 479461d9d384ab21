"""Tests for the MCP tool handlers and server dispatch."""

import json
from datetime import datetime, timezone

import pytest

import cosmic_wealth_mcp.server as server_module
from cosmic_wealth_mcp.config import ConfigManager
from cosmic_wealth_mcp.tools import (
    INSIGHT_TOOL_NAMES,
    PROFILE_TOOL_NAMES,
    get_insight_tools,
    get_profile_tools,
    handle_insight_tool,
    handle_profile_tool,
)
from cosmic_wealth_mcp.tools.profile_tools import (
    MissingBirthDataError,
    handle_get_compatibility,
    handle_get_cosmic_weather,
    profile_from_arguments,
)

NOW = datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def config(tmp_path):
    return ConfigManager(config_path=tmp_path / "config.json")


@pytest.fixture
def configured(config):
    config.set_birth_data(date="1993-12-30", time="14:30")
    return config


@pytest.fixture
def server_config(config, monkeypatch):
    """Point the server's lazy config at a temporary file."""
    monkeypatch.setattr(server_module, "config", config)
    return config


# ============================================================================
# Definitions
# ============================================================================

class TestToolDefinitions:

    def test_names_match_definitions(self):
        assert [t.name for t in get_profile_tools()] == PROFILE_TOOL_NAMES
        assert [t.name for t in get_insight_tools()] == INSIGHT_TOOL_NAMES

    def test_names_are_enabled_by_default(self):
        assert set(ConfigManager.DEFAULT_CONFIG["enabled_tools"]) == set(PROFILE_TOOL_NAMES + INSIGHT_TOOL_NAMES)

    def test_schemas_are_objects(self):
        for tool in get_profile_tools() + get_insight_tools():
            assert tool.inputSchema["type"] == "object"


# ============================================================================
# Profile tools
# ============================================================================

class TestProfileFromArguments:

    def test_arguments_win(self, configured):
        profile = profile_from_arguments({"birth_date": "2000-07-30"}, configured, NOW)
        assert profile["sun_sign"] == "Leo"

    def test_saved_birth_data(self, configured):
        profile = profile_from_arguments({}, configured, NOW)

        assert profile["sun_sign"] == "Capricorn"
        assert profile["rising_sign"] == "Aquarius"

    def test_nothing_available(self, config):
        with pytest.raises(MissingBirthDataError):
            profile_from_arguments({}, config, NOW)


class TestProfileHandlers:

    @pytest.mark.asyncio
    async def test_calculate_natal_profile(self, config):
        result = await handle_profile_tool(
            "calculate_natal_profile", {"birth_date": "1993-12-30"}, config, NOW
        )

        assert len(result) == 2
        assert "Sun: Capricorn" in result[0].text
        data = json.loads(result[1].text)
        assert data["moon_sign"] == "Cancer"
        assert data["rising_sign"] == "Unknown"

    @pytest.mark.asyncio
    async def test_calculate_natal_profile_bad_date(self, config):
        result = await handle_profile_tool(
            "calculate_natal_profile", {"birth_date": "31/02/2020"}, config, NOW
        )

        data = json.loads(result[1].text)
        assert data["sun_sign"] == "Unknown"
        assert "error" in data

    @pytest.mark.asyncio
    async def test_calculate_natal_profile_without_birth_data(self, config):
        result = await handle_profile_tool("calculate_natal_profile", {}, config, NOW)

        assert len(result) == 1
        assert "No birth data" in result[0].text

    @pytest.mark.asyncio
    async def test_compatibility(self):
        result = await handle_get_compatibility({"sign_a": "Aries", "sign_b": "Leo"})
        assert "100/100" in result[0].text

    @pytest.mark.asyncio
    async def test_compatibility_unknown_sign(self):
        result = await handle_get_compatibility({"sign_a": "Aries", "sign_b": "Ophiuchus"})
        assert "Unknown sign" in result[0].text

    @pytest.mark.asyncio
    async def test_cosmic_weather_for_date(self):
        result = await handle_get_cosmic_weather({"sign": "Capricorn", "date": "1993-12-30"})
        text = result[0].text

        assert "Sun in Capricorn, Moon in Cancer" in text
        assert "1993-12-30" in text

    @pytest.mark.asyncio
    async def test_cosmic_weather_defaults_to_now(self):
        result = await handle_get_cosmic_weather({"sign": "Leo"}, NOW)
        assert "2024-01-02" in result[0].text

    @pytest.mark.asyncio
    async def test_cosmic_weather_bad_date(self):
        result = await handle_get_cosmic_weather({"sign": "Leo", "date": "someday"})
        assert "Invalid date" in result[0].text

    @pytest.mark.asyncio
    async def test_save_birth_data(self, config):
        result = await handle_profile_tool(
            "save_birth_data", {"birth_date": "1993-12-30", "birth_place": "London"}, config
        )

        assert "Birth data saved" in result[0].text
        assert config.get_birth_data()["place"] == "London"

    @pytest.mark.asyncio
    async def test_save_birth_data_invalid(self, config):
        result = await handle_profile_tool("save_birth_data", {"birth_date": "nope"}, config)

        assert "Invalid birth data" in result[0].text
        assert config.get_birth_data() is None

    @pytest.mark.asyncio
    async def test_save_preferences(self, config):
        result = await handle_profile_tool(
            "save_preferences", {"name": "Ada", "market_trend": "bearish"}, config
        )

        assert "Preferences saved" in result[0].text
        assert config.get_preferences()["market_trend"] == "bearish"

    @pytest.mark.asyncio
    async def test_save_preferences_invalid(self, config):
        result = await handle_profile_tool("save_preferences", {"market_trend": "up"}, config)
        assert "Invalid preferences" in result[0].text

    @pytest.mark.asyncio
    async def test_unknown_tool(self, config):
        result = await handle_profile_tool("nope", {}, config)
        assert "Unknown profile tool" in result[0].text


# ============================================================================
# Insight tools
# ============================================================================

class TestInsightHandlers:

    @pytest.mark.asyncio
    async def test_weekly_forecast(self, configured):
        result = await handle_insight_tool("get_weekly_forecast", {}, configured, NOW)
        text = result[0].text

        assert "# Weekly Forecast - Capricorn Sun" in text
        assert "**Monday**" in text
        assert "Wednesday, Friday, Monday" in text

    @pytest.mark.asyncio
    async def test_weekly_forecast_respects_lucky_day_limit(self, configured):
        configured.set_threshold("lucky_day_limit", 1)
        result = await handle_insight_tool("get_weekly_forecast", {}, configured, NOW)
        assert "## Lucky Days\n\nWednesday\n" in result[0].text

    @pytest.mark.asyncio
    async def test_cosmic_alignment_unknown_profile(self, config):
        result = await handle_insight_tool(
            "get_cosmic_alignment", {"birth_date": "garbage"}, config, NOW
        )
        assert "50/100" in result[0].text

    @pytest.mark.asyncio
    async def test_cosmic_alignment_uses_saved_trend(self, configured):
        configured.set_preferences(market_trend="bearish")
        result = await handle_insight_tool("get_cosmic_alignment", {}, configured, NOW)
        assert "market trend: bearish" in result[0].text

    @pytest.mark.asyncio
    async def test_wealth_insights_json(self, configured):
        result = await handle_insight_tool(
            "get_wealth_insights", {"volatility": "high"}, configured, NOW
        )
        data = json.loads(result[0].text)

        assert set(data) == {"daily", "wealth", "transits", "weekly"}
        assert len(data["wealth"]) == 3

    @pytest.mark.asyncio
    async def test_guidance(self, configured):
        configured.set_preferences(name="Ada", intention="freedom")
        result = await handle_insight_tool("get_guidance", {}, configured, NOW)
        text = result[0].text

        assert text.startswith("# Cosmic Guidance")
        assert '"freedom"' in text
        assert "Cosmic alignment:" in text

    @pytest.mark.asyncio
    async def test_missing_birth_data(self, config):
        result = await handle_insight_tool("get_guidance", {}, config, NOW)
        assert "No birth data" in result[0].text

    @pytest.mark.asyncio
    async def test_unknown_tool(self, config):
        result = await handle_insight_tool("nope", {}, config)
        assert "Unknown insight tool" in result[0].text


# ============================================================================
# Server dispatch
# ============================================================================

class TestServer:

    @pytest.mark.asyncio
    async def test_list_tools_filters_disabled(self, server_config):
        server_config.disable_tool("get_guidance")

        names = [t.name for t in await server_module.list_tools()]
        assert "get_guidance" not in names
        assert "calculate_natal_profile" in names

    @pytest.mark.asyncio
    async def test_call_tool_routes_profile_tools(self, server_config):
        result = await server_module.call_tool("get_compatibility", {"sign_a": "Aries", "sign_b": "Leo"})
        assert "100/100" in result[0].text

    @pytest.mark.asyncio
    async def test_call_tool_routes_insight_tools(self, server_config):
        result = await server_module.call_tool("get_cosmic_alignment", {"birth_date": "bad"})
        assert "50/100" in result[0].text

    @pytest.mark.asyncio
    async def test_call_tool_disabled(self, server_config):
        server_config.disable_tool("get_compatibility")
        result = await server_module.call_tool("get_compatibility", {"sign_a": "Aries", "sign_b": "Leo"})
        assert "disabled" in result[0].text

    @pytest.mark.asyncio
    async def test_call_tool_unknown(self, server_config):
        server_config.enable_tool("made_up")
        result = await server_module.call_tool("made_up", {})
        assert "Unknown tool" in result[0].text
