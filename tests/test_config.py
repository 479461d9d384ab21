"""Unit tests for configuration manager."""

import json

import pytest

from cosmic_wealth_mcp.config import CONFIG_ENV_VAR, ConfigManager


@pytest.fixture
def temp_config_path(tmp_path):
    """Create a temporary config file path."""
    return tmp_path / "test_config.json"


@pytest.fixture(scope="function")  # Ensure fresh instance per test
def config_manager(tmp_path):
    """Create a config manager with temporary path."""
    return ConfigManager(config_path=tmp_path / "config.json")


class TestConfigManager:
    """Test configuration management."""

    def test_creates_default_config(self, temp_config_path):
        """Test that default config is created if none exists."""
        manager = ConfigManager(config_path=temp_config_path)

        assert temp_config_path.exists()
        assert manager.config["birth_data"] is None
        assert manager.get_threshold("lucky_day_limit") == 3
        assert manager.get_preferences()["market_trend"] == "neutral"

    def test_defaults_are_not_shared(self, tmp_path):
        first = ConfigManager(config_path=tmp_path / "a.json")
        first.config["preferences"]["name"] = "Ada"

        second = ConfigManager(config_path=tmp_path / "b.json")
        assert second.get_preferences()["name"] is None

    def test_loads_existing_config(self, temp_config_path):
        """Test loading existing configuration."""
        test_config = {
            "birth_data": {"date": "2000-01-01"},
            "preferences": {"name": "Ada"},
        }
        with open(temp_config_path, 'w') as f:
            json.dump(test_config, f)

        manager = ConfigManager(config_path=temp_config_path)
        assert manager.config["birth_data"]["date"] == "2000-01-01"
        assert manager.get_preferences()["name"] == "Ada"
        # Missing nested keys come from the defaults
        assert manager.get_preferences()["risk_tolerance"] == "Moderate"

    def test_corrupt_config_raises(self, temp_config_path):
        temp_config_path.write_text("{not json")

        with pytest.raises(ValueError, match="Failed to load config"):
            ConfigManager(config_path=temp_config_path)

    def test_env_var_overrides_default_path(self, tmp_path, monkeypatch):
        path = tmp_path / "from_env.json"
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        manager = ConfigManager()
        assert manager.config_path == path
        assert path.exists()


class TestBirthData:
    """set_birth_data() validation."""

    def test_set_birth_data(self, config_manager):
        config_manager.set_birth_data(
            date="30/12/1993",
            time="14:30",
            place="London",
            latitude=51.5074,
            longitude=-0.1278,
        )

        birth_data = config_manager.get_birth_data()
        assert birth_data["date"] == "1993-12-30"
        assert birth_data["time"] == "14:30"
        assert birth_data["place"] == "London"
        assert birth_data["timezone"] == "Europe/London"

    def test_date_only(self, config_manager):
        config_manager.set_birth_data(date="1993-12-30")

        assert config_manager.is_configured()
        assert config_manager.get_birth_data()["time"] is None

    def test_persists(self, config_manager):
        config_manager.set_birth_data(date="1993-12-30", time="0930")

        reloaded = ConfigManager(config_path=config_manager.config_path)
        assert reloaded.get_birth_data()["time"] == "0930"

    def test_invalid_date(self, config_manager):
        with pytest.raises(ValueError, match="Invalid birth date"):
            config_manager.set_birth_data(date="31/02/2020")

    def test_invalid_time(self, config_manager):
        with pytest.raises(ValueError, match="Invalid time format"):
            config_manager.set_birth_data(date="1993-12-30", time="25:00")

    def test_invalid_latitude(self, config_manager):
        with pytest.raises(ValueError, match="Invalid latitude"):
            config_manager.set_birth_data(date="1993-12-30", latitude=91.0, longitude=0.0)

    def test_invalid_longitude(self, config_manager):
        with pytest.raises(ValueError, match="Invalid longitude"):
            config_manager.set_birth_data(date="1993-12-30", latitude=0.0, longitude=-181.0)

    def test_coordinates_must_be_paired(self, config_manager):
        with pytest.raises(ValueError, match="together"):
            config_manager.set_birth_data(date="1993-12-30", latitude=10.0)

    def test_failed_validation_keeps_old_data(self, config_manager):
        config_manager.set_birth_data(date="1993-12-30")
        with pytest.raises(ValueError):
            config_manager.set_birth_data(date="garbage")
        assert config_manager.get_birth_data()["date"] == "1993-12-30"


class TestPreferences:
    """set_preferences() validation."""

    def test_partial_update(self, config_manager):
        config_manager.set_preferences(name="Ada", market_trend="Bullish")
        config_manager.set_preferences(intention="freedom")

        prefs = config_manager.get_preferences()
        assert prefs["name"] == "Ada"
        assert prefs["market_trend"] == "bullish"
        assert prefs["intention"] == "freedom"

    def test_invalid_trend(self, config_manager):
        with pytest.raises(ValueError, match="Invalid market trend"):
            config_manager.set_preferences(market_trend="sideways")

    def test_invalid_risk(self, config_manager):
        with pytest.raises(ValueError, match="Invalid risk tolerance"):
            config_manager.set_preferences(risk_tolerance="Reckless")


class TestToolsAndStatus:

    def test_all_tools_enabled_by_default(self, config_manager):
        assert config_manager.is_tool_enabled("get_weekly_forecast")
        assert config_manager.is_tool_enabled("save_birth_data")

    def test_disable_and_enable(self, config_manager):
        config_manager.disable_tool("get_guidance")
        assert not config_manager.is_tool_enabled("get_guidance")

        config_manager.enable_tool("get_guidance")
        assert config_manager.is_tool_enabled("get_guidance")

    def test_status(self, config_manager):
        status = config_manager.get_config_status()

        assert status["configured"] is False
        assert status["config_path"] == str(config_manager.config_path)
