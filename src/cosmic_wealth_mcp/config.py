"""Configuration management for cosmic-wealth-mcp."""

import copy
import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from .constants import MARKET_TRENDS, RISK_LEVELS
from .utils.date_parsing import InvalidBirthDateError, parse_birth_date, parse_birth_time
from .utils.geocoding import get_timezone_for_coords

CONFIG_ENV_VAR = "COSMIC_WEALTH_CONFIG"


class ConfigManager:
    """Stores the user's birth data and preferences between sessions."""

    # Default config location
    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "cosmic-wealth-mcp"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"

    # Default configuration
    DEFAULT_CONFIG = {
        "birth_data": None,
        "preferences": {
            "name": None,
            "intention": None,
            "risk_tolerance": "Moderate",
            "market_trend": "neutral",
        },
        "enabled_tools": [
            "calculate_natal_profile",
            "get_compatibility",
            "get_cosmic_weather",
            "get_weekly_forecast",
            "get_cosmic_alignment",
            "get_wealth_insights",
            "get_guidance",
            "save_birth_data",
            "save_preferences",
        ],
        "thresholds": {
            "lucky_day_limit": 3,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            config_path: Optional custom config file path. When omitted the
                COSMIC_WEALTH_CONFIG environment variable is honoured before
                the default location.
        """
        if config_path is None and os.environ.get(CONFIG_ENV_VAR):
            config_path = Path(os.environ[CONFIG_ENV_VAR])
        self.config_path = Path(config_path) if config_path else self.DEFAULT_CONFIG_FILE
        self.config = self._load_or_create()

    def _load_or_create(self) -> Dict[str, Any]:
        """Load existing config or create default."""
        if self.config_path.exists():
            return self._load()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        config = copy.deepcopy(self.DEFAULT_CONFIG)
        self._save(config)
        return config

    def _load(self) -> Dict[str, Any]:
        """Load config from file."""
        try:
            with open(self.config_path, 'r') as f:
                config = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise ValueError(f"Failed to load config from {self.config_path}: {e}")

        if not isinstance(config, dict):
            raise ValueError(f"Failed to load config from {self.config_path}: not a JSON object")

        # Merge with defaults (in case new keys were added)
        merged = copy.deepcopy(self.DEFAULT_CONFIG)
        for key, value in config.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key].update(value)
            else:
                merged[key] = value
        return merged

    def _save(self, config: Dict[str, Any]) -> None:
        """Save config to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(config, f, indent=2)
        except IOError as e:
            raise ValueError(f"Failed to save config to {self.config_path}: {e}")

    def save(self) -> None:
        """Save current config to file."""
        self._save(self.config)

    # Birth data methods

    def get_birth_data(self) -> Optional[Dict[str, Any]]:
        """Get birth data if configured."""
        return self.config.get("birth_data")

    def set_birth_data(
        self,
        date: str,
        time: Optional[str] = None,
        place: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        timezone: Optional[str] = None,
    ) -> None:
        """
        Set birth data.

        Args:
            date: Birth date, YYYY-MM-DD or DD/MM/YYYY
            time: Optional birth time (HH:MM, HH.MM, HHMM or HH)
            place: Optional birth place name
            latitude: Optional latitude in decimal degrees
            longitude: Optional longitude in decimal degrees
            timezone: Optional IANA timezone; looked up from the
                coordinates when both are given and it is omitted
        """
        try:
            parsed = parse_birth_date(date)
        except InvalidBirthDateError as e:
            raise ValueError(str(e))

        if time is not None and parse_birth_time(time) is None:
            raise ValueError(f"Invalid time format: {time}. Use HH:MM, HH.MM, HHMM or HH")

        if latitude is not None and not -90 <= latitude <= 90:
            raise ValueError(f"Invalid latitude: {latitude}. Must be between -90 and 90")
        if longitude is not None and not -180 <= longitude <= 180:
            raise ValueError(f"Invalid longitude: {longitude}. Must be between -180 and 180")
        if (latitude is None) != (longitude is None):
            raise ValueError("Latitude and longitude must be given together")

        if timezone is None and latitude is not None:
            timezone = get_timezone_for_coords(latitude, longitude)

        self.config["birth_data"] = {
            "date": parsed.isoformat(),
            "time": time,
            "place": place,
            "latitude": latitude,
            "longitude": longitude,
            "timezone": timezone,
        }
        self.save()

    # Preferences

    def get_preferences(self) -> Dict[str, Any]:
        return dict(self.config.get("preferences") or {})

    def set_preferences(
        self,
        name: Optional[str] = None,
        intention: Optional[str] = None,
        risk_tolerance: Optional[str] = None,
        market_trend: Optional[str] = None,
    ) -> None:
        """
        Update user preferences. Arguments left as None keep their value.

        Args:
            name: Display name used in guidance text
            intention: Free-text wealth intention
            risk_tolerance: One of the known risk labels (e.g. "Moderate")
            market_trend: bullish, bearish or neutral
        """
        if risk_tolerance is not None and risk_tolerance not in RISK_LEVELS:
            raise ValueError(
                f"Invalid risk tolerance: {risk_tolerance}. Valid: {list(RISK_LEVELS)}"
            )
        if market_trend is not None:
            market_trend = market_trend.lower()
            if market_trend not in MARKET_TRENDS:
                raise ValueError(f"Invalid market trend: {market_trend}. Valid: {MARKET_TRENDS}")

        preferences = self.config.setdefault("preferences", {})
        updates = {
            "name": name,
            "intention": intention,
            "risk_tolerance": risk_tolerance,
            "market_trend": market_trend,
        }
        for key, value in updates.items():
            if value is not None:
                preferences[key] = value
        self.save()

    # Thresholds

    def get_threshold(self, name: str) -> Optional[Any]:
        """Get a specific threshold value."""
        return self.config.get("thresholds", {}).get(name)

    def set_threshold(self, name: str, value: Any) -> None:
        """Set a threshold value."""
        if "thresholds" not in self.config:
            self.config["thresholds"] = {}

        self.config["thresholds"][name] = value
        self.save()

    # Enabled tools

    def is_tool_enabled(self, tool_name: str) -> bool:
        """Check if a tool is enabled."""
        return tool_name in self.config.get("enabled_tools", [])

    def enable_tool(self, tool_name: str) -> None:
        """Enable a tool."""
        if "enabled_tools" not in self.config:
            self.config["enabled_tools"] = []

        if tool_name not in self.config["enabled_tools"]:
            self.config["enabled_tools"].append(tool_name)
            self.save()

    def disable_tool(self, tool_name: str) -> None:
        """Disable a tool."""
        if tool_name in self.config.get("enabled_tools", []):
            self.config["enabled_tools"].remove(tool_name)
            self.save()

    # Validation

    def is_configured(self) -> bool:
        """Check if birth data has been saved."""
        return self.get_birth_data() is not None

    def get_config_status(self) -> Dict[str, Any]:
        """Get configuration status for display."""
        birth_data = self.get_birth_data()

        return {
            "configured": self.is_configured(),
            "has_birth_data": birth_data is not None,
            "birth_place": birth_data.get("place") if birth_data else None,
            "preferences": self.get_preferences(),
            "config_path": str(self.config_path),
        }
