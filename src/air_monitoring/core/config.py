"""
Configuration module for air monitoring sample rules.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("API_BASE_URL"):
            self.config.setdefault("api", {})["base_url"] = os.getenv("API_BASE_URL")

        if os.getenv("API_EMAIL"):
            self.config.setdefault("authentication", {})["email"] = os.getenv("API_EMAIL")

        if os.getenv("API_PASSWORD"):
            self.config.setdefault("authentication", {})["password"] = os.getenv("API_PASSWORD")

        if os.getenv("TIMEZONE"):
            self.config.setdefault("processing", {})["timezone"] = os.getenv("TIMEZONE")

        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "api": ["base_url", "timeout", "max_retries"],
            "authentication": ["email", "password"],
            "processing": ["timezone"],
        }

        missing_sections = [
            section for section in required_config if section not in self.config
        ]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if self.config[section].get(key) in (None, ""):
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def api_base_url(self) -> str:
        """Get API base URL."""
        return self.get("api.base_url", "")

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds."""
        return self.get("api.timeout", 30)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", 3)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def auth_email(self) -> Optional[str]:
        """Get authentication email."""
        return self.get("authentication.email")

    @property
    def auth_password(self) -> Optional[str]:
        """Get authentication password."""
        return self.get("authentication.password")

    @property
    def timezone(self) -> str:
        """Get the timezone that defines "today" for calibration checks."""
        return self.get("processing.timezone", "UTC")

    @property
    def min_volume_25mm(self) -> float:
        """Get minimum collected volume (L) for 25mm filters."""
        return self.get("sampling.min_volume_25mm", constants.DEFAULT_MIN_VOLUME_25MM)

    @property
    def min_volume_13mm(self) -> float:
        """Get minimum collected volume (L) for 13mm filters."""
        return self.get("sampling.min_volume_13mm", constants.DEFAULT_MIN_VOLUME_13MM)

    @property
    def drift_tolerance(self) -> float:
        """Get allowed flow rate drift as a fraction of the initial flow rate."""
        return self.get("sampling.drift_tolerance", constants.DEFAULT_DRIFT_TOLERANCE)

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
