"""
Tests for configuration loading and date utilities.
"""

import json
from datetime import date, datetime

import pytest

from src.air_monitoring.core import Config, DateUtils

BASE_CONFIG = {
    "environment": "test",
    "api": {"base_url": "https://records.example.com/api", "timeout": 10, "max_retries": 2},
    "authentication": {"email": "tech@example.com", "password": "secret"},
    "processing": {"timezone": "Australia/Adelaide"},
}


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """Write a config file and clear environment overrides."""
    for name in ("API_BASE_URL", "API_EMAIL", "API_PASSWORD", "TIMEZONE", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)

    def _write(data):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


@pytest.mark.unit
class TestConfig:
    """Test cases for Config."""

    def test_load(self, write_config):
        """Values are read from the file."""
        config = Config(write_config(BASE_CONFIG))

        assert config.api_base_url == "https://records.example.com/api"
        assert config.api_timeout == 10
        assert config.api_max_retries == 2
        assert config.api_verify_ssl is True
        assert config.auth_email == "tech@example.com"
        assert config.timezone == "Australia/Adelaide"
        assert config.get("environment") == "test"

    def test_sampling_defaults(self, write_config):
        """Sampling thresholds fall back to the standard values."""
        config = Config(write_config(BASE_CONFIG))

        assert config.min_volume_25mm == 360.0
        assert config.min_volume_13mm == 72.0
        assert config.drift_tolerance == 0.10

    def test_sampling_overrides(self, write_config):
        """Sampling thresholds can be configured."""
        data = dict(BASE_CONFIG, sampling={"min_volume_25mm": 480, "drift_tolerance": 0.05})
        config = Config(write_config(data))

        assert config.min_volume_25mm == 480
        assert config.min_volume_13mm == 72.0
        assert config.drift_tolerance == 0.05

    def test_missing_file(self, tmp_path):
        """A missing file is reported."""
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "absent.json"))

    def test_missing_section(self, write_config):
        """A missing section is rejected."""
        data = {key: value for key, value in BASE_CONFIG.items() if key != "authentication"}

        with pytest.raises(ValueError, match="authentication"):
            Config(write_config(data))

    def test_missing_key(self, write_config):
        """An empty required key is rejected."""
        data = dict(BASE_CONFIG, authentication={"email": "tech@example.com", "password": ""})

        with pytest.raises(ValueError, match="authentication.password"):
            Config(write_config(data))

    def test_environment_override(self, write_config, monkeypatch):
        """Environment variables win over the file."""
        path = write_config(BASE_CONFIG)
        monkeypatch.setenv("API_BASE_URL", "https://staging.example.com/api")
        monkeypatch.setenv("TIMEZONE", "UTC")

        config = Config(path)

        assert config.api_base_url == "https://staging.example.com/api"
        assert config.timezone == "UTC"

    def test_environment_fills_missing_credentials(self, write_config, monkeypatch):
        """Credentials may come from the environment alone."""
        data = {key: value for key, value in BASE_CONFIG.items() if key != "authentication"}
        path = write_config(data)
        monkeypatch.setenv("API_EMAIL", "env@example.com")
        monkeypatch.setenv("API_PASSWORD", "env-secret")

        config = Config(path)

        assert config.auth_email == "env@example.com"
        assert config.auth_password == "env-secret"


@pytest.mark.unit
class TestDateUtils:
    """Test cases for DateUtils."""

    def test_utc_string(self):
        """ISO strings with Z are truncated to the UTC date."""
        assert DateUtils("UTC").to_date("2025-03-01T23:30:00.000Z") == date(2025, 3, 1)

    def test_timezone_shift(self):
        """Late UTC times roll over to the next local day."""
        date_utils = DateUtils("Australia/Adelaide")
        assert date_utils.to_date("2025-03-01T23:30:00.000Z") == date(2025, 3, 2)

    def test_plain_date(self):
        """A plain date string is taken as is."""
        assert DateUtils("Pacific/Auckland").to_date("2025-03-01") == date(2025, 3, 1)

    def test_date_and_datetime_values(self):
        """Date objects pass through and naive datetimes are treated as UTC."""
        date_utils = DateUtils("UTC")
        assert date_utils.to_date(date(2025, 3, 1)) == date(2025, 3, 1)
        assert date_utils.to_date(datetime(2025, 3, 1, 12, 0)) == date(2025, 3, 1)

    def test_empty_and_invalid(self):
        """Empty and unparseable values give None."""
        date_utils = DateUtils("UTC")
        assert date_utils.to_date(None) is None
        assert date_utils.to_date("") is None
        assert date_utils.to_date("not a date") is None
        assert date_utils.to_date(12345) is None

    def test_today(self):
        """Today is evaluated in the configured timezone."""
        date_utils = DateUtils("Australia/Adelaide")
        assert date_utils.today(datetime(2025, 6, 14, 20, 0)) == date(2025, 6, 15)

    def test_invalid_timezone(self):
        """Unknown timezones are rejected."""
        with pytest.raises(ValueError):
            DateUtils("Mars/Olympus_Mons")

    def test_days_between(self):
        """Days between two dates may be negative."""
        assert DateUtils.days_between(date(2025, 1, 1), date(2025, 1, 31)) == 30
        assert DateUtils.days_between(date(2025, 1, 31), date(2025, 1, 1)) == -30
