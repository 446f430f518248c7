"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from datetime import date
from pathlib import Path
from unittest.mock import Mock

import pytest
import json

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Reference date used by calibration tests
TODAY = date(2025, 6, 15)


def _load(fixtures_dir, name):
    with open(fixtures_dir / name) as f:
        return json.load(f)


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def today():
    """Fixed calendar date for calibration checks."""
    return TODAY


@pytest.fixture
def equipment_response(fixtures_dir):
    """Equipment registry response."""
    return _load(fixtures_dir, "equipment.json")


@pytest.fixture
def pump_calibration_responses(fixtures_dir):
    """Pump calibration responses keyed by pump ID."""
    return _load(fixtures_dir, "pump_calibrations.json")


@pytest.fixture
def flowmeter_calibration_responses(fixtures_dir):
    """Flowmeter calibration responses keyed by flowmeter reference."""
    return _load(fixtures_dir, "flowmeter_calibrations.json")


@pytest.fixture
def shift_record(fixtures_dir):
    """Air monitoring shift with populated job."""
    return _load(fixtures_dir, "shift.json")


@pytest.fixture
def project_samples(fixtures_dir):
    """Samples already recorded in the project."""
    return _load(fixtures_dir, "project_samples.json")


@pytest.fixture
def sample_record(fixtures_dir):
    """Persisted air monitoring sample."""
    return _load(fixtures_dir, "sample.json")


@pytest.fixture
def mock_api(
    equipment_response,
    pump_calibration_responses,
    flowmeter_calibration_responses,
    shift_record,
    project_samples,
    sample_record
):
    """API client mock answering from the JSON fixtures."""
    api = Mock()
    api.get_equipment.return_value = equipment_response["equipment"]
    api.get_pump_calibrations.side_effect = (
        lambda pump_id, page=1, limit=50: pump_calibration_responses[pump_id]["data"]
    )
    api.get_flowmeter_calibrations.side_effect = (
        lambda reference: flowmeter_calibration_responses[reference]["data"]
    )
    api.get_shift.return_value = shift_record
    api.get_samples_by_shift.return_value = []
    api.get_samples_by_project.return_value = project_samples
    api.get_sample.return_value = sample_record
    api.get_iaq_sample.return_value = sample_record
    api.create_sample.side_effect = lambda data: dict(data, _id="new")
    api.update_sample.side_effect = lambda sample_id, data: dict(data, _id=sample_id)
    api.update_iaq_sample.side_effect = lambda sample_id, data: dict(data, _id=sample_id)
    api.update_shift.side_effect = lambda shift_id, data: dict(shift_record, **data)
    return api


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring API access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
