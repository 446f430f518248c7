"""
Tests for flow rate catalog and filter size compatibility.
"""

from datetime import date

import pytest

from src.air_monitoring.models import CalibrationTestResult, PumpCalibration
from src.air_monitoring.rules import (
    FlowrateCatalog,
    filter_for_filter_size,
    has_thirteen_mm_flowrate,
)

TODAY = date(2025, 6, 15)


def calibration(calibrated, due, *results):
    return PumpCalibration(
        calibration_date=calibrated,
        next_calibration_due=due,
        test_results=[CalibrationTestResult(set_flowrate=rate, passed=passed) for rate, passed in results],
    )


@pytest.mark.unit
class TestFlowrateCatalog:
    """Test cases for FlowrateCatalog."""

    @pytest.fixture
    def catalog(self):
        """Create catalog builder."""
        return FlowrateCatalog()

    def test_passed_results_converted_sorted_and_unique(self, catalog):
        """mL/min set points become sorted, de-duplicated L/min."""
        calibrations = [
            calibration(
                date(2025, 3, 1), date(2026, 3, 1),
                (4000, True), (2000, True), (2000, True), (1500, True), (3000, False),
            )
        ]
        assert catalog.build(calibrations, TODAY) == [1.5, 2.0, 4.0]

    def test_uses_first_calibration_still_in_force(self, catalog):
        """Expired calibrations are skipped, most recent first."""
        calibrations = [
            calibration(date(2025, 5, 1), date(2025, 6, 1), (1000, True)),
            calibration(date(2025, 3, 1), date(2026, 3, 1), (2000, True)),
            calibration(date(2024, 3, 1), date(2026, 6, 1), (5000, True)),
        ]
        assert catalog.build(calibrations, TODAY) == [2.0]

    def test_due_today_is_in_force(self, catalog):
        """A calibration due today still provides flow rates."""
        calibrations = [calibration(date(2024, 6, 15), TODAY, (2000, True))]
        assert catalog.build(calibrations, TODAY) == [2.0]

    def test_no_current_calibration(self, catalog):
        """Every calibration has expired."""
        calibrations = [calibration(date(2024, 3, 1), date(2025, 3, 1), (2000, True))]
        assert catalog.build(calibrations, TODAY) == []

    def test_empty_history(self, catalog):
        """No calibrations at all."""
        assert catalog.build([], TODAY) == []

    def test_only_failed_results(self, catalog):
        """Failed results never become flow rates."""
        calibrations = [calibration(date(2025, 3, 1), date(2026, 3, 1), (2000, False))]
        assert catalog.build(calibrations, TODAY) == []


@pytest.mark.unit
class TestFilterCompatibility:
    """Test cases for filter size compatibility."""

    CATALOG = [1.0, 1.5, 2.0, 4.0]

    def test_thirteen_mm_keeps_only_one_point_five(self):
        """13mm filters only run at 1.5 L/min."""
        assert filter_for_filter_size(self.CATALOG, "13mm") == [1.5]

    def test_twenty_five_mm_excludes_one_point_five(self):
        """25mm filters never offer the 13mm rate."""
        assert filter_for_filter_size(self.CATALOG, "25mm") == [1.0, 2.0, 4.0]

    def test_unset_filter_size_excludes_one_point_five(self):
        """No selection behaves like 25mm."""
        assert filter_for_filter_size(self.CATALOG, "") == [1.0, 2.0, 4.0]
        assert filter_for_filter_size(self.CATALOG, None) == [1.0, 2.0, 4.0]

    def test_tolerance_around_one_point_five(self):
        """Values within 0.01 count as the 13mm rate."""
        catalog = [1.495, 1.505, 1.52]
        assert filter_for_filter_size(catalog, "13mm") == [1.495, 1.505]
        assert filter_for_filter_size(catalog, "25mm") == [1.52]

    def test_thirteen_mm_without_one_point_five(self):
        """A catalog without 1.5 offers nothing for 13mm."""
        assert filter_for_filter_size([2.0, 4.0], "13mm") == []
        assert not has_thirteen_mm_flowrate([2.0, 4.0])
        assert has_thirteen_mm_flowrate([1.5, 2.0])
