"""
Flow rate catalog rules.

Builds the list of flow rates a pump may be run at from its current
calibration, and narrows it by filter size.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional

from ..core import constants
from ..models import PumpCalibration


def is_thirteen_mm_flowrate(flowrate: float) -> bool:
    """Check whether a flow rate (L/min) is the 13mm filter rate."""
    return abs(flowrate - constants.THIRTEEN_MM_FLOWRATE) < constants.FLOWRATE_EPSILON


def has_thirteen_mm_flowrate(flowrates: Iterable[float]) -> bool:
    """Check whether a catalog offers the 13mm filter rate."""
    return any(is_thirteen_mm_flowrate(flowrate) for flowrate in flowrates)


def filter_for_filter_size(flowrates: Iterable[float], filter_size: Optional[str]) -> List[float]:
    """
    Narrow a flow rate catalog to those compatible with a filter size.

    13mm filters only run at 1.5 L/min; every other selection (including
    none) excludes that rate.

    Args:
        flowrates: Flow rate catalog (L/min)
        filter_size: Selected filter size ("13mm", "25mm" or empty)

    Returns:
        Compatible flow rates, in catalog order
    """
    if filter_size == constants.FILTER_13MM:
        return [flowrate for flowrate in flowrates if is_thirteen_mm_flowrate(flowrate)]

    return [
        flowrate for flowrate in flowrates
        if abs(flowrate - constants.THIRTEEN_MM_FLOWRATE) > constants.FLOWRATE_EPSILON
    ]


class FlowrateCatalog:
    """Extract usable flow rates from a pump's calibration history."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize catalog builder.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def current_calibration(
        calibrations: Iterable[PumpCalibration],
        today: date
    ) -> Optional[PumpCalibration]:
        """
        Find the calibration currently in force.

        Calibrations are expected most-recent-first; the first one whose next
        due date is today or later wins.

        Args:
            calibrations: Pump calibration history
            today: Current calendar date

        Returns:
            Current calibration, or None if every calibration has expired
        """
        for calibration in calibrations:
            if calibration.next_calibration_due is None:
                continue
            if calibration.next_calibration_due >= today:
                return calibration
        return None

    def build(self, calibrations: Iterable[PumpCalibration], today: date) -> List[float]:
        """
        Build the flow rate catalog (L/min) for a pump.

        Args:
            calibrations: Pump calibration history, most-recent-first
            today: Current calendar date

        Returns:
            Sorted, de-duplicated passed flow rates in L/min
        """
        current = self.current_calibration(calibrations, today)
        if current is None:
            self.logger.debug("No calibration currently in force")
            return []

        flowrates: List[float] = []
        for result in current.test_results:
            if not result.passed:
                continue
            flowrate = result.set_flowrate / constants.ML_PER_LITRE
            if flowrate not in flowrates:
                flowrates.append(flowrate)

        flowrates.sort()
        return flowrates
