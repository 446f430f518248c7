"""
Flow rate drift rules.

Derives the average flow rate and pass/fail status of a sample from its
initial and final flow rates.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from ..core import constants
from ..models import DriftResult


def parse_flowrate(value: Any) -> Optional[float]:
    """
    Parse a flow rate entered on a form.

    Args:
        value: Flow rate as typed (string or number)

    Returns:
        Positive flow rate in L/min, or None when absent or invalid
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        flowrate = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(flowrate) or flowrate <= 0:
        return None

    return flowrate


def format_average(average: float) -> str:
    """
    Format an average flow rate for display.

    One decimal place when that represents the value exactly, otherwise two.
    Halves round up (1.125 shows as "1.13"), working from the shortest
    decimal form of the float.

    Args:
        average: Average flow rate

    Returns:
        Formatted value
    """
    value = Decimal(repr(average))
    one_decimal = value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    if one_decimal == value:
        return str(one_decimal)
    return str(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class FlowrateDriftResolver:
    """Resolve average flow rate and sample status from flow rate drift."""

    def __init__(self, tolerance: float = constants.DEFAULT_DRIFT_TOLERANCE):
        """
        Initialize drift resolver.

        Args:
            tolerance: Allowed drift as a fraction of the initial flow rate
        """
        self.tolerance = tolerance

    def allowed_drift(self, initial: float) -> float:
        """Maximum allowed |initial - final| for an initial flow rate."""
        return initial * self.tolerance

    def resolve(self, initial_flowrate: Any, final_flowrate: Any) -> DriftResult:
        """
        Derive average flow rate and status.

        Args:
            initial_flowrate: Initial flow rate as entered
            final_flowrate: Final flow rate as entered

        Returns:
            DriftResult; empty average and pending status when either input is missing
        """
        initial = parse_flowrate(initial_flowrate)
        final = parse_flowrate(final_flowrate)

        if initial is None or final is None:
            return DriftResult(average_flowrate="", status=constants.SAMPLE_PENDING)

        average = (initial + final) / 2
        within_tolerance = abs(initial - final) <= self.allowed_drift(initial)

        return DriftResult(
            average_flowrate=format_average(average),
            status=constants.SAMPLE_PENDING if within_tolerance else constants.SAMPLE_FAILED,
        )
