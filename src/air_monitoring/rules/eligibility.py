"""
Calibration eligibility rules.

Decides whether an air pump or site flowmeter may be used for sampling,
based on its manual status and calibration history.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from ..core import constants
from ..core.date_utils import DateUtils
from ..models import (
    Equipment,
    EquipmentSnapshot,
    EquipmentStatus,
    FlowmeterCalibration,
    PumpCalibration,
)


class CalibrationEligibility:
    """Derive equipment status from calibration data."""

    def __init__(
        self,
        frequency_days: int = constants.CALIBRATION_FREQUENCY_DAYS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize eligibility rules.

        Args:
            frequency_days: Window (days back from today) in which a pump must
                            have a calibration with a passed test
            logger: Logger instance
        """
        self.frequency_days = frequency_days
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def days_until_calibration(calibration_due: Optional[date], today: date) -> Optional[int]:
        """
        Days until calibration is due (negative when overdue).

        Args:
            calibration_due: Calibration due date
            today: Current calendar date

        Returns:
            Number of days, or None when no due date is known
        """
        if calibration_due is None:
            return None
        return DateUtils.days_between(today, calibration_due)

    @staticmethod
    def is_flowmeter(snapshot: EquipmentSnapshot) -> bool:
        """Flowmeter-shaped snapshots carry no pump calibration aggregates."""
        return (
            snapshot.equipment_type == constants.SITE_FLOWMETER
            or (
                snapshot.all_calibrations is None
                and snapshot.most_recent_calibration is None
            )
        )

    def calculate_status(
        self,
        snapshot: Optional[EquipmentSnapshot],
        today: date
    ) -> EquipmentStatus:
        """
        Calculate the derived status of a piece of equipment.

        Args:
            snapshot: Equipment with calibration aggregates
            today: Current calendar date

        Returns:
            Derived equipment status
        """
        if snapshot is None:
            return EquipmentStatus.OUT_OF_SERVICE

        if snapshot.equipment.status == constants.MANUAL_OUT_OF_SERVICE:
            return EquipmentStatus.OUT_OF_SERVICE

        if snapshot.last_calibration is None or snapshot.calibration_due is None:
            return EquipmentStatus.OUT_OF_SERVICE

        if self.is_flowmeter(snapshot):
            return self._status_from_due_date(snapshot.calibration_due, today)

        most_recent = snapshot.most_recent_calibration
        if most_recent is not None and most_recent.test_results:
            if all(not result.passed for result in most_recent.test_results):
                self.logger.debug(
                    f"{snapshot.reference}: all tests failed in most recent calibration"
                )
                return EquipmentStatus.OUT_OF_SERVICE

        if not self._has_passed_test_in_frequency(snapshot.all_calibrations or [], today):
            self.logger.debug(
                f"{snapshot.reference}: no passed calibration in the last "
                f"{self.frequency_days} days"
            )
            return EquipmentStatus.OUT_OF_SERVICE

        return self._status_from_due_date(snapshot.calibration_due, today)

    def _status_from_due_date(self, calibration_due: date, today: date) -> EquipmentStatus:
        days_until = self.days_until_calibration(calibration_due, today)
        if days_until is not None and days_until < 0:
            return EquipmentStatus.CALIBRATION_OVERDUE
        return EquipmentStatus.ACTIVE

    def _has_passed_test_in_frequency(
        self,
        calibrations: Iterable[PumpCalibration],
        today: date
    ) -> bool:
        window_start = today - timedelta(days=self.frequency_days)

        for calibration in calibrations:
            if calibration.calibration_date is None:
                continue
            if window_start <= calibration.calibration_date <= today:
                if any(result.passed for result in calibration.test_results):
                    return True

        return False

    def filter_active(
        self,
        snapshots: Iterable[EquipmentSnapshot],
        today: date
    ) -> List[EquipmentSnapshot]:
        """
        Keep only active equipment, sorted by equipment reference.

        Args:
            snapshots: Equipment snapshots
            today: Current calendar date

        Returns:
            Active snapshots
        """
        active = [
            snapshot for snapshot in snapshots
            if self.calculate_status(snapshot, today) == EquipmentStatus.ACTIVE
        ]
        return sorted(active, key=lambda snapshot: snapshot.reference)

    @staticmethod
    def pump_snapshot(
        equipment: Equipment,
        calibrations: Optional[List[PumpCalibration]]
    ) -> EquipmentSnapshot:
        """
        Build pump calibration aggregates.

        Calibrations are ordered most-recent-first. A None calibration list
        (fetch failure) yields a snapshot without calibration data.

        Args:
            equipment: Air pump
            calibrations: Pump calibration history, or None when unavailable

        Returns:
            Equipment snapshot
        """
        if calibrations is None:
            return EquipmentSnapshot(equipment=equipment)

        ordered = sorted(
            calibrations,
            key=lambda cal: cal.calibration_date or date.min,
            reverse=True
        )

        calibration_dates = [cal.calibration_date for cal in ordered if cal.calibration_date]
        due_dates = [cal.next_calibration_due for cal in ordered if cal.next_calibration_due]

        return EquipmentSnapshot(
            equipment=equipment,
            last_calibration=max(calibration_dates) if calibration_dates else None,
            calibration_due=max(due_dates) if due_dates else None,
            most_recent_calibration=ordered[0] if ordered else None,
            all_calibrations=ordered,
        )

    @staticmethod
    def flowmeter_snapshot(
        equipment: Equipment,
        calibrations: Optional[List[FlowmeterCalibration]]
    ) -> EquipmentSnapshot:
        """
        Build flowmeter calibration aggregates.

        Args:
            equipment: Site flowmeter
            calibrations: Flowmeter calibration history, or None when unavailable

        Returns:
            Equipment snapshot
        """
        if not calibrations:
            return EquipmentSnapshot(equipment=equipment)

        calibration_dates = [cal.date for cal in calibrations if cal.date]
        due_dates = [cal.next_calibration for cal in calibrations if cal.next_calibration]

        return EquipmentSnapshot(
            equipment=equipment,
            last_calibration=max(calibration_dates) if calibration_dates else None,
            calibration_due=max(due_dates) if due_dates else None,
        )
