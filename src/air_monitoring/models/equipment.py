"""
Equipment and calibration data models.

Contains DTOs for air pumps, site flowmeters and their calibration records.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from ..core import constants


class EquipmentStatus(str, Enum):
    """Eligibility of a piece of equipment, derived from its calibrations."""

    ACTIVE = constants.STATUS_ACTIVE
    CALIBRATION_OVERDUE = constants.STATUS_CALIBRATION_OVERDUE
    OUT_OF_SERVICE = constants.STATUS_OUT_OF_SERVICE


@dataclass
class Equipment:
    """Equipment registry entry."""

    id: str
    equipment_type: str
    equipment_reference: str
    status: Optional[str] = None


@dataclass
class CalibrationTestResult:
    """Single flow rate test within a pump calibration."""

    set_flowrate: float  # mL/min
    passed: bool


@dataclass
class PumpCalibration:
    """Air pump calibration record."""

    calibration_date: Optional[date]
    next_calibration_due: Optional[date]
    test_results: List[CalibrationTestResult] = field(default_factory=list)
    id: Optional[str] = None


@dataclass
class FlowmeterCalibration:
    """Site flowmeter calibration record."""

    date: Optional[date]
    next_calibration: Optional[date]
    id: Optional[str] = None


@dataclass
class EquipmentSnapshot:
    """
    Equipment together with its calibration aggregates.

    Flowmeter snapshots leave most_recent_calibration and all_calibrations unset.
    """

    equipment: Equipment
    last_calibration: Optional[date] = None
    calibration_due: Optional[date] = None
    most_recent_calibration: Optional[PumpCalibration] = None
    all_calibrations: Optional[List[PumpCalibration]] = None

    @property
    def id(self) -> str:
        return self.equipment.id

    @property
    def reference(self) -> str:
        return self.equipment.equipment_reference

    @property
    def equipment_type(self) -> str:
        return self.equipment.equipment_type
