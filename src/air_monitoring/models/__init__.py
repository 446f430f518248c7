"""
Data models for air monitoring sample rules.

Contains DTOs for equipment, calibrations and sample drafts.
"""

from .equipment import (
    EquipmentStatus,
    Equipment,
    CalibrationTestResult,
    PumpCalibration,
    FlowmeterCalibration,
    EquipmentSnapshot,
)
from .sample import SampleCategory, SampleDraft, DriftResult, SampleWarnings

__all__ = [
    "EquipmentStatus",
    "Equipment",
    "CalibrationTestResult",
    "PumpCalibration",
    "FlowmeterCalibration",
    "EquipmentSnapshot",
    "SampleCategory",
    "SampleDraft",
    "DriftResult",
    "SampleWarnings",
]
