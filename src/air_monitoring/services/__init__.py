"""
Business logic services for air monitoring samples.

Services orchestrate API operations and apply the sample rules.
"""

from .calibration_cache import CalibrationCache
from .equipment_registry import EquipmentRegistry
from .flowrate_service import FlowrateService
from .sample_form import SampleForm, SampleValidationError
from .sample_service import SampleService, ShiftContext

__all__ = [
    "CalibrationCache",
    "EquipmentRegistry",
    "FlowrateService",
    "SampleForm",
    "SampleValidationError",
    "SampleService",
    "ShiftContext",
]
