"""
Per-session cache of pump calibration lists.
"""

import logging
from typing import Dict, List, Optional

from ..models import PumpCalibration


class CalibrationCache:
    """
    Calibration lists keyed by equipment ID.

    An entry is never replaced once populated; the first list stored for an
    equipment ID is the one returned for the rest of the session.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._entries: Dict[str, List[PumpCalibration]] = {}

    def get(self, equipment_id: str) -> Optional[List[PumpCalibration]]:
        """Cached calibrations, or None when the equipment has no entry."""
        return self._entries.get(equipment_id)

    def put(self, equipment_id: str, calibrations: List[PumpCalibration]) -> List[PumpCalibration]:
        """
        Store calibrations unless the equipment already has an entry.

        Args:
            equipment_id: Equipment ID
            calibrations: Calibration list

        Returns:
            The list held in the cache for this equipment
        """
        if equipment_id in self._entries:
            self.logger.debug(f"Calibrations for {equipment_id} already cached, keeping existing entry")
            return self._entries[equipment_id]

        self._entries[equipment_id] = list(calibrations)
        return self._entries[equipment_id]

    def clear(self) -> None:
        """Drop all entries (end of session)."""
        self._entries.clear()

    def __contains__(self, equipment_id: object) -> bool:
        return equipment_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
