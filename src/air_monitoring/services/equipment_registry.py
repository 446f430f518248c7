"""
Equipment registry service.

Loads air pumps and site flowmeters together with their calibration history
and exposes the equipment currently eligible for sampling.
"""

import logging
from datetime import date
from typing import Dict, List, Optional, TYPE_CHECKING

from ..api.helpers import parse_equipment, parse_flowmeter_calibration, parse_pump_calibration
from ..core import constants, DateUtils
from ..models import Equipment, EquipmentSnapshot, PumpCalibration
from ..rules import CalibrationEligibility
from .calibration_cache import CalibrationCache

if TYPE_CHECKING:
    from ..api import AirMonitoringAPI


class EquipmentRegistry:
    """Equipment snapshots for air pumps and site flowmeters."""

    def __init__(
        self,
        api_client: "AirMonitoringAPI",
        date_utils: Optional[DateUtils] = None,
        cache: Optional[CalibrationCache] = None,
        eligibility: Optional[CalibrationEligibility] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize equipment registry.

        Args:
            api_client: API client instance
            date_utils: Date utilities (defaults to UTC)
            cache: Calibration cache shared with the flow rate service
            eligibility: Eligibility rules
            logger: Logger instance
        """
        self.api_client = api_client
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = date_utils or DateUtils(logger=logger)
        self.cache = cache if cache is not None else CalibrationCache(logger)
        self.eligibility = eligibility or CalibrationEligibility(logger=logger)

        self.pumps: List[EquipmentSnapshot] = []
        self.flowmeters: List[EquipmentSnapshot] = []
        self._loaded = False

    def load(self) -> None:
        """
        Fetch equipment and calibrations.

        A failure to list equipment leaves the registry empty. A failure to
        fetch one item's calibrations leaves that item without calibration
        data, which makes it ineligible.
        """
        try:
            records = self.api_client.get_equipment()
        except Exception as e:
            self.logger.error(f"Failed to fetch equipment list: {e}", exc_info=True)
            records = []

        equipment = [parse_equipment(record) for record in records]

        self.pumps = [
            self._load_pump(item) for item in equipment
            if item.equipment_type == constants.AIR_PUMP
        ]
        self.flowmeters = [
            self._load_flowmeter(item) for item in equipment
            if item.equipment_type == constants.SITE_FLOWMETER
        ]
        self._loaded = True

        self.logger.info(
            f"Loaded {len(self.pumps)} air pumps and {len(self.flowmeters)} site flowmeters"
        )

    def _load_pump(self, pump: Equipment) -> EquipmentSnapshot:
        calibrations = self.cache.get(pump.id)
        if calibrations is None:
            calibrations = self.fetch_pump_calibrations(pump)
            if calibrations is not None:
                calibrations = self.cache.put(pump.id, calibrations)
        return self.eligibility.pump_snapshot(pump, calibrations)

    def _load_flowmeter(self, flowmeter: Equipment) -> EquipmentSnapshot:
        try:
            records = self.api_client.get_flowmeter_calibrations(flowmeter.equipment_reference)
        except Exception as e:
            self.logger.error(
                f"Error fetching calibrations for {flowmeter.equipment_reference}: {e}",
                exc_info=True
            )
            return self.eligibility.flowmeter_snapshot(flowmeter, None)

        calibrations = [parse_flowmeter_calibration(record, self.date_utils) for record in records]
        return self.eligibility.flowmeter_snapshot(flowmeter, calibrations)

    def fetch_pump_calibrations(self, pump: Equipment) -> Optional[List[PumpCalibration]]:
        """
        Fetch a pump's full calibration history.

        Args:
            pump: Air pump

        Returns:
            Calibrations, or None if the fetch failed
        """
        try:
            records = self.api_client.get_pump_calibrations(
                pump.id, page=1, limit=constants.CALIBRATION_PAGE_LIMIT
            )
        except Exception as e:
            self.logger.error(
                f"Error fetching calibrations for {pump.equipment_reference}: {e}",
                exc_info=True
            )
            return None

        return [parse_pump_calibration(record, self.date_utils) for record in records]

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _today(self, today: Optional[date]) -> date:
        return today or self.date_utils.today()

    def active_pumps(self, today: Optional[date] = None) -> List[EquipmentSnapshot]:
        """Air pumps eligible for sampling, sorted by reference."""
        self._ensure_loaded()
        return self.eligibility.filter_active(self.pumps, self._today(today))

    def active_flowmeters(self, today: Optional[date] = None) -> List[EquipmentSnapshot]:
        """Site flowmeters eligible for sampling, sorted by reference."""
        self._ensure_loaded()
        return self.eligibility.filter_active(self.flowmeters, self._today(today))

    def find_pump(self, reference: str) -> Optional[EquipmentSnapshot]:
        """
        Look up an air pump by equipment reference.

        Args:
            reference: Equipment reference

        Returns:
            Pump snapshot, or None if unknown
        """
        self._ensure_loaded()
        for snapshot in self.pumps:
            if snapshot.reference == reference:
                return snapshot
        return None

    def statuses(self, today: Optional[date] = None) -> Dict[str, str]:
        """
        Status of every loaded pump and flowmeter.

        Args:
            today: Reference date

        Returns:
            Mapping of equipment reference to status label
        """
        self._ensure_loaded()
        reference_date = self._today(today)
        return {
            snapshot.reference: self.eligibility.calculate_status(snapshot, reference_date).value
            for snapshot in self.pumps + self.flowmeters
        }
