"""
Flow rate lookup service.

Resolves a pump reference to the flow rates its current calibration allows.
"""

import logging
from datetime import date
from typing import List, Optional

from ..models import PumpCalibration
from ..rules import FlowrateCatalog
from .calibration_cache import CalibrationCache
from .equipment_registry import EquipmentRegistry


class FlowrateService:
    """Available flow rates for air pumps."""

    def __init__(
        self,
        registry: EquipmentRegistry,
        catalog: Optional[FlowrateCatalog] = None,
        cache: Optional[CalibrationCache] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize flow rate service.

        Args:
            registry: Equipment registry
            catalog: Flow rate catalog rules
            cache: Calibration cache (defaults to the registry's cache)
            logger: Logger instance
        """
        self.registry = registry
        self.catalog = catalog or FlowrateCatalog(logger)
        self.cache = cache if cache is not None else registry.cache
        self.logger = logger or logging.getLogger(__name__)

    def calibrations_for(self, pump_reference: str) -> List[PumpCalibration]:
        """
        Calibration history for a pump.

        Uses the registry snapshot first, then the cache, then the API.

        Args:
            pump_reference: Pump equipment reference

        Returns:
            Calibrations (empty if the pump is unknown or the fetch failed)
        """
        snapshot = self.registry.find_pump(pump_reference)
        if snapshot is None:
            self.logger.warning(f"Unknown air pump: {pump_reference}")
            return []

        if snapshot.all_calibrations is not None:
            return snapshot.all_calibrations

        cached = self.cache.get(snapshot.id)
        if cached is not None:
            return cached

        calibrations = self.registry.fetch_pump_calibrations(snapshot.equipment)
        if calibrations is None:
            return []
        return self.cache.put(snapshot.id, calibrations)

    def available_flowrates(self, pump_reference: str, today: Optional[date] = None) -> List[float]:
        """
        Flow rates (L/min) the pump's current calibration allows.

        Args:
            pump_reference: Pump equipment reference
            today: Reference date (defaults to today in the configured timezone)

        Returns:
            Sorted flow rates
        """
        if not pump_reference:
            return []

        reference_date = today or self.registry.date_utils.today()
        flowrates = self.catalog.build(self.calibrations_for(pump_reference), reference_date)
        self.logger.debug(f"Available flowrates for {pump_reference}: {flowrates}")
        return flowrates
