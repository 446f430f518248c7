"""
Calibration operations for the records API.

Handles retrieval of air pump and site flowmeter calibration records.
"""

import logging
from typing import Any, Dict, List

from .helpers import unwrap_list


class CalibrationsAPI:
    """Mixin for calibration-related API operations."""

    logger: logging.Logger

    def get(self, endpoint: str, params: Any = None) -> Any:
        """Method provided by APIClient base class."""
        ...

    def get_pump_calibrations(
        self,
        pump_id: str,
        page: int = 1,
        limit: int = 50
    ) -> List[Dict[str, Any]]:
        """
        Get calibrations for an air pump.

        Args:
            pump_id: Equipment ID of the pump
            page: Page number
            limit: Page size

        Returns:
            List of calibration objects
        """
        self.logger.debug(f"Fetching calibrations for pump {pump_id} (page {page}, limit {limit})")
        result = self.get(
            f"/air-pump-calibrations/pump/{pump_id}",
            params={"page": page, "limit": limit}
        )
        return unwrap_list(result)

    def get_flowmeter_calibrations(self, flowmeter_reference: str) -> List[Dict[str, Any]]:
        """
        Get calibrations for a site flowmeter.

        Args:
            flowmeter_reference: Equipment reference of the flowmeter

        Returns:
            List of calibration objects
        """
        self.logger.debug(f"Fetching calibrations for flowmeter {flowmeter_reference}")
        result = self.get(f"/flowmeter-calibrations/flowmeter/{flowmeter_reference}")
        return unwrap_list(result)
