"""
Equipment registry operations for the records API.
"""

import logging
from typing import Any, Dict, List

from ..core import constants
from .helpers import unwrap_list


class EquipmentAPI:
    """Mixin for equipment registry operations."""

    logger: logging.Logger

    def get(self, endpoint: str, params: Any = None) -> Any:
        """Method provided by APIClient base class."""
        ...

    def get_equipment(self, limit: int = constants.EQUIPMENT_PAGE_LIMIT) -> List[Dict[str, Any]]:
        """
        Get the equipment registry.

        Args:
            limit: Maximum number of records

        Returns:
            List of equipment objects
        """
        self.logger.info("Fetching equipment registry")
        result = self.get("/equipment", params={"limit": limit})
        equipment = unwrap_list(result, "equipment")
        self.logger.debug(f"Retrieved {len(equipment)} equipment records")
        return equipment
