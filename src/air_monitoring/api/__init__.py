"""
API layer for the consultancy records API.

Provides low-level API client for authentication, equipment, calibration and sample operations.
"""

import logging
from typing import Optional

from .client import APIClient
from .auth import AuthAPI
from .equipment import EquipmentAPI
from .calibrations import CalibrationsAPI
from .samples import SamplesAPI
from . import helpers


class AirMonitoringAPI(AuthAPI, EquipmentAPI, CalibrationsAPI, SamplesAPI):
    """
    Unified API client for the records API.

    Combines authentication, equipment, calibration and sample operations.
    """

    def __init__(
        self,
        base_url: str,
        email: Optional[str] = None,
        password: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize unified API client.

        Args:
            base_url: Base URL for the API
            email: Email for authentication
            password: Password for authentication
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        super().__init__(
            base_url=base_url,
            email=email,
            password=password,
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
            logger=logger
        )


__all__ = [
    "APIClient",
    "AuthAPI",
    "EquipmentAPI",
    "CalibrationsAPI",
    "SamplesAPI",
    "AirMonitoringAPI",
    "helpers",
]
