"""
Shift and sample operations for the records API.

Handles air monitoring shifts, air samples and indoor air quality samples.
"""

import logging
from typing import Any, Dict, List

from .helpers import unwrap_list


class SamplesAPI:
    """Mixin for shift and sample operations."""

    logger: logging.Logger

    def get(self, endpoint: str, params: Any = None) -> Any:
        """Method provided by APIClient base class."""
        ...

    def post(self, endpoint: str, data: Dict[str, Any], skip_auth_check: bool = False) -> Any:
        """Method provided by APIClient base class."""
        ...

    def put(self, endpoint: str, data: Dict[str, Any]) -> Any:
        """Method provided by APIClient base class."""
        ...

    def patch(self, endpoint: str, data: Dict[str, Any]) -> Any:
        """Method provided by APIClient base class."""
        ...

    def get_shift(self, shift_id: str) -> Dict[str, Any]:
        """
        Get an air monitoring shift.

        Args:
            shift_id: Shift ID

        Returns:
            Shift object (includes the populated job)
        """
        self.logger.debug(f"Fetching shift {shift_id}")
        return self.get(f"/air-monitoring-shifts/{shift_id}")

    def update_shift(self, shift_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update a shift.

        Args:
            shift_id: Shift ID
            data: Fields to update

        Returns:
            Updated shift object
        """
        self.logger.info(f"Updating shift {shift_id}: {sorted(data)}")
        return self.patch(f"/air-monitoring-shifts/{shift_id}", data)

    def get_sample(self, sample_id: str) -> Dict[str, Any]:
        """Get an air sample."""
        return self.get(f"/samples/{sample_id}")

    def get_samples_by_shift(self, shift_id: str) -> List[Dict[str, Any]]:
        """
        Get all samples of a shift.

        Args:
            shift_id: Shift ID

        Returns:
            List of sample objects
        """
        return unwrap_list(self.get(f"/samples/shift/{shift_id}"))

    def get_samples_by_project(self, project_id: str) -> List[Dict[str, Any]]:
        """
        Get all samples of a project.

        Args:
            project_id: Project (job) ID

        Returns:
            List of sample objects
        """
        return unwrap_list(self.get(f"/samples/project/{project_id}"))

    def create_sample(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create an air sample.

        Args:
            data: Sample payload

        Returns:
            Created sample object
        """
        self.logger.info(f"Creating sample {data.get('fullSampleID')}")
        return self.post("/samples", data)

    def update_sample(self, sample_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Partially update an air sample.

        Args:
            sample_id: Sample ID
            data: Fields to update

        Returns:
            Updated sample object
        """
        self.logger.info(f"Updating sample {sample_id}")
        return self.patch(f"/samples/{sample_id}", data)

    def get_iaq_sample(self, sample_id: str) -> Dict[str, Any]:
        """Get an indoor air quality sample."""
        return self.get(f"/iaq-samples/{sample_id}")

    def update_iaq_sample(self, sample_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace an indoor air quality sample.

        Args:
            sample_id: IAQ sample ID
            data: Sample payload

        Returns:
            Updated sample object
        """
        self.logger.info(f"Updating IAQ sample {sample_id}")
        return self.put(f"/iaq-samples/{sample_id}", data)
