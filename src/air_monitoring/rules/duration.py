"""
Sample duration and volume rules.

Times are "HH:MM" strings as entered on the sample forms.
"""

import logging
from typing import Optional

from ..core import constants


def parse_time(value: Optional[str]) -> Optional[int]:
    """
    Convert an "HH:MM" string to minutes past midnight.

    Args:
        value: Time string

    Returns:
        Minutes past midnight, or None if empty or malformed
    """
    if not value or not value.strip():
        return None

    parts = value.strip().split(":")
    if len(parts) < 2:
        return None

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return None

    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None

    return hours * 60 + minutes


class SampleDurationValidator:
    """Validate sampling time and collected volume."""

    def __init__(
        self,
        min_volume_25mm: float = constants.DEFAULT_MIN_VOLUME_25MM,
        min_volume_13mm: float = constants.DEFAULT_MIN_VOLUME_13MM,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize duration validator.

        Args:
            min_volume_25mm: Minimum collected volume (L) for 25mm filters
            min_volume_13mm: Minimum collected volume (L) for 13mm filters
            logger: Logger instance
        """
        self.min_volume_25mm = min_volume_25mm
        self.min_volume_13mm = min_volume_13mm
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def elapsed_minutes(
        start_time: Optional[str],
        end_time: Optional[str],
        next_day: bool = False
    ) -> Optional[int]:
        """
        Calculate sampling minutes between setup and collection.

        A negative difference, or an explicit next-day flag, rolls the end
        time over to the following day.

        Args:
            start_time: Setup time ("HH:MM")
            end_time: Collection time ("HH:MM")
            next_day: Collection happened on the day after setup

        Returns:
            Elapsed minutes, or None if either time is absent
        """
        start = parse_time(start_time)
        end = parse_time(end_time)
        if start is None or end is None:
            return None

        diff = end - start
        if next_day or diff < 0:
            diff += constants.MINUTES_PER_DAY

        return diff

    def minimum_volume(self, filter_size: Optional[str]) -> Optional[float]:
        """
        Minimum collected volume for a filter size.

        Args:
            filter_size: Selected filter size (unset counts as 25mm)

        Returns:
            Volume in litres, or None for filter sizes without a threshold
        """
        size = filter_size or constants.FILTER_25MM
        if size == constants.FILTER_25MM:
            return self.min_volume_25mm
        if size == constants.FILTER_13MM:
            return self.min_volume_13mm
        return None

    def is_insufficient_sample_time(
        self,
        start_time: Optional[str],
        end_time: Optional[str],
        final_flowrate: Optional[float],
        filter_size: Optional[str],
        next_day: bool = False
    ) -> bool:
        """
        Check whether the collected volume falls short for the filter size.

        Args:
            start_time: Setup time ("HH:MM")
            end_time: Collection time ("HH:MM")
            final_flowrate: Final flow rate (L/min)
            filter_size: Selected filter size
            next_day: Collection happened on the day after setup

        Returns:
            True if minutes x final flow rate is below the filter's minimum volume
        """
        if final_flowrate is None:
            return False

        minutes = self.elapsed_minutes(start_time, end_time, next_day)
        if minutes is None:
            return False

        threshold = self.minimum_volume(filter_size)
        if threshold is None:
            return False

        volume = minutes * final_flowrate
        if volume < threshold:
            self.logger.debug(
                f"Collected volume {volume:.1f} L below {threshold:.0f} L "
                f"for {filter_size or constants.FILTER_25MM} filter"
            )
            return True
        return False

    @staticmethod
    def is_collection_before_setup(
        start_time: Optional[str],
        end_time: Optional[str],
        next_day: bool = False
    ) -> bool:
        """
        Check whether the collection time precedes the setup time on the same day.

        Args:
            start_time: Setup time ("HH:MM")
            end_time: Collection time ("HH:MM")
            next_day: Collection happened on the day after setup

        Returns:
            True if the end time is earlier than the start time without next-day rollover
        """
        if next_day:
            return False

        start = parse_time(start_time)
        end = parse_time(end_time)
        if start is None or end is None:
            return False

        return end < start
