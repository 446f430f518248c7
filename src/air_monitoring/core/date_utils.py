"""
Date and timezone utilities.

Centralizes the "today" and midnight-truncation handling that calibration
checks depend on. API dates arrive as ISO strings (usually UTC); they are
converted to the configured timezone before being reduced to a calendar date.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

import pytz
from pytz.tzinfo import BaseTzInfo


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(self, timezone_str: str = "UTC", logger: Optional[logging.Logger] = None):
        """
        Initialize date utilities.

        Args:
            timezone_str: Timezone in which calendar dates are evaluated
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.tz = self.parse_timezone(timezone_str)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Pacific/Auckland', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def today(self, reference_time: Optional[datetime] = None) -> date:
        """
        Get today's calendar date in the configured timezone.

        Args:
            reference_time: Reference time (defaults to now in UTC)

        Returns:
            Calendar date
        """
        if reference_time is None:
            reference_time = datetime.now(pytz.UTC)
        elif reference_time.tzinfo is None:
            reference_time = pytz.UTC.localize(reference_time)

        return reference_time.astimezone(self.tz).date()

    def to_date(self, value: Any) -> Optional[date]:
        """
        Reduce an API date value to a calendar date (midnight truncation).

        Accepts ISO 8601 strings (with or without 'Z'), datetimes and dates.
        Naive datetimes are assumed to be UTC.

        Args:
            value: Date-like value

        Returns:
            Calendar date, or None if the value is empty or unparseable
        """
        if value is None or value == "":
            return None

        if isinstance(value, datetime):
            dt = value
        elif isinstance(value, date):
            return value
        elif isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                dt = datetime.fromisoformat(text)
            except ValueError:
                self.logger.warning(f"Unparseable date value: {value!r}")
                return None
            if len(text) == 10:
                # Plain YYYY-MM-DD is already a calendar date
                return dt.date()
        else:
            self.logger.warning(f"Unsupported date value type: {type(value)}")
            return None

        if dt.tzinfo is None:
            dt = pytz.UTC.localize(dt)
        return dt.astimezone(self.tz).date()

    @staticmethod
    def days_between(start: date, end: date) -> int:
        """
        Whole days from start to end (negative when end is earlier).

        Args:
            start: Start date
            end: End date

        Returns:
            Number of days
        """
        return (end - start).days
