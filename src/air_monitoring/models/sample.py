"""
Sample data models.

Contains the draft sample edited in the sample forms and the values derived from it.
"""

from dataclasses import dataclass
from enum import Enum

from ..core import constants


class SampleCategory(Enum):
    """Mutually exclusive sample categories."""

    STANDARD = "standard"
    FIELD_BLANK = "field_blank"
    NEG_AIR_EXHAUST = "neg_air_exhaust"


@dataclass
class SampleDraft:
    """
    Sample form state.

    Flow rates and times are kept as entered (strings). The cowl number is
    held without its "C" prefix while editing.
    """

    sample_number: str = ""
    sampler: str = ""
    type: str = constants.DEFAULT_SAMPLE_TYPE
    location: str = ""
    pump_no: str = ""
    flowmeter: str = ""
    cowl_no: str = ""
    filter_size: str = ""
    start_time: str = ""
    end_time: str = ""
    next_day: bool = False
    initial_flowrate: str = ""
    final_flowrate: str = ""
    average_flowrate: str = ""
    notes: str = ""
    is_field_blank: bool = False
    is_neg_air_exhaust: bool = False
    status: str = constants.SAMPLE_PENDING

    @property
    def category(self) -> SampleCategory:
        if self.is_field_blank:
            return SampleCategory.FIELD_BLANK
        if self.is_neg_air_exhaust:
            return SampleCategory.NEG_AIR_EXHAUST
        return SampleCategory.STANDARD

    @property
    def is_simplified(self) -> bool:
        """Field blanks and neg air exhaust samples have no timed collection phase."""
        return self.is_field_blank or self.is_neg_air_exhaust


@dataclass(frozen=True)
class DriftResult:
    """Average flow rate (display string) and derived sample status."""

    average_flowrate: str
    status: str


@dataclass(frozen=True)
class SampleWarnings:
    """Non-blocking timing checks shown alongside the form."""

    insufficient_sample_time: bool = False
    collection_before_setup: bool = False
