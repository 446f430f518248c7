"""
Sample and equipment rules for air monitoring.

Provides equipment eligibility, flow rate catalogs, timing checks, drift
resolution and field requirements.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

from .eligibility import CalibrationEligibility
from .flowrates import (
    FlowrateCatalog,
    filter_for_filter_size,
    has_thirteen_mm_flowrate,
    is_thirteen_mm_flowrate,
)
from .duration import SampleDurationValidator, parse_time
from .drift import FlowrateDriftResolver, parse_flowrate, format_average
from .requirements import FieldRequirementResolver, apply_category, clear_flowrates
from . import numbering
from ..models import (
    DriftResult,
    EquipmentSnapshot,
    EquipmentStatus,
    PumpCalibration,
    SampleDraft,
    SampleWarnings,
)

if TYPE_CHECKING:
    from ..core.config import Config


class SampleRules:
    """
    Unified rule set combining eligibility, catalog, timing, drift and requirement rules.

    This class provides a convenient interface to all rule components.
    """

    def __init__(
        self,
        min_volume_25mm: Optional[float] = None,
        min_volume_13mm: Optional[float] = None,
        drift_tolerance: Optional[float] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize rule set.

        Args:
            min_volume_25mm: Minimum collected volume for 25mm filters (default 360 L)
            min_volume_13mm: Minimum collected volume for 13mm filters (default 72 L)
            drift_tolerance: Allowed drift fraction (default 0.10)
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.eligibility = CalibrationEligibility(logger=logger)
        self.catalog = FlowrateCatalog(logger)
        duration_kwargs = {}
        if min_volume_25mm is not None:
            duration_kwargs["min_volume_25mm"] = min_volume_25mm
        if min_volume_13mm is not None:
            duration_kwargs["min_volume_13mm"] = min_volume_13mm
        self.duration = SampleDurationValidator(logger=logger, **duration_kwargs)
        self.drift = (
            FlowrateDriftResolver(drift_tolerance)
            if drift_tolerance is not None
            else FlowrateDriftResolver()
        )
        self.requirements = FieldRequirementResolver(logger)

    @classmethod
    def from_config(cls, config: "Config", logger: Optional[logging.Logger] = None) -> "SampleRules":
        """Build a rule set from configured thresholds."""
        return cls(
            min_volume_25mm=config.min_volume_25mm,
            min_volume_13mm=config.min_volume_13mm,
            drift_tolerance=config.drift_tolerance,
            logger=logger,
        )

    def equipment_status(self, snapshot: Optional[EquipmentSnapshot], today: date) -> EquipmentStatus:
        """Derive equipment status."""
        return self.eligibility.calculate_status(snapshot, today)

    def active_equipment(
        self,
        snapshots: Iterable[EquipmentSnapshot],
        today: date
    ) -> List[EquipmentSnapshot]:
        """Active equipment sorted by reference."""
        return self.eligibility.filter_active(snapshots, today)

    def available_flowrates(self, calibrations: Iterable[PumpCalibration], today: date) -> List[float]:
        """Flow rate catalog for a pump."""
        return self.catalog.build(calibrations, today)

    def compatible_flowrates(self, flowrates: Iterable[float], filter_size: Optional[str]) -> List[float]:
        """Flow rates usable with a filter size."""
        return filter_for_filter_size(flowrates, filter_size)

    def resolve_drift(self, draft: SampleDraft) -> DriftResult:
        """Average flow rate and status for a draft."""
        return self.drift.resolve(draft.initial_flowrate, draft.final_flowrate)

    def warnings(self, draft: SampleDraft) -> SampleWarnings:
        """
        Timing warnings for a draft.

        Field blanks and neg air exhaust samples have no timed collection
        phase and never produce warnings.
        """
        if draft.is_simplified:
            return SampleWarnings()

        insufficient = False
        if draft.start_time and draft.end_time and draft.final_flowrate:
            insufficient = self.duration.is_insufficient_sample_time(
                start_time=draft.start_time,
                end_time=draft.end_time,
                final_flowrate=parse_flowrate(draft.final_flowrate),
                filter_size=draft.filter_size,
                next_day=draft.next_day,
            )

        return SampleWarnings(
            insufficient_sample_time=insufficient,
            collection_before_setup=self.duration.is_collection_before_setup(
                draft.start_time, draft.end_time, draft.next_day
            ),
        )

    def validate(self, draft: SampleDraft, collection_fields_edited: bool = False) -> Dict[str, str]:
        """Field errors for a draft."""
        return self.requirements.validate(
            draft,
            collection_fields_edited=collection_fields_edited,
            collection_before_setup=self.warnings(draft).collection_before_setup,
        )


__all__ = [
    "CalibrationEligibility",
    "FlowrateCatalog",
    "SampleDurationValidator",
    "FlowrateDriftResolver",
    "FieldRequirementResolver",
    "SampleRules",
    "apply_category",
    "clear_flowrates",
    "filter_for_filter_size",
    "format_average",
    "has_thirteen_mm_flowrate",
    "is_thirteen_mm_flowrate",
    "numbering",
    "parse_flowrate",
    "parse_time",
]
