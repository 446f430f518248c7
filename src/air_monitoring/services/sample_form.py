"""
Sample form state.

Applies field edits to a sample draft the way the sample entry forms do:
category switches, cowl number normalisation, filter size and pump changes,
followed by one flow rate derivation pass per edit. Also hydrates drafts
from persisted samples and builds submission payloads.
"""

import logging
import math
from dataclasses import fields, replace
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..core import constants
from ..models import SampleDraft, SampleWarnings
from ..rules import (
    SampleRules,
    apply_category,
    clear_flowrates,
    filter_for_filter_size,
    has_thirteen_mm_flowrate,
    is_thirteen_mm_flowrate,
    numbering,
)

CATEGORY_FIELDS = ("is_field_blank", "is_neg_air_exhaust")
COLLECTION_FIELDS = ("end_time", "final_flowrate")
DERIVED_FIELDS = ("average_flowrate", "status")

DUPLICATE_SAMPLE_NUMBER_MESSAGE = (
    "Sample number already exists in this project. Please use a different number."
)

_DRAFT_FIELDS = {f.name for f in fields(SampleDraft)}

FlowrateLookup = Callable[[str], List[float]]


class SampleValidationError(ValueError):
    """Raised when a draft with field errors is submitted."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"Sample has {len(self.errors)} field error(s): {', '.join(sorted(self.errors))}")


def to_float(value: Any) -> Optional[float]:
    """Parse a form value to a float; empty or non-numeric values give None."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _one_decimal(value: Any) -> str:
    number = to_float(value)
    if not number:
        return ""
    return f"{number:.1f}"


def _reference_id(value: Any) -> str:
    """ID of a populated reference (``{"_id": ...}``) or the raw ID."""
    if isinstance(value, dict):
        return str(value.get("_id") or "")
    return str(value or "")


class SampleForm:
    """
    Editable sample draft with the form's transition rules.

    Every edit goes through update(), which keeps the average flow rate and
    status consistent with the initial and final flow rates.
    """

    def __init__(
        self,
        draft: Optional[SampleDraft] = None,
        rules: Optional[SampleRules] = None,
        flowrate_lookup: Optional[FlowrateLookup] = None,
        collection_fields_edited: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize sample form.

        Args:
            draft: Initial draft (defaults to an empty draft)
            rules: Sample rules
            flowrate_lookup: Callable returning a pump's available flow rates
            collection_fields_edited: Initial state of the collection latch
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.rules = rules or SampleRules(logger=logger)
        self.flowrate_lookup = flowrate_lookup
        self.collection_fields_edited = collection_fields_edited

        # None until a catalog has been loaded for the selected pump
        self.available_flowrates: Optional[List[float]] = None

        self.draft = draft or SampleDraft()
        if self.draft.pump_no:
            self._refresh_flowrates()
        self.draft = self._derive(self._enforce_filter_compatibility(self.draft))

    @property
    def compatible_flowrates(self) -> List[float]:
        """Flow rates offered for the current pump and filter size."""
        return filter_for_filter_size(self.available_flowrates or [], self.draft.filter_size)

    def set_available_flowrates(self, flowrates: Iterable[float]) -> None:
        """Set the selected pump's catalog and re-apply filter compatibility."""
        self.available_flowrates = list(flowrates)
        self.draft = self._derive(self._enforce_filter_compatibility(self.draft))

    def _refresh_flowrates(self) -> None:
        if self.flowrate_lookup is None or not self.draft.pump_no:
            self.available_flowrates = None
            return
        self.available_flowrates = self.flowrate_lookup(self.draft.pump_no)

    def update(self, field_name: str, value: Any) -> SampleDraft:
        """
        Apply a single field edit.

        Args:
            field_name: Draft field name
            value: New value

        Returns:
            Updated draft

        Raises:
            ValueError: If the field is unknown or derived
        """
        if field_name not in _DRAFT_FIELDS or field_name in DERIVED_FIELDS:
            raise ValueError(f"Field cannot be edited: {field_name}")

        draft = self.draft

        if field_name in CATEGORY_FIELDS:
            draft = apply_category(draft, field_name, bool(value))
        elif field_name == "next_day":
            draft = replace(draft, next_day=bool(value))
        elif field_name == "cowl_no":
            draft = replace(draft, cowl_no=numbering.strip_cowl_prefix(value))
        elif field_name == "filter_size":
            draft = self._change_filter_size(draft, value or "")
        elif field_name == "pump_no":
            draft = replace(draft, pump_no=value or "")
            if draft.pump_no:
                draft = clear_flowrates(draft)
            self.draft = draft
            self._refresh_flowrates()
        else:
            draft = replace(draft, **{field_name: "" if value is None else value})

        if field_name in COLLECTION_FIELDS:
            self.collection_fields_edited = True

        draft = self._enforce_filter_compatibility(draft)
        self.draft = self._derive(draft)
        return self.draft

    @staticmethod
    def _change_filter_size(draft: SampleDraft, filter_size: str) -> SampleDraft:
        current = to_float(draft.initial_flowrate)
        updated = replace(draft, filter_size=filter_size)
        if current is None:
            return updated

        if filter_size == constants.FILTER_13MM:
            if not is_thirteen_mm_flowrate(current):
                return clear_flowrates(updated)
        elif is_thirteen_mm_flowrate(current):
            return clear_flowrates(updated)
        return updated

    def _enforce_filter_compatibility(self, draft: SampleDraft) -> SampleDraft:
        if (
            draft.filter_size == constants.FILTER_13MM
            and draft.pump_no
            and self.available_flowrates is not None
            and not has_thirteen_mm_flowrate(self.available_flowrates)
        ):
            self.logger.info(
                f"Pump {draft.pump_no} has no {constants.THIRTEEN_MM_FLOWRATE} L/min flowrate, "
                f"switching filter size to {constants.FILTER_25MM}"
            )
            return clear_flowrates(replace(draft, filter_size=constants.FILTER_25MM))
        return draft

    def _derive(self, draft: SampleDraft) -> SampleDraft:
        result = self.rules.resolve_drift(draft)
        return replace(draft, average_flowrate=result.average_flowrate, status=result.status)

    def warnings(self) -> SampleWarnings:
        """Timing warnings for the current draft."""
        return self.rules.warnings(self.draft)

    def validate(
        self,
        project_samples: Optional[List[Dict[str, Any]]] = None,
        project_id: Optional[str] = None
    ) -> Dict[str, str]:
        """
        Field errors for the current draft.

        Args:
            project_samples: Samples already in the project (for duplicate numbers)
            project_id: Project ID

        Returns:
            Field-keyed error messages (empty when valid)
        """
        errors = self.rules.validate(self.draft, self.collection_fields_edited)

        if "sample_number" not in errors and project_id and project_samples is not None:
            if not project_samples:
                self.logger.warning(
                    "Unable to validate sample number uniqueness - project samples not loaded"
                )
            elif numbering.is_duplicate_sample_number(
                self.draft.sample_number, project_samples, project_id
            ):
                errors["sample_number"] = DUPLICATE_SAMPLE_NUMBER_MESSAGE

        return errors

    def check(
        self,
        project_samples: Optional[List[Dict[str, Any]]] = None,
        project_id: Optional[str] = None
    ) -> None:
        """
        Raise if the draft cannot be submitted.

        Raises:
            SampleValidationError: If there are field errors
        """
        errors = self.validate(project_samples, project_id)
        if errors:
            raise SampleValidationError(errors)

    def to_payload(self) -> Dict[str, Any]:
        """
        Submission payload for the current draft.

        Flow rates are sent as numbers, empty optional values as None, the
        cowl number with its "C" prefix and field blanks with type "-" and
        location "Field blank".

        Returns:
            Payload keyed by API field names
        """
        draft = self.draft
        payload: Dict[str, Any] = {
            "sampleNumber": draft.sample_number,
            "sampler": draft.sampler,
            "collectedBy": draft.sampler,
            "type": constants.FIELD_BLANK_TYPE if draft.is_field_blank else draft.type,
            "location": constants.FIELD_BLANK_LOCATION if draft.is_field_blank else draft.location,
            "pumpNo": draft.pump_no or None,
            "flowmeter": draft.flowmeter or None,
            "cowlNo": numbering.with_cowl_prefix(draft.cowl_no),
            "filterSize": draft.filter_size or None,
            "startTime": draft.start_time or None,
            "endTime": draft.end_time or None,
            "nextDay": draft.next_day,
            "initialFlowrate": to_float(draft.initial_flowrate),
            "finalFlowrate": to_float(draft.final_flowrate),
            "averageFlowrate": to_float(draft.average_flowrate),
            "notes": draft.notes or None,
            "status": draft.status or constants.SAMPLE_PENDING,
            "isFieldBlank": draft.is_field_blank,
            "isNegAirExhaust": draft.is_neg_air_exhaust,
        }
        return payload

    @classmethod
    def from_sample(
        cls,
        sample: Dict[str, Any],
        rules: Optional[SampleRules] = None,
        flowrate_lookup: Optional[FlowrateLookup] = None,
        logger: Optional[logging.Logger] = None
    ) -> "SampleForm":
        """
        Load a persisted sample into a form.

        Args:
            sample: Sample record from the API
            rules: Sample rules
            flowrate_lookup: Callable returning a pump's available flow rates
            logger: Logger instance

        Returns:
            Sample form with the collection latch set when the sample
            already has an end time or final flow rate
        """
        is_field_blank = bool(sample.get("isFieldBlank"))
        is_neg_air_exhaust = bool(sample.get("isNegAirExhaust")) and not is_field_blank

        location = sample.get("location") or ""
        if is_field_blank:
            location = constants.FIELD_BLANK_LOCATION
        elif location == constants.FIELD_BLANK_LOCATION:
            location = ""

        sample_type = sample.get("type") or ""
        if is_field_blank:
            sample_type = constants.FIELD_BLANK_TYPE
        elif sample_type in ("", constants.FIELD_BLANK_TYPE):
            sample_type = constants.DEFAULT_SAMPLE_TYPE

        draft = SampleDraft(
            sample_number=numbering.extract_sample_number(sample.get("fullSampleID")),
            sampler=_reference_id(sample.get("collectedBy") or sample.get("sampler")),
            type=sample_type,
            location=location,
            pump_no=sample.get("pumpNo") or "",
            flowmeter=sample.get("flowmeter") or "",
            cowl_no=numbering.strip_cowl_prefix(sample.get("cowlNo")),
            filter_size=sample.get("filterSize") or "",
            start_time=sample.get("startTime") or "",
            end_time=sample.get("endTime") or "",
            next_day=bool(sample.get("nextDay")),
            initial_flowrate=_one_decimal(sample.get("initialFlowrate")),
            final_flowrate=_one_decimal(sample.get("finalFlowrate")),
            notes=sample.get("notes") or "",
            is_field_blank=is_field_blank,
            is_neg_air_exhaust=is_neg_air_exhaust,
        )

        latch = bool(sample.get("endTime") or sample.get("finalFlowrate"))
        return cls(
            draft=draft,
            rules=rules,
            flowrate_lookup=flowrate_lookup,
            collection_fields_edited=latch,
            logger=logger,
        )
