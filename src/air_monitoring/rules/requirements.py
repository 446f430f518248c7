"""
Sample form field requirements.

Required fields depend on the sample category: standard samples need the
full equipment and timing record, field blanks and neg air exhaust samples
only a reduced set. Category changes are applied here as well, since they
rewrite the fields the requirements depend on.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from ..core import constants
from ..models import SampleCategory, SampleDraft

FLOWRATE_FIELDS = ("initial_flowrate", "final_flowrate", "average_flowrate")

ERROR_MESSAGES = {
    "sampler": "Sampler is required",
    "sample_number": "Sample number is required",
    "pump_no": "Pump No. is required",
    "flowmeter": "Flowmeter is required",
    "cowl_no": "Cowl No. is required",
    "location": "Location is required",
    "type": "Type is required",
    "start_time": "Start time is required",
    "end_time": "End time is required",
    "initial_flowrate": "Initial flowrate is required",
    "final_flowrate": "Final flowrate is required",
}

COLLECTION_BEFORE_SETUP_MESSAGE = "Collection time cannot be before setup time"


def clear_flowrates(draft: SampleDraft) -> SampleDraft:
    """Return a copy of the draft with all flow rate fields emptied."""
    return replace(draft, initial_flowrate="", final_flowrate="", average_flowrate="")


def apply_category(draft: SampleDraft, category_field: str, checked: bool) -> SampleDraft:
    """
    Apply a category checkbox change.

    Args:
        draft: Current draft
        category_field: "is_field_blank" or "is_neg_air_exhaust"
        checked: New checkbox value

    Returns:
        Updated draft

    Raises:
        ValueError: If category_field is not a category flag
    """
    if category_field == "is_field_blank":
        if checked:
            return replace(
                draft,
                is_field_blank=True,
                is_neg_air_exhaust=False,
                location=constants.FIELD_BLANK_LOCATION,
                type=constants.FIELD_BLANK_TYPE,
            )
        return replace(
            draft,
            is_field_blank=False,
            location="" if draft.location == constants.FIELD_BLANK_LOCATION else draft.location,
            type=(
                constants.DEFAULT_SAMPLE_TYPE
                if draft.type in ("", constants.FIELD_BLANK_TYPE)
                else draft.type
            ),
        )

    if category_field == "is_neg_air_exhaust":
        if checked:
            if draft.is_field_blank:
                draft = apply_category(draft, "is_field_blank", False)
            updated = replace(
                draft,
                is_neg_air_exhaust=True,
                location=draft.location or constants.NEG_AIR_EXHAUST_LOCATION,
            )
            return clear_flowrates(updated)
        return replace(draft, is_neg_air_exhaust=False)

    raise ValueError(f"Not a sample category field: {category_field}")


class FieldRequirementResolver:
    """Determine required fields and collect field errors for a draft."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize requirement resolver.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def required_fields(
        draft: SampleDraft,
        collection_fields_edited: bool = False
    ) -> List[str]:
        """
        List the fields that must be filled in for the draft's category.

        Args:
            draft: Sample draft
            collection_fields_edited: The user has touched the collection
                                      fields (end time / final flow rate)

        Returns:
            Required field names
        """
        required = ["sampler", "sample_number", "cowl_no"]
        category = draft.category

        if category == SampleCategory.FIELD_BLANK:
            return required + ["location"]

        if category == SampleCategory.NEG_AIR_EXHAUST:
            return required + ["location"]

        required += [
            "pump_no",
            "flowmeter",
            "location",
            "type",
            "start_time",
            "initial_flowrate",
        ]
        if collection_fields_edited:
            required += ["end_time", "final_flowrate"]
        return required

    def validate(
        self,
        draft: SampleDraft,
        collection_fields_edited: bool = False,
        collection_before_setup: bool = False
    ) -> Dict[str, str]:
        """
        Collect field errors for a draft.

        Args:
            draft: Sample draft
            collection_fields_edited: Collection fields latch
            collection_before_setup: End time precedes start time without rollover

        Returns:
            Field-keyed error messages (empty when valid)
        """
        errors: Dict[str, str] = {}

        for field_name in self.required_fields(draft, collection_fields_edited):
            value = getattr(draft, field_name)
            if not str(value).strip():
                errors[field_name] = ERROR_MESSAGES[field_name]

        if (
            draft.category == SampleCategory.STANDARD
            and collection_fields_edited
            and draft.start_time
            and draft.end_time
            and collection_before_setup
        ):
            errors["end_time"] = COLLECTION_BEFORE_SETUP_MESSAGE

        if errors:
            self.logger.debug(f"Sample {draft.sample_number or '(new)'} has errors: {sorted(errors)}")

        return errors
