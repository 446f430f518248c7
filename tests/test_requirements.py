"""
Tests for sample categories and field requirements.
"""

import pytest

from src.air_monitoring.models import SampleCategory, SampleDraft
from src.air_monitoring.rules import FieldRequirementResolver, SampleRules, apply_category


def standard_draft(**overrides):
    values = dict(
        sample_number="AM4",
        sampler="u1",
        type="Exposure",
        location="Level 2 enclosure",
        pump_no="AP-001",
        flowmeter="FM-01",
        cowl_no="123",
        filter_size="25mm",
        start_time="08:00",
        initial_flowrate="2.0",
    )
    values.update(overrides)
    return SampleDraft(**values)


@pytest.mark.unit
class TestApplyCategory:
    """Test cases for category transitions."""

    def test_enable_field_blank(self):
        """Location and type are forced, neg air exhaust is switched off."""
        draft = apply_category(standard_draft(is_neg_air_exhaust=True), "is_field_blank", True)

        assert draft.is_field_blank
        assert not draft.is_neg_air_exhaust
        assert draft.location == "Field blank"
        assert draft.type == "-"
        assert draft.category == SampleCategory.FIELD_BLANK

    def test_disable_field_blank(self):
        """Forced values are released."""
        draft = apply_category(standard_draft(), "is_field_blank", True)
        draft = apply_category(draft, "is_field_blank", False)

        assert not draft.is_field_blank
        assert draft.location == ""
        assert draft.type == "Background"

    def test_disable_field_blank_keeps_edited_location(self):
        """A location other than the forced one is kept."""
        draft = standard_draft(is_field_blank=True, location="Lunch room", type="-")
        draft = apply_category(draft, "is_field_blank", False)

        assert draft.location == "Lunch room"

    def test_enable_neg_air_exhaust(self):
        """Flow rates cleared, location defaulted when empty."""
        draft = standard_draft(location="", final_flowrate="2.1", average_flowrate="2.05")
        draft = apply_category(draft, "is_neg_air_exhaust", True)

        assert draft.is_neg_air_exhaust
        assert draft.location == "Neg air exhaust"
        assert draft.initial_flowrate == ""
        assert draft.final_flowrate == ""
        assert draft.average_flowrate == ""

    def test_enable_neg_air_exhaust_keeps_location(self):
        """An existing location is not replaced."""
        draft = apply_category(standard_draft(), "is_neg_air_exhaust", True)
        assert draft.location == "Level 2 enclosure"

    def test_neg_air_exhaust_from_field_blank(self):
        """Switching categories never leaves both flags set."""
        draft = apply_category(standard_draft(), "is_field_blank", True)
        draft = apply_category(draft, "is_neg_air_exhaust", True)

        assert draft.is_neg_air_exhaust
        assert not draft.is_field_blank
        assert draft.type == "Background"
        assert draft.location == "Neg air exhaust"

    def test_unknown_category(self):
        """Only the two category flags are accepted."""
        with pytest.raises(ValueError):
            apply_category(standard_draft(), "next_day", True)


@pytest.mark.unit
class TestFieldRequirementResolver:
    """Test cases for FieldRequirementResolver."""

    @pytest.fixture
    def resolver(self):
        """Create requirement resolver."""
        return FieldRequirementResolver()

    def test_complete_standard_draft(self, resolver):
        """A complete setup record has no errors."""
        assert resolver.validate(standard_draft()) == {}

    def test_empty_standard_draft(self, resolver):
        """Every setup field is reported."""
        errors = resolver.validate(SampleDraft(type=""))

        assert set(errors) == {
            "sampler", "sample_number", "cowl_no", "pump_no", "flowmeter",
            "location", "type", "start_time", "initial_flowrate",
        }
        assert errors["cowl_no"] == "Cowl No. is required"

    def test_collection_fields_required_after_latch(self, resolver):
        """End time and final flow rate become required once edited."""
        draft = standard_draft()

        assert "end_time" not in resolver.validate(draft)
        errors = resolver.validate(draft, collection_fields_edited=True)

        assert errors["end_time"] == "End time is required"
        assert errors["final_flowrate"] == "Final flowrate is required"

    def test_collection_before_setup_error(self, resolver):
        """End before start is an end time error once latched."""
        draft = standard_draft(end_time="07:00", final_flowrate="2.0")

        errors = resolver.validate(draft, collection_fields_edited=True, collection_before_setup=True)
        assert errors == {"end_time": "Collection time cannot be before setup time"}

        assert resolver.validate(draft, collection_fields_edited=False, collection_before_setup=True) == {}

    def test_field_blank_requirements(self, resolver):
        """Field blanks only need sampler, number, cowl and location."""
        draft = SampleDraft(is_field_blank=True, location="Field blank", type="-")
        errors = resolver.validate(draft, collection_fields_edited=True)

        assert set(errors) == {"sampler", "sample_number", "cowl_no"}

    def test_neg_air_exhaust_requires_location(self, resolver):
        """Neg air exhaust location stays editable and is required."""
        draft = SampleDraft(
            is_neg_air_exhaust=True,
            sampler="u1",
            sample_number="AM4",
            cowl_no="9",
            location=" ",
        )
        assert resolver.validate(draft) == {"location": "Location is required"}

    def test_required_fields_lists(self):
        """Required field sets per category."""
        assert FieldRequirementResolver.required_fields(SampleDraft(is_field_blank=True)) == [
            "sampler", "sample_number", "cowl_no", "location",
        ]
        standard = FieldRequirementResolver.required_fields(SampleDraft(), collection_fields_edited=True)
        assert "end_time" in standard
        assert "final_flowrate" in standard


@pytest.mark.unit
class TestSampleRules:
    """Test cases for the combined rule set."""

    @pytest.fixture
    def rules(self):
        """Create rule set."""
        return SampleRules()

    def test_warnings_for_short_sample(self, rules):
        """Insufficient time is a warning, not an error."""
        draft = standard_draft(end_time="09:00", final_flowrate="2.0")

        warnings = rules.warnings(draft)

        assert warnings.insufficient_sample_time
        assert not warnings.collection_before_setup
        assert rules.validate(draft, collection_fields_edited=True) == {}

    def test_warnings_skipped_for_field_blank(self, rules):
        """Field blanks have no timed collection."""
        draft = standard_draft(is_field_blank=True, end_time="07:00", final_flowrate="0.1")
        warnings = rules.warnings(draft)

        assert not warnings.insufficient_sample_time
        assert not warnings.collection_before_setup

    def test_collection_before_setup_feeds_validation(self, rules):
        """The same check produces the warning and the latched error."""
        draft = standard_draft(end_time="07:00", final_flowrate="2.0")

        assert rules.warnings(draft).collection_before_setup
        assert "end_time" in rules.validate(draft, collection_fields_edited=True)

    def test_insufficient_time_needs_final_flowrate(self, rules):
        """No warning until the final flow rate is entered."""
        draft = standard_draft(end_time="08:30")
        assert not rules.warnings(draft).insufficient_sample_time

    def test_configured_thresholds(self, rules):
        """Thresholds flow through to the components."""
        custom = SampleRules(min_volume_25mm=60, drift_tolerance=0.5)
        draft = standard_draft(end_time="09:00", final_flowrate="1.2")

        assert rules.resolve_drift(draft).status == "failed"
        assert custom.resolve_drift(draft).status == "pending"
        assert not custom.warnings(draft).insufficient_sample_time
