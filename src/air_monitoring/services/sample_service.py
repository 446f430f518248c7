"""
Sample service.

Orchestrates shift, sample and IAQ sample API operations around the sample
form: seeding new samples from shift context, submitting them, and loading
and updating persisted samples.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from ..core import constants
from ..models import SampleDraft
from ..rules import SampleRules, numbering
from .sample_form import FlowrateLookup, SampleForm

if TYPE_CHECKING:
    from ..api import AirMonitoringAPI

# Fields accepted by the IAQ sample update endpoint
IAQ_PAYLOAD_KEYS = (
    "location",
    "pumpNo",
    "flowmeter",
    "cowlNo",
    "sampler",
    "filterSize",
    "startTime",
    "endTime",
    "initialFlowrate",
    "finalFlowrate",
    "averageFlowrate",
    "status",
    "notes",
    "collectedBy",
    "isFieldBlank",
)


@dataclass
class ShiftContext:
    """A shift together with its samples and its project's samples."""

    shift: Dict[str, Any]
    shift_samples: List[Dict[str, Any]] = field(default_factory=list)
    project_samples: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def shift_id(self) -> str:
        return str(self.shift.get("_id") or "")

    @property
    def job(self) -> Dict[str, Any]:
        job = self.shift.get("job")
        return job if isinstance(job, dict) else {"_id": job}

    @property
    def job_id(self) -> Optional[str]:
        return self.job.get("_id")

    @property
    def project_id(self) -> Optional[str]:
        project = self.job.get("projectId")
        if isinstance(project, dict):
            return project.get("projectID")
        return None

    @property
    def job_model(self) -> Optional[str]:
        return self.shift.get("jobModel")


class SampleService:
    """Create, load and update air monitoring and IAQ samples."""

    def __init__(
        self,
        api_client: "AirMonitoringAPI",
        rules: Optional[SampleRules] = None,
        flowrate_lookup: Optional[FlowrateLookup] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize sample service.

        Args:
            api_client: API client instance
            rules: Sample rules
            flowrate_lookup: Callable returning a pump's available flow rates
            logger: Logger instance
        """
        self.api_client = api_client
        self.rules = rules or SampleRules(logger=logger)
        self.flowrate_lookup = flowrate_lookup
        self.logger = logger or logging.getLogger(__name__)

    def load_shift_context(self, shift_id: str) -> ShiftContext:
        """
        Load a shift, its samples and its project's samples.

        Shift and shift sample failures propagate. A failure to load the
        project's samples is logged and leaves the project sample list empty.

        Args:
            shift_id: Shift ID

        Returns:
            Shift context

        Raises:
            ValueError: If the shift's job has no project ID
        """
        shift = self.api_client.get_shift(shift_id)
        shift_samples = self.api_client.get_samples_by_shift(shift_id)
        context = ShiftContext(shift=shift, shift_samples=shift_samples)

        if not context.project_id:
            raise ValueError(f"Project ID not found in shift {shift_id}")

        try:
            context.project_samples = self.api_client.get_samples_by_project(context.project_id)
        except Exception as e:
            self.logger.error(f"Error fetching project samples for {context.project_id}: {e}", exc_info=True)

        self.logger.info(
            f"Shift {shift_id}: {len(shift_samples)} samples in shift, "
            f"{len(context.project_samples)} in project {context.project_id}"
        )
        return context

    def next_sample_number(self, context: ShiftContext) -> str:
        """Next free AM number in the shift's project."""
        return numbering.next_sample_number(context.project_samples, context.project_id)

    def _update_shift_defaults(self, shift_id: str, data: Dict[str, Any]) -> None:
        try:
            self.api_client.update_shift(shift_id, data)
        except Exception as e:
            self.logger.error(f"Error updating shift defaults for {shift_id}: {e}", exc_info=True)

    def shift_defaults(
        self,
        context: ShiftContext,
        active_flowmeters: Optional[Iterable[str]] = None
    ) -> Dict[str, str]:
        """
        Default sampler and flowmeter for a new sample in the shift.

        The shift's defaults win; otherwise the first sample in the shift
        supplies them and they are written back to the shift. A flowmeter
        that is not currently active is not offered as a default.

        Args:
            context: Shift context
            active_flowmeters: References of active flowmeters, if known

        Returns:
            Dict with optional "sampler" and "flowmeter" keys
        """
        defaults: Dict[str, str] = {}
        backfill: Dict[str, str] = {}
        shift = context.shift
        first_sample = context.shift_samples[0] if context.shift_samples else {}

        sampler = shift.get("defaultSampler")
        if sampler:
            defaults["sampler"] = str(sampler.get("_id") if isinstance(sampler, dict) else sampler)
        elif first_sample.get("collectedBy"):
            collected_by = first_sample["collectedBy"]
            defaults["sampler"] = str(
                collected_by.get("_id") if isinstance(collected_by, dict) else collected_by
            )
            backfill["defaultSampler"] = defaults["sampler"]

        flowmeter = shift.get("defaultFlowmeter")
        if not flowmeter and first_sample.get("flowmeter"):
            flowmeter = first_sample["flowmeter"]
            backfill["defaultFlowmeter"] = flowmeter

        if flowmeter:
            if active_flowmeters is not None and flowmeter not in set(active_flowmeters):
                self.logger.warning(f"Default flowmeter {flowmeter} is not active, leaving it unset")
            else:
                defaults["flowmeter"] = flowmeter

        if backfill and context.shift_id:
            self._update_shift_defaults(context.shift_id, backfill)

        return defaults

    def new_form(
        self,
        context: ShiftContext,
        active_flowmeters: Optional[Iterable[str]] = None
    ) -> SampleForm:
        """
        Seed a form for a new sample in the shift.

        Args:
            context: Shift context
            active_flowmeters: References of active flowmeters, if known

        Returns:
            Sample form
        """
        defaults = self.shift_defaults(context, active_flowmeters)
        draft = SampleDraft(
            sample_number=self.next_sample_number(context),
            sampler=defaults.get("sampler", ""),
            flowmeter=defaults.get("flowmeter", ""),
            filter_size=constants.FILTER_25MM,
        )
        return SampleForm(
            draft=draft,
            rules=self.rules,
            flowrate_lookup=self.flowrate_lookup,
            logger=self.logger,
        )

    def create_sample(self, context: ShiftContext, form: SampleForm) -> Dict[str, Any]:
        """
        Validate and create a new sample.

        When this is the first sample in the shift, its sampler and
        flowmeter become the shift defaults.

        Args:
            context: Shift context
            form: Sample form

        Returns:
            Created sample

        Raises:
            SampleValidationError: If the draft has field errors
            ValueError: If the shift has no job
        """
        form.check(context.project_samples, context.project_id)

        if not context.job_id:
            raise ValueError("Job ID is required")

        if not context.shift_samples:
            first_sample_defaults = {}
            if form.draft.sampler:
                first_sample_defaults["defaultSampler"] = form.draft.sampler
            if form.draft.flowmeter:
                first_sample_defaults["defaultFlowmeter"] = form.draft.flowmeter
            if first_sample_defaults:
                self._update_shift_defaults(context.shift_id, first_sample_defaults)

        payload = form.to_payload()
        payload.update({
            "shift": context.shift_id,
            "job": context.job_id,
            "jobModel": context.job_model,
            "fullSampleID": f"{context.project_id}-{form.draft.sample_number}",
        })

        created = self.api_client.create_sample(payload)
        context.shift_samples.append(payload)
        context.project_samples.append(payload)
        return created

    def load_sample_form(self, sample_id: str, iaq: bool = False) -> SampleForm:
        """
        Load a persisted sample into a form.

        Args:
            sample_id: Sample ID
            iaq: Load an indoor air quality sample

        Returns:
            Sample form
        """
        if iaq:
            sample = self.api_client.get_iaq_sample(sample_id)
        else:
            sample = self.api_client.get_sample(sample_id)

        return SampleForm.from_sample(
            sample,
            rules=self.rules,
            flowrate_lookup=self.flowrate_lookup,
            logger=self.logger,
        )

    def update_sample(
        self,
        sample_id: str,
        form: SampleForm,
        iaq: bool = False,
        project_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Validate and save an edited sample.

        Args:
            sample_id: Sample ID
            form: Sample form
            iaq: Save as an indoor air quality sample
            project_id: Project ID (air monitoring samples)

        Returns:
            Updated sample

        Raises:
            SampleValidationError: If the draft has field errors
        """
        form.check()
        payload = form.to_payload()

        if iaq:
            iaq_payload = {key: payload[key] for key in IAQ_PAYLOAD_KEYS}
            return self.api_client.update_iaq_sample(sample_id, iaq_payload)

        if project_id:
            payload["fullSampleID"] = f"{project_id}-{form.draft.sample_number}"
        return self.api_client.update_sample(sample_id, payload)
