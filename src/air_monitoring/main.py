"""
Main entry point for air monitoring sample checks.

Command line access to equipment eligibility, flow rate catalogs, sample
validation and sample numbering.
"""

import sys
from typing import List, Optional

from .core import Config, DateUtils, setup_logger, LoggerContext
from .api import AirMonitoringAPI
from .rules import SampleRules
from .services import (
    CalibrationCache,
    EquipmentRegistry,
    FlowrateService,
    SampleService,
)


class AirMonitoringApp:
    """Main application for air monitoring sample checks."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
        """
        # Load configuration
        self.config = Config(config_file)

        # Setup logger
        self.logger = setup_logger()
        self.logger.info("=" * 60)
        self.logger.info("Air Monitoring Sample Checks")
        self.logger.info("=" * 60)
        self.logger.info(f"Configuration: {self.config}")

        # Initialize components (will be set in initialize_components)
        self.api_client: Optional[AirMonitoringAPI] = None
        self.date_utils: Optional[DateUtils] = None
        self.rules: Optional[SampleRules] = None
        self.registry: Optional[EquipmentRegistry] = None
        self.flowrates: Optional[FlowrateService] = None
        self.samples: Optional[SampleService] = None

    def initialize_components(self) -> None:
        """Initialize all application components."""
        self.logger.info("Initializing components...")

        self.api_client = AirMonitoringAPI(
            base_url=self.config.api_base_url,
            email=self.config.auth_email,
            password=self.config.auth_password,
            timeout=self.config.api_timeout,
            max_retries=self.config.api_max_retries,
            verify_ssl=self.config.api_verify_ssl,
            logger=self.logger
        )
        self.api_client.login()

        self.date_utils = DateUtils(self.config.timezone, self.logger)
        self.rules = SampleRules.from_config(self.config, self.logger)

        cache = CalibrationCache(self.logger)
        self.registry = EquipmentRegistry(
            api_client=self.api_client,
            date_utils=self.date_utils,
            cache=cache,
            eligibility=self.rules.eligibility,
            logger=self.logger
        )
        self.flowrates = FlowrateService(
            registry=self.registry,
            catalog=self.rules.catalog,
            cache=cache,
            logger=self.logger
        )
        self.samples = SampleService(
            api_client=self.api_client,
            rules=self.rules,
            flowrate_lookup=self.flowrates.available_flowrates,
            logger=self.logger
        )

        self.logger.info("All components initialized successfully")

    def _require_components(self) -> None:
        if not all([self.registry, self.flowrates, self.samples]):
            raise RuntimeError("Components not properly initialized")

    def list_equipment(self) -> List[str]:
        """Active air pumps and site flowmeters, one line each."""
        self._require_components()

        with LoggerContext(self.logger, "equipment load") as context:
            pumps = self.registry.active_pumps()
            flowmeters = self.registry.active_flowmeters()
            context.summary = f"{len(pumps)} active pumps, {len(flowmeters)} active flowmeters"

        lines = [f"Air pump       {pump.reference}  due {pump.calibration_due}" for pump in pumps]
        lines += [
            f"Site flowmeter {meter.reference}  due {meter.calibration_due}" for meter in flowmeters
        ]
        return lines

    def list_flowrates(self, pump_reference: str, filter_size: Optional[str] = None) -> List[float]:
        """Flow rates for a pump, optionally restricted to a filter size."""
        self._require_components()

        flowrates = self.flowrates.available_flowrates(pump_reference)
        if filter_size is not None:
            flowrates = self.rules.compatible_flowrates(flowrates, filter_size)
        return flowrates

    def check_sample(self, sample_id: str, iaq: bool = False) -> List[str]:
        """
        Load a sample and report its field errors and warnings.

        Args:
            sample_id: Sample ID
            iaq: Check an indoor air quality sample

        Returns:
            Report lines
        """
        self._require_components()

        form = self.samples.load_sample_form(sample_id, iaq=iaq)
        draft = form.draft
        errors = form.validate()
        warnings = form.warnings()

        lines = [
            f"Sample {draft.sample_number} ({draft.category.value})",
            f"Average flowrate: {draft.average_flowrate or '-'}  Status: {draft.status}",
        ]
        for field_name, message in sorted(errors.items()):
            lines.append(f"ERROR   {field_name}: {message}")
        if warnings.insufficient_sample_time:
            lines.append("WARNING insufficient sample time")
        if warnings.collection_before_setup:
            lines.append("WARNING collection time is before setup time")
        if not errors:
            lines.append("OK")
        return lines

    def next_number(self, shift_id: str) -> str:
        """Next sample number for a new sample in the shift."""
        self._require_components()

        context = self.samples.load_shift_context(shift_id)
        return self.samples.next_sample_number(context)

    def run(self, command: str, **options) -> List[str]:
        """
        Run a command.

        Args:
            command: Command name
            **options: Command arguments

        Returns:
            Output lines
        """
        try:
            self.initialize_components()

            if command == "equipment":
                return self.list_equipment()
            if command == "flowrates":
                flowrates = self.list_flowrates(options["pump"], options.get("filter_size"))
                return [f"{flowrate:g} L/min" for flowrate in flowrates]
            if command == "check-sample":
                return self.check_sample(options["sample_id"], iaq=options.get("iaq", False))
            if command == "next-number":
                return [self.next_number(options["shift_id"])]

            raise ValueError(f"Unknown command: {command}")

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise

        finally:
            if self.api_client:
                self.api_client.close()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Air monitoring sample and equipment checks"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("equipment", help="List active air pumps and site flowmeters")

    flowrates_parser = subparsers.add_parser("flowrates", help="List a pump's available flowrates")
    flowrates_parser.add_argument("--pump", required=True, help="Pump equipment reference")
    flowrates_parser.add_argument(
        "--filter-size",
        choices=["13mm", "25mm"],
        default=None,
        help="Only flowrates usable with this filter size"
    )

    check_parser = subparsers.add_parser("check-sample", help="Validate a persisted sample")
    check_parser.add_argument("sample_id", help="Sample ID")
    check_parser.add_argument("--iaq", action="store_true", help="Sample is an IAQ sample")

    number_parser = subparsers.add_parser("next-number", help="Next sample number for a shift")
    number_parser.add_argument("shift_id", help="Shift ID")

    args = parser.parse_args()

    options = {key: value for key, value in vars(args).items() if key not in ("config", "command")}

    try:
        app = AirMonitoringApp(config_file=args.config)
        for line in app.run(args.command, **options):
            print(line)
    except Exception as e:
        print(f"Application failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
