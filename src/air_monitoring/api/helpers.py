"""
Helper functions for API operations.

Provides utility functions for unwrapping list responses and parsing
equipment and calibration records into models.
"""

from typing import Any, Dict, List, Optional

from ..core.date_utils import DateUtils
from ..models import (
    CalibrationTestResult,
    Equipment,
    FlowmeterCalibration,
    PumpCalibration,
)


def unwrap_list(result: Any, key: str = "data") -> List[Dict[str, Any]]:
    """
    Extract the record list from an API response.

    The API returns either a bare list or an object wrapping the list
    (e.g. {"data": [...], "pagination": {...}}).

    Args:
        result: Decoded JSON response
        key: Wrapper key holding the list

    Returns:
        List of records (empty if none)
    """
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        return result.get(key) or []
    return []


def parse_equipment(record: Dict[str, Any]) -> Equipment:
    """
    Parse an equipment registry record.

    Args:
        record: Equipment object from the API

    Returns:
        Equipment model
    """
    return Equipment(
        id=str(record.get("_id") or record.get("id") or ""),
        equipment_type=record.get("equipmentType") or "",
        equipment_reference=record.get("equipmentReference") or "",
        status=record.get("status"),
    )


def _parse_set_flowrate(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_pump_calibration(record: Dict[str, Any], date_utils: DateUtils) -> PumpCalibration:
    """
    Parse an air pump calibration record.

    Test results without a usable set flow rate are dropped.

    Args:
        record: Calibration object from the API
        date_utils: Date utilities used for midnight truncation

    Returns:
        PumpCalibration model
    """
    results = []
    for result in record.get("testResults") or []:
        set_flowrate = _parse_set_flowrate(result.get("setFlowrate"))
        if set_flowrate is None:
            continue
        results.append(CalibrationTestResult(
            set_flowrate=set_flowrate,
            passed=result.get("passed") is True,
        ))

    return PumpCalibration(
        calibration_date=date_utils.to_date(record.get("calibrationDate")),
        next_calibration_due=date_utils.to_date(record.get("nextCalibrationDue")),
        test_results=results,
        id=record.get("_id"),
    )


def parse_flowmeter_calibration(record: Dict[str, Any], date_utils: DateUtils) -> FlowmeterCalibration:
    """
    Parse a site flowmeter calibration record.

    Args:
        record: Calibration object from the API
        date_utils: Date utilities used for midnight truncation

    Returns:
        FlowmeterCalibration model
    """
    return FlowmeterCalibration(
        date=date_utils.to_date(record.get("date")),
        next_calibration=date_utils.to_date(record.get("nextCalibration")),
        id=record.get("_id"),
    )
