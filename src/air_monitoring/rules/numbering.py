"""
Sample numbering and identifier helpers.

Air monitoring samples are numbered AM1, AM2, ... per project and stored
with a full ID of "<projectID>-AM<n>". Cowl numbers carry a "C" prefix.
"""

import re
from typing import Any, Dict, Iterable, Optional

from ..core import constants

_AM_SUFFIX = re.compile(r"AM(\d+)$")
_COWL_PREFIX = re.compile(r"^C+", re.IGNORECASE)


def sample_number_value(sample: Dict[str, Any], project_id: Optional[str] = None) -> int:
    """
    Extract the numeric AM suffix of a persisted sample.

    Args:
        sample: Sample record from the API
        project_id: Project ID used as the fullSampleID prefix

    Returns:
        Sample number, or 0 for samples without an AM number
    """
    full_id = sample.get("fullSampleID") or ""
    number = sample.get("sampleNumber") or ""

    has_prefix = number.startswith(constants.SAMPLE_NUMBER_PREFIX) or (
        project_id is not None and full_id.startswith(f"{project_id}-AM")
    )
    if not has_prefix:
        return 0

    match = _AM_SUFFIX.search(full_id) or _AM_SUFFIX.search(number)
    return int(match.group(1)) if match else 0


def next_sample_number(project_samples: Iterable[Dict[str, Any]], project_id: Optional[str] = None) -> str:
    """
    Next free sample number for a project.

    Args:
        project_samples: All samples in the project
        project_id: Project ID

    Returns:
        Sample number such as "AM7"
    """
    highest = max(
        (sample_number_value(sample, project_id) for sample in project_samples),
        default=0
    )
    return f"{constants.SAMPLE_NUMBER_PREFIX}{highest + 1}"


def is_duplicate_sample_number(
    sample_number: str,
    project_samples: Iterable[Dict[str, Any]],
    project_id: str
) -> bool:
    """
    Check whether a sample number is already used in the project.

    Args:
        sample_number: Candidate number (e.g. "AM3")
        project_samples: All samples in the project
        project_id: Project ID

    Returns:
        True if another sample already has this number
    """
    candidate = sample_number.replace(constants.SAMPLE_NUMBER_PREFIX, "")
    for sample in project_samples:
        full_id = sample.get("fullSampleID") or ""
        if not full_id.startswith(f"{project_id}-AM"):
            continue
        match = _AM_SUFFIX.search(full_id)
        if match and match.group(1) == candidate:
            return True
    return False


def extract_sample_number(full_sample_id: Optional[str]) -> str:
    """
    Sample number part of a full sample ID.

    Args:
        full_sample_id: Full sample ID (e.g. "LDJ00123-AM4")

    Returns:
        "AM4" style number, the full ID if it has none, or "AM1" when empty
    """
    if not full_sample_id:
        return f"{constants.SAMPLE_NUMBER_PREFIX}1"
    match = _AM_SUFFIX.search(full_sample_id)
    return match.group(0) if match else full_sample_id


def strip_cowl_prefix(cowl_no: Optional[str]) -> str:
    """Remove any leading "C" characters from a cowl number."""
    if not cowl_no:
        return ""
    return _COWL_PREFIX.sub("", cowl_no)


def with_cowl_prefix(cowl_no: Optional[str]) -> str:
    """Cowl number as stored: always a single "C" prefix."""
    number = strip_cowl_prefix(cowl_no)
    if not number:
        return ""
    return f"{constants.COWL_PREFIX}{number}"
