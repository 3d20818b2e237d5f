"""Shape validation for raw settings records.

Records come straight from parsed JSON and may be hand-edited, so every
field is probed before a typed model is built. Validators return a new
normalized record and never raise; the assembler drops invalid records
and keeps going.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from monitorctl.models.settings import is_mappable_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RecordCheck:
    """Result of validating one raw record.

    Attributes:
        valid: Whether the record can be kept.
        record: Normalized copy of the record (None when invalid).
        reason: Why the record was rejected (None when valid).
    """

    valid: bool
    record: dict[str, Any] | None = None
    reason: str | None = None


def _coerce_exclusion(item: object) -> str | None:
    """Convert one exclusion value to a string, or None if unusable."""
    if isinstance(item, str):
        return item
    if isinstance(item, bool):
        return None
    if isinstance(item, int | float):
        return str(item)
    return None


def _coerce_exclusions(value: object) -> list[str]:
    """Bring an ``exclusions`` value into list-of-strings shape."""
    if value is None:
        return []

    items = value if isinstance(value, list) else [value]

    result: list[str] = []
    for item in items:
        coerced = _coerce_exclusion(item)
        if coerced is None:
            logger.debug("Dropping non-string exclusion value: %r", item)
            continue
        result.append(coerced)
    return result


def validate_directory_record(record: object) -> RecordCheck:
    """Validate and normalize one raw monitored-directory record.

    Rules, in order:
    1. ``path`` must be a string that is not blank after trimming.
    2. A missing ``exclusions`` field becomes an empty list.
    3. A null ``exclusions`` becomes an empty list, a scalar becomes a
       one-element list.

    The input is not modified.

    Args:
        record: Raw value taken from the ``monitoredDirectories`` array.

    Returns:
        RecordCheck with the normalized record when valid.
    """
    try:
        if not isinstance(record, Mapping):
            return RecordCheck(False, reason=f"entry is not an object: {record!r}")

        path = record.get("path")
        if not isinstance(path, str) or not path.strip():
            return RecordCheck(False, reason=f"missing or blank path: {path!r}")

        normalized = dict(record)
        normalized["exclusions"] = _coerce_exclusions(record.get("exclusions"))
        return RecordCheck(True, record=normalized)
    except Exception as e:  # noqa: BLE001
        return RecordCheck(False, reason=f"unexpected error: {e}")


def validate_mapping_record(record: object) -> RecordCheck:
    """Validate and normalize one raw drive-mapping record.

    The letter must be exactly one alphabetic character and is stored
    uppercase. The path must be a UNC path or a local drive path longer
    than two characters.

    Args:
        record: Raw value taken from the ``driveMappings`` array.

    Returns:
        RecordCheck with the normalized record when valid.
    """
    try:
        if not isinstance(record, Mapping):
            return RecordCheck(False, reason=f"entry is not an object: {record!r}")

        letter = record.get("letter")
        if not isinstance(letter, str) or len(letter.strip()) != 1 or not letter.strip().isalpha():
            return RecordCheck(False, reason=f"invalid drive letter: {letter!r}")

        path = record.get("path")
        if not isinstance(path, str) or not is_mappable_path(path):
            return RecordCheck(False, reason=f"invalid mapping path: {path!r}")

        normalized = dict(record)
        normalized["letter"] = letter.strip().upper()
        return RecordCheck(True, record=normalized)
    except Exception as e:  # noqa: BLE001
        return RecordCheck(False, reason=f"unexpected error: {e}")
