"""
Structural validation of decoded character records.

This is a shallow presence/shape check of the four top-level fields the
importer relies on. The contents of ``system`` and of each item belong to
the destination game system and are not inspected here.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..models import ImportRecord
from .base import StructureError, StructureViolation

logger = logging.getLogger("rqg-character-importer")

REQUIRED_FIELDS = ("name", "type", "system", "items")

# pydantic error types that mean "absent" rather than "wrong type"
_MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def _classify(data: dict[str, Any], err: dict[str, Any]) -> tuple[str | None, StructureViolation]:
    """Map a pydantic error entry to (top-level field, violation)."""
    loc = err.get("loc") or ()
    field = str(loc[0]) if loc else None
    if err.get("type") in _MISSING_ERROR_TYPES or data.get(field) is None:
        return field, StructureViolation.MISSING_FIELD
    return field, StructureViolation.WRONG_SHAPE


def validate_structure(data: Any) -> dict[str, Any]:
    """
    Check that a decoded value has the shape of a character export.

    Args:
        data: Value produced by the decoder

    Returns:
        The same object, unchanged

    Raises:
        StructureError: If the root is not an object, or a required field
            is missing (absent, null or empty) or has the wrong shape
    """
    if not isinstance(data, dict):
        raise StructureError(
            f"Invalid character file format: expected JSON object, got {type(data).__name__}",
            field=None,
            violation=StructureViolation.WRONG_SHAPE,
        )

    try:
        ImportRecord.model_validate(data)
    except ValidationError as e:
        problems = [_classify(data, err) for err in e.errors()]
        # Report the first offending field in declaration order
        problems.sort(
            key=lambda p: REQUIRED_FIELDS.index(p[0]) if p[0] in REQUIRED_FIELDS else len(REQUIRED_FIELDS)
        )
        field, violation = problems[0]
        if violation == StructureViolation.MISSING_FIELD:
            message = f"Missing required field '{field}'"
        elif field == "items":
            message = f"Field 'items' must be a list of items, got {type(data['items']).__name__}"
        else:
            message = f"Field '{field}' has the wrong shape: got {type(data[field]).__name__}"
        raise StructureError(
            message,
            field=field,
            violation=violation,
            details={"errors": [{"field": f, "violation": v.value} for f, v in problems]},
        ) from e

    logger.debug(f"✅ Structure valid for '{data['name']}' ({len(data['items'])} items)")
    return data
