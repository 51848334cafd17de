"""
Split a character record into the actor document and its owned items.
"""

from __future__ import annotations

from typing import Any


def split_record(record: dict[str, Any]) -> tuple[dict[str, Any], list[Any]]:
    """Separate actor data from item data.

    Items are created separately, parented to the actor once it exists.

    Args:
        record: A validated (and migrated) character record.

    Returns:
        Tuple of (actor payload without ``items``, items in their original order).
    """
    actor_payload = {key: value for key, value in record.items() if key != "items"}
    return actor_payload, list(record["items"])
