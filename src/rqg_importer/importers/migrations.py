"""
Compatibility shim for character exports produced against older schemas.

Each migration is a named rule made of a detector (does this record carry
the signature of an old shape?) and a pure transform that returns the
record in the current shape. Rules run in registration order over a deep
copy of the record, so callers never see their input mutated.

Adding support for a new schema version means registering another rule:

    @migration("my-rule")
    def _detect(record: dict) -> bool:
        ...

    @_detect.transform
    def _apply(record: dict) -> dict:
        ...

Every transform must be idempotent: a record that no longer carries the
signature is not matched again, and running the shim over its own output
changes nothing.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .base import MigrationError, StructureError
from .validator import validate_structure

logger = logging.getLogger("rqg-character-importer")

Record = dict[str, Any]


@dataclass
class MigrationRule:
    """A schema signature plus the transform that removes it."""

    name: str
    matches: Callable[[Record], bool]
    apply: Callable[[Record], Record] | None = None

    def transform(self, func: Callable[[Record], Record]) -> Callable[[Record], Record]:
        """Decorator attaching the transform function to this rule."""
        self.apply = func
        return func


@dataclass
class MigrationResult:
    """Record in the current shape plus the names of the rules that changed it."""

    record: Record
    applied: list[str] = field(default_factory=list)


MIGRATIONS: list[MigrationRule] = []


def migration(name: str) -> Callable[[Callable[[Record], bool]], MigrationRule]:
    """Register a detector as a new migration rule.

    Args:
        name: Unique rule name, reported in import outcomes and logs.

    Returns:
        Decorator turning the detector into a MigrationRule.
    """

    def decorator(matches: Callable[[Record], bool]) -> MigrationRule:
        if any(rule.name == name for rule in MIGRATIONS):
            raise ValueError(f"Migration '{name}' is already registered")
        rule = MigrationRule(name=name, matches=matches)
        MIGRATIONS.append(rule)
        return rule

    return decorator


def detect_schema_version(record: Record) -> str | None:
    """Return the host system version the record was exported from, if recorded."""
    stats = record.get("_stats")
    if isinstance(stats, dict) and stats.get("systemVersion"):
        return str(stats["systemVersion"])
    version = record.get("version")
    return str(version) if version is not None else None


def migrate_record(record: Record, rules: list[MigrationRule] | None = None) -> MigrationResult:
    """
    Bring a validated record to the current shape.

    Args:
        record: A record that already passed structural validation
        rules: Rules to consider; defaults to every registered migration

    Returns:
        MigrationResult with the (possibly unchanged) record and the applied rule names

    Raises:
        MigrationError: If a matching rule fails or leaves the record misshapen
    """
    rules = MIGRATIONS if rules is None else rules
    version = detect_schema_version(record)
    logger.debug(f"🔎 Schema signature: version={version or 'unknown'}")

    try:
        current = copy.deepcopy(record)
    except Exception as e:
        raise MigrationError(f"Record could not be copied for migration: {e}", rule=None) from e
    applied: list[str] = []

    for rule in rules:
        try:
            matched = rule.matches(current)
        except MigrationError:
            raise
        except Exception as e:
            raise MigrationError(f"Migration '{rule.name}' detector failed: {e}", rule=rule.name) from e
        if not matched:
            continue
        if rule.apply is None:
            raise MigrationError(f"Migration '{rule.name}' has no transform", rule=rule.name)

        logger.debug(f"🔧 Applying migration '{rule.name}'")
        try:
            current = rule.apply(current)
        except MigrationError:
            raise
        except Exception as e:
            raise MigrationError(f"Migration '{rule.name}' failed: {e}", rule=rule.name) from e

        try:
            validate_structure(current)
        except StructureError as e:
            raise MigrationError(
                f"Migration '{rule.name}' produced an invalid record: {e.message}",
                rule=rule.name,
            ) from e
        applied.append(rule.name)

    if applied:
        logger.info(f"🔧 Migrated '{current['name']}' with: {', '.join(applied)}")
    return MigrationResult(record=current, applied=applied)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

# Hosts before v10 exported document data under "data"; it is "system" now.
LEGACY_DATA_KEY = "data"


@migration("legacy-data-key")
def _has_legacy_data_key(record: Record) -> bool:
    if LEGACY_DATA_KEY in record:
        return True
    return any(isinstance(item, dict) and LEGACY_DATA_KEY in item for item in record["items"])


def _rename_data_key(document: Record, label: str) -> Record:
    legacy = document.pop(LEGACY_DATA_KEY)
    if not isinstance(legacy, dict):
        raise MigrationError(
            f"{label} has a legacy 'data' field that is not an object",
            rule="legacy-data-key",
        )
    if "system" in document and document["system"] != legacy:
        raise MigrationError(
            f"{label} has both 'data' and 'system' with different contents",
            rule="legacy-data-key",
        )
    document["system"] = legacy
    return document


@_has_legacy_data_key.transform
def _migrate_legacy_data_key(record: Record) -> Record:
    if LEGACY_DATA_KEY in record:
        _rename_data_key(record, f"Actor '{record['name']}'")
    for index, item in enumerate(record["items"]):
        if isinstance(item, dict) and LEGACY_DATA_KEY in item:
            _rename_data_key(item, f"Item #{index} ({item.get('name', 'unnamed')})")
    return record
