"""
Exception hierarchy and result models for the character import pipeline.

Every failure of an import attempt is one of the ``CharacterImportError``
subclasses below. Each class knows the pipeline stage it belongs to and the
catalog key of the message shown to the user, so the pipeline driver can
translate any of them into exactly one notification.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from ..models import EntityHandle, ImportStage


class CharacterImportError(Exception):
    """Base exception for all character import failures.

    Attributes:
        message: Human-readable error message (for logs, not for the user)
        details: Optional dictionary of additional error context
    """

    stage: ImportStage = ImportStage.FAILED
    message_key: str = "errors.importFailed"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SourceError(CharacterImportError):
    """The character file could not be obtained from its source."""

    stage = ImportStage.ACQUIRING
    message_key = "errors.sourceUnavailable"


class DecodeError(CharacterImportError):
    """The input is not valid UTF-8 encoded JSON."""

    stage = ImportStage.DECODING
    message_key = "errors.invalidJson"


class StructureViolation(str, Enum):
    """Kind of structural problem found by the validator."""

    MISSING_FIELD = "missing_field"
    WRONG_SHAPE = "wrong_shape"


class StructureError(CharacterImportError):
    """The JSON is well-formed but a required top-level field is missing or misshapen.

    Attributes:
        field: Offending top-level field, or None when the root is not an object
        violation: Whether the field is missing or has the wrong shape
    """

    stage = ImportStage.VALIDATING
    message_key = "errors.invalidDataStructure"

    def __init__(
        self,
        message: str,
        field: str | None,
        violation: StructureViolation,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.violation = violation


class MigrationError(CharacterImportError):
    """A compatibility rule recognized the record but could not normalize it."""

    stage = ImportStage.MIGRATING
    message_key = "errors.migrationFailed"

    def __init__(self, message: str, rule: str | None, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.rule = rule


class ActorCreationError(CharacterImportError):
    """The store rejected the actor or did not confirm it with an identity."""

    stage = ImportStage.CREATING_ACTOR
    message_key = "errors.importFailed"


class ItemCreationError(CharacterImportError):
    """The actor was persisted but its items were not (or not all of them).

    The persisted actor is kept on the exception; it is not rolled back.
    """

    stage = ImportStage.CREATING_ITEMS
    message_key = "errors.itemsFailed"

    def __init__(self, message: str, actor: EntityHandle, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.actor = actor


class PersistenceResult(BaseModel):
    """Confirmed documents from a successful two-phase create."""

    actor: EntityHandle = Field(description="The persisted parent actor")
    items: list[EntityHandle] = Field(
        default_factory=list,
        description="Persisted items, all parented to the actor",
    )
