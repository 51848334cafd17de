"""
Data models for the RQG character importer.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImportStage(str, Enum):
    """States of a single import attempt."""

    IDLE = "idle"
    ACQUIRING = "acquiring"
    DECODING = "decoding"
    VALIDATING = "validating"
    MIGRATING = "migrating"
    SPLITTING = "splitting"
    CREATING_ACTOR = "creating_actor"
    CREATING_ITEMS = "creating_items"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ImportRecord(BaseModel):
    """Top-level shape of an exported character.

    Only the four required fields are declared. Anything else at the top
    level (img, flags, prototypeToken, ...) is allowed and passed through.
    ``system`` and the individual items are opaque to the importer.
    """

    model_config = ConfigDict(extra="allow", strict=True)

    name: str = Field(min_length=1, description="Actor name")
    type: str = Field(min_length=1, description="Actor kind, e.g. 'character'")
    system: dict[str, Any] = Field(description="Game-system specific actor data")
    items: list[Any] = Field(description="Owned item records, in order")


class EntityHandle(BaseModel):
    """A store's confirmation that a document was created."""

    id: str = Field(description="Opaque document identity")
    name: str = Field(description="Name as resolved by the store")
    type: str | None = None
    parent_id: str | None = Field(default=None, description="Identity of the owning document")


class ImportOutcome(BaseModel):
    """Final state of one import attempt."""

    status: ImportStage = Field(description="succeeded, failed or cancelled")
    stage: ImportStage = Field(description="Last stage reached; for failures, the stage that failed")
    error: str | None = Field(default=None, description="Exception class name of the failure")
    message: str | None = Field(default=None, description="User-visible message that was emitted")
    actor: EntityHandle | None = None
    items: list[EntityHandle] = Field(default_factory=list)
    applied_migrations: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == ImportStage.SUCCEEDED

    @property
    def partial(self) -> bool:
        """True when the actor was persisted but the attempt still failed."""
        return self.status == ImportStage.FAILED and self.actor is not None
