"""
The character import pipeline.

One call to ``CharacterImporter.run_import()`` is one attempt:

    acquire -> decode -> validate -> migrate -> split -> create actor -> create items

Each stage consumes the previous stage's output and the attempt ends at the
first failure. Every failure is reported exactly once, as one user
notification plus one diagnostic log entry, and never escapes
``run_import()``. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from ..config import ImporterSettings
from ..i18n import localize
from ..models import EntityHandle, ImportOutcome, ImportStage
from ..reporting import OutcomeReporter
from ..storage import DocumentStore
from .base import CharacterImportError, ItemCreationError, SourceError
from .decoder import decode_record
from .migrations import MigrationRule, migrate_record
from .orchestrator import persist_character
from .sources import Source
from .splitter import split_record
from .validator import validate_structure

logger = logging.getLogger("rqg-character-importer")


class CharacterImporter:
    """Runs import attempts against one store, reporter and catalog.

    The importer holds no state between attempts; concurrent calls to
    ``run_import()`` are independent and not coordinated.
    """

    def __init__(
        self,
        store: DocumentStore,
        reporter: OutcomeReporter,
        catalog: dict[str, Any],
        source: Source,
        settings: ImporterSettings | None = None,
        migrations: list[MigrationRule] | None = None,
    ):
        self.store = store
        self.reporter = reporter
        self.catalog = catalog
        self.source = source
        self.settings = settings or ImporterSettings()
        self.migrations = migrations

    def _localize(self, key: str, **params: Any) -> str:
        return localize(self.catalog, key, module_id=self.settings.module_id, **params)

    def _report(self, emit: Callable[..., None], *args: Any) -> None:
        """Call a reporter method; a failing reporter never ends the attempt."""
        try:
            emit(*args)
        except Exception:
            logger.exception(f"❌ Reporter {getattr(emit, '__name__', emit)} failed")

    def _enter(self, stage: ImportStage) -> None:
        logger.debug(f"➡️ Import stage: {stage.value}")

    async def run_import(self) -> ImportOutcome:
        """Run one import attempt from source to store.

        Returns:
            ImportOutcome describing how the attempt ended.
        """
        self._enter(ImportStage.ACQUIRING)
        applied: list[str] = []
        try:
            try:
                raw = await self.source.acquire()
            except SourceError:
                raise
            except Exception as e:
                raise SourceError(f"Character source failed: {e}") from e

            if raw is None:
                return ImportOutcome(status=ImportStage.CANCELLED, stage=ImportStage.CANCELLED)

            self._enter(ImportStage.DECODING)
            data = decode_record(raw)

            self._enter(ImportStage.VALIDATING)
            record = validate_structure(data)
            started = self._localize("notifications.importStarted", name=record["name"])
            self._report(self.reporter.notify_info, started)

            self._enter(ImportStage.MIGRATING)
            migrated = migrate_record(record, self.migrations)
            applied = migrated.applied

            self._enter(ImportStage.SPLITTING)
            actor_payload, items = split_record(migrated.record)

            self._enter(ImportStage.CREATING_ACTOR)
            result = await persist_character(self.store, actor_payload, items)

        except CharacterImportError as e:
            return self._fail(e, applied)

        message = self._localize("notifications.importSuccess", name=result.actor.name)
        self._report(self.reporter.notify_info, message)
        self._enter(ImportStage.SUCCEEDED)
        return ImportOutcome(
            status=ImportStage.SUCCEEDED,
            stage=ImportStage.SUCCEEDED,
            message=message,
            actor=result.actor,
            items=result.items,
            applied_migrations=applied,
        )

    def _fail(self, error: CharacterImportError, applied: list[str]) -> ImportOutcome:
        """Report a failure once and build the terminal outcome."""
        actor: EntityHandle | None = None
        if isinstance(error, ItemCreationError):
            actor = error.actor
            message = self._localize(error.message_key, name=actor.name)
        else:
            message = self._localize(error.message_key)

        self._report(self.reporter.notify_error, message)
        self._report(self.reporter.log_error, f"Character import failed at {error.stage.value}", error)
        self._enter(ImportStage.FAILED)
        return ImportOutcome(
            status=ImportStage.FAILED,
            stage=error.stage,
            error=type(error).__name__,
            message=message,
            actor=actor,
            applied_migrations=applied,
        )
