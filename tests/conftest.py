"""
Pytest configuration and fixtures for rqg-character-importer tests.
"""

import copy
import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Add src directory to Python path to allow importing rqg_importer
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from rqg_importer.i18n import load_catalog  # noqa: E402
from rqg_importer.models import EntityHandle  # noqa: E402
from rqg_importer.reporting import OutcomeReporter  # noqa: E402
from rqg_importer.storage import DocumentStore, StoreError  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# Configure anyio to only use asyncio (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def character_sample() -> dict[str, Any]:
    """Load the sample character export."""
    with open(FIXTURES_DIR / "rqg_character_sample.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def character_sample_path() -> Path:
    return FIXTURES_DIR / "rqg_character_sample.json"


@pytest.fixture
def catalog() -> dict[str, Any]:
    return load_catalog("en")


class RecordingStore(DocumentStore):
    """In-memory store that records every call made to it, in order.

    Set ``fail_actor``/``fail_items`` to make the corresponding call raise,
    ``actor_result`` to override what create_entity returns, and
    ``confirm_items`` to limit how many items are confirmed.
    """

    def __init__(self):
        self.calls: list[tuple[str, Any]] = []
        self.fail_actor = False
        self.fail_items = False
        self.actor_result: Any = "default"
        self.confirm_items: int | None = None
        self.actors: dict[str, dict[str, Any]] = {}
        self.children: dict[str, list[dict[str, Any]]] = {}

    async def create_entity(self, payload):
        self.calls.append(("create_entity", copy.deepcopy(payload)))
        if self.fail_actor:
            raise StoreError("actor rejected")
        if self.actor_result != "default":
            return self.actor_result
        actor_id = f"actor{len(self.actors) + 1}"
        self.actors[actor_id] = payload
        return EntityHandle(id=actor_id, name=payload["name"], type=payload.get("type"))

    async def create_child_entities(self, payloads, parent):
        self.calls.append(("create_child_entities", (copy.deepcopy(payloads), parent)))
        if self.fail_items:
            raise StoreError("items rejected")
        confirmed = payloads if self.confirm_items is None else payloads[: self.confirm_items]
        self.children.setdefault(parent.id, []).extend(confirmed)
        return [
            EntityHandle(id=f"{parent.id}-item{i}", name=p.get("name", ""), type=p.get("type"), parent_id=parent.id)
            for i, p in enumerate(confirmed)
        ]

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


class RecordingReporter(OutcomeReporter):
    """Reporter that keeps every notification and diagnostic entry."""

    def __init__(self):
        self.infos: list[str] = []
        self.errors: list[str] = []
        self.logged: list[tuple[str, BaseException]] = []

    def notify_info(self, message: str) -> None:
        self.infos.append(message)

    def notify_error(self, message: str) -> None:
        self.errors.append(message)

    def log_error(self, context: str, cause: BaseException) -> None:
        self.logged.append((context, cause))


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()
