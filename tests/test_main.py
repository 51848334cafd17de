"""
Unit tests for the MCP tool surface.

Tests cover:
- import tool output for success, failure and cancel
- listing imported actors
"""

import json
import pytest
from pathlib import Path

from rqg_importer import main as m
from rqg_importer.importers.sources import FileSource
from rqg_importer.storage import JsonDocumentStore

pytestmark = pytest.mark.anyio


@pytest.fixture
def temp_store(tmp_path: Path) -> JsonDocumentStore:
    return JsonDocumentStore(data_dir=tmp_path / "test_storage")


async def test_import_success_text(temp_store: JsonDocumentStore, character_sample_path: Path):
    text = await m._run_import(FileSource(character_sample_path), store=temp_store)

    assert "Urgath" in text
    assert "3 items imported" in text
    assert "❌" not in text


async def test_import_legacy_mentions_conversion(temp_store: JsonDocumentStore, tmp_path: Path):
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps({
        "name": "Vasana",
        "type": "character",
        "system": {},
        "items": [{"name": "Spear", "type": "weapon", "data": {}}],
    }), encoding="utf-8")

    text = await m._run_import(FileSource(path), store=temp_store)

    assert "legacy-data-key" in text


async def test_import_failure_text(temp_store: JsonDocumentStore, tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("not json", encoding="utf-8")

    text = await m._run_import(FileSource(path), store=temp_store)

    assert text.startswith("❌")
    assert temp_store.list_entities() == []


async def test_import_cancelled_text(temp_store: JsonDocumentStore):
    text = await m._run_import(FileSource(None), store=temp_store)
    assert text == "No character file selected."


async def test_list_actors(temp_store: JsonDocumentStore, character_sample_path: Path):
    assert m._format_actor_list(temp_store) == "No imported actors."

    await m._run_import(FileSource(character_sample_path), store=temp_store)
    listing = m._format_actor_list(temp_store)

    assert listing.startswith("**Imported actors:**")
    assert "Urgath (character, 3 items)" in listing


async def test_import_into_any_document_store(recording_store, character_sample_path: Path):
    text = await m._run_import(FileSource(character_sample_path), store=recording_store)

    assert recording_store.call_names() == ["create_entity", "create_child_entities"]
    assert "3 items imported for 'Urgath' (id: actor1)." in text
