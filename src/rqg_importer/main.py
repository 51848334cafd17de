"""
RQG Character Importer MCP Server
Exposes the character import pipeline as FastMCP tools.
"""

import logging
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from .config import ImporterSettings
from .i18n import load_catalog
from .models import ImportStage
from .importers import CharacterImporter, FileSource, Source, UrlSource
from .reporting import LoggingReporter
from .storage import DocumentStore, JsonDocumentStore

settings = ImporterSettings.from_env()

logger = logging.getLogger("rqg-character-importer")

logging.basicConfig(
    level=settings.log_level,
    )

catalog = load_catalog(settings.language)
logger.debug(f"🌐 Loaded '{settings.language}' message catalog")

mcp = FastMCP(
    name=settings.module_id
)

_storage: JsonDocumentStore | None = None


def get_storage() -> JsonDocumentStore:
    """Return the document store, creating it on first use."""
    global _storage
    if _storage is None:
        _storage = JsonDocumentStore(data_dir=settings.storage_dir.resolve())
        logger.debug("✅ Storage layer initialized")
    return _storage


async def _run_import(source: Source, store: DocumentStore | None = None) -> str:
    """Run one import attempt and return what the user was told."""
    reporter = LoggingReporter(module_id=settings.module_id)
    importer = CharacterImporter(
        store=store or get_storage(),
        reporter=reporter,
        catalog=catalog,
        source=source,
        settings=settings,
    )
    outcome = await importer.run_import()
    if outcome.status == ImportStage.CANCELLED:
        return "No character file selected."

    text = reporter.format()
    if outcome.succeeded:
        text += f"\n\n{len(outcome.items)} items imported for '{outcome.actor.name}' (id: {outcome.actor.id})."
        if outcome.applied_migrations:
            text += f"\nConverted from an older export format: {', '.join(outcome.applied_migrations)}."
    return text


def _format_actor_list(store: JsonDocumentStore) -> str:
    actors = store.list_entities()
    if not actors:
        return "No imported actors."

    lines = [
        f"• {actor['name']} ({actor.get('type', 'unknown')}, {len(actor.get('items', []))} items) [{actor['_id']}]"
        for actor in actors
    ]
    return "**Imported actors:**\n" + "\n".join(lines)


# ----------------------------------------------------------------------
# Tools
# ----------------------------------------------------------------------

@mcp.tool
async def import_character(
    file_path: Annotated[str, Field(description="Path to the exported character .json file. Leave empty to cancel.")] = "",
) -> str:
    """Import a character exported by the character generator.

    Creates the actor and then all of its items. If the items cannot be
    created the actor is kept and the failure is reported.
    """
    return await _run_import(FileSource(file_path or None))


@mcp.tool
async def import_character_from_url(
    url: Annotated[str, Field(description="URL of a published character .json export")],
) -> str:
    """Import a character from a JSON export published at a URL."""
    return await _run_import(UrlSource(url, timeout=settings.fetch_timeout))


@mcp.tool
def list_actors() -> str:
    """List imported actors with their item counts."""
    return _format_actor_list(get_storage())


logger.debug("✅ All tools successfully registered. RQG Character Importer running! 🎲")

def main() -> None:
    """Main entry point for the RQG Character Importer server."""
    mcp.run()

if __name__ == "__main__":
    main()
