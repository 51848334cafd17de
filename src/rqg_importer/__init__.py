"""
RQG Character Importer - imports generated characters and their items into a document store.
"""

from .config import MODULE_ID, ImporterSettings
from .importers import CharacterImporter
from .models import EntityHandle, ImportOutcome, ImportRecord, ImportStage
from .storage import DocumentStore, JsonDocumentStore

try:
    from importlib.metadata import PackageNotFoundError, version as _get_version
    __version__ = _get_version("rqg-character-importer")
except PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback if metadata unavailable
__all__ = [
    "MODULE_ID",
    "CharacterImporter",
    "DocumentStore",
    "EntityHandle",
    "ImportOutcome",
    "ImportRecord",
    "ImportStage",
    "ImporterSettings",
    "JsonDocumentStore",
]
