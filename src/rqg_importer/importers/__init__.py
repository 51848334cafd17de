"""
Character import pipeline.

Turns an exported character file into an actor document plus its owned
item documents in a document store.
"""

from .base import (
    ActorCreationError,
    CharacterImportError,
    DecodeError,
    ItemCreationError,
    MigrationError,
    PersistenceResult,
    SourceError,
    StructureError,
    StructureViolation,
)
from .decoder import decode_record
from .migrations import MIGRATIONS, MigrationResult, MigrationRule, migrate_record, migration
from .orchestrator import persist_character
from .pipeline import CharacterImporter
from .sources import FileSource, Source, UrlSource
from .splitter import split_record
from .validator import validate_structure

__all__ = [
    "ActorCreationError",
    "CharacterImportError",
    "CharacterImporter",
    "DecodeError",
    "FileSource",
    "ItemCreationError",
    "MIGRATIONS",
    "MigrationError",
    "MigrationResult",
    "MigrationRule",
    "PersistenceResult",
    "Source",
    "SourceError",
    "StructureError",
    "StructureViolation",
    "UrlSource",
    "decode_record",
    "migrate_record",
    "migration",
    "persist_character",
    "split_record",
    "validate_structure",
]
