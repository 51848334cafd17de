"""
Document store interface and a JSON file implementation.

The importer only ever talks to a ``DocumentStore``. ``JsonDocumentStore``
persists each actor as one JSON document with its items embedded, which is
enough to run and inspect imports without a host application.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import shortuuid

from .models import EntityHandle

logger = logging.getLogger("rqg-character-importer")


def new_uuid() -> str:
    """Generate a new random 8-character UUID."""
    return shortuuid.random(length=8)


class StoreError(Exception):
    """Raised by a store when it refuses or fails a create request."""


class DocumentStore(ABC):
    """Abstract destination for imported actors and their items.

    Subclasses must implement:
    - create_entity(): persist a parent document and confirm it.
    - create_child_entities(): persist a batch of documents owned by a parent.
    """

    @abstractmethod
    async def create_entity(self, payload: dict[str, Any]) -> EntityHandle | None:
        """Create a top-level document.

        Args:
            payload: Document data; must contain a name.

        Returns:
            Handle of the created document. A store may return None when it
            could not confirm the creation.

        Raises:
            StoreError: If the payload is rejected or cannot be written.
        """
        ...

    @abstractmethod
    async def create_child_entities(
        self, payloads: list[Any], parent: EntityHandle
    ) -> list[EntityHandle]:
        """Create documents owned by ``parent``, in order.

        Args:
            payloads: One mapping per child document.
            parent: Handle of an existing parent document.

        Returns:
            One handle per created child, each referencing the parent.

        Raises:
            StoreError: If the parent is unknown or a payload is rejected.
        """
        ...


class JsonDocumentStore(DocumentStore):
    """Stores actors as ``actors/<id>.json`` under a data directory."""

    def __init__(self, data_dir: str | Path = "rqg_data"):
        self.data_dir = Path(data_dir)
        logger.debug(f"📂 Initializing JsonDocumentStore with data_dir: {self.data_dir.resolve()}")
        self.actors_dir = self.data_dir / "actors"
        self.actors_dir.mkdir(parents=True, exist_ok=True)

    def _actor_file(self, actor_id: str) -> Path:
        return self.actors_dir / f"{actor_id}.json"

    def _read(self, actor_id: str) -> dict[str, Any] | None:
        path = self._actor_file(actor_id)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write(self, document: dict[str, Any]) -> None:
        path = self._actor_file(document["_id"])
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            tmp_path.replace(path)
        except (OSError, TypeError, ValueError) as e:
            tmp_path.unlink(missing_ok=True)
            raise StoreError(f"Failed to write document {document['_id']}: {e}") from e
        logger.debug(f"💾 Saved actor '{document['name']}' to {path}")

    @staticmethod
    def _unique_name(base_name: str, existing_lower: set[str]) -> str:
        """Generate a unique name by appending a numeric suffix.

        Args:
            base_name: Requested actor name.
            existing_lower: Lowercased names of stored actors.

        Returns:
            The name itself if free, otherwise a name like "Urgath (2)".
        """
        if base_name.lower() not in existing_lower:
            return base_name
        counter = 2
        while True:
            candidate = f"{base_name} ({counter})"
            if candidate.lower() not in existing_lower:
                return candidate
            counter += 1

    def list_entities(self) -> list[dict[str, Any]]:
        """Return every stored actor document, sorted by name."""
        documents = []
        for path in self.actors_dir.glob("*.json"):
            with open(path, "r", encoding="utf-8") as f:
                documents.append(json.load(f))
        return sorted(documents, key=lambda d: d.get("name", "").lower())

    def get_entity(self, entity_id: str) -> dict[str, Any] | None:
        """Return a stored actor document by id, or None."""
        return self._read(entity_id)

    def list_children(self, parent_id: str) -> list[dict[str, Any]]:
        """Return the items owned by an actor (empty if the actor is unknown)."""
        document = self._read(parent_id)
        return list(document.get("items", [])) if document else []

    async def create_entity(self, payload: dict[str, Any]) -> EntityHandle:
        if not payload:
            raise StoreError("Cannot create an actor from an empty payload")
        name = payload.get("name")
        if not isinstance(name, str) or not name.strip():
            raise StoreError("Actor payload has no name")

        existing_lower = {d.get("name", "").lower() for d in self.list_entities()}
        resolved_name = self._unique_name(name.strip(), existing_lower)
        if resolved_name != name:
            logger.debug(f"✏️ Actor name '{name}' resolved to '{resolved_name}'")

        document = {**payload, "_id": new_uuid(), "name": resolved_name, "items": []}
        self._write(document)
        logger.info(f"✨ Created actor '{resolved_name}' ({document['_id']})")
        return EntityHandle(id=document["_id"], name=resolved_name, type=payload.get("type"))

    async def create_child_entities(
        self, payloads: list[Any], parent: EntityHandle
    ) -> list[EntityHandle]:
        document = self._read(parent.id)
        if document is None:
            raise StoreError(f"Parent actor '{parent.id}' not found")

        children: list[dict[str, Any]] = []
        for index, payload in enumerate(payloads):
            if not isinstance(payload, dict):
                raise StoreError(
                    f"Item #{index} must be an object, got {type(payload).__name__}"
                )
            children.append({**payload, "_id": new_uuid(), "parent_id": parent.id})

        document["items"].extend(children)
        self._write(document)
        logger.info(f"✨ Created {len(children)} items for '{document['name']}'")
        return [
            EntityHandle(
                id=child["_id"],
                name=str(child.get("name", "")),
                type=child.get("type"),
                parent_id=parent.id,
            )
            for child in children
        ]
