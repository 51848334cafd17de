"""
Two-phase persistence of an imported character.

The actor is created first; only once the store has confirmed it with an
identity are the items submitted, as one batch parented to that actor.

There is no transaction around the two calls. If the item batch fails the
actor stays in the store and the failure is reported through
``ItemCreationError``, which carries the persisted actor. No compensating
delete is issued.
"""

from __future__ import annotations

import logging
from typing import Any

from ..storage import DocumentStore
from .base import ActorCreationError, ItemCreationError, PersistenceResult

logger = logging.getLogger("rqg-character-importer")


async def persist_character(
    store: DocumentStore,
    actor_payload: dict[str, Any],
    items: list[Any],
) -> PersistenceResult:
    """
    Create the actor, then its items.

    Args:
        store: Destination document store
        actor_payload: Actor data without items
        items: Item records, created in this order

    Returns:
        PersistenceResult with the actor handle (carrying its resolved name)
        and one handle per item

    Raises:
        ActorCreationError: If the store fails or returns no usable identity;
            no items are submitted in that case
        ItemCreationError: If the item batch fails or is not fully confirmed;
            the actor is left in place
    """
    name = actor_payload.get("name")
    try:
        actor = await store.create_entity(actor_payload)
    except Exception as e:
        raise ActorCreationError(f"Actor creation failed for '{name}': {e}") from e

    if actor is None or not actor.id:
        raise ActorCreationError(f"Actor creation failed for '{name}': store returned no identity")

    logger.debug(f"➡️ Import stage: creating_items ({len(items)} items for '{actor.name}' {actor.id})")

    try:
        created = await store.create_child_entities(items, parent=actor)
    except Exception as e:
        raise ItemCreationError(
            f"Item creation failed for actor '{actor.name}': {e}",
            actor=actor,
            details={"submitted": len(items)},
        ) from e

    created = list(created or [])
    if len(created) != len(items):
        raise ItemCreationError(
            f"Store confirmed {len(created)} of {len(items)} items for actor '{actor.name}'",
            actor=actor,
            details={"submitted": len(items), "confirmed": len(created)},
        )

    return PersistenceResult(actor=actor, items=created)
