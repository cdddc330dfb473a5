"""
ChefNotes Backend — Entity Store
==================================

What:  Repository interface for recipes, audio recordings and text notes, plus
       the in-memory implementation the service runs on.
Why:   Keeps every read and write of entity state behind one contract so the
       aggregator and workflow service never depend on how records are kept.
How:   One insertion-ordered dict and one id counter per EntityKind.
Who:   Injected into route handlers via FastAPI's Depends(get_store).
When:  The singleton is created at import; state lives for the process lifetime.

Semantics:
    - Ids start at 1 per kind and grow by 1 on every create; a deleted id is
      never handed out again.
    - Children are listed in insertion order, not by timestamp, since two
      notes created in the same instant would otherwise have no stable order.
    - Deleting a recipe removes every child whose recipe_id matches. This is
      a scan over the child collections, fine at single-user scale.
    - Nothing survives a restart. There are no transactions: a cascade is a
      sequence of dict deletions, all done before the call returns.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Mapping, Optional

from chefnotes.models.entities import RECORD_TYPES, EntityKind, Record

logger = logging.getLogger(__name__)


class RecipeStore(ABC):
    """
    Abstract repository for the three entity kinds.

    Contract:
        - create() assigns the next id for the kind and stamps created_at (UTC)
        - get() returns None for unknown ids, never raises
        - list_by_owner() and list_all() return records in insertion order
        - delete() reports whether the record existed; recipes cascade
        - existence of the owning recipe is checked by callers, not here
    """

    @abstractmethod
    def create(self, kind: EntityKind, fields: Mapping[str, Any]) -> Record:
        """Store a new record built from `fields` and return it."""
        ...

    @abstractmethod
    def get(self, kind: EntityKind, entity_id: int) -> Optional[Record]:
        """Return the record with this id, or None."""
        ...

    @abstractmethod
    def list_by_owner(self, kind: EntityKind, recipe_id: int) -> List[Record]:
        """Return every child record of `kind` belonging to `recipe_id`."""
        ...

    @abstractmethod
    def list_all(self, kind: EntityKind) -> List[Record]:
        """Return every record of `kind`."""
        ...

    @abstractmethod
    def delete(self, kind: EntityKind, entity_id: int) -> bool:
        """Remove a record. Returns False if it did not exist."""
        ...

    @abstractmethod
    def count(self, kind: EntityKind) -> int:
        """Number of live records of `kind`."""
        ...


class InMemoryRecipeStore(RecipeStore):
    """
    Dict-backed RecipeStore.

    Python dicts keep insertion order, which gives creation order for free.
    All methods are synchronous and complete in one step, so under asyncio
    no other request can observe a half-finished cascade.
    """

    def __init__(self) -> None:
        self._records: Dict[EntityKind, Dict[int, Record]] = {
            kind: {} for kind in EntityKind
        }
        self._id_counters: Dict[EntityKind, Iterator[int]] = {
            kind: itertools.count(1) for kind in EntityKind
        }

    def create(self, kind: EntityKind, fields: Mapping[str, Any]) -> Record:
        entity_id = next(self._id_counters[kind])
        record = RECORD_TYPES[kind](
            id=entity_id,
            created_at=datetime.now(timezone.utc),
            **fields,
        )
        self._records[kind][entity_id] = record
        logger.debug("Created %s %d", kind.value, entity_id)
        return record

    def get(self, kind: EntityKind, entity_id: int) -> Optional[Record]:
        return self._records[kind].get(entity_id)

    def list_by_owner(self, kind: EntityKind, recipe_id: int) -> List[Record]:
        if not kind.is_child:
            raise ValueError(f"{kind.value} records have no owning recipe")
        return [
            record for record in self._records[kind].values()
            if record.recipe_id == recipe_id
        ]

    def list_all(self, kind: EntityKind) -> List[Record]:
        return list(self._records[kind].values())

    def delete(self, kind: EntityKind, entity_id: int) -> bool:
        if self._records[kind].pop(entity_id, None) is None:
            return False

        if kind is EntityKind.RECIPE:
            for child_kind in (EntityKind.AUDIO_RECORDING, EntityKind.TEXT_NOTE):
                children = self._records[child_kind]
                orphan_ids = [
                    child_id for child_id, child in children.items()
                    if child.recipe_id == entity_id
                ]
                for child_id in orphan_ids:
                    del children[child_id]
                if orphan_ids:
                    logger.info(
                        "Recipe %d delete cascaded to %d %s record(s)",
                        entity_id,
                        len(orphan_ids),
                        child_kind.value,
                    )

        logger.debug("Deleted %s %d", kind.value, entity_id)
        return True

    def count(self, kind: EntityKind) -> int:
        return len(self._records[kind])


# ── Singleton Instance ────────────────────────────────────────────────────
# The whole process shares one store; a fresh one would lose every recipe.
recipe_store = InMemoryRecipeStore()


def get_store() -> RecipeStore:
    """
    FastAPI dependency that provides the entity store.

    Tests override it with app.dependency_overrides[get_store] to get an
    isolated store per test.
    """
    return recipe_store
