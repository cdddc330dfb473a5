"""
ChefNotes Backend — Content Aggregator
========================================

What:  Collects the usable text of a recipe's notes, in a fixed order.
Why:   This ordered list is the only input the recipe synthesizer gets.
Who:   Called by RecipeService.convert_to_recipe().

Ordering policy:
    All audio transcriptions first (creation order), then all text notes
    (creation order). Not a merge by timestamp.
    Recordings without a transcription contribute nothing.

Aggregation only reads the store, so calling it again after a failed
conversion gives the same answer for the same notes.
"""

import logging
from typing import List

from chefnotes.exceptions import NotFoundError
from chefnotes.models.entities import EntityKind
from chefnotes.store import RecipeStore

logger = logging.getLogger(__name__)


class ContentAggregator:
    """Stateless; the store is passed in on every call."""

    def aggregate(self, store: RecipeStore, recipe_id: int) -> List[str]:
        """
        Return transcriptions followed by text-note contents for a recipe.

        Raises:
            NotFoundError: The recipe does not exist.
        """
        if store.get(EntityKind.RECIPE, recipe_id) is None:
            raise NotFoundError(resource="recipe", resource_id=recipe_id)

        transcriptions = [
            recording.transcription
            for recording in store.list_by_owner(EntityKind.AUDIO_RECORDING, recipe_id)
            if recording.transcription
        ]
        note_contents = [
            note.content
            for note in store.list_by_owner(EntityKind.TEXT_NOTE, recipe_id)
        ]

        logger.debug(
            "Aggregated recipe %d: %d transcription(s), %d note(s)",
            recipe_id,
            len(transcriptions),
            len(note_contents),
        )
        return transcriptions + note_contents


content_aggregator = ContentAggregator()
