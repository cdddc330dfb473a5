"""
ChefNotes Backend — Recipe Service (Business Logic Orchestrator)
=================================================================

What:  Central orchestrator for recipe CRUD and the convert-to-recipe workflow.
Why:   Keeps every business rule out of the route handlers.
How:   Composes the entity store, ContentAggregator and RecipeSynthesizer.
Who:   Called by route handlers; calls the store and the other services.

Conversion Flow (POST /api/recipes/{id}/convert-to-recipe):
    ┌───────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │ Aggregate │───▶│ Reject if   │───▶│  Synthesize  │───▶│  Append  │
    │  (store)  │    │   empty     │    │   (Gemini)   │    │ TextNote │
    └───────────┘    └─────────────┘    └──────────────┘    └──────────┘

    On failure at any step nothing is written: the note is only created
    after the model has answered.

Concurrency:
    Two conversions of the same recipe are not serialized. Both read the same
    notes while their Gemini calls are in flight, and both append a generated
    note when they finish. Clients that need one result should not fire twice.

Design Decision:
    RecipeService is stateless; it receives the store on every call, the same
    way a database session would be passed in. Tests hand it a fresh store.
"""

import base64
import binascii
import logging
from typing import List, Tuple

from chefnotes.config import settings
from chefnotes.exceptions import EmptyContentError, NotFoundError, ValidationError
from chefnotes.models.entities import (
    AudioRecording,
    EntityKind,
    Recipe,
    TextNote,
)
from chefnotes.schemas.recipe import (
    AudioRecordingCreate,
    AudioRecordingResponse,
    RecipeCreate,
    RecipeResponse,
    RecipeWithContentResponse,
    TextNoteCreate,
    TextNoteResponse,
)
from chefnotes.services.aggregator import content_aggregator
from chefnotes.services.synthesizer import format_generated_note, recipe_synthesizer
from chefnotes.store import RecipeStore

logger = logging.getLogger(__name__)


def decode_audio_payload(audio_data: str) -> bytes:
    """
    Decode a base64 audio payload and enforce the configured size limit.

    Raises:
        ValidationError: Not valid base64, or decoded size over max_audio_size.
    """
    try:
        audio_bytes = base64.b64decode(audio_data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError(
            message="Audio data is not valid base64",
            field="audioData",
        )

    if len(audio_bytes) > settings.max_audio_size:
        max_mb = settings.max_audio_size / (1024 * 1024)
        raise ValidationError(
            message=f"Recording exceeds the maximum size of {max_mb:.0f}MB.",
            field="audioData",
            context={"max_size_mb": max_mb, "actual_size": len(audio_bytes)},
        )
    return audio_bytes


class RecipeService:
    """
    Business logic layer for recipes and their notes.

    Missing records surface as NotFoundError; the store itself never raises
    for them.
    """

    # ── Recipes ───────────────────────────────────────────────────────────

    async def list_recipes(self, store: RecipeStore) -> List[Recipe]:
        return store.list_all(EntityKind.RECIPE)

    async def create_recipe(self, store: RecipeStore, data: RecipeCreate) -> Recipe:
        recipe = store.create(EntityKind.RECIPE, {"name": data.name})
        logger.info("Recipe %d created: %s", recipe.id, recipe.name)
        return recipe

    async def get_recipe(self, store: RecipeStore, recipe_id: int) -> Recipe:
        recipe = store.get(EntityKind.RECIPE, recipe_id)
        if recipe is None:
            raise NotFoundError(resource="recipe", resource_id=recipe_id)
        return recipe

    async def get_recipe_with_content(
        self, store: RecipeStore, recipe_id: int
    ) -> RecipeWithContentResponse:
        """Recipe plus its recordings and notes, each list in creation order."""
        recipe = await self.get_recipe(store, recipe_id)
        return RecipeWithContentResponse(
            recipe=RecipeResponse.model_validate(recipe),
            audio_recordings=[
                AudioRecordingResponse.model_validate(recording)
                for recording in store.list_by_owner(EntityKind.AUDIO_RECORDING, recipe_id)
            ],
            text_notes=[
                TextNoteResponse.model_validate(note)
                for note in store.list_by_owner(EntityKind.TEXT_NOTE, recipe_id)
            ],
        )

    async def delete_recipe(self, store: RecipeStore, recipe_id: int) -> None:
        """Delete a recipe and, through the store's cascade, all of its notes."""
        if not store.delete(EntityKind.RECIPE, recipe_id):
            raise NotFoundError(resource="recipe", resource_id=recipe_id)
        logger.info("Recipe %d deleted", recipe_id)

    # ── Audio Recordings ──────────────────────────────────────────────────

    async def add_audio_recording(
        self,
        store: RecipeStore,
        recipe_id: int,
        data: AudioRecordingCreate,
    ) -> AudioRecording:
        """
        Attach a recording to an existing recipe.

        Order of checks: recipe exists (404), then payload decodes and fits (400).
        """
        await self.get_recipe(store, recipe_id)
        audio_bytes = decode_audio_payload(data.audio_data)

        recording = store.create(
            EntityKind.AUDIO_RECORDING,
            {
                "recipe_id": recipe_id,
                "name": data.name,
                "duration": data.duration,
                "audio_data": data.audio_data,
                "mime_type": data.mime_type,
                "transcription": data.transcription,
            },
        )
        logger.info(
            "Recording %d added to recipe %d (%ds, %d bytes, transcribed=%s)",
            recording.id,
            recipe_id,
            recording.duration,
            len(audio_bytes),
            recording.transcription is not None,
        )
        return recording

    async def get_audio_payload(
        self, store: RecipeStore, recording_id: int
    ) -> Tuple[bytes, str]:
        """Return the decoded audio bytes and the MIME type they were recorded as."""
        recording = store.get(EntityKind.AUDIO_RECORDING, recording_id)
        if recording is None:
            raise NotFoundError(resource="audio recording", resource_id=recording_id)
        return base64.b64decode(recording.audio_data), recording.mime_type

    async def delete_audio_recording(self, store: RecipeStore, recording_id: int) -> None:
        if not store.delete(EntityKind.AUDIO_RECORDING, recording_id):
            raise NotFoundError(resource="audio recording", resource_id=recording_id)
        logger.info("Recording %d deleted", recording_id)

    # ── Text Notes ────────────────────────────────────────────────────────

    async def add_text_note(
        self,
        store: RecipeStore,
        recipe_id: int,
        data: TextNoteCreate,
    ) -> TextNote:
        await self.get_recipe(store, recipe_id)
        note = store.create(
            EntityKind.TEXT_NOTE,
            {"recipe_id": recipe_id, "content": data.content},
        )
        logger.info("Text note %d added to recipe %d", note.id, recipe_id)
        return note

    async def delete_text_note(self, store: RecipeStore, note_id: int) -> None:
        if not store.delete(EntityKind.TEXT_NOTE, note_id):
            raise NotFoundError(resource="text note", resource_id=note_id)
        logger.info("Text note %d deleted", note_id)

    # ── Conversion ────────────────────────────────────────────────────────

    async def convert_to_recipe(
        self, store: RecipeStore, recipe_id: int
    ) -> Tuple[str, TextNote]:
        """
        Generate a formatted recipe from a recipe's notes and store it as a note.

        Workflow Steps:
            1. Aggregate transcriptions and text notes (404 if no recipe)
            2. Reject an empty aggregate before any model call
            3. Synthesize the recipe text (one Gemini call)
            4. Append a TextNote holding the marker-prefixed text

        Returns:
            (generated_text, stored_note)

        Raises:
            NotFoundError: Recipe does not exist.
            EmptyContentError: No transcriptions and no text notes.
            SynthesisError: The model call failed; nothing was stored.
        """
        recipe = await self.get_recipe(store, recipe_id)
        contributions = content_aggregator.aggregate(store, recipe_id)

        if not contributions:
            raise EmptyContentError(context={"recipe_id": recipe_id})

        logger.info(
            "Converting recipe %d ('%s') from %d note(s)",
            recipe_id,
            recipe.name,
            len(contributions),
        )
        generated = await recipe_synthesizer.synthesize(recipe.name, contributions)

        # The recipe may have been deleted while the model was answering
        if store.get(EntityKind.RECIPE, recipe_id) is None:
            raise NotFoundError(resource="recipe", resource_id=recipe_id)

        note = store.create(
            EntityKind.TEXT_NOTE,
            {"recipe_id": recipe_id, "content": format_generated_note(generated)},
        )
        logger.info("Generated recipe saved as text note %d on recipe %d", note.id, recipe_id)
        return generated, note


recipe_service = RecipeService()
