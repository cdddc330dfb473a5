"""
ChefNotes Backend — Recipe Service Unit Tests
===============================================

What:  Tests for RecipeService business logic, including the conversion workflow.
How:   Direct service calls against a fresh store; the module-level synthesizer
       is patched with one wrapping an LLM double.

What we test:
    ✅ Conversion appends exactly one marker-prefixed note
    ✅ Empty recipe rejected before the model is called
    ✅ Failed synthesis writes nothing
    ✅ Recipe deleted mid-conversion → NotFoundError, no orphan note
    ✅ Concurrent conversions both append (not serialized)
    ✅ Audio payload validation (base64, size)
    ✅ Missing ids → NotFoundError
"""

import asyncio
import base64
from unittest.mock import patch

import pytest

from chefnotes.config import settings
from chefnotes.exceptions import (
    EmptyContentError,
    NotFoundError,
    SynthesisError,
    ValidationError,
)
from chefnotes.models.entities import EntityKind
from chefnotes.schemas.recipe import AudioRecordingCreate, RecipeCreate, TextNoteCreate
from chefnotes.services.llm_base import LLMService
from chefnotes.services.recipe_service import RecipeService, decode_audio_payload
from chefnotes.services.synthesizer import GENERATED_RECIPE_MARKER, RecipeSynthesizer

SYNTHESIZER_PATH = "chefnotes.services.recipe_service.recipe_synthesizer"


class DeletingLLM(LLMService):
    """Deletes the recipe from the store while the 'model' is answering."""

    def __init__(self, store, recipe_id):
        self.store = store
        self.recipe_id = recipe_id

    async def generate(self, system_instruction: str, prompt: str) -> str:
        self.store.delete(EntityKind.RECIPE, self.recipe_id)
        return "Ingredients: none left"

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def service():
    return RecipeService()


# ══════════════════════════════════════════════════════════════════════════
# CRUD
# ══════════════════════════════════════════════════════════════════════════


class TestCrud:

    @pytest.mark.asyncio
    async def test_create_and_list_recipes(self, service, store):
        await service.create_recipe(store, RecipeCreate(name="Pancakes"))
        await service.create_recipe(store, RecipeCreate(name="Waffles"))

        recipes = await service.list_recipes(store)
        assert [(r.id, r.name) for r in recipes] == [(1, "Pancakes"), (2, "Waffles")]

    @pytest.mark.asyncio
    async def test_get_missing_recipe_raises(self, service, store):
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_recipe(store, 5)
        assert exc_info.value.resource == "recipe"

    @pytest.mark.asyncio
    async def test_recipe_with_content(self, service, store, pancake_recipe):
        result = await service.get_recipe_with_content(store, pancake_recipe.id)

        assert result.recipe.name == "Pancakes"
        assert [r.transcription for r in result.audio_recordings] == ["a", None, "b"]
        assert [n.content for n in result.text_notes] == ["c"]

    @pytest.mark.asyncio
    async def test_add_audio_recording(self, service, store, audio_payload):
        recipe = await service.create_recipe(store, RecipeCreate(name="Bread"))
        data = AudioRecordingCreate(
            name="Recording 1",
            duration=12,
            audioData=audio_payload,
            mimeType="audio/webm;codecs=opus",
            transcription="knead for ten minutes",
        )

        recording = await service.add_audio_recording(store, recipe.id, data)

        assert recording.recipe_id == recipe.id
        assert recording.audio_data == audio_payload
        content, mime_type = await service.get_audio_payload(store, recording.id)
        assert content == base64.b64decode(audio_payload)
        assert mime_type == "audio/webm;codecs=opus"

    @pytest.mark.asyncio
    async def test_child_on_missing_recipe_raises(self, service, store, audio_payload):
        with pytest.raises(NotFoundError):
            await service.add_text_note(store, 3, TextNoteCreate(content="salt"))

        data = AudioRecordingCreate(
            name="Recording", duration=1, audio_data=audio_payload, mime_type="audio/webm"
        )
        with pytest.raises(NotFoundError):
            await service.add_audio_recording(store, 3, data)
        assert store.count(EntityKind.AUDIO_RECORDING) == 0

    @pytest.mark.asyncio
    async def test_delete_missing_ids_raise(self, service, store):
        with pytest.raises(NotFoundError):
            await service.delete_recipe(store, 1)
        with pytest.raises(NotFoundError):
            await service.delete_audio_recording(store, 1)
        with pytest.raises(NotFoundError):
            await service.delete_text_note(store, 1)

    @pytest.mark.asyncio
    async def test_delete_recipe_cascades(self, service, store, pancake_recipe):
        await service.delete_recipe(store, pancake_recipe.id)

        assert store.count(EntityKind.AUDIO_RECORDING) == 0
        assert store.count(EntityKind.TEXT_NOTE) == 0


# ══════════════════════════════════════════════════════════════════════════
# Audio Payload Validation
# ══════════════════════════════════════════════════════════════════════════


class TestDecodeAudioPayload:

    def test_valid_payload(self, audio_payload):
        assert decode_audio_payload(audio_payload).startswith(b"\x1aE\xdf\xa3")

    def test_invalid_base64(self):
        with pytest.raises(ValidationError) as exc_info:
            decode_audio_payload("not base64 at all!!")
        assert exc_info.value.field == "audioData"

    def test_oversize_payload(self, monkeypatch):
        monkeypatch.setattr(settings, "max_audio_size", 16)
        payload = base64.b64encode(b"x" * 17).decode("ascii")

        with pytest.raises(ValidationError, match="maximum size"):
            decode_audio_payload(payload)


# ══════════════════════════════════════════════════════════════════════════
# Conversion Workflow
# ══════════════════════════════════════════════════════════════════════════


class TestConvertToRecipe:

    @pytest.mark.asyncio
    async def test_appends_marker_prefixed_note(self, service, store, pancake_recipe, stub_llm):
        with patch(SYNTHESIZER_PATH, RecipeSynthesizer(stub_llm)):
            generated, note = await service.convert_to_recipe(store, pancake_recipe.id)

        assert generated == stub_llm.response
        assert note.recipe_id == pancake_recipe.id
        assert note.content == f"{GENERATED_RECIPE_MARKER}\n\n{stub_llm.response}"

        notes = store.list_by_owner(EntityKind.TEXT_NOTE, pancake_recipe.id)
        assert [n.content for n in notes] == ["c", note.content]

        _, prompt = stub_llm.calls[0]
        assert "Title: Pancakes" in prompt
        assert "Message 1: a\nMessage 2: b\nMessage 3: c" in prompt

    @pytest.mark.asyncio
    async def test_second_conversion_includes_first_result(
        self, service, store, pancake_recipe, stub_llm
    ):
        with patch(SYNTHESIZER_PATH, RecipeSynthesizer(stub_llm)):
            await service.convert_to_recipe(store, pancake_recipe.id)
            await service.convert_to_recipe(store, pancake_recipe.id)

        _, second_prompt = stub_llm.calls[1]
        assert f"Message 4: {GENERATED_RECIPE_MARKER}" in second_prompt

    @pytest.mark.asyncio
    async def test_empty_recipe_rejected_without_model_call(self, service, store, stub_llm):
        recipe = store.create(EntityKind.RECIPE, {"name": "Blank"})
        store.create(
            EntityKind.AUDIO_RECORDING,
            {
                "recipe_id": recipe.id,
                "name": "Recording",
                "duration": 2,
                "audio_data": "AAAA",
                "mime_type": "audio/webm",
                "transcription": None,
            },
        )

        with patch(SYNTHESIZER_PATH, RecipeSynthesizer(stub_llm)):
            with pytest.raises(EmptyContentError):
                await service.convert_to_recipe(store, recipe.id)

        assert stub_llm.calls == []
        assert store.count(EntityKind.TEXT_NOTE) == 0

    @pytest.mark.asyncio
    async def test_missing_recipe(self, service, store, stub_llm):
        with patch(SYNTHESIZER_PATH, RecipeSynthesizer(stub_llm)):
            with pytest.raises(NotFoundError):
                await service.convert_to_recipe(store, 404)
        assert stub_llm.calls == []

    @pytest.mark.asyncio
    async def test_failure_writes_nothing(self, service, store, pancake_recipe, failing_llm):
        with patch(SYNTHESIZER_PATH, RecipeSynthesizer(failing_llm)):
            with pytest.raises(SynthesisError):
                await service.convert_to_recipe(store, pancake_recipe.id)

        assert store.count(EntityKind.TEXT_NOTE) == 1
        assert failing_llm.calls == 1

    @pytest.mark.asyncio
    async def test_fallback_text_is_saved(self, service, store, pancake_recipe, stub_llm):
        stub_llm.response = ""
        with patch(SYNTHESIZER_PATH, RecipeSynthesizer(stub_llm)):
            generated, note = await service.convert_to_recipe(store, pancake_recipe.id)

        assert generated == "Could not generate recipe."
        assert note.content.endswith("Could not generate recipe.")

    @pytest.mark.asyncio
    async def test_recipe_deleted_during_generation(self, service, store, pancake_recipe):
        llm = DeletingLLM(store, pancake_recipe.id)
        with patch(SYNTHESIZER_PATH, RecipeSynthesizer(llm)):
            with pytest.raises(NotFoundError):
                await service.convert_to_recipe(store, pancake_recipe.id)

        assert store.count(EntityKind.TEXT_NOTE) == 0

    @pytest.mark.asyncio
    async def test_concurrent_conversions_both_append(
        self, service, store, pancake_recipe, stub_llm
    ):
        with patch(SYNTHESIZER_PATH, RecipeSynthesizer(stub_llm)):
            results = await asyncio.gather(
                service.convert_to_recipe(store, pancake_recipe.id),
                service.convert_to_recipe(store, pancake_recipe.id),
            )

        note_ids = {note.id for _, note in results}
        assert len(note_ids) == 2
        assert len(stub_llm.calls) == 2
        assert store.count(EntityKind.TEXT_NOTE) == 3
