"""
ChefNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── store: Empty InMemoryRecipeStore
    ├── stub_llm: LLMService double returning a fixed recipe
    ├── failing_llm: LLMService double that always raises LLMServiceError
    ├── pancake_recipe: Recipe with transcribed/untranscribed recordings and a note
    ├── audio_payload: Small base64 audio body
    └── test_client: HTTPX AsyncClient against a fresh app wired to `store`
                     and to a synthesizer around `stub_llm`
"""

import base64
import os
from typing import List, Tuple
from unittest.mock import patch

# Settings are read at import time; set them before any chefnotes import
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from chefnotes.exceptions import LLMServiceError
from chefnotes.models.entities import EntityKind
from chefnotes.services.llm_base import LLMService
from chefnotes.services.synthesizer import RecipeSynthesizer
from chefnotes.store import InMemoryRecipeStore, get_store


GENERATED_TEXT = (
    "Ingredients:\n- 200g flour\n- 300ml milk\n\n"
    "Instructions:\n1. Mix flour and milk.\n2. Cook on low heat."
)


class StubLLM(LLMService):
    """Fixed-response LLM double that records every call it receives."""

    def __init__(self, response: str = GENERATED_TEXT):
        self.response = response
        self.calls: List[Tuple[str, str]] = []

    async def generate(self, system_instruction: str, prompt: str) -> str:
        self.calls.append((system_instruction, prompt))
        return self.response

    async def health_check(self) -> bool:
        return True


class FailingLLM(LLMService):
    """LLM double whose every generation fails like an unreachable API."""

    def __init__(self):
        self.calls = 0

    async def generate(self, system_instruction: str, prompt: str) -> str:
        self.calls += 1
        raise LLMServiceError(message="Gemini unreachable")

    async def health_check(self) -> bool:
        return False


@pytest.fixture
def store():
    return InMemoryRecipeStore()


@pytest.fixture
def stub_llm():
    return StubLLM()


@pytest.fixture
def failing_llm():
    return FailingLLM()


@pytest.fixture
def audio_payload():
    """Base64 text as the browser would send it; content is not real audio."""
    return base64.b64encode(b"\x1aE\xdf\xa3fake-webm-bytes").decode("ascii")


@pytest.fixture
def pancake_recipe(store, audio_payload):
    """
    A recipe holding, in creation order:
        recording "a" (transcribed), recording without transcription,
        recording "b" (transcribed), text note "c".
    """
    recipe = store.create(EntityKind.RECIPE, {"name": "Pancakes"})
    for transcription in ("a", None, "b"):
        store.create(
            EntityKind.AUDIO_RECORDING,
            {
                "recipe_id": recipe.id,
                "name": "Recording",
                "duration": 4,
                "audio_data": audio_payload,
                "mime_type": "audio/webm",
                "transcription": transcription,
            },
        )
    store.create(EntityKind.TEXT_NOTE, {"recipe_id": recipe.id, "content": "c"})
    return recipe


@pytest_asyncio.fixture
async def test_client(store, stub_llm):
    """
    HTTPX AsyncClient routed straight into a fresh FastAPI app.

    The store dependency is overridden with the test's store, and the
    conversion workflow uses a synthesizer around stub_llm, so no test
    touches Gemini.
    """
    from chefnotes.main import create_app

    app = create_app()
    app.dependency_overrides[get_store] = lambda: store

    with patch(
        "chefnotes.services.recipe_service.recipe_synthesizer",
        RecipeSynthesizer(stub_llm),
    ):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
