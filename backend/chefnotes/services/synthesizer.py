"""
ChefNotes Backend — Recipe Synthesizer
========================================

What:  Turns aggregated note text into a formatted recipe via the LLM service.
Why:   Keeps the prompt wording and the generation call in one place, with the
       prompt built by a pure function that can be tested without a network.
How:   build_recipe_prompt() formats; RecipeSynthesizer.synthesize() calls the
       injected LLMService once and applies the empty-output fallback.
Who:   Called by RecipeService.convert_to_recipe().

Failure policy:
    - No contributions: EmptyContentError, the model is never called
    - Provider failure: SynthesisError; nothing retried, nothing cached
"""

import logging
from typing import Sequence

from chefnotes.exceptions import EmptyContentError, SynthesisError
from chefnotes.services.gemini_service import gemini_service
from chefnotes.services.llm_base import LLMService

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a chef assistant that converts voice notes into properly formatted "
    "recipes. Only respond with the recipe format, no additional text."
)

FALLBACK_RECIPE_TEXT = "Could not generate recipe."

# Prefix on the stored note so generated recipes stand apart from authored notes
GENERATED_RECIPE_MARKER = "🍳 Generated Recipe:"


def build_recipe_prompt(title: str, contributions: Sequence[str]) -> str:
    """
    Build the conversion prompt for a recipe title and its note texts.

    The output depends only on the arguments. Each contribution gets a
    1-based "Message N:" label on its own line, in the order given.

    Layout:
        <lead instruction>

        Title: Toast

        Voice Notes:
        Message 1: Butter the bread
        Message 2: Grill for two minutes

        <closing instruction>
    """
    messages = "\n".join(
        f"Message {index}: {text}" for index, text in enumerate(contributions, start=1)
    )
    return (
        "Convert the following voice notes into a properly formatted recipe. "
        "Only respond with the recipe format, nothing else.\n"
        "\n"
        f"Title: {title}\n"
        "\n"
        "Voice Notes:\n"
        f"{messages}\n"
        "\n"
        "Format the response as a proper recipe with ingredients and instructions. "
        "Do not include any other text or commentary."
    )


def format_generated_note(recipe_text: str) -> str:
    """Content of the TextNote a generated recipe is stored as."""
    return f"{GENERATED_RECIPE_MARKER}\n\n{recipe_text}"


class RecipeSynthesizer:
    """Wraps an LLMService with the recipe prompt and fallback rules."""

    def __init__(self, llm: LLMService):
        self.llm = llm

    async def synthesize(self, title: str, contributions: Sequence[str]) -> str:
        """
        Generate a recipe document from ordered note texts.

        Returns:
            The generated text verbatim, or FALLBACK_RECIPE_TEXT when the
            model answered with no text.

        Raises:
            EmptyContentError: contributions is empty.
            SynthesisError: The generation call failed.
        """
        if not contributions:
            raise EmptyContentError()

        prompt = build_recipe_prompt(title, contributions)

        try:
            generated = await self.llm.generate(SYSTEM_INSTRUCTION, prompt)
        except Exception as e:
            logger.error("Recipe synthesis failed for '%s': %s", title, str(e))
            raise SynthesisError(
                context={"title": title, "error_type": type(e).__name__},
            ) from e

        if not generated:
            logger.warning("Model returned no text for '%s'; using fallback", title)
            return FALLBACK_RECIPE_TEXT
        return generated


recipe_synthesizer = RecipeSynthesizer(gemini_service)
