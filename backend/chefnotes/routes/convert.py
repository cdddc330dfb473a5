"""
ChefNotes Backend — Convert-to-Recipe Route Handler
=====================================================

What:  Handles POST /api/recipes/{id}/convert-to-recipe.
Why:   Entry point for the core feature: turning voice and text notes into a
       formatted recipe with Gemini.
How:   Delegates to RecipeService.convert_to_recipe(), returns 201 with the
       generated text and the note it was stored as.

Request Flow:
    1. Rate limit middleware counts the call against the client IP
    2. RecipeService aggregates the recipe's notes
    3. Empty aggregate → 400 before any Gemini call
    4. Gemini generates the recipe (the only slow step)
    5. The result is appended as a new text note → 201

Error responses (handled by global exception handlers):
    HTTP 400: No content to convert (EmptyContentError)
    HTTP 404: Recipe not found (NotFoundError)
    HTTP 429: Too many conversions (rate limit middleware)
    HTTP 500: Gemini call failed (SynthesisError)
"""

import logging

from fastapi import APIRouter, Depends

from chefnotes.schemas.recipe import ConvertResponse, ErrorResponse, TextNoteResponse
from chefnotes.services.recipe_service import recipe_service
from chefnotes.store import RecipeStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Conversion"])


@router.post(
    "/recipes/{recipe_id}/convert-to-recipe",
    status_code=201,
    response_model=ConvertResponse,
    responses={
        201: {"description": "Recipe generated and saved", "model": ConvertResponse},
        400: {"description": "Recipe has no notes to convert", "model": ErrorResponse},
        404: {"description": "Recipe not found", "model": ErrorResponse},
        429: {"description": "Conversion rate limit exceeded", "model": ErrorResponse},
        500: {"description": "Recipe generation failed", "model": ErrorResponse},
    },
    summary="Generate a formatted recipe from a recipe's notes",
    description=(
        "Sends every transcription (first) and text note (after) of the recipe to "
        "Gemini and stores the generated recipe as a new text note. Calling this "
        "twice appends two generated notes."
    ),
)
async def convert_to_recipe(
    recipe_id: int,
    store: RecipeStore = Depends(get_store),
) -> ConvertResponse:
    generated, note = await recipe_service.convert_to_recipe(store, recipe_id)
    return ConvertResponse(
        recipe=generated,
        note=TextNoteResponse.model_validate(note),
    )
