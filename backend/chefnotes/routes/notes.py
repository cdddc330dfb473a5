"""
ChefNotes Backend — Text Note Route Handlers
==============================================

What:  Add and delete free-text notes on a recipe.
"""

from fastapi import APIRouter, Depends, Response

from chefnotes.schemas.recipe import ErrorResponse, TextNoteCreate, TextNoteResponse
from chefnotes.services.recipe_service import recipe_service
from chefnotes.store import RecipeStore, get_store

router = APIRouter(prefix="/api", tags=["Text Notes"])


@router.post(
    "/recipes/{recipe_id}/text-notes",
    status_code=201,
    response_model=TextNoteResponse,
    responses={
        400: {"description": "Invalid note data", "model": ErrorResponse},
        404: {"description": "Recipe not found", "model": ErrorResponse},
    },
    summary="Add a text note to a recipe",
)
async def create_text_note(
    recipe_id: int,
    body: TextNoteCreate,
    store: RecipeStore = Depends(get_store),
):
    return await recipe_service.add_text_note(store, recipe_id, body)


@router.delete(
    "/text-notes/{note_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a text note",
)
async def delete_text_note(
    note_id: int,
    store: RecipeStore = Depends(get_store),
) -> Response:
    await recipe_service.delete_text_note(store, note_id)
    return Response(status_code=204)
