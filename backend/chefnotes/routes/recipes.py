"""
ChefNotes Backend — Recipe Route Handlers
===========================================

What:  CRUD for the recipe container: list, create, detail, delete.
How:   Body/path validation by FastAPI + Pydantic, work delegated to RecipeService.
Who:   Called by the recipe picker and the recipe screen of the frontend.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from chefnotes.schemas.recipe import (
    ErrorResponse,
    RecipeCreate,
    RecipeResponse,
    RecipeWithContentResponse,
)
from chefnotes.services.recipe_service import recipe_service
from chefnotes.store import RecipeStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Recipes"])


@router.get(
    "/recipes",
    response_model=List[RecipeResponse],
    summary="List all recipes",
    description="Returns every recipe in creation order.",
)
async def list_recipes(store: RecipeStore = Depends(get_store)):
    return await recipe_service.list_recipes(store)


@router.post(
    "/recipes",
    status_code=201,
    response_model=RecipeResponse,
    responses={
        201: {"description": "Recipe created", "model": RecipeResponse},
        400: {"description": "Invalid recipe data", "model": ErrorResponse},
    },
    summary="Create a recipe",
)
async def create_recipe(
    body: RecipeCreate,
    store: RecipeStore = Depends(get_store),
):
    return await recipe_service.create_recipe(store, body)


@router.get(
    "/recipes/{recipe_id}",
    response_model=RecipeWithContentResponse,
    responses={
        200: {"description": "Recipe with its recordings and notes"},
        404: {"description": "Recipe not found", "model": ErrorResponse},
    },
    summary="Get a recipe with all of its notes",
    description=(
        "Returns the recipe, its audio recordings and its text notes. "
        "Both lists are in creation order."
    ),
)
async def get_recipe(
    recipe_id: int,
    store: RecipeStore = Depends(get_store),
) -> RecipeWithContentResponse:
    return await recipe_service.get_recipe_with_content(store, recipe_id)


@router.delete(
    "/recipes/{recipe_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Recipe not found", "model": ErrorResponse}},
    summary="Delete a recipe and all of its notes",
)
async def delete_recipe(
    recipe_id: int,
    store: RecipeStore = Depends(get_store),
) -> Response:
    await recipe_service.delete_recipe(store, recipe_id)
    return Response(status_code=204)
