"""
Cookbook Backend: Recipe Routes
================================

What:  Search, CRUD and comment endpoints under /recipes.
How:   Thin handlers: parse the request, call the service, return its model.
       Errors are raised by the services and rendered by the global handlers.

Writes (POST/PUT/DELETE) pass through the auth gate (`require_user`).
DELETE handlers take ids as plain strings: a malformed id is just an id
that matches nothing, and reports {"msg": "Failed"} like any unknown id.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from cookbook.models import User
from cookbook.routes.deps import (
    get_comment_service,
    get_recipe_search,
    get_recipe_service,
    require_user,
)
from cookbook.schemas.common import DeleteResponse, ErrorResponse
from cookbook.schemas.recipe import RecipeCreate, RecipeResponse, RecipeUpdate, SearchFacets
from cookbook.schemas.user import CommentCreate, CommentResponse
from cookbook.services.comment_service import CommentService
from cookbook.services.recipe_service import RecipeService
from cookbook.services.search_service import RecipeSearch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])

GATED = {403: {"description": "Unknown or missing X-User-Id", "model": ErrorResponse}}
NOT_FOUND = {404: {"description": "Recipe not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[RecipeResponse],
    summary="Search recipes",
    description=(
        "Returns every recipe matching all supplied facets, fully resolved, in random order. "
        "`allergies` and `ingredients` are comma-separated names. A recipe is excluded if it "
        "contains any ingredient of a listed allergen, and must contain at least one of the "
        "listed ingredients."
    ),
)
async def search_recipes(
    term: Optional[str] = Query(default=None, description="Case-insensitive title substring"),
    allergies: Optional[str] = Query(default=None, description="Allergen names, comma-separated"),
    ingredients: Optional[str] = Query(default=None, description="Ingredient names, comma-separated"),
    vegan: Optional[bool] = Query(default=None),
    vegetarian: Optional[bool] = Query(default=None),
    search: RecipeSearch = Depends(get_recipe_search),
) -> List[RecipeResponse]:
    facets = SearchFacets.from_query(term, allergies, ingredients, vegan, vegetarian)
    return await search.search(facets)


@router.get("/{recipe_id}", response_model=RecipeResponse, responses=NOT_FOUND)
async def get_recipe(
    recipe_id: UUID,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    return await service.get(recipe_id)


@router.post("", response_model=RecipeResponse, responses=GATED)
async def create_recipe(
    payload: RecipeCreate,
    _: User = Depends(require_user),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    return await service.create(payload)


@router.put(
    "/{recipe_id}",
    response_model=RecipeResponse,
    responses={**GATED, **NOT_FOUND},
    summary="Replace a recipe",
    description="Full replace: fields missing from the body are cleared, not kept.",
)
async def update_recipe(
    recipe_id: UUID,
    payload: RecipeUpdate,
    _: User = Depends(require_user),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    return await service.update(recipe_id, payload)


@router.delete("/{recipe_id}", response_model=DeleteResponse, responses=GATED)
async def delete_recipe(
    recipe_id: str,
    _: User = Depends(require_user),
    service: RecipeService = Depends(get_recipe_service),
) -> DeleteResponse:
    return DeleteResponse.from_outcome(await service.delete(recipe_id))


@router.post(
    "/{recipe_id}/comment",
    response_model=CommentResponse,
    responses={**GATED, **NOT_FOUND},
    summary="Comment on a recipe",
    description="Creates the comment and appends its id to the recipe. Author defaults to the caller.",
)
async def comment_on_recipe(
    recipe_id: UUID,
    payload: CommentCreate,
    caller: User = Depends(require_user),
    service: RecipeService = Depends(get_recipe_service),
) -> CommentResponse:
    return await service.attach_comment(recipe_id, payload, caller)


@router.delete(
    "/{recipe_id}/comment/{comment_id}",
    response_model=DeleteResponse,
    responses=GATED,
    summary="Delete a comment",
    description="Deletes the comment record. The id stays in the recipe's list and is skipped on read.",
)
async def delete_recipe_comment(
    recipe_id: str,
    comment_id: str,
    _: User = Depends(require_user),
    comments: CommentService = Depends(get_comment_service),
) -> DeleteResponse:
    logger.info("Deleting comment %s from recipe %s", comment_id, recipe_id)
    return DeleteResponse.from_outcome(await comments.delete(comment_id))
