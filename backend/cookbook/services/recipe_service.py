"""
Cookbook Backend: Recipe Service
=================================

What:  Recipe CRUD with fully resolved responses, plus attaching comments.

Attach-comment flow (POST /recipes/{id}/comment):
    1. Load the recipe (404 if missing; nothing is written)
    2. Create the comment; author defaults to the calling user
    3. Append the comment id to recipe.comments unless already present
    4. Return the comment with its author resolved

Both writes are flushed into the request transaction; the session
dependency commits them together.
"""

import logging
from typing import List, Optional

from cookbook.models import Comment, Ingredient, Recipe, Unit, User
from cookbook.schemas.recipe import RecipeResponse, RecipeWrite
from cookbook.schemas.user import CommentCreate, CommentResponse
from cookbook.services.comment_service import CommentService
from cookbook.services.crud import CrudService
from cookbook.services.resolver import ReferenceResolver
from cookbook.services.store import IdLike

logger = logging.getLogger(__name__)


def append_unique(ids: Optional[List[str]], new_id: str) -> List[str]:
    """Add-to-set append: returns a new list with `new_id` present exactly once."""
    current = list(ids or [])
    if new_id not in current:
        current.append(new_id)
    return current


class RecipeService(CrudService[Recipe, RecipeResponse]):
    model = Recipe
    response_model = RecipeResponse
    resource = "recipe"
    json_fields = frozenset({"instructions", "ingredients", "quantities", "comments"})

    async def present(self, entities: List[Recipe]) -> List[RecipeResponse]:
        return await ReferenceResolver(self.store).recipes(entities)

    async def _check_references(self, payload: RecipeWrite) -> None:
        quantities = payload.quantities or []
        await self._require_existing(
            Ingredient,
            list(payload.ingredients or []) + [q.ingredient for q in quantities],
            "ingredients",
        )
        await self._require_existing(Unit, [q.unit for q in quantities], "quantities")
        await self._require_existing(User, [payload.creator], "creator")
        await self._require_existing(Comment, payload.comments or [], "comments")

    async def attach_comment(
        self,
        recipe_id: IdLike,
        payload: CommentCreate,
        caller: User,
    ) -> CommentResponse:
        recipe = await self._require(recipe_id)

        if payload.author is None:
            payload = payload.model_copy(update={"author": caller.id})
        comments = CommentService(self.store)
        created = await comments.create(payload)

        recipe.comments = append_unique(recipe.comments, str(created.id))
        await self.store.save(recipe)
        logger.info("Attached comment %s to recipe %s", created.id, recipe.id)
        return created
