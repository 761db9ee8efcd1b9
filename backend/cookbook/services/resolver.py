"""
Cookbook Backend: Reference Resolution
=======================================

What:  Turns stored records (which only hold ids) into response models with
       the referenced records embedded.
How:   Each method collects every id referenced by the whole batch, fetches
       each collection with one `IN` query, then assembles the responses.
       A list of 50 recipes costs a fixed handful of queries, not 50x.

Dangling references (the target was deleted) are skipped in lists and
rendered as null in single-valued fields.
"""

from typing import Dict, Iterable, List, Optional

from cookbook.models import Comment, Ingredient, Recipe, Unit, User
from cookbook.schemas.catalog import IngredientResponse, UnitResponse
from cookbook.schemas.recipe import QuantityResponse, RecipeResponse
from cookbook.schemas.user import CommentResponse, FavoriteRecipe, UserPublic, UserResponse
from cookbook.services.store import DocumentStore


def _str_ids(values: Iterable[object]) -> List[str]:
    return [str(v) for v in values if v is not None]


class ReferenceResolver:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def comments(self, comments: List[Comment]) -> List[CommentResponse]:
        authors = await self.store.get_many(User, _str_ids(c.author for c in comments))
        return [self._comment(comment, authors) for comment in comments]

    async def users(self, users: List[User]) -> List[UserResponse]:
        favorite_ids = [rid for user in users for rid in user.favorites or []]
        recipes = await self.store.get_many(Recipe, favorite_ids)
        return [
            UserResponse(
                id=user.id,
                email=user.email,
                favorites=[
                    FavoriteRecipe.model_validate(recipes[rid])
                    for rid in user.favorites or []
                    if rid in recipes
                ],
                created_at=user.created_at,
            )
            for user in users
        ]

    async def recipes(self, recipes: List[Recipe]) -> List[RecipeResponse]:
        ingredient_ids: List[str] = []
        unit_ids: List[str] = []
        comment_ids: List[str] = []
        user_ids: List[str] = []
        for recipe in recipes:
            ingredient_ids.extend(recipe.ingredients or [])
            comment_ids.extend(recipe.comments or [])
            for entry in recipe.quantities or []:
                ingredient_ids.extend(_str_ids([entry.get("ingredient")]))
                unit_ids.extend(_str_ids([entry.get("unit")]))
            if recipe.creator is not None:
                user_ids.append(str(recipe.creator))

        ingredients = await self.store.get_many(Ingredient, ingredient_ids)
        units = await self.store.get_many(Unit, unit_ids)
        comments = await self.store.get_many(Comment, comment_ids)
        # Comment authors are loaded together with recipe creators
        user_ids.extend(_str_ids(c.author for c in comments.values()))
        users = await self.store.get_many(User, user_ids)

        return [
            self._recipe(recipe, ingredients, units, comments, users)
            for recipe in recipes
        ]

    # ── Assembly ──────────────────────────────────────────────────────────

    @staticmethod
    def _user(user_id: Optional[object], users: Dict[str, User]) -> Optional[UserPublic]:
        if user_id is None:
            return None
        user = users.get(str(user_id))
        return UserPublic.model_validate(user) if user is not None else None

    def _comment(self, comment: Comment, users: Dict[str, User]) -> CommentResponse:
        return CommentResponse(
            id=comment.id,
            author=self._user(comment.author, users),
            content=comment.content,
            created_at=comment.created_at,
        )

    def _recipe(
        self,
        recipe: Recipe,
        ingredients: Dict[str, Ingredient],
        units: Dict[str, Unit],
        comments: Dict[str, Comment],
        users: Dict[str, User],
    ) -> RecipeResponse:
        quantities = []
        for entry in recipe.quantities or []:
            unit = units.get(str(entry.get("unit")))
            ingredient = ingredients.get(str(entry.get("ingredient")))
            quantities.append(
                QuantityResponse(
                    quantity=entry.get("quantity"),
                    unit=UnitResponse.model_validate(unit) if unit else None,
                    ingredient=IngredientResponse.model_validate(ingredient) if ingredient else None,
                )
            )

        return RecipeResponse(
            id=recipe.id,
            title=recipe.title,
            prep_time=recipe.prep_time,
            difficulty=recipe.difficulty,
            description=recipe.description,
            image=recipe.image,
            instructions=list(recipe.instructions or []),
            ingredients=[
                IngredientResponse.model_validate(ingredients[iid])
                for iid in recipe.ingredients or []
                if iid in ingredients
            ],
            vegan=recipe.vegan,
            vegetarian=recipe.vegetarian,
            quantities=quantities,
            creator=self._user(recipe.creator, users),
            comments=[
                self._comment(comments[cid], users)
                for cid in recipe.comments or []
                if cid in comments
            ],
            created_at=recipe.created_at,
        )
