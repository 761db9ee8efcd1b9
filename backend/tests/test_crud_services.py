"""
Cookbook Backend: CRUD & Recipe Service Tests
==============================================

What:  The shared create / read / update / delete contract, reference
       checks on write, dangling-reference handling on read, and attaching
       comments to recipes.
"""

import uuid
from unittest.mock import patch

import pytest
import pytest_asyncio

from cookbook.exceptions import DatabaseError, NotFoundError, ValidationError
from cookbook.models import Comment, Recipe, User
from cookbook.schemas.catalog import IngredientCreate, IngredientUpdate, UnitCreate
from cookbook.schemas.recipe import QuantityEntry, RecipeCreate, RecipeUpdate
from cookbook.schemas.user import CommentCreate, UserCreate
from cookbook.services.catalog_service import IngredientService, UnitService
from cookbook.services.comment_service import CommentService
from cookbook.services.recipe_service import RecipeService, append_unique
from cookbook.services.store import DocumentStore
from cookbook.services.user_service import UserService


@pytest.fixture
def ingredients(store):
    return IngredientService(store)


@pytest.fixture
def recipes(store):
    return RecipeService(store)


@pytest_asyncio.fixture
async def cook(store):
    created = await UserService(store, bcrypt_rounds=4).create(
        UserCreate(email="cook@example.com", password="pw")
    )
    return await store.get(User, created.id)


# ══════════════════════════════════════════════════════════════════════════
# Generic contract
# ══════════════════════════════════════════════════════════════════════════

class TestCrudContract:

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self, ingredients):
        created = await ingredients.create(IngredientCreate(name="Egg", allergen="eggs"))
        assert isinstance(created.id, uuid.UUID)
        assert created.created_at is not None
        assert (await ingredients.get(created.id)).name == "Egg"

    @pytest.mark.asyncio
    async def test_create_with_no_fields(self, store):
        created = await UnitService(store).create(UnitCreate())
        assert created.name is None

    @pytest.mark.asyncio
    async def test_list_returns_every_record(self, ingredients):
        for name in ("Egg", "Milk", "Flour"):
            await ingredients.create(IngredientCreate(name=name))
        assert {i.name for i in await ingredients.list()} == {"Egg", "Milk", "Flour"}

    @pytest.mark.asyncio
    async def test_get_unknown_raises_not_found(self, ingredients):
        with pytest.raises(NotFoundError):
            await ingredients.get(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_get_malformed_id_raises_not_found(self, ingredients):
        with pytest.raises(NotFoundError):
            await ingredients.get("not-a-uuid")

    @pytest.mark.asyncio
    async def test_update_is_full_replace(self, ingredients):
        created = await ingredients.create(IngredientCreate(name="Butter", allergen="lactose"))

        updated = await ingredients.update(created.id, IngredientUpdate(name="Vegan butter"))

        assert updated.name == "Vegan butter"
        assert updated.allergen is None
        assert (await ingredients.get(created.id)).allergen is None

    @pytest.mark.asyncio
    async def test_update_unknown_raises_not_found(self, ingredients):
        with pytest.raises(NotFoundError):
            await ingredients.update(uuid.uuid4(), IngredientUpdate(name="x"))

    @pytest.mark.asyncio
    async def test_delete_reports_outcome(self, ingredients):
        created = await ingredients.create(IngredientCreate(name="Salt"))

        assert await ingredients.delete(created.id) is True
        assert await ingredients.delete(created.id) is False
        assert await ingredients.delete("not-a-uuid") is False

    @pytest.mark.asyncio
    async def test_delete_store_failure_rolls_back_and_reports_false(self, ingredients):
        created = await ingredients.create(IngredientCreate(name="Pepper"))

        with patch.object(DocumentStore, "delete", side_effect=DatabaseError()):
            assert await ingredients.delete(created.id) is False

        # The rolled-back session keeps serving reads and writes
        again = await ingredients.create(IngredientCreate(name="Pepper"))
        assert (await ingredients.get(again.id)).name == "Pepper"
        assert [i.id for i in await ingredients.list()] == [again.id]


# ══════════════════════════════════════════════════════════════════════════
# Recipes
# ══════════════════════════════════════════════════════════════════════════

class TestRecipeService:

    @pytest.mark.asyncio
    async def test_create_resolves_references(self, recipes, catalog, cook):
        egg = catalog["ingredients"]["Egg"]
        pcs = catalog["units"]["pcs"]

        created = await recipes.create(RecipeCreate(
            title="Boiled egg",
            ingredients=[egg],
            quantities=[QuantityEntry(quantity=2, unit=pcs, ingredient=egg)],
            creator=cook.id,
            instructions=["Boil for 7 minutes."],
        ))

        assert [i.name for i in created.ingredients] == ["Egg"]
        assert created.quantities[0].unit.name == "pcs"
        assert created.quantities[0].ingredient.allergen == "eggs"
        assert created.creator.email == "cook@example.com"
        assert created.instructions == ["Boil for 7 minutes."]

    @pytest.mark.asyncio
    async def test_create_stores_ids_as_strings(self, store, recipes, catalog):
        egg = catalog["ingredients"]["Egg"]
        created = await recipes.create(RecipeCreate(title="Egg", ingredients=[egg]))
        stored = await store.get(Recipe, created.id)
        assert stored.ingredients == [egg]
        assert stored.comments == []

    @pytest.mark.asyncio
    async def test_unknown_ingredient_is_rejected(self, recipes, catalog):
        ghost = uuid.uuid4()
        with pytest.raises(ValidationError) as exc_info:
            await recipes.create(RecipeCreate(title="Ghost soup", ingredients=[ghost]))
        assert exc_info.value.context["missing"] == [str(ghost)]

    @pytest.mark.asyncio
    async def test_unknown_unit_is_rejected(self, recipes, catalog):
        egg = catalog["ingredients"]["Egg"]
        with pytest.raises(ValidationError, match="units"):
            await recipes.create(RecipeCreate(
                quantities=[QuantityEntry(quantity=1, unit=uuid.uuid4(), ingredient=egg)],
            ))

    @pytest.mark.asyncio
    async def test_unknown_creator_is_rejected(self, recipes):
        with pytest.raises(ValidationError, match="users"):
            await recipes.create(RecipeCreate(title="x", creator=uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_update_clears_omitted_fields(self, recipes, catalog):
        recipe_id = catalog["recipes"]["Classic Pancakes"]

        updated = await recipes.update(recipe_id, RecipeUpdate(title="Pancakes v2"))

        assert updated.title == "Pancakes v2"
        assert updated.description is None
        assert updated.vegetarian is None
        assert updated.ingredients == []
        assert updated.quantities == []
        assert updated.instructions == []

    @pytest.mark.asyncio
    async def test_deleted_ingredient_is_skipped_on_read(self, recipes, ingredients, catalog):
        recipe_id = catalog["recipes"]["Peanut Banana Oats"]
        assert await ingredients.delete(catalog["ingredients"]["Banana"]) is True

        recipe = await recipes.get(recipe_id)

        assert {i.name for i in recipe.ingredients} == {"Oats", "Peanut butter"}
        banana_line = [q for q in recipe.quantities if q.ingredient is None]
        assert len(banana_line) == 1
        assert banana_line[0].unit.name == "pcs"


class TestComments:

    @pytest.mark.asyncio
    async def test_attach_comment_defaults_author_to_caller(self, recipes, catalog, cook):
        recipe_id = catalog["recipes"]["Spaghetti al Pomodoro"]

        comment = await recipes.attach_comment(recipe_id, CommentCreate(content="Lovely"), cook)

        assert comment.author.id == cook.id
        recipe = await recipes.get(recipe_id)
        assert [c.id for c in recipe.comments] == [comment.id]
        assert recipe.comments[0].author.email == "cook@example.com"

    @pytest.mark.asyncio
    async def test_attach_comment_to_unknown_recipe_writes_nothing(self, store, recipes, cook):
        with pytest.raises(NotFoundError):
            await recipes.attach_comment(uuid.uuid4(), CommentCreate(content="Hello?"), cook)
        assert await store.count(Comment) == 0

    @pytest.mark.asyncio
    async def test_deleted_comment_is_skipped_on_read(self, store, recipes, catalog, cook):
        recipe_id = catalog["recipes"]["Roasted Chickpea Salad"]
        keep = await recipes.attach_comment(recipe_id, CommentCreate(content="Keep"), cook)
        drop = await recipes.attach_comment(recipe_id, CommentCreate(content="Drop"), cook)

        assert await CommentService(store).delete(drop.id) is True

        recipe = await recipes.get(recipe_id)
        assert [c.id for c in recipe.comments] == [keep.id]
        assert len((await store.get(Recipe, recipe_id)).comments) == 2

    @pytest.mark.asyncio
    async def test_comment_with_unknown_author_is_rejected(self, store):
        with pytest.raises(ValidationError, match="author"):
            await CommentService(store).create(CommentCreate(author=uuid.uuid4(), content="hi"))

    def test_append_unique(self):
        assert append_unique(None, "a") == ["a"]
        assert append_unique(["a"], "b") == ["a", "b"]
        assert append_unique(["a", "b"], "a") == ["a", "b"]

    def test_append_unique_returns_new_list(self):
        original = ["a"]
        append_unique(original, "b")
        assert original == ["a"]
