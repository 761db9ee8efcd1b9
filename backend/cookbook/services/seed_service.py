"""
Cookbook Backend: Seed Loader
==============================

What:  Loads the bundled dataset (cookbook/data/seed.json) into the store.

Two entry points:
    seed_catalog_if_empty()  Startup. Inserts the dataset ingredients when
                             the ingredient table is empty, and the dataset
                             units when the unit table is empty. Otherwise
                             touches nothing.
    reload_recipes()         GET /initRecipes. Deletes EVERY recipe, then
                             inserts the dataset recipes. Destructive on each
                             call; repeated calls end in the same recipe set.

Dataset format:
    {
      "ingredients": [{"name": "Egg", "allergen": "eggs"}, ...],
      "units":       [{"name": "g"}, ...],
      "recipes":     [{"title": ..., "ingredients": ["Egg", ...],
                       "quantities": [{"quantity": 2, "unit": "pcs", "ingredient": "Egg"}],
                       ...}]
    }

Recipes refer to ingredients and units by name. Names are resolved against
the current tables at load time; unknown names are dropped with a warning.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles

from cookbook.models import Ingredient, Recipe, Unit
from cookbook.services.store import DocumentStore

logger = logging.getLogger(__name__)

RECIPE_SCALAR_FIELDS = ("title", "prep_time", "difficulty", "description", "image", "vegan", "vegetarian")


class SeedService:
    def __init__(self, store: DocumentStore, seed_file: str):
        self.store = store
        self.seed_file = Path(seed_file)

    async def load_dataset(self) -> Dict[str, List[Dict[str, Any]]]:
        async with aiofiles.open(self.seed_file, "r", encoding="utf-8") as f:
            data = json.loads(await f.read())
        return {
            "ingredients": data.get("ingredients", []),
            "units": data.get("units", []),
            "recipes": data.get("recipes", []),
        }

    async def seed_catalog_if_empty(self) -> Dict[str, int]:
        """Returns how many ingredients and units were inserted."""
        dataset = await self.load_dataset()
        inserted = {"ingredients": 0, "units": 0}

        if await self.store.count(Ingredient) == 0:
            rows = [
                Ingredient(name=item.get("name"), allergen=item.get("allergen"))
                for item in dataset["ingredients"]
            ]
            await self.store.add_all(rows)
            inserted["ingredients"] = len(rows)

        if await self.store.count(Unit) == 0:
            rows = [Unit(name=item.get("name")) for item in dataset["units"]]
            await self.store.add_all(rows)
            inserted["units"] = len(rows)

        logger.info(
            "Catalog seed: inserted %d ingredient(s), %d unit(s)",
            inserted["ingredients"],
            inserted["units"],
        )
        return inserted

    async def reload_recipes(self) -> int:
        """Replace the whole recipe collection with the dataset recipes."""
        dataset = await self.load_dataset()
        removed = await self.store.clear(Recipe)

        ingredient_ids = self._name_index(await self.store.list(Ingredient))
        unit_ids = self._name_index(await self.store.list(Unit))

        recipes = [
            self._build_recipe(item, ingredient_ids, unit_ids)
            for item in dataset["recipes"]
        ]
        await self.store.add_all(recipes)
        logger.warning("Recipes reloaded from seed: removed %d, inserted %d", removed, len(recipes))
        return len(recipes)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _name_index(rows: List[Any]) -> Dict[str, str]:
        """name → id; the oldest row wins when names repeat."""
        index: Dict[str, str] = {}
        for row in rows:
            if row.name is not None:
                index.setdefault(row.name, str(row.id))
        return index

    @staticmethod
    def _lookup(index: Dict[str, str], name: Optional[str], kind: str, title: Optional[str]) -> Optional[str]:
        if name is None:
            return None
        found = index.get(name)
        if found is None:
            logger.warning("Seed recipe %r references unknown %s %r", title, kind, name)
        return found

    def _build_recipe(
        self,
        item: Dict[str, Any],
        ingredient_ids: Dict[str, str],
        unit_ids: Dict[str, str],
    ) -> Recipe:
        title = item.get("title")
        ingredients = [
            iid for iid in (
                self._lookup(ingredient_ids, name, "ingredient", title)
                for name in item.get("ingredients", [])
            )
            if iid is not None
        ]
        quantities = [
            {
                "quantity": entry.get("quantity"),
                "unit": self._lookup(unit_ids, entry.get("unit"), "unit", title),
                "ingredient": self._lookup(ingredient_ids, entry.get("ingredient"), "ingredient", title),
            }
            for entry in item.get("quantities", [])
        ]
        return Recipe(
            **{field: item.get(field) for field in RECIPE_SCALAR_FIELDS},
            instructions=list(item.get("instructions", [])),
            ingredients=ingredients,
            quantities=quantities,
            comments=[],
        )
