"""
Cookbook Backend: Recipe Search
================================

What:  GET /recipes, the faceted recipe search.
How:   Five optional facets narrow the catalog; the survivors are returned
       fully resolved and in random order.

Algorithm:
    1. Resolve facet names to ingredient ids
         allergies   → ids of ingredients whose `allergen` is one of the names
         ingredients → ids of ingredients whose `name` is one of the names
       Each facet is one IN query, so the result is the union across names.
    2. Ingredient predicate over each recipe's ingredient-id set
         must contain NONE of the allergy ids
         must contain AT LEAST ONE of the ingredient ids, when any were named
       ("any of", not "all of": asking for "egg,flour" returns recipes
       with egg or flour)
    3. vegan / vegetarian, when given, are equality filters in the query
    4. term keeps recipes whose title contains it, case-insensitively
    5. Resolve references, then shuffle (Fisher-Yates)

A named ingredient that matches nothing contributes no ids; if no named
ingredient matches, the inclusion rule is dropped rather than matching
nothing.
"""

import logging
import random
from typing import Callable, Iterable, List, Optional, Set

from cookbook.models import Ingredient, Recipe
from cookbook.schemas.recipe import RecipeResponse, SearchFacets
from cookbook.services.resolver import ReferenceResolver
from cookbook.services.store import DocumentStore

logger = logging.getLogger(__name__)

IngredientPredicate = Callable[[Iterable[str]], bool]


def build_ingredient_predicate(excluded: Set[str], included: Set[str]) -> IngredientPredicate:
    """
    Return a test over a recipe's ingredient ids.

    >>> keep = build_ingredient_predicate(excluded={"nut"}, included={"egg", "milk"})
    >>> keep(["egg", "flour"]), keep(["egg", "nut"]), keep(["flour"])
    (True, False, False)
    """
    def predicate(ingredient_ids: Iterable[str]) -> bool:
        ids = set(ingredient_ids)
        if ids & excluded:
            return False
        if included and not ids & included:
            return False
        return True

    return predicate


def title_matches(title: Optional[str], term: Optional[str]) -> bool:
    if not term:
        return True
    return term.lower() in (title or "").lower()


class RecipeSearch:
    """
    Faceted recipe search over a DocumentStore.

    Args:
        store: Per-request store
        rng:   Random source for the final shuffle; tests pass a seeded
               random.Random to get reproducible orderings
    """

    def __init__(self, store: DocumentStore, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng or random.Random()

    async def _ingredient_ids(self, column, names: List[str]) -> Set[str]:
        if not names:
            return set()
        found = await self.store.list(Ingredient, column.in_(names))
        return {str(ingredient.id) for ingredient in found}

    async def search(self, facets: SearchFacets) -> List[RecipeResponse]:
        excluded = await self._ingredient_ids(Ingredient.allergen, facets.allergies)
        included = await self._ingredient_ids(Ingredient.name, facets.ingredients)
        keep = build_ingredient_predicate(excluded, included)

        criteria = []
        if facets.vegan is not None:
            criteria.append(Recipe.vegan == facets.vegan)
        if facets.vegetarian is not None:
            criteria.append(Recipe.vegetarian == facets.vegetarian)

        candidates = await self.store.list(Recipe, *criteria)
        matches = [
            recipe for recipe in candidates
            if keep(recipe.ingredients or []) and title_matches(recipe.title, facets.term)
        ]

        results = await ReferenceResolver(self.store).recipes(matches)
        self.rng.shuffle(results)

        logger.info(
            "Recipe search: %d of %d candidates matched (allergy ids=%d, ingredient ids=%d, term=%r)",
            len(results),
            len(candidates),
            len(excluded),
            len(included),
            facets.term,
        )
        return results
