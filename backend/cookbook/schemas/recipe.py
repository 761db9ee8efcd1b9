"""
Cookbook Backend: Recipe Schemas
=================================

What:  Input models for recipe writes, the fully resolved recipe response,
       and the parsed search facets.

Resolved response:
    A stored recipe keeps only ids. `RecipeResponse` replaces them with the
    referenced records: ingredients, quantity entries (unit + ingredient),
    creator and comments (with their authors).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cookbook.schemas.catalog import IngredientResponse, UnitResponse
from cookbook.schemas.user import CommentResponse, UserPublic


class QuantityEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quantity: Optional[float] = Field(default=None, ge=0)
    unit: Optional[uuid.UUID] = None
    ingredient: Optional[uuid.UUID] = None


class RecipeWrite(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, max_length=200, json_schema_extra={"example": "Pancakes"})
    prep_time: Optional[int] = Field(default=None, ge=0, description="Minutes")
    difficulty: Optional[str] = Field(default=None, max_length=50, json_schema_extra={"example": "easy"})
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=255, description="Filename from POST /uploadImage")
    instructions: Optional[List[str]] = None
    ingredients: Optional[List[uuid.UUID]] = None
    vegan: Optional[bool] = None
    vegetarian: Optional[bool] = None
    quantities: Optional[List[QuantityEntry]] = None
    creator: Optional[uuid.UUID] = None
    comments: Optional[List[uuid.UUID]] = None


class RecipeCreate(RecipeWrite):
    pass


class RecipeUpdate(RecipeWrite):
    pass


class QuantityResponse(BaseModel):
    quantity: Optional[float] = None
    unit: Optional[UnitResponse] = None
    ingredient: Optional[IngredientResponse] = None


class RecipeResponse(BaseModel):
    id: uuid.UUID
    title: Optional[str] = None
    prep_time: Optional[int] = None
    difficulty: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    instructions: List[str] = Field(default_factory=list)
    ingredients: List[IngredientResponse] = Field(default_factory=list)
    vegan: Optional[bool] = None
    vegetarian: Optional[bool] = None
    quantities: List[QuantityResponse] = Field(default_factory=list)
    creator: Optional[UserPublic] = None
    comments: List[CommentResponse] = Field(default_factory=list)
    created_at: datetime


def split_names(raw: Optional[str]) -> List[str]:
    """'gluten, nuts,,' -> ['gluten', 'nuts']"""
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


class SearchFacets(BaseModel):
    """
    Parsed search constraints for GET /recipes.

    Every facet is optional; an empty SearchFacets matches every recipe.
    """
    term: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)
    vegan: Optional[bool] = None
    vegetarian: Optional[bool] = None

    @classmethod
    def from_query(
        cls,
        term: Optional[str] = None,
        allergies: Optional[str] = None,
        ingredients: Optional[str] = None,
        vegan: Optional[bool] = None,
        vegetarian: Optional[bool] = None,
    ) -> "SearchFacets":
        return cls(
            term=term or None,
            allergies=split_names(allergies),
            ingredients=split_names(ingredients),
            vegan=vegan,
            vegetarian=vegetarian,
        )
