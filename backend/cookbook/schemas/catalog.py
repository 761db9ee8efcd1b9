"""
Cookbook Backend: Ingredient & Unit Schemas
============================================

Input models forbid unknown fields and make every field optional: a create
may omit anything, and an update overwrites every field with what was sent.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IngredientWrite(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, max_length=200, json_schema_extra={"example": "Peanut butter"})
    allergen: Optional[str] = Field(default=None, max_length=100, json_schema_extra={"example": "nuts"})


class IngredientCreate(IngredientWrite):
    pass


class IngredientUpdate(IngredientWrite):
    pass


class IngredientResponse(BaseModel):
    id: uuid.UUID
    name: Optional[str] = None
    allergen: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UnitWrite(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, max_length=100, json_schema_extra={"example": "tbsp"})


class UnitCreate(UnitWrite):
    pass


class UnitUpdate(UnitWrite):
    pass


class UnitResponse(BaseModel):
    id: uuid.UUID
    name: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
