"""
Cookbook Backend: Ingredient & Unit Routes
===========================================

CRUD for /ingredients and /units. Reads are open; writes are gated.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from cookbook.models import User
from cookbook.routes.deps import get_ingredient_service, get_unit_service, require_user
from cookbook.schemas.catalog import (
    IngredientCreate,
    IngredientResponse,
    IngredientUpdate,
    UnitCreate,
    UnitResponse,
    UnitUpdate,
)
from cookbook.schemas.common import DeleteResponse
from cookbook.services.catalog_service import IngredientService, UnitService

ingredients_router = APIRouter(prefix="/ingredients", tags=["Ingredients"])
units_router = APIRouter(prefix="/units", tags=["Units"])


# ── Ingredients ───────────────────────────────────────────────────────────

@ingredients_router.get("", response_model=List[IngredientResponse])
async def list_ingredients(
    service: IngredientService = Depends(get_ingredient_service),
) -> List[IngredientResponse]:
    return await service.list()


@ingredients_router.get("/{ingredient_id}", response_model=IngredientResponse)
async def get_ingredient(
    ingredient_id: UUID,
    service: IngredientService = Depends(get_ingredient_service),
) -> IngredientResponse:
    return await service.get(ingredient_id)


@ingredients_router.post("", response_model=IngredientResponse)
async def create_ingredient(
    payload: IngredientCreate,
    _: User = Depends(require_user),
    service: IngredientService = Depends(get_ingredient_service),
) -> IngredientResponse:
    return await service.create(payload)


@ingredients_router.put("/{ingredient_id}", response_model=IngredientResponse)
async def update_ingredient(
    ingredient_id: UUID,
    payload: IngredientUpdate,
    _: User = Depends(require_user),
    service: IngredientService = Depends(get_ingredient_service),
) -> IngredientResponse:
    return await service.update(ingredient_id, payload)


@ingredients_router.delete("/{ingredient_id}", response_model=DeleteResponse)
async def delete_ingredient(
    ingredient_id: str,
    _: User = Depends(require_user),
    service: IngredientService = Depends(get_ingredient_service),
) -> DeleteResponse:
    return DeleteResponse.from_outcome(await service.delete(ingredient_id))


# ── Units ─────────────────────────────────────────────────────────────────

@units_router.get("", response_model=List[UnitResponse])
async def list_units(service: UnitService = Depends(get_unit_service)) -> List[UnitResponse]:
    return await service.list()


@units_router.get("/{unit_id}", response_model=UnitResponse)
async def get_unit(unit_id: UUID, service: UnitService = Depends(get_unit_service)) -> UnitResponse:
    return await service.get(unit_id)


@units_router.post("", response_model=UnitResponse)
async def create_unit(
    payload: UnitCreate,
    _: User = Depends(require_user),
    service: UnitService = Depends(get_unit_service),
) -> UnitResponse:
    return await service.create(payload)


@units_router.put("/{unit_id}", response_model=UnitResponse)
async def update_unit(
    unit_id: UUID,
    payload: UnitUpdate,
    _: User = Depends(require_user),
    service: UnitService = Depends(get_unit_service),
) -> UnitResponse:
    return await service.update(unit_id, payload)


@units_router.delete("/{unit_id}", response_model=DeleteResponse)
async def delete_unit(
    unit_id: str,
    _: User = Depends(require_user),
    service: UnitService = Depends(get_unit_service),
) -> DeleteResponse:
    return DeleteResponse.from_outcome(await service.delete(unit_id))
