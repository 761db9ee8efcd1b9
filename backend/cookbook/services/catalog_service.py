"""
Cookbook Backend: Ingredient & Unit Services
=============================================

Plain CRUD over the two lookup collections. Neither holds references, so
the generic behavior is used unchanged.
"""

from cookbook.models import Ingredient, Unit
from cookbook.schemas.catalog import IngredientResponse, UnitResponse
from cookbook.services.crud import CrudService


class IngredientService(CrudService[Ingredient, IngredientResponse]):
    model = Ingredient
    response_model = IngredientResponse
    resource = "ingredient"


class UnitService(CrudService[Unit, UnitResponse]):
    model = Unit
    response_model = UnitResponse
    resource = "unit"
