"""ORM models. Importing this package registers every table on Base.metadata."""

from cookbook.models.ingredient import Ingredient, Unit
from cookbook.models.recipe import Recipe
from cookbook.models.user import Comment, User

__all__ = ["Comment", "Ingredient", "Recipe", "Unit", "User"]
