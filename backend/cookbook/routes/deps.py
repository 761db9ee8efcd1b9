"""
Cookbook Backend: Route Dependencies
=====================================

What:  FastAPI dependencies that build the per-request DocumentStore, the
       services on top of it, and the auth gate.

Dependency graph for a gated write:

    get_db_session ─▶ get_store ─┬─▶ RecipeService(store)
                                 └─▶ require_user(X-User-Id) ─▶ User

Tests swap the database by overriding `get_db_session` and the image
directory by overriding `get_file_service`.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from cookbook.config import settings
from cookbook.database import get_db_session
from cookbook.models import User
from cookbook.services.auth_service import AuthGate
from cookbook.services.catalog_service import IngredientService, UnitService
from cookbook.services.comment_service import CommentService
from cookbook.services.file_service import FileService
from cookbook.services.recipe_service import RecipeService
from cookbook.services.search_service import RecipeSearch
from cookbook.services.seed_service import SeedService
from cookbook.services.store import DocumentStore
from cookbook.services.user_service import UserService


def get_store(session: AsyncSession = Depends(get_db_session)) -> DocumentStore:
    return DocumentStore(session)


async def require_user(
    x_user_id: Optional[str] = Header(default=None, description="Id of the calling user"),
    store: DocumentStore = Depends(get_store),
) -> User:
    """Auth gate: rejects with 403 unless X-User-Id names an existing user."""
    return await AuthGate(store).require_user(x_user_id)


def get_recipe_service(store: DocumentStore = Depends(get_store)) -> RecipeService:
    return RecipeService(store)


def get_recipe_search(store: DocumentStore = Depends(get_store)) -> RecipeSearch:
    return RecipeSearch(store)


def get_ingredient_service(store: DocumentStore = Depends(get_store)) -> IngredientService:
    return IngredientService(store)


def get_unit_service(store: DocumentStore = Depends(get_store)) -> UnitService:
    return UnitService(store)


def get_comment_service(store: DocumentStore = Depends(get_store)) -> CommentService:
    return CommentService(store)


def get_user_service(store: DocumentStore = Depends(get_store)) -> UserService:
    return UserService(store, bcrypt_rounds=settings.bcrypt_rounds)


def get_seed_service(store: DocumentStore = Depends(get_store)) -> SeedService:
    return SeedService(store, settings.seed_file)


@lru_cache
def get_file_service() -> FileService:
    return FileService()
