"""
Cookbook Backend: Seed Route
=============================

GET /initRecipes deletes every recipe and reloads the bundled dataset.
It is destructive on every call and is not behind the auth gate.
"""

from fastapi import APIRouter, Depends

from cookbook.routes.deps import get_seed_service
from cookbook.schemas.common import SeedResponse
from cookbook.services.seed_service import SeedService

router = APIRouter(tags=["Seed"])


@router.get(
    "/initRecipes",
    response_model=SeedResponse,
    summary="Reload recipes from the bundled dataset",
    description="DESTRUCTIVE: removes all recipes (including user-created ones) before inserting.",
)
async def init_recipes(seed: SeedService = Depends(get_seed_service)) -> SeedResponse:
    count = await seed.reload_recipes()
    return SeedResponse(count=count)
