"""Community statistics routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from fpv.application.usecase.stats import (
    GetCategoriesResponse,
    GetCategoriesUseCase,
    GetStatsResponse,
    GetStatsUseCase,
)

router = APIRouter(tags=["stats"], route_class=DishkaRoute)


@router.get("/stats", response_model=GetStatsResponse)
async def get_stats(
    get_stats_use_case: FromDishka[GetStatsUseCase],
) -> GetStatsResponse:
    """Totals over published posts and all users."""
    return await get_stats_use_case.execute()


@router.get("/categories", response_model=GetCategoriesResponse)
async def get_categories(
    get_categories_use_case: FromDishka[GetCategoriesUseCase],
) -> GetCategoriesResponse:
    """Published post counts per category, most popular first."""
    return await get_categories_use_case.execute()
