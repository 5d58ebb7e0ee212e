"""Stats use cases."""

from .get_categories import (
    CategoryCountInfo,
    GetCategoriesResponse,
    GetCategoriesUseCase,
)
from .get_stats import GetStatsResponse, GetStatsUseCase, StatsInfo

__all__ = [
    "CategoryCountInfo",
    "GetCategoriesResponse",
    "GetCategoriesUseCase",
    "GetStatsResponse",
    "GetStatsUseCase",
    "StatsInfo",
]
