"""Get categories use case."""

from fpv.application.usecase.dto import CamelModel
from fpv.domain.service import StatsService


class CategoryCountInfo(CamelModel):
    """Published post count for one category."""

    category: str
    count: int


class GetCategoriesResponse(CamelModel):
    """Get categories response."""

    categories: list[CategoryCountInfo]


class GetCategoriesUseCase:
    """Use case for popular categories."""

    def __init__(self, stats_service: StatsService) -> None:
        self.stats_service = stats_service

    async def execute(self, request: None = None) -> GetCategoriesResponse:
        """List categories that have published posts, most posts first."""
        counts = await self.stats_service.get_category_counts()
        return GetCategoriesResponse(
            categories=[
                CategoryCountInfo(category=item.category.value, count=item.count)
                for item in counts
            ]
        )
