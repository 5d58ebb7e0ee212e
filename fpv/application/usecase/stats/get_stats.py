"""Get stats use case."""

from fpv.application.usecase.dto import CamelModel
from fpv.domain.service import StatsService


class StatsInfo(CamelModel):
    """Community totals."""

    total_posts: int
    total_users: int
    total_likes: int
    categories: int


class GetStatsResponse(CamelModel):
    """Get stats response."""

    stats: StatsInfo


class GetStatsUseCase:
    """Use case for the community totals shown on the landing page."""

    def __init__(self, stats_service: StatsService) -> None:
        self.stats_service = stats_service

    async def execute(self, request: None = None) -> GetStatsResponse:
        """Compute totals. Takes no input."""
        stats = await self.stats_service.get_stats()
        return GetStatsResponse(
            stats=StatsInfo(
                total_posts=stats.total_posts,
                total_users=stats.total_users,
                total_likes=stats.total_likes,
                categories=stats.categories,
            )
        )
