"""Get my posts use case."""

from uuid import UUID

from pydantic import BaseModel

from fpv.application.usecase.dto import BlogInfo, CamelModel
from fpv.domain.service import PostService, UserService
from fpv.domain.value import UserId

from .common import blogs_with_authors


class GetMyPostsRequest(BaseModel):
    """Get my posts request."""

    user_id: str


class MyPostsStats(CamelModel):
    """Totals over the caller's posts."""

    total_posts: int
    total_likes: int
    total_views: int


class GetMyPostsResponse(CamelModel):
    """Get my posts response."""

    blogs: list[BlogInfo]
    stats: MyPostsStats


class GetMyPostsUseCase:
    """Use case for the author dashboard: own posts of any status."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize get my posts use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: GetMyPostsRequest) -> GetMyPostsResponse:
        posts, stats = await self.post_service.list_author_posts(
            UserId(UUID(request.user_id))
        )
        blogs = await blogs_with_authors(posts, self.user_service)
        return GetMyPostsResponse(
            blogs=blogs,
            stats=MyPostsStats(
                total_posts=stats.total_posts,
                total_likes=stats.total_likes,
                total_views=stats.total_views,
            ),
        )
