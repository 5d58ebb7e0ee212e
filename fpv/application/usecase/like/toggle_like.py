"""Toggle like use case."""

from uuid import UUID

from pydantic import BaseModel

from fpv.application.usecase.dto import CamelModel
from fpv.application.usecase.post.common import parse_post_id
from fpv.domain.service import LikeService
from fpv.domain.value import UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    post_id: str
    user_id: str  # Current user ID


class ToggleLikeResponse(CamelModel):
    """Toggle like response."""

    message: str
    liked: bool
    like_count: int


class ToggleLikeUseCase:
    """Use case for liking or unliking a post.

    The caller can't choose a direction; each call flips the current state.
    """

    def __init__(self, like_service: LikeService) -> None:
        """Initialize toggle like use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle flow.

        Raises:
            NotFoundError: If the post or user doesn't exist
        """
        post_id = parse_post_id(request.post_id)
        result = await self.like_service.toggle_like(
            post_id, UserId(UUID(request.user_id))
        )
        return ToggleLikeResponse(
            message="Blog post liked" if result.liked else "Blog post unliked",
            liked=result.liked,
            like_count=result.like_count,
        )
