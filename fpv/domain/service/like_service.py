"""Like domain service."""

import logfire
from pydantic import BaseModel, Field

from fpv.domain.error import NotFoundError
from fpv.domain.repository import PostRepository, UserRepository
from fpv.domain.value import PostId, UserId

from .base import Service


class LikeResult(BaseModel):
    """Outcome of a like toggle."""

    liked: bool
    like_count: int = Field(ge=0)


class LikeService(Service):
    """Domain service for toggling likes on posts."""

    def __init__(
        self, post_repository: PostRepository, user_repository: UserRepository
    ) -> None:
        """Initialize like service.

        Args:
            post_repository: Post repository
            user_repository: User repository
        """
        self.post_repository = post_repository
        self.user_repository = user_repository

    async def toggle_like(self, post_id: PostId, user_id: UserId) -> LikeResult:
        """Like a post, or unlike it if the user already likes it.

        Two toggles by the same user restore the original like set.

        Args:
            post_id: Post ID
            user_id: Liking user's ID

        Returns:
            Whether the user now likes the post, and the new like count

        Raises:
            NotFoundError: If the post or the user doesn't exist
        """
        with logfire.span(
            "like_service.toggle_like", post_id=str(post_id), user_id=str(user_id)
        ):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("Like by unsynced user", user_id=str(user_id))
                raise NotFoundError(
                    "User",
                    str(user_id),
                    message="User not found. Please sync your account first.",
                )

            # Read-modify-write happens under the post's row lock
            outcome = await self.post_repository.toggle_like(post_id, user_id)
            if outcome is None:
                logfire.warn("Like on non-existent post", post_id=str(post_id))
                raise NotFoundError(
                    "Blog post", str(post_id), message="Blog post not found"
                )

            liked, like_count = outcome
            logfire.info(
                "Post liked" if liked else "Post unliked",
                post_id=str(post_id),
                user_id=str(user_id),
                like_count=like_count,
            )
            return LikeResult(liked=liked, like_count=like_count)
