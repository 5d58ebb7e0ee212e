"""Update post use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from fpv.application.usecase.base import BaseUseCase
from fpv.application.usecase.dto import BlogInfo, CamelModel
from fpv.domain.service import PostChanges, PostService, UserService
from fpv.domain.value import UserId

from .common import blog_with_author, parse_post_id


class UpdatePostRequest(BaseModel):
    """Update post request."""

    post_id: str  # UUID string from the path
    user_id: str  # Current user ID (must be author)
    changes: dict[str, Any] = Field(default_factory=dict)  # Only provided fields


class UpdatePostResponse(CamelModel):
    """Update post response."""

    message: str = "Blog post updated successfully"
    blog: BlogInfo


class UpdatePostUseCase(BaseUseCase):
    """Use case for a partial update by the post's author."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Raises:
            NotFoundError: If the post doesn't exist
            AuthorizationError: If user doesn't own the post
            ValidationError: If a provided value is invalid
        """
        post_id = parse_post_id(request.post_id)
        changes = PostChanges(**request.changes)
        post = await self.post_service.update_post(
            post_id, UserId(UUID(request.user_id)), changes
        )
        return UpdatePostResponse(blog=await blog_with_author(post, self.user_service))
