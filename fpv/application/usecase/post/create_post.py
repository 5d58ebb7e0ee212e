"""Create post use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from fpv.application.usecase.base import BaseUseCase
from fpv.application.usecase.dto import BlogInfo, CamelModel
from fpv.domain.service import PostDraft, PostService, UserService
from fpv.domain.value import UserId

from .common import blog_with_author


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # Caller's user ID
    title: str = ""
    excerpt: str = ""
    content: str = ""
    category: str = ""
    tags: Optional[list[str]] = None
    featured_image: Optional[str] = None
    read_time: Optional[int] = None
    status: Optional[str] = None


class CreatePostResponse(CamelModel):
    """Create post response."""

    message: str = "Blog post created successfully"
    blog: BlogInfo


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Raises:
            ValidationError: If any field is invalid (all violations reported)
            NotFoundError: If the author has not synced
        """
        draft = PostDraft.model_validate(
            request.model_dump(exclude={"author_id"})
        )
        post = await self.post_service.create_post(
            UserId(UUID(request.author_id)), draft
        )
        return CreatePostResponse(blog=await blog_with_author(post, self.user_service))
