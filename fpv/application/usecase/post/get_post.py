"""Get post use case."""

from pydantic import BaseModel

from fpv.application.usecase.dto import BlogInfo, CamelModel
from fpv.domain.service import PostService, UserService

from .common import blog_with_author, parse_post_id


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string from the path


class GetPostResponse(CamelModel):
    """Get post response."""

    blog: BlogInfo


class GetPostUseCase:
    """Use case for reading a single post.

    Every successful read counts as one view.
    """

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Returns:
            The post with its view count already incremented

        Raises:
            NotFoundError: If the ID is malformed or names no post
        """
        post_id = parse_post_id(request.post_id)
        post = await self.post_service.view_post(post_id)
        return GetPostResponse(blog=await blog_with_author(post, self.user_service))
