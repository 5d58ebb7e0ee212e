"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from fpv.application.usecase.base import BaseUseCase
from fpv.application.usecase.dto import CamelModel
from fpv.domain.service import PostService
from fpv.domain.value import UserId

from .common import parse_post_id


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str
    user_id: str  # Current user ID (must be author)


class DeletePostResponse(CamelModel):
    """Delete post response."""

    message: str = "Blog post deleted successfully"


class DeletePostUseCase(BaseUseCase):
    """Use case for deleting a post. There is no undo."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        post_id = parse_post_id(request.post_id)
        await self.post_service.delete_post(post_id, UserId(UUID(request.user_id)))
        return DeletePostResponse()
