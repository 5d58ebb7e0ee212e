"""List posts use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from fpv.application.usecase.dto import BlogInfo, CamelModel
from fpv.domain.repository import PostFilter, PostSortOrder
from fpv.domain.service import PostService, UserService
from fpv.domain.value import Category, PostStatus

from .common import blogs_with_authors

# Category value meaning "no category filter"
ALL_CATEGORIES = "All"


class ListPostsRequest(BaseModel):
    """List posts request.

    Values come straight from the query string.
    """

    search: Optional[str] = None
    category: Optional[str] = None
    sort_by: Optional[str] = None
    status: Optional[str] = None


class ListPostsResponse(CamelModel):
    """List posts response."""

    blogs: list[BlogInfo]
    total: int


class ListPostsUseCase:
    """Use case for listing posts (public)."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            user_service: User domain service (author summaries)
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Unknown sort keys fall back to newest first. An unknown category or
        status can't match any post, so the result is empty.

        Args:
            request: Filter values from the query string

        Returns:
            Every matching post with author and like count
        """
        try:
            sort = PostSortOrder(request.sort_by or PostSortOrder.LATEST.value)
        except ValueError:
            logfire.warn("Unknown sort key, using latest", sort_by=request.sort_by)
            sort = PostSortOrder.LATEST

        category: Optional[Category] = None
        if request.category and request.category != ALL_CATEGORIES:
            try:
                category = Category(request.category)
            except ValueError:
                logfire.info("Unknown category filter", category=request.category)
                return ListPostsResponse(blogs=[], total=0)

        try:
            status = PostStatus(request.status or PostStatus.PUBLISHED.value)
        except ValueError:
            logfire.info("Unknown status filter", status=request.status)
            return ListPostsResponse(blogs=[], total=0)

        post_filter = PostFilter(
            search=request.search or None,
            category=category,
            status=status,
            sort=sort,
        )
        posts = await self.post_service.list_posts(post_filter)
        blogs = await blogs_with_authors(posts, self.user_service)
        return ListPostsResponse(blogs=blogs, total=len(blogs))
