"""Post domain service."""

from typing import Any, Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel, Field

from fpv.domain.error import AuthorizationError, NotFoundError, ValidationError
from fpv.domain.model.common import utcnow
from fpv.domain.model.post import Post
from fpv.domain.repository import PostFilter, PostRepository, UserRepository
from fpv.domain.value import (
    EXCERPT_MAX_LENGTH,
    Category,
    FieldError,
    PostId,
    PostStatus,
    UserId,
    estimate_read_time,
)

from .base import Service


class PostDraft(BaseModel):
    """Fields submitted for a new post.

    Kept loose on purpose: rule checks happen in PostService so every
    violation can be reported together.
    """

    title: str = ""
    excerpt: str = ""
    content: str = ""
    category: str = ""
    tags: Optional[list[str]] = None
    featured_image: Optional[str] = None
    read_time: Optional[int] = None
    status: Optional[str] = None


class PostChanges(BaseModel):
    """Partial update of a post.

    Only explicitly set fields are applied. An empty featured_image clears
    the image.
    """

    title: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None
    featured_image: Optional[str] = None
    read_time: Optional[int] = None
    status: Optional[str] = None

    def provided(self) -> dict[str, Any]:
        """Fields the caller actually provided.

        None counts as "not provided" except for featured_image, where it
        clears the image like an empty string does.
        """
        fields = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in fields.items()
            if value is not None or name == "featured_image"
        }


class AuthorPostStats(BaseModel):
    """Totals over one author's posts."""

    total_posts: int = Field(ge=0)
    total_likes: int = Field(ge=0)
    total_views: int = Field(ge=0)


def _check_required_text(
    fields: dict[str, Any], name: str, label: str, errors: list[FieldError]
) -> None:
    if name in fields and not (fields[name] or "").strip():
        errors.append(FieldError(field=name, message=f"{label} required"))


def validate_post_fields(fields: dict[str, Any]) -> list[FieldError]:
    """Check post fields against the post rules.

    Only keys present in `fields` are checked, so the same rules serve both
    creation (all keys) and partial updates.

    Args:
        fields: Field name to submitted value

    Returns:
        Every violation found (empty when valid)
    """
    errors: list[FieldError] = []

    _check_required_text(fields, "title", "Title", errors)

    if "excerpt" in fields:
        excerpt = (fields["excerpt"] or "").strip()
        if not excerpt:
            errors.append(FieldError(field="excerpt", message="Excerpt required"))
        elif len(excerpt) > EXCERPT_MAX_LENGTH:
            errors.append(
                FieldError(
                    field="excerpt",
                    message=f"Excerpt must be at most {EXCERPT_MAX_LENGTH} characters",
                )
            )

    _check_required_text(fields, "content", "Content", errors)

    if "category" in fields:
        try:
            Category(fields["category"])
        except ValueError:
            allowed = ", ".join(c.value for c in Category)
            errors.append(
                FieldError(
                    field="category",
                    message=f"Valid category required ({allowed})",
                )
            )

    if fields.get("status") is not None:
        try:
            PostStatus(fields["status"])
        except ValueError:
            errors.append(
                FieldError(field="status", message="Status must be published or draft")
            )

    if "read_time" in fields and fields["read_time"] is not None:
        if fields["read_time"] < 1:
            errors.append(
                FieldError(
                    field="read_time", message="Read time must be a positive integer"
                )
            )

    if fields.get("tags") is not None:
        if any(not tag.strip() for tag in fields["tags"]):
            errors.append(FieldError(field="tags", message="Tags cannot be empty"))

    return errors


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self, post_repository: PostRepository, user_repository: UserRepository
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            user_repository: User repository (author checks)
        """
        self.post_repository = post_repository
        self.user_repository = user_repository

    async def list_posts(self, post_filter: PostFilter) -> list[Post]:
        """List posts matching a filter.

        Args:
            post_filter: Search, category, status and sort options

        Returns:
            All matching posts (no pagination)
        """
        with logfire.span(
            "post_service.list_posts",
            search=post_filter.search,
            category=post_filter.category.value if post_filter.category else None,
            status=post_filter.status.value,
            sort=post_filter.sort.value,
        ):
            posts = await self.post_repository.find_all(post_filter)
            logfire.info("Posts listed", count=len(posts))
            return posts

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID without counting a view.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def view_post(self, post_id: PostId) -> Post:
        """Fetch a post for reading and count the view.

        Every successful fetch adds exactly one view, including repeat
        visits and the author's own.

        Args:
            post_id: Post ID

        Returns:
            Post with the incremented view count

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.view_post", post_id=str(post_id)):
            post = await self.post_repository.increment_view_count(post_id)
            if post is None:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError(
                    "Blog post", str(post_id), message="Blog post not found"
                )

            logfire.info(
                "Post viewed", post_id=str(post_id), view_count=post.view_count
            )
            return post

    async def create_post(self, author_id: UserId, draft: PostDraft) -> Post:
        """Create a post owned by `author_id`.

        Args:
            author_id: Author's user ID (must be synced)
            draft: Submitted fields

        Returns:
            Created post

        Raises:
            ValidationError: If any field violates the post rules
            NotFoundError: If the author has not been synced
        """
        with logfire.span(
            "post_service.create_post", author_id=str(author_id), title=draft.title
        ):
            # A missing or non-positive read time falls back to the estimate
            errors = validate_post_fields(draft.model_dump(exclude={"read_time"}))
            if errors:
                logfire.warn(
                    "Post validation failed",
                    fields=[error.field for error in errors],
                )
                raise ValidationError(errors)

            author = await self.user_repository.find_by_id(author_id)
            if author is None:
                logfire.warn("Author not synced", author_id=str(author_id))
                raise NotFoundError(
                    "User",
                    str(author_id),
                    message="User not found. Please sync your account first.",
                )

            content = draft.content.strip()
            if draft.read_time is not None and draft.read_time > 0:
                read_time = draft.read_time
            else:
                read_time = estimate_read_time(content)

            now = utcnow()
            post = Post(
                id=PostId(uuid4()),
                author_id=author_id,
                title=draft.title.strip(),
                excerpt=draft.excerpt.strip(),
                content=content,
                category=Category(draft.category),
                tags=list(draft.tags or []),
                featured_image=draft.featured_image or None,
                read_time=read_time,
                view_count=0,
                likes=[],
                status=PostStatus(draft.status or PostStatus.PUBLISHED),
                created_at=now,
                updated_at=now,
            )

            saved = await self.post_repository.save(post)
            logfire.info(
                "Post created",
                post_id=str(saved.id),
                category=saved.category.value,
                read_time=saved.read_time,
            )
            return saved

    async def update_post(
        self, post_id: PostId, requester_id: UserId, changes: PostChanges
    ) -> Post:
        """Apply a partial update on behalf of the post's author.

        Args:
            post_id: Post ID
            requester_id: User asking for the change
            changes: Fields to overwrite

        Returns:
            Updated post

        Raises:
            NotFoundError: If the post doesn't exist
            AuthorizationError: If the requester isn't the author
            ValidationError: If a provided value violates the post rules
        """
        with logfire.span(
            "post_service.update_post",
            post_id=str(post_id),
            requester_id=str(requester_id),
        ):
            post = await self._get_owned_post(post_id, requester_id)

            fields = changes.provided()
            errors = validate_post_fields(fields)
            if errors:
                logfire.warn(
                    "Post update validation failed",
                    post_id=str(post_id),
                    fields=[error.field for error in errors],
                )
                raise ValidationError(errors)

            updates: dict[str, Any] = {}
            for name in ("title", "excerpt", "content"):
                if name in fields:
                    updates[name] = fields[name].strip()
            if "category" in fields:
                updates["category"] = Category(fields["category"])
            if "tags" in fields:
                updates["tags"] = list(fields["tags"])
            if "featured_image" in fields:
                updates["featured_image"] = fields["featured_image"] or None
            if "read_time" in fields:
                updates["read_time"] = fields["read_time"]
            if "status" in fields:
                updates["status"] = PostStatus(fields["status"])
            updates["updated_at"] = utcnow()

            # Field rules are checked against the merged post; only the
            # changed columns are written, so views and likes recorded
            # since the read are kept
            Post.model_validate({**post.model_dump(), **updates})
            saved = await self.post_repository.update_fields(post_id, updates)
            if saved is None:
                logfire.warn("Post deleted during update", post_id=str(post_id))
                raise NotFoundError(
                    "Blog post", str(post_id), message="Blog post not found"
                )
            logfire.info(
                "Post updated",
                post_id=str(post_id),
                fields=sorted(updates.keys()),
            )
            return saved

    async def delete_post(self, post_id: PostId, requester_id: UserId) -> None:
        """Delete a post on behalf of its author. Irreversible.

        Raises:
            NotFoundError: If the post doesn't exist
            AuthorizationError: If the requester isn't the author
        """
        with logfire.span(
            "post_service.delete_post",
            post_id=str(post_id),
            requester_id=str(requester_id),
        ):
            await self._get_owned_post(post_id, requester_id)
            await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=str(post_id))

    async def list_author_posts(
        self, author_id: UserId
    ) -> tuple[list[Post], AuthorPostStats]:
        """All of an author's posts (any status) with totals.

        Args:
            author_id: Author's user ID

        Returns:
            Posts newest first, and their like/view totals
        """
        with logfire.span("post_service.list_author_posts", author_id=str(author_id)):
            posts = await self.post_repository.find_by_author(author_id)
            stats = AuthorPostStats(
                total_posts=len(posts),
                total_likes=sum(post.like_count for post in posts),
                total_views=sum(post.view_count for post in posts),
            )
            logfire.info(
                "Author posts listed",
                author_id=str(author_id),
                count=stats.total_posts,
            )
            return posts, stats

    async def _get_owned_post(self, post_id: PostId, requester_id: UserId) -> Post:
        post = await self.post_repository.find_by_id(post_id)
        if post is None:
            logfire.warn("Post not found", post_id=str(post_id))
            raise NotFoundError(
                "Blog post", str(post_id), message="Blog post not found"
            )

        if post.author_id != requester_id:
            logfire.warn(
                "Requester is not the post author",
                post_id=str(post_id),
                requester_id=str(requester_id),
            )
            raise AuthorizationError("post", str(post_id), str(requester_id))

        return post
