"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from typing import Any, List, Optional
from uuid import UUID

import logfire
from sqlalchemy import delete, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fpv.domain.model import Post
from fpv.domain.repository.post import (
    EDITABLE_FIELDS,
    PostFilter,
    PostRepository,
    PostSortOrder,
)
from fpv.domain.value import Category, PostId, PostStatus, UserId
from fpv.persistence.mappers import post_fields_to_row, post_to_dict, row_to_post
from fpv.persistence.tables import post_likes_table, posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_likes_for_posts(
        self, post_ids: list[UUID]
    ) -> dict[UUID, list[UserId]]:
        """Fetch like sets for multiple posts in a single query.

        Args:
            post_ids: List of post IDs

        Returns:
            Dict mapping post_id -> likers in like order
        """
        if not post_ids:
            return {}

        stmt = (
            select(post_likes_table.c.post_id, post_likes_table.c.user_id)
            .where(post_likes_table.c.post_id.in_(post_ids))
            .order_by(post_likes_table.c.created_at, post_likes_table.c.user_id)
        )
        result = await self.session.execute(stmt)
        rows = result.fetchall()

        # Build lookup: post_id -> [user_ids]
        post_like_map: dict[UUID, list[UserId]] = defaultdict(list)
        for row in rows:
            post_like_map[row.post_id].append(UserId(row.user_id))

        return post_like_map

    async def _rows_to_posts(self, rows: list[Any]) -> List[Post]:
        post_like_map = await self._fetch_likes_for_posts([row.id for row in rows])
        return [
            row_to_post(row._asdict(), likes=post_like_map.get(row.id, []))
            for row in rows
        ]

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            posts = await self._rows_to_posts([row])
            return posts[0]

    async def find_all(self, post_filter: PostFilter) -> List[Post]:
        """Find posts matching a filter, sorted as requested."""
        with logfire.span(
            "post_repository.find_all",
            search=post_filter.search,
            category=post_filter.category.value if post_filter.category else None,
            status=post_filter.status.value,
            sort=post_filter.sort.value,
        ):
            stmt = select(posts_table).where(
                posts_table.c.status == post_filter.status.value
            )

            if post_filter.category is not None:
                stmt = stmt.where(posts_table.c.category == post_filter.category.value)

            if post_filter.search:
                # Literal substring match: % and _ in the search text are escaped
                stmt = stmt.where(
                    or_(
                        posts_table.c.title.icontains(
                            post_filter.search, autoescape=True
                        ),
                        posts_table.c.excerpt.icontains(
                            post_filter.search, autoescape=True
                        ),
                        posts_table.c.content.icontains(
                            post_filter.search, autoescape=True
                        ),
                    )
                )

            # Sort order (ties fall back to newest first)
            if post_filter.sort == PostSortOrder.MOST_LIKED:
                like_counts = (
                    select(
                        post_likes_table.c.post_id,
                        func.count().label("like_count"),
                    )
                    .group_by(post_likes_table.c.post_id)
                    .subquery()
                )
                stmt = stmt.outerjoin(
                    like_counts, like_counts.c.post_id == posts_table.c.id
                ).order_by(
                    desc(func.coalesce(like_counts.c.like_count, 0)),
                    desc(posts_table.c.created_at),
                )
            elif post_filter.sort == PostSortOrder.MOST_VIEWED:
                stmt = stmt.order_by(
                    desc(posts_table.c.view_count), desc(posts_table.c.created_at)
                )
            else:
                stmt = stmt.order_by(desc(posts_table.c.created_at))

            result = await self.session.execute(stmt)
            post_rows = result.fetchall()

            if not post_rows:
                logfire.info("No posts found")
                return []

            posts = await self._rows_to_posts(post_rows)
            logfire.info("Found posts", count=len(posts))
            return posts

    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find all posts by a specific author, newest first."""
        with logfire.span("post_repository.find_by_author", author_id=str(author_id)):
            stmt = (
                select(posts_table)
                .where(posts_table.c.author_id == author_id)
                .order_by(desc(posts_table.c.created_at))
            )
            result = await self.session.execute(stmt)
            post_rows = result.fetchall()

            if not post_rows:
                return []

            return await self._rows_to_posts(post_rows)

    async def save(self, post: Post) -> Post:
        """Insert a new post with its like set, or rewrite an existing
        post's editable columns."""
        with logfire.span(
            "post_repository.save", post_id=str(post.id), title=post.title
        ):
            exists_stmt = select(posts_table.c.id).where(posts_table.c.id == post.id)
            exists = (await self.session.execute(exists_stmt)).fetchone() is not None

            if exists:
                logfire.info("Updating existing post", post_id=str(post.id))
                editable = post.model_dump(include=set(EDITABLE_FIELDS))
                saved = await self.update_fields(post.id, editable)
                return saved if saved is not None else post

            logfire.info(
                "Inserting new post",
                post_id=str(post.id),
                title=post.title,
                category=post.category.value,
            )
            await self.session.execute(
                posts_table.insert().values(**post_to_dict(post))
            )
            for user_id in post.likes:
                await self.session.execute(
                    insert(post_likes_table).values(post_id=post.id, user_id=user_id)
                )

            await self.session.flush()
            logfire.info("Post saved successfully", post_id=str(post.id))
            return post

    async def update_fields(
        self, post_id: PostId, fields: dict[str, Any]
    ) -> Optional[Post]:
        """UPDATE only the given columns and return the stored post."""
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Not editable: {sorted(unknown)}")

        with logfire.span(
            "post_repository.update_fields",
            post_id=str(post_id),
            fields=sorted(fields),
        ):
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(**post_fields_to_row(fields))
                .returning(posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if row is None:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            await self.session.flush()
            posts = await self._rows_to_posts([row])
            return posts[0]

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete). Likes go with it via ON DELETE CASCADE."""
        with logfire.span("post_repository.delete", post_id=str(post_id)):
            stmt = posts_table.delete().where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            await self.session.flush()
            return result.rowcount > 0

    async def increment_view_count(self, post_id: PostId) -> Optional[Post]:
        """Atomically increment view_count by 1."""
        with logfire.span("post_repository.increment_view_count", post_id=str(post_id)):
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(view_count=posts_table.c.view_count + 1)
                .returning(posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if row is None:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            await self.session.flush()
            posts = await self._rows_to_posts([row])
            return posts[0]

    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[tuple[bool, int]]:
        """Toggle a like while holding the post's row lock."""
        with logfire.span(
            "post_repository.toggle_like", post_id=str(post_id), user_id=str(user_id)
        ):
            # SELECT ... FOR UPDATE serializes toggles on the same post
            lock_stmt = (
                select(posts_table.c.id)
                .where(posts_table.c.id == post_id)
                .with_for_update()
            )
            result = await self.session.execute(lock_stmt)
            if result.fetchone() is None:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            removed = await self.session.execute(
                delete(post_likes_table).where(
                    post_likes_table.c.post_id == post_id,
                    post_likes_table.c.user_id == user_id,
                )
            )
            liked = removed.rowcount == 0
            if liked:
                await self.session.execute(
                    insert(post_likes_table).values(post_id=post_id, user_id=user_id)
                )

            count_stmt = (
                select(func.count())
                .select_from(post_likes_table)
                .where(post_likes_table.c.post_id == post_id)
            )
            like_count = (await self.session.execute(count_stmt)).scalar() or 0

            await self.session.flush()
            return liked, like_count

    async def count(self, status: Optional[PostStatus] = None) -> int:
        """Count posts, optionally restricted to one status."""
        with logfire.span(
            "post_repository.count", status=status.value if status else None
        ):
            stmt = select(func.count()).select_from(posts_table)
            if status is not None:
                stmt = stmt.where(posts_table.c.status == status.value)

            result = await self.session.execute(stmt)
            count = result.scalar() or 0
            logfire.info("Post count", count=count)
            return count

    async def sum_likes(self, status: Optional[PostStatus] = None) -> int:
        """Sum like-set sizes across posts."""
        with logfire.span(
            "post_repository.sum_likes", status=status.value if status else None
        ):
            stmt = select(func.count()).select_from(
                post_likes_table.join(
                    posts_table, posts_table.c.id == post_likes_table.c.post_id
                )
            )
            if status is not None:
                stmt = stmt.where(posts_table.c.status == status.value)

            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def count_by_category(
        self, status: Optional[PostStatus] = None
    ) -> List[tuple[Category, int]]:
        """Count posts per category, highest count first."""
        with logfire.span(
            "post_repository.count_by_category",
            status=status.value if status else None,
        ):
            post_count = func.count().label("post_count")
            stmt = select(posts_table.c.category, post_count).group_by(
                posts_table.c.category
            )
            if status is not None:
                stmt = stmt.where(posts_table.c.status == status.value)
            stmt = stmt.order_by(desc(post_count), posts_table.c.category)

            result = await self.session.execute(stmt)
            return [(Category(row.category), row.post_count) for row in result]
