"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Sequence
from uuid import UUID

from fpv.domain.model import Post, User
from fpv.domain.value import Category, PostId, PostStatus, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        external_id=row["external_id"],
        email=row["email"],
        name=row["name"],
        image=row.get("image"),
        provider=row["provider"],
        created_at=row["created_at"],
        last_login_at=row["last_login_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_post(row: Dict[str, Any], likes: Sequence[UserId] = ()) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict
        likes: Users in the post's like set, in like order

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        excerpt=row["excerpt"],
        content=row["content"],
        category=Category(row["category"]),
        tags=list(row.get("tags") or []),
        featured_image=row.get("featured_image"),
        read_time=row["read_time"],
        view_count=row["view_count"],
        likes=list(likes),
        status=PostStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to a posts row.

    The like set lives in its own table and is left out.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = post.model_dump(exclude={"likes"})
    data["category"] = post.category.value
    data["status"] = post.status.value
    return data


def post_fields_to_row(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a partial set of Post fields to posts column values.

    Args:
        fields: Post field name to domain value

    Returns:
        Dict suitable for an UPDATE of those columns
    """
    row = dict(fields)
    for name in ("category", "status"):
        if name in row:
            row[name] = row[name].value
    return row
