"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from fpv.domain.model import Post, User
from fpv.domain.value import Category, PostId, PostStatus, UserId

# Fixed reference time so ordering by created_at is deterministic
BASE_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_user(
    name: str = "Ava Flyer",
    email: str | None = None,
    external_id: str | None = None,
) -> User:
    """Build a user with unique email and Firebase UID unless given."""
    suffix = uuid4().hex[:8]
    return User(
        id=UserId(uuid4()),
        external_id=external_id or f"uid-{suffix}",
        email=email or f"pilot-{suffix}@example.com",
        name=name,
        image=None,
        provider="password",
        created_at=BASE_TIME,
        last_login_at=BASE_TIME,
    )


def make_post(
    author_id: UserId,
    title: str = "First freestyle session",
    excerpt: str = "Dialing in a new quad",
    content: str = "Flew three packs at the park today.",
    category: Category = Category.FREESTYLE,
    status: PostStatus = PostStatus.PUBLISHED,
    minutes_ago: int = 0,
    **overrides,
) -> Post:
    """Build a post created `minutes_ago` before BASE_TIME."""
    created_at = BASE_TIME - timedelta(minutes=minutes_ago)
    fields = {
        "id": PostId(uuid4()),
        "author_id": author_id,
        "title": title,
        "excerpt": excerpt,
        "content": content,
        "category": category,
        "status": status,
        "created_at": created_at,
        "updated_at": created_at,
    }
    fields.update(overrides)
    return Post(**fields)
