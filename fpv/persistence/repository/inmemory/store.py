"""Shared backing store for the in-memory repositories."""

from dataclasses import dataclass, field

from fpv.domain.model import Post, User
from fpv.domain.value import PostId, UserId


@dataclass
class InMemoryStore:
    """Rows shared by every in-memory repository built on the same store.

    One store lives as long as the test container, so data written in one
    request is visible to the next.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    posts: dict[PostId, Post] = field(default_factory=dict)

    def clear(self) -> None:
        self.users.clear()
        self.posts.clear()
