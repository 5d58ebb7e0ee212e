"""In-memory repository implementations for testing."""

from .post import InMemoryPostRepository
from .storage import InMemoryStorageClient
from .store import InMemoryStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryPostRepository",
    "InMemoryStorageClient",
    "InMemoryStore",
    "InMemoryUserRepository",
]
