"""In-memory storage client for testing."""

from fpv.domain.error import StorageError
from fpv.persistence.database import StorageClient


class InMemoryStorageClient(StorageClient):
    """Storage client whose availability can be switched off in tests."""

    def __init__(self) -> None:
        self.available = True
        self.disposed = False

    async def ping(self) -> None:
        if not self.available:
            raise StorageError("Database unreachable")

    async def dispose(self) -> None:
        self.disposed = True
