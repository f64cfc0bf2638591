from abc import ABC, abstractmethod

from src.errors import RemoteFailure


class AssetStorageError(RemoteFailure):
    """Raised when the object storage rejects or fails a request."""


class AssetStorage(ABC):
    @abstractmethod
    async def upload(self, path: str, content: bytes, content_type: str | None = None) -> None:
        """Store content under path. Raises AssetStorageError on failure."""
        pass

    @abstractmethod
    async def remove(self, paths: list[str]) -> None:
        """Remove the objects stored under paths. Raises AssetStorageError on failure."""
        pass

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        """Derive the public URL of path. No network round trip."""
        pass

    @abstractmethod
    def path_from_public_url(self, url: str) -> str | None:
        """Inverse of get_public_url. Returns None when url has no object path."""
        pass
