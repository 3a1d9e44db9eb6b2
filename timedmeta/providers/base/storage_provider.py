from abc import ABC, abstractmethod
from typing import List


class StorageProvider(ABC):
    """Abstract base class for blob storage providers."""

    @abstractmethod
    async def get_object(self, bucket: str, key: str) -> bytes:
        """Read an object; raises ResourceNotFoundException when it does not exist."""
        pass

    @abstractmethod
    async def put_object(self, bucket: str, key: str, body: bytes, content_type: str = "application/octet-stream") -> str:
        """Write an object and return its URI."""
        pass

    @abstractmethod
    async def list_objects(self, bucket: str, prefix: str = "") -> List[str]:
        """List object keys starting with prefix."""
        pass

    @abstractmethod
    async def close(self):
        """Close the underlying client and cleanup."""
        pass
