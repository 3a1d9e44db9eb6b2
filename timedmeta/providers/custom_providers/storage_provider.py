from pathlib import Path
from typing import Any, Dict, List
import aiofiles
from loguru import logger

from timedmeta.exceptions import ProviderException, ResourceNotFoundException, ValidationException
from timedmeta.providers.base import StorageProvider
from timedmeta.utils.error_handler import convert_exceptions


class LocalStorageProvider(StorageProvider):
    """Local filesystem storage; a bucket is a directory under base_path."""

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize Local Storage Provider.

        Args:
            config: {
                        "base_path": str -> Root directory for local storage (default: ./local_storage)
                    }
        """
        self.config = config
        self.base_path = Path(config.get("base_path") or "./local_storage").resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"LocalStorageProvider initialized at {self.base_path}")

    def _get_file_path(self, bucket: str, key: str) -> Path:
        file_path = (self.base_path / bucket / key).resolve()
        if self.base_path not in file_path.parents:
            raise ValidationException(f"Key escapes storage root: {bucket}/{key}", error_code="INVALID_KEY")
        return file_path

    @convert_exceptions({OSError: ProviderException})
    async def get_object(self, bucket: str, key: str) -> bytes:
        file_path = self._get_file_path(bucket, key)
        if not file_path.is_file():
            raise ResourceNotFoundException(
                f"{bucket}/{key} not found",
                error_code="NOT_FOUND",
                details={"bucket": bucket, "key": key},
            )
        async with aiofiles.open(file_path, "rb") as f:
            return await f.read()

    @convert_exceptions({OSError: ProviderException})
    async def put_object(self, bucket: str, key: str, body: bytes, content_type: str = "application/octet-stream") -> str:
        file_path = self._get_file_path(bucket, key)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(file_path, "wb") as f:
            await f.write(body)
        logger.info(f"Saved {len(body)} bytes ({content_type}) to {file_path}")
        return file_path.as_uri()

    async def list_objects(self, bucket: str, prefix: str = "") -> List[str]:
        root = self.base_path / bucket
        if not root.is_dir():
            return []
        keys = (path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file())
        return sorted(key for key in keys if key.startswith(prefix))

    async def close(self):
        pass
