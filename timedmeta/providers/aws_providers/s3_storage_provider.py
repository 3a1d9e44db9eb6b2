import asyncio
from typing import Any, Dict, List, Optional
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from timedmeta.exceptions import ProviderException, ResourceNotFoundException
from timedmeta.providers.base import StorageProvider
from timedmeta.utils.error_handler import convert_exceptions
from ._client import create_client

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class S3StorageProvider(StorageProvider):
    """Amazon S3 storage provider implementation."""

    def __init__(self, config: Dict[str, Any], client: Optional[Any] = None):
        """
        Initialize S3 Storage Provider.

        Args:
            config: Configuration dictionary with:
                - region: AWS region of the buckets
                - endpoint_url: Optional endpoint override (e.g. a local S3 emulator)
            client: Optional pre-built boto3 S3 client
        """
        self.config = config
        self.client = client

    def _ensure_initialized(self):
        if self.client is None:
            self.client = create_client("s3", self.config)
            logger.info("Successfully initialized S3 client")

    @convert_exceptions({ClientError: ProviderException, BotoCoreError: ProviderException})
    async def get_object(self, bucket: str, key: str) -> bytes:
        self._ensure_initialized()
        try:
            response = await asyncio.to_thread(self.client.get_object, Bucket=bucket, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in _MISSING_KEY_CODES:
                raise ResourceNotFoundException(
                    f"s3://{bucket}/{key} not found",
                    error_code="NOT_FOUND",
                    details={"bucket": bucket, "key": key},
                ) from e
            raise
        body = response.get("Body")
        if body is None:
            return b""
        return await asyncio.to_thread(body.read)

    @convert_exceptions({ClientError: ProviderException, BotoCoreError: ProviderException})
    async def put_object(self, bucket: str, key: str, body: bytes, content_type: str = "application/octet-stream") -> str:
        self._ensure_initialized()
        await asyncio.to_thread(
            self.client.put_object,
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )
        uri = f"s3://{bucket}/{key}"
        logger.info(f"Uploaded {len(body)} bytes to {uri}")
        return uri

    @convert_exceptions({ClientError: ProviderException, BotoCoreError: ProviderException})
    async def list_objects(self, bucket: str, prefix: str = "") -> List[str]:
        self._ensure_initialized()

        def _list() -> List[str]:
            keys: List[str] = []
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
                keys.extend(item["Key"] for item in page.get("Contents", []))
            return keys

        return await asyncio.to_thread(_list)

    async def close(self):
        if self.client is not None:
            logger.debug("Closing S3 client")
            self.client.close()
            self.client = None
