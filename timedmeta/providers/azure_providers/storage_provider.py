from typing import Any, Dict, List
from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient
from loguru import logger

from timedmeta.exceptions import ConfigurationException, ProviderException, ResourceNotFoundException
from timedmeta.providers.base import StorageProvider
from timedmeta.providers.credentials import AzureCredentials
from timedmeta.utils.error_handler import convert_exceptions


class AzureStorageProvider(StorageProvider):
    """Azure Blob Storage provider; buckets map onto containers."""

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize Azure Storage Provider.

        Args:
            config: Configuration dictionary with:
                - account_url: Azure Storage account URL
                - use_managed_identity: Whether to use token credentials (default: True)
        """
        self.config = config
        self.credential = None
        self.service_client = None

    def _initialize(self):
        if not self.config.get("use_managed_identity", True):
            raise ConfigurationException(
                "Only token credential auth is supported for blob storage",
                error_code="UNSUPPORTED_AUTH",
            )
        account_url = self.config.get("account_url")
        if not account_url:
            raise ConfigurationException("Azure Storage account_url is required", error_code="MISSING_ACCOUNT_URL")

        self.credential = AzureCredentials.get_async_credentials()
        self.service_client = BlobServiceClient(account_url=account_url, credential=self.credential)
        logger.info("Successfully initialized Azure Blob Storage client")

    def _ensure_initialized(self):
        if self.service_client is None:
            self._initialize()

    @convert_exceptions({AzureError: ProviderException})
    async def get_object(self, bucket: str, key: str) -> bytes:
        self._ensure_initialized()
        client = self.service_client.get_blob_client(container=bucket, blob=key)
        try:
            stream = await client.download_blob()
            return await stream.readall()
        except ResourceNotFoundError as e:
            raise ResourceNotFoundException(
                f"Blob {bucket}/{key} not found",
                error_code="NOT_FOUND",
                details={"bucket": bucket, "key": key},
            ) from e
        finally:
            await client.close()

    @convert_exceptions({AzureError: ProviderException})
    async def put_object(self, bucket: str, key: str, body: bytes, content_type: str = "application/octet-stream") -> str:
        self._ensure_initialized()
        client = self.service_client.get_blob_client(container=bucket, blob=key)
        try:
            await client.upload_blob(
                body,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
            logger.info(f"Uploaded {len(body)} bytes to {bucket}/{key}")
            return f"{self.service_client.url.rstrip('/')}/{bucket}/{key}"
        finally:
            await client.close()

    @convert_exceptions({AzureError: ProviderException})
    async def list_objects(self, bucket: str, prefix: str = "") -> List[str]:
        self._ensure_initialized()
        container = self.service_client.get_container_client(bucket)
        try:
            return [blob.name async for blob in container.list_blobs(name_starts_with=prefix or None)]
        finally:
            await container.close()

    async def close(self):
        if self.service_client is not None:
            logger.debug("Closing Azure Blob Storage client")
            await self.service_client.close()
            self.service_client = None
        if self.credential is not None:
            await self.credential.close()
            self.credential = None
