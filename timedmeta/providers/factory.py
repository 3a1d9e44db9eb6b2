from typing import Dict, Optional, Type
from loguru import logger

from .base import QueueProvider, StorageProvider, VideoAnalysisProvider
from .aws_providers import RekognitionProvider, S3StorageProvider, SQSQueueProvider
from .azure_providers import AzureStorageProvider
from .custom_providers import InMemoryQueueProvider, LocalStorageProvider
from ..config.settings import PipelineConfig
from ..exceptions import ConfigurationException


class ProviderFactory:
    """Factory class for creating provider instances."""

    _storage_providers: Dict[str, Type[StorageProvider]] = {
        's3': S3StorageProvider,
        'azure': AzureStorageProvider,
        'local': LocalStorageProvider,
    }

    _queue_providers: Dict[str, Type[QueueProvider]] = {
        'sqs': SQSQueueProvider,
        'memory': InMemoryQueueProvider,
    }

    _analysis_providers: Dict[str, Type[VideoAnalysisProvider]] = {
        'rekognition': RekognitionProvider,
    }

    @staticmethod
    def _lookup(registry: Dict[str, type], provider_name: str, label: str) -> type:
        if provider_name not in registry:
            raise ConfigurationException(
                f"Unknown {label} provider: {provider_name}. "
                f"Supported providers: {list(registry.keys())}",
                error_code="UNKNOWN_PROVIDER",
            )
        return registry[provider_name]

    @classmethod
    def create_storage_provider(
        cls, config: Optional[PipelineConfig] = None, provider_name: Optional[str] = None
    ) -> StorageProvider:
        """
        Create storage provider instance.

        Args:
            config: Pipeline configuration (defaults to one loaded from the environment)
            provider_name: Name of the provider (optional, defaults to config)

        Raises:
            ConfigurationException: If provider is not supported
        """
        config = config or PipelineConfig()
        provider_name = provider_name or config.storage.provider
        provider_class = cls._lookup(cls._storage_providers, provider_name, "storage")
        logger.info(f"Creating storage provider: {provider_name}")
        return provider_class(config.provider_config("storage"))

    @classmethod
    def create_queue_provider(
        cls, config: Optional[PipelineConfig] = None, provider_name: Optional[str] = None
    ) -> QueueProvider:
        config = config or PipelineConfig()
        provider_name = provider_name or config.queue.provider
        provider_class = cls._lookup(cls._queue_providers, provider_name, "queue")
        logger.info(f"Creating queue provider: {provider_name}")
        return provider_class(config.provider_config("queue"))

    @classmethod
    def create_analysis_provider(
        cls, config: Optional[PipelineConfig] = None, provider_name: Optional[str] = None
    ) -> VideoAnalysisProvider:
        config = config or PipelineConfig()
        provider_name = provider_name or config.analysis.provider
        provider_class = cls._lookup(cls._analysis_providers, provider_name, "analysis")
        logger.info(f"Creating analysis provider: {provider_name}")
        return provider_class(config.provider_config("analysis"))

    @classmethod
    def register_storage_provider(cls, name: str, provider_class: Type[StorageProvider]):
        """Register a new storage provider."""
        cls._storage_providers[name] = provider_class

    @classmethod
    def register_queue_provider(cls, name: str, provider_class: Type[QueueProvider]):
        """Register a new queue provider."""
        cls._queue_providers[name] = provider_class

    @classmethod
    def register_analysis_provider(cls, name: str, provider_class: Type[VideoAnalysisProvider]):
        """Register a new analysis provider."""
        cls._analysis_providers[name] = provider_class

    @classmethod
    def get_supported_providers(cls) -> Dict[str, list]:
        """Get list of supported providers by type."""
        return {
            "storage": list(cls._storage_providers.keys()),
            "queue": list(cls._queue_providers.keys()),
            "analysis": list(cls._analysis_providers.keys()),
        }


provider_factory = ProviderFactory()
