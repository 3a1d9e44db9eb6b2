"""Storage, queue and video analysis providers."""

from .base import StorageProvider, QueueProvider, VideoAnalysisProvider
from .factory import ProviderFactory, provider_factory

__all__ = [
    "StorageProvider",
    "QueueProvider",
    "VideoAnalysisProvider",
    "ProviderFactory",
    "provider_factory",
]
