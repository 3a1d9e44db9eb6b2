from .storage_provider import StorageProvider
from .queue_provider import QueueProvider
from .analysis_provider import VideoAnalysisProvider

__all__ = [
    'StorageProvider',
    'QueueProvider',
    'VideoAnalysisProvider',
]
