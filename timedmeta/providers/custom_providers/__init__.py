from .storage_provider import LocalStorageProvider
from .queue_provider import InMemoryQueueProvider

__all__ = [
    'LocalStorageProvider',
    'InMemoryQueueProvider',
]
