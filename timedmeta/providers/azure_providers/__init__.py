from .storage_provider import AzureStorageProvider

__all__ = [
    'AzureStorageProvider',
]
