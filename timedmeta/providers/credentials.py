"""
Azure credential lookup for the blob storage provider.
"""

from azure.identity.aio import (
    AzureCliCredential as AsyncAzureCliCredential,
    ChainedTokenCredential as AsyncChainedTokenCredential,
    DefaultAzureCredential as AsyncDefaultAzureCredential,
)


class AzureCredentials:
    """Credential management for Azure services."""

    @staticmethod
    def get_async_credentials():
        """
        Tries the Azure CLI login first, then DefaultAzureCredential
        (environment, managed identity, ...).
        """
        return AsyncChainedTokenCredential(
            AsyncAzureCliCredential(),
            AsyncDefaultAzureCredential(),
        )
