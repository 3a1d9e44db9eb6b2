from abc import ABC, abstractmethod
from typing import Any, Dict, List


class QueueProvider(ABC):
    """Abstract base class for notification queue providers.

    Receiving is a best-effort peek: messages are not acknowledged or deleted
    and may come back on a later receive.
    """

    @abstractmethod
    async def receive_messages(self) -> List[Dict[str, Any]]:
        """Receive a batch of raw messages (each with a ``Body`` string); may be empty."""
        pass

    @abstractmethod
    async def close(self):
        """Close the underlying client and cleanup."""
        pass
