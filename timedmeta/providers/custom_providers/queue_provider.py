import asyncio
import json
import uuid
from typing import Any, Dict, List, Union

from timedmeta.providers.base import QueueProvider


class InMemoryQueueProvider(QueueProvider):
    """
    Process-local queue for tests and local runs.

    Receiving does not remove messages, mirroring a queue whose messages are
    never deleted and become visible again. Each receive hands out the next
    window of up to max_messages and moves it to the back, so every queued
    message is eventually delivered whatever the batch size.
    """

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.max_messages = int(config.get("max_messages") or 10)
        self._messages: List[Dict[str, Any]] = []
        self._lock = asyncio.Lock()

    async def send_message(self, body: Union[str, Dict[str, Any]]) -> str:
        """Enqueue a message; dict bodies are JSON-encoded."""
        message_id = str(uuid.uuid4())
        text = body if isinstance(body, str) else json.dumps(body)
        async with self._lock:
            self._messages.append({"MessageId": message_id, "Body": text})
        return message_id

    async def receive_messages(self) -> List[Dict[str, Any]]:
        async with self._lock:
            batch = self._messages[: self.max_messages]
            self._messages = self._messages[len(batch):] + batch
            return [dict(message) for message in batch]

    async def close(self):
        async with self._lock:
            self._messages.clear()
