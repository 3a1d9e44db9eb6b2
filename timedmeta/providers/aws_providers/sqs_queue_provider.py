import asyncio
from typing import Any, Dict, List, Optional
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from timedmeta.exceptions import ConfigurationException, ProviderException
from timedmeta.providers.base import QueueProvider
from timedmeta.utils.error_handler import convert_exceptions
from ._client import create_client


class SQSQueueProvider(QueueProvider):
    """Amazon SQS queue provider; the queue is subscribed to the job's SNS topic."""

    def __init__(self, config: Dict[str, Any], client: Optional[Any] = None):
        """
        Initialize SQS Queue Provider.

        Args:
            config: Configuration dictionary with:
                - url: Queue URL (required)
                - region, endpoint_url: client settings
                - max_messages: Messages per receive (1-10)
                - wait_time_seconds: Long-poll duration (0-20)
            client: Optional pre-built boto3 SQS client
        """
        if not config.get("url"):
            raise ConfigurationException("SQS queue url is required", error_code="MISSING_QUEUE_URL")
        self.config = config
        self.client = client

    def _ensure_initialized(self):
        if self.client is None:
            self.client = create_client("sqs", self.config)
            logger.info("Successfully initialized SQS client")

    @convert_exceptions({ClientError: ProviderException, BotoCoreError: ProviderException})
    async def receive_messages(self) -> List[Dict[str, Any]]:
        self._ensure_initialized()
        response = await asyncio.to_thread(
            self.client.receive_message,
            QueueUrl=self.config["url"],
            MaxNumberOfMessages=int(self.config.get("max_messages") or 10),
            WaitTimeSeconds=int(self.config.get("wait_time_seconds") or 0),
        )
        messages = response.get("Messages") or []
        logger.debug(f"Received {len(messages)} message(s) from {self.config['url']}")
        return messages

    async def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
