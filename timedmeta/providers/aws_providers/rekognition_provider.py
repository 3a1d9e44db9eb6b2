import asyncio
from typing import Any, Dict, Optional
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from timedmeta.core.models import DetectionKind
from timedmeta.exceptions import ProviderException
from timedmeta.providers.base import VideoAnalysisProvider
from timedmeta.utils.error_handler import convert_exceptions
from ._client import create_client


class RekognitionProvider(VideoAnalysisProvider):
    """Amazon Rekognition Video provider (stored-video asynchronous jobs)."""

    def __init__(self, config: Dict[str, Any], client: Optional[Any] = None):
        """
        Initialize Rekognition Provider.

        Args:
            config: Configuration dictionary with:
                - region, endpoint_url: client settings
                - max_results: Page size for get-results calls (max 1000)
            client: Optional pre-built boto3 Rekognition client
        """
        self.config = config
        self.client = client

    def _ensure_initialized(self):
        if self.client is None:
            self.client = create_client("rekognition", self.config)
            logger.info("Successfully initialized Rekognition client")

    @convert_exceptions({ClientError: ProviderException, BotoCoreError: ProviderException})
    async def start_job(
        self,
        kind: DetectionKind,
        bucket: str,
        key: str,
        client_request_token: str,
        topic_arn: str,
        role_arn: str,
    ) -> Dict[str, Any]:
        self._ensure_initialized()
        operation = getattr(self.client, kind.start_operation)
        response = await asyncio.to_thread(
            operation,
            ClientRequestToken=client_request_token,
            Video={"S3Object": {"Bucket": bucket, "Name": key}},
            NotificationChannel={"SNSTopicArn": topic_arn, "RoleArn": role_arn},
        )
        logger.info(f"Started {kind.value} job {response.get('JobId')} for s3://{bucket}/{key}")
        return response

    @convert_exceptions({ClientError: ProviderException, BotoCoreError: ProviderException})
    async def get_results_page(
        self,
        kind: DetectionKind,
        job_id: str,
        next_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        self._ensure_initialized()
        kwargs: Dict[str, Any] = {
            "JobId": job_id,
            "MaxResults": int(self.config.get("max_results") or 1000),
        }
        if next_token:
            kwargs["NextToken"] = next_token
        operation = getattr(self.client, kind.get_operation)
        return await asyncio.to_thread(operation, **kwargs)

    async def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
