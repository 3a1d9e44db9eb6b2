"""
Writes the raw results of a finished job next to the video they describe.
"""

import json
from typing import Any, Dict
from loguru import logger

from ..exceptions import ConfigurationException
from ..providers.base import StorageProvider
from .models import DetectionKind
from .paginator import ResultPaginator
from .schemas import CollectResult

JSON_CONTENT_TYPE = "application/json"


class ResultCollector:
    """Paginates a completed job and stores its records as one JSON blob."""

    def __init__(
        self,
        paginator: ResultPaginator,
        storage_provider: StorageProvider,
        output_bucket: str,
        kind: DetectionKind,
    ):
        if not output_bucket:
            raise ConfigurationException("Output bucket is not configured", error_code="MISSING_OUTPUT_BUCKET")
        self.paginator = paginator
        self.storage_provider = storage_provider
        self.output_bucket = output_bucket
        self.kind = DetectionKind(kind)

    def results_key(self, video_name: str) -> str:
        return f"{video_name}.{self.kind.file_suffix}.json"

    async def collect(self, poll_payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Args:
            poll_payload: Poll result in wire shape (``MessageCount``, ``Messages``, ``JobId``)

        Returns:
            CollectResult payload, or ``{}`` when the payload holds no usable message
        """
        messages = (poll_payload or {}).get("Messages") or []
        message = messages[0] if messages else None
        if not isinstance(message, dict) or not message.get("JobId"):
            logger.error(f"No completed job to collect in poll payload: {poll_payload}")
            return {}

        job_id = message["JobId"]
        results = await self.paginator.paginate(self.kind, job_id)

        video_name = (message.get("Video") or {}).get("S3ObjectName") or (results.s3_object or {}).get("Name")
        if not video_name:
            logger.error(f"Job {job_id} does not name its source video")
            return {}

        key = self.results_key(video_name)
        body = json.dumps(results.items, indent=2, ensure_ascii=False).encode("utf-8")
        await self.storage_provider.put_object(self.output_bucket, key, body, JSON_CONTENT_TYPE)
        logger.info(f"Stored {len(results.items)} record(s) of job {job_id} at {self.output_bucket}/{key}")

        return CollectResult.model_validate({
            "input": {"s3Object": results.s3_object, "videoMetadata": results.video_metadata},
            "output": {"s3Object": {"Bucket": self.output_bucket, "Name": key}},
        }).to_payload()
