"""
Starts the asynchronous video analysis job for an uploaded video.
"""

import uuid
from typing import TYPE_CHECKING, Any, Dict, Optional
from loguru import logger

from ..exceptions import ConfigurationException, ValidationException
from ..providers.base import VideoAnalysisProvider
from .models import DetectionKind

if TYPE_CHECKING:
    from ..config.settings import AnalysisConfig


class JobStarter:
    """Validates an upload event and starts one analysis job for it."""

    VIDEO_SUFFIX = ".mp4"

    def __init__(
        self,
        analysis_provider: VideoAnalysisProvider,
        config: "AnalysisConfig",
        input_bucket: Optional[str] = None,
    ):
        self.analysis_provider = analysis_provider
        self.config = config
        self.input_bucket = input_bucket

    def _video_key(self, event: Dict[str, Any]) -> str:
        s3_object = event.get("s3Object") if isinstance(event, dict) else None
        key = s3_object.get("key") if isinstance(s3_object, dict) else None
        if not isinstance(key, str) or not key.endswith(self.VIDEO_SUFFIX):
            raise ValidationException(
                f"Expected an {self.VIDEO_SUFFIX} object key, got {key!r}",
                error_code="INVALID_VIDEO_KEY",
            )
        return key

    async def start(self, event: Dict[str, Any], kind: Optional[DetectionKind] = None) -> Dict[str, Any]:
        """
        Start the analysis job for the video named in ``event``.

        Args:
            event: ``{"s3Object": {"key": "<name>.mp4", "bucket": optional}}``
            kind: Detection kind, defaults to the configured one

        Returns:
            The job start response, carrying ``JobId``
        """
        key = self._video_key(event)
        bucket = event["s3Object"].get("bucket") or self.input_bucket
        if not bucket:
            raise ConfigurationException("Input bucket is not configured", error_code="MISSING_INPUT_BUCKET")
        if not self.config.topic_arn or not self.config.role_arn:
            raise ConfigurationException(
                "Notification topic and role ARNs are required to start an analysis job",
                error_code="MISSING_NOTIFICATION_CHANNEL",
            )

        kind = DetectionKind(kind or self.config.kind)
        response = await self.analysis_provider.start_job(
            kind=kind,
            bucket=bucket,
            key=key,
            client_request_token=str(uuid.uuid4()),
            topic_arn=self.config.topic_arn,
            role_arn=self.config.role_arn,
        )
        logger.info(f"Analysis job {response.get('JobId')} started for {key}")
        return response
