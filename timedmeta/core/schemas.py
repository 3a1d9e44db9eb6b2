"""
Boundary schemas for workflow events.

Every event entering a pipeline step is validated once here; downstream code
only ever sees fully populated models.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import ValidationException


def _validation_details(error: ValidationError) -> Dict[str, Any]:
    return {
        "errors": [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in error.errors()
        ]
    }


class S3ObjectRef(BaseModel):
    """Reference to a stored object, as the analysis job reports it."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    bucket: Optional[str] = Field(default=None, alias="Bucket")
    name: str = Field(..., alias="Name", min_length=1)


class VideoMetadataRef(BaseModel):
    """Subset of the analysis job's video metadata the pipeline depends on."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    duration_millis: int = Field(..., alias="DurationMillis", gt=0)


class SubtitleInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_s3_object: S3ObjectRef = Field(..., alias="videoS3Object")
    video_metadata: VideoMetadataRef = Field(..., alias="videoMetadata")


class SubtitleOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rekognition_s3_object: S3ObjectRef = Field(..., alias="rekognitionS3Object")


class SubtitleRequest(BaseModel):
    """Input event of the subtitle generation step."""
    model_config = ConfigDict(populate_by_name=True)

    input: SubtitleInput
    output: SubtitleOutput

    @classmethod
    def from_event(cls, event: Any) -> "SubtitleRequest":
        """
        Validate a raw workflow event.

        Raises:
            ValidationException: if the video name, the video duration or the
                results object name is missing.
        """
        if not isinstance(event, dict):
            raise ValidationException(
                "Subtitle event must be a JSON object",
                error_code="INVALID_EVENT",
            )
        try:
            return cls.model_validate(event)
        except ValidationError as e:
            raise ValidationException(
                f"Invalid subtitle event: {e.error_count()} validation error(s)",
                error_code="INVALID_EVENT",
                details=_validation_details(e),
            ) from e

    @classmethod
    def from_collect_result(cls, result: Dict[str, Any]) -> "SubtitleRequest":
        """Join the collector's output into the subtitle step's input shape."""
        source_input = result.get("input") or {}
        source_output = result.get("output") or {}
        return cls.from_event({
            "input": {
                "videoS3Object": source_input.get("s3Object"),
                "videoMetadata": source_input.get("videoMetadata"),
            },
            "output": {
                "rekognitionS3Object": source_output.get("s3Object"),
            },
        })

    @property
    def video_name(self) -> str:
        return self.input.video_s3_object.name

    @property
    def duration_millis(self) -> int:
        return self.input.video_metadata.duration_millis

    @property
    def results_name(self) -> str:
        return self.output.rekognition_s3_object.name


class SubtitleResult(BaseModel):
    """Names of the source video and the two documents written for it."""
    video: str
    vtt: str
    html: str


class PollResult(BaseModel):
    """Outcome of one poll attempt against the notification queue."""
    model_config = ConfigDict(populate_by_name=True)

    message_count: int = Field(default=0, alias="MessageCount", ge=0, le=1)
    messages: List[Dict[str, Any]] = Field(default_factory=list, alias="Messages")
    job_id: Optional[str] = Field(default=None, alias="JobId")

    @property
    def done(self) -> bool:
        return self.message_count > 0

    @classmethod
    def pending(cls, job_id: Optional[str]) -> "PollResult":
        return cls(message_count=0, messages=[], job_id=job_id)

    @classmethod
    def matched(cls, job_id: str, message: Dict[str, Any]) -> "PollResult":
        return cls(message_count=1, messages=[message], job_id=job_id)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class CollectInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    s3_object: Optional[Dict[str, Any]] = Field(default=None, alias="s3Object")
    video_metadata: Optional[Dict[str, Any]] = Field(default=None, alias="videoMetadata")


class CollectOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    s3_object: S3ObjectRef = Field(..., alias="s3Object")


class CollectResult(BaseModel):
    """Where the raw analysis results were written, plus the video they describe."""
    model_config = ConfigDict(populate_by_name=True)

    input: CollectInput
    output: CollectOutput

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
