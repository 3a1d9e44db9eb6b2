from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from timedmeta.core.models import DetectionKind
from timedmeta.core.schemas import SubtitleResult


class SubtitleJobRequest(BaseModel):
    video_key: str = Field(..., description="Object key of the uploaded .mp4 in the input bucket")
    bucket: Optional[str] = Field(default=None, description="Overrides STORAGE_INPUT_BUCKET")
    kind: Optional[DetectionKind] = Field(default=None, description="Defaults to ANALYSIS_KIND")


class SubtitleJobResponse(BaseModel):
    video_key: str
    kind: DetectionKind
    job_id: Optional[str] = None
    poll_attempts: int = 0
    results: Dict[str, Any] = Field(default_factory=dict)
    subtitles: Optional[SubtitleResult] = None
    execution_time: float


class SubtitleRenderResponse(SubtitleResult):
    execution_time: float
