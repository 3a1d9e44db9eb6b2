"""
Subtitle generation step: raw results blob in, WebVTT track and viewer page out.
"""

import json
from typing import Any, List, Optional
from loguru import logger

from ..exceptions import ConfigurationException, ResourceNotFoundException, ValidationException
from ..providers.base import StorageProvider
from .models import DetectionKind
from .normalizer import normalize_records
from .schemas import SubtitleRequest, SubtitleResult
from .synthesizer import synthesize_cues
from .viewer import render_viewer
from .webvtt import render_vtt

VTT_CONTENT_TYPE = "text/vtt; charset=UTF-8"
HTML_CONTENT_TYPE = "text/html; charset=UTF-8"


def derive_base_name(video_name: str) -> str:
    """``clip.final.mp4`` -> ``clip``; matches the transcoder's HLS naming."""
    return video_name.split(".")[0]


def kind_from_results_name(results_name: str) -> Optional[DetectionKind]:
    for kind in DetectionKind:
        if results_name.endswith(f".{kind.file_suffix}.json"):
            return kind
    return None


class SubtitleGenerator:
    """Builds ``<base>.vtt`` and ``<base>.html`` in the output bucket."""

    def __init__(self, storage_provider: StorageProvider, output_bucket: str, kind: DetectionKind = DetectionKind.PERSON):
        if not output_bucket:
            raise ConfigurationException("Output bucket is not configured", error_code="MISSING_OUTPUT_BUCKET")
        self.storage_provider = storage_provider
        self.output_bucket = output_bucket
        self.kind = DetectionKind(kind)

    async def _load_records(self, key: str) -> List[Any]:
        try:
            blob = await self.storage_provider.get_object(self.output_bucket, key)
        except ResourceNotFoundException:
            logger.warning(f"Results blob {self.output_bucket}/{key} is missing; rendering an empty track")
            return []
        if not blob or not blob.strip():
            logger.warning(f"Results blob {self.output_bucket}/{key} is empty; rendering an empty track")
            return []
        try:
            records = json.loads(blob)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationException(
                f"Results blob {key} is not valid JSON: {e}",
                error_code="INVALID_RESULTS",
            ) from e
        if not isinstance(records, list):
            raise ValidationException(f"Results blob {key} must hold a JSON array", error_code="INVALID_RESULTS")
        return records

    async def generate(self, event: Any) -> SubtitleResult:
        request = event if isinstance(event, SubtitleRequest) else SubtitleRequest.from_event(event)
        kind = kind_from_results_name(request.results_name) or self.kind

        records = await self._load_records(request.results_name)
        timed_metadata = normalize_records(records, kind)
        cues = synthesize_cues(timed_metadata, request.duration_millis)
        document = render_vtt(cues)

        base = derive_base_name(request.video_name)
        vtt_key = f"{base}.vtt"
        html_key = f"{base}.html"
        page = render_viewer(video_path=f"./hls/{base}.m3u8", vtt_path=f"./{vtt_key}")

        await self.storage_provider.put_object(self.output_bucket, vtt_key, document.encode("utf-8"), VTT_CONTENT_TYPE)
        await self.storage_provider.put_object(self.output_bucket, html_key, page.encode("utf-8"), HTML_CONTENT_TYPE)
        logger.info(f"Wrote {len(cues)} cue(s) for {request.video_name} to {vtt_key} and {html_key}")

        return SubtitleResult(video=request.video_name, vtt=vtt_key, html=html_key)
