"""
Core models and the subtitle compiler (normalize, synthesize, serialize).
"""

from .models import BoundingBox, DetectionKind, TaggedObject, TimedMetadata, Cue
from .schemas import (
    S3ObjectRef,
    VideoMetadataRef,
    SubtitleRequest,
    SubtitleResult,
    PollResult,
    CollectResult,
)
from .normalizer import normalize_records, get_adapter
from .synthesizer import DEFAULT_SPAN, get_end_time, synthesize_cues
from .webvtt import format_timestamp, parse_timestamp, render_vtt, parse_vtt
from .viewer import render_viewer

__all__ = [
    "BoundingBox",
    "DetectionKind",
    "TaggedObject",
    "TimedMetadata",
    "Cue",
    "S3ObjectRef",
    "VideoMetadataRef",
    "SubtitleRequest",
    "SubtitleResult",
    "PollResult",
    "CollectResult",
    "normalize_records",
    "get_adapter",
    "DEFAULT_SPAN",
    "get_end_time",
    "synthesize_cues",
    "format_timestamp",
    "parse_timestamp",
    "render_vtt",
    "parse_vtt",
    "render_viewer",
]
