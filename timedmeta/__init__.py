"""
timedmeta: video analysis results as WebVTT timed metadata tracks.

Typical use::

    from timedmeta import run_subtitle_pipeline
    context = await run_subtitle_pipeline("clip.mp4", kind="person")
"""

__version__ = "0.1.0"

from .exceptions import (
    TimedMetaException,
    ProviderException,
    ConfigurationException,
    ValidationException,
    ResourceNotFoundException,
    WorkflowTimeoutException,
)
from .config import PipelineConfig
from .core import DetectionKind, SubtitleRequest, SubtitleResult, render_vtt, synthesize_cues, normalize_records
from .pipeline import SubtitlePipeline, PipelineContext, run_subtitle_pipeline

__all__ = [
    "__version__",
    "TimedMetaException",
    "ProviderException",
    "ConfigurationException",
    "ValidationException",
    "ResourceNotFoundException",
    "WorkflowTimeoutException",
    "PipelineConfig",
    "DetectionKind",
    "SubtitleRequest",
    "SubtitleResult",
    "render_vtt",
    "synthesize_cues",
    "normalize_records",
    "SubtitlePipeline",
    "PipelineContext",
    "run_subtitle_pipeline",
]
