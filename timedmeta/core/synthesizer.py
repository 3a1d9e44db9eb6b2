"""
Cue interval synthesis.
"""

from typing import List, Sequence

from ..exceptions import ValidationException
from .models import Cue, TimedMetadata

# Fallback cue length when neither an explicit duration nor the next cue
# bounds it more tightly.
DEFAULT_SPAN = 500


def get_end_time(timed_metadata: Sequence[TimedMetadata], index: int, video_duration: int) -> int:
    metadata = timed_metadata[index]
    if metadata.duration is not None and metadata.duration > 0:
        return metadata.timestamp + metadata.duration
    if index == len(timed_metadata) - 1:
        return min(video_duration, metadata.timestamp + DEFAULT_SPAN)
    return min(timed_metadata[index + 1].timestamp, metadata.timestamp + DEFAULT_SPAN)


def synthesize_cues(timed_metadata: Sequence[TimedMetadata], video_duration: int) -> List[Cue]:
    """
    Compute one cue per timed metadata entry.

    The cue starts at the entry's timestamp. It ends after the explicit
    duration when one is known, otherwise after DEFAULT_SPAN clamped to the
    next entry's timestamp (or to the video duration for the last entry).
    Zero-length cues are possible when two entries share a timestamp.

    Args:
        timed_metadata: Entries ordered by timestamp
        video_duration: Total video length in milliseconds

    Returns:
        Cues in the same order, indexed from 0
    """
    if video_duration < 0:
        raise ValidationException(
            f"Video duration must be >= 0, got {video_duration}",
            error_code="INVALID_DURATION",
        )

    return [
        Cue(
            index=i,
            start_time=metadata.timestamp,
            end_time=get_end_time(timed_metadata, i, video_duration),
            objects=metadata.objects,
        )
        for i, metadata in enumerate(timed_metadata)
    ]
