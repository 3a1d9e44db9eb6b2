"""
Data models for the timed metadata pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# Normalized rectangle exactly as received from the analysis job
# ({"Width", "Height", "Left", "Top"}); kept as a mapping so key names and
# order survive serialization unchanged.
BoundingBox = Dict[str, Any]


class DetectionKind(str, Enum):
    """Enumeration of supported analysis job types."""
    LABEL = "label"
    PERSON = "person"
    CELEBRITY = "celebrity"

    @property
    def result_key(self) -> str:
        """Collection key holding the records in a get-results page."""
        return {
            DetectionKind.LABEL: "Labels",
            DetectionKind.PERSON: "Persons",
            DetectionKind.CELEBRITY: "Celebrities",
        }[self]

    @property
    def file_suffix(self) -> str:
        """Suffix of the raw results blob, e.g. ``video.mp4.persons.json``."""
        return {
            DetectionKind.LABEL: "labels",
            DetectionKind.PERSON: "persons",
            DetectionKind.CELEBRITY: "celebrities",
        }[self]

    @property
    def start_operation(self) -> str:
        return {
            DetectionKind.LABEL: "start_label_detection",
            DetectionKind.PERSON: "start_person_tracking",
            DetectionKind.CELEBRITY: "start_celebrity_recognition",
        }[self]

    @property
    def get_operation(self) -> str:
        return {
            DetectionKind.LABEL: "get_label_detection",
            DetectionKind.PERSON: "get_person_tracking",
            DetectionKind.CELEBRITY: "get_celebrity_recognition",
        }[self]


@dataclass
class TaggedObject:
    """One detected entity (label, tracked person or celebrity) at one instant."""
    name: str
    boxes: List[BoundingBox] = field(default_factory=list)
    id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Cue payload entry; ``id`` is omitted for untracked labels."""
        payload: Dict[str, Any] = {}
        if self.id is not None:
            payload["id"] = self.id
        payload["name"] = self.name
        payload["boxes"] = self.boxes
        return payload


@dataclass
class TimedMetadata:
    """Detections sharing one timestamp; the candidate for a single cue."""
    timestamp: int
    objects: List[TaggedObject] = field(default_factory=list)
    duration: Optional[int] = None


@dataclass
class Cue:
    """One timed WebVTT entry."""
    index: int
    start_time: int
    end_time: int
    objects: List[TaggedObject] = field(default_factory=list)

    @property
    def payload(self) -> List[Dict[str, Any]]:
        return [obj.to_payload() for obj in self.objects]
