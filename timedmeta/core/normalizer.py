"""
Normalization of raw analysis records into timed metadata.

Three record shapes are supported (label detection, person tracking and
celebrity recognition). Each shape has an adapter that decides which records
are kept and how a kept record becomes a TaggedObject; grouping by timestamp
is shared.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Union
from loguru import logger

from .models import BoundingBox, DetectionKind, TaggedObject, TimedMetadata

Record = Dict[str, Any]
RecordPredicate = Callable[[Record], bool]


def _dig(record: Any, *path: str) -> Any:
    """Follow nested keys, returning None as soon as one is missing."""
    current = record
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _as_millis(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class RecordAdapter:
    """Maps one raw record shape onto TaggedObjects."""

    kind: DetectionKind

    def accepts(self, record: Record) -> bool:
        raise NotImplementedError

    def to_object(self, record: Record) -> TaggedObject:
        raise NotImplementedError

    def duration(self, record: Record) -> Optional[int]:
        return None


class LabelDetectionAdapter(RecordAdapter):
    """Leaf labels that carry instance bounding boxes."""

    kind = DetectionKind.LABEL

    def _boxes(self, record: Record) -> List[BoundingBox]:
        instances = _dig(record, "Label", "Instances")
        if not isinstance(instances, list):
            return []
        return [
            instance["BoundingBox"]
            for instance in instances
            if isinstance(instance, dict) and isinstance(instance.get("BoundingBox"), dict)
        ]

    def accepts(self, record: Record) -> bool:
        parents = _dig(record, "Label", "Parents")
        # Labels with parents are implied categories, not explicit detections
        if isinstance(parents, list) and parents:
            return False
        return bool(self._boxes(record))

    def to_object(self, record: Record) -> TaggedObject:
        return TaggedObject(
            name=_dig(record, "Label", "Name") or "",
            boxes=self._boxes(record),
        )

    def duration(self, record: Record) -> Optional[int]:
        explicit = _as_millis(record.get("DurationMillis"))
        if explicit:
            return explicit
        timestamp = _as_millis(record.get("Timestamp"))
        end = _as_millis(record.get("EndTimestampMillis"))
        start = _as_millis(record.get("StartTimestampMillis"))
        if start is None:
            start = timestamp
        if start is None or not end:
            return None
        if timestamp is not None:
            start = max(start, timestamp)
        return end - start


class PersonTrackingAdapter(RecordAdapter):
    """Tracked persons whose face was located."""

    kind = DetectionKind.PERSON

    def accepts(self, record: Record) -> bool:
        return isinstance(_dig(record, "Person", "Face", "BoundingBox"), dict)

    def to_object(self, record: Record) -> TaggedObject:
        index = _dig(record, "Person", "Index")
        return TaggedObject(
            id=str(index) if index is not None else None,
            name=f"Person-{index}" if index is not None else "Person",
            boxes=[_dig(record, "Person", "Face", "BoundingBox")],
        )


class CelebrityRecognitionAdapter(RecordAdapter):
    """Recognized celebrities whose face was located."""

    kind = DetectionKind.CELEBRITY

    def accepts(self, record: Record) -> bool:
        return isinstance(_dig(record, "Celebrity", "Face", "BoundingBox"), dict)

    def to_object(self, record: Record) -> TaggedObject:
        celebrity_id = _dig(record, "Celebrity", "Id")
        return TaggedObject(
            id=str(celebrity_id) if celebrity_id is not None else None,
            name=_dig(record, "Celebrity", "Name") or "",
            boxes=[_dig(record, "Celebrity", "Face", "BoundingBox")],
        )


_ADAPTERS: Dict[DetectionKind, RecordAdapter] = {
    DetectionKind.LABEL: LabelDetectionAdapter(),
    DetectionKind.PERSON: PersonTrackingAdapter(),
    DetectionKind.CELEBRITY: CelebrityRecognitionAdapter(),
}


def get_adapter(kind: Union[DetectionKind, str]) -> RecordAdapter:
    return _ADAPTERS[DetectionKind(kind)]


def normalize_records(
    records: Iterable[Record],
    kind: Union[DetectionKind, str, RecordAdapter],
    predicate: Optional[RecordPredicate] = None,
) -> List[TimedMetadata]:
    """
    Group raw detection records into timed metadata.

    Records are filtered with the adapter's predicate (or ``predicate`` when
    given), then walked in order. A record whose timestamp equals the last
    emitted group's timestamp is appended to that group; any other record
    opens a new group. Equal timestamps separated by a different one are
    therefore NOT merged.

    Args:
        records: Raw records in the order the analysis job returned them
        kind: Record shape, or an adapter instance
        predicate: Optional filter replacing the adapter's default

    Returns:
        Ordered list of TimedMetadata
    """
    adapter = kind if isinstance(kind, RecordAdapter) else get_adapter(kind)
    keep = predicate or adapter.accepts

    timed_metadata: List[TimedMetadata] = []
    skipped = 0
    for record in records:
        if not isinstance(record, dict) or not keep(record):
            skipped += 1
            continue
        timestamp = _as_millis(record.get("Timestamp"))
        if timestamp is None:
            skipped += 1
            continue

        obj = adapter.to_object(record)
        last = timed_metadata[-1] if timed_metadata else None
        if last is not None and last.timestamp == timestamp:
            last.objects.append(obj)
        else:
            timed_metadata.append(TimedMetadata(
                timestamp=timestamp,
                duration=adapter.duration(record),
                objects=[obj],
            ))

    logger.debug(f"Normalized {adapter.kind.value} records into {len(timed_metadata)} groups ({skipped} skipped)")
    return timed_metadata
