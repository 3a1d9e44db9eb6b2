"""
WebVTT metadata track rendering.

Each cue carries its detections as a compact JSON array, so a player can
treat the cue text as an opaque data blob bound to playback time.
"""

import json
import re
from typing import Any, List, Sequence

from ..exceptions import ValidationException
from .models import Cue, TaggedObject

HEADER = "WEBVTT"
ARROW = " --> "

_TIMESTAMP_RE = re.compile(r"^(\d{2,}):([0-5]\d):([0-5]\d)\.(\d{3})$")


def format_timestamp(millis: int) -> str:
    """Render milliseconds as ``HH:MM:SS.mmm`` (hours grow past two digits)."""
    if millis < 0:
        raise ValidationException(f"Cannot render negative timestamp {millis}", error_code="INVALID_TIMESTAMP")
    hours, remainder = divmod(millis, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    seconds, ms = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{ms:03d}"


def parse_timestamp(value: str) -> int:
    match = _TIMESTAMP_RE.match(value.strip())
    if not match:
        raise ValidationException(f"Invalid WebVTT timestamp: {value!r}", error_code="INVALID_TIMESTAMP")
    hours, minutes, seconds, ms = (int(part) for part in match.groups())
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + ms


def encode_payload(objects: Sequence[TaggedObject]) -> str:
    return json.dumps(
        [obj.to_payload() for obj in objects],
        separators=(",", ":"),
        ensure_ascii=False,
    )


def render_vtt(cues: Sequence[Cue]) -> str:
    """
    Serialize cues into a WebVTT document.

    Layout: header, blank line, then per cue the index, the timing line, the
    JSON payload and a blank line. Lines are joined with ``\\n``.
    """
    lines = [HEADER, ""]
    for cue in cues:
        lines.append(str(cue.index))
        lines.append(f"{format_timestamp(cue.start_time)}{ARROW}{format_timestamp(cue.end_time)}")
        lines.append(encode_payload(cue.objects))
        lines.append("")
    return "\n".join(lines)


def _decode_objects(text: str) -> List[TaggedObject]:
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationException(f"Cue payload is not JSON: {e}", error_code="INVALID_PAYLOAD") from e
    if not isinstance(payload, list):
        raise ValidationException("Cue payload must be a JSON array", error_code="INVALID_PAYLOAD")
    return [
        TaggedObject(id=item.get("id"), name=item.get("name", ""), boxes=item.get("boxes") or [])
        for item in payload
        if isinstance(item, dict)
    ]


def parse_vtt(document: str) -> List[Cue]:
    """Read a document produced by render_vtt back into cues."""
    blocks = document.split("\n\n")
    if not blocks or blocks[0].strip() != HEADER:
        raise ValidationException("Document does not start with a WEBVTT header", error_code="INVALID_DOCUMENT")

    cues: List[Cue] = []
    for block in blocks[1:]:
        lines = [line for line in block.split("\n") if line]
        if not lines:
            continue
        if len(lines) != 3 or ARROW not in lines[1] or not lines[0].isdigit():
            raise ValidationException(f"Malformed cue block: {block!r}", error_code="INVALID_DOCUMENT")
        start, end = lines[1].split(ARROW, 1)
        cues.append(Cue(
            index=int(lines[0]),
            start_time=parse_timestamp(start),
            end_time=parse_timestamp(end),
            objects=_decode_objects(lines[2]),
        ))
    return cues
