"""
Export document serialization.

Canonical JSON (sorted keys, 2-space indentation, UTF-8) plus the proposed
filename. Writing the bytes anywhere is the caller's job.
"""

import json
from datetime import tzinfo
from typing import Optional, Tuple

from health_export.export.model import WorkoutExport


class SerializationError(Exception):
    """The document could not be encoded or decoded.

    For an assembled export this means a model invariant was broken (naive
    datetime, non-finite number, ...).
    """


def encode_document(export: WorkoutExport) -> bytes:
    """Encode a WorkoutExport as canonical JSON bytes.

    Raises:
        SerializationError: If any value cannot be represented
    """
    try:
        text = json.dumps(
            export.to_dict(),
            sort_keys=True,
            indent=2,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise SerializationError(f"Cannot encode workout export: {e}") from e
    return text.encode("utf-8")


def export_filename(export: WorkoutExport, tz: Optional[tzinfo] = None) -> str:
    """Proposed filename: workout-{type}-{yyyy-MM-dd}.json.

    The day is the workout start date in ``tz``, or in the offset the start
    date was recorded with when ``tz`` is None.

    Encoded instants are UTC, so an export read back with parse_document has
    lost the recorded offset. Pass ``tz`` to name the original and the
    parsed export alike.
    """
    start = export.workout.start_date
    if tz is not None:
        start = start.astimezone(tz)
    return f"workout-{export.workout.type}-{start.strftime('%Y-%m-%d')}.json"


def serialize(export: WorkoutExport, tz: Optional[tzinfo] = None) -> Tuple[bytes, str]:
    """
    Encode an export and name it.

    Returns:
        (document bytes, filename)

    Raises:
        SerializationError: If the export cannot be encoded
    """
    return encode_document(export), export_filename(export, tz)


def parse_document(data: bytes) -> WorkoutExport:
    """Read a document produced by encode_document back into the model.

    Instants come back in UTC; the offsets they were recorded with are not
    part of the document.

    Raises:
        SerializationError: If the bytes are not a valid export document
    """
    try:
        return WorkoutExport.from_dict(json.loads(data))
    except (TypeError, ValueError, KeyError) as e:
        raise SerializationError(f"Invalid workout export document: {e}") from e
