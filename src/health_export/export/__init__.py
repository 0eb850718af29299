"""
Workout export core.

Turns one provider workout into a versioned, self-contained JSON document.

Modules:
    model      : the WorkoutExport records
    statistics : workout / sub-activity statistics
    timeseries : heart-rate and route fetchers
    extractors : events and sub-activities
    assembler  : build_export, the entry point
    document   : canonical JSON and filename
"""

# Model
from health_export.export.model import (
    EXPORT_VERSION,
    WorkoutExport,
    WorkoutData,
    WorkoutStatistics,
    StatValue,
    HeartRateSample,
    RoutePoint,
    WorkoutEventData,
    ActivityData,
)

# Extraction
from health_export.export.statistics import extract_statistics, fill_statistics
from health_export.export.timeseries import fetch_heart_rate_samples, fetch_route
from health_export.export.extractors import (
    extract_events,
    extract_activities,
    workout_type_name,
    event_type_name,
)

# Assembly
from health_export.export.assembler import build_export, export_workout, WorkoutNotFoundError

# Serialization
from health_export.export.document import (
    serialize,
    encode_document,
    export_filename,
    parse_document,
    SerializationError,
)

__all__ = [
    # Model
    "EXPORT_VERSION", "WorkoutExport", "WorkoutData", "WorkoutStatistics", "StatValue",
    "HeartRateSample", "RoutePoint", "WorkoutEventData", "ActivityData",
    # Extraction
    "extract_statistics", "fill_statistics", "fetch_heart_rate_samples", "fetch_route",
    "extract_events", "extract_activities", "workout_type_name", "event_type_name",
    # Assembly
    "build_export", "export_workout", "WorkoutNotFoundError",
    # Serialization
    "serialize", "encode_document", "export_filename", "parse_document", "SerializationError",
]
