"""
Health data provider layer.

Typed, read-only access to workouts, quantity samples and routes. The
export core depends only on the HealthProvider interface; SampleStore and
ArchiveProvider are the two implementations shipped here.
"""

from health_export.provider.base import HealthProvider, ProviderError
from health_export.provider.records import (
    QuantitySample,
    QuantityStatistics,
    RouteLocation,
    Workout,
    WorkoutActivity,
    WorkoutEvent,
    WorkoutRoute,
)
from health_export.provider.store import SampleStore
from health_export.provider.archive import ArchiveProvider, load_archive
from health_export.provider.types import (
    QuantityKind,
    WorkoutActivityType,
    WorkoutEventType,
    EXPORTABLE_ACTIVITY_TYPES,
    DEFAULT_WORKOUT_LIMIT,
    MAX_HEART_RATE_SAMPLES,
)
from health_export.provider.units import Quantity

__all__ = [
    "HealthProvider",
    "ProviderError",
    "SampleStore",
    "ArchiveProvider",
    "load_archive",
    "Quantity",
    "QuantitySample",
    "QuantityStatistics",
    "RouteLocation",
    "Workout",
    "WorkoutActivity",
    "WorkoutEvent",
    "WorkoutRoute",
    "QuantityKind",
    "WorkoutActivityType",
    "WorkoutEventType",
    "EXPORTABLE_ACTIVITY_TYPES",
    "DEFAULT_WORKOUT_LIMIT",
    "MAX_HEART_RATE_SAMPLES",
]
