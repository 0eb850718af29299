"""
Event and sub-activity extraction.

Pure mappings from provider records to export records. Provider type
enumerations are open-ended, so unmapped values fall back to a sentinel tag
instead of failing.
"""

from typing import Tuple

from health_export.export.model import ActivityData, WorkoutEventData
from health_export.export.statistics import extract_statistics
from health_export.provider.records import Workout, WorkoutActivity, WorkoutEvent
from health_export.provider.types import WorkoutActivityType, WorkoutEventType

UNKNOWN_EVENT_TAG = "unknown"
OTHER_ACTIVITY_TAG = "other"

ACTIVITY_TYPE_TAGS = {
    WorkoutActivityType.RUNNING.value: "running",
    WorkoutActivityType.TRADITIONAL_STRENGTH_TRAINING.value: "strength_training",
    WorkoutActivityType.FUNCTIONAL_STRENGTH_TRAINING.value: "functional_strength",
}

EVENT_TYPE_TAGS = {
    WorkoutEventType.PAUSE.value: "pause",
    WorkoutEventType.RESUME.value: "resume",
    WorkoutEventType.LAP.value: "lap",
    WorkoutEventType.SEGMENT.value: "segment",
    WorkoutEventType.MARKER.value: "marker",
    WorkoutEventType.MOTION_PAUSED.value: "motionPaused",
    WorkoutEventType.MOTION_RESUMED.value: "motionResumed",
}


def workout_type_name(activity_type: str) -> str:
    """Normalized tag for a provider activity type ("other" when unmapped)."""
    return ACTIVITY_TYPE_TAGS.get(activity_type, OTHER_ACTIVITY_TAG)


def event_type_name(event_type: str) -> str:
    """Normalized tag for a provider event type ("unknown" when unmapped)."""
    return EVENT_TYPE_TAGS.get(event_type, UNKNOWN_EVENT_TAG)


def extract_events(workout: Workout) -> Tuple[WorkoutEventData, ...]:
    return tuple(_event_data(event) for event in workout.events)


def extract_activities(workout: Workout) -> Tuple[ActivityData, ...]:
    """Sub-activities in provider order, each with its own statistics."""
    return tuple(_activity_data(activity) for activity in workout.activities)


def _event_data(event: WorkoutEvent) -> WorkoutEventData:
    return WorkoutEventData(
        type=event_type_name(event.type),
        start_date=event.start_date,
        end_date=event.end_date,
    )


def _activity_data(activity: WorkoutActivity) -> ActivityData:
    # A reported end date is used as-is; it is not checked against start + duration.
    return ActivityData(
        type=workout_type_name(activity.activity_type),
        start_date=activity.start_date,
        end_date=activity.resolved_end_date,
        duration=activity.duration,
        statistics=extract_statistics(activity),
    )
