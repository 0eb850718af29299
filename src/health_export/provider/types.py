"""
Health provider types, enums, and constants.

All provider-native identifiers live here. Values match the HealthKit
identifiers that appear verbatim in Apple Health exports.
"""

from enum import Enum


class QuantityKind(Enum):
    """Quantity types read by the exporter."""
    HEART_RATE = "HKQuantityTypeIdentifierHeartRate"
    ACTIVE_ENERGY_BURNED = "HKQuantityTypeIdentifierActiveEnergyBurned"
    DISTANCE_WALKING_RUNNING = "HKQuantityTypeIdentifierDistanceWalkingRunning"
    STEP_COUNT = "HKQuantityTypeIdentifierStepCount"
    RUNNING_SPEED = "HKQuantityTypeIdentifierRunningSpeed"
    RUNNING_POWER = "HKQuantityTypeIdentifierRunningPower"


class WorkoutActivityType(str, Enum):
    """Known workout activity types.

    The provider's enumeration is open-ended: raw records carry plain
    strings and may hold values missing from this list.
    """
    RUNNING = "HKWorkoutActivityTypeRunning"
    TRADITIONAL_STRENGTH_TRAINING = "HKWorkoutActivityTypeTraditionalStrengthTraining"
    FUNCTIONAL_STRENGTH_TRAINING = "HKWorkoutActivityTypeFunctionalStrengthTraining"
    WALKING = "HKWorkoutActivityTypeWalking"
    CYCLING = "HKWorkoutActivityTypeCycling"
    HIKING = "HKWorkoutActivityTypeHiking"
    SWIMMING = "HKWorkoutActivityTypeSwimming"
    OTHER = "HKWorkoutActivityTypeOther"


class WorkoutEventType(str, Enum):
    """Known workout event types (open-ended, like activity types)."""
    PAUSE = "HKWorkoutEventTypePause"
    RESUME = "HKWorkoutEventTypeResume"
    LAP = "HKWorkoutEventTypeLap"
    MARKER = "HKWorkoutEventTypeMarker"
    MOTION_PAUSED = "HKWorkoutEventTypeMotionPaused"
    MOTION_RESUMED = "HKWorkoutEventTypeMotionResumed"
    SEGMENT = "HKWorkoutEventTypeSegment"
    PAUSE_OR_RESUME_REQUEST = "HKWorkoutEventTypePauseOrResumeRequest"


# Workouts listed by default (most recent first)
EXPORTABLE_ACTIVITY_TYPES = (
    WorkoutActivityType.RUNNING.value,
    WorkoutActivityType.TRADITIONAL_STRENGTH_TRAINING.value,
    WorkoutActivityType.FUNCTIONAL_STRENGTH_TRAINING.value,
)

DEFAULT_WORKOUT_LIMIT = 50

# Provider-side cap on heart-rate samples per workout
MAX_HEART_RATE_SAMPLES = 5000

# Kinds aggregated by summation; every other kind is averaged
CUMULATIVE_KINDS = frozenset({
    QuantityKind.ACTIVE_ENERGY_BURNED,
    QuantityKind.DISTANCE_WALKING_RUNNING,
    QuantityKind.STEP_COUNT,
})
