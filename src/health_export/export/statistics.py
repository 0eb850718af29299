"""
Statistics extraction.

Maps the provider statistics attached to a workout (or one of its
sub-activities) onto WorkoutStatistics, converting every value to the fixed
unit of its field. fill_statistics queries the provider for the kinds a
workout carries no summary for, so extraction itself stays synchronous.
"""

from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional

from health_export.export.model import StatValue, WorkoutStatistics
from health_export.provider.base import HealthProvider
from health_export.provider.records import QuantityStatistics, Workout
from health_export.provider.types import QuantityKind

# (field, quantity kind, aggregate, provider unit, label)
STATISTICS_TABLE = (
    ("active_energy_burned", QuantityKind.ACTIVE_ENERGY_BURNED, "sum", "kcal", "kcal"),
    ("distance", QuantityKind.DISTANCE_WALKING_RUNNING, "sum", "km", "km"),
    ("step_count", QuantityKind.STEP_COUNT, "sum", "count", "steps"),
    ("average_heart_rate", QuantityKind.HEART_RATE, "average", "count/min", "bpm"),
    ("max_heart_rate", QuantityKind.HEART_RATE, "maximum", "count/min", "bpm"),
    ("average_speed", QuantityKind.RUNNING_SPEED, "average", "m/s", "m/s"),
    ("average_power", QuantityKind.RUNNING_POWER, "average", "W", "W"),
)

# Kinds read by STATISTICS_TABLE, in table order
STATISTIC_KINDS = tuple(dict.fromkeys(kind for _, kind, _, _, _ in STATISTICS_TABLE))


def extract_statistics(source) -> WorkoutStatistics:
    """
    Build WorkoutStatistics from a statistics source.

    Args:
        source: A Workout or WorkoutActivity (anything with
            ``statistics_for(kind)``), already scoped to its time range

    Returns:
        WorkoutStatistics where a field is None only when the provider
        had no samples of its kind

    Raises:
        ValueError: If the provider reports a unit incompatible with the field
    """
    values = {}
    for name, kind, aggregate, unit, label in STATISTICS_TABLE:
        stat = _stat_value(source.statistics_for(kind), aggregate, unit, label)
        if stat is not None:
            values[name] = stat
    return WorkoutStatistics(**values)


def _stat_value(
    statistics: Optional[QuantityStatistics],
    aggregate: str,
    unit: str,
    label: str,
) -> Optional[StatValue]:
    if statistics is None:
        return None
    quantity = getattr(statistics, aggregate)
    if quantity is None:
        return None
    return StatValue(value=quantity.value_in(unit), unit=label)


async def fill_statistics(provider: HealthProvider, workout: Workout) -> Workout:
    """
    Complete the statistics of a workout and its sub-activities.

    Each kind without a provider summary is queried over the workout's (or
    the sub-activity's) own time range. Kinds with no samples stay absent.

    Raises:
        Whatever provider.query_statistics raised
    """
    statistics = await _query_missing(
        provider, workout.statistics, workout.start_date, workout.end_date,
    )
    activities = []
    for activity in workout.activities:
        activity_statistics = await _query_missing(
            provider, activity.statistics, activity.start_date, activity.resolved_end_date,
        )
        activities.append(replace(activity, statistics=activity_statistics))
    return replace(workout, statistics=statistics, activities=tuple(activities))


async def _query_missing(
    provider: HealthProvider,
    known: Dict[QuantityKind, QuantityStatistics],
    start: datetime,
    end: datetime,
) -> Dict[QuantityKind, QuantityStatistics]:
    statistics = dict(known)
    for kind in STATISTIC_KINDS:
        if kind in statistics:
            continue
        queried = await provider.query_statistics(kind, start, end)
        if queried is not None:
            statistics[kind] = queried
    return statistics
