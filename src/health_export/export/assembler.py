"""
Export assembly.

build_export is the single entry point of the export core: it completes the
workout statistics from the provider, runs the two time-series fetches
concurrently, extracts statistics, events and sub-activities inline, and
merges everything into one WorkoutExport.
There is no partial-success mode and no retry.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from health_export.export.extractors import extract_activities, extract_events, workout_type_name
from health_export.export.model import EXPORT_VERSION, WorkoutData, WorkoutExport
from health_export.export.statistics import extract_statistics, fill_statistics
from health_export.export.timeseries import fetch_heart_rate_samples, fetch_route
from health_export.provider.base import HealthProvider
from health_export.provider.records import Workout

logger = logging.getLogger(__name__)


class WorkoutNotFoundError(LookupError):
    """No workout with the requested identifier exists."""


async def build_export(
    provider: HealthProvider,
    workout: Workout,
    now: Optional[datetime] = None,
) -> WorkoutExport:
    """
    Assemble the export document for one workout.

    Args:
        provider: Source of samples and routes
        workout: The workout to export
        now: Export timestamp (defaults to the current UTC time)

    Returns:
        WorkoutExport with every signal the provider holds for the workout

    Raises:
        Whatever the provider raised. When both fetches fail, the heart-rate
        error is raised and the route error is logged.
    """
    logger.debug(f"Building export for workout {workout.id}")

    workout = await fill_statistics(provider, workout)

    # Synchronous from here until the fetches
    statistics = extract_statistics(workout)
    events = extract_events(workout)
    activities = extract_activities(workout)

    heart_rate_samples, route = await asyncio.gather(
        fetch_heart_rate_samples(provider, workout),
        fetch_route(provider, workout),
        return_exceptions=True,
    )

    if isinstance(heart_rate_samples, BaseException):
        if isinstance(route, BaseException):
            logger.warning(f"Route fetch for workout {workout.id} also failed: {route!r}")
        raise heart_rate_samples
    if isinstance(route, BaseException):
        raise route

    workout_data = WorkoutData(
        type=workout_type_name(workout.activity_type),
        source_app=workout.source_name,
        start_date=workout.start_date,
        end_date=workout.end_date,
        duration=workout.duration,
        statistics=statistics,
        heart_rate_samples=heart_rate_samples,
        route=route,
        events=events,
        activities=activities,
    )

    logger.debug(
        f"Built export for workout {workout.id}: "
        f"{len(heart_rate_samples)} heart rate samples, {len(route)} route points, "
        f"{len(events)} events, {len(activities)} activities"
    )

    return WorkoutExport(
        export_version=EXPORT_VERSION,
        export_date=now or datetime.now(timezone.utc),
        workout=workout_data,
    )


async def export_workout(
    provider: HealthProvider,
    workout_id: str,
    now: Optional[datetime] = None,
) -> WorkoutExport:
    """
    Look a workout up by identifier and build its export.

    Raises:
        WorkoutNotFoundError: If the provider has no such workout
    """
    workout = await provider.get_workout(workout_id)
    if workout is None:
        raise WorkoutNotFoundError(f"Workout '{workout_id}' not found")
    return await build_export(provider, workout, now=now)
