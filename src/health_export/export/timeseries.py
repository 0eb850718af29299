"""
Time-series fetchers.

Both fetchers are independent provider round trips. Each builds and returns
its own tuple; neither touches shared state, so the assembler can run them
concurrently.
"""

import logging
from typing import Optional, Tuple

from health_export.export.model import HeartRateSample, RoutePoint
from health_export.provider.base import HealthProvider
from health_export.provider.records import RouteLocation, Workout
from health_export.provider.types import MAX_HEART_RATE_SAMPLES, QuantityKind

logger = logging.getLogger(__name__)


async def fetch_heart_rate_samples(
    provider: HealthProvider,
    workout: Workout,
) -> Tuple[HeartRateSample, ...]:
    """Heart-rate samples recorded during the workout, oldest first."""
    samples = await provider.query_samples(
        QuantityKind.HEART_RATE,
        workout.start_date,
        workout.end_date,
        limit=MAX_HEART_RATE_SAMPLES,
        ascending=True,
    )
    logger.debug(f"Fetched {len(samples)} heart rate samples for workout {workout.id}")
    return tuple(
        HeartRateSample(date=s.start_date, bpm=s.quantity.value_in("count/min"))
        for s in samples
    )


async def fetch_route(provider: HealthProvider, workout: Workout) -> Tuple[RoutePoint, ...]:
    """GPS points of the workout route, or an empty tuple when none was recorded."""
    route = await provider.query_route(workout)
    if route is None:
        return ()

    points = []
    async for location in provider.route_locations(route):
        points.append(to_route_point(location))
    logger.debug(f"Fetched {len(points)} route points for workout {workout.id}")
    return tuple(points)


def to_route_point(location: RouteLocation) -> RoutePoint:
    """Convert a raw location, dropping negative (unavailable) accuracy and speed."""
    return RoutePoint(
        latitude=location.latitude,
        longitude=location.longitude,
        altitude=location.altitude,
        timestamp=location.timestamp,
        horizontal_accuracy=_non_negative(location.horizontal_accuracy),
        speed=_non_negative(location.speed),
    )


def _non_negative(value: Optional[float]) -> Optional[float]:
    if value is None or value < 0:
        return None
    return value
