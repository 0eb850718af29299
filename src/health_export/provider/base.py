"""
Health provider interface.

The export core only talks to a provider through these coroutines, so any
data source (an Apple Health archive, an in-memory store in tests) can be
plugged in.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import AsyncIterator, Iterable, List, Optional

from health_export.provider.records import (
    QuantitySample,
    QuantityStatistics,
    RouteLocation,
    Workout,
    WorkoutRoute,
)
from health_export.provider.types import QuantityKind


class ProviderError(Exception):
    """A provider query failed (store unavailable, unreadable data, ...).

    The underlying exception, if any, is chained as ``__cause__``.
    """


class HealthProvider(ABC):
    """Read-only, asynchronous access to workouts and their samples."""

    @abstractmethod
    async def fetch_workouts(
        self,
        activity_types: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Workout]:
        """Completed workouts, most recent end date first.

        Args:
            activity_types: Raw activity types to keep (None keeps all)
            limit: Maximum number of workouts returned
        """

    @abstractmethod
    async def get_workout(self, workout_id: str) -> Optional[Workout]:
        """Look a workout up by identifier. Returns None when unknown."""

    @abstractmethod
    async def query_statistics(
        self,
        kind: QuantityKind,
        start: datetime,
        end: datetime,
    ) -> Optional[QuantityStatistics]:
        """Aggregate samples of ``kind`` in ``[start, end]``.

        Returns None when no sample exists in the range.
        """

    @abstractmethod
    async def query_samples(
        self,
        kind: QuantityKind,
        start: datetime,
        end: datetime,
        limit: Optional[int] = None,
        ascending: bool = True,
    ) -> List[QuantitySample]:
        """Raw samples of ``kind`` starting in ``[start, end]``, sorted by start date."""

    @abstractmethod
    async def query_route(self, workout: Workout) -> Optional[WorkoutRoute]:
        """The route recorded with ``workout``, or None."""

    @abstractmethod
    def route_locations(self, route: WorkoutRoute) -> AsyncIterator[RouteLocation]:
        """Stream the locations of ``route`` in chronological order."""
