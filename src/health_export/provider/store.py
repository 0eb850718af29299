"""
In-memory health provider.

Holds workouts, quantity samples and routes in plain Python containers and
answers the provider queries over them. Tests use it directly; the Apple
Health archive loader fills one from an export directory.
"""

from bisect import bisect_left, bisect_right
from collections import defaultdict
from datetime import datetime
from typing import AsyncIterator, Dict, Iterable, List, Optional, Set, Tuple

from health_export.provider.base import HealthProvider
from health_export.provider.records import (
    QuantitySample,
    QuantityStatistics,
    RouteLocation,
    Workout,
    WorkoutRoute,
)
from health_export.provider.types import CUMULATIVE_KINDS, QuantityKind
from health_export.provider.units import Quantity


class SampleStore(HealthProvider):
    """A deterministic, in-memory HealthProvider."""

    def __init__(self):
        self._workouts: Dict[str, Workout] = {}
        self._samples: Dict[QuantityKind, List[QuantitySample]] = defaultdict(list)
        # Start dates of each sorted sample list, for bisecting
        self._start_dates: Dict[QuantityKind, List[datetime]] = {}
        self._unsorted: Set[QuantityKind] = set()
        self._routes: Dict[str, WorkoutRoute] = {}
        self._route_locations: Dict[str, List[RouteLocation]] = {}

    # ── Loading ──────────────────────────────────────────────────────────

    def add_workout(self, workout: Workout) -> None:
        self._workouts[workout.id] = workout

    def add_samples(self, samples: Iterable[QuantitySample]) -> None:
        for sample in samples:
            self._samples[sample.kind].append(sample)
            self._unsorted.add(sample.kind)

    def add_route(self, route: WorkoutRoute, locations: Iterable[RouteLocation] = ()) -> None:
        self._routes[route.workout_id] = route
        self._route_locations[route.workout_id] = list(locations)

    @property
    def workout_count(self) -> int:
        return len(self._workouts)

    @property
    def sample_count(self) -> int:
        return sum(len(samples) for samples in self._samples.values())

    # ── Synchronous queries ──────────────────────────────────────────────

    def samples_in_range(
        self,
        kind: QuantityKind,
        start: datetime,
        end: datetime,
    ) -> List[QuantitySample]:
        """Samples of ``kind`` starting in ``[start, end]``, oldest first."""
        samples, start_dates = self._sorted_samples(kind)
        return samples[bisect_left(start_dates, start):bisect_right(start_dates, end)]

    def _sorted_samples(self, kind: QuantityKind) -> Tuple[List[QuantitySample], List[datetime]]:
        samples = self._samples.get(kind, [])
        if kind in self._unsorted:
            samples.sort(key=lambda s: s.start_date)
            self._start_dates[kind] = [s.start_date for s in samples]
            self._unsorted.discard(kind)
        return samples, self._start_dates.get(kind, [])

    def statistics(
        self,
        kind: QuantityKind,
        start: datetime,
        end: datetime,
    ) -> Optional[QuantityStatistics]:
        """Aggregate samples in range, expressed in the first sample's unit."""
        samples = self.samples_in_range(kind, start, end)
        if not samples:
            return None

        unit = samples[0].quantity.unit
        values = [s.quantity.value_in(unit) for s in samples]

        if kind in CUMULATIVE_KINDS:
            return QuantityStatistics(
                kind=kind,
                start_date=start,
                end_date=end,
                sum=Quantity(sum(values), unit),
            )
        return QuantityStatistics(
            kind=kind,
            start_date=start,
            end_date=end,
            average=Quantity(sum(values) / len(values), unit),
            minimum=Quantity(min(values), unit),
            maximum=Quantity(max(values), unit),
        )

    # ── HealthProvider ───────────────────────────────────────────────────

    async def fetch_workouts(
        self,
        activity_types: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Workout]:
        workouts = list(self._workouts.values())
        if activity_types is not None:
            wanted = set(activity_types)
            workouts = [w for w in workouts if w.activity_type in wanted]
        workouts.sort(key=lambda w: w.end_date, reverse=True)
        if limit is not None:
            workouts = workouts[:limit]
        return workouts

    async def get_workout(self, workout_id: str) -> Optional[Workout]:
        return self._workouts.get(workout_id)

    async def query_statistics(
        self,
        kind: QuantityKind,
        start: datetime,
        end: datetime,
    ) -> Optional[QuantityStatistics]:
        return self.statistics(kind, start, end)

    async def query_samples(
        self,
        kind: QuantityKind,
        start: datetime,
        end: datetime,
        limit: Optional[int] = None,
        ascending: bool = True,
    ) -> List[QuantitySample]:
        samples = self.samples_in_range(kind, start, end)
        if not ascending:
            samples.reverse()
        if limit is not None:
            samples = samples[:limit]
        return samples

    async def query_route(self, workout: Workout) -> Optional[WorkoutRoute]:
        return self._routes.get(workout.id)

    async def route_locations(self, route: WorkoutRoute) -> AsyncIterator[RouteLocation]:
        for location in self._route_locations.get(route.workout_id, []):
            yield location
