"""
Provider-native records.

These are the raw shapes handed across the provider boundary. Activity and
event types stay plain strings because the provider's enumerations grow
over time; normalization happens in the export layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from health_export.provider.types import QuantityKind
from health_export.provider.units import Quantity


@dataclass(frozen=True)
class QuantityStatistics:
    """Aggregates of one quantity kind over a time range.

    Cumulative kinds (energy, distance, steps) carry ``sum``; discrete kinds
    (heart rate, speed, power) carry ``average``/``minimum``/``maximum``.
    """
    kind: QuantityKind
    start_date: datetime
    end_date: datetime
    sum: Optional[Quantity] = None
    average: Optional[Quantity] = None
    minimum: Optional[Quantity] = None
    maximum: Optional[Quantity] = None


@dataclass(frozen=True)
class QuantitySample:
    kind: QuantityKind
    start_date: datetime
    end_date: datetime
    quantity: Quantity
    source_name: str = ""


@dataclass(frozen=True)
class WorkoutEvent:
    """A discrete workout event. ``end_date`` is None for instantaneous events."""
    type: str
    start_date: datetime
    end_date: Optional[datetime] = None


@dataclass(frozen=True)
class WorkoutActivity:
    """A sub-activity segment of a multi-segment workout."""
    activity_type: str
    start_date: datetime
    duration: float
    end_date: Optional[datetime] = None
    statistics: Dict[QuantityKind, QuantityStatistics] = field(default_factory=dict)

    @property
    def resolved_end_date(self) -> datetime:
        """End date, falling back to start + duration when not reported."""
        if self.end_date is not None:
            return self.end_date
        return self.start_date + timedelta(seconds=self.duration)

    def statistics_for(self, kind: QuantityKind) -> Optional[QuantityStatistics]:
        return self.statistics.get(kind)


@dataclass(frozen=True)
class Workout:
    """A completed workout as recorded by the provider."""
    id: str
    activity_type: str
    source_name: str
    start_date: datetime
    end_date: datetime
    duration: float
    statistics: Dict[QuantityKind, QuantityStatistics] = field(default_factory=dict)
    events: Tuple[WorkoutEvent, ...] = ()
    activities: Tuple[WorkoutActivity, ...] = ()

    def statistics_for(self, kind: QuantityKind) -> Optional[QuantityStatistics]:
        return self.statistics.get(kind)


@dataclass(frozen=True)
class RouteLocation:
    """A raw GPS location.

    Negative ``horizontal_accuracy`` or ``speed`` means the value is
    unavailable.
    """
    latitude: float
    longitude: float
    altitude: float
    timestamp: datetime
    horizontal_accuracy: float = -1.0
    speed: float = -1.0


@dataclass(frozen=True)
class WorkoutRoute:
    """The route series attached to a workout (at most one per workout)."""
    workout_id: str
    start_date: datetime
    end_date: datetime
    file_path: Optional[str] = None
