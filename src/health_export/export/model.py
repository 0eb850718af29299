"""
Export document model.

Immutable records making up a WorkoutExport. ``to_dict`` produces the
JSON-ready shape (camelCase keys, ISO-8601 instants, absent optionals
omitted) and ``from_dict`` reads it back.

EXPORT_VERSION is the compatibility contract with consumers: bump it
whenever a field is added, removed or retyped in any record below.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

EXPORT_VERSION = "1.0"


def format_instant(value: datetime) -> str:
    """Encode an aware datetime as ISO-8601 UTC with a Z suffix.

    Fractional seconds are written only when non-zero.

    Raises:
        ValueError: If the datetime is naive
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"Naive datetime {value.isoformat()} has no timezone")
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_instant(value: str) -> datetime:
    """Inverse of format_instant."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class StatValue:
    """A converted statistic with its fixed unit label."""
    value: float
    unit: str

    def to_dict(self) -> dict:
        return {"value": self.value, "unit": self.unit}

    @classmethod
    def from_dict(cls, d: dict) -> "StatValue":
        return cls(value=float(d["value"]), unit=d["unit"])


# (attribute, JSON key) for every WorkoutStatistics field
STATISTIC_FIELDS = (
    ("active_energy_burned", "activeEnergyBurned"),
    ("distance", "distance"),
    ("step_count", "stepCount"),
    ("average_heart_rate", "averageHeartRate"),
    ("max_heart_rate", "maxHeartRate"),
    ("average_speed", "averageSpeed"),
    ("average_power", "averagePower"),
)


@dataclass(frozen=True)
class WorkoutStatistics:
    """Summary statistics. None means no samples, which is not the same as zero."""
    active_energy_burned: Optional[StatValue] = None
    distance: Optional[StatValue] = None
    step_count: Optional[StatValue] = None
    average_heart_rate: Optional[StatValue] = None
    max_heart_rate: Optional[StatValue] = None
    average_speed: Optional[StatValue] = None
    average_power: Optional[StatValue] = None

    def to_dict(self) -> dict:
        result = {}
        for attribute, key in STATISTIC_FIELDS:
            stat = getattr(self, attribute)
            if stat is not None:
                result[key] = stat.to_dict()
        return result

    @classmethod
    def from_dict(cls, d: dict) -> "WorkoutStatistics":
        return cls(**{
            attribute: StatValue.from_dict(d[key])
            for attribute, key in STATISTIC_FIELDS
            if d.get(key) is not None
        })


@dataclass(frozen=True)
class HeartRateSample:
    date: datetime
    bpm: float

    def to_dict(self) -> dict:
        return {"date": format_instant(self.date), "bpm": self.bpm}

    @classmethod
    def from_dict(cls, d: dict) -> "HeartRateSample":
        return cls(date=parse_instant(d["date"]), bpm=float(d["bpm"]))


@dataclass(frozen=True)
class RoutePoint:
    """A GPS point. Accuracy and speed are None when the device had no value."""
    latitude: float
    longitude: float
    altitude: float
    timestamp: datetime
    horizontal_accuracy: Optional[float] = None
    speed: Optional[float] = None

    def to_dict(self) -> dict:
        result = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "altitude": self.altitude,
            "timestamp": format_instant(self.timestamp),
        }
        if self.horizontal_accuracy is not None:
            result["horizontalAccuracy"] = self.horizontal_accuracy
        if self.speed is not None:
            result["speed"] = self.speed
        return result

    @classmethod
    def from_dict(cls, d: dict) -> "RoutePoint":
        return cls(
            latitude=float(d["latitude"]),
            longitude=float(d["longitude"]),
            altitude=float(d["altitude"]),
            timestamp=parse_instant(d["timestamp"]),
            horizontal_accuracy=d.get("horizontalAccuracy"),
            speed=d.get("speed"),
        )


@dataclass(frozen=True)
class WorkoutEventData:
    type: str
    start_date: datetime
    end_date: Optional[datetime] = None

    def to_dict(self) -> dict:
        result = {"type": self.type, "startDate": format_instant(self.start_date)}
        if self.end_date is not None:
            result["endDate"] = format_instant(self.end_date)
        return result

    @classmethod
    def from_dict(cls, d: dict) -> "WorkoutEventData":
        return cls(
            type=d["type"],
            start_date=parse_instant(d["startDate"]),
            end_date=parse_instant(d["endDate"]) if d.get("endDate") else None,
        )


@dataclass(frozen=True)
class ActivityData:
    type: str
    start_date: datetime
    end_date: datetime
    duration: float
    statistics: WorkoutStatistics = field(default_factory=WorkoutStatistics)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "startDate": format_instant(self.start_date),
            "endDate": format_instant(self.end_date),
            "duration": self.duration,
            "statistics": self.statistics.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "ActivityData":
        return cls(
            type=d["type"],
            start_date=parse_instant(d["startDate"]),
            end_date=parse_instant(d["endDate"]),
            duration=float(d["duration"]),
            statistics=WorkoutStatistics.from_dict(d.get("statistics", {})),
        )


@dataclass(frozen=True)
class WorkoutData:
    """One workout with every exported signal.

    ``duration`` comes from the provider and is not recomputed from the
    dates; pause accounting can make the two differ.
    """
    type: str
    source_app: str
    start_date: datetime
    end_date: datetime
    duration: float
    statistics: WorkoutStatistics = field(default_factory=WorkoutStatistics)
    heart_rate_samples: Tuple[HeartRateSample, ...] = ()
    route: Tuple[RoutePoint, ...] = ()
    events: Tuple[WorkoutEventData, ...] = ()
    activities: Tuple[ActivityData, ...] = ()

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "sourceApp": self.source_app,
            "startDate": format_instant(self.start_date),
            "endDate": format_instant(self.end_date),
            "duration": self.duration,
            "statistics": self.statistics.to_dict(),
            "heartRateSamples": [s.to_dict() for s in self.heart_rate_samples],
            "route": [p.to_dict() for p in self.route],
            "events": [e.to_dict() for e in self.events],
            "activities": [a.to_dict() for a in self.activities],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "WorkoutData":
        return cls(
            type=d["type"],
            source_app=d["sourceApp"],
            start_date=parse_instant(d["startDate"]),
            end_date=parse_instant(d["endDate"]),
            duration=float(d["duration"]),
            statistics=WorkoutStatistics.from_dict(d.get("statistics", {})),
            heart_rate_samples=tuple(HeartRateSample.from_dict(s) for s in d.get("heartRateSamples", [])),
            route=tuple(RoutePoint.from_dict(p) for p in d.get("route", [])),
            events=tuple(WorkoutEventData.from_dict(e) for e in d.get("events", [])),
            activities=tuple(ActivityData.from_dict(a) for a in d.get("activities", [])),
        )


@dataclass(frozen=True)
class WorkoutExport:
    """The versioned export document."""
    export_version: str
    export_date: datetime
    workout: WorkoutData

    def to_dict(self) -> dict:
        return {
            "exportVersion": self.export_version,
            "exportDate": format_instant(self.export_date),
            "workout": self.workout.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "WorkoutExport":
        return cls(
            export_version=d["exportVersion"],
            export_date=parse_instant(d["exportDate"]),
            workout=WorkoutData.from_dict(d["workout"]),
        )
