"""
Apple Health export archive provider.

Reads the directory produced by "Export All Health Data" on iOS:

    apple_health_export/
        export.xml
        workout-routes/route_2024-03-07_8.15am.gpx

Workouts, their events, sub-activities and statistics, and the quantity
records we need are loaded up front. Route GPX files are parsed lazily, the
first time a route is streamed. Statistics a workout carries no
<WorkoutStatistics> for are aggregated from the records on request
(query_statistics).
"""

import asyncio
import hashlib
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional, Union

from health_export.provider.base import ProviderError
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
from health_export.provider.types import QuantityKind
from health_export.provider.units import Quantity, duration_seconds

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "export.xml"

# Apple Health writes local time with a numeric offset: 2024-03-07 08:15:00 -0800
APPLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"

_KINDS_BY_IDENTIFIER = {kind.value: kind for kind in QuantityKind}


def parse_apple_date(value: str) -> datetime:
    """Parse an export.xml timestamp, keeping its UTC offset."""
    return datetime.strptime(value, APPLE_DATE_FORMAT)


def parse_gpx_time(value: str) -> datetime:
    """Parse a GPX ``<time>`` value (ISO-8601, usually with a Z suffix)."""
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def make_workout_id(activity_type: str, start: str, end: str, source: str) -> str:
    """Stable identifier for a workout.

    Export workouts carry no UUID, so the identifier is derived from the
    attributes that make a workout unique.
    """
    key = f"{activity_type}|{start}|{end}|{source}"
    return hashlib.md5(key.encode()).hexdigest()


def parse_gpx(path: Union[str, Path]) -> List[RouteLocation]:
    """Read every track point of a GPX file, in file order.

    Missing ``speed``/``hAcc`` extensions are reported as -1 (unavailable),
    the same sentinel the device uses.
    """
    locations = []
    for _, elem in ET.iterparse(str(path), events=("end",)):
        if _local(elem.tag) != "trkpt":
            continue

        values = {_local(child.tag): (child.text or "").strip() for child in elem.iter()}
        locations.append(RouteLocation(
            latitude=float(elem.get("lat")),
            longitude=float(elem.get("lon")),
            altitude=float(values.get("ele") or 0.0),
            timestamp=parse_gpx_time(values["time"]),
            horizontal_accuracy=float(values.get("hAcc") or -1.0),
            speed=float(values.get("speed") or -1.0),
        ))
        elem.clear()
    return locations


class ArchiveProvider(SampleStore):
    """HealthProvider backed by an unpacked Apple Health export."""

    def __init__(self, root: Path):
        super().__init__()
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ArchiveProvider":
        """
        Load an export directory (or the path of its export.xml).

        Raises:
            ProviderError: If the export cannot be read or parsed
        """
        path = Path(path)
        xml_path = path / EXPORT_FILENAME if path.is_dir() else path

        provider = cls(xml_path.parent)
        try:
            provider._parse_export(xml_path)
        except (OSError, ET.ParseError, ValueError) as e:
            raise ProviderError(f"Cannot read health export {xml_path}: {e}") from e

        logger.info(
            f"Loaded {provider.workout_count} workouts and "
            f"{provider.sample_count} samples from {xml_path}"
        )
        return provider

    def _parse_export(self, xml_path: Path) -> None:
        root = None
        depth = 0
        for event, elem in ET.iterparse(str(xml_path), events=("start", "end")):
            if event == "start":
                if root is None:
                    root = elem
                depth += 1
                continue

            depth -= 1
            if elem.tag == "Record":
                sample = _parse_record(elem)
                if sample is not None:
                    self.add_samples([sample])
            elif elem.tag == "Workout":
                workout, route_element = _parse_workout(elem)
                self.add_workout(workout)
                if route_element is not None:
                    self.add_route(self._make_route(workout, route_element))

            # Only the element being built stays attached to <HealthData>
            if depth == 1:
                root.clear()

    def _make_route(self, workout: Workout, element: dict) -> WorkoutRoute:
        return WorkoutRoute(
            workout_id=workout.id,
            start_date=element.get("start_date") or workout.start_date,
            end_date=element.get("end_date") or workout.end_date,
            file_path=str(self._root / element["path"].lstrip("/")),
        )

    async def route_locations(self, route: WorkoutRoute) -> AsyncIterator[RouteLocation]:
        if route.file_path is None:
            async for location in super().route_locations(route):
                yield location
            return

        try:
            locations = await asyncio.to_thread(parse_gpx, route.file_path)
        except (OSError, ET.ParseError, ValueError, KeyError) as e:
            raise ProviderError(f"Cannot read route {route.file_path}: {e}") from e

        for location in locations:
            yield location


async def load_archive(path: Union[str, Path]) -> ArchiveProvider:
    """Load an export archive without blocking the event loop."""
    return await asyncio.to_thread(ArchiveProvider.load, path)


# ── Element parsing ──────────────────────────────────────────────────────


def _local(tag: str) -> str:
    """Strip an XML namespace from a tag."""
    return tag.rsplit("}", 1)[-1]


def _parse_record(elem) -> Optional[QuantitySample]:
    kind = _KINDS_BY_IDENTIFIER.get(elem.get("type"))
    if kind is None or elem.get("value") is None:
        return None
    return QuantitySample(
        kind=kind,
        start_date=parse_apple_date(elem.get("startDate")),
        end_date=parse_apple_date(elem.get("endDate")),
        quantity=Quantity(float(elem.get("value")), elem.get("unit", "")),
        source_name=elem.get("sourceName", ""),
    )


def _parse_duration(elem, start: datetime, end: Optional[datetime]) -> float:
    if elem.get("duration") is not None:
        return duration_seconds(float(elem.get("duration")), elem.get("durationUnit", "min"))
    if end is not None:
        return (end - start).total_seconds()
    return 0.0


def _parse_statistics(elem) -> Dict[QuantityKind, QuantityStatistics]:
    statistics = {}
    for stats_elem in elem.findall("WorkoutStatistics"):
        kind = _KINDS_BY_IDENTIFIER.get(stats_elem.get("type"))
        if kind is None:
            continue
        unit = stats_elem.get("unit", "")
        statistics[kind] = QuantityStatistics(
            kind=kind,
            start_date=parse_apple_date(stats_elem.get("startDate")),
            end_date=parse_apple_date(stats_elem.get("endDate")),
            sum=_quantity(stats_elem, "sum", unit),
            average=_quantity(stats_elem, "average", unit),
            minimum=_quantity(stats_elem, "minimum", unit),
            maximum=_quantity(stats_elem, "maximum", unit),
        )
    return statistics


def _quantity(elem, attribute: str, unit: str) -> Optional[Quantity]:
    value = elem.get(attribute)
    if value is None:
        return None
    return Quantity(float(value), unit)


def _parse_event(elem) -> WorkoutEvent:
    start = parse_apple_date(elem.get("date"))
    duration = _parse_duration(elem, start, None)
    return WorkoutEvent(
        type=elem.get("type", ""),
        start_date=start,
        end_date=start + timedelta(seconds=duration) if duration > 0 else None,
    )


def _parse_activity(elem, parent_type: str) -> WorkoutActivity:
    start = parse_apple_date(elem.get("startDate"))
    end = parse_apple_date(elem.get("endDate")) if elem.get("endDate") else None
    return WorkoutActivity(
        activity_type=elem.get("workoutActivityType", parent_type),
        start_date=start,
        end_date=end,
        duration=_parse_duration(elem, start, end),
        statistics=_parse_statistics(elem),
    )


def _parse_workout(elem):
    """Build a Workout from a ``<Workout>`` element.

    Returns:
        (workout, route) where route is a dict describing the
        ``<WorkoutRoute>`` child, or None
    """
    activity_type = elem.get("workoutActivityType", "")
    source = elem.get("sourceName", "")
    start = parse_apple_date(elem.get("startDate"))
    end = parse_apple_date(elem.get("endDate"))

    workout = Workout(
        id=make_workout_id(activity_type, elem.get("startDate"), elem.get("endDate"), source),
        activity_type=activity_type,
        source_name=source,
        start_date=start,
        end_date=end,
        duration=_parse_duration(elem, start, end),
        statistics=_parse_statistics(elem),
        events=tuple(_parse_event(e) for e in elem.findall("WorkoutEvent")),
        activities=tuple(_parse_activity(a, activity_type) for a in elem.findall("WorkoutActivity")),
    )

    route = None
    route_elem = elem.find("WorkoutRoute")
    file_ref = route_elem.find("FileReference") if route_elem is not None else None
    if file_ref is not None and file_ref.get("path"):
        route = {
            "path": file_ref.get("path"),
            "start_date": parse_apple_date(route_elem.get("startDate")) if route_elem.get("startDate") else None,
            "end_date": parse_apple_date(route_elem.get("endDate")) if route_elem.get("endDate") else None,
        }

    return workout, route
