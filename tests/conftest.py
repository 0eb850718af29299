"""
Shared pytest fixtures for Health Export testing.
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from health_export.provider import (
    Quantity,
    QuantityKind,
    QuantitySample,
    QuantityStatistics,
    SampleStore,
    Workout,
    WorkoutActivityType,
    WorkoutEvent,
    WorkoutEventType,
)


def _at(hour, minute=0, second=0):
    return datetime(2024, 3, 7, hour, minute, second, tzinfo=timezone.utc)


@pytest.fixture
def at():
    """Build a UTC datetime on 2024-03-07: at(8, 15) -> 08:15:00Z."""
    return _at


def get_tool_result_text(result):
    """Extract text from tool result.

    FastMCP call_tool returns a tuple (list_of_TextContent, metadata_dict)
    in recent versions and a plain list in older ones.
    """
    if isinstance(result, tuple) and len(result) > 0:
        result = result[0]
    if isinstance(result, list) and len(result) > 0:
        if hasattr(result[0], 'text'):
            return result[0].text
    return str(result)


@pytest.fixture
def tool_text():
    return get_tool_result_text


@pytest.fixture
def running_workout():
    """A 30 minute run with one lap event and full statistics."""
    return Workout(
        id="run-1",
        activity_type=WorkoutActivityType.RUNNING.value,
        source_name="Apple Watch",
        start_date=_at(8, 0),
        end_date=_at(8, 30),
        duration=1800.0,
        statistics={
            QuantityKind.ACTIVE_ENERGY_BURNED: QuantityStatistics(
                kind=QuantityKind.ACTIVE_ENERGY_BURNED,
                start_date=_at(8, 0), end_date=_at(8, 30),
                sum=Quantity(320.5, "kcal"),
            ),
            QuantityKind.DISTANCE_WALKING_RUNNING: QuantityStatistics(
                kind=QuantityKind.DISTANCE_WALKING_RUNNING,
                start_date=_at(8, 0), end_date=_at(8, 30),
                sum=Quantity(5000.0, "m"),
            ),
            QuantityKind.HEART_RATE: QuantityStatistics(
                kind=QuantityKind.HEART_RATE,
                start_date=_at(8, 0), end_date=_at(8, 30),
                average=Quantity(148.0, "count/min"),
                minimum=Quantity(95.0, "count/min"),
                maximum=Quantity(172.0, "count/min"),
            ),
        },
        events=(
            WorkoutEvent(type=WorkoutEventType.LAP.value, start_date=_at(8, 10)),
        ),
    )


@pytest.fixture
def store(running_workout):
    """SampleStore holding the running workout and one heart-rate sample."""
    store = SampleStore()
    store.add_workout(running_workout)
    store.add_samples([
        QuantitySample(
            kind=QuantityKind.HEART_RATE,
            start_date=_at(8, 0),
            end_date=_at(8, 0),
            quantity=Quantity(142.0, "count/min"),
            source_name="Apple Watch",
        ),
    ])
    return store


@pytest.fixture(autouse=True)
def mock_get_provider(store):
    """Auto-mock provider_factory.get_provider in the tool modules.

    Yields the mock function (not the provider) so tests can set
    side_effect for error scenarios like a missing export.
    """
    get_provider_fn = AsyncMock(return_value=store)

    with patch("health_export.workouts.get_provider", get_provider_fn):
        yield get_provider_fn
