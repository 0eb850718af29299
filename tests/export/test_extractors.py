"""Tests for export/extractors.py (events, sub-activities, type tags)."""

from dataclasses import replace
from datetime import timedelta

import pytest

from health_export.export.extractors import (
    event_type_name,
    extract_activities,
    extract_events,
    workout_type_name,
)
from health_export.export.model import StatValue, WorkoutStatistics
from health_export.provider import (
    Quantity,
    QuantityKind,
    QuantityStatistics,
    WorkoutActivity,
    WorkoutActivityType,
    WorkoutEvent,
    WorkoutEventType,
)


class TestTypeNames:
    @pytest.mark.parametrize("raw, tag", [
        (WorkoutActivityType.RUNNING.value, "running"),
        (WorkoutActivityType.TRADITIONAL_STRENGTH_TRAINING.value, "strength_training"),
        (WorkoutActivityType.FUNCTIONAL_STRENGTH_TRAINING.value, "functional_strength"),
        (WorkoutActivityType.WALKING.value, "other"),
        (WorkoutActivityType.CYCLING.value, "other"),
        (WorkoutActivityType.HIKING.value, "other"),
        (WorkoutActivityType.SWIMMING.value, "other"),
        (WorkoutActivityType.OTHER.value, "other"),
        ("HKWorkoutActivityTypeUnderwaterHockey", "other"),
        ("", "other"),
    ])
    def test_workout_type_name(self, raw, tag):
        assert workout_type_name(raw) == tag

    @pytest.mark.parametrize("raw, tag", [
        (WorkoutEventType.PAUSE.value, "pause"),
        (WorkoutEventType.RESUME.value, "resume"),
        (WorkoutEventType.LAP.value, "lap"),
        (WorkoutEventType.SEGMENT.value, "segment"),
        (WorkoutEventType.MARKER.value, "marker"),
        (WorkoutEventType.MOTION_PAUSED.value, "motionPaused"),
        (WorkoutEventType.MOTION_RESUMED.value, "motionResumed"),
        (WorkoutEventType.PAUSE_OR_RESUME_REQUEST.value, "unknown"),
        ("HKWorkoutEventTypeTeleport", "unknown"),
    ])
    def test_event_type_name(self, raw, tag):
        assert event_type_name(raw) == tag


class TestEvents:
    def test_provider_order_and_optional_end(self, at, running_workout):
        workout = replace(running_workout, events=(
            WorkoutEvent(WorkoutEventType.PAUSE.value, at(8, 12), at(8, 14)),
            WorkoutEvent(WorkoutEventType.LAP.value, at(8, 10)),
            WorkoutEvent("HKWorkoutEventTypeSomethingNew", at(8, 20)),
        ))

        events = extract_events(workout)

        assert [e.type for e in events] == ["pause", "lap", "unknown"]
        assert events[0].end_date == at(8, 14)
        assert events[1].end_date is None

    def test_no_events(self, running_workout):
        assert extract_events(replace(running_workout, events=())) == ()


class TestActivities:
    def test_single_segment_workout_has_none(self, running_workout):
        assert extract_activities(running_workout) == ()

    def test_end_date_fallback(self, at, running_workout):
        workout = replace(running_workout, activities=(
            WorkoutActivity(WorkoutActivityType.RUNNING.value, at(8), duration=900.0),
        ))

        (activity,) = extract_activities(workout)

        assert activity.type == "running"
        assert activity.end_date == at(8) + timedelta(seconds=900)
        assert activity.duration == 900.0
        assert activity.statistics == WorkoutStatistics()

    def test_reported_end_date_used_as_is(self, at, running_workout):
        workout = replace(running_workout, activities=(
            WorkoutActivity(WorkoutActivityType.RUNNING.value, at(8), duration=900.0, end_date=at(8, 20)),
        ))

        (activity,) = extract_activities(workout)
        assert activity.end_date == at(8, 20)

    def test_scoped_statistics_and_order(self, at, running_workout):
        warmup_energy = QuantityStatistics(
            kind=QuantityKind.ACTIVE_ENERGY_BURNED, start_date=at(8), end_date=at(8, 10),
            sum=Quantity(40.0, "kcal"),
        )
        workout = replace(running_workout, activities=(
            WorkoutActivity(
                WorkoutActivityType.RUNNING.value, at(8), duration=600.0,
                statistics={QuantityKind.ACTIVE_ENERGY_BURNED: warmup_energy},
            ),
            WorkoutActivity(WorkoutActivityType.FUNCTIONAL_STRENGTH_TRAINING.value, at(8, 10), duration=1200.0),
            WorkoutActivity("HKWorkoutActivityTypeYoga", at(8, 30), duration=300.0),
        ))

        activities = extract_activities(workout)

        assert [a.type for a in activities] == ["running", "functional_strength", "other"]
        assert activities[0].statistics.active_energy_burned == StatValue(40.0, "kcal")
        assert activities[1].statistics.active_energy_burned is None
