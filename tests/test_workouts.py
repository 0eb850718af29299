"""
Tests for Health Export workout tools.
"""

import json
from dataclasses import replace
from unittest.mock import patch

import pytest
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from health_export import workouts
from health_export.export import parse_document
from health_export.provider import ProviderError, WorkoutActivityType
from tests.conftest import get_tool_result_text


@pytest.fixture
def app_with_workouts():
    app = FastMCP("Test Health Export Workouts")
    app = workouts.register_tools(app)
    return app


# ── list_workouts ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_workouts(app_with_workouts):
    result = await app_with_workouts.call_tool("list_workouts", {})

    data = json.loads(get_tool_result_text(result))
    assert data["count"] == 1
    workout = data["workouts"][0]
    assert workout["id"] == "run-1"
    assert workout["type"] == "running"
    assert workout["source"] == "Apple Watch"
    assert workout["start"] == "2024-03-07T08:00:00+00:00"
    assert workout["duration"] == "30m00s"


@pytest.mark.asyncio
async def test_list_workouts_skips_other_types(app_with_workouts, store, running_workout):
    store.add_workout(replace(
        running_workout, id="ride-1", activity_type=WorkoutActivityType.CYCLING.value,
    ))

    result = await app_with_workouts.call_tool("list_workouts", {})

    data = json.loads(get_tool_result_text(result))
    assert [w["id"] for w in data["workouts"]] == ["run-1"]


@pytest.mark.asyncio
async def test_list_workouts_most_recent_first(app_with_workouts, store, running_workout, at):
    store.add_workout(replace(
        running_workout,
        id="lift-1",
        activity_type=WorkoutActivityType.TRADITIONAL_STRENGTH_TRAINING.value,
        start_date=at(18),
        end_date=at(18, 45),
        duration=2700.0,
    ))

    result = await app_with_workouts.call_tool("list_workouts", {"limit": 1})

    data = json.loads(get_tool_result_text(result))
    assert data["count"] == 1
    assert data["workouts"][0]["id"] == "lift-1"
    assert data["workouts"][0]["type"] == "strength_training"


@pytest.mark.asyncio
async def test_list_workouts_no_export(app_with_workouts, mock_get_provider):
    mock_get_provider.side_effect = ValueError("No health export found at /nowhere.")

    with pytest.raises(ToolError) as exc_info:
        await app_with_workouts.call_tool("list_workouts", {})

    assert "no health export" in str(exc_info.value).lower()


# ── get_workout_export ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_workout_export(app_with_workouts, running_workout):
    result = await app_with_workouts.call_tool("get_workout_export", {"workout_id": "run-1"})

    text = get_tool_result_text(result)
    data = json.loads(text)
    assert data["exportVersion"] == "1.0"
    assert data["workout"]["type"] == "running"
    assert data["workout"]["startDate"] == "2024-03-07T08:00:00Z"
    assert data["workout"]["heartRateSamples"] == [{"bpm": 142.0, "date": "2024-03-07T08:00:00Z"}]
    assert data["workout"]["events"] == [{"startDate": "2024-03-07T08:10:00Z", "type": "lap"}]

    export = parse_document(text.encode("utf-8"))
    assert export.workout.duration == running_workout.duration


@pytest.mark.asyncio
async def test_get_workout_export_unknown_id(app_with_workouts):
    with pytest.raises(ToolError) as exc_info:
        await app_with_workouts.call_tool("get_workout_export", {"workout_id": "missing"})

    assert "missing" in str(exc_info.value)


@pytest.mark.asyncio
async def test_get_workout_export_provider_failure(app_with_workouts, store):
    with patch.object(store, "query_samples", side_effect=ProviderError("store locked")):
        with pytest.raises(ToolError) as exc_info:
            await app_with_workouts.call_tool("get_workout_export", {"workout_id": "run-1"})

    assert "store locked" in str(exc_info.value)


# ── save_workout_export ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_save_workout_export(app_with_workouts, tmp_path):
    result = await app_with_workouts.call_tool(
        "save_workout_export",
        {"workout_id": "run-1", "output_dir": str(tmp_path)},
    )

    data = json.loads(get_tool_result_text(result))
    assert data["filename"] == "workout-running-2024-03-07.json"
    written = tmp_path / "workout-running-2024-03-07.json"
    assert data["path"] == str(written)
    assert written.read_bytes().startswith(b'{\n  "exportDate"')
    assert data["bytes"] == written.stat().st_size
    assert [p.name for p in tmp_path.iterdir()] == [written.name]


@pytest.mark.asyncio
async def test_save_workout_export_creates_directory(app_with_workouts, tmp_path):
    target = tmp_path / "exports" / "2024"

    await app_with_workouts.call_tool(
        "save_workout_export",
        {"workout_id": "run-1", "output_dir": str(target)},
    )

    assert (target / "workout-running-2024-03-07.json").exists()


@pytest.mark.asyncio
async def test_save_workout_export_unknown_id_writes_nothing(app_with_workouts, tmp_path):
    with pytest.raises(ToolError):
        await app_with_workouts.call_tool(
            "save_workout_export",
            {"workout_id": "missing", "output_dir": str(tmp_path)},
        )

    assert list(tmp_path.iterdir()) == []


# ── reload_health_export ──────────────────────────────────────────────


@pytest.mark.asyncio
async def test_reload_health_export(app_with_workouts, mock_get_provider):
    with patch("health_export.workouts.reload_providers") as mock_reload:
        result = await app_with_workouts.call_tool("reload_health_export", {})

    mock_reload.assert_called_once()
    mock_get_provider.assert_awaited_once()
    data = json.loads(get_tool_result_text(result))
    assert data == {"success": True, "workouts": 1}


def test_workout_tools_registered(app_with_workouts):
    tools = app_with_workouts._tool_manager._tools
    tool_names = list(tools.keys())

    expected_tools = [
        "list_workouts",
        "get_workout_export",
        "save_workout_export",
        "reload_health_export",
    ]
    for tool in expected_tools:
        assert tool in tool_names, f"Tool {tool} not registered"
