"""
Workout export tools for the Health Export MCP server.

Provides tools for listing workouts in an export archive and producing
their JSON export documents.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from health_export.export import export_workout, serialize, workout_type_name
from health_export.provider import DEFAULT_WORKOUT_LIMIT, EXPORTABLE_ACTIVITY_TYPES
from health_export.provider_factory import get_provider, reload_providers
from health_export.utils import format_duration, format_local_time

logger = logging.getLogger(__name__)


def register_tools(app):
    """Register workout export tools with the MCP app."""

    @app.tool()
    async def list_workouts(limit: int = DEFAULT_WORKOUT_LIMIT) -> str:
        """
        List exportable workouts (running and strength training).

        Most recent workouts come first.

        Args:
            limit: Maximum number of workouts (default: 50, max: 50)

        Returns:
            JSON with the workout list
        """
        provider = await get_provider()
        workouts = await provider.fetch_workouts(
            EXPORTABLE_ACTIVITY_TYPES,
            limit=max(1, min(limit, DEFAULT_WORKOUT_LIMIT)),
        )

        result = {
            "count": len(workouts),
            "workouts": [
                {
                    "id": w.id,
                    "type": workout_type_name(w.activity_type),
                    "source": w.source_name,
                    "start": format_local_time(w.start_date),
                    "end": format_local_time(w.end_date),
                    "duration": format_duration(w.duration),
                }
                for w in workouts
            ],
        }
        return json.dumps(result, indent=2)

    @app.tool()
    async def get_workout_export(workout_id: str) -> str:
        """
        Build the JSON export document of a workout.

        The document holds summary statistics, heart-rate samples, the GPS
        route, events and sub-activities.

        Args:
            workout_id: The workout id from list_workouts

        Returns:
            The export document (JSON)
        """
        provider = await get_provider()
        export = await export_workout(provider, workout_id)
        data, _ = serialize(export)
        return data.decode("utf-8")

    @app.tool()
    async def save_workout_export(workout_id: str, output_dir: str = None) -> str:
        """
        Build a workout's export document and write it to disk.

        Args:
            workout_id: The workout id from list_workouts
            output_dir: Target directory (default: system temp directory)

        Returns:
            JSON with the written filename, path and size
        """
        provider = await get_provider()
        export = await export_workout(provider, workout_id)
        data, filename = serialize(export)

        target_dir = Path(output_dir) if output_dir else Path(tempfile.gettempdir())
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        _write_atomic(path, data)
        logger.info(f"Wrote export of workout {workout_id} to {path}")

        return json.dumps({
            "workout_id": workout_id,
            "filename": filename,
            "path": str(path),
            "bytes": len(data),
        }, indent=2)

    @app.tool()
    async def reload_health_export() -> str:
        """
        Reload the health export archive from disk.

        Use after replacing the export directory contents.

        Returns:
            JSON with the number of workouts available for export
        """
        reload_providers()
        provider = await get_provider()
        workouts = await provider.fetch_workouts(EXPORTABLE_ACTIVITY_TYPES)
        return json.dumps({"success": True, "workouts": len(workouts)}, indent=2)

    return app


def _write_atomic(path: Path, data: bytes) -> None:
    """Write bytes to a sibling temp file, then rename it over ``path``."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError:
        os.unlink(tmp_name)
        raise
