"""
Provider factory for the Health Export MCP server.

Loads the Apple Health export archive the tools read from. Parsing an
export.xml takes a while, so loaded archives are kept per directory for the
life of the process; reload_providers() drops them.

Configuration:
- HEALTH_EXPORT_DIR: unpacked export directory (default: /data/apple_health_export)
"""

import logging
import os
from pathlib import Path
from typing import Dict

from health_export.provider import ArchiveProvider, HealthProvider, load_archive

logger = logging.getLogger(__name__)

HEALTH_EXPORT_DIR_ENV = "HEALTH_EXPORT_DIR"
DEFAULT_EXPORT_DIR = "/data/apple_health_export"

_providers: Dict[str, ArchiveProvider] = {}


def get_export_dir() -> Path:
    """The export directory configured through HEALTH_EXPORT_DIR."""
    return Path(os.environ.get(HEALTH_EXPORT_DIR_ENV, DEFAULT_EXPORT_DIR))


async def get_provider() -> HealthProvider:
    """
    Get the provider for the configured export directory.

    Usage in tools:
        @app.tool()
        async def list_workouts() -> str:
            provider = await get_provider()
            return json.dumps(...)

    Returns:
        Loaded ArchiveProvider

    Raises:
        ValueError: If the export directory does not exist
        ProviderError: If the export cannot be parsed
    """
    export_dir = get_export_dir()
    key = str(export_dir)

    provider = _providers.get(key)
    if provider is None:
        if not export_dir.exists():
            raise ValueError(
                f"No health export found at {export_dir}. "
                f"Set {HEALTH_EXPORT_DIR_ENV} to an unpacked Apple Health export."
            )
        logger.info(f"Loading health export from {export_dir}")
        provider = await load_archive(export_dir)
        _providers[key] = provider
    return provider


def reload_providers() -> None:
    """Forget every loaded archive; the next get_provider() reads from disk."""
    _providers.clear()
