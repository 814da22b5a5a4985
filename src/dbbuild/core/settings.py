"""Scan settings resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

PARALLEL_ENV = "DBBUILD_SCAN_PARALLEL"
STRICT_ENV = "DBBUILD_STRICT_DIRECTORIES"
SERVER_ENV = "DBBUILD_SERVER_NAME"

DEFAULT_PARALLEL = 4
DEFAULT_SERVER_NAME = "localhost"


def _env_flag(name: str) -> bool:
    """Return True if the variable is set to 1/true/yes."""
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes"}


def _env_int(name: str, default: int) -> int:
    """Return an int from the environment, falling back to default if invalid."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ScanSettings:
    """
    Settings for a script scan.

    Attributes:
        max_parallel: Number of files read and parsed concurrently.
        allow_unsupported_directories: Warn about (True) or fail on (False)
            subdirectories that do not map to an object type.
        server_name: Server name stamped onto produced scripts.
    """

    max_parallel: int = DEFAULT_PARALLEL
    allow_unsupported_directories: bool = True
    server_name: str = DEFAULT_SERVER_NAME

    @classmethod
    def from_env(cls) -> "ScanSettings":
        """Build settings from DBBUILD_* environment variables."""
        return cls(
            max_parallel=max(_env_int(PARALLEL_ENV, DEFAULT_PARALLEL), 1),
            allow_unsupported_directories=not _env_flag(STRICT_ENV),
            server_name=os.getenv(SERVER_ENV) or DEFAULT_SERVER_NAME,
        )
