"""Application context management for the CLI."""

import logging
from dataclasses import dataclass
from pathlib import Path

from dbbuild.cli.common.exits import die
from dbbuild.core.adapters.filesystem import LocalFileSystem
from dbbuild.core.diagnostics import (
    CollectingDiagnosticSink,
    LoggingDiagnosticSink,
    setup_logging,
)
from dbbuild.core.parser import HeaderScriptParser
from dbbuild.core.repository import ScriptRepository
from dbbuild.core.settings import ScanSettings

logger = logging.getLogger(__name__)


@dataclass
class ScriptsAppContext:
    """Application context holding the script repository and its diagnostics."""

    root: Path
    settings: ScanSettings
    repository: ScriptRepository
    sink: CollectingDiagnosticSink


def build_scripts_context(
    root: Path,
    *,
    database: str | None = None,
    server: str | None = None,
    strict: bool | None = None,
    parallel: int | None = None,
    verbose: bool = False,
) -> ScriptsAppContext:
    """Build the script repository for a database directory.

    CLI arguments take precedence over DBBUILD_* environment variables.

    Args:
        root: Database directory to scan.
        database: Database name; defaults to the directory name.
        server: Server name override.
        strict: Fail on unsupported subdirectories instead of warning.
        parallel: Number of files parsed concurrently.
        verbose: Enable debug logging.

    Returns:
        ScriptsAppContext: Context with a configured repository.
    """
    setup_logging(verbose)

    if not root.is_dir():
        die(f"Database directory does not exist: {root}", code=2)
    if parallel is not None and parallel < 1:
        die("--parallel must be >= 1", code=2)

    env = ScanSettings.from_env()
    settings = ScanSettings(
        max_parallel=parallel if parallel is not None else env.max_parallel,
        allow_unsupported_directories=(
            not strict if strict is not None else env.allow_unsupported_directories
        ),
        server_name=server or env.server_name,
    )

    logger.debug("Scan settings: %s", settings)

    # --verbose mirrors every diagnostic to the dbbuild.scripts logger
    sink = CollectingDiagnosticSink(
        forward_to=LoggingDiagnosticSink() if verbose else None
    )
    repository = ScriptRepository(
        str(root),
        settings.server_name,
        database or root.resolve().name,
        LocalFileSystem(),
        HeaderScriptParser(),
        sink,
        settings.allow_unsupported_directories,
        max_parallel=settings.max_parallel,
    )
    return ScriptsAppContext(
        root=root, settings=settings, repository=repository, sink=sink
    )
