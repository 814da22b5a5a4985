"""File-system backed script repository.

The repository walks a database directory laid out by convention
(`<root>/<object type>/<object name>.sql`), classifies every file by the
subdirectory it lives in, parses the accepted files and returns the
resulting catalog. Files that cannot be part of the catalog are reported
to the diagnostic sink and skipped; only failures of the file system
itself reach the caller.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from dbbuild.core.adapters.filesystem import DirectoryEntry, FileEntry, FileSystem
from dbbuild.core.diagnostics import DiagnosticSink
from dbbuild.core.parser import ScriptParser
from dbbuild.core.scripts import (
    SCRIPT_EXTENSION,
    DatabaseObjectType,
    Diagnostic,
    ScriptFile,
    Severity,
    is_script_file_name,
    object_name_from_file_name,
    object_type_for_directory,
)
from dbbuild.core.settings import DEFAULT_PARALLEL

logger = logging.getLogger(__name__)


class ScriptRepositoryError(RuntimeError):
    """Raised when a scan cannot produce a catalog."""


class UnsupportedDirectoryError(ScriptRepositoryError):
    """Raised in strict mode when a subdirectory maps to no object type."""

    def __init__(self, directory: DirectoryEntry) -> None:
        super().__init__(f"Unsupported subdirectory: {directory.path}")
        self.directory = directory


@dataclass(frozen=True)
class _Candidate:
    """A file that passed classification and still has to be parsed."""

    file: FileEntry
    object_type: DatabaseObjectType


@dataclass(frozen=True)
class _ParseOutcome:
    script: ScriptFile | None
    diagnostic: Diagnostic | None = None


class ScriptRepository:
    """Discover, classify and parse the build scripts of one database."""

    def __init__(
        self,
        directory: str,
        server_name: str,
        database_name: str,
        file_system: FileSystem,
        parser: ScriptParser,
        sink: DiagnosticSink,
        allow_unsupported_directories: bool = True,
        *,
        max_parallel: int = DEFAULT_PARALLEL,
    ) -> None:
        if max_parallel < 1:
            raise ValueError("max_parallel must be >= 1")
        self.directory = directory
        self.server_name = server_name
        self.database_name = database_name
        self.file_system = file_system
        self.parser = parser
        self.sink = sink
        self.allow_unsupported_directories = allow_unsupported_directories
        self.max_parallel = max_parallel

    def get_all_scripts(self) -> list[ScriptFile]:
        """
        Scan the root directory and return every valid script.

        Files are read and parsed concurrently; results and diagnostics are
        collected per file and merged on the calling thread, in enumeration
        order.

        Returns:
            The catalog. Callers must not rely on its order.

        Raises:
            UnsupportedDirectoryError: In strict mode, for the first
                subdirectory that maps to no object type.
            OSError: If the file system cannot be enumerated or read.
        """
        candidates = self._classify()
        logger.debug("%d candidate script(s) under %s", len(candidates), self.directory)
        if not candidates:
            return []

        workers = min(self.max_parallel, len(candidates))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(self._read_and_parse, candidates))

        scripts: list[ScriptFile] = []
        for outcome in outcomes:
            if outcome.diagnostic is not None:
                self._log(outcome.diagnostic)
            if outcome.script is not None:
                scripts.append(outcome.script)
        logger.debug("Parsed %d of %d script(s)", len(scripts), len(candidates))
        return scripts

    async def get_all_scripts_async(self) -> list[ScriptFile]:
        """Coroutine flavour of get_all_scripts (runs the scan off the event loop)."""
        return await asyncio.to_thread(self.get_all_scripts)

    def _classify(self) -> list[_Candidate]:
        """Enumerate the tree and keep files that may become scripts."""
        candidates: list[_Candidate] = []

        for directory in self.file_system.list_directories(self.directory):
            object_type = object_type_for_directory(directory.name)
            if object_type is None and not self.allow_unsupported_directories:
                raise UnsupportedDirectoryError(directory)

            for file in self.file_system.list_files(directory.path):
                if object_type is None:
                    self._warn(
                        "Filtering out file because its in an unsupported "
                        f"subdirectory: {file.path}"
                    )
                    continue
                if not is_script_file_name(file.name):
                    self._warn(
                        "Filtering out file because it is not a "
                        f"{SCRIPT_EXTENSION} file: {file.path}"
                    )
                    continue
                candidates.append(_Candidate(file=file, object_type=object_type))

        return candidates

    def _read_and_parse(self, candidate: _Candidate) -> _ParseOutcome:
        """Read one file and turn it into a ScriptFile (or a diagnostic)."""
        path = candidate.file.path
        try:
            text = self.file_system.read_text(path)
        except UnicodeDecodeError as e:
            return _ParseOutcome(
                script=None,
                diagnostic=Diagnostic(
                    Severity.WARNING,
                    "Filtering out file because it could not be decoded: "
                    f"{path} ({e})",
                ),
            )

        try:
            parsed = self.parser.parse(text)
        except Exception as e:  # noqa: BLE001 - any parser failure skips the file
            return _ParseOutcome(
                script=None,
                diagnostic=Diagnostic(
                    Severity.WARNING,
                    "Filtering out file because it could not be parsed: "
                    f"{path} ({e})",
                ),
            )

        # the subdirectory decides the type, whatever the header says
        if parsed.object_type != candidate.object_type:
            logger.debug(
                "%s defines a %s but lives in a %s directory",
                path,
                parsed.object_type.value,
                candidate.object_type.value,
            )

        script_object = dataclasses.replace(
            parsed,
            object_name=object_name_from_file_name(candidate.file.name),
            object_type=candidate.object_type,
        )
        return _ParseOutcome(
            script=ScriptFile(
                database_name=self.database_name,
                script_object=script_object,
                path=path,
                server_name=self.server_name,
            )
        )

    def _warn(self, message: str) -> None:
        self.sink.log(Severity.WARNING, message)

    def _log(self, diagnostic: Diagnostic) -> None:
        self.sink.log(diagnostic.severity, diagnostic.message)
