"""Core script domain models.

This module defines the data structures that describe database build
scripts (ScriptObject, ScriptFile), the categories they belong to
(DatabaseObjectType) and the diagnostics produced while scanning them.
It is intentionally free of file-system and CLI concerns.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

SCRIPT_EXTENSION = ".sql"


class DatabaseObjectType(str, Enum):
    """
    Enumeration of database object categories a build script can define.

    The category of a script is decided by the subdirectory it lives in,
    never by its contents.
    """

    FUNCTION = "FUNCTION"
    PROCEDURE = "PROCEDURE"
    TABLE = "TABLE"
    TRIGGER = "TRIGGER"
    TYPE = "TYPE"
    VIEW = "VIEW"


SUBDIRECTORY_OBJECT_TYPES: Mapping[str, DatabaseObjectType] = MappingProxyType(
    {
        "function": DatabaseObjectType.FUNCTION,
        "functions": DatabaseObjectType.FUNCTION,
        "procedure": DatabaseObjectType.PROCEDURE,
        "procedures": DatabaseObjectType.PROCEDURE,
        "table": DatabaseObjectType.TABLE,
        "tables": DatabaseObjectType.TABLE,
        "trigger": DatabaseObjectType.TRIGGER,
        "triggers": DatabaseObjectType.TRIGGER,
        "type": DatabaseObjectType.TYPE,
        "types": DatabaseObjectType.TYPE,
        "view": DatabaseObjectType.VIEW,
        "views": DatabaseObjectType.VIEW,
    }
)


def object_type_for_directory(name: str) -> DatabaseObjectType | None:
    """Return the object type for a subdirectory name, or None if unsupported."""
    return SUBDIRECTORY_OBJECT_TYPES.get(name.lower())


def is_script_file_name(name: str) -> bool:
    """Return True if the file name carries the (case-sensitive) script extension."""
    return name.endswith(SCRIPT_EXTENSION) and len(name) > len(SCRIPT_EXTENSION)


def object_name_from_file_name(name: str) -> str:
    """Strip the script extension from a file name."""
    if name.endswith(SCRIPT_EXTENSION):
        return name[: -len(SCRIPT_EXTENSION)]
    return name


@dataclass(frozen=True)
class ScriptObject:
    """
    Structured view of a single build script.

    Attributes:
        object_name: Name of the database object the script defines.
        schema_name: Schema that owns the object.
        object_type: Category of the object.
        original_text: Full, unmodified script source.
    """

    object_name: str
    schema_name: str
    object_type: DatabaseObjectType
    original_text: str


@dataclass(frozen=True)
class ScriptFile:
    """
    A successfully parsed build script, stamped with its owning database.

    Attributes:
        database_name: Database the script belongs to.
        script_object: Parsed script.
        path: Full path of the file the script was read from.
        server_name: Server the database lives on.
    """

    database_name: str
    script_object: ScriptObject
    path: str = ""
    server_name: str | None = None

    @property
    def object_name(self) -> str:
        return self.script_object.object_name

    @property
    def schema_name(self) -> str:
        return self.script_object.schema_name

    @property
    def object_type(self) -> DatabaseObjectType:
        return self.script_object.object_type

    @property
    def qualified_name(self) -> str:
        """Return `schema.object`."""
        return f"{self.schema_name}.{self.object_name}"


class Severity(str, Enum):
    """Severity of a diagnostic message."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Diagnostic:
    """A severity-tagged message about an excluded or problematic input."""

    severity: Severity
    message: str


def filter_scripts(
    scripts: Iterable[ScriptFile],
    *,
    object_types: Iterable[DatabaseObjectType] | None = None,
    name_regex: str | None = None,
) -> list[ScriptFile]:
    """
    Narrow a catalog by object type and/or a regex on the qualified name.

    Args:
        scripts: Catalog to filter.
        object_types: Keep only these types (all types if None or empty).
        name_regex: Regular expression searched in `schema.object`.

    Returns:
        The matching scripts, in their original order.

    Raises:
        ValueError: If name_regex is not a valid regular expression.
    """
    wanted = set(object_types or [])
    rx = None
    if name_regex:
        try:
            rx = re.compile(name_regex)
        except re.error as exc:
            raise ValueError(f"Invalid regex expression: {exc}") from exc

    return [
        s
        for s in scripts
        if (not wanted or s.object_type in wanted)
        and (rx is None or rx.search(s.qualified_name))
    ]


def summarize_by_type(scripts: Iterable[ScriptFile]) -> dict[DatabaseObjectType, int]:
    """Count scripts per object type (types without scripts are omitted)."""
    counts = Counter(s.object_type for s in scripts)
    return {t: counts[t] for t in DatabaseObjectType if counts[t]}
