"""Script parsing abstractions and the default header parser.

The repository only needs to know which object a script defines, not
whether its body is valid SQL. The default parser therefore reads the
`CREATE` / `ALTER` header of a script and leaves the body untouched;
callers that need real SQL validation can inject their own ScriptParser.
"""

from __future__ import annotations

import re
from typing import Protocol

from dbbuild.core.scripts import DatabaseObjectType, ScriptObject

DEFAULT_SCHEMA = "dbo"

_KIND_TO_TYPE = {
    "function": DatabaseObjectType.FUNCTION,
    "proc": DatabaseObjectType.PROCEDURE,
    "procedure": DatabaseObjectType.PROCEDURE,
    "table": DatabaseObjectType.TABLE,
    "trigger": DatabaseObjectType.TRIGGER,
    "type": DatabaseObjectType.TYPE,
    "view": DatabaseObjectType.VIEW,
}

_COMMENTS = re.compile(r"--[^\n]*|/\*.*?\*/", re.DOTALL)

_IDENT = r"(?:\[[^\]]+\]|\"[^\"]+\"|`[^`]+`|[A-Za-z_@#][\w@#$]*)"

_HEADER = re.compile(
    rf"""
    \b(?:create|alter)
    (?:\s+or\s+(?:alter|replace))?
    \s+(?P<kind>function|procedure|proc|table|trigger|type|view)
    \s+(?:(?P<schema>{_IDENT})\s*\.\s*)?(?P<name>{_IDENT})
    """,
    re.IGNORECASE | re.VERBOSE,
)


class ScriptParseError(ValueError):
    """Raised when a script's contents cannot be turned into a ScriptObject."""


class ScriptParser(Protocol):
    """Interface for turning raw script text into a ScriptObject."""

    def parse(self, text: str) -> ScriptObject:
        """Parse script text. Raises ScriptParseError for malformed input."""
        ...


def _unquote(identifier: str) -> str:
    """Strip [brackets], "double quotes" or `backticks` from an identifier."""
    if len(identifier) >= 2 and identifier[0] + identifier[-1] in ('[]', '""', "``"):
        return identifier[1:-1]
    return identifier


class HeaderScriptParser:
    """
    Parser that extracts the defined object from a script's first
    `CREATE` / `ALTER` statement.
    """

    def __init__(self, default_schema: str = DEFAULT_SCHEMA) -> None:
        self.default_schema = default_schema

    def parse(self, text: str) -> ScriptObject:
        """
        Parse a build script.

        Comments are ignored when looking for the header. Object names may
        be schema-qualified and quoted.

        Raises:
            ScriptParseError: If the script is empty or defines no object.
        """
        if not text.strip():
            raise ScriptParseError("Script is empty.")

        match = _HEADER.search(_COMMENTS.sub(" ", text))
        if not match:
            raise ScriptParseError("No CREATE or ALTER statement found.")

        schema = match.group("schema")
        return ScriptObject(
            object_name=_unquote(match.group("name")),
            schema_name=_unquote(schema) if schema else self.default_schema,
            object_type=_KIND_TO_TYPE[match.group("kind").lower()],
            original_text=text,
        )
