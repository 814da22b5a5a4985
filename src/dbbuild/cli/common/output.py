"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.theme import Theme

from dbbuild.core.scripts import Diagnostic, Severity

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def diagnostic(self, diag: Diagnostic) -> None:
        """Print a diagnostic with the style matching its severity."""
        # paths may contain [brackets]
        msg = escape(diag.message)
        if diag.severity == Severity.ERROR:
            self.error(msg)
        elif diag.severity == Severity.WARNING:
            self.warn(msg)
        else:
            self.info(msg)

    def scripts_table(self, scripts: Iterable[Any], title: str = "Scripts") -> None:
        """
        Expects objects with .object_type .schema_name .object_name .path
        (like dbbuild.core.scripts.ScriptFile)
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Type", style="meta", no_wrap=True)
        t.add_column("Schema", style="meta")
        t.add_column("Object", style="ok")
        t.add_column("Path", style="meta")

        for s in scripts:
            object_type = s.object_type
            type_value = object_type.value if hasattr(object_type, "value") else str(object_type)
            t.add_row(
                type_value,
                escape(s.schema_name),
                escape(s.object_name),
                escape(str(getattr(s, "path", "") or "")),
            )

        console.print(t)

    def type_summary_table(
        self, counts: Mapping[Any, int], title: str = "Scripts per type"
    ) -> None:
        """Render a count per object type."""
        t = Table(title=title, show_lines=False)
        t.add_column("Type", style="ok")
        t.add_column("Scripts", justify="right")

        for object_type, count in counts.items():
            value = object_type.value if hasattr(object_type, "value") else str(object_type)
            t.add_row(value, str(count))

        console.print(t)

    def script_source(self, script: Any) -> None:
        """Print the source of a script with SQL highlighting."""
        self.header(f"{script.qualified_name} ({script.object_type.value})")
        console.print(
            Syntax(script.script_object.original_text, "sql", line_numbers=True)
        )


out = Out()
