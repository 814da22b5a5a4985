"""Commands for inspecting database build scripts."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from dbbuild.cli.common.context import ScriptsAppContext, build_scripts_context
from dbbuild.cli.common.exits import die, exit_from_exc, ok_exit, warn_exit
from dbbuild.cli.common.options import (
    DatabaseOpt,
    NameOpt,
    ParallelOpt,
    RootArg,
    ServerOpt,
    StrictOpt,
    TypeOpt,
    VerboseOpt,
)
from dbbuild.cli.common.output import out
from dbbuild.cli.tui import select_scripts
from dbbuild.core.repository import UnsupportedDirectoryError
from dbbuild.core.scripts import (
    DatabaseObjectType,
    ScriptFile,
    filter_scripts,
    summarize_by_type,
)

app = typer.Typer(
    help="Discover and inspect database build scripts",
    no_args_is_help=True,
)


def _scan(appctx: ScriptsAppContext) -> list[ScriptFile]:
    """Run the scan, print its diagnostics and convert fatal errors to exits."""
    try:
        with out.status("Scanning scripts..."):
            scripts = appctx.repository.get_all_scripts()
    except UnsupportedDirectoryError as exc:
        exit_from_exc(exc, message=escape(str(exc)), code=1)
    except OSError as exc:
        exit_from_exc(
            exc, message=escape(f"Could not read {appctx.root}: {exc}"), code=1
        )

    for diag in appctx.sink.diagnostics:
        out.diagnostic(diag)
    return scripts


def _filter_or_exit(
    scripts: list[ScriptFile],
    object_types: list[DatabaseObjectType],
    name: str | None,
) -> list[ScriptFile]:
    try:
        return filter_scripts(scripts, object_types=object_types, name_regex=name)
    except ValueError as e:
        die(str(e), code=2)


@app.command("list")
def list_scripts(
    root: Path = RootArg,
    database: str | None = DatabaseOpt,
    server: str | None = ServerOpt,
    object_type: list[DatabaseObjectType] = TypeOpt,
    name: str | None = NameOpt,
    strict: bool | None = StrictOpt,
    parallel: int | None = ParallelOpt,
    verbose: bool = VerboseOpt,
):
    """
    List the scripts found under a database directory.
    """
    appctx = build_scripts_context(
        root,
        database=database,
        server=server,
        strict=strict,
        parallel=parallel,
        verbose=verbose,
    )
    scripts = _filter_or_exit(_scan(appctx), object_type, name)

    if not scripts:
        warn_exit("No scripts found", code=0)

    out.scripts_table(scripts, title=f"Scripts in {appctx.repository.database_name}")


@app.command()
def check(
    root: Path = RootArg,
    database: str | None = DatabaseOpt,
    server: str | None = ServerOpt,
    strict: bool | None = StrictOpt,
    parallel: int | None = ParallelOpt,
    verbose: bool = VerboseOpt,
):
    """
    Scan a database directory and fail if any file was filtered out.
    """
    appctx = build_scripts_context(
        root,
        database=database,
        server=server,
        strict=strict,
        parallel=parallel,
        verbose=verbose,
    )
    scripts = _scan(appctx)

    out.kv(
        {
            "database": appctx.repository.database_name,
            "server": appctx.repository.server_name,
            "scripts": len(scripts),
            "diagnostics": len(appctx.sink.diagnostics),
        }
    )
    if scripts:
        out.type_summary_table(summarize_by_type(scripts))

    if appctx.sink.diagnostics:
        die(f"{len(appctx.sink.diagnostics)} file(s) were filtered out", code=1)

    out.success("All files are valid scripts")


@app.command()
def show(
    root: Path = RootArg,
    database: str | None = DatabaseOpt,
    object_type: list[DatabaseObjectType] = TypeOpt,
    name: str | None = NameOpt,
    parallel: int | None = ParallelOpt,
):
    """
    Pick scripts interactively and print their source.
    """
    appctx = build_scripts_context(root, database=database, parallel=parallel)
    scripts = _filter_or_exit(_scan(appctx), object_type, name)

    if not scripts:
        warn_exit("No scripts found", code=0)

    selected = select_scripts(scripts)
    if not selected:
        ok_exit("No scripts selected")

    for script in selected:
        out.script_source(script)
