"""Common CLI options for the CLI."""

import typer

RootArg = typer.Argument(
    ...,
    help="Database directory containing one subdirectory per object type",
    show_default=False,
)

DatabaseOpt = typer.Option(
    None,
    "--database",
    "-d",
    help="Database name (defaults to the root directory name)",
)

ServerOpt = typer.Option(
    None,
    "--server",
    "-s",
    help="Server name (env: DBBUILD_SERVER_NAME)",
)

TypeOpt = typer.Option(
    [],
    "--type",
    "-t",
    help="Only keep scripts of this object type. This is reusable.",
    case_sensitive=False,
    show_default=False,
)

NameOpt = typer.Option(
    None,
    "--name",
    help="Regex on schema.object name",
)

StrictOpt = typer.Option(
    None,
    "--strict/--allow-unsupported",
    help="Fail on subdirectories that map to no object type "
    "(env: DBBUILD_STRICT_DIRECTORIES)",
    show_default=False,
)

ParallelOpt = typer.Option(
    None,
    "--parallel",
    "-n",
    help="Number of files parsed in parallel (env: DBBUILD_SCAN_PARALLEL)",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable debug logging",
)
