"""CLI application for database build script tooling."""

import typer

from dbbuild.cli.commands.scripts import app as scripts_app

app = typer.Typer(
    help="dbbuild - database build script tooling",
    no_args_is_help=True,
)

app.add_typer(scripts_app, name="scripts", help="List / check / show build scripts.")


if __name__ == "__main__":
    app()
