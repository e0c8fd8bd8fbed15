"""dashkit command line entry point."""

from typing import Optional

import typer

from dashkit import __version__
from dashkit.cli.commands import ui

app = typer.Typer(
    name="dashkit",
    help="Pluggable terminal dashboards.",
    no_args_is_help=True,
)

app.command("demo")(ui.demo)
app.command("check")(ui.check)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dashkit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Pluggable terminal dashboards."""


if __name__ == "__main__":
    app()
