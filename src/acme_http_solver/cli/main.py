"""Main CLI entry point using Typer."""

from __future__ import annotations

import typer
from rich.console import Console

from acme_http_solver import __version__
from acme_http_solver.cli.commands import challenge
from acme_http_solver.logging.config import configure_logging

app = typer.Typer(
    name="acme-http-solver",
    help="Route ACME HTTP-01 challenges through Kubernetes Ingresses.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"acme-http-solver version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit console logs as JSON.",
    ),
) -> None:
    """acme-http-solver - HTTP-01 challenge routing for cert-manager Certificates."""
    configure_logging(verbose=verbose, debug=debug, json_output=json_logs)


app.command()(challenge.ensure)
app.command()(challenge.cleanup)
app.command()(challenge.find)


if __name__ == "__main__":
    app()
