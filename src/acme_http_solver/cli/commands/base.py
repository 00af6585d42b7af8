"""Shared options and error handling for solver CLI commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from acme_http_solver.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
)
from acme_http_solver.solver.exceptions import CleanupAggregateError

console = Console()

NamespaceOption = Annotated[
    str | None,
    typer.Option(
        "--namespace",
        "-n",
        help="Certificate namespace (defaults to config or 'default')",
    ),
]


def handle_k8s_error(error: KubernetesError) -> None:
    """Print a Kubernetes error and exit.

    Args:
        error: The Kubernetes error to handle.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    if isinstance(error, KubernetesConnectionError):
        console.print("[red]Error:[/red] Cannot connect to Kubernetes cluster")
        console.print(f"  {error.message}")
        if error.original_error:
            console.print(f"  Cause: {error.original_error}")

    elif isinstance(error, KubernetesAuthError):
        console.print("[red]Error:[/red] Authentication/authorization failed")
        console.print(f"  {error.message}")
        console.print(
            "\n[dim]Hint: The solver needs get/list/create/update/delete on ingresses.[/dim]"
        )

    elif isinstance(error, KubernetesNotFoundError):
        console.print("[red]Error:[/red] Resource not found")
        console.print(f"  {error.message}")

    elif isinstance(error, KubernetesConflictError):
        console.print("[red]Error:[/red] Ingress kept changing while it was being updated")
        console.print(f"  {error.message}")

    elif isinstance(error, KubernetesTimeoutError):
        console.print("[red]Error:[/red] Operation timed out")
        console.print(f"  {error.message}")
        console.print("\n[dim]Hint: Raise the timeout with ACME_SOLVER_TIMEOUT.[/dim]")

    elif isinstance(error, CleanupAggregateError):
        failed = len(error.errors)
        console.print(f"[red]Error:[/red] {failed} solver ingress(es) could not be deleted")
        for err in error.errors:
            console.print(f"  - {err}")

    else:
        console.print(f"[red]Error:[/red] {error.message}")
        if error.status_code:
            console.print(f"  HTTP Status: {error.status_code}")

    raise typer.Exit(1)
