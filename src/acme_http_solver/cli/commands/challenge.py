"""Challenge commands: ensure, cleanup and find solver routing for a domain."""

from __future__ import annotations

import structlog
import typer

from acme_http_solver.cli.commands.base import (
    NamespaceOption,
    console,
    handle_k8s_error,
)
from acme_http_solver.cli.output import ingress_table
from acme_http_solver.integrations.kubernetes.client import KubernetesClient
from acme_http_solver.integrations.kubernetes.config import SolverConfig
from acme_http_solver.integrations.kubernetes.exceptions import KubernetesError
from acme_http_solver.integrations.kubernetes.models.networking import IngressSummary
from acme_http_solver.services.kubernetes.certificate_manager import CertificateManager
from acme_http_solver.services.kubernetes.ingress_store import IngressStore
from acme_http_solver.solver.exceptions import ChallengeConfigurationError, InvalidSelectorError
from acme_http_solver.solver.reconciler import IngressSolver

logger = structlog.get_logger()


def get_services() -> tuple[CertificateManager, IngressSolver]:
    """Create the certificate reader and solver from environment config."""
    config = SolverConfig.from_env()
    client = KubernetesClient(config)
    return (
        CertificateManager(client),
        IngressSolver.from_settings(IngressStore(client), config.solver),
    )


def ensure(
    certificate: str = typer.Argument(help="Certificate name"),
    domain: str = typer.Argument(help="Domain being validated"),
    service: str = typer.Option(..., "--service", "-s", help="Solver service name"),
    token: str = typer.Option(..., "--token", "-t", help="ACME challenge token"),
    namespace: NamespaceOption = None,
) -> None:
    """Route the challenge path for DOMAIN to the solver service.

    Examples:
        acme-http-solver ensure my-cert example.com -s cm-acme-http-solver-x -t TOKEN
    """
    try:
        certs, solver = get_services()
        crt = certs.get_certificate(certificate, namespace=namespace)
        ingress = solver.ensure(crt, service, domain, token)
        logger.info("ensure_complete", certificate=certificate, domain=domain)
        console.print(
            f"[green]Challenge path routed[/green] via ingress "
            f"[bold]{ingress.metadata.name}[/bold] in {ingress.metadata.namespace}"
        )
    except (ChallengeConfigurationError, InvalidSelectorError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None
    except KubernetesError as e:
        handle_k8s_error(e)


def cleanup(
    certificate: str = typer.Argument(help="Certificate name"),
    domain: str = typer.Argument(help="Domain being validated"),
    token: str = typer.Option(..., "--token", "-t", help="ACME challenge token"),
    namespace: NamespaceOption = None,
) -> None:
    """Remove the routing added for DOMAIN's challenge.

    Examples:
        acme-http-solver cleanup my-cert example.com -t TOKEN
    """
    try:
        certs, solver = get_services()
        crt = certs.get_certificate(certificate, namespace=namespace)
        solver.cleanup(crt, domain, token)
        logger.info("cleanup_complete", certificate=certificate, domain=domain)
        console.print(f"[green]Cleaned up[/green] challenge routing for {domain}")
    except InvalidSelectorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None
    except KubernetesError as e:
        handle_k8s_error(e)


def find(
    certificate: str = typer.Argument(help="Certificate name"),
    domain: str = typer.Argument(help="Domain being validated"),
    namespace: NamespaceOption = None,
) -> None:
    """List the dedicated solver ingresses for DOMAIN.

    Examples:
        acme-http-solver find my-cert example.com -n web
    """
    try:
        certs, solver = get_services()
        crt = certs.get_certificate(certificate, namespace=namespace)
        ingresses = solver.find(crt, domain)
        if not ingresses:
            console.print(f"[yellow]No solver ingresses found[/yellow] for {domain}")
            return
        summaries = [IngressSummary.from_k8s_object(ing) for ing in ingresses]
        console.print(ingress_table(summaries, title=f"Solver ingresses for {domain}"))
    except InvalidSelectorError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None
    except KubernetesError as e:
        handle_k8s_error(e)
