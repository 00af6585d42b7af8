"""Table rendering for solver ingresses."""

from __future__ import annotations

from rich.table import Table

from acme_http_solver.integrations.kubernetes.models.networking import IngressSummary


def ingress_table(ingresses: list[IngressSummary], title: str = "Solver Ingresses") -> Table:
    """Render ingress summaries as a rich table, one row per host."""
    table = Table(title=title)
    table.add_column("Name", style="cyan", overflow="fold")
    table.add_column("Namespace", overflow="fold")
    table.add_column("Host", overflow="fold")
    table.add_column("Paths", overflow="fold")
    table.add_column("Class", style="dim")
    table.add_column("Age", style="dim", no_wrap=True)

    for ing in ingresses:
        for rule in ing.rules or [None]:
            table.add_row(
                ing.name,
                ing.namespace or "",
                (rule.host or "*") if rule else "",
                "\n".join(rule.paths) if rule else "",
                ing.class_name or "",
                ing.age,
            )
    return table
