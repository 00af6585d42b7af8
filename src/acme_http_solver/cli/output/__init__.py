"""CLI output helpers."""

from acme_http_solver.cli.output.table import ingress_table

__all__ = ["ingress_table"]
