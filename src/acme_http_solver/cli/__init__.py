"""Command-line interface for the HTTP-01 ingress solver."""
