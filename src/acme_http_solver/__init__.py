"""acme-http-solver - Ingress routing for ACME HTTP-01 challenges on Kubernetes."""

__version__ = "0.1.0"
