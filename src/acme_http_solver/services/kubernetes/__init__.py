"""Kubernetes service module.

Managers for the resources the HTTP-01 solver reads and writes.
"""

from acme_http_solver.services.kubernetes.certificate_manager import CertificateManager
from acme_http_solver.services.kubernetes.ingress_store import IngressStore

__all__ = [
    "CertificateManager",
    "IngressStore",
]
