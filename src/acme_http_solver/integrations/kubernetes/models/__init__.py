"""Kubernetes resource models."""

from acme_http_solver.integrations.kubernetes.models.base import (
    K8sEntityBase,
    OwnerReference,
    controller_reference,
    is_controlled_by,
)
from acme_http_solver.integrations.kubernetes.models.certificate import (
    ACMECertificateDNS01Config,
    ACMECertificateDomainConfig,
    ACMECertificateHTTP01Config,
    Certificate,
)
from acme_http_solver.integrations.kubernetes.models.networking import (
    IngressRule,
    IngressSummary,
)

__all__ = [
    "ACMECertificateDNS01Config",
    "ACMECertificateDomainConfig",
    "ACMECertificateHTTP01Config",
    "Certificate",
    "IngressRule",
    "IngressSummary",
    "K8sEntityBase",
    "OwnerReference",
    "controller_reference",
    "is_controlled_by",
]
