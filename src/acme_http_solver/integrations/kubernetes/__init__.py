"""Kubernetes integration - API client and configuration models."""

from acme_http_solver.integrations.kubernetes.client import KubernetesClient
from acme_http_solver.integrations.kubernetes.config import (
    ClusterConfig,
    SolverConfig,
    SolverSettings,
)
from acme_http_solver.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
)

__all__ = [
    "ClusterConfig",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesConflictError",
    "KubernetesConnectionError",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesTimeoutError",
    "KubernetesValidationError",
    "SolverConfig",
    "SolverSettings",
]
