"""Solver exceptions."""

from __future__ import annotations

from acme_http_solver.integrations.kubernetes.exceptions import KubernetesError


class ChallengeConfigurationError(Exception):
    """Raised when a certificate carries no ACME challenge config for a domain."""

    def __init__(self, certificate: str, domain: str) -> None:
        """Initialize ChallengeConfigurationError.

        Args:
            certificate: ``namespace/name`` of the certificate.
            domain: The domain without configuration.
        """
        super().__init__(f"no ACME challenge configuration found for domain {domain!r}")
        self.certificate = certificate
        self.domain = domain


class InvalidSelectorError(ValueError):
    """Raised when a label key or value cannot be used in a label selector."""


class CleanupAggregateError(KubernetesError):
    """Raised when one or more solver ingresses could not be deleted.

    Attributes:
        errors: Every individual delete failure, in the order they occurred.
    """

    def __init__(self, errors: list[Exception], namespace: str | None = None) -> None:
        """Initialize CleanupAggregateError.

        Args:
            errors: The individual delete failures.
            namespace: Namespace the ingresses were deleted from.
        """
        if len(errors) == 1:
            message = str(errors[0])
        else:
            message = "[" + ", ".join(str(e) for e in errors) + "]"
        super().__init__(message=message, resource_type="Ingress", namespace=namespace)
        self.errors = errors

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        """Whether any of the individual failures is retryable."""
        return any(getattr(e, "retryable", False) for e in self.errors)
