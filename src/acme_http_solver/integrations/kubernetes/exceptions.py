"""Kubernetes integration custom exceptions.

Every failure talking to the API server surfaces as a ``KubernetesError``.
``retryable`` tells the reconciliation loop driving the solver whether
re-running the same operation later can succeed without a change in input.
"""

from __future__ import annotations


def _describe(
    resource_type: str | None,
    resource_name: str | None,
    namespace: str | None,
) -> str | None:
    if not (resource_type and resource_name):
        return None
    text = f"{resource_type} '{resource_name}'"
    if namespace:
        text += f" in namespace '{namespace}'"
    return text


class KubernetesError(Exception):
    """Base exception for Kubernetes operations.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the API server, if any.
        resource_type: Kind of resource involved (e.g. "Ingress").
        resource_name: Name of the resource involved.
        namespace: Namespace of the resource.
        retryable: Whether retrying the same call later may succeed.
    """

    retryable: bool = False

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.namespace = namespace

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.resource_type and self.resource_name:
            loc = f"[{self.resource_type}/{self.resource_name}"
            if self.namespace:
                loc += f" in {self.namespace}"
            loc += "]"
            parts.append(loc)
        return " ".join(parts)


class KubernetesConnectionError(KubernetesError):
    """The API server could not be reached or no cluster config was found."""

    retryable = True

    def __init__(
        self,
        message: str = "Failed to connect to Kubernetes cluster",
        original_error: Exception | None = None,
    ) -> None:
        """Initialize KubernetesConnectionError.

        Args:
            message: Human-readable error message.
            original_error: The transport or config error behind this one.
        """
        super().__init__(message=message)
        self.original_error = original_error


class KubernetesAuthError(KubernetesError):
    """The request was rejected as unauthenticated or forbidden (401/403)."""

    def __init__(
        self,
        message: str = "Kubernetes authentication/authorization failed",
        status_code: int | None = 401,
        reason: str | None = None,
    ) -> None:
        super().__init__(message=message, status_code=status_code)
        self.reason = reason


class KubernetesNotFoundError(KubernetesError):
    """The requested resource does not exist (404)."""

    def __init__(
        self,
        message: str = "Kubernetes resource not found",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        if described := _describe(resource_type, resource_name, namespace):
            message = f"{described} not found"
        super().__init__(
            message=message,
            status_code=404,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesValidationError(KubernetesError):
    """The API server rejected the object as invalid (400/422)."""

    def __init__(
        self,
        message: str = "Invalid resource specification",
        status_code: int | None = 422,
    ) -> None:
        super().__init__(message=message, status_code=status_code)


class KubernetesConflictError(KubernetesError):
    """The write conflicted with the stored object (409).

    Raised both when a resource already exists and when an update carried a
    stale ``resourceVersion`` because another writer modified the object
    after it was read.
    """

    retryable = True

    def __init__(
        self,
        message: str = "Resource conflict",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize KubernetesConflictError.

        Args:
            message: Used when no resource is named.
            resource_type: Kind of resource.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.
        """
        if described := _describe(resource_type, resource_name, namespace):
            message = f"{described} conflicts with the stored object"
        super().__init__(
            message=message,
            status_code=409,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesTimeoutError(KubernetesError):
    """A request exceeded its deadline, client side or at the API gateway."""

    retryable = True

    def __init__(
        self,
        message: str = "Kubernetes operation timed out",
        timeout_seconds: float | None = None,
    ) -> None:
        if timeout_seconds:
            message = f"{message} (after {timeout_seconds}s)"
        super().__init__(message=message)
        self.timeout_seconds = timeout_seconds
