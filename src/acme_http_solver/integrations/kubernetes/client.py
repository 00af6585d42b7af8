"""Kubernetes API client wrapper for the solver.

Loads cluster credentials once, hands out the two API groups the solver uses
(networking/v1 for Ingresses, custom objects for Certificates) and turns
every failure the SDK or its transport can raise into a ``KubernetesError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from acme_http_solver.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import ApiException, CustomObjectsApi, NetworkingV1Api

    from acme_http_solver.integrations.kubernetes.config import SolverConfig

logger = structlog.get_logger()


def _status_error(
    e: ApiException,
    resource_type: str | None,
    resource_name: str | None,
    namespace: str | None,
) -> KubernetesError:
    """Map an ``ApiException`` to an error by its HTTP status."""
    status = e.status
    resource = {
        "resource_type": resource_type,
        "resource_name": resource_name,
        "namespace": namespace,
    }

    if status in (401, 403):
        return KubernetesAuthError(
            message=e.reason or "Authentication/authorization failed",
            status_code=status,
            reason=e.reason,
        )
    if status == 404:
        return KubernetesNotFoundError(**resource)
    if status == 409:
        return KubernetesConflictError(**resource)
    if status in (400, 422):
        return KubernetesValidationError(
            message=e.reason or "Validation failed",
            status_code=status,
        )
    if status == 504:
        return KubernetesTimeoutError(message=e.reason or "Kubernetes API gateway timeout")
    return KubernetesError(
        message=e.reason or f"Kubernetes API error: {status}",
        status_code=status,
        **resource,
    )


class KubernetesClient:
    """Kubernetes API access for the solver.

    Credentials come from the configured kubeconfig and context, falling
    back to the pod's service account when running inside a cluster.

    Example:
        ```python
        from acme_http_solver.integrations.kubernetes import KubernetesClient, SolverConfig

        with KubernetesClient(SolverConfig.from_env()) as client:
            store = IngressStore(client)
        ```
    """

    def __init__(self, config: SolverConfig) -> None:
        """Initialize the client and load cluster credentials.

        Args:
            config: Complete solver configuration.

        Raises:
            KubernetesConnectionError: If neither kubeconfig nor in-cluster
                credentials are available.
        """
        self._config = config
        self._networking_v1: NetworkingV1Api | None = None
        self._custom_objects: CustomObjectsApi | None = None
        self._current_context = self._load_config()

        logger.info(
            "kubernetes_client_initialized",
            context=self._current_context,
            default_namespace=self.default_namespace,
            request_timeout=self.request_timeout,
        )

    def _load_config(self) -> str | None:
        """Load credentials and return the name of the context in use."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        cluster = self._config.cluster
        try:
            config.load_kube_config(config_file=cluster.kubeconfig, context=cluster.context)
        except ConfigException as kube_error:
            logger.debug("kubeconfig_unavailable", error=str(kube_error))
        else:
            logger.debug("loaded_kubeconfig", context=cluster.context)
            return cluster.context

        try:
            config.load_incluster_config()
        except ConfigException as e:
            raise KubernetesConnectionError(
                message="Cannot load Kubernetes configuration. "
                "Ensure kubeconfig exists or running inside a cluster.",
                original_error=e,
            ) from e
        logger.debug("loaded_incluster_config")
        return "in-cluster"

    @property
    def networking_v1(self) -> NetworkingV1Api:
        """NetworkingV1Api, created on first use."""
        if self._networking_v1 is None:
            from kubernetes.client import NetworkingV1Api

            self._networking_v1 = NetworkingV1Api()
        return self._networking_v1

    @property
    def custom_objects(self) -> CustomObjectsApi:
        """CustomObjectsApi, created on first use."""
        if self._custom_objects is None:
            from kubernetes.client import CustomObjectsApi

            self._custom_objects = CustomObjectsApi()
        return self._custom_objects

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate any exception raised by an API call.

        ``ApiException`` is mapped by status code. urllib3 timeouts become
        ``KubernetesTimeoutError``, also when wrapped in ``MaxRetryError``,
        and other transport failures become ``KubernetesConnectionError``.
        Errors that already are a ``KubernetesError`` are returned unchanged.

        Args:
            e: The original exception.
            resource_type: Kind of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException
        from urllib3.exceptions import (
            HTTPError,
            MaxRetryError,
            NewConnectionError,
            TimeoutError,
        )

        if isinstance(e, KubernetesError):
            return e
        if isinstance(e, ApiException):
            return _status_error(e, resource_type, resource_name, namespace)
        # the default retry policy wraps the last transport error
        cause = e.reason if isinstance(e, MaxRetryError) and e.reason else e
        # urllib3 derives NewConnectionError from ConnectTimeoutError
        if isinstance(cause, TimeoutError) and not isinstance(cause, NewConnectionError):
            return KubernetesTimeoutError(message=f"Request timed out: {e}")
        if isinstance(e, HTTPError):
            return KubernetesConnectionError(
                message=f"Kubernetes API unreachable: {e}",
                original_error=e,
            )
        return KubernetesError(
            message=str(e),
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    @property
    def default_namespace(self) -> str:
        """Namespace used when a call names none."""
        return self._config.cluster.namespace

    @property
    def request_timeout(self) -> float:
        """Per-request deadline in seconds."""
        return self._config.cluster.request_timeout

    def get_current_context(self) -> str:
        """Return the kubeconfig context, ``in-cluster`` or ``unknown``."""
        return self._current_context or "unknown"

    def close(self) -> None:
        """Drop the cached API group instances."""
        self._networking_v1 = None
        self._custom_objects = None
        logger.debug("kubernetes_client_closed")

    def __enter__(self) -> KubernetesClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
