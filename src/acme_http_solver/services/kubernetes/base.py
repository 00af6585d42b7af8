"""Base manager for the solver's Kubernetes API access.

Managers own one resource kind each. All API calls go through ``_call`` so
that every request carries the configured deadline and every failure leaves
the manager as a ``KubernetesError``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar

import structlog

if TYPE_CHECKING:
    from acme_http_solver.integrations.kubernetes.client import KubernetesClient

logger = structlog.get_logger()

T = TypeVar("T")


class K8sBaseManager:
    """Base class for Kubernetes service managers.

    Subclasses set ``_entity_name`` (bound into every log line) and
    ``_resource_type`` (used in translated error messages).

    Example:
        >>> class IngressStore(K8sBaseManager):
        ...     _entity_name = "ingress"
        ...     _resource_type = "Ingress"
    """

    _entity_name: str = ""
    _resource_type: str | None = None

    def __init__(self, client: KubernetesClient) -> None:
        """Initialize the manager.

        Args:
            client: Kubernetes API client instance.
        """
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    def _resolve_namespace(self, namespace: str | None) -> str:
        """Return ``namespace`` or the client's default namespace."""
        return namespace or self._client.default_namespace

    def _call(
        self,
        api_method: Callable[..., T],
        *args: Any,
        resource_name: str | None = None,
        **kwargs: Any,
    ) -> T:
        """Invoke an API method with the request deadline and error translation.

        Args:
            api_method: Bound method of a kubernetes API group.
            *args: Positional arguments for ``api_method``.
            resource_name: Name used in error context; defaults to the
                ``name`` keyword argument.
            **kwargs: Keyword arguments for ``api_method``. Its ``namespace``
                is also used in error context.

        Returns:
            Whatever ``api_method`` returns.

        Raises:
            KubernetesError: The translated failure.
        """
        try:
            return api_method(*args, _request_timeout=self._client.request_timeout, **kwargs)
        except Exception as e:
            self._handle_api_error(
                e,
                self._resource_type,
                resource_name or kwargs.get("name"),
                kwargs.get("namespace"),
            )

    def _handle_api_error(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> NoReturn:
        """Translate a Kubernetes API exception and re-raise.

        Raises:
            KubernetesError: Always raises an appropriate subclass.
        """
        raise self._client.translate_api_exception(
            e,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
