"""Ingress store backed by the Kubernetes networking/v1 API.

This is the only component of the solver that talks to the API server about
Ingresses. ``update`` replaces the object conditioned on the
``resourceVersion`` it was read at, so a concurrent writer surfaces as
``KubernetesConflictError`` instead of being silently overwritten.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from acme_http_solver.services.kubernetes.base import K8sBaseManager

if TYPE_CHECKING:
    from kubernetes.client import V1Ingress


class IngressStore(K8sBaseManager):
    """Get, list, create, update and delete Ingresses."""

    _entity_name = "ingress"
    _resource_type = "Ingress"

    def get(self, namespace: str | None, name: str) -> V1Ingress:
        """Fetch a single ingress.

        Raises:
            KubernetesNotFoundError: If the ingress does not exist.
        """
        ns = self._resolve_namespace(namespace)
        self._log.debug("getting_ingress", name=name, namespace=ns)
        return self._call(
            self._client.networking_v1.read_namespaced_ingress,
            name=name,
            namespace=ns,
        )

    def list(
        self,
        namespace: str | None,
        label_selector: str | None = None,
    ) -> builtins.list[V1Ingress]:
        """List ingresses in a namespace.

        Args:
            namespace: Namespace to list in.
            label_selector: Kubernetes label selector string.

        Returns:
            The matching ingresses.
        """
        ns = self._resolve_namespace(namespace)
        self._log.debug("listing_ingresses", namespace=ns, label_selector=label_selector)
        result = self._call(
            self._client.networking_v1.list_namespaced_ingress,
            namespace=ns,
            label_selector=label_selector or "",
        )

        items = builtins.list(result.items or [])
        self._log.debug("listed_ingresses", namespace=ns, count=len(items))
        return items

    def create(self, ingress: V1Ingress) -> V1Ingress:
        """Create an ingress.

        The body may use ``metadata.generate_name`` instead of a fixed name;
        the returned object carries the name the server assigned.
        """
        ns = self._resolve_namespace(ingress.metadata.namespace)
        name = ingress.metadata.name or ingress.metadata.generate_name
        self._log.info("creating_ingress", name=name, namespace=ns)
        result = self._call(
            self._client.networking_v1.create_namespaced_ingress,
            namespace=ns,
            body=ingress,
            resource_name=name,
        )

        self._log.info("created_ingress", name=result.metadata.name, namespace=ns)
        return result

    def update(self, ingress: V1Ingress) -> V1Ingress:
        """Replace an ingress with the given object.

        The object's ``metadata.resource_version`` is sent along, so the
        replace fails with a conflict if the stored object changed since it
        was read.

        Args:
            ingress: A previously fetched ingress with local modifications.

        Returns:
            The updated ingress.

        Raises:
            KubernetesConflictError: If the ingress was modified concurrently.
        """
        ns = self._resolve_namespace(ingress.metadata.namespace)
        name = ingress.metadata.name
        self._log.info(
            "updating_ingress",
            name=name,
            namespace=ns,
            resource_version=ingress.metadata.resource_version,
        )
        result = self._call(
            self._client.networking_v1.replace_namespaced_ingress,
            name=name,
            namespace=ns,
            body=ingress,
        )

        self._log.info("updated_ingress", name=name, namespace=ns)
        return result

    def delete(self, namespace: str | None, name: str) -> None:
        """Delete an ingress."""
        ns = self._resolve_namespace(namespace)
        self._log.info("deleting_ingress", name=name, namespace=ns)
        self._call(
            self._client.networking_v1.delete_namespaced_ingress,
            name=name,
            namespace=ns,
        )
        self._log.info("deleted_ingress", name=name, namespace=ns)
