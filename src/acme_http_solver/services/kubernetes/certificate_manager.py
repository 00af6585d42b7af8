"""Cert-manager Certificate reader.

Certificates are custom resources, so they are read through
``CustomObjectsApi`` as plain dicts and parsed into ``Certificate``.
"""

from __future__ import annotations

from acme_http_solver.integrations.kubernetes.models.certificate import (
    CERTIFICATE_GROUP,
    CERTIFICATE_PLURAL,
    CERTIFICATE_VERSION,
    Certificate,
)
from acme_http_solver.services.kubernetes.base import K8sBaseManager


class CertificateManager(K8sBaseManager):
    """Reads cert-manager Certificates for the solver."""

    _entity_name = "certificate"
    _resource_type = "Certificate"

    def get_certificate(self, name: str, namespace: str | None = None) -> Certificate:
        """Get a single Certificate by name.

        Args:
            name: Certificate name.
            namespace: Target namespace.

        Returns:
            The parsed certificate.
        """
        ns = self._resolve_namespace(namespace)
        self._log.debug("getting_certificate", name=name, namespace=ns)
        result = self._call(
            self._client.custom_objects.get_namespaced_custom_object,
            group=CERTIFICATE_GROUP,
            version=CERTIFICATE_VERSION,
            namespace=ns,
            plural=CERTIFICATE_PLURAL,
            name=name,
        )
        return Certificate.from_k8s_object(result)
