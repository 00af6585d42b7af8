"""Lookup of the solver ingresses created for a certificate and domain."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from acme_http_solver.integrations.kubernetes.models.base import is_controlled_by
from acme_http_solver.solver.labels import (
    LabelFunction,
    build_equality_selector,
    solver_labels,
)

if TYPE_CHECKING:
    from kubernetes.client import V1Ingress

    from acme_http_solver.integrations.kubernetes.models.certificate import Certificate
    from acme_http_solver.services.kubernetes.ingress_store import IngressStore

logger = structlog.get_logger()


class CertificateIngressLocator:
    """Finds ingresses that were created to solve HTTP-01 challenges.

    An ingress is only returned if it carries the solver labels for the
    (certificate, domain) pair *and* is controlled by the certificate.
    Ingresses that match the labels but belong to someone else are skipped.
    """

    def __init__(
        self,
        store: IngressStore,
        label_fn: LabelFunction = solver_labels,
    ) -> None:
        self._store = store
        self._label_fn = label_fn
        self._log = logger.bind(component="locator")

    def find(self, certificate: Certificate, domain: str) -> list[V1Ingress]:
        """Return the solver ingresses for ``domain`` of ``certificate``.

        Args:
            certificate: The certificate being validated.
            domain: The domain being validated.

        Returns:
            Matching ingresses; empty if the certificate has no active order.

        Raises:
            InvalidSelectorError: If the labels cannot form a selector.
            KubernetesError: If listing ingresses fails.
        """
        if not certificate.has_active_order():
            return []

        wanted = self._label_fn(certificate, domain)
        selector = build_equality_selector(wanted)
        ingresses = self._store.list(certificate.namespace, selector)

        relevant = []
        for ingress in ingresses:
            if not is_controlled_by(ingress, certificate.uid):
                self._log.info(
                    "skipping_unowned_ingress",
                    ingress=ingress.metadata.name,
                    certificate=certificate.name,
                    namespace=certificate.namespace,
                )
                continue
            labels = ingress.metadata.labels or {}
            # every wanted label must match, not only those the store filtered on
            if any(labels.get(key) != value for key, value in wanted.items()):
                continue
            relevant.append(ingress)

        self._log.debug(
            "found_solver_ingresses",
            certificate=certificate.name,
            domain=domain,
            count=len(relevant),
        )
        return relevant
