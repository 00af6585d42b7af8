"""Creation of dedicated solver ingresses."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from kubernetes.client import (
    V1HTTPIngressRuleValue,
    V1Ingress,
    V1IngressRule,
    V1IngressSpec,
    V1ObjectMeta,
    V1OwnerReference,
)

from acme_http_solver.solver.labels import LabelFunction, solver_labels
from acme_http_solver.solver.paths import ChallengePathCodec

if TYPE_CHECKING:
    from acme_http_solver.integrations.kubernetes.models.certificate import (
        ACMECertificateHTTP01Config,
        Certificate,
    )
    from acme_http_solver.services.kubernetes.ingress_store import IngressStore

logger = structlog.get_logger()

INGRESS_CLASS_ANNOTATION = "kubernetes.io/ingress.class"
DEFAULT_NAME_PREFIX = "cm-acme-http-solver-"


def certificate_owner_reference(certificate: Certificate) -> V1OwnerReference:
    """Return a controller owner reference pointing at ``certificate``."""
    return V1OwnerReference(
        api_version=certificate.api_version,
        kind=certificate.kind,
        name=certificate.name,
        uid=certificate.uid,
        controller=True,
        block_owner_deletion=True,
    )


class SolverIngressBuilder:
    """Creates an ingress owned by the certificate that routes one challenge path."""

    def __init__(
        self,
        store: IngressStore,
        codec: ChallengePathCodec | None = None,
        label_fn: LabelFunction = solver_labels,
        name_prefix: str = DEFAULT_NAME_PREFIX,
    ) -> None:
        self._store = store
        self._codec = codec or ChallengePathCodec()
        self._label_fn = label_fn
        self._name_prefix = name_prefix
        self._log = logger.bind(component="builder")

    def build(
        self,
        certificate: Certificate,
        service_name: str,
        domain: str,
        token: str,
        http01: ACMECertificateHTTP01Config,
    ) -> V1Ingress:
        """Build, without creating, the dedicated ingress for a challenge."""
        annotations: dict[str, str] = {}
        if http01.ingress_class:
            annotations[INGRESS_CLASS_ANNOTATION] = http01.ingress_class

        return V1Ingress(
            api_version="networking.k8s.io/v1",
            kind="Ingress",
            metadata=V1ObjectMeta(
                # generated names keep concurrent creates for one domain apart
                generate_name=self._name_prefix,
                namespace=certificate.namespace,
                labels=self._label_fn(certificate, domain),
                annotations=annotations,
                owner_references=[certificate_owner_reference(certificate)],
            ),
            spec=V1IngressSpec(
                rules=[
                    V1IngressRule(
                        host=domain,
                        http=V1HTTPIngressRuleValue(
                            paths=[self._codec.route_entry(token, service_name)],
                        ),
                    ),
                ],
            ),
        )

    def create(
        self,
        certificate: Certificate,
        service_name: str,
        domain: str,
        token: str,
        http01: ACMECertificateHTTP01Config,
    ) -> V1Ingress:
        """Create a dedicated ingress solving ``domain`` for ``certificate``.

        Store errors are propagated unchanged.
        """
        self._log.debug(
            "creating_solver_ingress",
            certificate=certificate.name,
            namespace=certificate.namespace,
            domain=domain,
        )
        ingress = self._store.create(
            self.build(certificate, service_name, domain, token, http01),
        )
        self._log.info(
            "created_solver_ingress",
            ingress=ingress.metadata.name,
            namespace=certificate.namespace,
            domain=domain,
        )
        return ingress
