"""Entry point for routing HTTP-01 challenge requests through Ingresses.

The solver is driven by an external, level-triggered control loop: it calls
``ensure`` before asking the ACME server to validate a challenge, and
``cleanup`` once the challenge is finished or the certificate goes away.
Both calls are synchronous and each one reads fresh state from the API
server; nothing is cached between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from acme_http_solver.integrations.kubernetes.models.certificate import (
    ACMECertificateHTTP01Config,
)
from acme_http_solver.solver.builder import DEFAULT_NAME_PREFIX, SolverIngressBuilder
from acme_http_solver.solver.cleanup import IngressCleanup
from acme_http_solver.solver.exceptions import ChallengeConfigurationError
from acme_http_solver.solver.labels import LabelFunction, solver_labels
from acme_http_solver.solver.locator import CertificateIngressLocator
from acme_http_solver.solver.patcher import IngressRulePatcher
from acme_http_solver.solver.paths import ChallengePathCodec
from acme_http_solver.solver.retry import DEFAULT_CONFLICT_RETRY_ATTEMPTS

if TYPE_CHECKING:
    from kubernetes.client import V1Ingress

    from acme_http_solver.integrations.kubernetes.config import SolverSettings
    from acme_http_solver.integrations.kubernetes.models.certificate import Certificate
    from acme_http_solver.services.kubernetes.ingress_store import IngressStore

logger = structlog.get_logger()


class IngressSolver:
    """Ensures and cleans up the ingress routing for HTTP-01 challenges.

    Example:
        >>> solver = IngressSolver(IngressStore(client))
        >>> solver.ensure(certificate, "cm-acme-http-solver-abc", "example.com", token)
        >>> solver.cleanup(certificate, "example.com", token)
    """

    def __init__(
        self,
        store: IngressStore,
        *,
        codec: ChallengePathCodec | None = None,
        label_fn: LabelFunction = solver_labels,
        name_prefix: str = DEFAULT_NAME_PREFIX,
        conflict_retry_attempts: int = DEFAULT_CONFLICT_RETRY_ATTEMPTS,
    ) -> None:
        codec = codec or ChallengePathCodec()
        self.codec = codec
        self.locator = CertificateIngressLocator(store, label_fn=label_fn)
        self.builder = SolverIngressBuilder(
            store, codec=codec, label_fn=label_fn, name_prefix=name_prefix
        )
        self.patcher = IngressRulePatcher(
            store, codec=codec, conflict_retry_attempts=conflict_retry_attempts
        )
        self.cleaner = IngressCleanup(
            store,
            self.locator,
            codec=codec,
            conflict_retry_attempts=conflict_retry_attempts,
        )
        self._log = logger.bind(component="solver")

    @classmethod
    def from_settings(cls, store: IngressStore, settings: SolverSettings) -> IngressSolver:
        """Create a solver configured from ``SolverSettings``."""
        return cls(
            store,
            codec=ChallengePathCodec(
                listen_port=settings.listen_port,
                path_type=settings.path_type,
            ),
            name_prefix=settings.name_prefix,
            conflict_retry_attempts=settings.conflict_retry_attempts,
        )

    def ensure(
        self,
        certificate: Certificate,
        service_name: str,
        domain: str,
        token: str,
    ) -> V1Ingress:
        """Make sure requests for the challenge path reach ``service_name``.

        If the domain's HTTP-01 config names an existing ingress the challenge
        path is merged into it; otherwise a dedicated ingress is created. No
        prior state is consulted here: idempotence comes from the merge and
        from the caller's reconciliation loop.

        Raises:
            ChallengeConfigurationError: If the certificate has no ACME config
                for ``domain``.
        """
        domain_cfg = certificate.config_for_domain(domain)
        if domain_cfg is None:
            raise ChallengeConfigurationError(
                f"{certificate.namespace}/{certificate.name}", domain
            )
        http01 = domain_cfg.http01 or ACMECertificateHTTP01Config()

        self._log.debug(
            "ensuring_challenge_ingress",
            certificate=certificate.name,
            namespace=certificate.namespace,
            domain=domain,
            existing_ingress=http01.ingress or None,
        )
        if http01.ingress:
            return self.patcher.patch(certificate, service_name, domain, token, http01)
        return self.builder.create(certificate, service_name, domain, token, http01)

    def cleanup(self, certificate: Certificate, domain: str, token: str) -> None:
        """Remove the routing previously added by ``ensure``."""
        self.cleaner.cleanup(certificate, domain, token)

    def find(self, certificate: Certificate, domain: str) -> list[V1Ingress]:
        """Return the dedicated solver ingresses for ``domain``."""
        return self.locator.find(certificate, domain)
