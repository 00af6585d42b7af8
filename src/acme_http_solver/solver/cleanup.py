"""Removal of everything the solver added for a challenge.

Dedicated ingresses are deleted outright. On a user-owned ingress only the
single path entry the solver inserted is removed again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from acme_http_solver.integrations.kubernetes.exceptions import KubernetesNotFoundError
from acme_http_solver.integrations.kubernetes.models.certificate import (
    ACMECertificateHTTP01Config,
)
from acme_http_solver.solver.exceptions import CleanupAggregateError
from acme_http_solver.solver.paths import ChallengePathCodec
from acme_http_solver.solver.retry import DEFAULT_CONFLICT_RETRY_ATTEMPTS, retry_on_conflict

if TYPE_CHECKING:
    from kubernetes.client import V1Ingress

    from acme_http_solver.integrations.kubernetes.models.certificate import Certificate
    from acme_http_solver.services.kubernetes.ingress_store import IngressStore
    from acme_http_solver.solver.locator import CertificateIngressLocator

logger = structlog.get_logger()


def remove_challenge_path(ingress: V1Ingress, domain: str, path: str) -> bool:
    """Remove the entry for ``path`` from the rule for ``domain``.

    At most one entry is removed: scanning stops at the first match, and the
    remaining entries keep their order. A matching rule without an ``http``
    block also stops the scan. Removing the last entry drops the rule's
    ``http`` block but keeps the host rule. ``ingress`` must be a freshly
    fetched object not shared with other threads.

    Returns:
        True if an entry was removed.
    """
    rules = ingress.spec.rules if ingress.spec else None
    for rule in rules or []:
        if rule.host != domain:
            continue
        if rule.http is None:
            return False
        paths = rule.http.paths or []
        for i, existing in enumerate(paths):
            if existing.path == path:
                remaining = [p for j, p in enumerate(paths) if j != i]
                # networking/v1 rejects an http block with no paths
                if remaining:
                    rule.http.paths = remaining
                else:
                    rule.http = None
                return True
    return False


class IngressCleanup:
    """Undoes what ``IngressSolver.ensure`` did for one challenge."""

    def __init__(
        self,
        store: IngressStore,
        locator: CertificateIngressLocator,
        codec: ChallengePathCodec | None = None,
        conflict_retry_attempts: int = DEFAULT_CONFLICT_RETRY_ATTEMPTS,
    ) -> None:
        self._store = store
        self._locator = locator
        self._codec = codec or ChallengePathCodec()
        self._conflict_retry_attempts = conflict_retry_attempts
        self._log = logger.bind(component="cleanup")

    def cleanup(self, certificate: Certificate, domain: str, token: str) -> None:
        """Remove the routing added for ``domain`` and ``token``.

        Calling this repeatedly is safe: ingresses or paths that are already
        gone are not an error.

        Raises:
            CleanupAggregateError: If deleting one or more solver ingresses failed.
            KubernetesError: If reading or updating a named ingress failed.
        """
        domain_cfg = certificate.config_for_domain(domain)
        http01 = None
        if domain_cfg is not None:
            http01 = domain_cfg.http01
        if http01 is None:
            http01 = ACMECertificateHTTP01Config()

        if not http01.ingress:
            self._delete_solver_ingresses(certificate, domain)
            return

        self._remove_from_named_ingress(certificate, domain, token, http01.ingress)

    def _delete_solver_ingresses(self, certificate: Certificate, domain: str) -> None:
        ingresses = self._locator.find(certificate, domain)

        errors: list[Exception] = []
        for ingress in ingresses:
            try:
                self._store.delete(ingress.metadata.namespace, ingress.metadata.name)
            except Exception as e:
                self._log.warning(
                    "solver_ingress_delete_failed",
                    ingress=ingress.metadata.name,
                    namespace=ingress.metadata.namespace,
                    error=str(e),
                )
                errors.append(e)

        if errors:
            raise CleanupAggregateError(errors, namespace=certificate.namespace)

    def _remove_from_named_ingress(
        self,
        certificate: Certificate,
        domain: str,
        token: str,
        ingress_name: str,
    ) -> None:
        path = self._codec.challenge_path(token)

        @retry_on_conflict(self._conflict_retry_attempts)
        def _fetch_remove_update() -> None:
            try:
                ingress = self._store.get(certificate.namespace, ingress_name)
            except KubernetesNotFoundError as e:
                self._log.info(
                    "challenge_ingress_already_gone",
                    ingress=ingress_name,
                    namespace=certificate.namespace,
                    error=str(e),
                )
                return

            if not remove_challenge_path(ingress, domain, path):
                self._log.debug(
                    "challenge_path_absent",
                    ingress=ingress_name,
                    namespace=certificate.namespace,
                    domain=domain,
                    path=path,
                )
                return

            self._store.update(ingress)
            self._log.info(
                "removed_challenge_path",
                ingress=ingress_name,
                namespace=certificate.namespace,
                domain=domain,
                path=path,
            )

        _fetch_remove_update()
