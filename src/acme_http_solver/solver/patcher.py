"""Insertion of a challenge path into an existing, user-owned ingress.

Only the first rule whose host equals the domain is touched, and within it
only the path entry carrying the challenge path. Everything else on the
ingress is left exactly as it was read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from kubernetes.client import V1HTTPIngressRuleValue, V1IngressRule, V1IngressSpec

from acme_http_solver.solver.paths import ChallengePathCodec
from acme_http_solver.solver.retry import DEFAULT_CONFLICT_RETRY_ATTEMPTS, retry_on_conflict

if TYPE_CHECKING:
    from kubernetes.client import V1HTTPIngressPath, V1Ingress

    from acme_http_solver.integrations.kubernetes.models.certificate import (
        ACMECertificateHTTP01Config,
        Certificate,
    )
    from acme_http_solver.services.kubernetes.ingress_store import IngressStore

logger = structlog.get_logger()


def merge_challenge_path(ingress: V1Ingress, domain: str, entry: V1HTTPIngressPath) -> None:
    """Merge ``entry`` into the rule for ``domain`` on ``ingress``, in place.

    An existing entry with the same path is overwritten where it stands, so
    retrying a challenge never produces duplicate paths. If no rule exists
    for ``domain`` a new one is appended. ``ingress`` must be a freshly
    fetched object not shared with other threads.
    """
    if ingress.spec is None:
        ingress.spec = V1IngressSpec()
    if ingress.spec.rules is None:
        ingress.spec.rules = []

    for rule in ingress.spec.rules:
        if rule.host != domain:
            continue
        if rule.http is None:
            rule.http = V1HTTPIngressRuleValue(paths=[])
        paths = rule.http.paths
        for i, existing in enumerate(paths):
            # a second entry for the same path confuses ingress controllers
            if existing.path == entry.path:
                paths[i] = entry
                return
        paths.append(entry)
        return

    ingress.spec.rules.append(
        V1IngressRule(host=domain, http=V1HTTPIngressRuleValue(paths=[entry])),
    )


class IngressRulePatcher:
    """Adds the challenge path to the ingress named in the HTTP-01 config."""

    def __init__(
        self,
        store: IngressStore,
        codec: ChallengePathCodec | None = None,
        conflict_retry_attempts: int = DEFAULT_CONFLICT_RETRY_ATTEMPTS,
    ) -> None:
        self._store = store
        self._codec = codec or ChallengePathCodec()
        self._conflict_retry_attempts = conflict_retry_attempts
        self._log = logger.bind(component="patcher")

    def patch(
        self,
        certificate: Certificate,
        service_name: str,
        domain: str,
        token: str,
        http01: ACMECertificateHTTP01Config,
    ) -> V1Ingress:
        """Route the challenge path for ``token`` through ``http01.ingress``.

        The named ingress must already exist; a not-found error is
        propagated. If the ingress changes between read and write the whole
        read-merge-write cycle is retried.

        Args:
            certificate: The certificate being validated.
            service_name: Solver service the path routes to.
            domain: The domain being validated.
            token: The challenge token.
            http01: HTTP-01 config naming the ingress.

        Returns:
            The updated ingress.
        """
        entry = self._codec.route_entry(token, service_name)

        @retry_on_conflict(self._conflict_retry_attempts)
        def _fetch_merge_update() -> V1Ingress:
            ingress = self._store.get(certificate.namespace, http01.ingress)
            merge_challenge_path(ingress, domain, entry)
            return self._store.update(ingress)

        result = _fetch_merge_update()
        self._log.info(
            "added_challenge_path",
            ingress=http01.ingress,
            namespace=certificate.namespace,
            domain=domain,
            path=entry.path,
        )
        return result
