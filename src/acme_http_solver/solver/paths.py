"""Challenge path and route entry construction.

The validation path is a wire contract: the ACME server requests exactly
``/.well-known/acme-challenge/<token>`` and the solver backend serves exactly
that, so the ingress path must match it byte for byte.
"""

from __future__ import annotations

from collections.abc import Callable

from kubernetes.client import (
    V1HTTPIngressPath,
    V1IngressBackend,
    V1IngressServiceBackend,
    V1ServiceBackendPort,
)

HTTP_CHALLENGE_PATH = "/.well-known/acme-challenge"
ACME_SOLVER_LISTEN_PORT = 8089

PathFormatter = Callable[[str], str]


def default_path_formatter(token: str) -> str:
    """Return the HTTP-01 validation path for ``token``."""
    return f"{HTTP_CHALLENGE_PATH}/{token}"


class ChallengePathCodec:
    """Maps challenge tokens to ingress paths pointing at the solver service."""

    def __init__(
        self,
        formatter: PathFormatter = default_path_formatter,
        listen_port: int = ACME_SOLVER_LISTEN_PORT,
        path_type: str = "ImplementationSpecific",
    ) -> None:
        self._formatter = formatter
        self.listen_port = listen_port
        self.path_type = path_type

    def challenge_path(self, token: str) -> str:
        return self._formatter(token)

    def route_entry(self, token: str, service_name: str) -> V1HTTPIngressPath:
        """Build the ingress path entry routing ``token``'s path to ``service_name``."""
        return V1HTTPIngressPath(
            path=self.challenge_path(token),
            path_type=self.path_type,
            backend=V1IngressBackend(
                service=V1IngressServiceBackend(
                    name=service_name,
                    port=V1ServiceBackendPort(number=self.listen_port),
                ),
            ),
        )
