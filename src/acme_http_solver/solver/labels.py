"""Labels identifying the ingresses created for a (certificate, domain) pair.

The same label set is applied to every solver ingress and used as the
selector to find them again, so it must be stable for a given pair.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from acme_http_solver.solver.exceptions import InvalidSelectorError

if TYPE_CHECKING:
    from acme_http_solver.integrations.kubernetes.models.certificate import Certificate

CERT_NAME_LABEL_KEY = "certmanager.k8s.io/certificate"
DOMAIN_LABEL_KEY = "certmanager.k8s.io/acme-http-domain"

LabelFunction = Callable[["Certificate", str], dict[str, str]]

_NAME_RE = re.compile(r"^([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9]$")
_PREFIX_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")


def solver_labels(certificate: Certificate, domain: str) -> dict[str, str]:
    """Return the labels for ingresses solving ``domain`` of ``certificate``."""
    return {
        CERT_NAME_LABEL_KEY: certificate.name,
        DOMAIN_LABEL_KEY: domain,
    }


def _validate_key(key: str) -> None:
    prefix, _, name = key.rpartition("/")
    if prefix and (len(prefix) > 253 or not _PREFIX_RE.match(prefix)):
        raise InvalidSelectorError(f"invalid label key prefix {prefix!r} in {key!r}")
    if len(name) > 63 or not _NAME_RE.match(name):
        raise InvalidSelectorError(f"invalid label key {key!r}")


def _validate_value(key: str, value: str) -> None:
    if value and (len(value) > 63 or not _NAME_RE.match(value)):
        raise InvalidSelectorError(f"invalid value {value!r} for label {key!r}")


def build_equality_selector(labels: Mapping[str, str]) -> str:
    """Build an equality-only label selector such as ``a=1,b=2``.

    Keys are sorted so the selector is reproducible.

    Raises:
        InvalidSelectorError: If a key or value is not a valid label.
    """
    requirements = []
    for key in sorted(labels):
        value = labels[key]
        _validate_key(key)
        _validate_value(key, value)
        requirements.append(f"{key}={value}")
    return ",".join(requirements)
