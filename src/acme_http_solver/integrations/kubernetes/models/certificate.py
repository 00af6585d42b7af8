"""Cert-manager Certificate model.

Certificates are read through ``CustomObjectsApi`` which returns raw ``dict``
objects rather than typed SDK classes, so ``from_k8s_object`` uses
``dict.get()`` instead of ``getattr()``.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from acme_http_solver.integrations.kubernetes.models.base import K8sEntityBase

CERTIFICATE_GROUP = "certmanager.k8s.io"
CERTIFICATE_VERSION = "v1alpha1"
CERTIFICATE_KIND = "Certificate"
CERTIFICATE_PLURAL = "certificates"


class ACMECertificateHTTP01Config(BaseModel):
    """HTTP-01 solver settings for a group of domains.

    ``ingress`` names an existing, user-owned Ingress to patch. When it is
    empty the solver creates a dedicated Ingress, optionally annotated with
    ``ingress_class``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    ingress: str = Field(default="", description="Existing Ingress to add the challenge path to")
    ingress_class: str | None = Field(
        default=None,
        alias="ingressClass",
        description="Ingress class for dedicated solver ingresses",
    )


class ACMECertificateDNS01Config(BaseModel):
    """DNS-01 solver settings for a group of domains."""

    model_config = ConfigDict(extra="ignore")

    provider: str = Field(default="", description="DNS provider name")


class ACMECertificateDomainConfig(BaseModel):
    """Challenge configuration shared by a list of domains."""

    model_config = ConfigDict(extra="ignore")

    domains: list[str] = Field(default_factory=list, description="Domains this entry applies to")
    http01: ACMECertificateHTTP01Config | None = Field(default=None)
    dns01: ACMECertificateDNS01Config | None = Field(default=None)


class Certificate(K8sEntityBase):
    """Cert-manager Certificate with the fields the HTTP-01 solver reads."""

    _entity_name: ClassVar[str] = "certificate"

    api_version: str = Field(
        default=f"{CERTIFICATE_GROUP}/{CERTIFICATE_VERSION}", description="API version"
    )
    kind: str = Field(default=CERTIFICATE_KIND, description="Resource kind")
    dns_names: list[str] = Field(default_factory=list, description="Subject Alternative Names")
    acme_config: list[ACMECertificateDomainConfig] = Field(
        default_factory=list, description="Per-domain ACME challenge configuration"
    )
    order_url: str | None = Field(default=None, description="URL of the active ACME order")

    def config_for_domain(self, domain: str) -> ACMECertificateDomainConfig | None:
        """Return the first ACME config entry that lists ``domain``."""
        for cfg in self.acme_config:
            if domain in cfg.domains:
                return cfg
        return None

    def has_active_order(self) -> bool:
        """Whether an ACME order has been started for this certificate."""
        return bool(self.order_url)

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> Certificate:
        """Create from a cert-manager Certificate CRD dict."""
        metadata: dict[str, Any] = obj.get("metadata", {})
        spec: dict[str, Any] = obj.get("spec", {})
        status: dict[str, Any] = obj.get("status") or {}

        acme: dict[str, Any] = spec.get("acme") or {}
        order: dict[str, Any] = (status.get("acme") or {}).get("order") or {}

        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace"),
            uid=metadata.get("uid"),
            creation_timestamp=metadata.get("creationTimestamp"),
            labels=metadata.get("labels") or None,
            annotations=metadata.get("annotations") or None,
            api_version=obj.get("apiVersion", f"{CERTIFICATE_GROUP}/{CERTIFICATE_VERSION}"),
            kind=obj.get("kind", CERTIFICATE_KIND),
            dns_names=spec.get("dnsNames", []),
            acme_config=[
                ACMECertificateDomainConfig.model_validate(c) for c in acme.get("config", [])
            ],
            order_url=order.get("url") or None,
        )
