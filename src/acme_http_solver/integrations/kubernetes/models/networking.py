"""Ingress display models."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from acme_http_solver.integrations.kubernetes.models.base import (
    K8sEntityBase,
    OwnerReference,
    _get_metadata_map,
    _get_timestamp,
    _safe_get,
)


class IngressRule(K8sEntityBase):
    """Ingress rule definition."""

    _entity_name: ClassVar[str] = "ingressrule"

    host: str | None = Field(default=None, description="Hostname")
    paths: list[str] = Field(default_factory=list, description="Path patterns")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> IngressRule:
        """Create from a kubernetes V1IngressRule object."""
        host = getattr(obj, "host", None)
        http = getattr(obj, "http", None)
        paths: list[str] = []
        if http and (http_paths := getattr(http, "paths", None)):
            for p in http_paths:
                path = getattr(p, "path", "/")
                paths.append(str(path) if path else "/")

        return cls(
            name=host or "*",
            host=host,
            paths=paths,
        )


class IngressSummary(K8sEntityBase):
    """Ingress display model."""

    _entity_name: ClassVar[str] = "ingress"

    class_name: str | None = Field(default=None, description="Ingress class")
    hosts: list[str] = Field(default_factory=list, description="Hostnames")
    rules: list[IngressRule] = Field(default_factory=list, description="Ingress rules")
    owners: list[OwnerReference] = Field(default_factory=list, description="Owner references")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> IngressSummary:
        """Create from a kubernetes V1Ingress object."""
        rules_raw = _safe_get(obj, "spec", "rules") or []
        rules = [IngressRule.from_k8s_object(r) for r in rules_raw]
        hosts = [r.host for r in rules if r.host]
        owner_refs = _safe_get(obj, "metadata", "owner_references") or []
        annotations = _get_metadata_map(obj, "annotations")

        class_name = _safe_get(obj, "spec", "ingress_class_name")
        if class_name is None and annotations:
            class_name = annotations.get("kubernetes.io/ingress.class")

        return cls(
            name=_safe_get(obj, "metadata", "name", default=""),
            namespace=_safe_get(obj, "metadata", "namespace"),
            uid=_safe_get(obj, "metadata", "uid"),
            creation_timestamp=_get_timestamp(_safe_get(obj, "metadata", "creation_timestamp")),
            labels=_get_metadata_map(obj, "labels"),
            annotations=annotations,
            class_name=class_name,
            hosts=hosts,
            rules=rules,
            owners=[OwnerReference.from_k8s_object(ref) for ref in owner_refs],
        )
