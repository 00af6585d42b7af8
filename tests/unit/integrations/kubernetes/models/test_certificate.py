"""Unit tests for the Certificate model."""

from __future__ import annotations

from typing import Any

import pytest

from acme_http_solver.integrations.kubernetes.models.certificate import (
    ACMECertificateHTTP01Config,
    Certificate,
)


def _certificate_dict(**overrides: Any) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "apiVersion": "certmanager.k8s.io/v1alpha1",
        "kind": "Certificate",
        "metadata": {
            "name": "web-tls",
            "namespace": "web",
            "uid": "abc-123",
            "creationTimestamp": "2026-01-01T00:00:00Z",
            "labels": {"app": "web"},
        },
        "spec": {
            "secretName": "web-tls",
            "dnsNames": ["example.com", "www.example.com"],
            "acme": {
                "config": [
                    {
                        "domains": ["example.com"],
                        "http01": {"ingress": "web", "ingressClass": "nginx"},
                    },
                    {"domains": ["www.example.com"], "http01": {}},
                    {"domains": ["dns.example.com"], "dns01": {"provider": "route53"}},
                ]
            },
        },
        "status": {"acme": {"order": {"url": "https://acme.example/order/1"}}},
    }
    obj.update(overrides)
    return obj


@pytest.mark.unit
@pytest.mark.kubernetes
class TestCertificateFromK8sObject:
    """Tests for Certificate.from_k8s_object."""

    def test_metadata(self) -> None:
        """Should read name, namespace, uid and labels."""
        crt = Certificate.from_k8s_object(_certificate_dict())

        assert crt.name == "web-tls"
        assert crt.namespace == "web"
        assert crt.uid == "abc-123"
        assert crt.labels == {"app": "web"}
        assert crt.api_version == "certmanager.k8s.io/v1alpha1"
        assert crt.kind == "Certificate"
        assert crt.dns_names == ["example.com", "www.example.com"]

    def test_acme_config(self) -> None:
        """Should parse http01 settings including the ingressClass alias."""
        crt = Certificate.from_k8s_object(_certificate_dict())

        http01 = crt.acme_config[0].http01
        assert http01 == ACMECertificateHTTP01Config(ingress="web", ingress_class="nginx")
        assert crt.acme_config[1].http01 == ACMECertificateHTTP01Config()
        assert crt.acme_config[2].http01 is None
        assert crt.acme_config[2].dns01.provider == "route53"

    def test_order_url(self) -> None:
        """Should expose the active order URL."""
        crt = Certificate.from_k8s_object(_certificate_dict())

        assert crt.order_url == "https://acme.example/order/1"
        assert crt.has_active_order()

    def test_no_status(self) -> None:
        """A certificate without status has no active order."""
        crt = Certificate.from_k8s_object(_certificate_dict(status=None))

        assert crt.order_url is None
        assert not crt.has_active_order()

    def test_empty_order_url(self) -> None:
        """An empty order URL does not count as an active order."""
        crt = Certificate.from_k8s_object(
            _certificate_dict(status={"acme": {"order": {"url": ""}}})
        )

        assert not crt.has_active_order()

    def test_minimal_object(self) -> None:
        """Should tolerate missing spec and metadata fields."""
        crt = Certificate.from_k8s_object({"metadata": {"name": "bare"}})

        assert crt.name == "bare"
        assert crt.acme_config == []
        assert crt.dns_names == []


@pytest.mark.unit
@pytest.mark.kubernetes
class TestConfigForDomain:
    """Tests for Certificate.config_for_domain."""

    def test_finds_matching_entry(self) -> None:
        """Should return the entry listing the domain."""
        crt = Certificate.from_k8s_object(_certificate_dict())

        cfg = crt.config_for_domain("www.example.com")

        assert cfg is not None
        assert cfg.domains == ["www.example.com"]

    def test_first_entry_wins(self) -> None:
        """Should return the first entry when a domain appears twice."""
        obj = _certificate_dict()
        obj["spec"]["acme"]["config"].append(
            {"domains": ["example.com"], "http01": {"ingress": "later"}}
        )
        crt = Certificate.from_k8s_object(obj)

        assert crt.config_for_domain("example.com").http01.ingress == "web"

    def test_unknown_domain(self) -> None:
        """Should return None for unconfigured domains."""
        crt = Certificate.from_k8s_object(_certificate_dict())

        assert crt.config_for_domain("other.com") is None
