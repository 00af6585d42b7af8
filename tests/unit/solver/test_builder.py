"""Unit tests for SolverIngressBuilder."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from acme_http_solver.integrations.kubernetes.exceptions import KubernetesAuthError
from acme_http_solver.integrations.kubernetes.models.certificate import (
    ACMECertificateHTTP01Config,
)
from acme_http_solver.solver.builder import (
    DEFAULT_NAME_PREFIX,
    INGRESS_CLASS_ANNOTATION,
    SolverIngressBuilder,
    certificate_owner_reference,
)
from acme_http_solver.solver.labels import CERT_NAME_LABEL_KEY, DOMAIN_LABEL_KEY
from acme_http_solver.solver.paths import ChallengePathCodec

if TYPE_CHECKING:
    from acme_http_solver.integrations.kubernetes.models.certificate import Certificate
    from tests.unit.solver.fakes import FakeIngressStore


@pytest.fixture
def builder(store: FakeIngressStore) -> SolverIngressBuilder:
    """Create a builder over the in-memory store."""
    return SolverIngressBuilder(store)  # type: ignore[arg-type]


@pytest.mark.unit
class TestOwnerReference:
    """Tests for certificate_owner_reference."""

    def test_owner_reference(self, certificate: Certificate) -> None:
        """Reference should mark the certificate as controller."""
        ref = certificate_owner_reference(certificate)

        assert ref.api_version == "certmanager.k8s.io/v1alpha1"
        assert ref.kind == "Certificate"
        assert ref.name == "cert-a"
        assert ref.uid == "uid-cert-a"
        assert ref.controller is True
        assert ref.block_owner_deletion is True


@pytest.mark.unit
class TestBuild:
    """Tests for SolverIngressBuilder.build."""

    def test_metadata(self, builder: SolverIngressBuilder, certificate: Certificate) -> None:
        """Dedicated ingress should be labelled, owned and name-generated."""
        ingress = builder.build(
            certificate, "solver-svc", "example.com", "tok", ACMECertificateHTTP01Config()
        )

        meta = ingress.metadata
        assert meta.name is None
        assert meta.generate_name == DEFAULT_NAME_PREFIX
        assert meta.namespace == "ns1"
        assert meta.labels == {
            CERT_NAME_LABEL_KEY: "cert-a",
            DOMAIN_LABEL_KEY: "example.com",
        }
        assert meta.annotations == {}
        assert [ref.uid for ref in meta.owner_references] == ["uid-cert-a"]

    def test_single_rule_single_path(
        self, builder: SolverIngressBuilder, certificate: Certificate
    ) -> None:
        """The ingress should hold exactly one rule with one challenge path."""
        ingress = builder.build(
            certificate, "solver-svc", "example.com", "tok", ACMECertificateHTTP01Config()
        )

        rules = ingress.spec.rules
        assert len(rules) == 1
        assert rules[0].host == "example.com"
        assert len(rules[0].http.paths) == 1
        entry = rules[0].http.paths[0]
        assert entry.path == "/.well-known/acme-challenge/tok"
        assert entry.backend.service.name == "solver-svc"
        assert entry.backend.service.port.number == 8089

    def test_ingress_class_annotation(
        self, builder: SolverIngressBuilder, certificate: Certificate
    ) -> None:
        """A configured ingress class becomes the class annotation."""
        ingress = builder.build(
            certificate,
            "solver-svc",
            "example.com",
            "tok",
            ACMECertificateHTTP01Config(ingress_class="nginx"),
        )

        assert ingress.metadata.annotations == {INGRESS_CLASS_ANNOTATION: "nginx"}

    def test_custom_prefix_and_codec(
        self, store: FakeIngressStore, certificate: Certificate
    ) -> None:
        """Name prefix and codec should be injectable."""
        builder = SolverIngressBuilder(
            store,  # type: ignore[arg-type]
            codec=ChallengePathCodec(formatter=lambda token: f"/c/{token}", listen_port=81),
            name_prefix="solver-",
        )

        ingress = builder.build(
            certificate, "svc", "example.com", "tok", ACMECertificateHTTP01Config()
        )

        assert ingress.metadata.generate_name == "solver-"
        entry = ingress.spec.rules[0].http.paths[0]
        assert entry.path == "/c/tok"
        assert entry.backend.service.port.number == 81


@pytest.mark.unit
class TestCreate:
    """Tests for SolverIngressBuilder.create."""

    def test_create_persists(
        self,
        builder: SolverIngressBuilder,
        store: FakeIngressStore,
        certificate: Certificate,
    ) -> None:
        """Create should store the ingress and return it with its generated name."""
        created = builder.create(
            certificate, "solver-svc", "example.com", "tok", ACMECertificateHTTP01Config()
        )

        assert created.metadata.name.startswith(DEFAULT_NAME_PREFIX)
        assert store.ops() == ["create"]
        assert store.peek("ns1", created.metadata.name).spec.rules[0].host == "example.com"

    def test_create_errors_propagate(
        self,
        builder: SolverIngressBuilder,
        store: FakeIngressStore,
        certificate: Certificate,
    ) -> None:
        """Store errors are propagated unchanged."""
        error = KubernetesAuthError(message="forbidden", status_code=403)
        store.fail_on[("create", DEFAULT_NAME_PREFIX)] = error

        with pytest.raises(KubernetesAuthError) as exc_info:
            builder.create(
                certificate, "solver-svc", "example.com", "tok", ACMECertificateHTTP01Config()
            )

        assert exc_info.value is error
        assert store.objects == {}
