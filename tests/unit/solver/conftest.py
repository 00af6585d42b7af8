"""Fixtures for solver tests."""

from __future__ import annotations

import pytest

from acme_http_solver.integrations.kubernetes.models.certificate import Certificate
from acme_http_solver.solver.reconciler import IngressSolver
from tests.unit.solver.fakes import FakeIngressStore, make_certificate


@pytest.fixture
def store() -> FakeIngressStore:
    """Create an empty in-memory ingress store."""
    return FakeIngressStore()


@pytest.fixture
def solver(store: FakeIngressStore) -> IngressSolver:
    """Create an IngressSolver over the in-memory store."""
    return IngressSolver(store, conflict_retry_attempts=3)  # type: ignore[arg-type]


@pytest.fixture
def certificate() -> Certificate:
    """Certificate for example.com with a dedicated solver ingress."""
    return make_certificate()


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    """Skip tenacity's waits between conflict retries."""
    monkeypatch.setattr("time.sleep", lambda _: None)
