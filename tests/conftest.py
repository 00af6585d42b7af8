"""Shared pytest fixtures for acme_http_solver tests."""

from __future__ import annotations

import os

import pytest
import typer
from typer.testing import CliRunner

from acme_http_solver.cli.main import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear solver environment overrides for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("ACME_SOLVER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_app() -> typer.Typer:
    """Return the CLI app for testing."""
    return app
