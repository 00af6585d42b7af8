"""Kubernetes and solver configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

PathType = Literal["ImplementationSpecific", "Prefix", "Exact"]


class ClusterConfig(BaseModel):
    """Connection settings for the cluster the solver operates on."""

    model_config = ConfigDict(extra="forbid")

    context: str | None = None
    kubeconfig: str | None = None
    namespace: str = "default"
    request_timeout: float = 30.0

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: float) -> float:
        """Validate request_timeout is positive."""
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in kubeconfig path."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class SolverSettings(BaseModel):
    """Settings for the HTTP-01 ingress solver."""

    model_config = ConfigDict(extra="forbid")

    name_prefix: str = "cm-acme-http-solver-"
    listen_port: int = 8089
    path_type: PathType = "ImplementationSpecific"
    conflict_retry_attempts: int = 5

    @field_validator("listen_port")
    @classmethod
    def validate_listen_port(cls, v: int) -> int:
        """Validate listen_port is a usable TCP port."""
        if not 1 <= v <= 65535:
            raise ValueError("listen_port must be between 1 and 65535")
        return v

    @field_validator("conflict_retry_attempts")
    @classmethod
    def validate_conflict_retry_attempts(cls, v: int) -> int:
        """Validate at least one attempt is made."""
        if v < 1:
            raise ValueError("conflict_retry_attempts must be at least 1")
        return v

    @field_validator("name_prefix")
    @classmethod
    def validate_name_prefix(cls, v: str) -> str:
        """Validate name_prefix is usable as a generateName value."""
        if not v:
            raise ValueError("name_prefix must not be empty")
        return v


class SolverConfig(BaseModel):
    """Complete solver configuration."""

    model_config = ConfigDict(extra="forbid")

    cluster: ClusterConfig = ClusterConfig()
    solver: SolverSettings = SolverSettings()

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> SolverConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            ACME_SOLVER_CONTEXT: Kubeconfig context to use
            ACME_SOLVER_KUBECONFIG: Kubeconfig path
            ACME_SOLVER_NAMESPACE: Default namespace
            ACME_SOLVER_TIMEOUT: Per-request timeout in seconds
            ACME_SOLVER_CONFLICT_RETRIES: Attempts for conflicting ingress updates
            ACME_SOLVER_NAME_PREFIX: generateName prefix for solver ingresses
        """
        config_dict = dict(base_config) if base_config else {}
        cluster = dict(config_dict.get("cluster", {}))
        solver = dict(config_dict.get("solver", {}))

        if context := os.environ.get("ACME_SOLVER_CONTEXT"):
            cluster["context"] = context

        if kubeconfig := os.environ.get("ACME_SOLVER_KUBECONFIG"):
            cluster["kubeconfig"] = kubeconfig

        if namespace := os.environ.get("ACME_SOLVER_NAMESPACE"):
            cluster["namespace"] = namespace

        if timeout := os.environ.get("ACME_SOLVER_TIMEOUT"):
            cluster["request_timeout"] = float(timeout)

        if retries := os.environ.get("ACME_SOLVER_CONFLICT_RETRIES"):
            solver["conflict_retry_attempts"] = int(retries)

        if prefix := os.environ.get("ACME_SOLVER_NAME_PREFIX"):
            solver["name_prefix"] = prefix

        config_dict["cluster"] = cluster
        config_dict["solver"] = solver
        return cls.model_validate(config_dict)
