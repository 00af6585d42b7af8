"""HTTP-01 challenge ingress solver."""

from acme_http_solver.solver.builder import SolverIngressBuilder
from acme_http_solver.solver.cleanup import IngressCleanup, remove_challenge_path
from acme_http_solver.solver.exceptions import (
    ChallengeConfigurationError,
    CleanupAggregateError,
    InvalidSelectorError,
)
from acme_http_solver.solver.labels import build_equality_selector, solver_labels
from acme_http_solver.solver.locator import CertificateIngressLocator
from acme_http_solver.solver.patcher import IngressRulePatcher, merge_challenge_path
from acme_http_solver.solver.paths import (
    ACME_SOLVER_LISTEN_PORT,
    HTTP_CHALLENGE_PATH,
    ChallengePathCodec,
    default_path_formatter,
)
from acme_http_solver.solver.reconciler import IngressSolver

__all__ = [
    "ACME_SOLVER_LISTEN_PORT",
    "HTTP_CHALLENGE_PATH",
    "CertificateIngressLocator",
    "ChallengeConfigurationError",
    "ChallengePathCodec",
    "CleanupAggregateError",
    "IngressCleanup",
    "IngressRulePatcher",
    "IngressSolver",
    "InvalidSelectorError",
    "SolverIngressBuilder",
    "build_equality_selector",
    "default_path_formatter",
    "merge_challenge_path",
    "remove_challenge_path",
    "solver_labels",
]
