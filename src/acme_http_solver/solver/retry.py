"""Optimistic-concurrency retry for read-modify-write cycles on shared ingresses."""

from __future__ import annotations

from typing import Any

import structlog
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from acme_http_solver.integrations.kubernetes.exceptions import KubernetesConflictError

logger = structlog.get_logger()

DEFAULT_CONFLICT_RETRY_ATTEMPTS = 5


def _log_conflict(retry_state: RetryCallState) -> None:
    logger.info(
        "ingress_update_conflict",
        attempt=retry_state.attempt_number,
        operation=getattr(retry_state.fn, "__name__", None),
    )


def retry_on_conflict(attempts: int = DEFAULT_CONFLICT_RETRY_ATTEMPTS) -> Any:
    """Create a retry decorator for ``KubernetesConflictError``.

    The decorated function must perform the whole fetch, modify and update
    cycle, so every attempt starts from a fresh copy of the object. After
    ``attempts`` tries the conflict is re-raised.

    Args:
        attempts: Maximum number of attempts, including the first.

    Returns:
        A tenacity retry decorator.
    """
    return retry(
        retry=retry_if_exception_type(KubernetesConflictError),
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.05, max=1),
        before_sleep=_log_conflict,
        reraise=True,
    )
