"""Startup health polling for freshly launched deploys."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import httpx

from launchpad.core.errors import HealthCheckError, HealthFailureReason

logger = logging.getLogger(__name__)

DEFAULT_STARTUP_TIMEOUT_SECONDS = 1.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 2.0
DEFAULT_POLL_INTERVAL_SECONDS = 0.1


class HealthState(str, Enum):
    """States of the startup health check."""

    POLLING = "polling"
    HEALTHY = "healthy"
    FAILED = "failed"


@dataclass(slots=True)
class HealthCheckResult:
    """Outcome of a startup health check."""

    state: HealthState
    attempts: int
    reason: HealthFailureReason | None = None
    status_code: int | None = None


class HealthChecker:
    """Poll ``http://<host>:<port><path>`` until 200, a definite failure, or the deadline.

    Only transport errors (refused, timed out) are retried. Any HTTP answer
    other than 200 ends the check: redirects as ``UNEXPECTED_REDIRECT``,
    everything else as ``BAD_STATUS``.
    """

    def __init__(
        self,
        *,
        startup_timeout: float = DEFAULT_STARTUP_TIMEOUT_SECONDS,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        host: str = "localhost",
        transport: httpx.BaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._startup_timeout = startup_timeout
        self._request_timeout = request_timeout
        self._poll_interval = poll_interval
        self._host = host
        self._transport = transport
        self._clock = clock
        self._sleep = sleep

    def health_url(self, port: int, health_path: str) -> str:
        return f"http://{self._host}:{port}{health_path}"

    def await_healthy(self, port: int, health_path: str) -> HealthCheckResult:
        url = self.health_url(port, health_path)
        deadline = self._clock() + self._startup_timeout
        result = HealthCheckResult(state=HealthState.POLLING, attempts=0)

        with httpx.Client(
            follow_redirects=False,
            timeout=self._request_timeout,
            transport=self._transport,
        ) as client:
            while result.state is HealthState.POLLING:
                result.attempts += 1
                logger.debug("Health attempt %d: GET %s", result.attempts, url)
                try:
                    response = client.get(url)
                except httpx.TransportError as exc:
                    logger.debug("Health attempt %d not answered: %s", result.attempts, exc)
                    if self._clock() > deadline:
                        result.state = HealthState.FAILED
                        result.reason = HealthFailureReason.STARTUP_TIMEOUT
                    else:
                        self._sleep(self._poll_interval)
                    continue

                result.status_code = response.status_code
                if response.status_code == httpx.codes.OK:
                    result.state = HealthState.HEALTHY
                elif response.is_redirect:
                    result.state = HealthState.FAILED
                    result.reason = HealthFailureReason.UNEXPECTED_REDIRECT
                else:
                    result.state = HealthState.FAILED
                    result.reason = HealthFailureReason.BAD_STATUS

        if result.reason is not None:
            logger.warning(
                "Health check on port %d failed after %d attempts: %s (status %s)",
                port,
                result.attempts,
                result.reason.value,
                result.status_code,
            )
            raise HealthCheckError(
                result.reason,
                status_code=result.status_code,
                attempts=result.attempts,
            )

        logger.info("Deploy on port %d healthy after %d attempts", port, result.attempts)
        return result
