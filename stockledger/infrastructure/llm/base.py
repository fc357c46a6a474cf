"""
Base LLM provider with retry and circuit breaker.

Transport failures (TimeoutError, ConnectionError) are retried with
exponential backoff; once retries are exhausted they count against the
circuit breaker. Bad replies never trip the breaker.
"""

import time
from abc import ABC
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar, cast

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from stockledger.config import get_logger, get_settings
from stockledger.core.exceptions import (
    CircuitBreakerOpenError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from stockledger.core.interfaces import HealthStatus, ILLMProvider

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class CircuitBreakerState:
    """Consecutive-failure circuit breaker."""

    provider: str = "llm"
    failures: int = 0
    last_failure_time: float = 0.0
    is_open: bool = False
    cooldown_seconds: int = 60
    failure_threshold: int = 3

    def record_failure(self) -> None:
        self.failures += 1
        self.last_failure_time = time.time()

        if self.failures >= self.failure_threshold and not self.is_open:
            self.is_open = True
            logger.warning(
                "circuit_breaker_opened",
                provider=self.provider,
                failures=self.failures,
                cooldown=self.cooldown_seconds,
            )

    def record_success(self) -> None:
        if self.is_open:
            logger.info("circuit_breaker_closed", provider=self.provider)
        self.failures = 0
        self.is_open = False

    def check(self) -> None:
        """
        Raise CircuitBreakerOpenError while the cooldown is running.

        After the cooldown one trial request is let through (half-open).
        """
        if not self.is_open:
            return

        remaining = self.cooldown_remaining
        if remaining > 0:
            raise CircuitBreakerOpenError(self.provider, remaining)

        logger.info("circuit_breaker_half_open", provider=self.provider)

    @property
    def cooldown_remaining(self) -> int:
        """Seconds left before a trial request is allowed."""
        if not self.is_open:
            return 0
        elapsed = time.time() - self.last_failure_time
        return max(0, int(self.cooldown_seconds - elapsed))


class BaseLLMProvider(ILLMProvider, ABC):
    """
    Resilience shared by LLM providers.

    Subclasses wrap each network call in ``_with_resilience`` and report
    health through ``_update_health_cache``.
    """

    provider_name = "llm"

    def __init__(self) -> None:
        llm = get_settings().llm
        self.timeout = llm.timeout
        self.circuit_breaker = CircuitBreakerState(
            provider=self.provider_name,
            failure_threshold=llm.failure_threshold,
            cooldown_seconds=llm.cooldown_seconds,
        )
        self._health_cache: HealthStatus | None = None
        self._health_cache_time: float = 0.0
        self._health_cache_ttl: float = 30.0

    def _get_retry_decorator(self) -> Any:
        llm = get_settings().llm
        return retry(
            stop=stop_after_attempt(llm.max_retries),
            wait=wait_exponential(
                multiplier=llm.retry_delay,
                min=llm.retry_delay,
                max=llm.retry_delay * (llm.retry_multiplier**3),
            ),
            retry=retry_if_exception_type((TimeoutError, ConnectionError)),
            before_sleep=self._log_retry,
            reraise=True,
        )

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            "llm_retry",
            provider=self.provider_name,
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def _with_resilience(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Run ``operation`` behind the circuit breaker with retries.

        Raises:
            CircuitBreakerOpenError: Breaker is open
            LLMTimeoutError: Every attempt timed out
            LLMUnavailableError: Every attempt failed to connect
        """
        self.circuit_breaker.check()

        try:
            result = await self._get_retry_decorator()(operation)(*args, **kwargs)
        except TimeoutError as e:
            self.circuit_breaker.record_failure()
            raise LLMTimeoutError(self.timeout) from e
        except ConnectionError as e:
            self.circuit_breaker.record_failure()
            raise LLMUnavailableError(self.provider_name, str(e)) from e

        self.circuit_breaker.record_success()
        return cast(T, result)

    def is_available(self) -> bool:
        """Cached availability; optimistic until a health check says otherwise."""
        if self.circuit_breaker.is_open:
            return False

        if self._health_cache and (time.time() - self._health_cache_time) < self._health_cache_ttl:
            return self._health_cache.available

        return True

    def _update_health_cache(self, status: HealthStatus) -> HealthStatus:
        self._health_cache = status
        self._health_cache_time = time.time()
        return status
