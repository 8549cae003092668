"""Bounded exponential-backoff retry for transient transport failures."""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

import httpx

from session_client.config import AuthConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_ERROR_PATTERN = re.compile(
    r"timed out|timeout|incomplete envelope|ECONNRESET|connection reset|network|fetch failed",
    re.IGNORECASE,
)

_TRANSIENT_TYPES = (httpx.TimeoutException, httpx.NetworkError)


def retries_exhausted(exc: BaseException) -> bool:
    """Whether ``exc`` is a transient failure that used up a retry budget."""
    return getattr(exc, "_retries_exhausted", False)


def is_transient_error(exc: BaseException) -> bool:
    """Whether a raised error looks like a recoverable network failure.

    The error and every error it was raised from are checked, so SDK wrappers
    that re-raise transport errors keep their classification.
    """
    current: BaseException | None = exc
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, _TRANSIENT_TYPES):
            return True
        if TRANSIENT_ERROR_PATTERN.search(str(current) or type(current).__name__):
            return True
        current = current.__cause__
    return False


@dataclass(frozen=True)
class RetryPolicy:
    retries: int = 2
    base_delay: float = 0.3
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, compare=False)

    @classmethod
    def from_config(cls, config: AuthConfig, **overrides) -> "RetryPolicy":
        values = {
            "retries": config.RETRY_ATTEMPTS,
            "base_delay": config.RETRY_BASE_DELAY_MS / 1000,
        }
        values.update(overrides)
        return cls(**values)

    @classmethod
    def none(cls) -> "RetryPolicy":
        return cls(retries=0)

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (2 ** attempt)

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        return await with_retry(
            operation, retries=self.retries, base_delay=self.base_delay, sleep=self.sleep
        )


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    retries: int = 2,
    base_delay: float = 0.3,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation``, retrying raised transient errors.

    Values returned by the operation are passed through untouched, even when
    they describe an application-level error.
    """
    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            transient = is_transient_error(exc)
            if attempt < retries and transient:
                delay = base_delay * (2 ** attempt)
                logger.warning(
                    f"[RETRY] Transient failure ({exc}); attempt {attempt + 1}/{retries} in {delay:.2f}s"
                )
                await sleep(delay)
                attempt += 1
                continue
            if transient and retries > 0:
                exc._retries_exhausted = True
            raise
