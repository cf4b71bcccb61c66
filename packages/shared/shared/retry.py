from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]
OnRetry = Callable[[int, float, BaseException], None]


def _retry_everything(_: BaseException) -> bool:
    return True


class RetriesExhausted(Exception):
    """Every attempt allowed by the policy failed with a retryable error."""

    def __init__(self, attempts: int, last_error: BaseException):
        super().__init__(f"gave up after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error


@dataclass(frozen=True)
class RetryPolicy:
    """
    Exponential backoff without jitter.
    Delay before attempt n+1 is base_delay * factor**(n-1).
    """

    max_attempts: int = 5
    base_delay: float = 1.0
    factor: float = 2.0
    retry_on: Callable[[BaseException], bool] = _retry_everything

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (self.factor ** (attempt - 1))

    def schedule(self) -> list[float]:
        # Only the gaps between attempts; nothing is slept after the last one.
        return [self.delay_for(n) for n in range(1, self.max_attempts)]

    def with_attempts(self, max_attempts: int) -> "RetryPolicy":
        return RetryPolicy(
            max_attempts=max_attempts,
            base_delay=self.base_delay,
            factor=self.factor,
            retry_on=self.retry_on,
        )


async def retry_async(
    attempt: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    sleep: Sleep = asyncio.sleep,
    on_retry: Optional[OnRetry] = None,
) -> T:
    """
    Await `attempt()` until it succeeds, raises a non-retryable error, or the
    policy runs out of attempts. Calls run strictly one after another.
    """
    n = 1
    while True:
        try:
            return await attempt()
        except Exception as e:
            if not policy.retry_on(e):
                raise
            if n >= policy.max_attempts:
                raise RetriesExhausted(n, e) from e
            delay = policy.delay_for(n)
            if on_retry is not None:
                on_retry(n, delay, e)
        await sleep(delay)
        n += 1
