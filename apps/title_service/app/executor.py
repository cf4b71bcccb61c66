from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Optional

import httpx

from shared.logging import get_logger, log_event
from shared.retry import RetriesExhausted, RetryPolicy, Sleep, retry_async

from .errors import NetworkError

logger = get_logger(__name__)

REPEATED_FAILURE_MESSAGE = "The request failed repeatedly. Check your network connection."


class TransientFailure(Exception):
    """A single attempt failed in a way worth retrying."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except (ValueError, RecursionError):
        data = {}
    err = data.get("error") if isinstance(data, dict) else None
    msg = err.get("message") if isinstance(err, dict) else None
    if isinstance(msg, str) and msg:
        return msg
    return f"HTTP {resp.status_code}"


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, TransientFailure)


class RequestExecutor:
    """
    POSTs a JSON body and retries transport errors, 429 and 5xx with
    exponential backoff. Other error statuses fail on the spot.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        base_delay: float = 1.0,
        timeout_s: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.policy = RetryPolicy(max_attempts=max_attempts, base_delay=base_delay, retry_on=_is_transient)
        self.timeout_s = timeout_s
        self._transport = transport
        self._sleep = sleep

    async def execute(
        self,
        endpoint: str,
        body: dict[str, Any],
        max_attempts: Optional[int] = None,
        params: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        policy = self.policy if max_attempts is None else self.policy.with_attempts(max_attempts)
        started = time.time()

        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:

            async def attempt() -> httpx.Response:
                try:
                    resp = await client.post(endpoint, json=body, params=params)
                except httpx.RequestError as e:
                    # Transport, decoding and redirect failures alike.
                    raise TransientFailure(f"request failed: {e!r}") from e

                if resp.is_success:
                    return resp

                message = _error_message(resp)
                if is_retryable_status(resp.status_code):
                    raise TransientFailure(message, status_code=resp.status_code)
                log_event(logger, logging.WARNING, "upstream_rejected", status=resp.status_code, err=message)
                raise NetworkError(message, status_code=resp.status_code)

            def on_retry(n: int, delay: float, err: BaseException) -> None:
                log_event(logger, logging.INFO, "upstream_retry", attempt=n, delay_s=delay, err=err)

            try:
                resp = await retry_async(attempt, policy, sleep=self._sleep, on_retry=on_retry)
            except RetriesExhausted as e:
                elapsed_ms = int((time.time() - started) * 1000)
                log_event(
                    logger,
                    logging.WARNING,
                    "upstream_exhausted",
                    attempts=e.attempts,
                    latency_ms=elapsed_ms,
                    err=e.last_error,
                )
                status = getattr(e.last_error, "status_code", None)
                raise NetworkError(REPEATED_FAILURE_MESSAGE, status_code=status) from e.last_error

        log_event(
            logger, logging.DEBUG, "upstream_ok", status=resp.status_code, latency_ms=int((time.time() - started) * 1000)
        )
        return resp
