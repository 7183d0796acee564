"""Polling for eventual consistency.

A write acknowledged by the engine is not necessarily visible to search yet.
`retry_until` re-runs an idempotent check until it reports a ready result,
waiting a fixed interval between attempts and giving up at a deadline.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from elasticdemo.exceptions import VisibilityTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_until(
    operation: Callable[[], Awaitable[T]],
    *,
    interval: float = 0.1,
    timeout: float = 30.0,
    max_attempts: Optional[int] = None,
    is_ready: Callable[[Any], bool] = bool,
) -> T:
    """Await `operation()` until `is_ready(result)` holds and return that result.

    Only not-ready results are retried. An exception raised by `operation` is
    a permanent failure and propagates on the first attempt.

    Raises
    ------
    VisibilityTimeoutError
        When `timeout` seconds pass or `max_attempts` calls are spent without
        a ready result.
    """
    start = time.monotonic()
    deadline = start + timeout
    attempts = 0
    while True:
        result = await operation()
        attempts += 1
        if is_ready(result):
            if attempts > 1:
                logger.debug(f"Ready after {attempts} attempt(s)")
            return result
        now = time.monotonic()
        out_of_attempts = max_attempts is not None and attempts >= max_attempts
        if out_of_attempts or now + interval > deadline:
            raise VisibilityTimeoutError(attempts, now - start, last_result=result)
        await asyncio.sleep(interval)
