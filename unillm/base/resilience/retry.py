from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, TypeVar

from ..errors import ClientError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ClientError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and exponential backoff for retryable errors.

    ``max_attempts`` counts every send, the first one included. The wait
    before attempt ``n + 1`` is ``delay_base ** (n - 1)`` seconds, capped at
    ``max_delay``: 1s, 2s, 4s, ... with the defaults.
    """

    max_attempts: int = 3
    delay_base: float = 2.0
    max_delay: float = 30.0

    def __post_init__(self) -> None:
        if isinstance(self.max_attempts, bool) or int(self.max_attempts) != self.max_attempts or self.max_attempts < 1:
            raise ValueError("max_attempts must be an integer >= 1")
        if self.delay_base < 0:
            raise ValueError("delay_base must be >= 0")
        if self.max_delay < 0:
            raise ValueError("max_delay must be >= 0")

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield min(self.delay_base**attempt, self.max_delay)


DEFAULT_RETRY_POLICY = RetryPolicy()


def retry(policy: RetryPolicy = DEFAULT_RETRY_POLICY, attempt_logger: Optional[AttemptLogger] = None):
    """Return a decorator applying the retry policy.

    - Retries only ``ClientError`` instances whose ``retryable`` is true
    - Exponential backoff using ``delay_base ** attempt``
    - The last error is re-raised unchanged once attempts are exhausted
    - Any other exception propagates immediately
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            # final attempt has delay None
            for attempt, delay in enumerate(list(policy.delays()) + [None]):
                try:
                    result = func(*args, **kwargs)
                except ClientError as e:
                    will_retry = bool(e.retryable) and delay is not None
                    if attempt_logger:
                        attempt_logger(
                            attempt=attempt,
                            max_attempts=policy.max_attempts,
                            delay=delay if will_retry else None,
                            error=e,
                        )
                    if not will_retry:
                        raise
                    time.sleep(delay)
                    continue
                if attempt_logger:
                    attempt_logger(
                        attempt=attempt,
                        max_attempts=policy.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result
            raise RuntimeError("retry: loop exited without result")  # pragma: no cover

        return wrapper

    return decorator


__all__ = [
    "AttemptLogger",
    "RetryPolicy",
    "DEFAULT_RETRY_POLICY",
    "retry",
]
