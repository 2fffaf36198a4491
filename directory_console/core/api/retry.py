"""Bounded retry with linear backoff."""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryOutcome:
    """Tagged result of a retried call: either ``value`` or ``error`` is meaningful."""
    ok: bool
    value: Any = None
    error: Optional[BaseException] = None
    attempts: int = 0


def linear_backoff(base_delay: float) -> Callable[[int], float]:
    """Return a backoff function waiting ``base_delay * attempt`` seconds."""
    def backoff(attempt: int) -> float:
        return base_delay * attempt
    return backoff


def call_with_retry(
    operation: Callable[[], Any],
    attempts: int,
    backoff: Callable[[int], float],
    give_up_on: Tuple[Type[BaseException], ...] = (),
    sleep: Callable[[float], None] = time.sleep,
) -> RetryOutcome:
    """Run ``operation`` up to ``attempts`` times.

    Exceptions listed in ``give_up_on`` stop the loop at once. Any other
    ``Exception`` is recorded and, unless it came from the last attempt,
    followed by ``sleep(backoff(attempt))``.

    Args:
        operation: Zero-argument callable performing one attempt
        attempts: Total number of attempts (at least 1)
        backoff: Maps the 1-based number of the failed attempt to a delay in seconds
        give_up_on: Exception types that are never retried
        sleep: Delay function

    Returns:
        RetryOutcome with the first successful value or the last error
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    last_error: Optional[BaseException] = None
    for attempt in range(1, attempts + 1):
        try:
            return RetryOutcome(ok=True, value=operation(), attempts=attempt)
        except give_up_on as exc:
            return RetryOutcome(ok=False, error=exc, attempts=attempt)
        except Exception as exc:
            last_error = exc
            if attempt == attempts:
                break
            delay = backoff(attempt)
            logger.warning(f"Attempt {attempt}/{attempts} failed ({exc}); retrying in {delay:.2f}s")
            sleep(delay)

    return RetryOutcome(ok=False, error=last_error, attempts=attempts)
