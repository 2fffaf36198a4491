"""Unit tests for the bounded retry combinator."""
from unittest.mock import MagicMock

import pytest

from directory_console.core.api.retry import RetryOutcome, call_with_retry, linear_backoff


class Stop(Exception):
    pass


def test_linear_backoff_scales_with_attempt():
    backoff = linear_backoff(0.5)
    assert [backoff(n) for n in (1, 2, 3)] == [0.5, 1.0, 1.5]


def test_first_success_returns_value_without_sleeping():
    sleeps = []
    outcome = call_with_retry(lambda: 42, attempts=3, backoff=linear_backoff(1), sleep=sleeps.append)

    assert outcome == RetryOutcome(ok=True, value=42, attempts=1)
    assert sleeps == []


def test_retries_until_success():
    operation = MagicMock(side_effect=[OSError("a"), OSError("b"), "done"])
    sleeps = []

    outcome = call_with_retry(operation, attempts=3, backoff=linear_backoff(1), sleep=sleeps.append)

    assert outcome.ok is True
    assert outcome.value == "done"
    assert outcome.attempts == 3
    assert sleeps == [1, 2]


def test_exhausted_attempts_report_last_error():
    errors = [OSError("first"), OSError("second")]
    operation = MagicMock(side_effect=errors)

    outcome = call_with_retry(operation, attempts=2, backoff=lambda n: 0, sleep=lambda s: None)

    assert outcome.ok is False
    assert outcome.error is errors[1]
    assert outcome.attempts == 2


def test_give_up_on_stops_immediately():
    operation = MagicMock(side_effect=Stop("abort"))
    sleeps = []

    outcome = call_with_retry(operation, attempts=5, backoff=lambda n: 1, give_up_on=(Stop,), sleep=sleeps.append)

    assert outcome.ok is False
    assert isinstance(outcome.error, Stop)
    assert outcome.attempts == 1
    assert operation.call_count == 1
    assert sleeps == []


def test_rejects_non_positive_attempts():
    with pytest.raises(ValueError):
        call_with_retry(lambda: None, attempts=0, backoff=lambda n: 0)
