import asyncio
import inspect
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from pagewatch import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WaitOutcome:
    satisfied: bool
    last_observed_value: Any
    elapsed_ms: float
    last_error: Optional[BaseException] = None

    def __bool__(self):
        return self.satisfied

    def describe(self, description="condition"):
        state = "satisfied" if self.satisfied else "not satisfied"
        message = (
            f"{description} {state} after {self.elapsed_ms:.0f}ms "
            f"(last observed value: {self.last_observed_value!r})"
        )
        if self.last_error is not None:
            message += f"; last predicate error: {self.last_error}"
        return message


def _check_limits(timeout_ms, poll_interval_ms):
    if timeout_ms is None or timeout_ms <= 0:
        raise ValueError(f"timeout_ms must be a positive number, got {timeout_ms!r}")
    if poll_interval_ms <= 0:
        raise ValueError(f"poll_interval_ms must be a positive number, got {poll_interval_ms!r}")


def _monotonic_ms():
    return time.monotonic() * 1000.0


def _default_poll_interval():
    return config.load_settings().poll_interval_ms


class ConditionWaiter:
    """Polls a predicate until it is satisfied or time runs out.

    ``predicate`` is evaluated with no arguments. Its return value is the
    observed value; the wait is satisfied when ``until(value)`` is true, or
    when the value itself is truthy if no ``until`` is given. Splitting the
    two keeps a useful value (a count, a label) in the outcome even when
    the condition is never met::

        waiter.wait_for(lambda: page.locator(".visited").count(),
                        until=lambda n: n >= 6, timeout_ms=15000)

    The first evaluation happens immediately. Between evaluations the waiter
    sleeps ``poll_interval_ms`` (less when the deadline is closer), and the
    last evaluation lands on the deadline, so a timed-out wait reports
    ``timeout_ms <= elapsed_ms < timeout_ms + poll_interval_ms``.

    States that appear and disappear between two polls are never seen; pick
    a poll interval shorter than the shortest state a test cares about.

    ``wait_for`` never raises on timeout. Check ``outcome.satisfied`` (or use
    ``pagewatch.assertions.assert_satisfied``) so the failure message can
    include the last observed value.
    """

    def __init__(self, sleep=None, clock=None):
        # sleep takes milliseconds, clock returns milliseconds
        self._sleep = sleep or (lambda ms: time.sleep(ms / 1000.0))
        self._clock = clock or _monotonic_ms

    @classmethod
    def for_page(cls, page):
        # wait_for_timeout keeps Playwright dispatching page events while we wait
        return cls(sleep=page.wait_for_timeout)

    def _elapsed_ms(self, start):
        return self._clock() - start

    def wait_for(self, predicate, timeout_ms, poll_interval_ms=None, until=None):
        if poll_interval_ms is None:
            poll_interval_ms = _default_poll_interval()
        _check_limits(timeout_ms, poll_interval_ms)

        start = self._clock()
        polls = 0
        while True:
            value, error = _observe(predicate)
            polls += 1
            elapsed = self._elapsed_ms(start)
            outcome = _settle(elapsed, timeout_ms, polls, *_judge(value, error, until))
            if outcome is not None:
                return outcome
            self._sleep(min(poll_interval_ms, timeout_ms - elapsed))

    async def wait_for_async(self, predicate, timeout_ms, poll_interval_ms=None, until=None, sleep=None):
        """Same contract as ``wait_for`` for the Playwright async API.

        ``predicate`` may return an awaitable. ``sleep`` takes milliseconds
        and defaults to ``asyncio.sleep``.
        """
        if poll_interval_ms is None:
            poll_interval_ms = _default_poll_interval()
        _check_limits(timeout_ms, poll_interval_ms)
        if sleep is None:
            async def sleep(ms):
                await asyncio.sleep(ms / 1000.0)

        start = self._clock()
        polls = 0
        while True:
            value, error = _observe(predicate)
            if error is None and inspect.isawaitable(value):
                try:
                    value = await value
                except Exception as e:
                    value, error = _failed(e)
            polls += 1
            elapsed = self._elapsed_ms(start)
            outcome = _settle(elapsed, timeout_ms, polls, *_judge(value, error, until))
            if outcome is not None:
                return outcome
            await sleep(min(poll_interval_ms, timeout_ms - elapsed))


# A predicate that throws (element detached mid-render, page busy) simply
# hasn't been satisfied yet.

def _failed(error):
    logger.debug("Predicate raised %s: %s", type(error).__name__, error)
    return None, error


def _observe(predicate):
    try:
        return predicate(), None
    except Exception as e:
        return _failed(e)


def _judge(value, error, until):
    """(value, satisfied, error) for one observation."""
    if error is not None:
        return value, False, error
    try:
        ok = until(value) if until is not None else bool(value)
    except Exception as e:
        _failed(e)
        return value, False, e
    return value, ok, None


def _settle(elapsed, timeout_ms, polls, value, ok, error):
    """The outcome once this poll decides the wait, else None."""
    if ok:
        logger.debug("Condition satisfied after %d poll(s), %.0fms", polls, elapsed)
        return WaitOutcome(True, value, elapsed, error)
    if elapsed >= timeout_ms:
        logger.info("Condition timed out after %.0fms, last value %r", elapsed, value)
        return WaitOutcome(False, value, elapsed, error)
    return None


def wait_for(page, predicate, timeout_ms, poll_interval_ms=None, until=None):
    """Shortcut for ``ConditionWaiter.for_page(page).wait_for(...)``."""
    return ConditionWaiter.for_page(page).wait_for(
        predicate, timeout_ms, poll_interval_ms=poll_interval_ms, until=until
    )
