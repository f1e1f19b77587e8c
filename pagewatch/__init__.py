"""Observation and synchronisation harness for browser tests of small demo pages."""
from pagewatch.assertions import assert_no_errors, assert_satisfied, assert_single_dialog
from pagewatch.driver import PageDriver
from pagewatch.errors import HarnessError, NavigationError, SelectorNotFoundError, WaitTimeoutError
from pagewatch.events import ConsoleEvent, DialogEvent, ExceptionEvent
from pagewatch.sidecar import ObservationSidecar
from pagewatch.waiter import ConditionWaiter, WaitOutcome, wait_for

__all__ = [
    "ConditionWaiter",
    "ConsoleEvent",
    "DialogEvent",
    "ExceptionEvent",
    "HarnessError",
    "NavigationError",
    "ObservationSidecar",
    "PageDriver",
    "SelectorNotFoundError",
    "WaitOutcome",
    "WaitTimeoutError",
    "assert_no_errors",
    "assert_satisfied",
    "assert_single_dialog",
    "wait_for",
]
