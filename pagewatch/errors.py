"""Harness-level failures.

Errors raised *by the page under test* are never raised from here; the
sidecar records them as data.
"""


class HarnessError(Exception):
    """Base class for failures of the harness itself."""


class NavigationError(HarnessError):
    def __init__(self, url, reason=""):
        self.url = url
        self.reason = reason
        message = f"Could not navigate to {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SelectorNotFoundError(HarnessError):
    def __init__(self, field, selectors):
        self.field = field
        self.selectors = list(selectors)
        super().__init__(f"Required element '{field}' not found (tried: {', '.join(self.selectors)})")


class WaitTimeoutError(HarnessError, AssertionError):
    """Raised by assert_satisfied so pytest reports a plain test failure."""

    def __init__(self, message, outcome=None):
        self.outcome = outcome
        super().__init__(message)
