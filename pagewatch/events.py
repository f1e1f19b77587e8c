"""Events captured from a target page.

Each event is immutable and created the moment Playwright emits it.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ConsoleEvent:
    level: str
    text: str
    kind: str = "console"


@dataclass(frozen=True)
class ExceptionEvent:
    message: str
    name: str = "Error"
    stack: str = ""
    kind: str = "exception"


@dataclass(frozen=True)
class DialogEvent:
    type: str
    message: str
    kind: str = "dialog"


def is_error(event):
    """Uncaught exceptions and console.error output."""
    if event.kind == "exception":
        return True
    return event.kind == "console" and event.level == "error"


def is_dialog(event):
    return event.kind == "dialog"


def of_kind(kind):
    return lambda event: event.kind == kind
