from pagewatch.errors import WaitTimeoutError
from pagewatch.events import is_dialog


def assert_satisfied(outcome, description="condition"):
    """Fail with the unmet condition, last observed value and elapsed time."""
    if not outcome.satisfied:
        raise WaitTimeoutError(outcome.describe(description), outcome)
    return outcome.last_observed_value


def _format_events(events):
    return "\n".join(f"  - {e}" for e in events) or "  (none)"


def assert_no_errors(sidecar):
    errors = sidecar.errors()
    if errors:
        raise AssertionError(f"Page reported {len(errors)} error(s):\n{_format_events(errors)}")


def assert_single_dialog(sidecar, expected_message, dialog_type=None):
    """Drain dialog events and check there was exactly one, with this exact text."""
    dialogs = sidecar.consume(is_dialog)
    if len(dialogs) != 1:
        raise AssertionError(
            f"Expected exactly one dialog {expected_message!r}, got {len(dialogs)}:\n"
            f"{_format_events(dialogs)}"
        )
    dialog = dialogs[0]
    if dialog.message != expected_message:
        raise AssertionError(
            f"Dialog message mismatch\n  expected: {expected_message!r}\n  actual:   {dialog.message!r}"
        )
    if dialog_type is not None and dialog.type != dialog_type:
        raise AssertionError(f"Expected a {dialog_type} dialog, got {dialog.type}")
    return dialog
