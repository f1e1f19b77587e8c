import logging

from playwright.sync_api import Error as PlaywrightError

from pagewatch.events import ConsoleEvent, DialogEvent, ExceptionEvent, is_dialog, is_error

logger = logging.getLogger(__name__)

DIALOG_POLICIES = ("accept", "dismiss", None)


class ObservationSidecar:
    """Collects console output, uncaught exceptions and dialogs from one page.

    Attach it *before* ``page.goto``: anything the page emits while loading
    is otherwise lost, and an empty ``errors()`` only means nothing was
    observed.

    ``dialog_policy`` decides how native dialogs are answered. ``"accept"``
    and ``"dismiss"`` respond immediately so the page's JS thread is
    unblocked; ``None`` only records the dialog and leaves the answer to
    another listener (without one the page stays blocked).

    Calling ``attach`` twice stacks the listeners and every event is
    recorded twice.
    """

    def __init__(self, dialog_policy="accept", prompt_text=None):
        if dialog_policy not in DIALOG_POLICIES:
            raise ValueError(f"dialog_policy must be one of {DIALOG_POLICIES}, got {dialog_policy!r}")
        self.dialog_policy = dialog_policy
        self.prompt_text = prompt_text
        self._events = []
        self._listeners = []

    def attach(self, page):
        listeners = [
            ("console", self._on_console),
            ("pageerror", self._on_page_error),
            ("dialog", self._on_dialog),
        ]
        for event_name, handler in listeners:
            page.on(event_name, handler)
            self._listeners.append((page, event_name, handler))
        return self

    def detach(self):
        for page, event_name, handler in self._listeners:
            page.remove_listener(event_name, handler)
        self._listeners = []

    # --- listeners ---

    def _on_console(self, msg):
        event = ConsoleEvent(level=msg.type, text=msg.text)
        logger.debug("console.%s: %s", event.level, event.text)
        self._events.append(event)

    def _on_page_error(self, error):
        event = ExceptionEvent(
            message=getattr(error, "message", str(error)),
            name=getattr(error, "name", None) or "Error",
            stack=getattr(error, "stack", None) or "",
        )
        logger.debug("pageerror %s: %s", event.name, event.message)
        self._events.append(event)

    def _on_dialog(self, dialog):
        event = DialogEvent(type=dialog.type, message=dialog.message)
        logger.debug("dialog (%s): %s", event.type, event.message)
        self._events.append(event)

        if self.dialog_policy is None:
            return
        try:
            if self.dialog_policy == "accept":
                if self.prompt_text is not None and dialog.type == "prompt":
                    dialog.accept(self.prompt_text)
                else:
                    dialog.accept()
            else:
                dialog.dismiss()
        except PlaywrightError as e:
            # Stacked listeners answer the same dialog more than once.
            logger.debug("Dialog already handled: %s", e)

    # --- buffer access ---

    def events(self):
        return list(self._events)

    def errors(self):
        """Exceptions and console errors in the order the page raised them."""
        return [e for e in self._events if is_error(e)]

    def console(self, level=None):
        return [
            e for e in self._events
            if e.kind == "console" and (level is None or e.level == level)
        ]

    def dialogs(self):
        return [e for e in self._events if is_dialog(e)]

    def consume(self, predicate, drain=True):
        """Return the events matching ``predicate``.

        With ``drain`` the matches leave the buffer, so the next call only
        sees what the page emitted afterwards.
        """
        matched, kept = [], []
        for event in self._events:
            (matched if predicate(event) else kept).append(event)
        if drain:
            self._events = kept
        return matched

    def reset(self):
        self._events = []
