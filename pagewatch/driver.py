import logging
import re
from typing import Dict, List, Union

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from pagewatch import config
from pagewatch.artifacts import dump_screenshot_and_html
from pagewatch.errors import NavigationError, SelectorNotFoundError

logger = logging.getLogger(__name__)

ACTIONS = ("click", "fill", "select", "press", "check", "uncheck")

# Global binding names (optionally dotted) accepted by read_global.
_GLOBAL_NAME = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")

# Reads the first matched element in one round trip. evaluate_all does not
# auto-wait, so an element removed since the count reads as null at once.
_READ_JS = """(els, [mode, name]) => {
    const el = els[0];
    if (!el) return null;
    if (mode === 'attribute') return el.getAttribute(name);
    if (mode === 'style') {
        const style = getComputedStyle(el);
        return style.getPropertyValue(name) || style[name] || '';
    }
    if (mode === 'value') return el.value === undefined ? '' : el.value;
    return el.textContent;
}"""

# Indirect eval runs in global scope, so top-level let/const bindings of
# the page's scripts are visible too, not only window properties.
_READ_GLOBAL_JS = """name => {
    try { return (0, eval)(name); } catch (e) { return undefined; }
}"""


class PageDriver:
    """Page object for one target page.

    Subclasses name the page's controls and output regions in ``fields``,
    each mapped to a selector or to a list of fallback selectors tried in
    order (the first one matching anything wins)::

        class HashMapPage(PageDriver):
            path = "hash_map.html"
            fields = {
                "key": "#key",
                "add": ["#add-btn", "button:has-text('Add')"],
                "output": "#output",
            }

    Actions return as soon as Playwright has dispatched the input. They do
    not wait for whatever the page does in response; use a
    ``ConditionWaiter`` for that.
    """

    path = ""
    url = None
    fields: Dict[str, Union[str, List[str]]] = {}

    def __init__(self, page: Page, base_url=None, timeout_ms=None, artifacts_dir=None):
        settings = config.load_settings()
        self.page = page
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout_ms = timeout_ms or settings.timeout_ms
        self.artifacts_dir = artifacts_dir or settings.artifacts_dir

    @property
    def target_url(self):
        if self.url:
            return self.url
        return f"{self.base_url}/{self.path.lstrip('/')}"

    def goto(self, wait_until="load"):
        url = self.target_url
        logger.info("Navigating to %s", url)
        try:
            response = self.page.goto(url, wait_until=wait_until, timeout=self.timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(url, str(e).splitlines()[0] if str(e) else "") from e
        if response is not None and response.status >= 400:
            raise NavigationError(url, f"HTTP {response.status}")
        return response

    # --- locating ---

    def selectors_for(self, field):
        entry = self.fields.get(field, field)
        if isinstance(entry, str):
            return [entry]
        return list(entry)

    def _find(self, field):
        """Locator of every element matched by the first selector with a match, or None."""
        for selector in self.selectors_for(field):
            locator = self.page.locator(selector)
            if locator.count() > 0:
                return locator
        return None

    def locate_all(self, field) -> Locator:
        found = self._find(field)
        if found is not None:
            return found
        # Nothing matches yet; hand back the primary selector so Playwright's
        # auto-waiting still applies to whatever the caller does next.
        return self.page.locator(self.selectors_for(field)[0])

    def locate(self, field) -> Locator:
        return self.locate_all(field).first

    def exists(self, field):
        return self._find(field) is not None

    def count(self, field):
        found = self._find(field)
        return found.count() if found is not None else 0

    def require(self, field) -> Locator:
        found = self._find(field)
        if found is None:
            raise SelectorNotFoundError(field, self.selectors_for(field))
        return found.first

    # --- reading ---

    def read(self, field, attribute=None, style=None, value=False):
        """Current state of ``field``.

        Text content by default, or the named attribute, computed style
        property, or input value. A missing element reads as ``""`` (text,
        value) or ``None`` (attribute, style) so tests can check for
        elements that must not exist. Reads never wait, which keeps them
        safe to call from a polling predicate.
        """
        missing = None if (attribute or style) else ""
        found = self._find(field)
        if found is None:
            return missing

        if attribute:
            mode, name = "attribute", attribute
        elif style:
            mode, name = "style", style
        else:
            mode, name = ("value" if value else "text"), None
        result = found.evaluate_all(_READ_JS, [mode, name])
        if result is None:
            if mode in ("text", "value"):
                logger.debug("'%s' disappeared before it could be read", field)
            return missing
        return result

    def texts(self, field):
        found = self._find(field)
        if found is None:
            return []
        return [t.strip() for t in found.all_text_contents()]

    # --- acting ---

    def act(self, action, field, *args, **kwargs):
        if action not in ACTIONS:
            raise ValueError(f"Unknown action {action!r}; expected one of {ACTIONS}")
        locator = self.locate(field)
        kwargs.setdefault("timeout", self.timeout_ms)
        logger.debug("%s %s %s", action, field, args if args else "")
        try:
            if action == "click":
                locator.click(**kwargs)
            elif action == "fill":
                locator.fill(str(args[0]), **kwargs)
            elif action == "select":
                locator.select_option(args[0], **kwargs)
            elif action == "press":
                locator.press(args[0], **kwargs)
            elif action == "check":
                locator.check(**kwargs)
            else:
                locator.uncheck(**kwargs)
        except PlaywrightTimeoutError as e:
            if not self.exists(field):
                raise SelectorNotFoundError(field, self.selectors_for(field)) from e
            raise

    def click(self, field, **kwargs):
        self.act("click", field, **kwargs)

    def fill(self, field, value, **kwargs):
        self.act("fill", field, value, **kwargs)

    def select(self, field, value, **kwargs):
        self.act("select", field, value, **kwargs)

    def press(self, field, key, **kwargs):
        self.act("press", field, key, **kwargs)

    def safe_click(self, field, timeout_ms=5000):
        """Click with escalating fallbacks: normal, forced, then DOM ``el.click()``.

        For controls hidden behind overlays or mid-animation. Saves failure
        artifacts before re-raising when all three fail.
        """
        locator = self.locate(field)
        try:
            locator.click(timeout=timeout_ms)
            return
        except PlaywrightError as e:
            logger.warning("Standard click failed for %s: %s. Retrying with force=True...", field, e)

        try:
            locator.click(force=True, timeout=timeout_ms)
            return
        except PlaywrightError as e:
            logger.warning("Force click failed for %s: %s. Retrying with JS evaluation...", field, e)

        try:
            locator.evaluate("el => el.click()", timeout=timeout_ms)
        except PlaywrightError as e:
            logger.error("JS click failed for %s: %s", field, e)
            self.capture(f"click_fail_{field}")
            raise

    def click_expecting_navigation(self, field, timeout_ms=1500):
        """Click ``field`` and report whether it navigated (e.g. a form submit)."""
        locator = self.require(field)
        try:
            with self.page.expect_navigation(wait_until="load", timeout=timeout_ms):
                locator.click(timeout=self.timeout_ms)
        except PlaywrightTimeoutError:
            return False
        return True

    # --- escape hatch ---

    def evaluate(self, expression, arg=None):
        return self.page.evaluate(expression, arg)

    def read_global(self, name):
        """Value of a page-scoped global, ``None`` when it is not defined."""
        if not _GLOBAL_NAME.match(name):
            raise ValueError(f"Not a global binding name: {name!r}")
        return self.page.evaluate(_READ_GLOBAL_JS, name)

    def capture(self, name):
        return dump_screenshot_and_html(self.page, self.artifacts_dir, name)
