import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from pagewatch import PageDriver


class RecordingLocator:
    """Counts as a match; ``read_result`` is what the page-side read returns."""

    def __init__(self, calls, read_result):
        self.calls = calls
        self.read_result = read_result

    def count(self):
        return 1

    @property
    def first(self):
        return self

    def evaluate_all(self, expression, arg=None):
        self.calls.append(("evaluate_all", arg))
        return self.read_result

    def _waiting_read(self, name, timeout):
        self.calls.append((name, timeout))
        raise PlaywrightTimeoutError(f"{name}: Timeout {timeout}ms exceeded.")

    def text_content(self, timeout=None):
        self._waiting_read("text_content", timeout)

    def input_value(self, timeout=None):
        self._waiting_read("input_value", timeout)

    def get_attribute(self, name, timeout=None):
        self._waiting_read("get_attribute", timeout)

    def evaluate(self, expression, arg=None, timeout=None):
        self._waiting_read("evaluate", timeout)


class RecordingPage:
    def __init__(self, read_result):
        self.calls = []
        self.read_result = read_result

    def locator(self, selector):
        return RecordingLocator(self.calls, self.read_result)


class SortPage(PageDriver):
    path = "bubble_sort.html"
    fields = {"comparing": ".bar.comparing", "status": "#status"}


@pytest.mark.parametrize("kwargs, expected", [
    ({}, ""),
    ({"value": True}, ""),
    ({"attribute": "data-index"}, None),
    ({"style": "color"}, None),
])
def test_element_gone_between_count_and_read_returns_sentinel(kwargs, expected):
    # .bar.comparing moves between bars on every animation step
    page = RecordingPage(read_result=None)
    driver = SortPage(page, base_url="http://127.0.0.1:1", timeout_ms=10000)

    assert driver.read("comparing", **kwargs) == expected
    assert [name for name, _ in page.calls] == ["evaluate_all"]


@pytest.mark.parametrize("kwargs, read_args", [
    ({}, ["text", None]),
    ({"value": True}, ["value", None]),
    ({"attribute": "data-index"}, ["attribute", "data-index"]),
    ({"style": "background-color"}, ["style", "background-color"]),
])
def test_read_is_a_single_page_evaluation(kwargs, read_args):
    page = RecordingPage(read_result="Sorting...")
    driver = SortPage(page, base_url="http://127.0.0.1:1")

    assert driver.read("status", **kwargs) == "Sorting..."
    assert page.calls == [("evaluate_all", read_args)]


def test_target_url_joins_base_url_and_path():
    driver = SortPage(RecordingPage(None), base_url="http://127.0.0.1:5500/")

    assert driver.target_url == "http://127.0.0.1:5500/bubble_sort.html"
