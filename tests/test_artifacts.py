import os

from pagewatch.artifacts import dump_screenshot_and_html


class RecordingPage:
    def screenshot(self, path, full_page=False):
        with open(path, "wb") as f:
            f.write(b"\x89PNG\r\n\x1a\nfake")

    def content(self):
        return "<html><body>state</body></html>"


class ClosedPage:
    def screenshot(self, path, full_page=False):
        raise RuntimeError("Target page, context or browser has been closed")

    def content(self):
        raise RuntimeError("Target page, context or browser has been closed")


def test_writes_screenshot_and_html(tmp_path):
    written = dump_screenshot_and_html(RecordingPage(), str(tmp_path / "out"), "sort: step 3")

    assert [os.path.basename(p) for p in written] == ["sort_step_3.png", "sort_step_3.html"]
    assert (tmp_path / "out" / "sort_step_3.html").read_text(encoding="utf-8").endswith("</html>")


def test_closed_page_writes_nothing(tmp_path):
    assert dump_screenshot_and_html(ClosedPage(), str(tmp_path), "gone") == []
