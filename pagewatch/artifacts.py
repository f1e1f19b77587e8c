import logging
import os
import re

logger = logging.getLogger(__name__)


def _safe_name(name):
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_") or "page"


def dump_screenshot_and_html(page, artifacts_dir, name):
    """Save a full-page screenshot and the page HTML for debugging a failure.

    Best effort: a page that is already closed yields no files. Returns the
    paths that were actually written.
    """
    os.makedirs(artifacts_dir, exist_ok=True)
    base = os.path.join(artifacts_dir, _safe_name(name))
    written = []

    screenshot_path = f"{base}.png"
    try:
        page.screenshot(path=screenshot_path, full_page=True)
        written.append(screenshot_path)
    except Exception as e:
        logger.warning("Failed to save screenshot %s: %s", screenshot_path, e)

    html_path = f"{base}.html"
    try:
        html = page.content()
        with open(html_path, "w", encoding="utf-8") as f:
            f.write(html)
        written.append(html_path)
    except Exception as e:
        logger.warning("Failed to save HTML %s: %s", html_path, e)

    if written:
        logger.info("Saved failure artifacts: %s", ", ".join(written))
    return written
