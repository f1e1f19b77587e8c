"""Drive each bundled demo page through the harness and save screenshots.

    python verification/verify_demo_pages.py

Serves tests/fixtures/pages locally, so nothing else needs to be running.
Needs the package installed (`pip install -e .`); the demo page objects
are shared with the test suite and imported from tests/pages.py.
"""
import logging
import os
import sys

from playwright.sync_api import sync_playwright

from pagewatch import ConditionWaiter, ObservationSidecar, assert_satisfied, assert_single_dialog
from pagewatch.artifacts import dump_screenshot_and_html
from pagewatch.config import load_settings
from pagewatch.predicates import text_equals
from pagewatch.server import FixtureServer

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(ROOT, "tests"))

from pages import BrokenPage, BubbleSortPage, HashMapPage, TraversalPage  # noqa: E402

PAGES_DIR = os.path.join(ROOT, "tests", "fixtures", "pages")


def verify_hash_map(page, base_url, sidecar, waiter):
    driver = HashMapPage(page, base_url=base_url)
    driver.goto()

    logging.info("Submitting empty form, expecting a validation alert...")
    driver.click("add")
    assert_satisfied(waiter.wait_for(sidecar.dialogs, timeout_ms=3000), "validation alert")
    assert_single_dialog(sidecar, "Please enter both key and value")

    logging.info("Adding apple=red...")
    driver.add_entry("apple", "red")
    if driver.read("key", value=True) != "":
        raise AssertionError("Key input was not cleared after add")
    logging.info("Map contents: %s", driver.read_global("hashMap"))
    return driver


def verify_traversal(page, base_url, sidecar, waiter):
    driver = TraversalPage(page, base_url=base_url, step_ms=100)
    driver.goto()

    logging.info("Starting BFS...")
    driver.click("start")
    predicate, until = text_equals(page, "#status", "Done")
    status = assert_satisfied(waiter.wait_for(predicate, until=until, timeout_ms=5000), "traversal done")
    logging.info("Traversal status: %s, visited %d nodes", status, driver.visited_count())
    return driver


def verify_bubble_sort(page, base_url, sidecar, waiter):
    driver = BubbleSortPage(page, base_url=base_url)
    driver.goto()

    logging.info("Sorting %s...", driver.bar_values())
    driver.click("sort")
    predicate, until = text_equals(page, "#status", "Sorted!")
    assert_satisfied(waiter.wait_for(predicate, until=until, timeout_ms=10000), "sort finished")
    logging.info("Sorted bars: %s", driver.bar_values())
    return driver


def verify_broken(page, base_url, sidecar, waiter):
    driver = BrokenPage(page, base_url=base_url)
    driver.goto()

    # This page is broken on purpose; record what it reports.
    outcome = waiter.wait_for(sidecar.errors, timeout_ms=3000)
    for error in outcome.last_observed_value or []:
        logging.info("Observed page error: %s", error)
    return driver


CHECKS = [
    ("hash_map", verify_hash_map),
    ("traversal", verify_traversal),
    ("bubble_sort", verify_bubble_sort),
    ("broken", verify_broken),
]


def run():
    logging.basicConfig(level=logging.INFO, format='[%(asctime)s] %(message)s', datefmt='%H:%M:%S')
    settings = load_settings()
    failures = []

    with FixtureServer(PAGES_DIR) as server, sync_playwright() as p:
        browser = p.chromium.launch(headless=settings.headless)
        try:
            for name, check in CHECKS:
                logging.info("--- %s ---", name)
                # fresh context per page: demo globals must not leak between checks
                context = browser.new_context()
                page = context.new_page()
                sidecar = ObservationSidecar().attach(page)
                waiter = ConditionWaiter.for_page(page)
                try:
                    driver = check(page, server.base_url, sidecar, waiter)
                    driver.capture(f"verify_{name}")
                    logging.info("✅ %s verified", name)
                except Exception as e:
                    logging.error("❌ %s failed: %s", name, e)
                    failures.append(name)
                    dump_screenshot_and_html(page, settings.artifacts_dir, f"verify_{name}_error")
                finally:
                    context.close()
        finally:
            browser.close()

    if failures:
        logging.error("VERIFICATION FAILED: %s", ", ".join(failures))
        sys.exit(1)
    logging.info("VERIFICATION SUCCESSFUL")


if __name__ == "__main__":
    run()
