import pytest

from pages import HashMapPage

pytestmark = pytest.mark.e2e


def test_contexts_do_not_share_page_state(browser, base_url):
    first = browser.new_context()
    try:
        driver = HashMapPage(first.new_page(), base_url=base_url)
        driver.goto()
        driver.add_entry("apple", "red")
        assert driver.read_global("hashMap") == {"apple": "red"}
    finally:
        first.close()

    second = browser.new_context()
    try:
        driver = HashMapPage(second.new_page(), base_url=base_url)
        driver.goto()
        assert driver.read_global("hashMap") == {}
        assert driver.read("output") == ""
    finally:
        second.close()


def test_reload_resets_page_state(page, base_url, sidecar):
    driver = HashMapPage(page, base_url=base_url)
    driver.goto()
    driver.add_entry("apple", "red")

    driver.goto()

    assert driver.read_global("hashMap") == {}
