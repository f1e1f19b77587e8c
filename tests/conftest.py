import os

import pytest

from pagewatch import ConditionWaiter, ObservationSidecar
from pagewatch.server import FixtureServer

PAGES_DIR = os.path.join(os.path.dirname(__file__), "fixtures", "pages")


@pytest.fixture(scope="session")
def fixture_server():
    """Serves tests/fixtures/pages for the whole session."""
    with FixtureServer(PAGES_DIR) as server:
        yield server


@pytest.fixture(scope="session")
def base_url(fixture_server):
    # Overrides pytest-base-url so page.goto("hash_map.html") also works.
    return fixture_server.base_url


@pytest.fixture
def sidecar(page):
    """A sidecar attached to the test's page before anything navigates it."""
    observer = ObservationSidecar(dialog_policy="accept").attach(page)
    yield observer
    observer.detach()


@pytest.fixture
def waiter(page):
    return ConditionWaiter.for_page(page)


@pytest.fixture
def artifacts_dir(tmp_path):
    return str(tmp_path / "artifacts")
