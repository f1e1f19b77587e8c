import logging
import socket
import subprocess
import sys
import time

import requests

logger = logging.getLogger(__name__)


def find_free_port(host="127.0.0.1"):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return s.getsockname()[1]


class FixtureServer:
    """Serves a directory of static target pages with ``python -m http.server``.

    Use as a context manager; the server process is terminated on exit,
    including when the block raises::

        with FixtureServer("tests/fixtures/pages") as server:
            page.goto(server.url_for("hash_map.html"))
    """

    def __init__(self, directory, port=None, host="127.0.0.1", startup_timeout=10.0):
        self.directory = str(directory)
        self.host = host
        self.port = port or find_free_port(host)
        self.startup_timeout = startup_timeout
        self._process = None

    @property
    def base_url(self):
        return f"http://{self.host}:{self.port}"

    def url_for(self, path=""):
        return f"{self.base_url}/{path.lstrip('/')}"

    def start(self):
        if self._process is not None:
            return self
        self._process = subprocess.Popen(
            [sys.executable, "-m", "http.server", str(self.port),
             "--bind", self.host, "--directory", self.directory],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        logger.info("Fixture server starting on %s (serving %s)", self.base_url, self.directory)
        try:
            self._wait_until_ready()
        except Exception:
            self.stop()
            raise
        return self

    def _wait_until_ready(self):
        deadline = time.monotonic() + self.startup_timeout
        while True:
            if self._process.poll() is not None:
                raise RuntimeError(f"Fixture server exited with code {self._process.returncode}")
            try:
                requests.get(self.base_url, timeout=1)
                logger.info("Fixture server ready on %s", self.base_url)
                return
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout):
                if time.monotonic() > deadline:
                    raise RuntimeError(f"Fixture server did not come up on {self.base_url} "
                                       f"within {self.startup_timeout}s")
                time.sleep(0.1)

    def stop(self):
        if self._process is None:
            return
        self._process.terminate()
        try:
            self._process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            self._process.kill()
            self._process.wait()
        logger.info("Fixture server on %s stopped", self.base_url)
        self._process = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
