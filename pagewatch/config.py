"""Environment-driven settings.

    PAGEWATCH_BASE_URL          where target pages are served from
    PAGEWATCH_TIMEOUT_MS        default wait / action timeout
    PAGEWATCH_POLL_INTERVAL_MS  default ConditionWaiter poll interval
    PAGEWATCH_ARTIFACTS_DIR     failure screenshots and HTML dumps
    PAGEWATCH_HEADED            set to run scripts with a visible browser
"""
import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "http://127.0.0.1:5500"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = 10000
    poll_interval_ms: int = 100
    artifacts_dir: str = "screenshots"
    headless: bool = True


def _int_from_env(environ, name, default):
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ=None):
    if environ is None:
        environ = os.environ

    # CI always runs headless, whatever PAGEWATCH_HEADED says
    headless = not environ.get("PAGEWATCH_HEADED") or bool(environ.get("CI"))

    return Settings(
        base_url=environ.get("PAGEWATCH_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        timeout_ms=_int_from_env(environ, "PAGEWATCH_TIMEOUT_MS", Settings.timeout_ms),
        poll_interval_ms=_int_from_env(environ, "PAGEWATCH_POLL_INTERVAL_MS", Settings.poll_interval_ms),
        artifacts_dir=environ.get("PAGEWATCH_ARTIFACTS_DIR", Settings.artifacts_dir),
        headless=headless,
    )
