"""Suite-wide pytest hooks.

Unit tests and the SQLite-backed integration tests always run. Tests marked
``integration`` start a Postgres container and are skipped unless asked for
with ``--run-integration`` (or ``RUN_INTEGRATION=1``); ``--run-all`` /
``RUN_ALL_TESTS=1`` lifts every skip.
"""

import os

import pytest
from dotenv import load_dotenv

from quire_config import clear_settings_cache, get_config_dir

for _name in (".env.dev", ".env"):
    if (get_config_dir() / _name).is_file():
        load_dotenv(get_config_dir() / _name)
        break


def pytest_addoption(parser):
    group = parser.getgroup("quire")
    group.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="also run tests that need a Postgres container",
    )
    group.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="run every test, ignoring skip rules",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: needs Docker for a Postgres container",
    )


def _env_enabled(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes"}


def _containers_enabled(config) -> bool:
    return any(
        (
            config.getoption("--run-all"),
            config.getoption("--run-integration"),
            _env_enabled("RUN_ALL_TESTS"),
            _env_enabled("RUN_INTEGRATION"),
        ),
    )


def pytest_collection_modifyitems(config, items):
    if _containers_enabled(config):
        return

    skip = pytest.mark.skip(reason="needs --run-integration or RUN_INTEGRATION=1")
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(skip)


@pytest.fixture(scope="session", autouse=True)
def fresh_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()
