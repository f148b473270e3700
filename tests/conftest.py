"""Shared test fixtures and configuration."""

import itertools
import os
import threading
from unittest.mock import patch

import pytest

from src.parallel_webdriver.browser import RemoteSessionClient, SessionRegistry
from src.parallel_webdriver.config import DriverConfig, GridConfig, reload_settings

_session_ids = itertools.count(1)


class FakeDriver:
    """Stand-in for a Selenium WebDriver session."""

    def __init__(self, browser=None, endpoint=None):
        self.session_id = f"fake-session-{next(_session_ids)}"
        self.browser = browser
        self.endpoint = endpoint
        self.maximized = False
        self.implicit_wait = None
        self.quit_count = 0
        self.quit_error = None
        self.title = "Fake Page"
        self.visited = []
        self._marker = None

    def maximize_window(self):
        self.maximized = True

    def implicitly_wait(self, seconds):
        self.implicit_wait = seconds

    def get(self, url):
        self.visited.append(url)

    def execute_script(self, script, *args):
        if script.strip().startswith("return"):
            return self._marker
        self._marker = args[0]

    def quit(self):
        self.quit_count += 1
        if self.quit_error:
            raise self.quit_error


class FakeSessionClient(RemoteSessionClient):
    """Client that hands out FakeDriver sessions instead of starting browsers."""

    def __init__(self, config=None):
        super().__init__(config or DriverConfig(), GridConfig(status_check=False))
        self.opened = []
        self.open_error = None
        self._lock = threading.Lock()

    def open(self, browser, endpoint, options=None):
        if self.open_error:
            raise self.open_error
        driver = FakeDriver(browser, endpoint)
        with self._lock:
            self.opened.append(driver)
        return driver


@pytest.fixture
def driver_config():
    """Driver config with defaults, independent of the environment."""
    return DriverConfig(implicit_wait=10.0, maximize_window=True, headless=False)


@pytest.fixture
def fake_client_class():
    """Fixture providing the fake client class for tests that subclass it."""
    return FakeSessionClient


@pytest.fixture
def fake_client(driver_config):
    """Fixture providing a session client that opens fake sessions."""
    return FakeSessionClient(driver_config)


@pytest.fixture
def registry(fake_client, driver_config):
    """Fixture providing a session registry backed by fake sessions."""
    registry = SessionRegistry(fake_client, driver_config)
    yield registry
    registry.close()


@pytest.fixture
def clean_env():
    """Fixture to clear configuration environment variables."""
    with patch.dict(os.environ, {}, clear=True):
        reload_settings()
        yield
        reload_settings()


@pytest.fixture
def grid_env():
    """Fixture to configure a remote hub through the environment."""
    env = {
        "GRID_HUB_URL": "http://grid.example.com:4444",
        "GRID_USERNAME": "runner",
        "GRID_PASSWORD": "s3cret",
    }
    with patch.dict(os.environ, env, clear=True):
        reload_settings()
        yield
        reload_settings()
