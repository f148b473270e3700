"""Per-worker registry of live WebDriver sessions."""

import logging
import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager

from selenium.webdriver.remote.webdriver import WebDriver

from ..config import DriverConfig
from ..logging_config import log_with_context
from .client import RemoteSessionClient
from .errors import CloseError, SessionError
from .options import BrowserKind, Endpoint

logger = logging.getLogger(__name__)


def current_worker_id() -> str:
    """Default worker identity for the calling thread."""
    thread = threading.current_thread()
    return f"{thread.name}-{thread.ident}"


class SessionRegistry:
    """Maps each worker to exactly one live browser session.

    Sessions are opened lazily on the first ``acquire`` for a worker and closed on
    ``release``. The map is shared by all workers; opening and closing browsers
    happens outside the lock so workers never wait on each other's browsers.
    Calls for a single worker are expected to be sequential.

    Create one registry at suite start and ``close()`` it at suite end (or use it
    as a context manager) so no browser outlives the suite.
    """

    def __init__(
        self,
        client: RemoteSessionClient | None = None,
        config: DriverConfig | None = None,
        endpoint: Endpoint | None = None,
    ):
        self.config = config or DriverConfig()
        self.client = client or RemoteSessionClient(self.config)
        self.endpoint = endpoint or Endpoint.local()
        self._sessions: dict[Hashable, WebDriver] = {}
        self._lock = threading.Lock()
        self._closed = False
        self._stats = {"opened": 0, "released": 0, "close_failures": 0}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, worker_id: Hashable) -> bool:
        with self._lock:
            return worker_id in self._sessions

    @property
    def closed(self) -> bool:
        return self._closed

    def acquire(
        self,
        worker_id: Hashable,
        browser: str | BrowserKind,
        endpoint: Endpoint | str | None = None,
    ) -> WebDriver:
        """
        Get the worker's session, opening one on first use.

        A new session is maximized and gets the configured implicit wait. Calling
        again for the same worker returns the existing session unchanged.

        Args:
            worker_id: Identity of the calling worker
            browser: Browser kind ("chrome" or "edge")
            endpoint: Where to open the session, as an Endpoint or hub URL
                (registry default when None)

        Returns:
            The worker's WebDriver session

        Raises:
            UnsupportedBrowserError: If the browser kind is not supported
            SessionConnectionError: If the endpoint is malformed or unreachable
            SessionError: If the registry is closed
        """
        with self._lock:
            if self._closed:
                raise SessionError("Session registry is closed")
            existing = self._sessions.get(worker_id)
        if existing is not None:
            return existing

        kind = BrowserKind.parse(browser)
        target = self._resolve_endpoint(endpoint)

        driver = self.client.open(kind, target)
        try:
            if self.config.maximize_window:
                self.client.maximize(driver)
            self.client.set_implicit_wait(driver, self.config.implicit_wait)
        except Exception:
            logger.error(f"Session setup failed for worker {worker_id}, closing session")
            self._close_quietly(worker_id, driver)
            raise

        with self._lock:
            if not self._closed:
                self._sessions[worker_id] = driver
                self._stats["opened"] += 1
                registered = True
            else:
                registered = False

        if not registered:
            self._close_quietly(worker_id, driver)
            raise SessionError("Session registry closed while opening session")

        log_with_context(
            logger,
            logging.INFO,
            f"Session acquired for worker {worker_id}",
            worker=str(worker_id),
            browser=kind.value,
            endpoint=target.redacted(),
        )
        return driver

    def _resolve_endpoint(self, endpoint: Endpoint | str | None) -> Endpoint:
        if endpoint is None:
            return self.endpoint
        if isinstance(endpoint, Endpoint):
            return endpoint
        return Endpoint.parse(endpoint)

    def current(self, worker_id: Hashable) -> WebDriver | None:
        """Return the worker's session without creating one."""
        with self._lock:
            return self._sessions.get(worker_id)

    def release(self, worker_id: Hashable) -> bool:
        """
        Close and forget the worker's session.

        Safe to call repeatedly or when no session was acquired. Close failures are
        logged, never raised.

        Returns:
            True if a session was released
        """
        with self._lock:
            driver = self._sessions.pop(worker_id, None)
            if driver is not None:
                self._stats["released"] += 1

        if driver is None:
            return False

        self._close_quietly(worker_id, driver)
        logger.info(f"Session released for worker {worker_id}")
        return True

    def _close_quietly(self, worker_id: Hashable, driver: WebDriver) -> None:
        try:
            self.client.close(driver)
        except CloseError as e:
            with self._lock:
                self._stats["close_failures"] += 1
            logger.warning(f"Error closing session for worker {worker_id}: {e}")

    @contextmanager
    def session(
        self,
        worker_id: Hashable,
        browser: str | BrowserKind,
        endpoint: Endpoint | str | None = None,
    ) -> Iterator[WebDriver]:
        """Context manager for a worker session, released on every exit path."""
        try:
            yield self.acquire(worker_id, browser, endpoint)
        finally:
            self.release(worker_id)

    def active_workers(self) -> list[Hashable]:
        with self._lock:
            return list(self._sessions)

    def release_all(self) -> int:
        """Release every live session. Returns the number released."""
        released = 0
        for worker_id in self.active_workers():
            if self.release(worker_id):
                released += 1
        if released:
            logger.info(f"Released {released} remaining session(s)")
        return released

    def close(self) -> None:
        """Release all sessions and reject further acquires."""
        with self._lock:
            self._closed = True
        self.release_all()
        logger.info("Session registry closed")

    def get_registry_stats(self) -> dict:
        """Get registry statistics for monitoring."""
        with self._lock:
            return {
                **self._stats,
                "active": len(self._sessions),
            }
