"""Selenium-backed client for opening and closing WebDriver sessions."""

import logging

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver
from urllib3.exceptions import HTTPError as URLLib3Error

from ..config import DriverConfig, GridConfig
from .errors import CloseError, SessionConnectionError
from .grid import check_hub_status
from .options import BrowserKind, Endpoint, build_options

logger = logging.getLogger(__name__)


class RemoteSessionClient:
    """Opens WebDriver sessions against local driver binaries or a remote hub.

    Stateless apart from its configuration, so one instance is shared by all workers.
    """

    def __init__(self, config: DriverConfig | None = None, grid: GridConfig | None = None):
        self.config = config or DriverConfig()
        self.grid = grid or GridConfig()

    def open(self, browser: BrowserKind, endpoint: Endpoint, options=None) -> WebDriver:
        """
        Open a new browser session.

        Args:
            browser: Browser to start
            endpoint: Local driver or remote hub
            options: Selenium options (built from the driver config when omitted)

        Returns:
            The live WebDriver session

        Raises:
            SessionConnectionError: If the endpoint is unreachable or the session
                could not be created
        """
        if options is None:
            options = build_options(browser, self.config)

        try:
            if endpoint.is_remote:
                if self.grid.status_check:
                    check_hub_status(endpoint, timeout=self.grid.status_timeout)
                driver = webdriver.Remote(command_executor=endpoint.url, options=options)
            else:
                driver = self._start_local(browser, options)
        except SessionConnectionError:
            raise
        except (WebDriverException, URLLib3Error, OSError, ValueError) as e:
            logger.error(f"Failed to open {browser.value} session on {endpoint.redacted()}: {e}")
            raise SessionConnectionError(
                f"Could not open {browser.value} session on {endpoint.redacted()}: {e}"
            ) from e

        logger.info(
            f"Opened {browser.value} session {driver.session_id} on {endpoint.redacted()}"
        )
        return driver

    def _start_local(self, browser: BrowserKind, options) -> WebDriver:
        if browser is BrowserKind.CHROME:
            service = webdriver.ChromeService(executable_path=self.config.chrome_driver_path)
            return webdriver.Chrome(options=options, service=service)

        service = webdriver.EdgeService(executable_path=self.config.edge_driver_path)
        return webdriver.Edge(options=options, service=service)

    def close(self, driver: WebDriver) -> None:
        """Quit a session and its browser process.

        Raises:
            CloseError: If the session could not be shut down
        """
        session_id = getattr(driver, "session_id", None)
        try:
            driver.quit()
        except Exception as e:
            raise CloseError(f"Failed to close session {session_id}: {e}") from e
        logger.debug(f"Closed session {session_id}")

    def maximize(self, driver: WebDriver) -> None:
        driver.maximize_window()

    def set_implicit_wait(self, driver: WebDriver, seconds: float) -> None:
        driver.implicitly_wait(seconds)
