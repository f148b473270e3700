"""Demo suite: open the start page on every configured browser in parallel."""

from selenium.webdriver.remote.webdriver import WebDriver

from . import __version__
from .browser import RemoteSessionClient, SessionConnectionError, SessionRegistry
from .config import Settings, get_settings
from .logging_config import get_logger, setup_logging
from .runner import CaseResult, run_parallel

logger = get_logger(__name__)


def check_start_page(driver: WebDriver, url: str) -> None:
    """Navigate to the start page and require a non-empty title."""
    driver.get(url)
    title = driver.title
    if not title:
        raise AssertionError(f"Start page has no title: {url}")
    logger.info(f"Loaded '{title}' in session {driver.session_id}")


def build_registry(settings: Settings) -> SessionRegistry:
    """Create the suite-wide session registry from settings."""
    client = RemoteSessionClient(settings.driver, settings.grid)
    return SessionRegistry(client, settings.driver, settings.endpoint())


def build_cases(settings: Settings) -> list[tuple[str, str]]:
    # Two cases per browser so both session modes have something to reuse
    return [
        (browser, settings.suite.base_url)
        for browser in settings.suite.browsers
        for _ in range(2)
    ]


def log_settings(settings: Settings) -> None:
    logger.info(f"Starting {settings.app_name} v{__version__}")
    logger.info(f"Environment: {settings.environment}")
    for message in settings.validate_settings():
        if "WARNING" in message:
            logger.warning(message.replace("WARNING: ", ""))
        elif "ERROR" in message:
            logger.error(message.replace("ERROR: ", ""))
        else:
            logger.info(message.replace("INFO: ", ""))


def main() -> int:
    """Run the demo suite. Returns a process exit code."""
    settings = get_settings()
    setup_logging(settings.logging)
    log_settings(settings)

    try:
        registry = build_registry(settings)
    except SessionConnectionError as e:
        logger.error(f"Cannot start suite: {e}")
        return 1

    with registry:
        results: list[CaseResult] = run_parallel(
            registry,
            build_cases(settings),
            check_start_page,
            max_workers=settings.suite.max_workers,
            reuse_sessions=settings.suite.reuse_sessions,
        )
        logger.info(f"Registry stats: {registry.get_registry_stats()}")

    for result in results:
        if not result.passed:
            logger.error(
                f"Case {result.index} ({result.browser}) failed during {result.phase}: "
                f"{result.error}"
            )

    return 0 if all(result.passed for result in results) else 1
