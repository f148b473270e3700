"""Browser kinds, session endpoints and WebDriver options."""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import quote, urlparse, urlunparse

from selenium.webdriver import ChromeOptions, EdgeOptions

from .errors import SessionConnectionError, UnsupportedBrowserError

if TYPE_CHECKING:
    from ..config import DriverConfig

logger = logging.getLogger(__name__)

LOCAL = "local"


class BrowserKind(str, Enum):
    """Supported browsers."""

    CHROME = "chrome"
    EDGE = "edge"

    @classmethod
    def parse(cls, value: "str | BrowserKind") -> "BrowserKind":
        """Parse a browser name, ignoring case and surrounding whitespace.

        Raises:
            UnsupportedBrowserError: If the name is not a supported browser
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedBrowserError(f"Browser not supported: {value}")


@dataclass(frozen=True)
class Endpoint:
    """Where sessions are opened: local driver binaries or a remote hub.

    Attributes:
        url: Hub URL, or None for a local driver
    """

    url: str | None = None

    @classmethod
    def local(cls) -> "Endpoint":
        return cls()

    @classmethod
    def parse(
        cls,
        value: str | None,
        username: str | None = None,
        password: str | None = None,
    ) -> "Endpoint":
        """
        Parse and validate an endpoint.

        Empty values and "local" select the local driver. Anything else must be an
        http(s) hub URL; credentials passed separately are embedded in the URL.

        Args:
            value: Hub URL, "local" or None
            username: Optional hub username
            password: Optional hub password / access key

        Returns:
            The endpoint

        Raises:
            SessionConnectionError: If the hub URL is malformed
        """
        if value is None or not value.strip() or value.strip().lower() == LOCAL:
            return cls.local()

        url = value.strip()

        # Add http:// if no scheme is present
        if not re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", url):
            url = f"http://{url}"

        parsed = urlparse(url)

        if parsed.scheme not in ("http", "https"):
            raise SessionConnectionError(f"Hub URL must use http or https scheme: {value}")

        if not parsed.hostname:
            raise SessionConnectionError(f"Hub URL must have a valid hostname: {value}")

        if not re.match(r"^[a-zA-Z0-9._:-]+$", parsed.hostname):
            raise SessionConnectionError(f"Invalid hub hostname: {parsed.hostname}")

        try:
            port = parsed.port
        except ValueError as e:
            raise SessionConnectionError(f"Invalid hub port: {e}") from e

        if username:
            host = parsed.hostname
            if ":" in host:
                host = f"[{host}]"
            userinfo = quote(username, safe="")
            if password:
                userinfo += ":" + quote(password, safe="")
            netloc = f"{userinfo}@{host}"
            if port is not None:
                netloc += f":{port}"
            parsed = parsed._replace(netloc=netloc)

        return cls(urlunparse(parsed).rstrip("/"))

    @property
    def is_remote(self) -> bool:
        return self.url is not None

    def redacted(self) -> str:
        """Endpoint as text with any password masked, safe for logs."""
        if self.url is None:
            return LOCAL
        parsed = urlparse(self.url)
        if parsed.password is None:
            return self.url
        netloc = parsed.netloc.replace(f":{parsed.password}@", ":***@", 1)
        return urlunparse(parsed._replace(netloc=netloc))

    def __str__(self) -> str:
        return self.redacted()


def build_options(browser: BrowserKind, config: "DriverConfig") -> ChromeOptions | EdgeOptions:
    """Create the Selenium options object for a browser kind."""
    options = ChromeOptions() if browser is BrowserKind.CHROME else EdgeOptions()

    if config.headless:
        options.add_argument("--headless=new")

    for argument in config.extra_arguments:
        options.add_argument(argument)

    logger.debug(f"Built {browser.value} options: {options.arguments}")
    return options
