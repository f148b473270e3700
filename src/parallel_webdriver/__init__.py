"""Parallel Selenium WebDriver sessions with a per-worker session registry."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("parallel-webdriver")
except PackageNotFoundError:
    __version__ = "0.0.0"  # Fallback for development
