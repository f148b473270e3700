"""Centralized configuration management using Pydantic Settings.

This module provides a type-safe, validated configuration system for the whole suite.
Defaults reproduce a plain local run with a 10 second implicit wait.
"""

from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

if TYPE_CHECKING:
    from .browser.options import Endpoint


def _split_csv(v):
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class DriverConfig(BaseSettings):
    """Per-session WebDriver settings applied right after a session opens."""

    # Why 10s? Matches the implicit wait every suite in this project was written against;
    # element lookups on slow Grid nodes rarely need more
    implicit_wait: float = Field(
        default=10.0,
        ge=0.0,
        le=300.0,
        description="Implicit wait applied to every element lookup (seconds)"
    )
    maximize_window: bool = Field(
        default=True,
        description="Maximize the browser window after the session opens"
    )
    headless: bool = Field(
        default=False,
        description="Start browsers without a visible window"
    )

    # Driver binaries
    chrome_driver_path: str | None = Field(
        default=None,
        description="Path to chromedriver (None = resolved by Selenium Manager)"
    )
    edge_driver_path: str | None = Field(
        default=None,
        description="Path to msedgedriver (None = resolved by Selenium Manager)"
    )

    extra_arguments: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Additional browser command line arguments"
    )

    model_config = SettingsConfigDict(env_prefix="DRIVER_")

    @field_validator("extra_arguments", mode="before")
    @classmethod
    def parse_arguments(cls, v):
        """Parse comma-separated arguments from environment variable."""
        return _split_csv(v)


class GridConfig(BaseSettings):
    """Remote hub configuration. Leaving hub_url unset runs browsers locally."""

    hub_url: str | None = Field(
        default=None,
        description="Selenium Grid or cloud hub URL (e.g., http://localhost:4444)"
    )
    username: str | None = Field(
        default=None,
        description="Hub username for cloud providers"
    )
    password: str | None = Field(
        default=None,
        description="Hub password or access key for cloud providers"
    )

    # Readiness probe
    # Why 5s? /status answers immediately on a healthy hub; anything slower means
    # session creation would time out anyway
    status_check: bool = Field(
        default=True,
        description="Probe <hub>/status before opening remote sessions"
    )
    status_timeout: float = Field(
        default=5.0,
        ge=0.5,
        le=60.0,
        description="Timeout for the hub status probe in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="GRID_")


class SuiteConfig(BaseSettings):
    """Parallel suite settings."""

    browsers: Annotated[list[str], NoDecode] = Field(
        default=["chrome", "edge"],
        description="Browser kinds to run the suite against"
    )

    # Why 4? One worker per row of the default data set; each browser costs
    # ~200-300MB RAM so larger values should follow the host size
    max_workers: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Number of parallel workers"
    )
    reuse_sessions: bool = Field(
        default=False,
        description="Keep one session per worker thread instead of one per case"
    )
    base_url: str = Field(
        default="https://www.automationpractice.pl/index.php",
        description="Start page opened by the demo suite"
    )

    model_config = SettingsConfigDict(env_prefix="SUITE_")

    @field_validator("browsers", mode="before")
    @classmethod
    def parse_browsers(cls, v):
        """Parse comma-separated browsers from environment variable."""
        return _split_csv(v)


class LoggingConfig(BaseSettings):
    """Logging configuration with structured logging support."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Application log level"
    )

    json_logs: bool = Field(
        default=False,
        description="Enable JSON formatted logs (recommended for CI)"
    )

    log_file: str | None = Field(
        default=None,
        description="Path to log file (None = stderr)"
    )

    # Log Rotation
    log_rotation_size: int = Field(
        default=10 * 1024 * 1024,  # 10MB
        ge=1024 * 1024,  # Min 1MB
        description="Log file size before rotation (bytes)"
    )
    log_rotation_count: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of rotated log files to keep"
    )

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    """Main settings combining all configuration sections."""

    app_name: str = Field(
        default="parallel-webdriver",
        description="Application name"
    )

    environment: Literal["development", "ci", "production"] = Field(
        default="development",
        description="Runtime environment"
    )

    # Component Configurations
    driver: DriverConfig = Field(default_factory=DriverConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    suite: SuiteConfig = Field(default_factory=SuiteConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def endpoint(self) -> "Endpoint":
        """Build the default session endpoint from the grid section."""
        from .browser.options import Endpoint

        return Endpoint.parse(
            self.grid.hub_url,
            username=self.grid.username,
            password=self.grid.password,
        )

    def validate_settings(self) -> list[str]:
        """Validate settings and return list of error/warning/info messages."""
        from .browser.errors import SessionConnectionError

        messages = []

        if self.grid.hub_url:
            if self.grid.hub_url.startswith("http://") and (
                self.grid.password or "@" in self.grid.hub_url
            ):
                messages.append("WARNING: Hub credentials sent over plain http")
        elif self.grid.username or self.grid.password:
            messages.append("WARNING: Grid credentials configured without GRID_HUB_URL")

        if self.environment != "development" and not self.driver.headless:
            messages.append("INFO: Headless mode recommended outside development")

        if self.environment == "ci" and not self.logging.json_logs:
            messages.append("INFO: JSON logs recommended for CI")

        messages.append(f"INFO: Browsers: {', '.join(self.suite.browsers)}")
        messages.append(f"INFO: Workers: {self.suite.max_workers}")
        messages.append(f"INFO: Implicit wait: {self.driver.implicit_wait}s")
        try:
            messages.append(f"INFO: Endpoint: {self.endpoint().redacted()}")
        except SessionConnectionError as e:
            messages.append(f"ERROR: Invalid hub URL: {e}")

        return messages


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)."""
    global _settings
    _settings = Settings()
    return _settings
