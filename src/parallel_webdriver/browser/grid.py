"""Selenium Grid readiness probe."""

import logging
from typing import Any

import httpx

from .errors import SessionConnectionError
from .options import Endpoint

logger = logging.getLogger(__name__)


def check_hub_status(endpoint: Endpoint, timeout: float = 5.0) -> dict[str, Any]:
    """
    Verify that a hub accepts new sessions.

    Queries ``<hub>/status`` (W3C WebDriver status command). Credentials embedded in
    the endpoint URL are sent as HTTP basic auth.

    Args:
        endpoint: Remote endpoint to probe
        timeout: Request timeout in seconds

    Returns:
        The ``value`` object of the status response

    Raises:
        SessionConnectionError: If the hub is unreachable or not ready
    """
    if not endpoint.is_remote:
        raise SessionConnectionError("Status probe requires a remote endpoint")

    status_url = f"{endpoint.url}/status"

    try:
        response = httpx.get(status_url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise SessionConnectionError(
            f"Hub status check timed out after {timeout}s: {endpoint.redacted()}"
        ) from e
    except httpx.HTTPStatusError as e:
        raise SessionConnectionError(
            f"Hub status check failed with HTTP {e.response.status_code}: {endpoint.redacted()}"
        ) from e
    except httpx.HTTPError as e:
        raise SessionConnectionError(f"Hub unreachable: {endpoint.redacted()} ({e})") from e

    try:
        value = response.json().get("value", {})
    except (ValueError, AttributeError) as e:
        raise SessionConnectionError(
            f"Hub returned an invalid status payload: {endpoint.redacted()}"
        ) from e

    if not isinstance(value, dict) or not value.get("ready", False):
        message = value.get("message", "not ready") if isinstance(value, dict) else "not ready"
        raise SessionConnectionError(f"Hub is not ready: {message}")

    logger.debug(f"Hub ready at {endpoint.redacted()}: {value.get('message', '')}")
    return value
