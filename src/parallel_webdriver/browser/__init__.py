"""Browser session management for parallel Selenium workers."""

from .client import RemoteSessionClient
from .errors import CloseError, SessionConnectionError, SessionError, UnsupportedBrowserError
from .grid import check_hub_status
from .options import BrowserKind, Endpoint, build_options
from .registry import SessionRegistry, current_worker_id

__all__ = [
    "BrowserKind",
    "CloseError",
    "Endpoint",
    "RemoteSessionClient",
    "SessionConnectionError",
    "SessionError",
    "SessionRegistry",
    "UnsupportedBrowserError",
    "build_options",
    "check_hub_status",
    "current_worker_id",
]
