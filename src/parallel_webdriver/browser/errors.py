"""Exceptions raised by session management."""


class SessionError(Exception):
    """Base exception for browser session errors."""

    pass


class UnsupportedBrowserError(SessionError, ValueError):
    """Raised when a browser kind is not supported."""

    pass


class SessionConnectionError(SessionError, ConnectionError):
    """Raised when a session endpoint is malformed or unreachable."""

    pass


class CloseError(SessionError):
    """Raised when a session fails to shut down cleanly."""

    pass
