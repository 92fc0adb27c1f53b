"""Error types for SPARXSTAR Gluon.

Defines a small hierarchy of exceptions. Session and consent errors never
leave the session issuer; capability errors are converted into structured
invocation results by the executor and never reach external callers raw.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GluonError(Exception):
    """Base error for all Gluon exceptions."""


class InvalidHostCookie(GluonError):
    """Raised when a cookie would violate the ``__Host-`` prefix rules."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Cookie '{name}' cannot use the __Host- prefix: {reason}")
        self.name = name
        self.reason = reason


class CookieWriteFailed(GluonError):
    """Raised by a cookie writer when the response headers were already sent."""

    def __init__(self, name: str, message: str = "response already flushed") -> None:
        super().__init__(f"Could not set cookie '{name}': {message}")
        self.name = name


class InvalidCapabilityName(GluonError):
    """Raised when a capability name is not of the form ``<namespace>/<action>``."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Capability name must look like '<namespace>/<action>': '{name}'")
        self.name = name


class InvalidSchema(GluonError):
    """Raised when a capability schema is not a valid JSON-Schema."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid schema: {message}")


class CapabilityFailure(GluonError):
    """Domain error raised or returned by an execute callback.

    ``code`` is a short machine-readable cause such as ``invalid_post``.
    """

    def __init__(self, code: str, message: str, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = dict(data or {})


class CancelledByCaller(GluonError):
    """Raised inside an execute callback that honours a fired cancellation token."""

    def __init__(self) -> None:
        super().__init__("Invocation cancelled by caller")
