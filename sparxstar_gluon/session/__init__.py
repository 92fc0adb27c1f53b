"""Session cookie issuance gated on visitor consent."""

from .cookies import (
    DAY_IN_SECONDS,
    HOST_PREFIX,
    CookieWriter,
    HostCookie,
    PendingCookieWriter,
    RequestScope,
    host_cookie_name,
)
from .issuer import IssueOutcome, IssueState, SessionIssuer, SessionToken

__all__ = [
    "DAY_IN_SECONDS",
    "HOST_PREFIX",
    "CookieWriter",
    "HostCookie",
    "IssueOutcome",
    "IssueState",
    "PendingCookieWriter",
    "RequestScope",
    "SessionIssuer",
    "SessionToken",
    "host_cookie_name",
]
