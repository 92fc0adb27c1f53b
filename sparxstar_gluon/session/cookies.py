"""``__Host-`` cookies and the response cookie primitive.

A ``__Host-`` cookie is only accepted by browsers when it is Secure, scoped to
``Path=/`` and carries no ``Domain`` attribute. ``HostCookie`` refuses to exist
unless all of those hold, so an invalid session cookie can never be written.

Cookie writing is abstracted behind ``CookieWriter``. The server binds a
``PendingCookieWriter`` to each response: cookies are queued while the request
is handled and copied onto the response right before it is sent. Writes after
that point raise ``CookieWriteFailed``.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from sparxstar_gluon.errors import CookieWriteFailed, InvalidHostCookie

HOST_PREFIX = "__Host-"
DAY_IN_SECONDS = 86400

# RFC 6265 cookie-name token characters.
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_SAME_SITE = {"lax": "Lax", "strict": "Strict", "none": "None"}


def host_cookie_name(prefix: str, base_name: str) -> str:
    """Build ``__Host-<prefix>-<base_name>``, rejecting characters a cookie name cannot hold."""
    name = f"{HOST_PREFIX}{prefix}-{base_name}"
    if not prefix or not base_name or not _TOKEN_RE.match(name):
        raise InvalidHostCookie(name, "name contains characters outside the cookie token set")
    return name


@dataclass(frozen=True)
class HostCookie:
    """A validated ``__Host-`` cookie ready to be written."""

    name: str
    value: str
    max_age: int = DAY_IN_SECONDS
    path: str = "/"
    secure: bool = True
    http_only: bool = True
    same_site: str = "lax"
    domain: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name.startswith(HOST_PREFIX) or not _TOKEN_RE.match(self.name):
            raise InvalidHostCookie(self.name, "name must start with __Host- and be a valid token")
        if not self.secure:
            raise InvalidHostCookie(self.name, "Secure is mandatory")
        if self.path != "/":
            raise InvalidHostCookie(self.name, "Path must be /")
        if self.domain is not None:
            raise InvalidHostCookie(self.name, "Domain is forbidden")
        if self.same_site.lower() not in _SAME_SITE:
            raise InvalidHostCookie(self.name, f"unknown SameSite value {self.same_site!r}")
        if ";" in self.value or "," in self.value or any(ch.isspace() for ch in self.value):
            raise InvalidHostCookie(self.name, "value contains separator characters")

    def header_value(self) -> str:
        """Render the ``Set-Cookie`` header value."""
        parts = [f"{self.name}={self.value}", f"Max-Age={self.max_age}", f"Path={self.path}", "Secure"]
        if self.http_only:
            parts.append("HttpOnly")
        parts.append(f"SameSite={_SAME_SITE[self.same_site.lower()]}")
        return "; ".join(parts)


@runtime_checkable
class CookieWriter(Protocol):
    """Response cookie primitive supplied by the transport."""

    def set_cookie(self, cookie: HostCookie) -> None: ...


class PendingCookieWriter:
    """Queues cookies until the response is produced, then seals.

    ``flush`` copies every queued cookie onto a Starlette response and seals the
    writer; any later ``set_cookie`` raises ``CookieWriteFailed``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: List[HostCookie] = []
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def pending(self) -> List[HostCookie]:
        with self._lock:
            return list(self._pending)

    def set_cookie(self, cookie: HostCookie) -> None:
        with self._lock:
            if self._sealed:
                raise CookieWriteFailed(cookie.name)
            self._pending = [c for c in self._pending if c.name != cookie.name]
            self._pending.append(cookie)

    def seal(self) -> None:
        with self._lock:
            self._sealed = True

    def flush(self, response: Any) -> int:
        """Write queued cookies to ``response`` and seal. Returns the number written."""
        with self._lock:
            cookies, self._pending = self._pending, []
            self._sealed = True
        for cookie in cookies:
            response.set_cookie(
                key=cookie.name,
                value=cookie.value,
                max_age=cookie.max_age,
                path=cookie.path,
                domain=None,
                secure=cookie.secure,
                httponly=cookie.http_only,
                samesite=cookie.same_site.lower(),
            )
        return len(cookies)


@dataclass
class RequestScope:
    """Per-request view handed to ``init`` subscribers."""

    cookies: Mapping[str, str]
    writer: CookieWriter
    state: Dict[str, Any] = field(default_factory=dict)

    def cookie(self, name: str) -> Optional[str]:
        return self.cookies.get(name)
