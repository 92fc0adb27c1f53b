from __future__ import annotations

"""Consent-gated session token issuer.

On every request-initialization event the issuer walks a small per-request
state machine::

    START -> CONSENT_CHECKED -> TOKEN_EXISTS   (no-op, never overwrite)
                             -> TOKEN_ISSUED   (cookie queued on the response)
          -> CONSENT_DENIED                    (silent no-op)

A cookie write that fails because the response was already flushed ends in
``WRITE_FAILED``. The issuer never raises past its own boundary: session
issuance is an enhancement, not a critical path.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional, Union

from sparxstar_gluon.consent.gate import ConsentGate
from sparxstar_gluon.consent.models import ConsentCategory
from sparxstar_gluon.core.hooks import INIT, HookRegistry
from sparxstar_gluon.core.logging_config import get_logger
from sparxstar_gluon.core.monitoring import log_session_issued
from sparxstar_gluon.errors import CookieWriteFailed

from .cookies import DAY_IN_SECONDS, HostCookie, RequestScope, host_cookie_name

logger = get_logger(__name__)

DEFAULT_COOKIE_PREFIX = "SparxstarGluon"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _uuid4_token() -> str:
    return str(uuid.uuid4())


class IssueState(str, Enum):
    """Terminal state of one ``SessionIssuer.issue`` run."""

    consent_denied = "consent_denied"
    token_exists = "token_exists"
    token_issued = "token_issued"
    write_failed = "write_failed"


@dataclass(frozen=True)
class SessionToken:
    """An issued session token. ``value`` is an opaque bearer secret."""

    value: str
    cookie_name: str
    issued_at: datetime
    max_age: int = DAY_IN_SECONDS

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.max_age)

    def __repr__(self) -> str:
        return f"SessionToken(cookie_name={self.cookie_name!r}, expires_at={self.expires_at.isoformat()})"


@dataclass(frozen=True)
class IssueOutcome:
    state: IssueState
    token: Optional[SessionToken] = None
    error: Optional[str] = None


class SessionIssuer:
    """Issues at most one ``__Host-`` session cookie per client.

    Args:
        gate: Consent gate queried before anything else.
        cookie_base_name: Suffix of the cookie name.
        category: Consent category the cookie belongs to.
        cookie_prefix: Plugin part of the cookie name.
        max_age: Cookie lifetime in seconds.
        token_factory: Produces new token values; UUID4 by default.
    """

    def __init__(
        self,
        gate: ConsentGate,
        *,
        cookie_base_name: str = "TOKEN",
        category: Union[ConsentCategory, str] = ConsentCategory.functional,
        cookie_prefix: str = DEFAULT_COOKIE_PREFIX,
        max_age: int = DAY_IN_SECONDS,
        token_factory: Callable[[], str] = _uuid4_token,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._gate = gate
        self._cookie_name = host_cookie_name(cookie_prefix, cookie_base_name)
        self._category = category
        self._max_age = max_age
        self._token_factory = token_factory
        self._clock = clock

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    @property
    def category(self) -> Union[ConsentCategory, str]:
        return self._category

    def register_hooks(self, hooks: HookRegistry) -> None:
        hooks.add_action(INIT, self.maybe_issue_session)

    def maybe_issue_session(self, request: RequestScope) -> Optional[SessionToken]:
        """``init`` callback. Returns the new token, or None when nothing was issued."""
        return self.issue(request).token

    def issue(self, request: RequestScope) -> IssueOutcome:
        """Run the issuance state machine for one request."""
        if not self._gate.has_consent(self._category):
            return IssueOutcome(state=IssueState.consent_denied)

        existing = request.cookie(self._cookie_name)
        # An empty value counts as missing and gets replaced.
        if existing:
            return IssueOutcome(state=IssueState.token_exists)

        try:
            token = SessionToken(
                value=self._token_factory(),
                cookie_name=self._cookie_name,
                issued_at=self._clock(),
                max_age=self._max_age,
            )
            request.writer.set_cookie(HostCookie(name=token.cookie_name, value=token.value, max_age=token.max_age))
        except CookieWriteFailed as e:
            logger.warning(f"Session cookie not issued (late binding): {e}")
            return IssueOutcome(state=IssueState.write_failed, error=str(e))
        except Exception as e:
            logger.error(f"Session cookie not issued: {e}", exc_info=True)
            return IssueOutcome(state=IssueState.write_failed, error=str(e))

        category = getattr(self._category, "value", self._category)
        log_session_issued(self._cookie_name, str(category))
        logger.debug(f"Issued session cookie {self._cookie_name}")
        return IssueOutcome(state=IssueState.token_issued, token=token)
