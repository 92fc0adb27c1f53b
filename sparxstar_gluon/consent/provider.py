"""Consent subsystem contract.

The consent subsystem is owned by the host. Gluon only queries it; when no
provider is installed ``HostCapabilities.has_consent_subsystem`` is False and
``ConsentGate`` falls back to its defaults.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol, Set, runtime_checkable

from .models import ConsentCategory, ConsentType, CookieInfo


@runtime_checkable
class ConsentProvider(Protocol):
    """Host consent API."""

    def has_consent(self, category: ConsentCategory) -> bool: ...

    def consent_type(self) -> Optional[ConsentType]: ...

    def add_cookie_info(self, info: CookieInfo) -> None: ...

    def remove_cookie_info(self, name: str) -> None: ...

    def mark_registered(self, plugin_name: str) -> None: ...


class InMemoryConsentProvider:
    """Request-agnostic provider holding a fixed set of granted categories.

    Useful as the host stand-in for tests and single-visitor deployments.
    """

    def __init__(
        self,
        granted: Iterable[ConsentCategory | str] = (),
        consent_type: Optional[ConsentType] = ConsentType.optin,
    ) -> None:
        self._granted: Set[ConsentCategory] = {ConsentCategory(c) for c in granted}
        self._type = consent_type
        self.cookies: Dict[str, CookieInfo] = {}
        self.registered_plugins: Set[str] = set()

    def grant(self, category: ConsentCategory | str) -> None:
        self._granted.add(ConsentCategory(category))

    def revoke(self, category: ConsentCategory | str) -> None:
        self._granted.discard(ConsentCategory(category))

    def has_consent(self, category: ConsentCategory) -> bool:
        return category in self._granted

    def consent_type(self) -> Optional[ConsentType]:
        return self._type

    def add_cookie_info(self, info: CookieInfo) -> None:
        self.cookies[info.name] = info

    def remove_cookie_info(self, name: str) -> None:
        self.cookies.pop(name, None)

    def mark_registered(self, plugin_name: str) -> None:
        self.registered_plugins.add(plugin_name)
