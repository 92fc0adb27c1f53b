from __future__ import annotations

"""Consent gate.

``ConsentGate`` answers a single question for the session issuer and for any
other feature that drops cookies: *has the current visitor granted this
consent category?*

Rules
-----

- Unknown categories are denied (fail closed).
- Without a consent subsystem every known category is allowed; the plugin
  never imposes stricter consent rules than the host chooses to enforce.
- With a consent subsystem, the provider's answer is returned verbatim. A
  provider that raises is treated as a denial.

The gate also plugs two pass-through filters into the host consent API and
declares the plugin's session cookie so the host can list it to visitors.
"""

from typing import Iterable, Mapping, Optional, Set, TypeVar, Union

from sparxstar_gluon.core.environment import HostCapabilities
from sparxstar_gluon.core.hooks import (
    CONSENT_CATEGORIES_FILTER,
    CONSENT_TYPE_FILTER,
    PLUGINS_LOADED,
    HookRegistry,
)
from sparxstar_gluon.core.logging_config import get_logger

from .models import ConsentCategory, ConsentType, CookieInfo
from .provider import ConsentProvider

logger = get_logger(__name__)

# Categories this plugin never offers to visitors.
SUPPRESSED_CATEGORIES = frozenset({ConsentCategory.preferences.value})

T = TypeVar("T")


class ConsentGate:
    """Consent queries and consent-API integration for one plugin."""

    def __init__(
        self,
        capabilities: HostCapabilities,
        provider: Optional[ConsentProvider] = None,
        *,
        plugin_name: str = "SparxstarGluon",
        session_cookie_name: Optional[str] = None,
    ) -> None:
        self._provider = provider if capabilities.has_consent_subsystem else None
        if capabilities.has_consent_subsystem and provider is None:
            logger.warning("Consent subsystem flagged as present but no provider was supplied; allowing by default")
        self._plugin_name = plugin_name
        self._session_cookie_name = session_cookie_name

    @property
    def has_provider(self) -> bool:
        return self._provider is not None

    def register_hooks(self, hooks: HookRegistry) -> None:
        hooks.add_action(PLUGINS_LOADED, self.register_cookies)
        hooks.add_filter(CONSENT_TYPE_FILTER, self.set_consent_type)
        hooks.add_filter(CONSENT_CATEGORIES_FILTER, self.filter_categories)

    def has_consent(self, category: Union[ConsentCategory, str]) -> bool:
        parsed = ConsentCategory.parse(category)
        if parsed is None:
            logger.debug(f"Unknown consent category {category!r}; denying")
            return False
        if self._provider is None:
            return True
        try:
            return bool(self._provider.has_consent(parsed))
        except Exception as e:
            logger.warning(f"Consent provider failed for {parsed.value!r}; denying: {e}")
            return False

    def consent_type(self) -> Optional[ConsentType]:
        """Return the host's consent regime, or None without a consent subsystem."""
        if self._provider is None:
            return None
        return self._provider.consent_type()

    def set_consent_type(self, default: Union[ConsentType, str]) -> ConsentType:
        """Filter callback for the consent type; the host's value passes through."""
        return ConsentType(default)

    def filter_categories(self, categories: Union[Mapping[str, T], Iterable[str]]) -> Union[dict, Set[str]]:
        """Filter callback dropping the ``preferences`` category.

        Mappings (slug to label) come back as a new mapping; any other iterable
        of slugs comes back as a set.
        """
        if isinstance(categories, Mapping):
            return {k: v for k, v in categories.items() if k not in SUPPRESSED_CATEGORIES}
        return {c for c in categories if c not in SUPPRESSED_CATEGORIES}

    def comply_with_rules(self) -> bool:
        """Tell the consent subsystem this plugin follows the consent API."""
        if self._provider is None:
            return False
        self._provider.mark_registered(self._plugin_name)
        return True

    def cookie_info(self) -> Optional[CookieInfo]:
        if self._session_cookie_name is None:
            return None
        return CookieInfo(
            name=self._session_cookie_name,
            plugin_or_service=self._plugin_name,
            category=ConsentCategory.functional,
            expires="Session",
            function="Stores a unique session token.",
        )

    def register_cookies(self) -> None:
        info = self.cookie_info()
        if self._provider is None or info is None:
            return
        self._provider.add_cookie_info(info)
        logger.debug(f"Declared cookie {info.name} to the consent provider")

    def unregister_cookies(self) -> None:
        if self._provider is None or self._session_cookie_name is None:
            return
        self._provider.remove_cookie_info(self._session_cookie_name)
