from __future__ import annotations

"""Plugin composition root.

``GluonPlugin`` owns every long-lived component (hook registry, consent gate,
session issuer, capability registry and executor, AI manager) and drives the
plugin lifecycle:

1. ``check_compatibility()`` verifies the runtime and the abilities subsystem.
   Failures become admin notices and the plugin does not boot.
2. ``boot()`` subscribes the components to their hooks, fires the startup
   hooks in order and closes the capability registration window.
3. ``handle_request_init(scope)`` fires ``init`` once per request.

Activation, deactivation and uninstall act on the host settings store, either
for a single site or for every site of a network.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from sparxstar_gluon.abilities.ai_manager import AIManager
from sparxstar_gluon.capabilities.base import CallerContext
from sparxstar_gluon.capabilities.executor import DEFAULT_TIMEOUT_SECONDS, CapabilityExecutor
from sparxstar_gluon.capabilities.registry import CapabilityRegistry
from sparxstar_gluon.consent.gate import ConsentGate
from sparxstar_gluon.consent.models import ConsentCategory
from sparxstar_gluon.consent.provider import ConsentProvider
from sparxstar_gluon.content.posts import InMemoryPostRepository, PostRepository
from sparxstar_gluon.content.summarizer import PydanticAISummarizer, Summarizer
from sparxstar_gluon.core.environment import MIN_PYTHON, HostCapabilities, probe_environment, python_is_supported
from sparxstar_gluon.core.hooks import (
    ABILITIES_CATEGORIES_INIT,
    ABILITIES_INIT,
    ADMIN_NOTICES,
    INIT,
    PLUGINS_LOADED,
    HookRegistry,
)
from sparxstar_gluon.core.logging_config import get_logger
from sparxstar_gluon.core.notices import PLUGIN_TAG, AdminNotices, NoticeLevel
from sparxstar_gluon.core.settings_store import SETTINGS_OPTION, InMemorySettingsStore, SettingsStore
from sparxstar_gluon.session.cookies import RequestScope, host_cookie_name
from sparxstar_gluon.session.issuer import DEFAULT_COOKIE_PREFIX, SessionIssuer

logger = get_logger(__name__)

ACTIVATE_PERMISSION = "activate_plugins"
UNINSTALL_PERMISSION = "delete_plugins"


class GluonPlugin:
    """Wires the plugin's components together and runs its lifecycle.

    Collaborators the host does not supply fall back to in-process defaults:
    an in-memory settings store, an empty post repository and the pydantic-ai
    summarizer.
    """

    def __init__(
        self,
        *,
        store: Optional[SettingsStore] = None,
        consent_provider: Optional[ConsentProvider] = None,
        posts: Optional[PostRepository] = None,
        summarizer: Optional[Summarizer] = None,
        abilities_enabled: bool = True,
        mcp_adapter: Optional[Any] = None,
        plugin_name: str = DEFAULT_COOKIE_PREFIX,
        version: str = "1.0.0",
        cookie_prefix: str = DEFAULT_COOKIE_PREFIX,
        cookie_base_name: str = "TOKEN",
        consent_category: Union[ConsentCategory, str] = ConsentCategory.functional,
        capability_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        delete_on_uninstall: bool = False,
        python_version: Optional[Tuple[int, ...]] = None,
    ) -> None:
        self.version = version
        self.delete_on_uninstall = delete_on_uninstall
        self._python_version = python_version

        self.hooks = HookRegistry()
        self.store: SettingsStore = store if store is not None else InMemorySettingsStore()
        self.notices = AdminNotices(PLUGIN_TAG)
        self.capabilities: HostCapabilities = probe_environment(
            consent_provider=consent_provider,
            abilities_enabled=abilities_enabled,
            mcp_adapter=mcp_adapter,
        )

        self.gate = ConsentGate(
            self.capabilities,
            consent_provider,
            plugin_name=plugin_name,
            session_cookie_name=host_cookie_name(cookie_prefix, cookie_base_name),
        )
        self.issuer = SessionIssuer(
            self.gate,
            cookie_prefix=cookie_prefix,
            cookie_base_name=cookie_base_name,
            category=consent_category,
        )

        self.registry = CapabilityRegistry()
        self.executor = CapabilityExecutor(self.registry, default_timeout=capability_timeout)
        self.ai_manager = AIManager(
            self.registry,
            posts=posts if posts is not None else InMemoryPostRepository(),
            summarizer=summarizer if summarizer is not None else PydanticAISummarizer(),
            capabilities=self.capabilities,
            notices=self.notices,
            version=version,
        )

        self._booted = False

    @classmethod
    def from_settings(cls, settings: Any, **collaborators: Any) -> "GluonPlugin":
        """Build a plugin from a ``Settings`` object; keyword collaborators win."""
        options: Dict[str, Any] = {
            "plugin_name": settings.plugin_name,
            "version": settings.plugin_version,
            "cookie_prefix": settings.cookie_prefix,
            "cookie_base_name": settings.cookie_base_name,
            "consent_category": settings.consent_category,
            "capability_timeout": settings.capability_timeout_seconds,
            "delete_on_uninstall": settings.delete_on_uninstall,
            "abilities_enabled": settings.abilities_enabled,
        }
        if "summarizer" not in collaborators:
            ai = settings.ai
            options["summarizer"] = PydanticAISummarizer(ai.model_preferences, temperature=ai.temperature)
        options.update(collaborators)
        return cls(**options)

    @property
    def booted(self) -> bool:
        return self._booted

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def check_compatibility(self) -> bool:
        """Return True when the runtime can host the plugin; otherwise post notices."""
        compatible = True
        if not python_is_supported(self._python_version):
            required = ".".join(str(p) for p in MIN_PYTHON)
            self.notices.add(f"Plugin requires Python {required}+. Please update your environment.")
            compatible = False
        if not self.capabilities.has_abilities_subsystem:
            self.notices.add("Plugin requires the Abilities API plugin to be installed and activated.")
            compatible = False
        return compatible

    def boot(self) -> bool:
        """Subscribe components and run the startup hooks. Idempotent."""
        if self._booted:
            return True
        if not self.check_compatibility():
            logger.error("SPARXSTAR Gluon not booted: environment is not compatible")
            self.hooks.do_action(ADMIN_NOTICES, self.notices.all())
            return False

        self.gate.register_hooks(self.hooks)
        self.issuer.register_hooks(self.hooks)
        self.ai_manager.register_hooks(self.hooks)

        self.registry.open_registration()
        self.hooks.do_action(PLUGINS_LOADED)
        self.gate.comply_with_rules()
        self.hooks.do_action(ABILITIES_CATEGORIES_INIT)
        self.hooks.do_action(ABILITIES_INIT)
        self.registry.close_registration()
        self.registry.find_orphans()

        self.hooks.do_action(ADMIN_NOTICES, self.notices.all())
        self._booted = True
        logger.info(f"SPARXSTAR Gluon {self.version} booted with {len(self.registry)} capabilities")
        return True

    def handle_request_init(self, scope: RequestScope) -> None:
        """Fire ``init`` for one request."""
        if not self._booted:
            return
        self.hooks.do_action(INIT, scope)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def activate(
        self,
        network_wide: bool = False,
        sites: Optional[Mapping[str, SettingsStore]] = None,
        caller: Optional[CallerContext] = None,
    ) -> bool:
        """Default ``gluon_settings`` to ``{}`` on the site, or every site when network-wide."""
        if not self._permitted(caller, ACTIVATE_PERMISSION, "activate"):
            return False
        for site, store in self._target_stores(network_wide, sites):
            if store.add_option(SETTINGS_OPTION, {}):
                logger.info(f"Created {SETTINGS_OPTION} for site {site}")
        return True

    def deactivate(
        self,
        network_wide: bool = False,
        sites: Optional[Mapping[str, SettingsStore]] = None,
        caller: Optional[CallerContext] = None,
    ) -> bool:
        """Withdraw the cookie declaration. Stored settings are retained."""
        if not self._permitted(caller, ACTIVATE_PERMISSION, "deactivate"):
            return False
        for site, _ in self._target_stores(network_wide, sites):
            logger.info(f"Deactivated for site {site}; settings retained")
        self.gate.unregister_cookies()
        return True

    def uninstall(
        self,
        network_wide: bool = False,
        sites: Optional[Mapping[str, SettingsStore]] = None,
        caller: Optional[CallerContext] = None,
    ) -> bool:
        """Remove ``gluon_settings`` only when ``delete_on_uninstall`` is set."""
        if not self._permitted(caller, UNINSTALL_PERMISSION, "uninstall"):
            return False
        for site, store in self._target_stores(network_wide, sites):
            if not self.delete_on_uninstall:
                logger.info(f"Retaining {SETTINGS_OPTION} for site {site}")
                continue
            store.delete_option(SETTINGS_OPTION)
            logger.info(f"Deleted {SETTINGS_OPTION} for site {site}")
        return True

    def _target_stores(
        self, network_wide: bool, sites: Optional[Mapping[str, SettingsStore]]
    ) -> List[Tuple[str, SettingsStore]]:
        if network_wide and sites:
            return list(sites.items())
        return [("default", self.store)]

    @staticmethod
    def _permitted(caller: Optional[CallerContext], permission: str, action: str) -> bool:
        if caller is None or caller.can(permission):
            return True
        logger.warning(f"Refusing to {action}: caller {caller.user_id!r} lacks {permission!r}")
        return False
