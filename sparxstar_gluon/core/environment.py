from __future__ import annotations

"""Environment probing.

Optional host subsystems are detected once, at startup, and the result is
injected into the components that depend on them as a ``HostCapabilities``
value. Nothing downstream re-checks for a subsystem at call time.
"""

import sys
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .logging_config import get_logger

logger = get_logger(__name__)

MIN_PYTHON: Tuple[int, int] = (3, 10)


@dataclass(frozen=True)
class HostCapabilities:
    """Which optional host subsystems are available.

    Attributes
    ----------
    has_consent_subsystem:
        A consent provider is installed; without it every consent check passes.
    has_abilities_subsystem:
        Capability hosting is enabled; without it the AI manager disables itself.
    has_mcp_adapter:
        An MCP server adapter is available to expose capabilities to agents.
    """

    has_consent_subsystem: bool = False
    has_abilities_subsystem: bool = True
    has_mcp_adapter: bool = False


def probe_environment(
    *,
    consent_provider: Optional[Any] = None,
    abilities_enabled: bool = True,
    mcp_adapter: Optional[Any] = None,
) -> HostCapabilities:
    """Resolve ``HostCapabilities`` from the collaborators the host supplies."""
    caps = HostCapabilities(
        has_consent_subsystem=consent_provider is not None,
        has_abilities_subsystem=bool(abilities_enabled),
        has_mcp_adapter=mcp_adapter is not None,
    )
    logger.info(
        "Host capabilities: consent=%s abilities=%s mcp=%s",
        caps.has_consent_subsystem,
        caps.has_abilities_subsystem,
        caps.has_mcp_adapter,
    )
    return caps


def python_is_supported(version: Tuple[int, ...] | None = None) -> bool:
    """Return True when the running interpreter meets ``MIN_PYTHON``."""
    current = tuple(version if version is not None else sys.version_info[:2])
    return current[:2] >= MIN_PYTHON
