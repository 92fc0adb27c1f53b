from __future__ import annotations

"""Capability and category registries.

The registry maps a ``<namespace>/<action>`` name to a ``CapabilityDescriptor``
and keeps the categories those descriptors are grouped under.

Lifecycle
---------

Registration is expected during a bounded startup window. The composition root
calls ``close_registration()`` once the ``abilities_api_init`` hook has run;
registering afterwards still works but is logged as a warning.

Ordering
--------

Listing order is registration order. Re-registering an existing name
replaces the descriptor **in place**: the capability keeps its original
position.

Concurrency
-----------

Writers are serialized with a lock. Readers work on snapshots taken under the
same lock, so a writer never waits for an execute callback that is running
against a descriptor it obtained earlier.
"""

import threading
from typing import Dict, List, Optional

from sparxstar_gluon.core.logging_config import get_logger

from .base import CapabilityDescriptor, CategoryDescriptor

logger = get_logger(__name__)


class CategoryRegistry:
    """In-memory mapping of category slugs to descriptors."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._categories: Dict[str, CategoryDescriptor] = {}

    def register(self, descriptor: CategoryDescriptor) -> None:
        """Register a category; the same name overwrites in place."""
        with self._lock:
            self._categories[descriptor.name] = descriptor

    def unregister(self, name: str) -> Optional[CategoryDescriptor]:
        with self._lock:
            return self._categories.pop(name, None)

    def get(self, name: str) -> Optional[CategoryDescriptor]:
        with self._lock:
            return self._categories.get(name)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._categories

    def list(self) -> List[CategoryDescriptor]:
        with self._lock:
            return list(self._categories.values())


class CapabilityRegistry:
    """
    In-memory, insertion-ordered mapping of capability names to descriptors.

    Notes:
        - ``register`` overwrites an existing name, keeps its position, and logs a warning.
        - ``register`` does not check that the descriptor's category exists;
          ``find_orphans`` reports such inconsistencies.
        - ``get`` returns ``None`` for unknown names.
    """

    def __init__(self, categories: Optional[CategoryRegistry] = None) -> None:
        self._lock = threading.Lock()
        self._caps: Dict[str, CapabilityDescriptor] = {}
        self._categories = categories if categories is not None else CategoryRegistry()
        self._registration_open = True

    @property
    def categories(self) -> CategoryRegistry:
        return self._categories

    @property
    def registration_open(self) -> bool:
        return self._registration_open

    def open_registration(self) -> None:
        self._registration_open = True

    def close_registration(self) -> None:
        """End the startup registration window."""
        self._registration_open = False
        logger.debug(f"Capability registration closed with {len(self)} capabilities")

    def register_category(self, descriptor: CategoryDescriptor) -> None:
        self._warn_if_closed("category", descriptor.name)
        self._categories.register(descriptor)

    def register(self, descriptor: CapabilityDescriptor) -> None:
        """
        Register a capability descriptor.

        Args:
            descriptor: The descriptor to store under ``descriptor.name``.
        """
        self._warn_if_closed("capability", descriptor.name)
        with self._lock:
            replaced = descriptor.name in self._caps
            self._caps[descriptor.name] = descriptor
        if replaced:
            logger.warning(f"Capability '{descriptor.name}' was already registered; overwriting previous descriptor")

    def unregister(self, name: str) -> Optional[CapabilityDescriptor]:
        with self._lock:
            return self._caps.pop(name, None)

    def get(self, name: str) -> Optional[CapabilityDescriptor]:
        """
        Retrieve a registered capability by exact name.

        Returns:
            The descriptor, or ``None`` if no capability is registered under ``name``.
        """
        with self._lock:
            return self._caps.get(name)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._caps

    def list(self, *, category: Optional[str] = None, visible_only: bool = False) -> List[CapabilityDescriptor]:
        """
        List capabilities in registration order.

        Args:
            category: Only return capabilities in this category.
            visible_only: Only return capabilities exposed to external transport.
        """
        with self._lock:
            snapshot = list(self._caps.values())
        return [
            d
            for d in snapshot
            if (category is None or d.category == category) and (not visible_only or d.show_in_rest)
        ]

    def find_orphans(self) -> List[CapabilityDescriptor]:
        """Return capabilities whose category was never registered, logging each one."""
        orphans = [d for d in self.list() if not self._categories.has(d.category)]
        for d in orphans:
            logger.warning(f"Capability '{d.name}' references unregistered category '{d.category}'")
        return orphans

    def __len__(self) -> int:
        with self._lock:
            return len(self._caps)

    def _warn_if_closed(self, kind: str, name: str) -> None:
        if not self._registration_open:
            logger.warning(f"Registering {kind} '{name}' after the registration window closed")
