"""Key-value settings store.

The plugin never owns durable storage; it consumes a host-provided option
store. ``SettingsStore`` is the contract, ``InMemorySettingsStore`` the
process-local implementation used by the server and tests.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Dict, Protocol, runtime_checkable

SETTINGS_OPTION = "gluon_settings"

_MISSING = object()


@runtime_checkable
class SettingsStore(Protocol):
    """Host option store."""

    def get_option(self, key: str, default: Any = None) -> Any: ...

    def add_option(self, key: str, value: Any) -> bool: ...

    def update_option(self, key: str, value: Any) -> None: ...

    def delete_option(self, key: str) -> bool: ...


class InMemorySettingsStore:
    """Thread-safe dict-backed ``SettingsStore``.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get_option(self, key: str, default: Any = None) -> Any:
        with self._lock:
            value = self._data.get(key, _MISSING)
        if value is _MISSING:
            return default
        return copy.deepcopy(value)

    def add_option(self, key: str, value: Any) -> bool:
        """Store ``value`` only if ``key`` is absent. Returns True when stored."""
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = copy.deepcopy(value)
            return True

    def update_option(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def delete_option(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, _MISSING) is not _MISSING

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)
