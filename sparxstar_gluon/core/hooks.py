from __future__ import annotations

"""Host hook dispatch.

Gluon is reactive: every component subscribes to named host events instead of
being called directly. ``HookRegistry`` models the host's two kinds of hooks:

- *actions*: fire-and-forget notifications (``do_action``);
- *filters*: a value threaded through every subscriber (``apply_filters``).

Callbacks run in ascending ``priority`` order; callbacks sharing a priority run
in subscription order.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Callable, Dict, List

from .logging_config import get_logger

logger = get_logger(__name__)

# Hook names consumed or emitted by the plugin.
PLUGINS_LOADED = "plugins_loaded"
INIT = "init"
ABILITIES_CATEGORIES_INIT = "abilities_api_categories_init"
ABILITIES_INIT = "abilities_api_init"
ADMIN_NOTICES = "admin_notices"
CONSENT_TYPE_FILTER = "wp_get_consent_type"
CONSENT_CATEGORIES_FILTER = "wp_get_consent_categories"

DEFAULT_PRIORITY = 10


@dataclass(order=True, frozen=True)
class _Subscription:
    priority: int
    seq: int
    callback: Callable[..., Any] = field(compare=False)


class HookRegistry:
    """In-process action and filter dispatcher."""

    def __init__(self) -> None:
        self._actions: Dict[str, List[_Subscription]] = defaultdict(list)
        self._filters: Dict[str, List[_Subscription]] = defaultdict(list)
        self._fired: Dict[str, int] = defaultdict(int)
        self._seq = count()

    def add_action(self, hook: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._subscribe(self._actions, hook, callback, priority)

    def add_filter(self, hook: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._subscribe(self._filters, hook, callback, priority)

    def remove_action(self, hook: str, callback: Callable[..., Any]) -> bool:
        return self._unsubscribe(self._actions, hook, callback)

    def remove_filter(self, hook: str, callback: Callable[..., Any]) -> bool:
        return self._unsubscribe(self._filters, hook, callback)

    def has_action(self, hook: str) -> bool:
        return bool(self._actions.get(hook))

    def has_filter(self, hook: str) -> bool:
        return bool(self._filters.get(hook))

    def did_action(self, hook: str) -> int:
        """Return how many times ``hook`` has been fired."""
        return self._fired.get(hook, 0)

    def do_action(self, hook: str, *args: Any) -> None:
        """Fire an action. Exceptions raised by callbacks propagate to the caller."""
        self._fired[hook] += 1
        subs = sorted(self._actions.get(hook, ()))
        logger.debug(f"do_action({hook!r}) -> {len(subs)} callback(s)")
        for sub in subs:
            sub.callback(*args)

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        """Thread ``value`` through every filter subscribed to ``hook``."""
        for sub in sorted(self._filters.get(hook, ())):
            value = sub.callback(value, *args)
        return value

    def _subscribe(
        self, table: Dict[str, List[_Subscription]], hook: str, callback: Callable[..., Any], priority: int
    ) -> None:
        table[hook].append(_Subscription(priority=priority, seq=next(self._seq), callback=callback))

    @staticmethod
    def _unsubscribe(table: Dict[str, List[_Subscription]], hook: str, callback: Callable[..., Any]) -> bool:
        subs = table.get(hook)
        if not subs:
            return False
        kept = [s for s in subs if s.callback != callback]
        table[hook] = kept
        return len(kept) != len(subs)
