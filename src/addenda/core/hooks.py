"""
Ordered hook chains keyed by (event, kind).

A handler is any callable ``handler(event, kind, result, params)``. Handlers run in
ascending priority, then registration order. Returning None abstains; any other
value replaces the running result, which is seeded with the caller's default.

Registrations may use "all" for the event, the kind, or both; a trigger for
("permissions_check", "metadata") consults the exact chain and every wildcard chain.

Examples:
    >>> from addenda.core.hooks import HookChain
    >>> hooks = HookChain()
    >>> hooks.register("permissions_check", "metadata", lambda e, k, r, p: True)
    >>> hooks.trigger("permissions_check", "metadata", {}, False)
    True
    >>> hooks.trigger("permissions_check", "annotation", {}, False)
    False
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .constants import ALL, DEFAULT_HOOK_PRIORITY

__all__ = [
    "HookHandler",
    "HookChain",
]

logger = logging.getLogger(__name__)

HookHandler = Callable[[str, str, Any, Mapping[str, Any]], Any]


@dataclass(order=True, frozen=True)
class _Registration:
    priority: int
    seq: int
    event: str = field(compare=False)
    kind: str = field(compare=False)
    handler: HookHandler = field(compare=False)


class HookChain:
    """Registry of prioritized handlers."""

    def __init__(self) -> None:
        self._registrations: list[_Registration] = []
        self._seq = itertools.count()

    def register(
        self,
        event: str,
        kind: str,
        handler: HookHandler,
        priority: int = DEFAULT_HOOK_PRIORITY,
    ) -> None:
        self._registrations.append(
            _Registration(priority, next(self._seq), event.lower(), kind.lower(), handler)
        )
        self._registrations.sort()

    def unregister(self, event: str, kind: str, handler: HookHandler) -> bool:
        """Remove a handler; returns False when it was not registered for (event, kind)."""
        event, kind = event.lower(), kind.lower()
        for i, reg in enumerate(self._registrations):
            if reg.event == event and reg.kind == kind and reg.handler == handler:
                del self._registrations[i]
                return True
        return False

    def handlers(self, event: str, kind: str) -> list[HookHandler]:
        """Handlers a trigger for (event, kind) would call, in call order."""
        event, kind = event.lower(), kind.lower()
        return [
            reg.handler
            for reg in self._registrations
            if reg.event in (event, ALL) and reg.kind in (kind, ALL)
        ]

    def trigger(self, event: str, kind: str, params: Mapping[str, Any], default: Any = None) -> Any:
        result = default
        for handler in self.handlers(event, kind):
            returned = handler(event, kind, result, params)
            if returned is not None:
                result = returned
        logger.debug("hook %s/%s resolved to %r", event, kind, result)
        return result

    def __len__(self) -> int:
        return len(self._registrations)
