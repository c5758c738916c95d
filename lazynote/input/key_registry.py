"""Key-token to action tables used by the mode handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyAction = Callable[[], "bool | None"]


@dataclass(frozen=True)
class KeyComboBinding:
    """One action reachable from any of several key tokens."""

    combos: tuple[str, ...]
    handler: KeyAction


class KeyComboRegistry:
    """Exact-match dispatch table.

    ``dispatch`` returns ``None`` for unbound keys so callers can fall
    through to another handler.
    """

    def __init__(self, *bindings: KeyComboBinding) -> None:
        self._handlers: dict[str, KeyAction] = {}
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[combo] = binding.handler

    def __contains__(self, key: object) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool | None:
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()
