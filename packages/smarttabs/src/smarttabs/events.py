"""Trigger names and the glue between an editor's event source and the policy."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal, Protocol

if TYPE_CHECKING:
    from smarttabs.policy import SmartTabsPolicy

Trigger = Literal[
    "tab",
    "enter",
    "insert_leave",
    "realign_range",
    "realign_line",
    "open_line_above",
    "open_line_below",
]

TRIGGERS: tuple[Trigger, ...] = (
    "tab",
    "enter",
    "insert_leave",
    "realign_range",
    "realign_line",
    "open_line_above",
    "open_line_below",
)

Handler = Callable[..., None]


class EditorEventSource(Protocol):
    """Something that calls handlers, one at a time, when triggers fire."""

    def subscribe(self, trigger: Trigger, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for ``trigger``. Returns an unsubscribe function."""
        ...


class EventBus:
    """Synchronous :class:`EditorEventSource`.

    Handlers run in registration order, each to completion, before
    :meth:`emit` returns. Handler exceptions propagate to the emitter.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def subscribe(self, trigger: Trigger, handler: Handler) -> Callable[[], None]:
        if trigger not in TRIGGERS:
            raise ValueError(f"unknown trigger: {trigger}")
        handlers = self._handlers.setdefault(trigger, [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, trigger: Trigger, *args: Any) -> None:
        for handler in list(self._handlers.get(trigger, [])):
            handler(*args)


def bind_policy(source: EditorEventSource, policy: SmartTabsPolicy) -> Callable[[], None]:
    """Subscribe every policy handler. Returns a function that unbinds them all."""
    handlers: dict[Trigger, Handler] = {
        "tab": policy.on_tab,
        "enter": policy.on_enter,
        "insert_leave": policy.on_insert_leave,
        "realign_range": policy.on_realign_range,
        "realign_line": policy.on_realign_line,
        "open_line_above": policy.on_open_line_above,
        "open_line_below": policy.on_open_line_below,
    }
    unsubscribers = [source.subscribe(trigger, handler) for trigger, handler in handlers.items()]

    def unbind() -> None:
        for unsubscribe in unsubscribers:
            unsubscribe()

    return unbind
