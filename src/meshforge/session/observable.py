"""Subscribe/notify base for session entities."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from meshforge.utils.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[Any], None]


class Observable:
    """Entity whose mutations are announced to subscribers.

    State is read through properties and changed only through named
    methods; each mutating method ends with :meth:`_notify`.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register *callback*, called with this entity after every change.

        Subscribing a callback that is already registered changes nothing.

        Returns:
            A function that removes the subscription, or a no-op for a
            duplicate subscription.
        """
        if callback in self._listeners:
            return lambda: None
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception:
                logger.exception(
                    "subscriber_failed",
                    entity=type(self).__name__,
                    callback=getattr(callback, "__qualname__", repr(callback)),
                )
