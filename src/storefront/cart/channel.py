"""Cart-changed notification channel.

Listeners take no arguments: the notification carries no payload and every
subscriber re-reads the cart store. Delivery is synchronous, in subscription
order, within the publisher's call.
"""

from collections.abc import Callable

import structlog

logger = structlog.get_logger(__name__)

Listener = Callable[[], None]


class CartChannel:
    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self) -> None:
        # A failing listener does not stop delivery to the rest
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Cart listener failed", listener=getattr(listener, "__qualname__", repr(listener)))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
