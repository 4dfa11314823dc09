"""
Cross-instance notification port.

Overlay instances (one per process, or several in one process for tests)
announce "data changed" on a named channel so peers reload from the store.
The in-memory broker fans out to every subscriber in the current process;
a deployment with several worker processes can supply any object with the
same publish/subscribe shape.

Message shapes on the overlay channel:
    {"type": "updated"}                         reload the full overlay snapshot
    {"type": "cards-updated", "archetype": ...} reload one archetype's cards (or all)

Every message carries an "origin" id so an instance can ignore its own posts.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[None]]

MESSAGE_UPDATED = "updated"
MESSAGE_CARDS_UPDATED = "cards-updated"


class NotificationPort(Protocol):
    async def publish(self, topic: str, payload: dict[str, Any]) -> None: ...

    def subscribe(self, topic: str, handler: Handler) -> Callable[[], None]: ...


class InMemoryBroker:
    """
    Process-local pub/sub.

    Handlers are awaited in subscription order. A failing handler is logged
    and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def subscribe(self, topic: str, handler: Handler) -> Callable[[], None]:
        """Register a handler. Returns a callable that unsubscribes it."""
        self._handlers.setdefault(topic, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(topic, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    async def publish(self, topic: str, payload: dict[str, Any]) -> None:
        for handler in list(self._handlers.get(topic, [])):
            try:
                await handler(payload)
            except Exception:
                logger.exception("Notification handler failed on %s: %s", topic, payload)

    def subscriber_count(self, topic: str) -> int:
        return len(self._handlers.get(topic, []))
