"""
SSE-based EventBus implementation.

Broadcasts prompt events to Server-Sent Events subscribers so a
presentation layer can render pending approval requests.
"""

import asyncio
import logging
from typing import Any

from core import Event

logger = logging.getLogger(__name__)

# Events buffered per subscriber before new ones are dropped
SUBSCRIBER_QUEUE_SIZE = 256


class SSEEventBus:
    """
    EventBus implementation that broadcasts events to SSE subscribers.

    Each subscriber gets a bounded queue. Publishing never waits on a slow
    subscriber; events that do not fit are dropped for that subscriber.
    """

    def __init__(self, queue_size: int = SUBSCRIBER_QUEUE_SIZE) -> None:
        self.queue_size = queue_size
        self.subscribers: list[asyncio.Queue[dict[str, Any]]] = []

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribers."""
        data = event.model_dump(mode="json")
        for queue in list(self.subscribers):
            try:
                queue.put_nowait(data)
            except asyncio.QueueFull:
                logger.warning("Dropping %s event for a slow subscriber", event.type)

    def subscribe(self) -> asyncio.Queue[dict[str, Any]]:
        """
        Create a new subscription queue.

        Returns:
            A queue that will receive all published events
        """
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self.queue_size)
        self.subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue[dict[str, Any]]) -> None:
        if queue in self.subscribers:
            self.subscribers.remove(queue)


_event_bus: SSEEventBus | None = None


def get_event_bus() -> SSEEventBus:
    """Get the server's event bus instance, creating it if necessary."""
    global _event_bus
    if _event_bus is None:
        _event_bus = SSEEventBus()
    return _event_bus
