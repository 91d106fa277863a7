"""
Event types and EventBus protocol.

Core publishes prompt lifecycle events ("permission.requested",
"permission.responded") through this interface. The server layer provides
an SSE-based implementation.
"""

import time
from typing import Any, Protocol

from pydantic import BaseModel, Field


class Event(BaseModel):
    """Domain event delivered to subscribers."""

    type: str
    properties: dict[str, Any]
    emitted_at: float = Field(default_factory=time.time)


class EventBus(Protocol):
    """Abstract interface for publishing events."""

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribers."""
        ...


class NullEventBus:
    """EventBus that drops every event."""

    async def publish(self, event: Event) -> None:
        pass
