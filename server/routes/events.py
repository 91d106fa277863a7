"""
Permission event SSE endpoint.
"""

import json
from typing import AsyncGenerator

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from ..event_bus import get_event_bus


router = APIRouter()


@router.get("/permission/events")
async def permission_events() -> EventSourceResponse:
    """Subscribe to approval prompt events via SSE."""
    event_bus = get_event_bus()

    async def event_generator() -> AsyncGenerator[dict, None]:
        queue = event_bus.subscribe()
        try:
            while True:
                event = await queue.get()
                yield {"event": event["type"], "data": json.dumps(event)}
        finally:
            event_bus.unsubscribe(queue)

    return EventSourceResponse(event_generator())
