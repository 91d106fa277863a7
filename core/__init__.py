"""
Core business logic package.

Transport-agnostic permission engine: events, exceptions and the
``core.permissions`` policy engine. The server package exposes it over HTTP.
"""

from .events import Event, EventBus, NullEventBus
from .exceptions import CoreError, NotFoundError
from .utils import gen_id

__all__ = [
    # Exceptions
    "CoreError",
    "NotFoundError",
    # Events
    "Event",
    "EventBus",
    "NullEventBus",
    # Utils
    "gen_id",
]
