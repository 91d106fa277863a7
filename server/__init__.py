"""
Permission API server.

Exposes the decision gate's pending prompt, audit trail and session
controls over HTTP and SSE for a presentation layer.
"""

from .app import app
from .routes import register_routes
from .state import get_gate, get_prompt_broker, init_permission_system, set_gate, set_prompt_broker

# Register all routes with the app
register_routes(app)

__all__ = [
    "app",
    "get_gate",
    "set_gate",
    "get_prompt_broker",
    "set_prompt_broker",
    "init_permission_system",
]
