"""
Permission server entry point.
"""
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import get_config, get_working_directory
from server import app, init_permission_system, set_gate, set_prompt_broker
from server.event_bus import get_event_bus
from server.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Constants
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the session's decision gate for the lifetime of the server."""
    config = get_config()

    logger.info("Starting permission server")
    logger.info("Working directory: %s", get_working_directory())

    init_permission_system(config.permissions, get_event_bus())

    yield

    logger.info("Shutting down permission server")
    set_prompt_broker(None)
    set_gate(None)


app.router.lifespan_context = lifespan


def main() -> None:
    """Start the permission server."""
    setup_logging(get_config().log_level)

    host = os.environ.get("HOST", DEFAULT_HOST)
    port = int(os.environ.get("PORT", str(DEFAULT_PORT)))

    logger.info("Server listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
