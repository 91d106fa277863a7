"""
FastAPI application for the permission gate.

The presentation layer (a dialog, a TUI, a browser tab) polls or subscribes
to pending prompts here and posts the user's answers back.
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.exceptions import CoreError

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

CORS_ORIGINS_ENV = "CORS_ORIGINS"
WILDCARD_ORIGIN = "*"
API_TITLE = "Gatekeeper Permission API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Classify operations, answer approval prompts and inspect the audit trail."
ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE"]


def parse_cors_origins(value: str | None) -> list[str]:
    """
    Parse a comma-separated origin list.

    Args:
        value: Raw CORS_ORIGINS value; unset or blank allows any origin

    Returns:
        The origins to allow
    """
    if not value or value.strip() == WILDCARD_ORIGIN:
        return [WILDCARD_ORIGIN]
    origins = [origin.strip() for origin in value.split(",") if origin.strip()]
    return origins or [WILDCARD_ORIGIN]


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(title=API_TITLE, version=API_VERSION, description=API_DESCRIPTION)

cors_origins = parse_cors_origins(os.environ.get(CORS_ORIGINS_ENV))

# Browsers refuse credentialed requests against a wildcard origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_origins != [WILDCARD_ORIGIN],
    allow_methods=ALLOWED_METHODS,
    allow_headers=["*"],
)


@app.exception_handler(CoreError)
async def core_error_handler(request: Request, exc: CoreError) -> JSONResponse:
    """Report core errors a route did not translate itself."""
    logger.error("Unhandled core error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})
