"""
Route registration for the permission API.
"""

from fastapi import FastAPI

from . import events, health, permissions


def register_routes(app: FastAPI) -> None:
    """Register all routes with the FastAPI application."""
    app.include_router(events.router)
    app.include_router(health.router)
    app.include_router(permissions.router)
