"""
Health check endpoint.
"""

from fastapi import APIRouter

from ..state import get_gate


router = APIRouter()


@router.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "gate_configured": get_gate() is not None}
