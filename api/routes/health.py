"""
Endpoints de estado del servicio.
"""

from fastapi import APIRouter

from mockapi_core import __version__

router = APIRouter(tags=["health"])

SERVICE_NAME = "mock-api-core"


@router.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health")
async def health():
    """Health check detallado."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": __version__,
    }
