"""Health check endpoints."""

from fastapi import APIRouter, Request

from swapintents import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "swapintents"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Detailed health check with configuration and protocol info."""
    intents = request.app.state.intents
    return {
        "status": "healthy",
        "service": "swapintents",
        "version": __version__,
        "protocols": list(intents.registry.identifiers),
        "config": intents.settings.get_safe_dict(),
    }
