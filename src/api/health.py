"""Health check endpoint."""

from fastapi import APIRouter

from src.core import __version__

router = APIRouter()


@router.get("/health")
def health_check() -> dict[str, str]:
    """Return application health status."""
    return {"status": "ok", "version": __version__}
