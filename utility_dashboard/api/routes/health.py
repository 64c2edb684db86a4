"""Health check route."""

from fastapi import APIRouter

from utility_dashboard.core.config import settings

router = APIRouter()


@router.get("/health")
def health_check() -> dict[str, str]:
    """Report that the service is up."""
    return {"status": "healthy", "service": "utility-dashboard", "version": settings.VERSION}
