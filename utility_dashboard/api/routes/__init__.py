"""API routes package."""

from utility_dashboard.api.routes import electricity, health, meters, water

__all__ = ["electricity", "health", "meters", "water"]
