"""API for checking project status."""
from househunt.web.api.monitoring.views import router

__all__ = ["router"]
