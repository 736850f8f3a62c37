"""
Controllers Package - Presentation Layer

FastAPI routers mapping HTTP requests onto application use cases. Any
failure is reported as an Unhealthy 503 body, never as an unhandled error.
"""

from .health_controller import router as health_router
from .system_controller import router as system_router

__all__ = ["health_router", "system_router"]
