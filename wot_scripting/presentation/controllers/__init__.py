"""
Controllers Package - Presentation Layer

FastAPI routers handling HTTP requests and responses. Controllers validate
input, map DTOs to use case calls and translate unexpected failures into
HTTP errors.
"""

from .context_controller import router as context_router
from .operations_controller import router as operations_router
from .system_controller import router as system_router

__all__ = ["context_router", "operations_router", "system_router"]
