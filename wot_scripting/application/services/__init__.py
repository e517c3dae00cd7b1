"""
Services Package - Application Layer

Stateful and stateless services composed by the operation use case.
"""

from .operation_dispatcher import OperationDispatcher
from .output_router import OutputRouter
from .session_cache import SessionCache, SessionCacheEntry

__all__ = [
    "OperationDispatcher",
    "OutputRouter",
    "SessionCache",
    "SessionCacheEntry",
]
