"""
Ports Package - Domain Layer

Interfaces for the collaborators the core depends on. Implementations
live in the infrastructure layer.
"""

from .context_store import IContextStore, NodeContext
from .health_check import IHealthCheckService
from .thing_runtime import (
    IConsumedThing,
    IInteractionOutput,
    IThingFactory,
    IThingRuntime,
)

__all__ = [
    "IConsumedThing",
    "IContextStore",
    "IHealthCheckService",
    "IInteractionOutput",
    "IThingFactory",
    "IThingRuntime",
    "NodeContext",
]
