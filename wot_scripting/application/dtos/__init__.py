"""
DTOs Package - Application Layer

Data Transfer Objects used for data exchange between the application
layer and the presentation layer.
"""

from .health_dto import ApplicationInfoDTO, ComponentStatusDTO, SystemHealthDTO
from .operation_dto import (
    ContextSnapshotDTO,
    OperationMessageDTO,
    OperationOutcomeDTO,
    SessionCacheDTO,
)

__all__ = [
    "ApplicationInfoDTO",
    "ContextSnapshotDTO",
    "ComponentStatusDTO",
    "OperationMessageDTO",
    "OperationOutcomeDTO",
    "SessionCacheDTO",
    "SystemHealthDTO",
]
