"""
Domain Entities Package

This package contains the core domain entities: operation requests,
selection filters, output targets, health value objects and errors.
"""

from .errors import (
    DispatchError,
    DomainError,
    IllegalFilterModeError,
    InvalidInputValueError,
    InvalidOutputScopeError,
    MissingInputError,
    MissingThingDescriptionError,
    MissingThingIdentityError,
    SessionAcquisitionError,
    ThingRuntimeError,
    UnknownOperationKindError,
)
from .health import ApplicationInfo, ComponentStatus, ServiceStatus, SystemHealth
from .operation import (
    AffordanceCategory,
    AffordanceFilter,
    FilterMode,
    OperationKind,
    OperationOutcome,
    OperationRequest,
    OutputScope,
    OutputTarget,
    RequestState,
)

__all__ = [
    "AffordanceCategory",
    "AffordanceFilter",
    "FilterMode",
    "OperationKind",
    "OperationOutcome",
    "OperationRequest",
    "OutputScope",
    "OutputTarget",
    "RequestState",
    "SystemHealth",
    "ComponentStatus",
    "ServiceStatus",
    "ApplicationInfo",
    "DomainError",
    "DispatchError",
    "IllegalFilterModeError",
    "InvalidInputValueError",
    "InvalidOutputScopeError",
    "MissingInputError",
    "MissingThingDescriptionError",
    "MissingThingIdentityError",
    "SessionAcquisitionError",
    "ThingRuntimeError",
    "UnknownOperationKindError",
]
