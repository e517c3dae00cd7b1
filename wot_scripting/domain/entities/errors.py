"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnknownOperationKindError(DomainError):
    """Raised when an operation type does not map to an affordance category."""

    def __init__(self, operation_type: Any, details: Optional[Dict[str, Any]] = None):
        message = f"Illegal operation type {operation_type!r} defined!"
        super().__init__(message, details)


class IllegalFilterModeError(DomainError):
    """Raised when the affordance filter mode is not a supported value."""

    def __init__(self, filter_mode: Any, details: Optional[Dict[str, Any]] = None):
        message = f'Illegal filter mode "{filter_mode}" defined!'
        super().__init__(message, details)


class InvalidOutputScopeError(DomainError):
    """Raised when a result should be written to an unknown context."""

    def __init__(self, scope: Any, details: Optional[Dict[str, Any]] = None):
        message = (
            f"Invalid output context {scope!r} given! "
            "Possible values are msg, flow or global!"
        )
        super().__init__(message, details)


class MissingInputError(DomainError):
    """Raised when an operation requiring an input value has none."""

    def __init__(self, affordance_name: Optional[str] = None, details=None):
        message = "No input value given!"
        if affordance_name:
            message = f"No input value given for {affordance_name!r}!"
        super().__init__(message, details)


class InvalidInputValueError(DomainError):
    """Raised when the input value cannot be decoded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class MissingThingDescriptionError(DomainError):
    """Raised when a request carries no usable Thing Description."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("No thing description given!", details)


class MissingThingIdentityError(DomainError):
    """Raised when a Thing Description has none of id, base or title."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        message = "Thing description has no id, base or title to identify it"
        super().__init__(message, details)


class ThingRuntimeError(DomainError):
    """Raised by thing runtime adapters when a device interaction fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class SessionAcquisitionError(DomainError):
    """Raised when a Thing Description cannot be consumed into a session."""

    def __init__(self, identity: str, cause: Exception):
        message = f"Failed to consume thing {identity!r}: {cause}"
        super().__init__(message, {"identity": identity})
        self.identity = identity


class DispatchError(DomainError):
    """Raised when an operation on a single affordance fails."""

    def __init__(self, operation_kind: str, affordance_name: str, cause: Exception):
        message = f"{operation_kind} on {affordance_name!r} failed: {cause}"
        super().__init__(
            message,
            {"operation_kind": operation_kind, "affordance_name": affordance_name},
        )
        self.operation_kind = operation_kind
        self.affordance_name = affordance_name
