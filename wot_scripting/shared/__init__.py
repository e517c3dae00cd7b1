"""
Shared module - Cross-cutting concerns / Shared Layer

Utilities, constants and enums used across several layers:
- environment names, log levels and input value types
- structured logging setup and logger access

The shared module must not depend on Infrastructure or Frameworks.
"""

from .consts import EnumEnvironment, EnumInputValueType, EnumLogLevel
from .logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

__all__ = [
    "EnumEnvironment",
    "EnumInputValueType",
    "EnumLogLevel",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
