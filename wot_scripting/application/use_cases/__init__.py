"""
Use Cases Package - Application Layer

Use cases orchestrating the domain services and ports.
"""

from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .perform_operation_use_case import PerformOperationUseCase

__all__ = [
    "GetApplicationInfoUseCase",
    "GetHealthStatusUseCase",
    "PerformOperationUseCase",
]
