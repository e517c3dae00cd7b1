"""
Domain Layer Package

This package contains the core rules of the service: operation and filter
entities, affordance selection, and the ports to the thing runtime and the
shared context. It has no dependencies on frameworks or infrastructure.
"""

# Re-export submodules
from wot_scripting.domain import entities, ports, services

__all__ = ["entities", "ports", "services"]
