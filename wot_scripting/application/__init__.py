"""
Application Layer Package

This package contains the use cases of the service and the stateful
services they compose: the session cache, the operation dispatcher and
the output router.
"""

# Re-export submodules
from wot_scripting.application import dtos, models, services, use_cases

__all__ = ["dtos", "models", "services", "use_cases"]
