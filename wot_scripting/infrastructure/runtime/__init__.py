"""
Runtime Package - Infrastructure Layer

Concrete thing runtimes implementing the domain thing runtime port.
"""

from .http_thing_runtime import (
    HttpConsumedThing,
    HttpInteractionOutput,
    HttpThingFactory,
    HttpThingRuntime,
)

__all__ = [
    "HttpConsumedThing",
    "HttpInteractionOutput",
    "HttpThingFactory",
    "HttpThingRuntime",
]
