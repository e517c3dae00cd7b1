"""Port reporting the state of the runtime, session cache and context stores."""

from __future__ import annotations

from typing import Protocol

from wot_scripting.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    async def evaluate(self) -> SystemHealth:
        """Check every component and fold the results into one status."""
        ...
