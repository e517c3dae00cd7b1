"""Infrastructure implementation for system health checks."""

from __future__ import annotations

from typing import List

from wot_scripting.application.services.session_cache import SessionCache
from wot_scripting.domain.entities.health import (
    ComponentStatus,
    ServiceStatus,
    SystemHealth,
)
from wot_scripting.domain.ports.health_check import IHealthCheckService
from wot_scripting.domain.ports.thing_runtime import IThingRuntime
from wot_scripting.infrastructure.stores.context_store import ContextRegistry


class HealthCheckService(IHealthCheckService):
    """Report the state of the thing runtime, session cache and contexts."""

    def __init__(
        self,
        thing_runtime: IThingRuntime,
        session_cache: SessionCache,
        context_registry: ContextRegistry,
    ) -> None:
        self._thing_runtime = thing_runtime
        self._session_cache = session_cache
        self._context_registry = context_registry

    async def evaluate(self) -> SystemHealth:
        components = [
            self._check_runtime(),
            self._check_session_cache(),
            self._check_contexts(),
        ]
        return SystemHealth(
            status=self._aggregate_status(components),
            components=components,
        )

    def _check_runtime(self) -> ComponentStatus:
        details = {}
        schemes = getattr(self._thing_runtime, "schemes", None)
        if schemes:
            details["schemes"] = list(schemes)
        if self._thing_runtime.started:
            return ComponentStatus(
                name="thing_runtime",
                status=ServiceStatus.UP,
                message="Thing runtime started",
                details=details,
            )
        return ComponentStatus(
            name="thing_runtime",
            status=ServiceStatus.DOWN,
            message="Thing runtime not started",
            details=details,
        )

    def _check_session_cache(self) -> ComponentStatus:
        return ComponentStatus(
            name="session_cache",
            status=ServiceStatus.UP,
            details={"size": len(self._session_cache)},
        )

    def _check_contexts(self) -> ComponentStatus:
        return ComponentStatus(
            name="context_stores",
            status=ServiceStatus.UP,
            details={
                "flows": len(self._context_registry.flow_ids()),
                "global_keys": len(self._context_registry.global_store.keys()),
            },
        )

    @staticmethod
    def _aggregate_status(components: List[ComponentStatus]) -> ServiceStatus:
        statuses = {component.status for component in components}
        if not statuses:
            return ServiceStatus.UNKNOWN
        if statuses == {ServiceStatus.UP}:
            return ServiceStatus.UP
        if ServiceStatus.DOWN in statuses:
            return ServiceStatus.DOWN
        return ServiceStatus.DEGRADED
