from __future__ import annotations

import pytest

from wot_scripting.application.services import SessionCache
from wot_scripting.domain.entities.health import ComponentStatus, ServiceStatus
from wot_scripting.infrastructure.services.health_check_service import (
    HealthCheckService,
)


def test_aggregate_status_priority() -> None:
    statuses = [
        ComponentStatus(name="thing_runtime", status=ServiceStatus.UP),
        ComponentStatus(name="session_cache", status=ServiceStatus.DEGRADED),
        ComponentStatus(name="context_stores", status=ServiceStatus.DOWN),
    ]
    assert HealthCheckService._aggregate_status(statuses) is ServiceStatus.DOWN
    assert HealthCheckService._aggregate_status(statuses[:2]) is (
        ServiceStatus.DEGRADED
    )
    assert HealthCheckService._aggregate_status([]) is ServiceStatus.UNKNOWN


@pytest.mark.asyncio
async def test_evaluate_reports_runtime_down_before_start(
    fake_runtime, context_registry
) -> None:
    service = HealthCheckService(fake_runtime, SessionCache(), context_registry)

    health = await service.evaluate()

    assert health.status is ServiceStatus.DOWN
    assert health.components[0].name == "thing_runtime"
    assert health.components[0].status is ServiceStatus.DOWN


@pytest.mark.asyncio
async def test_evaluate_collects_component_details(
    fake_runtime, fake_thing, context_registry
) -> None:
    cache = SessionCache()
    await fake_runtime.start()

    async def _session():
        return fake_thing

    await cache.get_or_create("thing-1", _session)
    context_registry.flow("flow-1").set("x", 1)
    context_registry.global_store.set("y", 2)

    health = await HealthCheckService(
        fake_runtime, cache, context_registry
    ).evaluate()

    by_name = {component.name: component for component in health.components}
    assert health.status is ServiceStatus.UP
    assert by_name["session_cache"].details == {"size": 1}
    assert by_name["context_stores"].details == {"flows": 1, "global_keys": 1}
