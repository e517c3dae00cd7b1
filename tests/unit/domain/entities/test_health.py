from __future__ import annotations

from datetime import timezone

import pytest

from wot_scripting.domain.entities.health import (
    ComponentStatus,
    ServiceStatus,
    SystemHealth,
)


def test_component_status_defaults() -> None:
    status = ComponentStatus(name="thing_runtime", status=ServiceStatus.UP)
    assert status.checked_at.tzinfo == timezone.utc
    assert status.details == {}


def test_system_health_container() -> None:
    component = ComponentStatus(name="session_cache", status=ServiceStatus.DOWN)
    health = SystemHealth(status=ServiceStatus.DEGRADED, components=[component])
    assert health.components[0] is component
    assert health.status is ServiceStatus.DEGRADED


@pytest.mark.parametrize(
    "status, serving",
    [
        (ServiceStatus.UP, True),
        (ServiceStatus.DEGRADED, True),
        (ServiceStatus.DOWN, False),
        (ServiceStatus.UNKNOWN, False),
    ],
)
def test_system_health_is_serving(status: ServiceStatus, serving: bool) -> None:
    assert SystemHealth(status=status).is_serving is serving
