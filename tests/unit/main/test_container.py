from __future__ import annotations

import asyncio

import pytest
from dependency_injector import providers

from wot_scripting.application.use_cases import PerformOperationUseCase
from wot_scripting.infrastructure.runtime import HttpThingRuntime
from wot_scripting.main.config import AppSettings, NodeSettings, RuntimeSettings
from wot_scripting.main.container import app_lifespan, get_container, init_container


@pytest.mark.asyncio
async def test_init_and_get_container(fake_runtime) -> None:
    settings = AppSettings()
    container = init_container(settings)
    assert hasattr(container, "session_cache")
    assert get_container() is container

    container.thing_runtime.override(providers.Object(fake_runtime))

    async with app_lifespan():
        pass


def test_container_wires_settings_into_providers() -> None:
    settings = AppSettings(
        node=NodeSettings(cache_minutes=3, input_value_type="json"),
        runtime=RuntimeSettings(http_timeout=5, verify_tls=False),
    )
    container = init_container(settings)

    runtime = container.thing_runtime()
    defaults = container.node_defaults()

    assert isinstance(runtime, HttpThingRuntime)
    assert runtime.timeout == 5
    assert runtime.verify_tls is False
    assert defaults.cache_minutes == 3
    assert defaults.input_value_type == "json"
    assert container.session_cache() is container.session_cache()
    assert isinstance(container.perform_operation_use_case(), PerformOperationUseCase)


@pytest.mark.asyncio
async def test_app_lifespan_manages_resources(fake_runtime, fake_thing) -> None:
    container = init_container(AppSettings())
    container.thing_runtime.override(providers.Object(fake_runtime))
    cache = container.session_cache()

    async def _session():
        return fake_thing

    async with app_lifespan():
        assert fake_runtime.started is True
        await cache.get_or_create("urn:a", _session, ttl_minutes=15)
        await asyncio.sleep(0)

    assert fake_runtime.started is False
    assert fake_runtime.shutdowns == 1
    assert len(cache) == 0


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("wot_scripting.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()
