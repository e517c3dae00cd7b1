from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wot_scripting.domain.ports.context_store import NodeContext  # noqa: E402
from wot_scripting.domain.ports.thing_runtime import (  # noqa: E402
    IConsumedThing,
    IInteractionOutput,
    IThingFactory,
    IThingRuntime,
)
from wot_scripting.infrastructure.stores import ContextRegistry  # noqa: E402


class FakeOutput(IInteractionOutput):
    def __init__(self, value: Any, error: Optional[Exception] = None) -> None:
        self._value = value
        self._error = error

    async def value(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._value


class FakeConsumedThing(IConsumedThing):
    """Consumed thing recording every call as (method, name, args)."""

    def __init__(
        self,
        thing_description: Mapping[str, Any],
        values: Optional[Dict[str, Any]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ) -> None:
        self._td = thing_description
        self.values = values if values is not None else {}
        self.failures = failures if failures is not None else {}
        self.calls: List[Tuple[str, str, Tuple[Any, ...]]] = []

    def get_thing_description(self) -> Mapping[str, Any]:
        return self._td

    async def _call(self, method: str, name: str, *args: Any) -> IInteractionOutput:
        self.calls.append((method, name, args))
        if name in self.failures:
            raise self.failures[name]
        return FakeOutput(self.values.get(name))

    async def read_property(self, name: str) -> IInteractionOutput:
        return await self._call("read_property", name)

    async def write_property(self, name: str, value: Any) -> IInteractionOutput:
        return await self._call("write_property", name, value)

    async def observe_property(self, name: str) -> IInteractionOutput:
        return await self._call("observe_property", name)

    async def invoke_action(self, name: str, *args: Any) -> IInteractionOutput:
        return await self._call("invoke_action", name, *args)

    async def subscribe_event(self, name: str) -> IInteractionOutput:
        return await self._call("subscribe_event", name)


class FakeThingFactory(IThingFactory):
    def __init__(
        self,
        values: Optional[Dict[str, Any]] = None,
        failures: Optional[Dict[str, Exception]] = None,
        consume_error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.values = values if values is not None else {}
        self.failures = failures if failures is not None else {}
        self.consume_error = consume_error
        self.delay = delay
        self.consumed: List[FakeConsumedThing] = []

    async def consume(self, thing_description: Mapping[str, Any]) -> IConsumedThing:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.consume_error is not None:
            raise self.consume_error
        thing = FakeConsumedThing(thing_description, self.values, self.failures)
        self.consumed.append(thing)
        return thing


class FakeThingRuntime(IThingRuntime):
    def __init__(self, factory: Optional[FakeThingFactory] = None) -> None:
        self.factory = factory or FakeThingFactory()
        self._started = False
        self.shutdowns = 0

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> IThingFactory:
        self._started = True
        return self.factory

    async def shutdown(self) -> None:
        self._started = False
        self.shutdowns += 1


@pytest.fixture()
def lamp_td() -> Dict[str, Any]:
    return {
        "id": "urn:dev:ops:32473-WoTLamp-1234",
        "title": "MyLampThing",
        "base": "http://lamp.local/",
        "properties": {
            "temperature": {
                "type": "number",
                "forms": [{"href": "properties/temperature"}],
            },
            "status": {
                "@type": "OnOffState",
                "type": "string",
                "forms": [{"href": "properties/status"}],
            },
            "brightness": {
                "@type": ["Brightness", "LevelState"],
                "type": "integer",
                "forms": [{"href": "properties/brightness"}],
            },
        },
        "actions": {
            "toggle": {
                "@type": "Toggle",
                "forms": [{"href": "actions/toggle"}],
            },
            "toggleAll": {
                "@type": "Toggle",
                "forms": [{"href": "actions/toggleAll"}],
            },
            "fade": {
                "input": {"type": "integer", "const": 50},
                "forms": [{"href": "actions/fade"}],
            },
        },
        "events": {
            "overheating": {
                "@type": "Alarm",
                "forms": [{"href": "events/overheating", "subprotocol": "longpoll"}],
            }
        },
    }


@pytest.fixture()
def context_registry() -> ContextRegistry:
    return ContextRegistry()


@pytest.fixture()
def node_context(context_registry: ContextRegistry) -> NodeContext:
    return context_registry.node_context("flow-1")


@pytest.fixture()
def fake_factory() -> FakeThingFactory:
    return FakeThingFactory()


@pytest.fixture()
def fake_runtime(fake_factory: FakeThingFactory) -> FakeThingRuntime:
    return FakeThingRuntime(fake_factory)


@pytest.fixture()
def fake_thing(lamp_td: Dict[str, Any]) -> FakeConsumedThing:
    return FakeConsumedThing(lamp_td)
