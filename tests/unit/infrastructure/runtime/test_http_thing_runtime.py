from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from wot_scripting.domain.entities.errors import ThingRuntimeError
from wot_scripting.domain.entities.operation import AffordanceCategory
from wot_scripting.infrastructure.runtime import HttpThingRuntime


class _Recorder:
    def __init__(self, handler):
        self.requests: List[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


@pytest.fixture()
def thing_td():
    return {
        "id": "urn:thing:1",
        "base": "http://device.local/api/",
        "properties": {
            "temperature": {"forms": [{"href": "props/temperature"}]},
            "status": {
                "forms": [
                    {"href": "props/status", "op": "readproperty"},
                    {
                        "href": "props/status",
                        "op": ["writeproperty"],
                        "htv:methodName": "POST",
                    },
                ]
            },
            "label": {
                "forms": [{"href": "props/label", "contentType": "text/plain"}]
            },
            "remote": {"forms": [{"href": "coap://device.local/remote"}]},
        },
        "actions": {"fade": {"forms": [{"href": "http://other.local/fade"}]}},
        "events": {
            "overheating": {
                "forms": [{"href": "events/overheating", "subprotocol": "longpoll"}]
            }
        },
    }


async def _consume(handler, td):
    recorder = _Recorder(handler)
    runtime = HttpThingRuntime(transport=httpx.MockTransport(recorder))
    factory = await runtime.start()
    thing = await factory.consume(td)
    return runtime, thing, recorder


@pytest.mark.asyncio
async def test_read_property_decodes_json(thing_td) -> None:
    runtime, thing, recorder = await _consume(
        lambda request: httpx.Response(200, json=21.5), thing_td
    )

    output = await thing.read_property("temperature")

    assert await output.value() == 21.5
    assert recorder.requests[0].method == "GET"
    assert str(recorder.requests[0].url) == "http://device.local/api/props/temperature"
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_write_property_uses_matching_form_and_method(thing_td) -> None:
    runtime, thing, recorder = await _consume(
        lambda request: httpx.Response(204), thing_td
    )

    output = await thing.write_property("status", {"on": True})

    request = recorder.requests[0]
    assert request.method == "POST"
    assert json.loads(request.content) == {"on": True}
    assert request.headers["content-type"] == "application/json"
    assert await output.value() is None
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_invoke_action_with_and_without_input(thing_td) -> None:
    runtime, thing, recorder = await _consume(
        lambda request: httpx.Response(200, json={"ok": True}), thing_td
    )

    await thing.invoke_action("fade", 50)
    await thing.invoke_action("fade")

    with_input, without_input = recorder.requests
    assert with_input.method == "POST"
    assert str(with_input.url) == "http://other.local/fade"
    assert json.loads(with_input.content) == 50
    assert without_input.content == b""
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_subscribe_event_uses_long_poll(thing_td) -> None:
    runtime, thing, recorder = await _consume(
        lambda request: httpx.Response(200, json={"celsius": 90}), thing_td
    )

    output = await thing.subscribe_event("overheating")

    assert await output.value() == {"celsius": 90}
    assert recorder.requests[0].extensions["timeout"]["read"] == 60.0
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_text_content_is_returned_as_text(thing_td) -> None:
    runtime, thing, _ = await _consume(
        lambda request: httpx.Response(
            200, text="kitchen", headers={"content-type": "text/plain"}
        ),
        thing_td,
    )

    output = await thing.read_property("label")

    assert await output.value() == "kitchen"
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_http_error_becomes_runtime_error(thing_td) -> None:
    runtime, thing, _ = await _consume(
        lambda request: httpx.Response(500, text="boom"), thing_td
    )

    with pytest.raises(ThingRuntimeError) as exc:
        await thing.read_property("temperature")

    assert "HTTP 500" in exc.value.message
    assert exc.value.details["status_code"] == 500
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_connection_error_becomes_runtime_error(thing_td) -> None:
    def _refuse(request):
        raise httpx.ConnectError("refused", request=request)

    runtime, thing, _ = await _consume(_refuse, thing_td)

    with pytest.raises(ThingRuntimeError, match="Failed to communicate"):
        await thing.read_property("temperature")
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_unsupported_scheme_has_no_form(thing_td) -> None:
    runtime, thing, recorder = await _consume(
        lambda request: httpx.Response(200), thing_td
    )

    with pytest.raises(ThingRuntimeError, match="No HTTP form"):
        await thing.read_property("remote")
    with pytest.raises(ThingRuntimeError, match="has no properties affordance"):
        await thing.read_property("humidity")
    assert recorder.requests == []
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_select_form_prefers_explicit_op(thing_td) -> None:
    runtime, thing, _ = await _consume(lambda request: httpx.Response(200), thing_td)

    url, method, content_type = thing.select_form(
        "readproperty", AffordanceCategory.PROPERTIES, "status"
    )

    assert url == "http://device.local/api/props/status"
    assert method == "GET"
    assert content_type == "application/json"
    await runtime.shutdown()


@pytest.mark.asyncio
async def test_runtime_lifecycle() -> None:
    runtime = HttpThingRuntime(
        transport=httpx.MockTransport(lambda request: httpx.Response(200))
    )
    assert runtime.started is False

    first = await runtime.start()
    second = await runtime.start()
    assert first is second
    assert runtime.started is True

    await runtime.shutdown()
    assert runtime.started is False


@pytest.mark.asyncio
async def test_consume_rejects_non_object() -> None:
    runtime = HttpThingRuntime(
        transport=httpx.MockTransport(lambda request: httpx.Response(200))
    )
    factory = await runtime.start()

    with pytest.raises(ThingRuntimeError):
        await factory.consume(["not", "a", "td"])
    await runtime.shutdown()
