"""HTTP thing runtime implementation - Infrastructure layer."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urljoin, urlsplit

import httpx

from wot_scripting.domain.entities.errors import (
    MissingThingIdentityError,
    ThingRuntimeError,
)
from wot_scripting.domain.entities.operation import AffordanceCategory
from wot_scripting.domain.ports.thing_runtime import (
    IConsumedThing,
    IInteractionOutput,
    IThingFactory,
    IThingRuntime,
)
from wot_scripting.domain.services.thing_description import (
    get_affordances,
    get_thing_identifier,
)
from wot_scripting.shared import get_logger

logger = get_logger(__name__)

SUPPORTED_SCHEMES = ("http", "https")
DEFAULT_CONTENT_TYPE = "application/json"

DEFAULT_METHODS = {
    "readproperty": "GET",
    "writeproperty": "PUT",
    "observeproperty": "GET",
    "invokeaction": "POST",
    "subscribeevent": "GET",
}

# operations implied by a form that declares no "op"
DEFAULT_FORM_OPS = {
    AffordanceCategory.PROPERTIES: ("readproperty", "writeproperty"),
    AffordanceCategory.ACTIONS: ("invokeaction",),
    AffordanceCategory.EVENTS: ("subscribeevent",),
}

LONG_POLL_OPS = ("observeproperty", "subscribeevent")

_NO_BODY = object()


class HttpInteractionOutput(IInteractionOutput):
    """Output of an HTTP interaction, decoded according to its content type."""

    def __init__(self, response: httpx.Response, content_type: str):
        self._response = response
        self._content_type = content_type

    async def value(self) -> Any:
        if not self._response.content:
            return None
        content_type = (
            self._response.headers.get("content-type") or self._content_type
        ).lower()
        if "json" in content_type:
            return self._response.json()
        if content_type.startswith("text/"):
            return self._response.text
        return self._response.content


class HttpConsumedThing(IConsumedThing):
    """Device session driving a thing through the HTTP(S) forms of its TD."""

    def __init__(
        self,
        thing_description: Mapping[str, Any],
        client: httpx.AsyncClient,
        long_poll_timeout: float,
    ):
        self._td = thing_description
        self._client = client
        self._long_poll_timeout = long_poll_timeout
        self._base = thing_description.get("base") or ""
        try:
            self._identity = get_thing_identifier(thing_description)
        except MissingThingIdentityError:
            self._identity = "unidentified"

    @property
    def identity(self) -> str:
        return self._identity

    def get_thing_description(self) -> Mapping[str, Any]:
        return self._td

    async def read_property(self, name: str) -> IInteractionOutput:
        return await self._interact("readproperty", AffordanceCategory.PROPERTIES, name)

    async def write_property(self, name: str, value: Any) -> IInteractionOutput:
        return await self._interact(
            "writeproperty", AffordanceCategory.PROPERTIES, name, value
        )

    async def observe_property(self, name: str) -> IInteractionOutput:
        return await self._interact(
            "observeproperty", AffordanceCategory.PROPERTIES, name
        )

    async def invoke_action(self, name: str, *args: Any) -> IInteractionOutput:
        body = args[0] if args else _NO_BODY
        return await self._interact(
            "invokeaction", AffordanceCategory.ACTIONS, name, body
        )

    async def subscribe_event(self, name: str) -> IInteractionOutput:
        return await self._interact("subscribeevent", AffordanceCategory.EVENTS, name)

    def select_form(
        self, operation: str, category: AffordanceCategory, name: str
    ) -> Tuple[str, str, str]:
        """
        Pick the HTTP(S) form of an affordance matching an operation.

        Returns:
            Tuple of absolute URL, HTTP method and content type

        Raises:
            ThingRuntimeError: If the affordance or a usable form is missing
        """
        affordance = get_affordances(self._td, category).get(name)
        if not isinstance(affordance, Mapping):
            raise ThingRuntimeError(
                f"Thing {self._identity!r} has no {category.value} affordance {name!r}"
            )

        explicit: Optional[Dict[str, Any]] = None
        implicit: Optional[Dict[str, Any]] = None
        for form in affordance.get("forms") or []:
            if not isinstance(form, Mapping) or not form.get("href"):
                continue
            url = urljoin(self._base, form["href"]) if self._base else form["href"]
            if urlsplit(url).scheme not in SUPPORTED_SCHEMES:
                continue
            ops = form.get("op")
            if ops is None:
                if implicit is None and operation in DEFAULT_FORM_OPS[category]:
                    implicit = {**form, "href": url}
                continue
            if isinstance(ops, str):
                ops = [ops]
            if operation in ops:
                explicit = {**form, "href": url}
                break

        form = explicit or implicit
        if form is None:
            raise ThingRuntimeError(
                f"No HTTP form for {operation} on {name!r} of thing {self._identity!r}"
            )
        method = form.get("htv:methodName") or DEFAULT_METHODS[operation]
        content_type = form.get("contentType") or DEFAULT_CONTENT_TYPE
        return form["href"], method.upper(), content_type

    async def _interact(
        self,
        operation: str,
        category: AffordanceCategory,
        name: str,
        body: Any = _NO_BODY,
    ) -> IInteractionOutput:
        url, method, content_type = self.select_form(operation, category, name)

        request_kwargs: Dict[str, Any] = {
            "headers": {"Accept": content_type},
        }
        if body is not _NO_BODY:
            request_kwargs["headers"]["Content-Type"] = content_type
            if "json" in content_type:
                request_kwargs["json"] = body
            else:
                request_kwargs["content"] = (
                    body if isinstance(body, (bytes, str)) else str(body)
                )
        if operation in LONG_POLL_OPS:
            request_kwargs["timeout"] = self._long_poll_timeout

        logger.info(
            "thing.interaction.request",
            thing=self._identity,
            operation=operation,
            affordance=name,
            method=method,
            url=url,
        )

        try:
            response = await self._client.request(method, url, **request_kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "thing.interaction.http_error",
                thing=self._identity,
                operation=operation,
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise ThingRuntimeError(
                f"Thing returned HTTP {e.response.status_code}: {e.response.text}",
                {"url": url, "status_code": e.response.status_code},
            )
        except httpx.RequestError as e:
            logger.error(
                "thing.interaction.request_error",
                thing=self._identity,
                operation=operation,
                error=str(e),
                url=url,
            )
            raise ThingRuntimeError(
                f"Failed to communicate with thing: {str(e)}", {"url": url}
            )

        logger.info(
            "thing.interaction.response",
            thing=self._identity,
            operation=operation,
            status_code=response.status_code,
        )
        return HttpInteractionOutput(response, content_type)


class HttpThingFactory(IThingFactory):
    """Creates HTTP device sessions sharing one client."""

    def __init__(self, client: httpx.AsyncClient, long_poll_timeout: float):
        self._client = client
        self._long_poll_timeout = long_poll_timeout

    async def consume(self, thing_description: Mapping[str, Any]) -> IConsumedThing:
        if not isinstance(thing_description, Mapping):
            raise ThingRuntimeError("Thing description must be a JSON object")
        thing = HttpConsumedThing(
            thing_description, self._client, self._long_poll_timeout
        )
        logger.info(
            "thing_runtime.consumed",
            thing=thing.identity,
            base=thing_description.get("base"),
        )
        return thing


class HttpThingRuntime(IThingRuntime):
    """Thing runtime speaking the HTTP and HTTPS protocol bindings."""

    def __init__(
        self,
        timeout: float = 30.0,
        long_poll_timeout: float = 60.0,
        verify_tls: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the runtime.

        Args:
            timeout: Timeout in seconds for regular interactions
            long_poll_timeout: Timeout in seconds for observe and subscribe
            verify_tls: Verify server certificates on HTTPS forms
            transport: Optional httpx transport replacing the network one
        """
        self.timeout = timeout
        self.long_poll_timeout = long_poll_timeout
        self.verify_tls = verify_tls
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._factory: Optional[HttpThingFactory] = None

    @property
    def started(self) -> bool:
        return self._factory is not None

    @property
    def schemes(self) -> Tuple[str, ...]:
        return SUPPORTED_SCHEMES

    async def start(self) -> IThingFactory:
        if self._factory is not None:
            return self._factory

        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            verify=self.verify_tls,
            transport=self._transport,
        )
        self._factory = HttpThingFactory(self._client, self.long_poll_timeout)
        logger.info(
            "thing_runtime.started",
            schemes=list(SUPPORTED_SCHEMES),
            timeout=self.timeout,
        )
        return self._factory

    async def shutdown(self) -> None:
        if self._client is not None:
            await self._client.aclose()
        self._client = None
        self._factory = None
        logger.info("thing_runtime.shutdown")
