"""
Thing Runtime Interface - Domain Layer

Contract of the runtime that turns a Thing Description into a live,
callable device session. Transport selection (HTTP, CoAP, MQTT, ...) is
the concern of the concrete implementation in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class IInteractionOutput(ABC):
    """Output handle returned by every device interaction."""

    @abstractmethod
    async def value(self) -> Any:
        """Resolve the concrete value carried by the output."""
        pass


class IConsumedThing(ABC):
    """A device session bound to one Thing Description."""

    @abstractmethod
    def get_thing_description(self) -> Mapping[str, Any]:
        """Return the Thing Description this session was created from."""
        pass

    @abstractmethod
    async def read_property(self, name: str) -> IInteractionOutput:
        pass

    @abstractmethod
    async def write_property(self, name: str, value: Any) -> IInteractionOutput:
        pass

    @abstractmethod
    async def observe_property(self, name: str) -> IInteractionOutput:
        pass

    @abstractmethod
    async def invoke_action(self, name: str, *args: Any) -> IInteractionOutput:
        """
        Invoke an action.

        Args:
            name: Action affordance name
            *args: Zero or one input value. No argument means the action
                is invoked without input, which differs from invoking it
                with ``None``.
        """
        pass

    @abstractmethod
    async def subscribe_event(self, name: str) -> IInteractionOutput:
        pass


class IThingFactory(ABC):
    """Creates device sessions from Thing Descriptions."""

    @abstractmethod
    async def consume(self, thing_description: Mapping[str, Any]) -> IConsumedThing:
        """
        Consume a Thing Description.

        Raises:
            ThingRuntimeError: If no session can be created for the thing
        """
        pass


class IThingRuntime(ABC):
    """Lifecycle of the runtime providing the thing factory."""

    @property
    @abstractmethod
    def started(self) -> bool:
        pass

    @abstractmethod
    async def start(self) -> IThingFactory:
        """Start the runtime (idempotent) and return its thing factory."""
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Release every resource held by the runtime."""
        pass
