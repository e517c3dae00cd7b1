"""Domain entities describing a single operation request against a thing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from wot_scripting.domain.entities.errors import (
    IllegalFilterModeError,
    InvalidOutputScopeError,
    UnknownOperationKindError,
)


class AffordanceCategory(str, Enum):
    """Top-level Thing Description member holding a kind of affordance."""

    PROPERTIES = "properties"
    ACTIONS = "actions"
    EVENTS = "events"


class OperationKind(str, Enum):
    """Operations that can be performed on a consumed thing."""

    READ_PROPERTY = "readProperty"
    WRITE_PROPERTY = "writeProperty"
    OBSERVE_PROPERTY = "observeProperty"
    INVOKE_ACTION = "invokeAction"
    SUBSCRIBE_EVENT = "subscribeEvent"

    @property
    def category(self) -> AffordanceCategory:
        return _CATEGORY_BY_OPERATION[self]

    @classmethod
    def parse(cls, value: Any) -> "OperationKind":
        try:
            return cls(value)
        except ValueError:
            raise UnknownOperationKindError(value) from None


_CATEGORY_BY_OPERATION = {
    OperationKind.READ_PROPERTY: AffordanceCategory.PROPERTIES,
    OperationKind.WRITE_PROPERTY: AffordanceCategory.PROPERTIES,
    OperationKind.OBSERVE_PROPERTY: AffordanceCategory.PROPERTIES,
    OperationKind.INVOKE_ACTION: AffordanceCategory.ACTIONS,
    OperationKind.SUBSCRIBE_EVENT: AffordanceCategory.EVENTS,
}


class FilterMode(str, Enum):
    """How the affordances an operation targets are selected."""

    BY_NAME = "affordanceName"
    BY_TYPE = "@type"
    BOTH = "both"

    @classmethod
    def parse(cls, value: Any) -> "FilterMode":
        try:
            return cls(value)
        except ValueError:
            raise IllegalFilterModeError(value) from None


class OutputScope(str, Enum):
    """Where an operation result is written to."""

    MSG = "msg"
    FLOW = "flow"
    GLOBAL = "global"

    @classmethod
    def parse(cls, value: Any) -> "OutputScope":
        try:
            return cls(value)
        except ValueError:
            raise InvalidOutputScopeError(value) from None


class RequestState(str, Enum):
    """Terminal states of a processed request."""

    DONE = "done"
    DROPPED = "dropped"
    ERRORED = "errored"


@dataclass(slots=True, frozen=True)
class AffordanceFilter:
    """Selection criteria for the affordances of one category."""

    mode: FilterMode
    name: Optional[str] = None
    type: Optional[str] = None


@dataclass(slots=True, frozen=True)
class OutputTarget:
    """Routing instructions for operation results."""

    variable: str = "payload"
    scope: OutputScope = OutputScope.MSG
    mirror_to_payload: bool = False


@dataclass(slots=True)
class OperationRequest:
    """Fully resolved parameters of one incoming request."""

    kind: OperationKind
    affordance_filter: AffordanceFilter
    thing_description: Mapping[str, Any]
    output_target: OutputTarget = field(default_factory=OutputTarget)
    input_value: Any = None
    cache_minutes: float = 15


@dataclass(slots=True)
class OperationOutcome:
    """What a request produced: emitted messages and reported errors."""

    state: RequestState
    messages: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    affordances: List[str] = field(default_factory=list)
