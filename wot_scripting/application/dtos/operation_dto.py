"""
Operation DTOs - Application Layer

Data Transfer Objects for operation messages exchanged with the
presentation layer. Field names follow the flow-message conventions
(camelCase) through aliases.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from wot_scripting.domain.entities.operation import OperationOutcome, RequestState


class OperationMessageDTO(BaseModel):
    """Incoming flow message describing one operation on a thing."""

    operation_type: Optional[str] = Field(
        default=None,
        alias="operationType",
        description="readProperty, writeProperty, observeProperty, "
        "invokeAction or subscribeEvent",
    )
    affordance_name: Optional[str] = Field(
        default=None, alias="affordanceName", description="Target affordance name"
    )
    affordance_type: Optional[str] = Field(
        default=None,
        alias="affordanceType",
        description="Semantic type (@type) used to select affordances",
    )
    filter_mode: Optional[str] = Field(
        default=None,
        alias="filterMode",
        description="affordanceName, @type or both",
    )
    payload: Any = Field(default=None, description="Primary message payload")
    input_value: Any = Field(
        default=None,
        alias="inputValue",
        description="Explicit input value, takes precedence over payload",
    )
    input_value_type: Optional[str] = Field(
        default=None,
        alias="inputValueType",
        description="str, or json to decode textual input",
    )
    output_var: Optional[str] = Field(
        default=None, alias="outputVar", description="Variable receiving the result"
    )
    output_var_type: Optional[str] = Field(
        default=None,
        alias="outputVarType",
        description="Scope of the output variable: msg, flow or global",
    )
    output_payload: Optional[bool] = Field(
        default=None,
        alias="outputPayload",
        description="Also write the result to the message payload",
    )
    thing_description: Optional[Dict[str, Any]] = Field(
        default=None,
        alias="thingDescription",
        description="Thing Description of the target device",
    )
    cache_minutes: Optional[float] = Field(
        default=None,
        alias="cacheMinutes",
        description="Minutes the device session stays cached, 0 for no expiry",
    )

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
        "json_schema_extra": {
            "example": {
                "operationType": "readProperty",
                "filterMode": "affordanceName",
                "affordanceName": "temperature",
                "thingDescription": {
                    "id": "urn:dev:ops:32473-WoTLamp-1234",
                    "title": "MyLampThing",
                    "base": "http://lamp.local/",
                    "properties": {
                        "temperature": {
                            "type": "number",
                            "forms": [{"href": "properties/temperature"}],
                        }
                    },
                },
            }
        },
    }

    def to_message(self) -> Dict[str, Any]:
        """Return the message as a plain dict with the original field names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class OperationOutcomeDTO(BaseModel):
    """Result of processing one operation message."""

    state: RequestState = Field(description="done, dropped or errored")
    affordances: List[str] = Field(
        default_factory=list, description="Affordances the operation ran on"
    )
    messages: List[Dict[str, Any]] = Field(
        default_factory=list, description="Emitted messages, one per result"
    )
    errors: List[str] = Field(
        default_factory=list, description="Errors reported while processing"
    )

    @classmethod
    def from_domain(cls, outcome: OperationOutcome) -> "OperationOutcomeDTO":
        return cls(
            state=outcome.state,
            affordances=list(outcome.affordances),
            messages=list(outcome.messages),
            errors=list(outcome.errors),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "state": "done",
                "affordances": ["temperature"],
                "messages": [{"operationType": "readProperty", "payload": 21.5}],
                "errors": [],
            }
        }
    }


class ContextSnapshotDTO(BaseModel):
    """Values currently stored in a flow or global context."""

    scope: str = Field(description="flow or global")
    flow_id: Optional[str] = Field(default=None, description="Flow identifier")
    values: Dict[str, Any] = Field(default_factory=dict)


class SessionCacheDTO(BaseModel):
    """Identities of the things with a cached device session."""

    count: int = Field(description="Number of cached sessions")
    identities: List[str] = Field(default_factory=list)
