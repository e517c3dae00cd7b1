"""
Perform Operation Use Case - Application Layer

Entry point for every incoming operation message. Resolves the request
from the message and the configured defaults, selects the target
affordances, obtains the device session from the cache and runs the
operation on each affordance in order, routing and emitting every result.

Failures never escape as exceptions: they end up in the outcome's error
list, which is the diagnostic channel of the caller.
"""

import copy
import json
from typing import Any, Dict, Mapping

from wot_scripting.application.models import NodeDefaults
from wot_scripting.application.services import (
    OperationDispatcher,
    OutputRouter,
    SessionCache,
)
from wot_scripting.application.services.operation_dispatcher import NO_CONST_INPUT
from wot_scripting.domain.entities.errors import (
    DomainError,
    InvalidInputValueError,
    MissingInputError,
    MissingThingDescriptionError,
    SessionAcquisitionError,
)
from wot_scripting.domain.entities.operation import (
    AffordanceFilter,
    FilterMode,
    OperationKind,
    OperationOutcome,
    OperationRequest,
    OutputScope,
    OutputTarget,
    RequestState,
)
from wot_scripting.domain.ports.context_store import NodeContext
from wot_scripting.domain.ports.thing_runtime import IConsumedThing, IThingRuntime
from wot_scripting.domain.services import (
    get_const_input,
    get_thing_identifier,
    select_affordances,
)
from wot_scripting.shared import EnumInputValueType, get_logger

logger = get_logger(__name__)


def _pick(message: Mapping[str, Any], key: str, default: Any) -> Any:
    value = message.get(key)
    if value is None or value == "":
        return default
    return value


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return len(value) > 0
    return True


class PerformOperationUseCase:
    """Runs one operation message against the thing it describes."""

    def __init__(
        self,
        thing_runtime: IThingRuntime,
        session_cache: SessionCache,
        dispatcher: OperationDispatcher,
        output_router: OutputRouter,
        node_defaults: NodeDefaults,
    ) -> None:
        self._thing_runtime = thing_runtime
        self._session_cache = session_cache
        self._dispatcher = dispatcher
        self._output_router = output_router
        self._defaults = node_defaults

    async def execute(
        self, message: Mapping[str, Any], context: NodeContext
    ) -> OperationOutcome:
        """
        Process one message.

        Args:
            message: Incoming flow message. It is copied, never mutated.
            context: Flow and global context stores for output routing

        Returns:
            OperationOutcome: Terminal state, emitted messages and errors
        """
        msg: Dict[str, Any] = dict(message)

        try:
            request = self.resolve_request(msg)
            affordances = select_affordances(
                request.thing_description, request.kind, request.affordance_filter
            )
        except DomainError as exc:
            return self._errored(exc, stage="validation")

        if not affordances:
            logger.info(
                "operation.dropped",
                operation_kind=request.kind.value,
                filter_mode=request.affordance_filter.mode.value,
                affordance_name=request.affordance_filter.name,
                affordance_type=request.affordance_filter.type,
            )
            return OperationOutcome(state=RequestState.DROPPED)

        try:
            session = await self._acquire_session(request)
        except DomainError as exc:
            return self._errored(exc, stage="session")

        outcome = OperationOutcome(state=RequestState.DONE, affordances=affordances)
        for affordance_name in affordances:
            try:
                await self._perform(session, request, affordance_name, msg, context)
            except DomainError as exc:
                logger.error(
                    "operation.affordance.failed",
                    affordance=affordance_name,
                    error=exc.message,
                )
                outcome.errors.append(exc.message)
                continue
            except Exception as exc:
                logger.error(
                    "operation.affordance.unexpected_error",
                    affordance=affordance_name,
                    error=str(exc),
                    exc_info=exc,
                )
                outcome.errors.append(f"Unexpected error on {affordance_name!r}: {exc}")
                continue
            # each emitted message is a snapshot of the message at that point
            outcome.messages.append(copy.copy(msg))

        logger.info(
            "operation.completed",
            operation_kind=request.kind.value,
            affordances=affordances,
            emitted=len(outcome.messages),
            failed=len(outcome.errors),
        )
        return outcome

    def resolve_request(self, message: Mapping[str, Any]) -> OperationRequest:
        """
        Merge message fields over the configured defaults and validate them.

        Raises:
            UnknownOperationKindError, IllegalFilterModeError,
            InvalidOutputScopeError, InvalidInputValueError,
            MissingThingDescriptionError, MissingInputError
        """
        defaults = self._defaults

        kind = OperationKind.parse(
            _pick(message, "operationType", defaults.operation_type)
        )
        affordance_filter = AffordanceFilter(
            mode=FilterMode.parse(_pick(message, "filterMode", defaults.filter_mode)),
            name=_pick(message, "affordanceName", defaults.affordance_name),
            type=_pick(message, "affordanceType", defaults.affordance_type),
        )
        output_target = OutputTarget(
            variable=str(_pick(message, "outputVar", defaults.output_var)),
            scope=OutputScope.parse(
                _pick(message, "outputVarType", defaults.output_var_type)
            ),
            mirror_to_payload=bool(
                _pick(message, "outputPayload", defaults.output_payload)
            ),
        )

        thing_description = message.get("thingDescription")
        if not isinstance(thing_description, Mapping):
            raise MissingThingDescriptionError()

        input_value = self._resolve_input(message)
        if kind == OperationKind.WRITE_PROPERTY and input_value is None:
            raise MissingInputError(affordance_filter.name)

        return OperationRequest(
            kind=kind,
            affordance_filter=affordance_filter,
            thing_description=thing_description,
            output_target=output_target,
            input_value=input_value,
            cache_minutes=self._resolve_cache_minutes(message),
        )

    def _resolve_input(self, message: Mapping[str, Any]) -> Any:
        if _is_set(message.get("inputValue")):
            raw = message["inputValue"]
        elif _is_set(self._defaults.input_value):
            raw = self._defaults.input_value
        else:
            raw = message.get("payload")

        value_type = _pick(message, "inputValueType", self._defaults.input_value_type)
        try:
            value_type = EnumInputValueType(value_type)
        except ValueError:
            raise InvalidInputValueError(
                f"Unknown input value type {value_type!r}, expected str or json"
            ) from None

        if value_type != EnumInputValueType.JSON or not isinstance(raw, (str, bytes)):
            return raw
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise InvalidInputValueError(f"Input value is not valid JSON: {exc}")

    def _resolve_cache_minutes(self, message: Mapping[str, Any]) -> float:
        raw = message.get("cacheMinutes")
        if raw is None or raw == "":
            return float(self._defaults.cache_minutes)
        try:
            minutes = float(raw)
        except (TypeError, ValueError):
            raise InvalidInputValueError(f"Invalid cacheMinutes value {raw!r}")
        if minutes < 0:
            raise InvalidInputValueError("cacheMinutes must not be negative")
        return minutes

    async def _acquire_session(self, request: OperationRequest) -> IConsumedThing:
        identity = get_thing_identifier(request.thing_description)

        async def consume() -> IConsumedThing:
            factory = await self._thing_runtime.start()
            return await factory.consume(request.thing_description)

        try:
            return await self._session_cache.get_or_create(
                identity, consume, request.cache_minutes
            )
        except Exception as exc:
            raise SessionAcquisitionError(identity, exc) from exc

    async def _perform(
        self,
        session: IConsumedThing,
        request: OperationRequest,
        affordance_name: str,
        msg: Dict[str, Any],
        context: NodeContext,
    ) -> None:
        const_input = NO_CONST_INPUT
        if request.kind == OperationKind.INVOKE_ACTION:
            const_input = get_const_input(request.thing_description, affordance_name)

        result = await self._dispatcher.dispatch(
            session,
            request.kind,
            affordance_name,
            request.input_value,
            const_input,
        )
        self._output_router.route(msg, result, request.output_target, context)

    def _errored(self, exc: DomainError, *, stage: str) -> OperationOutcome:
        logger.error(
            "operation.errored",
            stage=stage,
            error=exc.message,
            error_type=type(exc).__name__,
            **exc.details,
        )
        return OperationOutcome(state=RequestState.ERRORED, errors=[exc.message])
