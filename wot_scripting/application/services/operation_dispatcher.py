"""
Operation Dispatcher - Application Layer

Performs one operation on one affordance of a consumed thing and resolves
the output handle returned by the device to its value.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from wot_scripting.domain.entities.errors import DispatchError, MissingInputError
from wot_scripting.domain.entities.operation import OperationKind
from wot_scripting.domain.ports.thing_runtime import (
    IConsumedThing,
    IInteractionOutput,
)
from wot_scripting.shared import get_logger

logger = get_logger(__name__)

NO_CONST_INPUT: Tuple[bool, Any] = (False, None)


class OperationDispatcher:
    """Maps an operation kind to a single device call."""

    async def dispatch(
        self,
        session: IConsumedThing,
        operation_kind: OperationKind,
        affordance_name: str,
        input_value: Any = None,
        const_input: Tuple[bool, Any] = NO_CONST_INPUT,
    ) -> Any:
        """
        Run an operation and return the resolved output value.

        Args:
            session: Consumed thing to operate on
            operation_kind: Operation to perform
            affordance_name: Target affordance
            input_value: Caller supplied input, ``None`` when absent
            const_input: ``(declared, value)`` pair for the action's constant
                input, as returned by ``get_const_input``

        Returns:
            The output value, ``None`` when the device returned nothing

        Raises:
            MissingInputError: If a property write has no input value
            DispatchError: If the device call or the output resolution fails
        """
        kind = OperationKind.parse(operation_kind)
        if kind == OperationKind.WRITE_PROPERTY and input_value is None:
            raise MissingInputError(affordance_name)

        logger.debug(
            "operation.dispatch.started",
            operation_kind=kind.value,
            affordance=affordance_name,
        )

        try:
            output = await self._invoke(
                session, kind, affordance_name, input_value, const_input
            )
            value = await self._resolve_output(output)
        except Exception as exc:
            logger.warning(
                "operation.dispatch.failed",
                operation_kind=kind.value,
                affordance=affordance_name,
                error=str(exc),
            )
            raise DispatchError(kind.value, affordance_name, exc) from exc

        logger.debug(
            "operation.dispatch.completed",
            operation_kind=kind.value,
            affordance=affordance_name,
            has_value=value is not None,
        )
        return value

    async def _invoke(
        self,
        session: IConsumedThing,
        kind: OperationKind,
        name: str,
        input_value: Any,
        const_input: Tuple[bool, Any],
    ) -> Optional[IInteractionOutput]:
        if kind == OperationKind.READ_PROPERTY:
            return await session.read_property(name)
        if kind == OperationKind.WRITE_PROPERTY:
            return await session.write_property(name, input_value)
        if kind == OperationKind.OBSERVE_PROPERTY:
            return await session.observe_property(name)
        if kind == OperationKind.INVOKE_ACTION:
            has_const, const_value = const_input
            if has_const:
                return await session.invoke_action(name, const_value)
            if input_value is not None:
                return await session.invoke_action(name, input_value)
            return await session.invoke_action(name)
        return await session.subscribe_event(name)

    async def _resolve_output(self, output: Optional[IInteractionOutput]) -> Any:
        if output is None:
            return None
        return await output.value()
