"""Output Router - writes operation results to the requested scope."""

from __future__ import annotations

from typing import Any, Dict

from wot_scripting.domain.entities.operation import OutputScope, OutputTarget
from wot_scripting.domain.ports.context_store import NodeContext
from wot_scripting.shared import get_logger

logger = get_logger(__name__)

PAYLOAD_FIELD = "payload"


class OutputRouter:
    """Routes a result to the message, the flow context or the global context."""

    def route(
        self,
        message: Dict[str, Any],
        result: Any,
        target: OutputTarget,
        context: NodeContext,
    ) -> None:
        """
        Write ``result`` according to ``target``.

        A ``None`` result is not written anywhere.

        Raises:
            InvalidOutputScopeError: If the target scope is unknown
        """
        if result is None:
            logger.debug("output.route.skipped", variable=target.variable)
            return

        scope = OutputScope.parse(target.scope)
        if scope == OutputScope.MSG:
            message[target.variable] = result
        elif scope == OutputScope.FLOW:
            context.flow.set(target.variable, result)
        else:
            context.global_.set(target.variable, result)

        if target.mirror_to_payload:
            message[PAYLOAD_FIELD] = result

        logger.debug(
            "output.route.written",
            scope=scope.value,
            variable=target.variable,
            mirrored=target.mirror_to_payload,
        )
