"""
Operations Router - Presentation Layer

This module defines the FastAPI router receiving operation messages and
exposing the device session cache.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from wot_scripting.application.dtos.operation_dto import (
    OperationMessageDTO,
    OperationOutcomeDTO,
    SessionCacheDTO,
)
from wot_scripting.application.services.session_cache import SessionCache
from wot_scripting.application.use_cases.perform_operation_use_case import (
    PerformOperationUseCase,
)
from wot_scripting.infrastructure.stores.context_store import ContextRegistry
from wot_scripting.shared import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Operations"])


@router.post("/operations", response_model=OperationOutcomeDTO)
@inject
async def perform_operation(
    message: OperationMessageDTO,
    flow_id: str = Query(
        default=ContextRegistry.DEFAULT_FLOW,
        description="Flow whose context receives flow-scoped outputs",
    ),
    perform_operation_use_case: PerformOperationUseCase = Depends(
        Provide["perform_operation_use_case"]
    ),
    context_registry: ContextRegistry = Depends(Provide["context_registry"]),
) -> OperationOutcomeDTO:
    """
    Perform one operation on the thing described by the message.

    Configuration errors, session failures and per-affordance failures are
    reported in the ``errors`` member of the response, not as HTTP errors.

    Args:
        message: Operation message carrying the Thing Description
        flow_id: Flow context used for ``outputVarType=flow``
        perform_operation_use_case: Injected use case
        context_registry: Injected context stores

    Returns:
        OperationOutcomeDTO: Terminal state, emitted messages and errors

    Raises:
        HTTPException: If processing fails unexpectedly
    """
    bind_request_context(flow_id=flow_id)
    logger.info(
        "operations.requested",
        operation_type=message.operation_type,
        filter_mode=message.filter_mode,
    )

    try:
        outcome = await perform_operation_use_case.execute(
            message.to_message(), context_registry.node_context(flow_id)
        )
        logger.info(
            "operations.processed",
            state=outcome.state.value,
            emitted=len(outcome.messages),
        )
        return OperationOutcomeDTO.from_domain(outcome)

    except Exception as e:
        logger.error("operations.processing_failed", error=str(e), exc_info=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to process operation: {str(e)}",
        )
    finally:
        clear_request_context()


@router.get("/sessions", response_model=SessionCacheDTO)
@inject
async def list_sessions(
    session_cache: SessionCache = Depends(Provide["session_cache"]),
) -> SessionCacheDTO:
    """List the things whose device session is currently cached."""
    identities = session_cache.identities()
    return SessionCacheDTO(count=len(identities), identities=identities)


@router.delete("/sessions", response_model=SessionCacheDTO)
@inject
async def clear_sessions(
    session_cache: SessionCache = Depends(Provide["session_cache"]),
) -> SessionCacheDTO:
    """Evict every cached device session."""
    identities = session_cache.identities()
    session_cache.clear()
    logger.info("sessions.cleared", count=len(identities))
    return SessionCacheDTO(count=len(identities), identities=identities)
