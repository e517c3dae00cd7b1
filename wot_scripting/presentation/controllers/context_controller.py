"""Context endpoints exposing the flow and global stores."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from wot_scripting.application.dtos.operation_dto import ContextSnapshotDTO
from wot_scripting.infrastructure.stores.context_store import ContextRegistry

router = APIRouter(prefix="/context", tags=["Context"])


@router.get("/global", response_model=ContextSnapshotDTO)
@inject
async def get_global_context(
    context_registry: ContextRegistry = Depends(Provide["context_registry"]),
) -> ContextSnapshotDTO:
    """Return every value stored in the global context."""
    return ContextSnapshotDTO(
        scope="global", values=context_registry.global_store.snapshot()
    )


@router.get("/flow/{flow_id}", response_model=ContextSnapshotDTO)
@inject
async def get_flow_context(
    flow_id: str,
    context_registry: ContextRegistry = Depends(Provide["context_registry"]),
) -> ContextSnapshotDTO:
    """Return every value stored in the context of one flow."""
    if flow_id not in context_registry.flow_ids():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Flow {flow_id} has no context",
        )
    return ContextSnapshotDTO(
        scope="flow",
        flow_id=flow_id,
        values=context_registry.flow(flow_id).snapshot(),
    )
