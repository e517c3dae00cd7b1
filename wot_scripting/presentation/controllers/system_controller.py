"""
System Router - Presentation Layer

Liveness and metadata endpoints. ``/health`` answers 503 while the thing
runtime cannot serve operations, so it can back a readiness check.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from wot_scripting.application.dtos.health_dto import (
    ApplicationInfoDTO,
    SystemHealthDTO,
)
from wot_scripting.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from wot_scripting.domain.entities.health import ServiceStatus
from wot_scripting.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get(
    "/health",
    response_model=SystemHealthDTO,
    responses={503: {"model": SystemHealthDTO}},
)
@inject
async def health(
    response: Response,
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> SystemHealthDTO:
    """Report the thing runtime, session cache and context stores."""
    try:
        system_health = await get_health_status_use_case.execute()
    except Exception as exc:
        logger.error("health.check.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to evaluate service health",
        ) from exc

    if not system_health.serving:
        down = [
            component.name
            for component in system_health.components
            if component.status is not ServiceStatus.UP
        ]
        logger.warning(
            "health.check.not_serving",
            status=system_health.status.value,
            components=down,
        )
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return system_health


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide["get_application_info_use_case"]
    ),
) -> ApplicationInfoDTO:
    """Return build metadata, uptime and the effective node settings."""
    started_at = getattr(request.app.state, "started_at", None)
    try:
        return await get_application_info_use_case.execute(started_at)
    except Exception as exc:
        logger.error("info.fetch.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to retrieve application info",
        ) from exc
