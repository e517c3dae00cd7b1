"""DTOs for system health and application info responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from wot_scripting.domain.entities.health import (
    ApplicationInfo,
    ComponentStatus,
    ServiceStatus,
    SystemHealth,
)


class ComponentStatusDTO(BaseModel):
    """Serializable representation of a component health check."""

    name: str = Field(description="Component identifier")
    status: ServiceStatus = Field(description="Status of the component")
    message: Optional[str] = Field(
        default=None, description="Human readable status note"
    )
    checked_at: datetime = Field(description="Timestamp of the check")
    details: Dict[str, Any] = Field(
        default_factory=dict, description="Additional metrics"
    )

    @classmethod
    def from_domain(cls, status: ComponentStatus) -> "ComponentStatusDTO":
        return cls(
            name=status.name,
            status=status.status,
            message=status.message,
            checked_at=status.checked_at,
            details=status.details,
        )


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    status: ServiceStatus = Field(description="Overall system status")
    serving: bool = Field(description="Whether operations can reach devices")
    components: List[ComponentStatusDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            status=health.status,
            serving=health.is_serving,
            components=[
                ComponentStatusDTO.from_domain(component)
                for component in health.components
            ],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "serving": True,
                "components": [
                    {
                        "name": "thing_runtime",
                        "status": "up",
                        "message": "Thing runtime started",
                        "checked_at": "2024-09-09T12:00:00Z",
                        "details": {"schemes": ["http", "https"]},
                    },
                    {
                        "name": "session_cache",
                        "status": "up",
                        "message": None,
                        "checked_at": "2024-09-09T12:00:00Z",
                        "details": {"size": 2},
                    },
                ],
            }
        }
    }


class ApplicationInfoDTO(BaseModel):
    """DTO representing metadata returned by /info."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    components: List[ComponentStatusDTO] = Field(default_factory=list)
    extras: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, info: ApplicationInfo) -> "ApplicationInfoDTO":
        return cls(
            name=info.name,
            description=info.description,
            version=info.version,
            environment=info.environment,
            git_commit=info.git_commit,
            build_time=info.build_time,
            started_at=info.started_at,
            uptime_seconds=info.uptime_seconds,
            status=info.status,
            components=[
                ComponentStatusDTO.from_domain(component)
                for component in info.components
            ],
            extras=info.extras,
        )
