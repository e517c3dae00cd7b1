"""
Health domain entities.

Snapshots of the thing runtime, the session cache and the context stores,
aggregated into one service status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class ServiceStatus(str, Enum):
    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class ComponentStatus:
    """State of one in-process component at ``checked_at``."""

    name: str
    status: ServiceStatus
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    status: ServiceStatus
    components: List[ComponentStatus] = field(default_factory=list)

    @property
    def is_serving(self) -> bool:
        """Whether operation requests can currently reach devices."""
        return self.status not in (ServiceStatus.DOWN, ServiceStatus.UNKNOWN)


@dataclass(slots=True)
class ApplicationInfo:
    """Build, uptime and settings summary returned by ``/info``."""

    name: str
    description: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    started_at: datetime
    uptime_seconds: float
    status: ServiceStatus
    components: List[ComponentStatus] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)
