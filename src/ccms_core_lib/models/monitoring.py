"""System monitoring reads: service health and the alert board.

Blockchain and ML model status are shown as the backend sends them and
have no model here.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ccms_core_lib.models.common import CCMSModel, DisplayEnum


class ServiceState(DisplayEnum):
    HEALTHY = "HEALTHY"
    DEGRADED = "DEGRADED"
    DOWN = "DOWN"


class ServiceHealth(CCMSModel):
    name: str
    status: str = ServiceState.HEALTHY.value
    response_time: Optional[float] = Field(None, description="Milliseconds")

    @property
    def is_healthy(self) -> bool:
        return self.status == ServiceState.HEALTHY


class SystemHealth(CCMSModel):
    """``GET /api/system/health``; absent counters are 0."""

    system_load: float = 0.0
    alerts_last_hour: int = 0
    critical_alerts: int = 0
    services: List[ServiceHealth] = Field(default_factory=list)

    @property
    def healthy_services(self) -> int:
        return sum(1 for service in self.services if service.is_healthy)


class SystemAlerts(CCMSModel):
    """``GET /api/alerts/dashboard/system``, grouped by severity."""

    total_active: int = 0
    critical: List[Dict[str, Any]] = Field(default_factory=list)
    high: List[Dict[str, Any]] = Field(default_factory=list)
    medium: List[Dict[str, Any]] = Field(default_factory=list)
