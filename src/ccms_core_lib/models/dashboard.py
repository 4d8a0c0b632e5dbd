"""Dashboard aggregate and threat feed models."""

from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import Field

from ccms_core_lib.models.common import CCMSModel, DisplayEnum, utc_now


class DashboardMetrics(CCMSModel):
    """Counters from ``GET /api/dashboard/metrics``; absent counters are 0."""

    active_cases: int = 0
    resolved_today: int = 0
    high_priority: int = 0
    ai_detections: int = 0


class ThreatSeverity(DisplayEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ThreatIntelligence(CCMSModel):
    """Entry of the threat intelligence feed (``GET /api/threats``)"""

    search_fields: ClassVar[Tuple[str, ...]] = ("title", "source", "severity")

    id: int
    title: str
    description: str = ""
    severity: ThreatSeverity = ThreatSeverity.MEDIUM
    source: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
