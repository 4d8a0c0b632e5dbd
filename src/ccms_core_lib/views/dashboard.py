"""Dashboard page: counters, activity feed, threat feed and active cases."""

import asyncio
import logging
from typing import List

from ccms_core_lib.clients.case_management_client import (
    CASES_PATH,
    DASHBOARD_ACTIVITY_PATH,
    THREATS_PATH,
)
from ccms_core_lib.errors import REQUEST_ERRORS
from ccms_core_lib.models import Case, DashboardMetrics, ThreatIntelligence, ThreatSeverity
from ccms_core_lib.views.base import PageContainer

logger = logging.getLogger(__name__)


class DashboardPage(PageContainer):
    title_key = "dashboard"

    def __init__(self, client, **kwargs):
        super().__init__(client, **kwargs)
        self.metrics = DashboardMetrics()
        self.activity = self.list_view(DASHBOARD_ACTIVITY_PATH, client.get_recent_activity)
        self.threats = self.list_view(THREATS_PATH, client.list_threats)
        self.cases = self.list_view(CASES_PATH, client.list_cases)

    async def load(self) -> None:
        """Fetch every panel concurrently; a failed panel keeps its last data."""
        await asyncio.gather(
            self.load_metrics(),
            self.activity.load(),
            self.threats.load(),
            self.cases.load(),
        )

    async def load_metrics(self) -> DashboardMetrics:
        try:
            self.metrics = await self.client.get_dashboard_metrics()
        except REQUEST_ERRORS as e:
            logger.error(f"Failed to load dashboard metrics: {e}")
            self.surface_failure(e, "loadFailed")
        return self.metrics

    def activity_feed(self) -> List[str]:
        return [log.describe() for log in self.activity.records]

    def active_cases(self) -> List[Case]:
        return [case for case in self.cases.records if case.is_active]

    def critical_threats(self) -> List[ThreatIntelligence]:
        return [
            threat
            for threat in self.threats.records
            if threat.severity in (ThreatSeverity.HIGH, ThreatSeverity.CRITICAL)
        ]
