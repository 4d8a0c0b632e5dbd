"""System monitoring page: service health, alert board and backend status."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from ccms_core_lib.errors import REQUEST_ERRORS
from ccms_core_lib.models import SystemAlerts, SystemHealth
from ccms_core_lib.views.base import PageContainer

logger = logging.getLogger(__name__)


class SystemMonitoringPage(PageContainer):
    """Usage:
        page = SystemMonitoringPage(client)
        await page.load()
        page.health.healthy_services, page.alerts.total_active

    Each read fails on its own: a failed read keeps its previous value and
    notifies once per load.
    """

    title_key = "systemMonitoring"

    def __init__(self, client, **kwargs):
        super().__init__(client, **kwargs)
        self.health = SystemHealth()
        self.alerts = SystemAlerts()
        self.blockchain_status: Dict[str, Any] = {}
        self.ml_models: Any = None

    async def load(self) -> None:
        results = await asyncio.gather(
            self._read("health", self.client.get_system_health),
            self._read("alerts", self.client.get_system_alerts),
            self._read("blockchain_status", self.client.get_blockchain_status),
            self._read("ml_models", self.client.get_ml_models_status),
        )
        failures = [error for error in results if error is not None]
        if failures:
            self.surface_failure(failures[0], "loadFailed")

    async def _read(
        self, attribute: str, fetch: Callable[[], Awaitable[Any]]
    ) -> Optional[BaseException]:
        try:
            setattr(self, attribute, await fetch())
        except REQUEST_ERRORS as e:
            logger.error(f"Failed to load system {attribute}: {e}")
            return e
        return None

    async def broadcast_emergency(self, emergency: Mapping[str, Any]) -> Any:
        return await self.mutate(
            lambda: self.client.broadcast_emergency(emergency),
            "alertSent",
            "alertFailed",
        )

    async def send_test_broadcast(self) -> Any:
        """Send the console's test broadcast to the technical roles."""
        return await self.broadcast_emergency(
            {
                "title": self.t("systemTest"),
                "message": self.t("systemTestMessage"),
                "location": "System Monitoring Console",
                "incidentType": "SYSTEM_TEST",
                "priority": "URGENT",
                "requiredRoles": ["SYSTEM_ADMIN", "TECHNICAL_SUPPORT"],
            }
        )
