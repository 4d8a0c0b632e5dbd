"""AI investigation tools page: analyses, threat intelligence and alerts.

Every action is skipped when one of its required inputs is blank. The last
result of each analysis panel is kept for display.
"""

from typing import List, Optional

from ccms_core_lib.clients import ExternalServiceResult, ExternalServices, http_external_services
from ccms_core_lib.views.base import PageContainer


def _lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


class AiToolsPage(PageContainer):
    title_key = "aiTools"

    def __init__(self, client, *, services: Optional[ExternalServices] = None, **kwargs):
        super().__init__(client, **kwargs)
        self.services = services or http_external_services(client)
        self.advanced_result: Optional[ExternalServiceResult] = None
        self.pattern_result: Optional[ExternalServiceResult] = None
        self.intelligence_result: Optional[ExternalServiceResult] = None

    async def load(self) -> None:
        """Nothing is fetched until a tool is used."""
        pass

    async def run_advanced_analysis(
        self, evidence_data: str, case_context: str
    ) -> Optional[ExternalServiceResult]:
        if not evidence_data.strip() or not case_context.strip():
            return None
        result = await self.mutate(
            lambda: self.services.analyze_advanced(evidence_data, case_context),
            "analysisComplete",
            "analysisFailed",
        )
        if result is not None:
            self.advanced_result = result
        return result

    async def run_pattern_analysis(
        self, current_case: str
    ) -> Optional[ExternalServiceResult]:
        if not current_case.strip():
            return None
        result = await self.mutate(
            lambda: self.services.analyze_patterns(current_case),
            "analysisComplete",
            "analysisFailed",
        )
        if result is not None:
            self.pattern_result = result
        return result

    async def lookup_cybercrime(self, crime_type: str) -> Optional[ExternalServiceResult]:
        if not crime_type.strip():
            return None
        result = await self.mutate(
            lambda: self.services.lookup_cybercrime(crime_type.strip()),
            "analysisComplete",
            "analysisFailed",
        )
        if result is not None:
            self.intelligence_result = result
        return result

    async def analyze_threat(self, indicators: str) -> Optional[ExternalServiceResult]:
        """Analyze threat indicators given one per line."""
        if not indicators.strip():
            return None
        result = await self.mutate(
            lambda: self.services.analyze_threat(_lines(indicators)),
            "analysisComplete",
            "analysisFailed",
        )
        if result is not None:
            self.intelligence_result = result
        return result

    async def send_sms_alert(
        self, to: str, message: str, priority: str = "medium"
    ) -> Optional[ExternalServiceResult]:
        if not to.strip() or not message.strip():
            return None
        return await self.mutate(
            lambda: self.services.send_sms_alert(to, message, priority),
            "alertSent",
            "alertFailed",
        )

    async def send_emergency_alert(
        self, incident: str, location: str, officer_phones: str
    ) -> Optional[ExternalServiceResult]:
        """Alert officers about an incident; phone numbers one per line."""
        if not incident.strip() or not location.strip() or not officer_phones.strip():
            return None
        return await self.mutate(
            lambda: self.services.send_emergency_alert(
                incident, location, _lines(officer_phones)
            ),
            "alertSent",
            "alertFailed",
        )
