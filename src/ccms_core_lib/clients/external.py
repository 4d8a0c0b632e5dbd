"""External analysis, intelligence and alerting services.

Digital-evidence analysis, blockchain storage, quantum-resistant
verification, ML sentiment analysis, advanced and pattern analysis, threat
intelligence and SMS/emergency alerts are reached through the backend.
Each is an ``ExternalService``; ``HttpExternalService`` posts to the
backend route and ``StaticExternalService`` answers from a canned payload
for local development and tests.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from ccms_core_lib.clients.base import BaseServiceClient
from ccms_core_lib.models import utc_now

logger = logging.getLogger(__name__)

EXTERNAL_SERVICE_PATHS: Dict[str, str] = {
    "digital_evidence": "/api/analysis/digital-evidence",
    "blockchain": "/api/blockchain/evidence",
    "quantum_verification": "/api/security/quantum/verify",
    "sentiment": "/api/ml/analyze-sentiment",
    "advanced_analysis": "/api/analysis/advanced",
    "pattern_analysis": "/api/analysis/patterns",
    "cybercrime_intelligence": "/api/intelligence/cybercrime/{crime_type}",
    "threat_intelligence": "/api/intelligence/threat",
    "sms_alerts": "/api/alerts/sms",
    "emergency_alerts": "/api/alerts/emergency",
}

# Services read with GET; the payload fills the path template
EXTERNAL_SERVICE_METHODS: Dict[str, str] = {
    "cybercrime_intelligence": "GET",
}


class ExternalServiceResult(BaseModel):
    """Response of an external service; any JSON object is accepted."""

    model_config = ConfigDict(extra="allow")

    status: Any = None
    message: Any = None

    @property
    def payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ExternalService(ABC):
    """A named analysis capability"""

    name: str

    @abstractmethod
    async def call(self, payload: Mapping[str, Any]) -> ExternalServiceResult:
        """Invoke the service.

        Raises:
            httpx.HTTPStatusError: If the backend rejects the request
        """
        pass


class HttpExternalService(ExternalService):
    """Service reached through a backend route.

    POST services send the payload as the JSON body. GET services send no
    body; the payload fills the placeholders of ``path`` instead.
    """

    def __init__(
        self, client: BaseServiceClient, name: str, path: str, method: str = "POST"
    ):
        self.client = client
        self.name = name
        self.path = path
        self.method = method

    async def call(self, payload: Mapping[str, Any]) -> ExternalServiceResult:
        logger.info(f"Calling external service {self.name} at {self.path}")
        if self.method == "GET":
            path = self.path.format(
                **{key: quote(str(value), safe="") for key, value in payload.items()}
            )
            data = await self.client.get_json(path, use_cache=False)
        else:
            data = await self.client.post_json(self.path, dict(payload))
        if not isinstance(data, dict):
            data = {"result": data}
        return ExternalServiceResult.model_validate(data)


class StaticExternalService(ExternalService):
    """Fake service answering every call with the same payload.

    Calls are recorded in ``calls`` for inspection.
    """

    def __init__(self, name: str, response: Optional[Mapping[str, Any]] = None):
        self.name = name
        self.response = dict(response or {"status": "ok"})
        self.calls: List[Dict[str, Any]] = []

    async def call(self, payload: Mapping[str, Any]) -> ExternalServiceResult:
        self.calls.append(dict(payload))
        return ExternalServiceResult.model_validate(self.response)


@dataclass
class ExternalServices:
    """Every external service, one field per ``EXTERNAL_SERVICE_PATHS`` entry."""

    digital_evidence: ExternalService
    blockchain: ExternalService
    quantum_verification: ExternalService
    sentiment: ExternalService
    advanced_analysis: ExternalService
    pattern_analysis: ExternalService
    cybercrime_intelligence: ExternalService
    threat_intelligence: ExternalService
    sms_alerts: ExternalService
    emergency_alerts: ExternalService

    async def analyze_evidence(
        self, evidence: Mapping[str, Any]
    ) -> ExternalServiceResult:
        return await self.digital_evidence.call(evidence)

    async def store_on_blockchain(
        self, evidence_id: int, case_id: int
    ) -> ExternalServiceResult:
        return await self.blockchain.call(
            {
                "evidenceId": evidence_id,
                "caseId": case_id,
                "metadata": {
                    "timestamp": utc_now().isoformat(),
                    "action": "evidence_secured",
                },
            }
        )

    async def verify_quantum(self, evidence_id: int) -> ExternalServiceResult:
        return await self.quantum_verification.call({"evidenceId": evidence_id})

    async def analyze_sentiment(self, text: Any) -> ExternalServiceResult:
        return await self.sentiment.call({"textData": text})

    async def analyze_advanced(
        self, evidence_data: str, case_context: str
    ) -> ExternalServiceResult:
        return await self.advanced_analysis.call(
            {"evidenceData": evidence_data, "caseContext": case_context}
        )

    async def analyze_patterns(
        self, current_case: str, historical_cases: Sequence[str] = ()
    ) -> ExternalServiceResult:
        return await self.pattern_analysis.call(
            {"currentCase": current_case, "historicalCases": list(historical_cases)}
        )

    async def lookup_cybercrime(self, crime_type: str) -> ExternalServiceResult:
        return await self.cybercrime_intelligence.call({"crime_type": crime_type})

    async def analyze_threat(self, indicators: Sequence[str]) -> ExternalServiceResult:
        return await self.threat_intelligence.call({"indicators": list(indicators)})

    async def send_sms_alert(
        self, to: str, message: str, priority: str = "medium"
    ) -> ExternalServiceResult:
        return await self.sms_alerts.call(
            {"to": to, "message": message, "priority": priority}
        )

    async def send_emergency_alert(
        self, incident: str, location: str, officer_phones: Sequence[str]
    ) -> ExternalServiceResult:
        return await self.emergency_alerts.call(
            {
                "incident": incident,
                "location": location,
                "officerPhones": list(officer_phones),
            }
        )


def http_external_services(client: BaseServiceClient) -> ExternalServices:
    """Bind every external service to its backend route on ``client``."""
    return ExternalServices(
        **{
            name: HttpExternalService(
                client, name, path, EXTERNAL_SERVICE_METHODS.get(name, "POST")
            )
            for name, path in EXTERNAL_SERVICE_PATHS.items()
        }
    )


def static_external_services(
    responses: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> ExternalServices:
    """Fake services, optionally with a canned response per service name."""
    responses = responses or {}
    return ExternalServices(
        **{
            name: StaticExternalService(name, responses.get(name))
            for name in EXTERNAL_SERVICE_PATHS
        }
    )
