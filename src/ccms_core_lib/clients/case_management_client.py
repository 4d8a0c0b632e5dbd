"""HTTP client for the CCMS backend."""

from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from ccms_core_lib.auth import RequestContext
from ccms_core_lib.clients.base import BaseServiceClient
from ccms_core_lib.clients.query_cache import QueryCache
from ccms_core_lib.config import ClientSettings, get_settings
from ccms_core_lib.forms.schema import CaseForm, EvidenceUploadForm
from ccms_core_lib.forms.uploads import UploadFile
from ccms_core_lib.models import (
    ActivityLog,
    Case,
    Complaint,
    ComplaintStatus,
    ComplaintUpdate,
    DashboardMetrics,
    Evidence,
    FormFieldConfiguration,
    FormFieldDraft,
    FormType,
    Permission,
    Role,
    SecuritySetting,
    SystemAlerts,
    SystemHealth,
    ThreatIntelligence,
    ordered_fields,
)

CASES_PATH = "/api/cases"
EVIDENCE_PATH = "/api/evidence"
COMPLAINTS_PATH = "/api/complaints"
DASHBOARD_METRICS_PATH = "/api/dashboard/metrics"
DASHBOARD_ACTIVITY_PATH = "/api/dashboard/activity"
THREATS_PATH = "/api/threats"
FORM_CONFIG_PATH = "/api/config/forms"
SECURITY_SETTINGS_PATH = "/api/security/settings"
SECURITY_ROLES_PATH = "/api/security/roles"
SECURITY_PERMISSIONS_PATH = "/api/security/permissions"
ERRORS_PATH = "/api/errors"
SYSTEM_HEALTH_PATH = "/api/system/health"
SYSTEM_ALERTS_PATH = "/api/alerts/dashboard/system"
BLOCKCHAIN_STATUS_PATH = "/api/blockchain/status"
ML_MODELS_STATUS_PATH = "/api/ml/models/status"
EMERGENCY_BROADCAST_PATH = "/api/alerts/emergency-broadcast"


def case_evidence_path(case_id: int) -> str:
    return f"{CASES_PATH}/{case_id}/evidence"


class CaseManagementClient(BaseServiceClient):
    """Async HTTP client for the CCMS backend REST API.

    This client provides a Pythonic interface to the dashboard's backend,
    handling serialization/deserialization, read caching and cache
    invalidation after writes.

    Usage:
        client = CaseManagementClient(base_url="http://localhost:5000")
        cases = await client.list_cases()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 30.0,
        *,
        max_retries: int = 3,
        retry_wait: float = 0.5,
        context: Optional[RequestContext] = None,
        cache: Optional[QueryCache] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize client.

        Args:
            base_url: Base URL of the backend (default: http://localhost:5000)
            timeout: Request timeout in seconds (default: 30.0)
            max_retries: Attempts for read requests (default: 3)
            retry_wait: Initial backoff between read attempts in seconds
            context: User context sent with every request
            cache: Shared read cache
            client: Persistent AsyncClient owned by the caller
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            retry_wait=retry_wait,
            context=context,
            cache=cache,
            client=client,
        )

    @classmethod
    def from_settings(
        cls, settings: Optional[ClientSettings] = None, **kwargs: Any
    ) -> "CaseManagementClient":
        """Build a client from ClientSettings (default: process-wide settings)."""
        settings = settings or get_settings()
        return cls(
            base_url=settings.api_base_url,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            **kwargs,
        )

    # ------------------------------------------------------------
    # Cases
    # ------------------------------------------------------------

    async def list_cases(self) -> List[Case]:
        """Get all cases.

        Returns:
            Cases in backend order

        Raises:
            httpx.HTTPStatusError: On an error response
        """
        data = await self._get_json(CASES_PATH)
        return [Case.model_validate(item) for item in data or []]

    async def create_case(self, form: Union[CaseForm, Mapping[str, Any]]) -> Case:
        """Create new case.

        Args:
            form: Validated case form, or raw values validated here

        Returns:
            Created case with its assigned case number

        Raises:
            pydantic.ValidationError: If raw values violate the case form
            httpx.HTTPStatusError: If the backend rejects the case
        """
        if not isinstance(form, CaseForm):
            form = CaseForm.model_validate(dict(form))
        data = await self._send(
            "POST", CASES_PATH, json=form.to_payload(), invalidates=[CASES_PATH]
        )
        return Case.model_validate(data)

    # ------------------------------------------------------------
    # Evidence
    # ------------------------------------------------------------

    async def list_case_evidence(self, case_id: int) -> List[Evidence]:
        """Get evidence attached to a case."""
        data = await self._get_json(case_evidence_path(case_id))
        return [Evidence.model_validate(item) for item in data or []]

    async def upload_evidence(
        self, form: EvidenceUploadForm, upload: UploadFile
    ) -> Evidence:
        """Upload an evidence file with its metadata (multipart).

        Args:
            form: Validated evidence metadata, including the owning case
            upload: File to send

        Returns:
            Stored evidence, including the hash recorded by the backend
        """
        fields: Dict[str, Any] = {
            "caseId": str(form.case_id),
            "title": form.title,
            "type": form.type.value,
        }
        if form.description:
            fields["description"] = form.description

        data = await self._send(
            "POST",
            EVIDENCE_PATH,
            data=fields,
            files={"file": (upload.filename, upload.content, upload.content_type)},
            invalidates=[case_evidence_path(form.case_id)],
        )
        return Evidence.model_validate(data)

    # ------------------------------------------------------------
    # Complaints
    # ------------------------------------------------------------

    async def list_complaints(self) -> List[Complaint]:
        data = await self._get_json(COMPLAINTS_PATH)
        return [Complaint.model_validate(item) for item in data or []]

    async def update_complaint(
        self,
        complaint_id: int,
        update: Union[ComplaintUpdate, ComplaintStatus, str],
    ) -> Optional[Complaint]:
        """Update complaint status (or other staff-editable fields).

        Args:
            complaint_id: Complaint identifier
            update: ComplaintUpdate, or just the new status

        Returns:
            Updated complaint, or None when the backend sends no body
        """
        if not isinstance(update, ComplaintUpdate):
            update = ComplaintUpdate(status=ComplaintStatus(update))
        data = await self._send(
            "PUT",
            f"{COMPLAINTS_PATH}/{complaint_id}",
            json=update.to_api(exclude_none=True),
            invalidates=[COMPLAINTS_PATH],
        )
        return Complaint.model_validate(data) if data else None

    # ------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------

    async def get_dashboard_metrics(self) -> DashboardMetrics:
        data = await self._get_json(DASHBOARD_METRICS_PATH)
        return DashboardMetrics.model_validate(data or {})

    async def get_recent_activity(self) -> List[ActivityLog]:
        data = await self._get_json(DASHBOARD_ACTIVITY_PATH)
        return [ActivityLog.model_validate(item) for item in data or []]

    async def list_threats(self) -> List[ThreatIntelligence]:
        data = await self._get_json(THREATS_PATH)
        return [ThreatIntelligence.model_validate(item) for item in data or []]

    # ------------------------------------------------------------
    # Form configuration
    # ------------------------------------------------------------

    async def list_form_configurations(self) -> List[FormFieldConfiguration]:
        """Get configured fields of every form."""
        data = await self._get_json(FORM_CONFIG_PATH)
        return [FormFieldConfiguration.model_validate(item) for item in data or []]

    async def get_form_fields(
        self, form_type: Union[FormType, str]
    ) -> List[FormFieldConfiguration]:
        """Get one form's fields in display order."""
        form_type = FormType(form_type)
        data = await self._get_json(f"{FORM_CONFIG_PATH}/{form_type.value}")
        return ordered_fields(
            FormFieldConfiguration.model_validate(item) for item in data or []
        )

    async def add_form_field(
        self, form_type: Union[FormType, str], draft: FormFieldDraft
    ) -> FormFieldConfiguration:
        """Add a field to a form."""
        payload = draft.to_api()
        payload["formType"] = FormType(form_type).value
        data = await self._send(
            "POST",
            f"{FORM_CONFIG_PATH}/fields",
            json=payload,
            invalidates=[FORM_CONFIG_PATH],
        )
        return FormFieldConfiguration.model_validate(data)

    async def update_form_field(
        self, field_id: int, draft: FormFieldDraft
    ) -> FormFieldConfiguration:
        """Patch a field; only values explicitly set on ``draft`` are sent."""
        data = await self._send(
            "PATCH",
            f"{FORM_CONFIG_PATH}/fields/{field_id}",
            json=draft.to_api(exclude_unset=True),
            invalidates=[FORM_CONFIG_PATH],
        )
        return FormFieldConfiguration.model_validate(data)

    async def delete_form_field(self, field_id: int) -> bool:
        """Delete a field.

        Returns:
            True if deleted successfully
        """
        await self._send(
            "DELETE",
            f"{FORM_CONFIG_PATH}/fields/{field_id}",
            invalidates=[FORM_CONFIG_PATH],
        )
        return True

    # ------------------------------------------------------------
    # Security
    # ------------------------------------------------------------

    async def get_security_settings(self) -> List[SecuritySetting]:
        data = await self._get_json(SECURITY_SETTINGS_PATH)
        return [SecuritySetting.model_validate(item) for item in data or []]

    async def list_roles(self) -> List[Role]:
        data = await self._get_json(SECURITY_ROLES_PATH)
        return [Role.model_validate(item) for item in data or []]

    async def list_permissions(self) -> List[Permission]:
        data = await self._get_json(SECURITY_PERMISSIONS_PATH)
        return [Permission.model_validate(item) for item in data or []]

    async def update_security_setting(self, key: str, value: str) -> SecuritySetting:
        data = await self._send(
            "PATCH",
            f"{SECURITY_SETTINGS_PATH}/{key}",
            json={"value": value},
            invalidates=[SECURITY_SETTINGS_PATH],
        )
        return SecuritySetting.model_validate(data)

    # ------------------------------------------------------------
    # System monitoring
    # ------------------------------------------------------------
    # Live status: always fetched, never served from the cache

    async def get_system_health(self) -> SystemHealth:
        data = await self._get_json(SYSTEM_HEALTH_PATH, use_cache=False)
        return SystemHealth.model_validate(data or {})

    async def get_system_alerts(self) -> SystemAlerts:
        data = await self._get_json(SYSTEM_ALERTS_PATH, use_cache=False)
        return SystemAlerts.model_validate(data or {})

    async def get_blockchain_status(self) -> Dict[str, Any]:
        return await self._get_json(BLOCKCHAIN_STATUS_PATH, use_cache=False) or {}

    async def get_ml_models_status(self) -> Any:
        return await self._get_json(ML_MODELS_STATUS_PATH, use_cache=False)

    async def broadcast_emergency(self, emergency: Mapping[str, Any]) -> Any:
        """Send an emergency alert to every required role."""
        return await self._send(
            "POST", EMERGENCY_BROADCAST_PATH, json={"emergency": dict(emergency)}
        )

    # ------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------

    async def report_error(self, report: Mapping[str, Any]) -> None:
        """Send a client error report (``POST /api/errors``)."""
        await self._send("POST", ERRORS_PATH, json=dict(report), decode=False)
