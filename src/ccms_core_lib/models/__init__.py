"""
Shared data models for the CCMS dashboard.

This package provides the Pydantic models exchanged with the CCMS backend.
All records are owned by the backend; the client only holds request-scoped
copies.
"""

from ccms_core_lib.models.common import (
    CCMSModel,
    DisplayEnum,
    format_status,
    parse_utc_timestamp,
    utc_now,
)
from ccms_core_lib.models.case import (
    Case,
    CasePriority,
    CaseStatus,
    CaseType,
)
from ccms_core_lib.models.evidence import (
    Evidence,
    EvidenceType,
    compute_content_hash,
    format_file_size,
)
from ccms_core_lib.models.complaint import (
    Complaint,
    ComplaintStatus,
    ComplaintUpdate,
    HIGH_PRIORITY_CATEGORIES,
)
from ccms_core_lib.models.activity import ActivityAction, ActivityLog
from ccms_core_lib.models.form_config import (
    FieldType,
    FormFieldConfiguration,
    FormFieldDraft,
    FormType,
    ordered_fields,
)
from ccms_core_lib.models.security import (
    Permission,
    Role,
    ROLE_HIERARCHY,
    SecuritySetting,
    SettingCategory,
    get_role,
    group_settings,
)
from ccms_core_lib.models.dashboard import (
    DashboardMetrics,
    ThreatIntelligence,
    ThreatSeverity,
)
from ccms_core_lib.models.monitoring import (
    ServiceHealth,
    ServiceState,
    SystemAlerts,
    SystemHealth,
)

__all__ = [
    # Common
    "CCMSModel", "DisplayEnum", "format_status", "parse_utc_timestamp", "utc_now",
    # Cases
    "Case", "CasePriority", "CaseStatus", "CaseType",
    # Evidence
    "Evidence", "EvidenceType", "compute_content_hash", "format_file_size",
    # Complaints
    "Complaint", "ComplaintStatus", "ComplaintUpdate", "HIGH_PRIORITY_CATEGORIES",
    # Activity
    "ActivityAction", "ActivityLog",
    # Form configuration
    "FieldType", "FormFieldConfiguration", "FormFieldDraft", "FormType",
    "ordered_fields",
    # Security
    "Permission", "Role", "ROLE_HIERARCHY", "SecuritySetting", "SettingCategory",
    "get_role", "group_settings",
    # Dashboard
    "DashboardMetrics", "ThreatIntelligence", "ThreatSeverity",
    # System monitoring
    "ServiceHealth", "ServiceState", "SystemAlerts", "SystemHealth",
]
