"""CCMS Core Library

Shared models, record listing, form pipeline, translations and the backend
client of the Cyber Crime Management System dashboard.
"""

__version__ = "0.1.0"

# Export shared models first (no dependencies)
from ccms_core_lib.models import (
    Case, CaseStatus, CaseType, Complaint, ComplaintStatus, Evidence,
    ActivityLog, FormFieldConfiguration,
)

from ccms_core_lib.config import (
    ClientSettings,
    get_settings,
    reset_settings,
)
from ccms_core_lib.core import Page, filter_records, paginate, search
from ccms_core_lib.i18n import t

# Clients pull in httpx and the form schemas, import them lazily
def __getattr__(name):
    """Lazy import for CaseManagementClient."""
    if name == "CaseManagementClient":
        from ccms_core_lib.clients import CaseManagementClient
        return CaseManagementClient
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

__all__ = [
    # Models
    "Case", "CaseStatus", "CaseType", "Complaint", "ComplaintStatus", "Evidence",
    "ActivityLog", "FormFieldConfiguration",
    # Clients (lazy loaded)
    "CaseManagementClient",
    # Configuration
    "ClientSettings",
    "get_settings",
    "reset_settings",
    # Listing
    "Page", "filter_records", "paginate", "search",
    # Translations
    "t",
]
