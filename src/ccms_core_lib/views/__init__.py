"""Headless page containers of the CCMS dashboard.

Each page holds the state a UI renders (records, page slices, loading
flags, form state, notifications) and drives the backend through a
CaseManagementClient.
"""

from ccms_core_lib.views.notifications import Notification, NotificationVariant, Notifier
from ccms_core_lib.views.list_view import ListView, surface_failure
from ccms_core_lib.views.base import PageContainer
from ccms_core_lib.views.cases import CaseManagementPage
from ccms_core_lib.views.evidence import EvidencePage
from ccms_core_lib.views.victim_support import VictimSupportPage
from ccms_core_lib.views.dashboard import DashboardPage
from ccms_core_lib.views.master_config import MasterConfigPage
from ccms_core_lib.views.security import SecuritySettingsPage
from ccms_core_lib.views.ai_tools import AiToolsPage
from ccms_core_lib.views.system_monitoring import SystemMonitoringPage

__all__ = [
    # Notifications
    "Notification", "NotificationVariant", "Notifier",
    # Lists
    "ListView", "surface_failure",
    # Pages
    "PageContainer", "CaseManagementPage", "EvidencePage", "VictimSupportPage",
    "DashboardPage", "MasterConfigPage", "SecuritySettingsPage", "AiToolsPage",
    "SystemMonitoringPage",
]
