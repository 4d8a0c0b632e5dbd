"""Security settings page: settings by category, roles and permissions."""

from typing import Dict, List, Optional, Tuple

from ccms_core_lib.clients.case_management_client import (
    SECURITY_PERMISSIONS_PATH,
    SECURITY_ROLES_PATH,
    SECURITY_SETTINGS_PATH,
)
from ccms_core_lib.models import ROLE_HIERARCHY, Role, SecuritySetting, group_settings
from ccms_core_lib.views.base import PageContainer


class SecuritySettingsPage(PageContainer):
    title_key = "securitySettings"

    def __init__(self, client, **kwargs):
        super().__init__(client, **kwargs)
        self.settings_view = self.list_view(
            SECURITY_SETTINGS_PATH, client.get_security_settings, fields=("key", "category")
        )
        self.roles = self.list_view(
            SECURITY_ROLES_PATH, client.list_roles, fields=("name", "display_name")
        )
        self.permissions = self.list_view(
            SECURITY_PERMISSIONS_PATH, client.list_permissions, fields=("name", "resource")
        )

    @property
    def role_hierarchy(self) -> Tuple[Role, ...]:
        return tuple(ROLE_HIERARCHY)

    async def load(self) -> None:
        await self.settings_view.load()
        await self.roles.load()
        await self.permissions.load()

    def settings_by_category(self) -> Dict[str, List[SecuritySetting]]:
        return group_settings(self.settings_view.records)

    async def update_setting(self, key: str, value: str) -> Optional[SecuritySetting]:
        return await self.mutate(
            lambda: self.client.update_security_setting(key, value),
            "settingUpdated",
            "settingUpdateFailed",
            reload=self.settings_view,
        )
