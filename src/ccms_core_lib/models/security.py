"""Security and role configuration models.

Role hierarchy (level 1 is the most senior):

    1  SP          Superintendent of Police
    2  ADDL_SP     Additional SP
    3  DYSP        Deputy Superintendent of Police
    4  INSPECTOR   Inspector
    5  ASI         Assistant Sub Inspector
    6  HC          Head Constable
    7  CONSTABLE   Constable
"""

from typing import Dict, List, Optional

from pydantic import Field

from ccms_core_lib.models.common import CCMSModel, DisplayEnum


class SettingCategory(DisplayEnum):
    """Groups shown as tabs on the security settings screen"""

    AUTH = "auth"
    SESSION = "session"
    PASSWORD = "password"
    AUDIT = "audit"
    ACCESS = "access"


class SecuritySetting(CCMSModel):
    """Key/value security setting (``GET /api/security/settings``)"""

    id: Optional[int] = None
    key: str
    value: str
    category: str = SettingCategory.AUTH.value
    description: Optional[str] = None


class Role(CCMSModel):
    """Role record (``GET /api/security/roles``)"""

    id: int
    name: str
    display_name: Optional[str] = None
    level: int = Field(..., ge=1)
    permissions: List[str] = Field(default_factory=list)

    def outranks(self, other: "Role") -> bool:
        """Lower level numbers are more senior."""
        return self.level < other.level


class Permission(CCMSModel):
    """Permission record (``GET /api/security/permissions``)"""

    id: int
    name: str
    resource: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None


ROLE_HIERARCHY: List[Role] = [
    Role(id=1, name="SP", display_name="Superintendent of Police", level=1),
    Role(id=2, name="ADDL_SP", display_name="Additional SP", level=2),
    Role(id=3, name="DYSP", display_name="Deputy Superintendent of Police", level=3),
    Role(id=4, name="INSPECTOR", display_name="Inspector", level=4),
    Role(id=5, name="ASI", display_name="Assistant Sub Inspector", level=5),
    Role(id=6, name="HC", display_name="Head Constable", level=6),
    Role(id=7, name="CONSTABLE", display_name="Constable", level=7),
]

_ROLES_BY_NAME: Dict[str, Role] = {role.name: role for role in ROLE_HIERARCHY}


def get_role(name: str) -> Role:
    """Look up a hierarchy role by name (case-insensitive).

    Raises:
        KeyError: If the name is not one of the seven ranks
    """
    return _ROLES_BY_NAME[name.upper()]


def group_settings(settings: List[SecuritySetting]) -> Dict[str, List[SecuritySetting]]:
    """Group settings by category, keeping backend order inside each group."""
    grouped: Dict[str, List[SecuritySetting]] = {}
    for setting in settings:
        grouped.setdefault(setting.category, []).append(setting)
    return grouped
