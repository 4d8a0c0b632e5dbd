"""Request context sent with every backend call.

The dashboard currently runs with public access, so a context may carry no
user at all. When a user is known, its identity and roles travel as
X-User-* headers and the correlation ID as X-Correlation-ID.
"""

import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ccms_core_lib.models.security import ROLE_HIERARCHY

logger = logging.getLogger(__name__)

_RANK_BY_ROLE = {role.name: role.level for role in ROLE_HIERARCHY}


@dataclass
class RequestContext:
    """User request context for outgoing requests.

    Attributes:
        user_id: User ID for the X-User-ID header (None for public access)
        user_email: User email for the X-User-Email header
        user_roles: Role names for the X-User-Roles header (JSON array)
        correlation_id: Correlation ID for request tracing
    """

    user_id: Optional[str] = None
    user_email: Optional[str] = None
    user_roles: List[str] = field(default_factory=list)
    correlation_id: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "RequestContext":
        return cls()

    def with_correlation_id(self) -> "RequestContext":
        """Copy of this context carrying a fresh correlation ID."""
        return RequestContext(
            user_id=self.user_id,
            user_email=self.user_email,
            user_roles=list(self.user_roles),
            correlation_id=str(uuid.uuid4()),
        )

    @property
    def rank(self) -> Optional[int]:
        """Most senior hierarchy level among the user's roles (1 = SP).

        Roles outside the police hierarchy are ignored; None when the user
        holds none of the seven ranks.
        """
        levels = [
            _RANK_BY_ROLE[role.upper()]
            for role in self.user_roles
            if role.upper() in _RANK_BY_ROLE
        ]
        return min(levels) if levels else None

    def headers(self) -> Dict[str, str]:
        """X-User-* and X-Correlation-ID headers for this context."""
        headers: Dict[str, str] = {}

        if self.user_id:
            headers["X-User-ID"] = self.user_id

        if self.user_email:
            headers["X-User-Email"] = self.user_email

        if self.user_roles:
            headers["X-User-Roles"] = json.dumps(self.user_roles)

        if self.correlation_id:
            headers["X-Correlation-ID"] = self.correlation_id

        return headers
