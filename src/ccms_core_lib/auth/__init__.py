"""Access utilities for the CCMS dashboard.

This module provides the request context attached to backend calls and the
single policy deciding how unauthorized responses are handled.
"""

from ccms_core_lib.auth.access_control import (
    AccessPolicy,
    LoginRedirectPolicy,
    PublicAccessPolicy,
)
from ccms_core_lib.auth.request_context import RequestContext

__all__ = [
    "AccessPolicy",
    "LoginRedirectPolicy",
    "PublicAccessPolicy",
    "RequestContext",
]
