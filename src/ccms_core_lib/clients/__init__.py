"""HTTP clients for the CCMS backend.

This package provides the REST client used by every dashboard page, the
read cache it shares across pages, and the external analysis services.
"""

from ccms_core_lib.clients.base import BaseServiceClient
from ccms_core_lib.clients.case_management_client import CaseManagementClient
from ccms_core_lib.clients.external import (
    EXTERNAL_SERVICE_METHODS,
    EXTERNAL_SERVICE_PATHS,
    ExternalService,
    ExternalServiceResult,
    ExternalServices,
    HttpExternalService,
    StaticExternalService,
    http_external_services,
    static_external_services,
)
from ccms_core_lib.clients.query_cache import CacheEntry, QueryCache

__all__ = [
    "BaseServiceClient",
    "CaseManagementClient",
    "CacheEntry",
    "QueryCache",
    "EXTERNAL_SERVICE_METHODS",
    "EXTERNAL_SERVICE_PATHS",
    "ExternalService",
    "ExternalServiceResult",
    "ExternalServices",
    "HttpExternalService",
    "StaticExternalService",
    "http_external_services",
    "static_external_services",
]
