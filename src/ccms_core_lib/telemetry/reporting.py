"""Client error reporting to ``POST /api/errors``.

Reports are only sent from production builds. Telemetry is best-effort: a
failure to deliver a report is logged and never raised into the caller.
"""

import logging
import traceback
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import Field

from ccms_core_lib.config import get_settings
from ccms_core_lib.models import CCMSModel, utc_now

if TYPE_CHECKING:
    from ccms_core_lib.clients import CaseManagementClient

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "ccms-core-lib"


class ErrorReport(CCMSModel):
    """One uncaught client error"""

    message: str
    stack: Optional[str] = None
    component_stack: Optional[str] = None
    additional_info: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)
    user_agent: str = DEFAULT_USER_AGENT
    url: Optional[str] = None

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        *,
        component: Optional[str] = None,
        additional_info: Optional[str] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        url: Optional[str] = None,
    ) -> "ErrorReport":
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return cls(
            message=str(exc) or exc.__class__.__name__,
            stack=stack,
            component_stack=component,
            additional_info=additional_info,
            user_agent=user_agent,
            url=url,
        )


class ErrorReporter:
    """Sends ErrorReports through the backend client.

    Usage:
        reporter = ErrorReporter(client)
        await reporter.report(exc, component="CaseManagementPage")
    """

    def __init__(
        self,
        client: "CaseManagementClient",
        enabled: Optional[bool] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        url: Optional[str] = None,
    ):
        """Initialize reporter.

        Args:
            client: Backend client used to POST reports
            enabled: Send reports (default: only in production)
            user_agent: Reported user agent
            url: Reported location of the hosting application
        """
        self.client = client
        self.enabled = get_settings().is_production if enabled is None else enabled
        self.user_agent = user_agent
        self.url = url

    async def report(
        self,
        exc: BaseException,
        component: Optional[str] = None,
        additional_info: Optional[str] = None,
    ) -> bool:
        """Report an error.

        Returns:
            True if the report was delivered, False if disabled or failed
        """
        logger.error(f"Error caught in {component or 'client'}: {exc}")
        if not self.enabled:
            return False

        report = ErrorReport.from_exception(
            exc,
            component=component,
            additional_info=additional_info,
            user_agent=self.user_agent,
            url=self.url,
        )
        try:
            await self.client.report_error(report.to_api(exclude_none=True))
        except Exception as e:
            logger.warning(f"Failed to log error: {e}")
            return False
        return True
