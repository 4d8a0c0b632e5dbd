"""Complaint data models.

Complaints are public-facing incident reports submitted by victims. Staff move
them through review; promotion of a complaint into a Case is not offered by
the dashboard.
"""

from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import Field

from ccms_core_lib.models.case import CasePriority
from ccms_core_lib.models.common import CCMSModel, DisplayEnum, utc_now


class ComplaintStatus(DisplayEnum):
    """Complaint review status"""

    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    ASSIGNED = "assigned"
    RESOLVED = "resolved"

    @property
    def is_pending(self) -> bool:
        return self == ComplaintStatus.SUBMITTED


# AI categories that are handled as high priority by victim support staff
HIGH_PRIORITY_CATEGORIES = frozenset({"fraud", "harassment", "identity_theft"})


class Complaint(CCMSModel):
    """Victim complaint as returned by ``GET /api/complaints``"""

    search_fields: ClassVar[Tuple[str, ...]] = (
        "complaint_number",
        "victim_name",
        "incident_type",
    )

    id: int
    complaint_number: str = Field(..., frozen=True)
    victim_name: str
    victim_email: Optional[str] = None
    victim_phone: Optional[str] = None
    incident_type: str
    description: str = ""
    incident_date: Optional[datetime] = None
    status: ComplaintStatus = ComplaintStatus.SUBMITTED
    ai_category: Optional[str] = Field(
        None, description="Category assigned by the external classifier"
    )
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def priority(self) -> CasePriority:
        """Support priority derived from the AI category."""
        if self.ai_category in HIGH_PRIORITY_CATEGORIES:
            return CasePriority.HIGH
        return CasePriority.MEDIUM


class ComplaintUpdate(CCMSModel):
    """Body of ``PUT /api/complaints/:id``; unset fields are not sent."""

    status: Optional[ComplaintStatus] = None
    ai_category: Optional[str] = None
