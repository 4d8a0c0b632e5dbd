"""Case data models.

A Case is the tracked investigation record for a reported cyber-crime
incident. Cases are created through the case registration form, mutated by
status/assignee updates and never deleted by the dashboard.
"""

from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import Field

from ccms_core_lib.models.common import CCMSModel, DisplayEnum, utc_now


class CaseType(DisplayEnum):
    """Crime categories a case can be registered under."""

    HACKING = "hacking"
    JOB_FRAUD = "job_fraud"
    MATRIMONIAL_FRAUD = "matrimonial_fraud"
    RANSOMWARE = "ransomware"
    PHISHING = "phishing"
    IDENTITY_THEFT = "identity_theft"
    FINANCIAL_FRAUD = "financial_fraud"
    CYBER_STALKING = "cyber_stalking"
    ONLINE_HARASSMENT = "online_harassment"
    DATA_BREACH = "data_breach"

    @property
    def description(self) -> str:
        return _CASE_TYPE_DESCRIPTIONS[self]


_CASE_TYPE_DESCRIPTIONS = {
    CaseType.HACKING: "Unauthorized access to systems/data",
    CaseType.JOB_FRAUD: "Deceptive employment schemes",
    CaseType.MATRIMONIAL_FRAUD: "Fake matrimonial profiles",
    CaseType.RANSOMWARE: "Malware locking data for ransom",
    CaseType.PHISHING: "Fraudulent information gathering",
    CaseType.IDENTITY_THEFT: "Unauthorized use of personal info",
    CaseType.FINANCIAL_FRAUD: "Fraudulent financial transactions",
    CaseType.CYBER_STALKING: "Online harassment and stalking",
    CaseType.ONLINE_HARASSMENT: "Digital bullying and abuse",
    CaseType.DATA_BREACH: "Unauthorized data access",
}


class CasePriority(DisplayEnum):
    """Case priority, lowest to highest."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """0 for LOW up to 3 for CRITICAL"""
        return list(CasePriority).index(self)


class CaseStatus(DisplayEnum):
    """
    Case lifecycle status.

    Lifecycle Flow:
      OPEN → IN_PROGRESS → RESOLVED → CLOSED

    Staff may move a case between any two states; the dashboard does not
    enforce an order.
    """

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

    @property
    def is_active(self) -> bool:
        """Check if case still needs work"""
        return self in (CaseStatus.OPEN, CaseStatus.IN_PROGRESS)


class Case(CCMSModel):
    """Investigation record as returned by ``GET /api/cases``.

    ``case_number`` is assigned once by the backend and cannot be changed on
    the model afterwards.
    """

    search_fields: ClassVar[Tuple[str, ...]] = ("title", "case_number", "type")

    id: int = Field(..., description="Backend identifier")
    case_number: str = Field(
        ..., frozen=True, description="Unique human-facing case number"
    )
    title: str = Field(..., description="Case title")
    description: str = Field(default="", description="Free-text description")
    type: CaseType = Field(..., description="Crime category")
    priority: CasePriority = Field(default=CasePriority.MEDIUM)
    status: CaseStatus = Field(default=CaseStatus.OPEN)
    assigned_to: Optional[str] = Field(None, description="Assigned officer")
    location: Optional[str] = Field(None, description="Incident location")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def is_high_priority(self) -> bool:
        return self.priority in (CasePriority.HIGH, CasePriority.CRITICAL)
