"""Activity log entries for the dashboard feed.

The activity log is append-only: entries are never edited, so the model is
frozen once parsed.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import ConfigDict, Field, field_validator

from ccms_core_lib.models.common import CCMSModel, DisplayEnum, utc_now


class ActivityAction(DisplayEnum):
    """Known action kinds; the backend may send others."""

    CREATE_CASE = "create_case"
    UPDATE_CASE = "update_case"
    UPLOAD_EVIDENCE = "upload_evidence"
    CREATE_THREAT = "create_threat"


class ActivityLog(CCMSModel):
    """One entry of ``GET /api/dashboard/activity``"""

    model_config = ConfigDict(frozen=True)

    id: int
    action: str = Field(..., description="Action kind, e.g. create_case")
    entity_id: Optional[Union[int, str]] = Field(None, description="Related entity")
    details: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("details", mode="before")
    @classmethod
    def null_details(cls, v: Any) -> Any:
        """The feed tolerates entries sent with ``"details": null``."""
        return {} if v is None else v

    @property
    def known_action(self) -> Optional[ActivityAction]:
        try:
            return ActivityAction(self.action)
        except ValueError:
            return None

    def describe(self) -> str:
        """One-line feed text for this entry."""
        action = self.known_action
        if action == ActivityAction.CREATE_CASE:
            return f"New case created: {self.details.get('title') or 'Untitled'}"
        if action == ActivityAction.UPDATE_CASE:
            return f"Case updated: {self.entity_id}"
        if action == ActivityAction.UPLOAD_EVIDENCE:
            return f"Evidence uploaded for case {self.details.get('caseId')}"
        if action == ActivityAction.CREATE_THREAT:
            return f"New threat detected: {self.details.get('title') or 'Unknown'}"
        return f"Activity: {self.action}"
