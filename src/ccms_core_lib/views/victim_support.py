"""Victim support page: complaint queue and status updates."""

from typing import Dict, Optional, Union

from ccms_core_lib.clients.case_management_client import COMPLAINTS_PATH
from ccms_core_lib.models import Complaint, ComplaintStatus
from ccms_core_lib.views.base import PageContainer


class VictimSupportPage(PageContainer):
    title_key = "victimSupport"

    def __init__(self, client, **kwargs):
        super().__init__(client, **kwargs)
        self.complaints = self.list_view(COMPLAINTS_PATH, client.list_complaints)

    async def load(self) -> None:
        await self.complaints.load()

    def status_counts(self) -> Dict[ComplaintStatus, int]:
        """Number of complaints per status; every status is present."""
        counts = {status: 0 for status in ComplaintStatus}
        for complaint in self.complaints.records:
            counts[complaint.status] += 1
        return counts

    @property
    def pending_count(self) -> int:
        return sum(1 for c in self.complaints.records if c.status.is_pending)

    async def update_status(
        self, complaint_id: int, status: Union[ComplaintStatus, str]
    ) -> Optional[Complaint]:
        return await self.mutate(
            lambda: self.client.update_complaint(complaint_id, ComplaintStatus(status)),
            "complaintUpdated",
            "complaintUpdateFailed",
            reload=self.complaints,
        )
