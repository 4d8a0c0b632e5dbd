"""Case management page: active cases table and the new case form."""

import logging
from typing import Optional

from ccms_core_lib.clients.case_management_client import CASES_PATH
from ccms_core_lib.errors import REQUEST_ERRORS
from ccms_core_lib.forms import CaseForm, FormSubmission
from ccms_core_lib.models import Case
from ccms_core_lib.views.base import PageContainer

logger = logging.getLogger(__name__)


class CaseManagementPage(PageContainer):
    """Usage:
        page = CaseManagementPage(client)
        await page.load()
        page.case_form.update(title="UPI fraud", description="...", type="financial_fraud")
        await page.case_form.submit()
    """

    title_key = "caseManagement"

    def __init__(self, client, **kwargs):
        super().__init__(client, **kwargs)
        self.cases = self.list_view(CASES_PATH, client.list_cases)
        self.case_form: FormSubmission[CaseForm] = FormSubmission(
            CaseForm,
            self._create_case,
            success_display_seconds=self.settings.success_display_seconds,
            error_reporter=self.reporter,
            name="case_form",
        )

    async def load(self) -> None:
        await self.cases.load()

    async def _create_case(self, form: CaseForm) -> Case:
        try:
            case = await self.client.create_case(form)
        except REQUEST_ERRORS as e:
            self.surface_failure(e, "caseCreateFailed")
            raise

        logger.info(f"Created case {case.case_number}")
        self.notifier.success(self.t("caseCreated"))
        await self.cases.load()
        return case

    def find_case(self, case_id: int) -> Optional[Case]:
        return next((case for case in self.cases.records if case.id == case_id), None)
