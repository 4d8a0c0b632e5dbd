"""Evidence page: case selection, evidence list, uploads and analyses."""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from ccms_core_lib.clients import ExternalServiceResult, ExternalServices, http_external_services
from ccms_core_lib.clients.case_management_client import CASES_PATH, case_evidence_path
from ccms_core_lib.errors import REQUEST_ERRORS, FormValidationError
from ccms_core_lib.forms import (
    EvidenceUploadForm,
    FormSubmission,
    UploadFile,
    UploadSelection,
    validate_upload,
)
from ccms_core_lib.models import Evidence
from ccms_core_lib.views.base import PageContainer
from ccms_core_lib.views.list_view import ListView

logger = logging.getLogger(__name__)


class EvidencePage(PageContainer):
    """Evidence management for one selected case at a time.

    Picked files are checked against the upload rules as they are added;
    submitting the upload form sends every selected file with the form's
    metadata and refreshes the case's evidence list.
    """

    title_key = "evidenceAnalysis"

    def __init__(self, client, *, services: Optional[ExternalServices] = None, **kwargs):
        super().__init__(client, **kwargs)
        self.services = services or http_external_services(client)
        self.cases = self.list_view(CASES_PATH, client.list_cases)
        self.selected_case_id: Optional[int] = None
        self.evidence: Optional[ListView] = None
        self.files: List[UploadFile] = []
        self.upload_form: FormSubmission[EvidenceUploadForm] = FormSubmission(
            EvidenceUploadForm,
            self._upload,
            success_display_seconds=self.settings.success_display_seconds,
            error_reporter=self.reporter,
            name="evidence_upload_form",
        )
        self.upload_form.subscribe(self._keep_selected_case)

    def _keep_selected_case(self, form: FormSubmission) -> None:
        # A successful upload resets the values; stay on the selected case
        if self.selected_case_id is not None and form.succeeded:
            form.values["case_id"] = self.selected_case_id

    async def load(self) -> None:
        await self.cases.load()
        if self.evidence is not None:
            await self.evidence.load()

    async def select_case(self, case_id: int) -> List[Evidence]:
        """Show the evidence of ``case_id`` and target uploads at it."""
        self.selected_case_id = case_id
        self.upload_form.set_value("case_id", case_id)
        self.evidence = self.list_view(
            case_evidence_path(case_id),
            lambda: self.client.list_case_evidence(case_id),
        )
        return await self.evidence.load()

    # ------------------------------------------------------------------
    # File selection
    # ------------------------------------------------------------------

    def add_files(self, files: Sequence[UploadFile]) -> UploadSelection:
        selection = validate_upload(files, already_selected=len(self.files))
        if selection.error:
            self.notifier.error(selection.error)
        else:
            for filename, reason in selection.rejected:
                self.notifier.error(f"{filename}: {reason}")
        self.files.extend(selection.accepted)
        return selection

    def remove_file(self, index: int) -> UploadFile:
        return self.files.pop(index)

    async def _upload(self, form: EvidenceUploadForm) -> List[Evidence]:
        if not self.files:
            raise FormValidationError({"file": ["Select a file to upload"]})

        uploaded: List[Evidence] = []
        try:
            for upload in list(self.files):
                uploaded.append(await self.client.upload_evidence(form, upload))
                self.files.remove(upload)
        except REQUEST_ERRORS as e:
            self.surface_failure(e, "evidenceUploadFailed")
            raise

        logger.info(f"Uploaded {len(uploaded)} evidence file(s) to case {form.case_id}")
        self.notifier.success(self.t("evidenceUploaded"))
        if self.evidence is not None and self.selected_case_id == form.case_id:
            await self.evidence.load()
        return uploaded

    # ------------------------------------------------------------------
    # Analyses
    # ------------------------------------------------------------------

    async def analyze_evidence(
        self, evidence: Mapping[str, Any]
    ) -> Optional[ExternalServiceResult]:
        return await self.mutate(
            lambda: self.services.analyze_evidence(evidence),
            "analysisComplete",
            "analysisFailed",
        )

    async def secure_on_blockchain(
        self, evidence: Evidence
    ) -> Optional[ExternalServiceResult]:
        return await self.mutate(
            lambda: self.services.store_on_blockchain(evidence.id, evidence.case_id),
            "analysisComplete",
            "analysisFailed",
        )

    async def verify_quantum(self, evidence: Evidence) -> Optional[ExternalServiceResult]:
        return await self.mutate(
            lambda: self.services.verify_quantum(evidence.id),
            "analysisComplete",
            "analysisFailed",
        )

    async def analyze_sentiment(self, text: Any) -> Optional[ExternalServiceResult]:
        return await self.mutate(
            lambda: self.services.analyze_sentiment(text),
            "analysisComplete",
            "analysisFailed",
        )
