"""Form validation and submission package"""

from ccms_core_lib.forms.schema import (
    CaseForm,
    EvidenceUploadForm,
    FormSchema,
    ValidationResult,
    validate_form,
)
from ccms_core_lib.forms.submission import FormSubmission, SubmissionStatus
from ccms_core_lib.forms.uploads import (
    DEFAULT_ACCEPTED_TYPES,
    MAX_UPLOAD_FILES,
    MAX_UPLOAD_SIZE,
    UploadFile,
    UploadSelection,
    validate_upload,
)

__all__ = [
    # Schemas
    "CaseForm", "EvidenceUploadForm", "FormSchema", "ValidationResult",
    "validate_form",
    # Pipeline
    "FormSubmission", "SubmissionStatus",
    # Uploads
    "DEFAULT_ACCEPTED_TYPES", "MAX_UPLOAD_FILES", "MAX_UPLOAD_SIZE",
    "UploadFile", "UploadSelection", "validate_upload",
]
