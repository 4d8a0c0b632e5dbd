"""Evidence file selection checks.

Rules of the evidence upload panel:
- at most ``max_files`` files per upload (default 5), counting files already
  selected; a batch that would exceed it is rejected as a whole
- each file at most ``max_size`` bytes (default 10 MiB); larger files are
  dropped from the batch
- only the accepted MIME types; other files are dropped from the batch
"""

import logging
import mimetypes
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ccms_core_lib.models.evidence import compute_content_hash, format_file_size

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE = 10 * 1024 * 1024
MAX_UPLOAD_FILES = 5
DEFAULT_ACCEPTED_TYPES: Tuple[str, ...] = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "application/pdf",
    "text/plain",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)


@dataclass
class UploadFile:
    """A file picked for upload."""

    filename: str
    content: bytes
    content_type: Optional[str] = None

    def __post_init__(self):
        if not self.content_type:
            guessed, _ = mimetypes.guess_type(self.filename)
            self.content_type = guessed or "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def content_hash(self) -> str:
        return compute_content_hash(self.content)


@dataclass
class UploadSelection:
    """Result of checking a batch of picked files.

    Attributes:
        accepted: Files that may be added to the selection
        rejected: (filename, reason) for each dropped file
        error: Batch-level error; when set, nothing was accepted
    """

    accepted: List[UploadFile] = field(default_factory=list)
    rejected: List[Tuple[str, str]] = field(default_factory=list)
    error: Optional[str] = None


def validate_upload(
    files: Sequence[UploadFile],
    already_selected: int = 0,
    max_size: int = MAX_UPLOAD_SIZE,
    max_files: int = MAX_UPLOAD_FILES,
    accepted_types: Sequence[str] = DEFAULT_ACCEPTED_TYPES,
) -> UploadSelection:
    """Check a batch of picked files against the upload panel rules."""
    selection = UploadSelection()

    for upload in files:
        if upload.content_type not in accepted_types:
            selection.rejected.append(
                (upload.filename, f"Unsupported file type {upload.content_type}")
            )
        elif upload.size > max_size:
            selection.rejected.append(
                (upload.filename, f"File exceeds {format_file_size(max_size)}")
            )
        else:
            selection.accepted.append(upload)

    if already_selected + len(selection.accepted) > max_files:
        logger.warning(
            f"Upload batch rejected: {already_selected + len(selection.accepted)} "
            f"files exceed the limit of {max_files}"
        )
        selection.rejected.extend(
            (upload.filename, "Too many files") for upload in selection.accepted
        )
        selection.accepted = []
        selection.error = f"Maximum {max_files} files allowed"

    return selection
