"""
Evidence data models.

Every evidence item belongs to exactly one case. The content hash is
computed once when the file is uploaded and is displayed as integrity
metadata; it is never recomputed or replaced by the dashboard.
"""

import hashlib
from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import Field

from ccms_core_lib.models.common import CCMSModel, DisplayEnum, utc_now


# =============================================================================
# Enums
# =============================================================================


class EvidenceType(DisplayEnum):
    """Kinds of evidence artifacts"""
    DOCUMENT = "document"   # PDFs, Word files, text
    IMAGE = "image"         # Screenshots, photos
    VIDEO = "video"         # Recordings
    DIGITAL = "digital"     # Disk images, logs, device dumps
    OTHER = "other"


# =============================================================================
# Data Models
# =============================================================================


def compute_content_hash(content: bytes) -> str:
    """SHA-256 hex digest used as the evidence integrity hash."""
    return hashlib.sha256(content).hexdigest()


class Evidence(CCMSModel):
    """Evidence item attached to a case (``GET /api/cases/:id/evidence``)"""

    search_fields: ClassVar[Tuple[str, ...]] = ("title", "type", "hash")

    id: int = Field(..., description="Backend identifier")
    case_id: int = Field(..., description="Owning case")
    title: str = Field(..., description="Evidence title")
    description: Optional[str] = Field(None, description="Optional notes")
    type: EvidenceType = Field(default=EvidenceType.OTHER)
    file_size: int = Field(default=0, ge=0, description="File size in bytes")
    hash: str = Field(
        default="", frozen=True, description="Content hash recorded at upload"
    )
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def short_hash(self) -> str:
        """First 16 characters of the hash, as shown in evidence tables"""
        return self.hash[:16]

    def verify_content(self, content: bytes) -> bool:
        """Check that ``content`` still matches the hash recorded at upload.

        Returns:
            False when no hash was recorded or the digests differ
        """
        if not self.hash:
            return False
        return compute_content_hash(content) == self.hash.lower()


def format_file_size(size_bytes: int) -> str:
    """Human readable file size (``1536`` -> ``'1.5 KB'``)"""
    if size_bytes == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    size = float(size_bytes)
    index = 0
    while size >= 1024 and index < len(units) - 1:
        size /= 1024
        index += 1
    return f"{round(size, 2):g} {units[index]}"
