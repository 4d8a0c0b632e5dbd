"""Common model helpers shared by every CCMS record type.

- CCMSModel: base model speaking the backend's camelCase JSON
- utc_now(), parse_utc_timestamp(): timestamp helpers
- format_status(): display form of snake_case status values
"""

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CCMSModel(BaseModel):
    """Base for records exchanged with the CCMS backend.

    The backend serializes fields in camelCase (``caseNumber``,
    ``createdAt``); Python code uses snake_case. Both spellings are accepted
    on input, unknown keys are ignored.

    ``search_fields`` names the attributes the list views search against.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    search_fields: ClassVar[Tuple[str, ...]] = ()

    def to_api(self, **kwargs) -> dict:
        """Serialize for a request body (camelCase keys, JSON-safe values)."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


class DisplayEnum(str, Enum):
    """String enum with a human readable label."""

    @property
    def label(self) -> str:
        return format_status(self.value)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_utc_timestamp(timestamp_str: str) -> datetime:
    """Parse a backend timestamp into a timezone-aware UTC datetime.

    Handles:
    - '2025-10-17T04:02:59.123Z' (JavaScript toISOString output)
    - '2025-10-17T04:02:59+00:00'
    - '2025-10-17T04:02:59' (naive, assumed UTC)
    """
    if timestamp_str.endswith("Z"):
        timestamp_str = timestamp_str[:-1]
    dt = datetime.fromisoformat(timestamp_str)
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


def format_status(status: str) -> str:
    """Format a snake_case status for display.

    >>> format_status("in_progress")
    'In Progress'
    """
    return " ".join(word.capitalize() for word in status.split("_"))
