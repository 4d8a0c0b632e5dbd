"""Declarative form schemas.

A form schema is a Pydantic model whose field constraints are the form's
rules. ``validate_form()`` runs every constraint on every field and collects
all violations, so the user sees each problem in one pass.

Human-readable messages are declared per field and per Pydantic error type in
``error_messages``; violations without a declared message fall back to the
Pydantic message.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ccms_core_lib.models.case import CasePriority, CaseStatus, CaseType
from ccms_core_lib.models.common import utc_now
from ccms_core_lib.models.evidence import EvidenceType

S = TypeVar("S", bound="FormSchema")


class FormSchema(BaseModel):
    """Base class for form schemas.

    Class attributes:
        error_messages: field -> {pydantic error type -> message}
        form_defaults: values the form starts with and is reset to
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    error_messages: ClassVar[Dict[str, Dict[str, str]]] = {}
    form_defaults: ClassVar[Dict[str, Any]] = {}

    def to_payload(self) -> Dict[str, Any]:
        """Request body for the backend (camelCase keys, unset optionals dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def message_for(cls, field_name: str, error_type: str, default: str) -> str:
        return cls.error_messages.get(field_name, {}).get(error_type, default)


@dataclass
class ValidationResult(Generic[S]):
    """Outcome of validating form input.

    Attributes:
        data: Validated schema instance, None when any constraint failed
        errors: field name -> messages; empty when valid
    """

    data: Optional[S] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_form(schema: Type[S], values: Mapping[str, Any]) -> ValidationResult[S]:
    """Validate ``values`` against ``schema``, collecting every violation.

    Args:
        schema: FormSchema subclass
        values: Raw field values keyed by field name (or camelCase alias)

    Returns:
        ValidationResult with either ``data`` or ``errors`` populated
    """
    try:
        return ValidationResult(data=schema.model_validate(dict(values)))
    except ValidationError as exc:
        alias_to_name = {
            (info.alias or name): name for name, info in schema.model_fields.items()
        }
        errors: Dict[str, List[str]] = {}
        for error in exc.errors():
            loc = error.get("loc") or ("__root__",)
            field_name = alias_to_name.get(str(loc[0]), str(loc[0]))
            message = schema.message_for(field_name, error["type"], error["msg"])
            messages = errors.setdefault(field_name, [])
            if message not in messages:
                messages.append(message)
        return ValidationResult(errors=errors)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


class CaseForm(FormSchema):
    """Case registration form.

    Constraints:
        title: 1-200 characters
        description: 10-5000 characters
        type: one of CaseType
        priority: one of CasePriority (default medium)
        location: optional, up to 500 characters
        status: optional, one of CaseStatus (default open)
    """

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=10, max_length=5000)
    type: CaseType
    priority: CasePriority = CasePriority.MEDIUM
    location: Optional[str] = Field(None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    status: CaseStatus = CaseStatus.OPEN
    user_id: Optional[str] = None

    error_messages: ClassVar[Dict[str, Dict[str, str]]] = {
        "title": {
            "missing": "Title is required",
            "string_too_short": "Title is required",
            "string_too_long": "Title too long",
        },
        "description": {
            "missing": "Description must be at least 10 characters",
            "string_too_short": "Description must be at least 10 characters",
            "string_too_long": "Description too long",
        },
        "type": {
            "missing": "Case type is required",
            "enum": "Case type is required",
        },
        "priority": {"enum": "Priority must be low, medium, high or critical"},
        "location": {"string_too_long": "Location too long"},
        "status": {"enum": "Status must be open, in_progress, resolved or closed"},
    }
    form_defaults: ClassVar[Dict[str, Any]] = {
        "title": "",
        "description": "",
        "type": "",
        "priority": CasePriority.MEDIUM.value,
        "location": "",
    }

    @field_validator("location", mode="before")
    @classmethod
    def blank_location(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        """An absent or blank status means a new, open case."""
        return _blank_to_none(v) or CaseStatus.OPEN


class EvidenceUploadForm(FormSchema):
    """Metadata submitted alongside an evidence file."""

    case_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    type: EvidenceType

    error_messages: ClassVar[Dict[str, Dict[str, str]]] = {
        "case_id": {
            "missing": "Select a case first",
            "int_parsing": "Select a case first",
            "greater_than": "Select a case first",
        },
        "title": {
            "missing": "Title is required",
            "string_too_short": "Title is required",
            "string_too_long": "Title too long",
        },
        "type": {
            "missing": "Evidence type is required",
            "enum": "Evidence type is required",
        },
    }
    form_defaults: ClassVar[Dict[str, Any]] = {
        "title": "",
        "description": "",
        "type": "",
    }

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, v: Any) -> Any:
        return _blank_to_none(v)
