"""Dynamic form configuration models.

Administrators edit the fields of each dashboard form through the master
configuration console. A form type owns an ordered set of field
configurations.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import Field

from ccms_core_lib.models.common import CCMSModel, DisplayEnum


class FormType(DisplayEnum):
    """Forms whose fields are configurable"""

    CASE_FORM = "case_form"
    COMPLAINT_FORM = "complaint_form"
    EVIDENCE_FORM = "evidence_form"
    VICTIM_SUPPORT_FORM = "victim_support_form"
    THREAT_INTELLIGENCE_FORM = "threat_intelligence_form"

    @property
    def label(self) -> str:
        return _FORM_TYPE_LABELS[self]


_FORM_TYPE_LABELS = {
    FormType.CASE_FORM: "Case Registration Form",
    FormType.COMPLAINT_FORM: "Complaint Form",
    FormType.EVIDENCE_FORM: "Evidence Collection Form",
    FormType.VICTIM_SUPPORT_FORM: "Victim Support Form",
    FormType.THREAT_INTELLIGENCE_FORM: "Threat Intelligence Form",
}


class FieldType(DisplayEnum):
    """Input widget of a configurable field"""

    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DATE = "date"
    DATETIME = "datetime"
    NUMBER = "number"
    EMAIL = "email"
    PHONE = "phone"
    FILE = "file"

    @property
    def has_options(self) -> bool:
        """Whether the widget picks from ``field_options``"""
        return self in (FieldType.SELECT, FieldType.MULTISELECT, FieldType.RADIO)


class FormFieldConfiguration(CCMSModel):
    """One configured field (``GET /api/config/forms/:type``)"""

    id: int
    form_type: FormType
    field_name: str = Field(..., min_length=1, description="Machine key")
    field_label: str = Field(..., description="Display text")
    field_type: FieldType = FieldType.TEXT
    is_required: bool = False
    is_visible: bool = True
    display_order: int = 0
    field_options: List[str] = Field(default_factory=list)
    validation: Dict[str, Any] = Field(default_factory=dict)


class FormFieldDraft(CCMSModel):
    """Body for adding (all fields) or patching (set fields only) a field.

    Defaults mirror the add-field dialog: a visible, optional text input.
    """

    form_type: Optional[FormType] = None
    field_name: Optional[str] = Field(None, min_length=1)
    field_label: Optional[str] = None
    field_type: FieldType = FieldType.TEXT
    is_required: bool = False
    is_visible: bool = True
    display_order: int = 0
    field_options: List[str] = Field(default_factory=list)
    validation: Dict[str, Any] = Field(default_factory=dict)


def ordered_fields(
    fields: Iterable[FormFieldConfiguration], visible_only: bool = False
) -> List[FormFieldConfiguration]:
    """Sort fields for rendering: display order first, then id."""
    selected = [f for f in fields if f.is_visible or not visible_only]
    return sorted(selected, key=lambda f: (f.display_order, f.id))
