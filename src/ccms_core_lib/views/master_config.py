"""Master configuration page: per-form field definitions."""

from collections import Counter
from typing import Dict, List, Optional, Union

from ccms_core_lib.clients.case_management_client import FORM_CONFIG_PATH
from ccms_core_lib.models import FormFieldConfiguration, FormFieldDraft, FormType
from ccms_core_lib.views.base import PageContainer
from ccms_core_lib.views.list_view import ListView


class MasterConfigPage(PageContainer):
    """Field configuration of the selected form.

    Every write invalidates the cached form configuration, so the selected
    form's fields are re-fetched after each add/update/delete.
    """

    title_key = "masterConfig"

    def __init__(self, client, *, form_type: FormType = FormType.CASE_FORM, **kwargs):
        super().__init__(client, **kwargs)
        self.form_types: List[FormType] = list(FormType)
        self.all_fields = self.list_view(FORM_CONFIG_PATH, client.list_form_configurations)
        self.selected_form_type = form_type
        self.fields = self._fields_view(form_type)

    def _fields_view(self, form_type: FormType) -> ListView:
        return self.list_view(
            f"{FORM_CONFIG_PATH}/{form_type.value}",
            lambda: self.client.get_form_fields(form_type),
            fields=("field_name", "field_label", "field_type"),
        )

    async def load(self) -> None:
        await self.all_fields.load()
        await self.fields.load()

    async def select_form(
        self, form_type: Union[FormType, str]
    ) -> List[FormFieldConfiguration]:
        self.selected_form_type = FormType(form_type)
        self.fields = self._fields_view(self.selected_form_type)
        return await self.fields.load()

    def field_counts(self) -> Dict[FormType, int]:
        counts = Counter(field.form_type for field in self.all_fields.records)
        return {form_type: counts.get(form_type, 0) for form_type in self.form_types}

    async def add_field(self, draft: FormFieldDraft) -> Optional[FormFieldConfiguration]:
        return await self.mutate(
            lambda: self.client.add_form_field(self.selected_form_type, draft),
            "fieldSaved",
            "fieldSaveFailed",
            reload=self.fields,
        )

    async def update_field(
        self, field_id: int, draft: FormFieldDraft
    ) -> Optional[FormFieldConfiguration]:
        return await self.mutate(
            lambda: self.client.update_form_field(field_id, draft),
            "fieldSaved",
            "fieldSaveFailed",
            reload=self.fields,
        )

    async def delete_field(self, field_id: int) -> bool:
        deleted = await self.mutate(
            lambda: self.client.delete_form_field(field_id),
            "fieldSaved",
            "fieldSaveFailed",
            reload=self.fields,
        )
        return bool(deleted)
