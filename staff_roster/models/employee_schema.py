"""
Employee Data Schema Definition
Single source of truth for the employee record shape, the configurable field
schema and the compiled-in defaults.

Python attributes are snake_case; persisted JSON and form keys use the aliases.
"""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from staff_roster.models.reference_data import (
    DESIGNATIONS,
    EMPLOYEE_TYPES,
    INITIAL_DESIGNATION_MAPPING,
    STAFF_CATEGORIES,
    STATUSES,
)

ListKey = Literal["designations", "employeeTypes", "statuses", "staffCategories"]
LIST_KEYS = ("designations", "employeeTypes", "statuses", "staffCategories")

# Form keys stored on the record itself; any other key is an extension field
CORE_KEYS = (
    "id",
    "name",
    "unitCode",
    "status",
    "type",
    "designation",
    "phone",
    "email",
    "joinedDate",
)

STAFF_CATEGORY_KEY = "staffCategory"


class FieldInputType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    TEL = "tel"
    DATE = "date"
    SELECT = "select"


class Employee(BaseModel):
    """A staff member. `id` is the PEN (Personal Employment Number)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    designation: str = ""
    employment_type: str = Field("", alias="type")
    status: str = ""
    unit_code: str = Field("", alias="unitCode")
    phone: str = ""
    email: Optional[str] = None
    joined_date: str = Field("", alias="joinedDate")
    extension_fields: Dict[str, Any] = Field(default_factory=dict, alias="customFields")

    @property
    def staff_category(self) -> str:
        return self.extension_fields.get(STAFF_CATEGORY_KEY) or ""

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def value_for(self, key: str) -> Any:
        """Look up a form key on the fixed attributes, then on the extension fields."""
        if key in CORE_KEYS:
            return self.to_storage().get(key)
        return self.extension_fields.get(key)


class FieldConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    key: str
    label: str
    input_type: FieldInputType = Field(FieldInputType.TEXT, alias="type")
    required: bool = False
    enabled: bool = True
    is_system: bool = Field(False, alias="isSystem")  # cannot be deleted
    is_locked: bool = Field(False, alias="isLocked")  # cannot be disabled
    options: Optional[List[str]] = None
    list_key: Optional[ListKey] = Field(None, alias="listKey")


class FeatureConfig(BaseModel):
    """Permission gates for unit heads. Admins are never gated."""

    model_config = ConfigDict(populate_by_name=True)

    allow_transfer: bool = Field(True, alias="allowTransfer")
    allow_delete: bool = Field(True, alias="allowDelete")
    allow_export: bool = Field(True, alias="allowExport")
    allow_unit_edit: bool = Field(True, alias="allowUnitEdit")


class SystemSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    designations: List[str]
    employee_types: List[str] = Field(alias="employeeTypes")
    statuses: List[str]
    staff_categories: List[str] = Field(alias="staffCategories")
    designation_mapping: Dict[str, str] = Field(alias="designationMapping")
    field_configs: List[FieldConfig] = Field(alias="fieldConfigs")
    features: FeatureConfig

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def get_list(self, list_key: str) -> List[str]:
        return {
            "designations": self.designations,
            "employeeTypes": self.employee_types,
            "statuses": self.statuses,
            "staffCategories": self.staff_categories,
        }[list_key]

    def options_for(self, field: FieldConfig) -> List[str]:
        if field.list_key:
            return self.get_list(field.list_key)
        return field.options or []

    def get_field(self, key: str) -> Optional[FieldConfig]:
        return next((f for f in self.field_configs if f.key == key), None)

    def enabled_fields(self) -> List[FieldConfig]:
        return [f for f in self.field_configs if f.enabled]

    def category_for(self, designation: str) -> Optional[str]:
        """Mapped staff category, or None when the designation is unmapped."""
        return self.designation_mapping.get(designation) or None

    # First entries of each list act as defaults for new and imported records
    @property
    def default_designation(self) -> str:
        return self.designations[0] if self.designations else "Driver"

    @property
    def default_employment_type(self) -> str:
        return self.employee_types[0] if self.employee_types else "Permanent"

    @property
    def default_status(self) -> str:
        return self.statuses[0] if self.statuses else "Working"

    @property
    def default_staff_category(self) -> str:
        return self.staff_categories[0] if self.staff_categories else ""


class ParsedEmployee(BaseModel):
    """Partial candidate returned by the AI text parser."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    type: Optional[str] = None
    designation: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    pen: Optional[str] = None


class BulkImportResult(BaseModel):
    added: int
    errors: List[str] = []


# -----------------------------------------------------------------------------
# Compiled-in defaults (plain dicts in persisted shape)
# -----------------------------------------------------------------------------
DEFAULT_FIELDS: List[Dict[str, Any]] = [
    {"key": "id", "label": "PEN (ID)", "type": "text", "required": True, "enabled": True, "isSystem": True, "isLocked": True},
    {"key": "name", "label": "Full Name", "type": "text", "required": True, "enabled": True, "isSystem": True, "isLocked": True},
    {"key": "unitCode", "label": "Unit Code", "type": "text", "required": True, "enabled": True, "isSystem": True, "isLocked": True},
    {"key": "status", "label": "Status", "type": "select", "required": True, "enabled": True, "isSystem": True, "isLocked": False, "listKey": "statuses"},
    {"key": "designation", "label": "Designation", "type": "select", "required": True, "enabled": True, "isSystem": True, "isLocked": False, "listKey": "designations"},
    {"key": "staffCategory", "label": "Staff Category", "type": "select", "required": True, "enabled": True, "isSystem": True, "isLocked": False, "listKey": "staffCategories"},
    {"key": "type", "label": "Employment Type", "type": "select", "required": True, "enabled": True, "isSystem": True, "isLocked": False, "listKey": "employeeTypes"},
    {"key": "phone", "label": "Phone Number", "type": "tel", "required": False, "enabled": True, "isSystem": True, "isLocked": False},
    {"key": "email", "label": "Email Address", "type": "email", "required": False, "enabled": True, "isSystem": True, "isLocked": False},
    {"key": "joinedDate", "label": "Joined Date", "type": "date", "required": False, "enabled": True, "isSystem": True, "isLocked": False},
]

DEFAULT_FEATURES: Dict[str, bool] = {
    "allowTransfer": True,
    "allowDelete": True,
    "allowExport": True,
    "allowUnitEdit": True,
}

DEFAULT_SETTINGS: Dict[str, Any] = {
    "designations": DESIGNATIONS,
    "employeeTypes": EMPLOYEE_TYPES,
    "statuses": STATUSES,
    "staffCategories": STAFF_CATEGORIES,
    "designationMapping": INITIAL_DESIGNATION_MAPPING,
    "fieldConfigs": DEFAULT_FIELDS,
    "features": DEFAULT_FEATURES,
}
