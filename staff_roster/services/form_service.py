"""
Employee Form Service
Binds the configurable field schema to editable form values, validates them
and turns them back into an Employee for the repository.
"""
import re
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from staff_roster.exceptions import ValidationError
from staff_roster.models.employee_schema import (
    CORE_KEYS,
    STAFF_CATEGORY_KEY,
    Employee,
    FieldConfig,
    FieldInputType,
    SystemSettings,
)
from staff_roster.repositories.employee_repository import EmployeeRepository

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9][0-9\s\-()]*$")

# Returns an error message, or None when the value is acceptable
FieldValidator = Callable[[str, List[str]], Optional[str]]


def _validate_text(value: str, options: List[str]) -> Optional[str]:
    return None


def _validate_number(value: str, options: List[str]) -> Optional[str]:
    try:
        float(value)
    except ValueError:
        return "must be a number"
    return None


def _validate_email(value: str, options: List[str]) -> Optional[str]:
    if not EMAIL_PATTERN.match(value):
        return "must be a valid email address"
    return None


def _validate_tel(value: str, options: List[str]) -> Optional[str]:
    if not PHONE_PATTERN.match(value):
        return "must be a valid phone number"
    return None


def _validate_date(value: str, options: List[str]) -> Optional[str]:
    try:
        date.fromisoformat(value)
    except ValueError:
        return "must be a date (YYYY-MM-DD)"
    return None


def _validate_select(value: str, options: List[str]) -> Optional[str]:
    if options and value not in options:
        return "must be one of the configured options"
    return None


FIELD_VALIDATORS: Dict[str, FieldValidator] = {
    FieldInputType.TEXT.value: _validate_text,
    FieldInputType.NUMBER.value: _validate_number,
    FieldInputType.EMAIL.value: _validate_email,
    FieldInputType.TEL.value: _validate_tel,
    FieldInputType.DATE.value: _validate_date,
    FieldInputType.SELECT.value: _validate_select,
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class EmployeeForm:
    """
    Working state of the add/edit employee form.

    Fixed attributes and extension fields are flattened into one key -> value
    map keyed by field config keys. Changing the designation to a mapped value
    sets the staff category; re-selecting the current designation does not.
    """

    def __init__(
        self,
        settings: SystemSettings,
        initial: Optional[Employee] = None,
        default_unit_code: str = "",
    ):
        self.settings = settings
        self.initial = initial
        self.stored_values: Dict[str, Any] = {}
        if initial is not None:
            stored = initial.to_storage()
            extension = stored.pop("customFields") or {}
            self.stored_values = {**stored, **extension}
            self.values: Dict[str, Any] = dict(self.stored_values)
        else:
            self.values = {
                "unitCode": default_unit_code,
                "status": settings.default_status,
                "type": settings.default_employment_type,
                "designation": settings.default_designation,
                STAFF_CATEGORY_KEY: settings.default_staff_category,
            }
            mapped = settings.category_for(self.values["designation"])
            if mapped:
                self.values[STAFF_CATEGORY_KEY] = mapped

    @property
    def is_new_entry(self) -> bool:
        return self.initial is None

    def set_value(self, key: str, value: Any) -> None:
        if key == "id" and not self.is_new_entry and value != self.initial.id:
            raise ValidationError("PEN (ID) cannot be changed once created.")

        previous = self.values.get(key)
        self.values[key] = value

        if key == "designation" and value != previous:
            mapped = self.settings.category_for(value)
            if mapped:
                self.values[STAFF_CATEGORY_KEY] = mapped

    def update(self, changes: Dict[str, Any]) -> None:
        """
        Apply several values. The designation goes first so an explicit staff
        category in the same batch wins over the mapped one.
        """
        ordered = sorted(changes.items(), key=lambda item: item[0] != "designation")
        for key, value in ordered:
            self.set_value(key, value)

    def _type_error(self, field: FieldConfig) -> Optional[str]:
        value = self.values.get(field.key)
        if _is_blank(value):
            return None
        # Values already stored on the record are not re-checked
        if field.key in self.stored_values and value == self.stored_values[field.key]:
            return None
        validator = FIELD_VALIDATORS.get(field.input_type, _validate_text)
        problem = validator(str(value).strip(), self.settings.options_for(field))
        if problem:
            return f"{field.label} {problem}"
        return None

    def validate(self) -> None:
        """
        Raises:
            ValidationError: listing every missing required field, or, when none
                are missing, every value that does not fit its input type
        """
        enabled = self.settings.enabled_fields()

        missing = [f.label for f in enabled if f.required and _is_blank(self.values.get(f.key))]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        invalid = [err for err in (self._type_error(f) for f in enabled) if err]
        if invalid:
            raise ValidationError(f"Invalid values: {'; '.join(invalid)}")

    def build_employee(self) -> Employee:
        """Split form values into fixed attributes and extension fields."""
        core: Dict[str, Any] = {}
        extension: Dict[str, Any] = {}
        for key, value in self.values.items():
            if key in CORE_KEYS:
                if value is not None:
                    core[key] = str(value)
            else:
                extension[key] = "" if value is None else str(value)

        joined_field = self.settings.get_field("joinedDate")
        if not core.get("joinedDate") and joined_field is not None and joined_field.enabled:
            core["joinedDate"] = date.today().isoformat()

        return Employee.model_validate({**core, "customFields": extension})

    def submit(self, repository: EmployeeRepository) -> Employee:
        """Validate, build and save the employee. Returns the saved record."""
        self.validate()
        employee = self.build_employee()
        repository.upsert(employee, is_new_entry=self.is_new_entry)
        return employee
