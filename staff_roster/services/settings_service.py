"""
Settings Administration Service
Admin operations on lists, the designation mapping, field configs and
feature flags. Each operation loads, mutates and saves the settings once.
"""
import logging
import re

from staff_roster.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from staff_roster.models.employee_schema import (
    LIST_KEYS,
    FieldConfig,
    FieldInputType,
    SystemSettings,
)
from staff_roster.repositories.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)

FEATURE_NAMES = {
    "allowTransfer": "allow_transfer",
    "allowDelete": "allow_delete",
    "allowExport": "allow_export",
    "allowUnitEdit": "allow_unit_edit",
}


def field_key_from_label(label: str) -> str:
    return re.sub(r"\s+", "_", label.strip().lower())


def _require_list_key(list_key: str) -> None:
    if list_key not in LIST_KEYS:
        raise NotFoundError(f"Unknown list: {list_key}")


class SettingsService:
    def __init__(self, repository: SettingsRepository):
        self.repository = repository

    def get(self) -> SystemSettings:
        return self.repository.load()

    def replace(self, settings: SystemSettings) -> SystemSettings:
        self.repository.save(settings)
        return settings

    def add_list_item(self, list_key: str, item: str) -> SystemSettings:
        _require_list_key(list_key)
        item = item.strip()
        if not item:
            raise ValidationError("List item must not be empty.")
        settings = self.repository.load()
        items = settings.get_list(list_key)
        if item in items:
            raise DuplicateKeyError("Item already exists.")
        items.append(item)
        self.repository.save(settings)
        logger.info("Added %r to %s", item, list_key)
        return settings

    def remove_list_item(self, list_key: str, item: str) -> SystemSettings:
        _require_list_key(list_key)
        settings = self.repository.load()
        items = settings.get_list(list_key)
        if item in items:
            items.remove(item)
            self.repository.save(settings)
            logger.info("Removed %r from %s", item, list_key)
        return settings

    def set_designation_mapping(self, designation: str, category: str) -> SystemSettings:
        settings = self.repository.load()
        settings.designation_mapping[designation] = category
        self.repository.save(settings)
        return settings

    def toggle_field(self, key: str) -> SystemSettings:
        """Flip a field's enabled flag. Locked fields stay enabled."""
        settings = self.repository.load()
        field = settings.get_field(key)
        if field is None:
            raise NotFoundError(f"Unknown field: {key}")
        if not field.is_locked:
            field.enabled = not field.enabled
            self.repository.save(settings)
        return settings

    def add_field(self, label: str, input_type: FieldInputType = FieldInputType.TEXT) -> SystemSettings:
        label = label.strip()
        if not label:
            raise ValidationError("Field label must not be empty.")
        key = field_key_from_label(label)
        settings = self.repository.load()
        if settings.get_field(key) is not None:
            raise DuplicateKeyError("A field with this name already exists.")
        settings.field_configs.append(
            FieldConfig(
                key=key,
                label=label,
                input_type=input_type,
                required=False,
                enabled=True,
                is_system=False,
                is_locked=False,
            )
        )
        self.repository.save(settings)
        logger.info("Added custom field %s", key)
        return settings

    def remove_field(self, key: str) -> SystemSettings:
        """Delete a custom field. Values already stored on employees are kept."""
        settings = self.repository.load()
        field = settings.get_field(key)
        if field is None:
            return settings
        if field.is_system:
            raise ValidationError(f"System field {field.label} cannot be deleted.")
        settings.field_configs = [f for f in settings.field_configs if f.key != key]
        self.repository.save(settings)
        logger.info("Removed custom field %s", key)
        return settings

    def toggle_feature(self, name: str) -> SystemSettings:
        attr = FEATURE_NAMES.get(name)
        if attr is None:
            raise NotFoundError(f"Unknown feature: {name}")
        settings = self.repository.load()
        setattr(settings.features, attr, not getattr(settings.features, attr))
        self.repository.save(settings)
        return settings
