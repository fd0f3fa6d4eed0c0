"""
System Settings Repository
Loads and saves the configurable schema (lists, designation mapping,
field configs, feature flags).
"""
import copy
import logging
from typing import Any, Dict, List

from staff_roster.config.settings import SETTINGS_STORAGE_KEY
from staff_roster.models.employee_schema import (
    DEFAULT_FEATURES,
    DEFAULT_FIELDS,
    DEFAULT_SETTINGS,
    SystemSettings,
)
from staff_roster.repositories.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


def default_settings() -> SystemSettings:
    """Fresh copy of the compiled-in settings."""
    return SystemSettings.model_validate(copy.deepcopy(DEFAULT_SETTINGS))


def _merge_field_configs(stored: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Stored order and membership win; attributes missing from a stored field
    are filled from the default field with the same key, and system fields
    missing altogether are appended.
    """
    defaults_by_key = {f["key"]: f for f in DEFAULT_FIELDS}
    merged = []
    for field in stored:
        default = defaults_by_key.get(field.get("key"), {})
        merged.append({**default, **field})
    stored_keys = {f.get("key") for f in stored}
    for field in DEFAULT_FIELDS:
        if field["isSystem"] and field["key"] not in stored_keys:
            merged.append(dict(field))
    return merged


def merge_with_defaults(parsed: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge a persisted settings document over the defaults so that keys added
    to the schema after the document was written are backfilled.
    """
    defaults = copy.deepcopy(DEFAULT_SETTINGS)
    merged = {**defaults, **{k: v for k, v in parsed.items() if v is not None}}
    merged["features"] = {**DEFAULT_FEATURES, **(parsed.get("features") or {})}
    merged["fieldConfigs"] = (
        _merge_field_configs(parsed["fieldConfigs"])
        if parsed.get("fieldConfigs")
        else defaults["fieldConfigs"]
    )
    merged["staffCategories"] = parsed.get("staffCategories") or defaults["staffCategories"]
    merged["designationMapping"] = {
        **defaults["designationMapping"],
        **(parsed.get("designationMapping") or {}),
    }
    return merged


class SettingsRepository:
    def __init__(self, store: KeyValueStore, storage_key: str = SETTINGS_STORAGE_KEY):
        self.store = store
        self.storage_key = storage_key

    def load(self) -> SystemSettings:
        """Return the persisted settings merged with defaults, or the defaults."""
        parsed = self.store.get(self.storage_key)
        if not parsed:
            return default_settings()
        return SystemSettings.model_validate(merge_with_defaults(parsed))

    def save(self, settings: SystemSettings) -> None:
        self.store.set(self.storage_key, settings.to_storage())
        logger.info("System settings saved")
