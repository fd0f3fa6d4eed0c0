"""
Settings Controller
Admin endpoints for lists, designation mapping, field configs and feature flags.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from staff_roster.controllers.dependencies import get_current_user, get_settings_service
from staff_roster.models.employee_schema import SystemSettings
from staff_roster.models.reference_data import UNIT_CODES
from staff_roster.models.request_models import AddFieldRequest, ListItemRequest, MappingRequest
from staff_roster.services.auth_service import User, require
from staff_roster.services.settings_service import SettingsService

router = APIRouter(prefix="/settings")


def require_admin(user: User = Depends(get_current_user)) -> User:
    require(user.is_admin, "change system settings")
    return user


@router.get("", dependencies=[Depends(get_current_user)])
async def get_settings(
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    """Readable by every role; the forms and filters are built from it."""
    return {**service.get().to_storage(), "unitCodes": UNIT_CODES}


@router.put("", dependencies=[Depends(require_admin)])
async def replace_settings(
    body: SystemSettings,
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    return service.replace(body).to_storage()


@router.post("/lists/{list_key}", dependencies=[Depends(require_admin)])
async def add_list_item(
    list_key: str,
    body: ListItemRequest,
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    return service.add_list_item(list_key, body.item).to_storage()


@router.delete("/lists/{list_key}/{item}", dependencies=[Depends(require_admin)])
async def remove_list_item(
    list_key: str,
    item: str,
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    return service.remove_list_item(list_key, item).to_storage()


@router.put("/mapping", dependencies=[Depends(require_admin)])
async def set_mapping(
    body: MappingRequest,
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    return service.set_designation_mapping(body.designation, body.category).to_storage()


@router.post("/fields", dependencies=[Depends(require_admin)])
async def add_field(
    body: AddFieldRequest,
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    return service.add_field(body.label, body.type).to_storage()


@router.post("/fields/{key}/toggle", dependencies=[Depends(require_admin)])
async def toggle_field(
    key: str,
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    return service.toggle_field(key).to_storage()


@router.delete("/fields/{key}", dependencies=[Depends(require_admin)])
async def remove_field(
    key: str,
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    return service.remove_field(key).to_storage()


@router.post("/features/{name}/toggle", dependencies=[Depends(require_admin)])
async def toggle_feature(
    name: str,
    service: SettingsService = Depends(get_settings_service),
) -> Dict[str, Any]:
    return service.toggle_feature(name).to_storage()
