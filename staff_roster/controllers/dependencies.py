"""
Request dependencies: store handles and the calling user.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from staff_roster.exceptions import UnauthorizedError
from staff_roster.repositories.employee_repository import EmployeeRepository
from staff_roster.repositories.kv_store import KeyValueStore
from staff_roster.repositories.settings_repository import SettingsRepository
from staff_roster.services.auth_service import User, parse_token
from staff_roster.services.settings_service import SettingsService


def get_store(request: Request) -> KeyValueStore:
    state = request.app.state
    if getattr(state, "store", None) is None:
        state.store = KeyValueStore(state.db_path)
    return state.store


def get_employee_repository(store: KeyValueStore = Depends(get_store)) -> EmployeeRepository:
    return EmployeeRepository(store)


def get_settings_repository(store: KeyValueStore = Depends(get_store)) -> SettingsRepository:
    return SettingsRepository(store)


def get_settings_service(
    repository: SettingsRepository = Depends(get_settings_repository),
) -> SettingsService:
    return SettingsService(repository)


http_bearer = HTTPBearer(auto_error=False)


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> User:
    if creds is None or not creds.credentials:
        raise UnauthorizedError("Not authenticated")
    return parse_token(creds.credentials)
