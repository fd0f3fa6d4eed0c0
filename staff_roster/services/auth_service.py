"""
Auth Service
Shared-secret login and role-based permission gates.
"""
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Sequence

import jwt
from pydantic import BaseModel

from staff_roster.config.settings import (
    ADMIN_PASSWORD,
    ADMIN_USERNAME,
    JWT_ALGORITHM,
    JWT_SECRET,
    JWT_TTL_SECONDS,
    UNIT_PASSWORD,
)
from staff_roster.exceptions import ForbiddenError, UnauthorizedError
from staff_roster.models.employee_schema import FeatureConfig
from staff_roster.models.reference_data import ALL_UNITS, UNIT_CODES


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    UNIT_HEAD = "UNIT_HEAD"


class User(BaseModel):
    role: UserRole
    unit_code: str
    username: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class Permissions(BaseModel):
    can_add_edit: bool
    can_transfer: bool
    can_delete: bool
    can_export: bool


def login_admin(username: str, password: str) -> User:
    if username != ADMIN_USERNAME or password != ADMIN_PASSWORD:
        raise UnauthorizedError("Invalid admin credentials.")
    return User(role=UserRole.ADMIN, unit_code=ALL_UNITS, username=username)


def login_unit(unit_code: Optional[str], password: str, unit_codes: Sequence[str] = UNIT_CODES) -> User:
    if not unit_code or unit_code not in unit_codes:
        raise UnauthorizedError("Please select a Unit")
    if password != UNIT_PASSWORD:
        raise UnauthorizedError("Invalid unit password.")
    return User(role=UserRole.UNIT_HEAD, unit_code=unit_code, username=unit_code)


def permissions_for(user: User, features: FeatureConfig) -> Permissions:
    """Admins can do everything; unit heads are gated by the feature flags."""
    admin = user.is_admin
    return Permissions(
        can_add_edit=admin or features.allow_unit_edit,
        can_transfer=admin or features.allow_transfer,
        can_delete=admin or (features.allow_unit_edit and features.allow_delete),
        can_export=features.allow_export,
    )


def require(allowed: bool, action: str) -> None:
    if not allowed:
        raise ForbiddenError(f"You are not allowed to {action}.")


def require_unit_access(user: User, unit_code: str) -> None:
    if not user.is_admin and unit_code != user.unit_code:
        raise ForbiddenError(f"Unit {user.unit_code} cannot manage staff of unit {unit_code}.")


def issue_token(user: User, ttl_seconds: int = JWT_TTL_SECONDS) -> str:
    """Signed session token carrying the role and unit."""
    now = datetime.now(tz=timezone.utc)
    payload = {
        "sub": user.username,
        "role": user.role.value,
        "unit": user.unit_code,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=ttl_seconds)).timestamp()),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def parse_token(token: str, unit_codes: Sequence[str] = UNIT_CODES) -> User:
    """
    Raises:
        UnauthorizedError: bad signature, expired token, or a role/unit
            combination no login could have produced
    """
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise UnauthorizedError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError("Invalid token") from e

    try:
        role = UserRole(payload.get("role"))
    except ValueError as e:
        raise UnauthorizedError("Invalid token") from e
    unit_code = payload.get("unit")
    if role == UserRole.ADMIN:
        valid_unit = unit_code == ALL_UNITS
    else:
        valid_unit = unit_code in unit_codes
    if not valid_unit:
        raise UnauthorizedError("Invalid token")
    username = ADMIN_USERNAME if role == UserRole.ADMIN else unit_code
    return User(role=role, unit_code=unit_code, username=username)
