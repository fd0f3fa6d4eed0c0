"""
Request and Response Models for API endpoints.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from staff_roster.models.employee_schema import Employee, FieldInputType


class LoginRequest(BaseModel):
    """Admin logs in with username; unit heads with a unit code."""
    model_config = ConfigDict(populate_by_name=True)

    mode: Literal["admin", "unit"]
    password: str
    username: Optional[str] = None
    unit_code: Optional[str] = Field(None, alias="unitCode")


class LoginResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    role: str
    unit_code: str = Field(alias="unitCode")
    username: str
    permissions: Dict[str, bool]


class EmployeeFormRequest(BaseModel):
    """Form values keyed by field config key (camelCase core keys + custom keys)."""
    values: Dict[str, Any]


class BulkDeleteRequest(BaseModel):
    ids: List[str]


class TransferRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ids: List[str]
    new_unit: str = Field(alias="newUnit")


class TextImportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    target_unit: Optional[str] = Field(None, alias="targetUnit")


class ConfirmImportRequest(BaseModel):
    employees: List[Employee]


class ListItemRequest(BaseModel):
    item: str


class MappingRequest(BaseModel):
    designation: str
    category: str


class AddFieldRequest(BaseModel):
    label: str
    type: FieldInputType = FieldInputType.TEXT
