"""
Roster Controller
Handles HTTP requests for login, employee records, imports and exports.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile
from fastapi.responses import PlainTextResponse

from staff_roster.controllers.dependencies import (
    get_current_user,
    get_employee_repository,
    get_settings_repository,
)
from staff_roster.config.settings import MAX_IMPORT_FILE_SIZE
from staff_roster.exceptions import ValidationError
from staff_roster.models.employee_schema import Employee
from staff_roster.models.reference_data import ALL_UNITS, UNIT_CODES
from staff_roster.models.request_models import (
    BulkDeleteRequest,
    ConfirmImportRequest,
    EmployeeFormRequest,
    LoginRequest,
    LoginResponse,
    TextImportRequest,
    TransferRequest,
)
from staff_roster.repositories.employee_repository import EmployeeRepository
from staff_roster.repositories.settings_repository import SettingsRepository
from staff_roster.services import import_service, roster_service
from staff_roster.services.auth_service import (
    User,
    issue_token,
    login_admin,
    login_unit,
    permissions_for,
    require,
    require_unit_access,
)
from staff_roster.services.form_service import EmployeeForm

router = APIRouter()


def _visible_employees(
    user: User,
    repository: EmployeeRepository,
    unit: Optional[str],
) -> List[Employee]:
    """Admins may pick any unit (default all); unit heads only see their own."""
    unit_code = (unit or ALL_UNITS) if user.is_admin else user.unit_code
    return repository.list_by_unit(unit_code)


def _import_unit(user: User, requested: Optional[str]) -> str:
    """Unit heads always import into their own unit; admins must pick one."""
    if not user.is_admin:
        return user.unit_code
    if not requested or requested not in UNIT_CODES:
        raise ValidationError("Select a valid default unit for the import.")
    return requested


@router.post("/login", response_model=LoginResponse, response_model_by_alias=True)
async def login(
    body: LoginRequest,
    settings_repository: SettingsRepository = Depends(get_settings_repository),
):
    if body.mode == "admin":
        user = login_admin(body.username or "", body.password)
    else:
        user = login_unit(body.unit_code, body.password)
    permissions = permissions_for(user, settings_repository.load().features)
    return LoginResponse(
        token=issue_token(user),
        role=user.role.value,
        unit_code=user.unit_code,
        username=user.username,
        permissions=permissions.model_dump(),
    )


# -----------------------------------------------------------------------------
# Employees
# -----------------------------------------------------------------------------
@router.get("/employees")
async def list_employees(
    unit: Optional[str] = None,
    search: str = "",
    employment_type: str = Query(roster_service.ALL_TYPES, alias="type"),
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
) -> List[Dict[str, Any]]:
    employees = _visible_employees(user, repository, unit)
    return [e.to_storage() for e in roster_service.filter_employees(employees, search, employment_type)]


@router.get("/employees/stats")
async def employee_stats(
    unit: Optional[str] = None,
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
) -> Dict[str, int]:
    return roster_service.roster_stats(_visible_employees(user, repository, unit))


@router.get("/employees/{employee_id}")
async def get_employee(
    employee_id: str,
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
) -> Dict[str, Any]:
    employee = repository.get(employee_id)
    require_unit_access(user, employee.unit_code)
    return employee.to_storage()


@router.post("/employees", status_code=201)
async def create_employee(
    body: EmployeeFormRequest,
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
) -> Dict[str, Any]:
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_add_edit, "add employees")

    form = EmployeeForm(settings, default_unit_code="" if user.is_admin else user.unit_code)
    form.update(body.values)
    require_unit_access(user, form.values.get("unitCode") or "")
    return form.submit(repository).to_storage()


@router.put("/employees/{employee_id}")
async def update_employee(
    employee_id: str,
    body: EmployeeFormRequest,
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
) -> Dict[str, Any]:
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_add_edit, "edit employees")

    existing = repository.get(employee_id)
    require_unit_access(user, existing.unit_code)
    form = EmployeeForm(settings, initial=existing)
    form.update(body.values)
    require_unit_access(user, form.values.get("unitCode") or "")
    return form.submit(repository).to_storage()


@router.delete("/employees/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: str,
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
):
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_delete, "delete employees")
    if repository.exists(employee_id):
        require_unit_access(user, repository.get(employee_id).unit_code)
    repository.delete(employee_id)
    return Response(status_code=204)


@router.post("/employees/bulk-delete")
async def bulk_delete_employees(
    body: BulkDeleteRequest,
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
) -> Dict[str, int]:
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_delete, "delete employees")
    visible_ids = {e.id for e in _visible_employees(user, repository, None)}
    ids = [i for i in body.ids if i in visible_ids]
    repository.bulk_delete(ids)
    return {"deleted": len(ids)}


@router.post("/employees/transfer")
async def transfer_employees(
    body: TransferRequest,
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
) -> Dict[str, Any]:
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_transfer, "transfer employees")
    visible_ids = {e.id for e in _visible_employees(user, repository, None)}
    ids = [i for i in body.ids if i in visible_ids]
    count = roster_service.transfer_employees(repository, ids, body.new_unit)
    return {"transferred": count, "newUnit": body.new_unit}


# -----------------------------------------------------------------------------
# Imports
# -----------------------------------------------------------------------------
@router.get("/imports/template")
async def import_template():
    return PlainTextResponse(
        import_service.import_template_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{import_service.TEMPLATE_FILENAME}"'},
    )


@router.post("/imports/text")
async def preview_text_import(
    body: TextImportRequest,
    user: User = Depends(get_current_user),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
) -> List[Dict[str, Any]]:
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_add_edit, "import employees")
    employees = await import_service.parse_text_import(
        body.text, settings, _import_unit(user, body.target_unit)
    )
    return [e.to_storage() for e in employees]


@router.post("/imports/csv")
async def preview_csv_import(
    file: UploadFile = File(...),
    target_unit: Optional[str] = Form(None, alias="targetUnit"),
    user: User = Depends(get_current_user),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
) -> List[Dict[str, Any]]:
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_add_edit, "import employees")
    if file.size is not None:
        import_service.validate_upload(file.filename or "", file.content_type, file.size)
    content = await file.read(MAX_IMPORT_FILE_SIZE + 1)
    import_service.validate_upload(file.filename or "", file.content_type, len(content))
    employees = import_service.parse_csv(
        import_service.decode_upload(content), settings, _import_unit(user, target_unit)
    )
    return [e.to_storage() for e in employees]


@router.post("/imports/confirm")
async def confirm_import(
    body: ConfirmImportRequest,
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
) -> Dict[str, Any]:
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_add_edit, "import employees")
    candidates = body.employees
    for candidate in candidates:
        require_unit_access(user, candidate.unit_code)
    result = repository.bulk_add(candidates)
    return result.model_dump()


# -----------------------------------------------------------------------------
# Export
# -----------------------------------------------------------------------------
@router.get("/exports/csv")
async def export_employees(
    unit: Optional[str] = None,
    search: str = "",
    employment_type: str = Query(roster_service.ALL_TYPES, alias="type"),
    user: User = Depends(get_current_user),
    repository: EmployeeRepository = Depends(get_employee_repository),
    settings_repository: SettingsRepository = Depends(get_settings_repository),
):
    settings = settings_repository.load()
    require(permissions_for(user, settings.features).can_export, "export employees")
    employees = roster_service.filter_employees(_visible_employees(user, repository, unit), search, employment_type)
    unit_label = (unit or ALL_UNITS) if user.is_admin else user.unit_code
    return PlainTextResponse(
        roster_service.export_csv(employees, settings),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{roster_service.export_filename(unit_label)}"'
        },
    )
