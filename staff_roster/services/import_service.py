"""
Import Service
Turns uploaded CSV files and AI-parsed free text into candidate employee
records. Nothing here touches the store: candidates are committed later
through EmployeeRepository.bulk_add, which is where id uniqueness against
stored records is checked.
"""
import csv
import io
import logging
import time
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from staff_roster.config.settings import MAX_IMPORT_FILE_SIZE
from staff_roster.exceptions import ValidationError
from staff_roster.models.employee_schema import (
    STAFF_CATEGORY_KEY,
    Employee,
    ParsedEmployee,
    SystemSettings,
)
from staff_roster.models.reference_data import UNIT_CODES
from staff_roster.services.parsing_service import parse_bulk_employee_data

logger = logging.getLogger(__name__)

# Header keywords per column, matched as lower-case substrings
COLUMN_SYNONYMS: Dict[str, List[str]] = {
    "id": ["pen", "id", "identifier"],
    "name": ["name", "staff", "employee"],
    "unit": ["unit", "code", "depot"],
    "designation": ["designation", "role", "position"],
    "type": ["type", "employment"],
    "category": ["category", "staffcategory"],
    "status": ["status"],
    "phone": ["phone", "mobile"],
    "email": ["email"],
}

TEMPLATE_HEADERS = "PEN,Name,Unit,Designation,EmploymentType,Status,Phone,Email"
TEMPLATE_SAMPLE = "10555,John Doe,TVM,Driver,Permanent,Working,9847012345,john@example.com"
TEMPLATE_FILENAME = "staff_import_template_v2.csv"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _today() -> str:
    return date.today().isoformat()


def validate_upload(filename: str, content_type: Optional[str], size: int) -> None:
    """Reject files that are not CSV or exceed the import size limit."""
    if not (content_type or "").startswith("text/csv") and not (filename or "").lower().endswith(".csv"):
        raise ValidationError("Invalid file format. Please upload a CSV file.")
    if size > MAX_IMPORT_FILE_SIZE:
        raise ValidationError("File size exceeds 2MB limit.")


def decode_upload(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValidationError("CSV file must be UTF-8 encoded.") from e


def import_template_csv() -> str:
    return f"{TEMPLATE_HEADERS}\n{TEMPLATE_SAMPLE}"


def _read_rows(csv_text: str) -> List[List[str]]:
    # csv.reader keeps commas inside quoted cells and unescapes doubled quotes
    reader = csv.reader(io.StringIO(csv_text), skipinitialspace=True)
    try:
        rows = [[cell.strip() for cell in row] for row in reader]
    except csv.Error as e:
        raise ValidationError(f"Could not read CSV file: {e}") from e
    return [row for row in rows if any(row)]


def _find_column(headers: Sequence[str], keywords: Iterable[str]) -> int:
    keywords = list(keywords)
    for index, header in enumerate(headers):
        if any(k in header for k in keywords):
            return index
    return -1


def _cell(row: Sequence[str], index: int) -> str:
    if index < 0 or index >= len(row):
        return ""
    return row[index]


def _pick(value: Optional[str], allowed: Sequence[str], default: str) -> str:
    return value if value and value in allowed else default


def parse_csv(
    csv_text: str,
    settings: SystemSettings,
    target_unit: str,
    unit_codes: Sequence[str] = UNIT_CODES,
) -> List[Employee]:
    """
    Parse CSV text into candidate employees.

    Columns are located by fuzzy header matching. A valid unit column value
    overrides `target_unit`; designation, employment type and status fall back
    to the first configured value when missing or unknown.

    Raises:
        ValidationError: no header plus data rows, no name column, or no usable rows
    """
    rows = _read_rows(csv_text)
    if len(rows) < 2:
        raise ValidationError("CSV file is empty or missing headers.")

    headers = [h.lower().strip() for h in rows[0]]
    columns = {field: _find_column(headers, keys) for field, keys in COLUMN_SYNONYMS.items()}
    if columns["name"] == -1:
        raise ValidationError("CSV must contain a 'Name' column.")

    stamp = _now_ms()
    joined = _today()
    results: List[Employee] = []

    for i, row in enumerate(rows[1:], start=1):
        if len(row) < 2:
            continue
        name = _cell(row, columns["name"])
        if not name:
            continue

        designation = _pick(
            _cell(row, columns["designation"]), settings.designations, settings.default_designation
        )

        category = _cell(row, columns["category"])
        if not category:
            category = settings.category_for(designation) or ""

        unit = target_unit
        csv_unit = _cell(row, columns["unit"]).upper().strip()
        if csv_unit and csv_unit in unit_codes:
            unit = csv_unit

        results.append(
            Employee(
                id=_cell(row, columns["id"]) or f"CSV-{stamp}-{i}",
                name=name,
                designation=designation,
                employment_type=_pick(
                    _cell(row, columns["type"]), settings.employee_types, settings.default_employment_type
                ),
                status=_pick(_cell(row, columns["status"]), settings.statuses, settings.default_status),
                unit_code=unit,
                phone=_cell(row, columns["phone"]),
                email=_cell(row, columns["email"]),
                joined_date=joined,
                extension_fields={STAFF_CATEGORY_KEY: category},
            )
        )

    if not results:
        raise ValidationError("No valid employee records found in CSV.")
    logger.info("Parsed %d employees from CSV for unit %s", len(results), target_unit)
    return results


def map_parsed_to_employees(
    parsed: Sequence[ParsedEmployee],
    settings: SystemSettings,
    target_unit: str,
) -> List[Employee]:
    """Complete AI-parsed candidates with schema defaults and the designation mapping."""
    stamp = _now_ms()
    joined = _today()
    employees = []
    for idx, p in enumerate(parsed):
        designation = _pick(p.designation, settings.designations, settings.default_designation)
        category = settings.category_for(designation) or settings.default_staff_category

        employees.append(
            Employee(
                id=p.pen or f"TMP-{stamp}-{idx}",
                name=p.name,
                designation=designation,
                employment_type=p.type or settings.default_employment_type,
                status=settings.default_status,
                unit_code=target_unit,
                phone=p.phone or "",
                email=p.email or "",
                joined_date=joined,
                extension_fields={STAFF_CATEGORY_KEY: category},
            )
        )
    return employees


async def parse_text_import(
    text: str,
    settings: SystemSettings,
    target_unit: str,
    llm=None,
) -> List[Employee]:
    """
    Run free text through the AI parser and complete the candidates.

    Raises:
        ValidationError: empty text or nothing parseable
        ExternalServiceError: the AI parser failed
    """
    parsed = await parse_bulk_employee_data(text, llm=llm)
    if not parsed:
        raise ValidationError("No employee records could be parsed from the text.")
    return map_parsed_to_employees(parsed, settings, target_unit)
