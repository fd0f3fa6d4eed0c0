"""
Roster Service
Transfers, search filtering, headline statistics and CSV export.
"""
import logging
from datetime import date
from typing import Dict, List, Optional, Sequence

from staff_roster.exceptions import ValidationError
from staff_roster.models.employee_schema import Employee, SystemSettings
from staff_roster.models.reference_data import TRANSFERRED_STATUS, UNIT_CODES
from staff_roster.repositories.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)

# Employment type filter value matching every type
ALL_TYPES = "ALL"


def transfer_employees(
    repository: EmployeeRepository,
    employee_ids: Sequence[str],
    new_unit: str,
    unit_codes: Sequence[str] = UNIT_CODES,
) -> int:
    """
    Move the selected employees to `new_unit` and mark them transferred.
    Ids that are not stored are ignored. Returns the number moved.
    """
    if new_unit not in unit_codes:
        raise ValidationError(f"Unknown unit code: {new_unit}")
    ids = set(employee_ids)
    selected = [e for e in repository.list_all() if e.id in ids]
    updated = [
        e.model_copy(update={"unit_code": new_unit, "status": TRANSFERRED_STATUS})
        for e in selected
    ]
    count = repository.bulk_update(updated)
    logger.info("Transferred %d employees to %s", count, new_unit)
    return count


def filter_employees(
    employees: Sequence[Employee],
    search_term: str = "",
    employment_type: str = ALL_TYPES,
) -> List[Employee]:
    """Case-insensitive search on name, PEN, designation and status plus a type filter."""
    term = (search_term or "").lower()
    results = []
    for e in employees:
        matches_search = (
            term in e.name.lower()
            or term in e.id.lower()
            or term in e.designation.lower()
            or term in (e.status or "").lower()
        )
        matches_type = employment_type == ALL_TYPES or e.employment_type == employment_type
        if matches_search and matches_type:
            results.append(e)
    return results


def roster_stats(employees: Sequence[Employee]) -> Dict[str, int]:
    return {
        "total": len(employees),
        "permanent": sum(1 for e in employees if e.employment_type == "Permanent"),
        "badali": sum(1 for e in employees if e.employment_type == "Badali"),
    }


def _quote(value: Optional[object]) -> str:
    if not value:
        return ""
    return '"' + str(value).replace('"', '""') + '"'


def export_csv(employees: Sequence[Employee], settings: SystemSettings) -> str:
    """One column per enabled field (labels as headers), non-empty values double-quoted."""
    fields = settings.enabled_fields()
    lines = [",".join(f.label for f in fields)]
    for e in employees:
        lines.append(",".join(_quote(e.value_for(f.key)) for f in fields))
    return "\n".join(lines)


def export_filename(unit_code: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"KSRTC_{unit_code}_Staff_{today.isoformat()}.csv"
