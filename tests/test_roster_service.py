import csv
import io
from datetime import date

import pytest

from staff_roster.exceptions import ValidationError
from staff_roster.services.roster_service import (
    export_csv,
    export_filename,
    filter_employees,
    roster_stats,
    transfer_employees,
)


def test_transfer_moves_and_marks_transferred(employee_repository, make_employee):
    employee_repository.upsert(make_employee("1"), is_new_entry=True)
    employee_repository.upsert(make_employee("2"), is_new_entry=True)

    count = transfer_employees(employee_repository, ["1", "ghost"], "EKM")

    assert count == 1
    moved = employee_repository.get("1")
    assert moved.unit_code == "EKM"
    assert moved.status == "Transferred"
    assert employee_repository.get("2").unit_code == "TVM"
    assert not employee_repository.exists("ghost")


def test_transfer_to_unknown_unit_is_rejected(employee_repository, make_employee):
    employee_repository.upsert(make_employee("1"), is_new_entry=True)

    with pytest.raises(ValidationError):
        transfer_employees(employee_repository, ["1"], "NOWHERE")

    assert employee_repository.get("1").unit_code == "TVM"


def test_filter_by_search_and_type(make_employee):
    employees = [
        make_employee("10234", name="John Doe", type="Permanent"),
        make_employee("10567", name="Jane Smith", designation="Conductor", type="Badali"),
        make_employee("20001", name="Ravi", status="On Leave", type="Badali"),
    ]

    assert [e.id for e in filter_employees(employees, "jane")] == ["10567"]
    assert [e.id for e in filter_employees(employees, "105")] == ["10567"]
    assert [e.id for e in filter_employees(employees, "conductor")] == ["10567"]
    assert [e.id for e in filter_employees(employees, "leave")] == ["20001"]
    assert [e.id for e in filter_employees(employees, "", "Badali")] == ["10567", "20001"]
    assert len(filter_employees(employees)) == 3


def test_roster_stats(make_employee):
    employees = [
        make_employee("1", type="Permanent"),
        make_employee("2", type="Badali"),
        make_employee("3", type="Badali"),
    ]

    assert roster_stats(employees) == {"total": 3, "permanent": 1, "badali": 2}


def test_export_uses_enabled_fields_and_quotes_values(settings, make_employee):
    settings.get_field("email").enabled = False
    employees = [
        make_employee("1", name='Doe, "JJ" John', phone=""),
    ]

    exported = export_csv(employees, settings)
    header, row = exported.split("\n")

    labels = [f.label for f in settings.field_configs if f.enabled]
    assert header == ",".join(labels)
    assert "Email Address" not in header
    assert '"Doe, ""JJ"" John"' in row

    parsed = next(csv.reader(io.StringIO(row)))
    values = dict(zip(labels, parsed))
    assert values["Full Name"] == 'Doe, "JJ" John'
    assert values["Phone Number"] == ""
    assert values["Staff Category"] == "Driver"
    assert values["Employment Type"] == "Permanent"


def test_export_filename():
    assert export_filename("TVM", date(2024, 3, 5)) == "KSRTC_TVM_Staff_2024-03-05.csv"
