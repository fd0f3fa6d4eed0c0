import asyncio

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from staff_roster.exceptions import ExternalServiceError, ValidationError
from staff_roster.models.employee_schema import ParsedEmployee
from staff_roster.services import import_service
from staff_roster.services.import_service import (
    import_template_csv,
    map_parsed_to_employees,
    parse_csv,
    parse_text_import,
    validate_upload,
)


def test_blank_name_rows_are_skipped(settings):
    employees = parse_csv("Name,Designation\nJohn Doe,Driver\n,Conductor", settings, "TVM")

    assert len(employees) == 1
    assert employees[0].name == "John Doe"
    assert employees[0].designation == "Driver"


def test_quoted_cell_keeps_embedded_comma(settings):
    employees = parse_csv('PEN,Name,Designation\n"10234","Doe, John","Driver"', settings, "TVM")

    assert employees[0].id == "10234"
    assert employees[0].name == "Doe, John"
    assert employees[0].designation == "Driver"


def test_doubled_quotes_are_unescaped(settings):
    employees = parse_csv('PEN,Name\n1,"Ravi ""RK"" Kumar"', settings, "TVM")

    assert employees[0].name == 'Ravi "RK" Kumar'


def test_template_columns_map_to_record(settings):
    employees = parse_csv(import_template_csv(), settings, "EKM")

    employee = employees[0]
    assert employee.id == "10555"
    assert employee.name == "John Doe"
    assert employee.unit_code == "TVM"
    assert employee.designation == "Driver"
    assert employee.employment_type == "Permanent"
    assert employee.status == "Working"
    assert employee.phone == "9847012345"
    assert employee.email == "john@example.com"
    assert employee.staff_category == "Driver"


def test_headers_match_case_insensitively_by_synonym(settings):
    csv_text = "Staff Name,Depot,Role,Employment,Mobile\nAsha,ekm,Mechanic,Badali,9000000000"

    employee = parse_csv(csv_text, settings, "TVM")[0]

    assert employee.name == "Asha"
    assert employee.unit_code == "EKM"
    assert employee.designation == "Mechanic"
    assert employee.employment_type == "Badali"
    assert employee.phone == "9000000000"
    assert employee.staff_category == "Mechanical"


def test_unknown_values_fall_back_to_first_configured(settings):
    csv_text = "Name,Designation,Type,Status\nAsha,Astronaut,Contract,Dancing"

    employee = parse_csv(csv_text, settings, "TVM")[0]

    assert employee.designation == settings.designations[0]
    assert employee.employment_type == settings.employee_types[0]
    assert employee.status == settings.statuses[0]
    assert employee.staff_category == settings.designation_mapping[settings.designations[0]]


def test_explicit_category_wins_over_mapping(settings):
    employee = parse_csv("Name,Designation,Category\nAsha,Driver,Store", settings, "TVM")[0]

    assert employee.staff_category == "Store"


def test_unmapped_designation_without_category_column_is_blank(settings):
    settings.designations.append("Cleaner")

    employee = parse_csv("Name,Designation\nAsha,Cleaner", settings, "TVM")[0]

    assert employee.designation == "Cleaner"
    assert employee.staff_category == ""


def test_invalid_unit_falls_back_to_target(settings):
    employees = parse_csv("Name,Unit\nAsha,XYZ\nBinu,\nCyril, kmr ", settings, "TVM")

    assert [e.unit_code for e in employees] == ["TVM", "TVM", "KMR"]


def test_missing_ids_get_unique_placeholders(settings):
    employees = parse_csv("Name,Designation\nAsha,Driver\nBinu,Driver\nCyril,Driver", settings, "TVM")

    ids = [e.id for e in employees]
    assert all(i.startswith("CSV-") for i in ids)
    assert len(set(ids)) == 3


def test_single_cell_rows_are_skipped(settings):
    employees = parse_csv("Name,Designation\nLonely\nAsha,Driver", settings, "TVM")

    assert [e.name for e in employees] == ["Asha"]


@pytest.mark.parametrize(
    "csv_text",
    ["", "Name,Designation", "\n\n", "Name,Designation\n,Driver"],
)
def test_unusable_csv_raises(settings, csv_text):
    with pytest.raises(ValidationError):
        parse_csv(csv_text, settings, "TVM")


def test_csv_without_name_column_raises(settings):
    with pytest.raises(ValidationError, match="Name"):
        parse_csv("PEN,Designation\n1,Driver", settings, "TVM")


def test_oversized_cell_is_a_validation_error(settings):
    csv_text = "Name,Designation\n" + "A" * 140000 + ",Driver"

    with pytest.raises(ValidationError, match="Could not read CSV"):
        parse_csv(csv_text, settings, "TVM")


def test_validate_upload_accepts_csv_by_name_or_type():
    validate_upload("staff.CSV", "application/octet-stream", 10)
    validate_upload("staff.txt", "text/csv", 10)


def test_validate_upload_rejects_other_types_and_large_files():
    with pytest.raises(ValidationError, match="format"):
        validate_upload("staff.xlsx", "application/vnd.ms-excel", 10)
    with pytest.raises(ValidationError, match="2MB"):
        validate_upload("staff.csv", "text/csv", import_service.MAX_IMPORT_FILE_SIZE + 1)


def test_decode_upload_strips_bom_and_rejects_non_utf8():
    assert import_service.decode_upload("\ufeffName\n".encode("utf-8")) == "Name\n"
    with pytest.raises(ValidationError):
        import_service.decode_upload(b"\xff\xfe\xfa")


def test_map_parsed_fills_defaults_and_mapping(settings):
    parsed = [
        ParsedEmployee(name="Asha", type="Badali", designation="Mechanic", pen="777"),
        ParsedEmployee(name="Binu", type=None, designation="Pilot"),
        ParsedEmployee(name="Cyril", type="Permanent"),
    ]

    employees = map_parsed_to_employees(parsed, settings, "KTM")

    asha, binu, cyril = employees
    assert asha.id == "777"
    assert asha.staff_category == "Mechanical"
    assert asha.employment_type == "Badali"
    assert binu.designation == settings.designations[0]
    assert binu.employment_type == settings.employee_types[0]
    assert binu.id.startswith("TMP-") and cyril.id.startswith("TMP-")
    assert binu.id != cyril.id
    assert {e.unit_code for e in employees} == {"KTM"}
    assert {e.status for e in employees} == {settings.statuses[0]}
    assert cyril.phone == "" and cyril.email == ""


def test_map_parsed_uses_first_category_when_unmapped(settings):
    settings.designations.insert(0, "Cleaner")

    employee = map_parsed_to_employees([ParsedEmployee(name="Asha", type="Permanent")], settings, "TVM")[0]

    assert employee.designation == "Cleaner"
    assert employee.staff_category == settings.staff_categories[0]


def test_parse_text_import_uses_llm_output(settings):
    llm = FakeListChatModel(
        responses=['[{"name": "Asha", "type": "Permanent", "designation": "Conductor", "pen": "10567"}]']
    )

    employees = asyncio.run(parse_text_import("10567 Asha, Conductor", settings, "TVM", llm=llm))

    assert len(employees) == 1
    assert employees[0].id == "10567"
    assert employees[0].staff_category == "Conductor"


def test_parse_text_import_with_no_candidates_raises(settings):
    llm = FakeListChatModel(responses=["[]"])

    with pytest.raises(ValidationError):
        asyncio.run(parse_text_import("nothing useful", settings, "TVM", llm=llm))


def test_parse_text_import_reports_llm_failure(settings):
    llm = FakeListChatModel(responses=["this is not json"])

    with pytest.raises(ExternalServiceError):
        asyncio.run(parse_text_import("Asha", settings, "TVM", llm=llm))
