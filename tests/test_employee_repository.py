import pytest

from staff_roster.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from staff_roster.models.reference_data import ALL_UNITS
from staff_roster.repositories.employee_repository import EmployeeRepository
from staff_roster.repositories.kv_store import KeyValueStore


def test_upsert_new_entry_is_stored(employee_repository, make_employee):
    employee = make_employee("10234")

    employee_repository.upsert(employee, is_new_entry=True)

    assert employee_repository.exists("10234")
    assert employee_repository.list_all() == [employee]


def test_upsert_new_entry_with_existing_id_raises_and_leaves_store_unchanged(
    employee_repository, make_employee
):
    employee_repository.upsert(make_employee("10234"), is_new_entry=True)
    before = employee_repository.list_all()

    with pytest.raises(DuplicateKeyError):
        employee_repository.upsert(make_employee("10234", name="Someone Else"), is_new_entry=True)

    assert employee_repository.list_all() == before


def test_upsert_edit_replaces_in_place(employee_repository, make_employee):
    for pen in ("1", "2", "3"):
        employee_repository.upsert(make_employee(pen), is_new_entry=True)

    employee_repository.upsert(make_employee("2", name="Renamed"), is_new_entry=False)

    employees = employee_repository.list_all()
    assert [e.id for e in employees] == ["1", "2", "3"]
    assert employees[1].name == "Renamed"


def test_upsert_edit_of_unknown_id_appends(employee_repository, make_employee):
    employee_repository.upsert(make_employee("1"), is_new_entry=True)

    employee_repository.upsert(make_employee("99"), is_new_entry=False)

    assert [e.id for e in employee_repository.list_all()] == ["1", "99"]


def test_strict_updates_reject_unknown_id(store, make_employee):
    repository = EmployeeRepository(store, strict_updates=True)

    with pytest.raises(NotFoundError):
        repository.upsert(make_employee("99"), is_new_entry=False)

    assert repository.list_all() == []


def test_upsert_rejects_blank_id(employee_repository, make_employee):
    with pytest.raises(ValidationError):
        employee_repository.upsert(make_employee("  "), is_new_entry=True)


def test_delete_missing_id_is_noop(employee_repository, make_employee):
    employee_repository.upsert(make_employee("1"), is_new_entry=True)

    employee_repository.delete("404")
    employee_repository.delete("1")
    employee_repository.delete("1")

    assert employee_repository.list_all() == []


def test_bulk_delete_is_idempotent(employee_repository, make_employee):
    for pen in ("1", "2", "3"):
        employee_repository.upsert(make_employee(pen), is_new_entry=True)

    employee_repository.bulk_delete(["1", "3", "missing"])
    after_first = employee_repository.list_all()
    employee_repository.bulk_delete(["1", "3", "missing"])

    assert [e.id for e in after_first] == ["2"]
    assert employee_repository.list_all() == after_first


def test_bulk_add_skips_duplicates_within_batch(employee_repository, make_employee):
    first = make_employee("A", name="First A")
    second = make_employee("B")
    repeat = make_employee("A", name="Second A")

    result = employee_repository.bulk_add([first, second, repeat])

    assert result.added == 2
    assert len(result.errors) == 1
    assert "Second A" in result.errors[0]
    assert employee_repository.list_all() == [first, second]


def test_bulk_add_skips_ids_already_stored(employee_repository, make_employee):
    employee_repository.upsert(make_employee("A"), is_new_entry=True)

    result = employee_repository.bulk_add([make_employee("A", name="Clash"), make_employee("C")])

    assert result.added == 1
    assert result.errors == ["Skipped Clash (PEN: A) - ID already exists."]
    assert [e.id for e in employee_repository.list_all()] == ["A", "C"]


def test_bulk_update_does_not_insert_unknown_ids(employee_repository, make_employee):
    employee_repository.upsert(make_employee("1"), is_new_entry=True)

    replaced = employee_repository.bulk_update(
        [make_employee("1", unitCode="EKM"), make_employee("ghost", unitCode="EKM")]
    )

    assert replaced == 1
    assert not employee_repository.exists("ghost")
    assert employee_repository.get("1").unit_code == "EKM"


def test_list_by_unit_filters_and_all_sentinel(employee_repository, make_employee):
    employee_repository.upsert(make_employee("1", unitCode="TVM"), is_new_entry=True)
    employee_repository.upsert(make_employee("2", unitCode="EKM"), is_new_entry=True)

    assert [e.id for e in employee_repository.list_by_unit("EKM")] == ["2"]
    assert [e.id for e in employee_repository.list_by_unit(ALL_UNITS)] == ["1", "2"]


def test_get_unknown_id_raises(employee_repository):
    with pytest.raises(NotFoundError):
        employee_repository.get("nobody")


def test_records_persist_across_repository_instances(store, db_path, make_employee):
    EmployeeRepository(store).upsert(make_employee("1"), is_new_entry=True)

    reopened = KeyValueStore(db_path)
    try:
        assert EmployeeRepository(reopened).exists("1")
    finally:
        reopened.close()
