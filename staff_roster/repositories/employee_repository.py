"""
Employee Data Repository
Handles all employee record operations.

The whole collection lives under one key and every mutation computes the
next collection in memory before issuing a single write.
"""
import logging
from typing import Iterable, List

from staff_roster.config.settings import EMPLOYEE_STORAGE_KEY
from staff_roster.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from staff_roster.models.employee_schema import BulkImportResult, Employee
from staff_roster.models.reference_data import ALL_UNITS
from staff_roster.repositories.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class EmployeeRepository:
    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = EMPLOYEE_STORAGE_KEY,
        strict_updates: bool = False,
    ):
        """
        Args:
            store: Key-value store holding the collection
            storage_key: Key the collection is stored under
            strict_updates: When True, editing an id that is not stored raises
                NotFoundError instead of appending the record
        """
        self.store = store
        self.storage_key = storage_key
        self.strict_updates = strict_updates

    def _write(self, employees: List[Employee]) -> None:
        self.store.set(self.storage_key, [e.to_storage() for e in employees])

    def list_all(self) -> List[Employee]:
        """All records in storage order."""
        raw = self.store.get(self.storage_key) or []
        return [Employee.model_validate(item) for item in raw]

    def list_by_unit(self, unit_code: str) -> List[Employee]:
        employees = self.list_all()
        if unit_code == ALL_UNITS:
            return employees
        return [e for e in employees if e.unit_code == unit_code]

    def get(self, employee_id: str) -> Employee:
        for employee in self.list_all():
            if employee.id == employee_id:
                return employee
        raise NotFoundError(f"No employee with PEN {employee_id}.")

    def exists(self, employee_id: str) -> bool:
        return any(e.id == employee_id for e in self.list_all())

    def upsert(self, employee: Employee, is_new_entry: bool) -> None:
        """
        Create (`is_new_entry`) or replace a record.

        Raises:
            ValidationError: the record has an empty id
            DuplicateKeyError: creating a record whose id is already stored
            NotFoundError: editing an unknown id with `strict_updates` enabled
        """
        if not employee.id or not employee.id.strip():
            raise ValidationError("Employee PEN (ID) must not be empty.")

        employees = self.list_all()
        index = next((i for i, e in enumerate(employees) if e.id == employee.id), -1)

        if is_new_entry:
            if index >= 0:
                raise DuplicateKeyError(
                    f"Duplicate PEN: Employee with ID {employee.id} already exists."
                )
            employees.append(employee)
        elif index >= 0:
            employees[index] = employee
        elif self.strict_updates:
            raise NotFoundError(f"No employee with PEN {employee.id}.")
        else:
            logger.warning("Edited employee %s was not stored; appending it", employee.id)
            employees.append(employee)

        self._write(employees)

    def delete(self, employee_id: str) -> None:
        employees = self.list_all()
        self._write([e for e in employees if e.id != employee_id])

    def bulk_delete(self, employee_ids: Iterable[str]) -> None:
        ids = set(employee_ids)
        employees = self.list_all()
        remaining = [e for e in employees if e.id not in ids]
        self._write(remaining)
        logger.info("Bulk delete removed %d employees", len(employees) - len(remaining))

    def bulk_add(self, candidates: Iterable[Employee]) -> BulkImportResult:
        """
        Append new records, skipping any whose id is already stored or was
        already seen earlier in the batch. Skips are reported, not raised.
        """
        current = self.list_all()
        existing_ids = {e.id for e in current}
        batch_ids = set()
        errors: List[str] = []
        to_add: List[Employee] = []

        for emp in candidates:
            if not emp.id or not emp.id.strip():
                errors.append(f"Skipped {emp.name} - PEN is empty.")
            elif emp.id in existing_ids:
                errors.append(f"Skipped {emp.name} (PEN: {emp.id}) - ID already exists.")
            elif emp.id in batch_ids:
                errors.append(f"Skipped duplicate in batch: {emp.name} (PEN: {emp.id})")
            else:
                batch_ids.add(emp.id)
                to_add.append(emp)

        self._write(current + to_add)
        logger.info("Bulk add stored %d employees, skipped %d", len(to_add), len(errors))
        return BulkImportResult(added=len(to_add), errors=errors)

    def bulk_update(self, updated: Iterable[Employee]) -> int:
        """
        Replace stored records in place by id. Records that are not stored are
        dropped. Returns the number of records replaced.
        """
        update_map = {e.id: e for e in updated}
        employees = self.list_all()
        replaced = 0
        result = []
        for emp in employees:
            if emp.id in update_map:
                result.append(update_map[emp.id])
                replaced += 1
            else:
                result.append(emp)
        self._write(result)
        logger.info("Bulk update replaced %d employees", replaced)
        return replaced
