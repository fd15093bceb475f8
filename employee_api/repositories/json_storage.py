"""
JSON-file persistence for employee records.

The whole collection lives in one file as a JSON array. Every operation
reads the full file (and, for writes, rewrites it) while holding the
repository's re-entrant lock, so the file is the single source of truth for
this process.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Callable, List, Optional

from employee_api.domain.employees import BusinessValidationError, Employee

logger = logging.getLogger(__name__)


class DataAccessError(Exception):
    """I/O or (de)serialization failure against the backing file."""


class EmployeeNotFoundError(LookupError):
    """No stored record has the requested id."""

    def __init__(self, employee_id: int):
        super().__init__(f"Employee not found with id: {employee_id}")
        self.employee_id = employee_id


class JsonEmployeeRepository:
    """Employee CRUD backed by a single JSON file."""

    def __init__(self, data_file: str | os.PathLike) -> None:
        self.data_file = Path(data_file)
        self.lock = threading.RLock()
        self._initialize_data_file()

    # -------------------------- file helpers --------------------------
    def _initialize_data_file(self) -> None:
        with self.lock:
            try:
                self.data_file.parent.mkdir(parents=True, exist_ok=True)
                if not self.data_file.exists():
                    self.data_file.write_text("[]", encoding="utf-8")
                    logger.info("Created employee data file at %s", self.data_file)
            except OSError as exc:
                raise DataAccessError("Failed to initialize employee data file") from exc

    def _load(self) -> List[Employee]:
        with self.lock:
            try:
                content = self.data_file.read_text(encoding="utf-8")
            except OSError as exc:
                raise DataAccessError("Failed to read employees data") from exc
            if not content.strip():
                return []
            try:
                raw = json.loads(content)
            except json.JSONDecodeError as exc:
                raise DataAccessError("Failed to parse employees data") from exc
            if not isinstance(raw, list):
                raise DataAccessError("Employees data must be a JSON array")
            try:
                return [Employee.from_dict(item) for item in raw]
            except BusinessValidationError as exc:
                raise DataAccessError(f"Invalid employee record in data file: {exc.message}") from exc

    def _persist(self, employees: List[Employee]) -> None:
        with self.lock:
            try:
                payload = json.dumps([e.to_dict() for e in employees], ensure_ascii=False, indent=2)
            except (TypeError, ValueError) as exc:
                raise DataAccessError("Failed to serialize employees data") from exc
            temp_path = self.data_file.with_name(self.data_file.name + ".tmp")
            try:
                temp_path.write_text(payload, encoding="utf-8")
                os.replace(temp_path, self.data_file)
            except OSError as exc:
                raise DataAccessError("Failed to write employees data") from exc

    def _filter(self, predicate: Callable[[Employee], bool]) -> List[Employee]:
        with self.lock:
            return [e for e in self._load() if predicate(e)]

    # -------------------------- reads --------------------------
    def find_all(self) -> List[Employee]:
        return self._load()

    def count(self) -> int:
        return len(self._load())

    def find_by_id(self, employee_id: int) -> Employee:
        with self.lock:
            for employee in self._load():
                if employee.id == employee_id:
                    return employee
        raise EmployeeNotFoundError(employee_id)

    def exists_by_id(self, employee_id: int) -> bool:
        with self.lock:
            return any(e.id == employee_id for e in self._load())

    def find_by_name_containing(self, term: str) -> List[Employee]:
        if not term or not term.strip():
            raise ValueError("Name parameter cannot be empty")
        needle = term.lower()
        return self._filter(
            lambda e: needle in e.first_name.lower() or needle in e.last_name.lower()
        )

    def find_by_salary_range(
        self, from_salary: Optional[float] = None, to_salary: Optional[float] = None
    ) -> List[Employee]:
        if from_salary is not None and from_salary < 0:
            raise ValueError("From salary cannot be negative")
        if to_salary is not None and to_salary < 0:
            raise ValueError("To salary cannot be negative")
        if from_salary is not None and to_salary is not None and from_salary > to_salary:
            raise ValueError("From salary cannot be greater than to salary")
        return self._filter(
            lambda e: (from_salary is None or e.salary >= from_salary)
            and (to_salary is None or e.salary <= to_salary)
        )

    def find_by_department(self, department: str) -> List[Employee]:
        wanted = (department or "").strip().lower()
        return self._filter(lambda e: e.department.lower() == wanted)

    # -------------------------- writes --------------------------
    def save(self, employee: Employee) -> Employee:
        with self.lock:
            employees = self._load()
            employees.append(employee)
            self._persist(employees)
        return employee

    def update(self, employee: Employee) -> Employee:
        with self.lock:
            employees = self._load()
            for index, current in enumerate(employees):
                if current.id == employee.id:
                    employees[index] = employee
                    break
            else:
                raise EmployeeNotFoundError(employee.id)
            self._persist(employees)
        return employee

    def delete(self, employee_id: int) -> None:
        with self.lock:
            employees = self._load()
            remaining = [e for e in employees if e.id != employee_id]
            if len(remaining) == len(employees):
                raise EmployeeNotFoundError(employee_id)
            self._persist(remaining)
