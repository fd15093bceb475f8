"""Employee use cases: validation, existence checks and repository calls."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Any, List, Optional

from employee_api.core.executor import BoundedExecutor
from employee_api.domain.employees import BusinessValidationError, Employee, EmployeeChanges
from employee_api.repositories.json_storage import (
    DataAccessError,
    EmployeeNotFoundError,
    JsonEmployeeRepository,
)

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2


class ServiceError(Exception):
    """Storage failure surfaced by the service layer."""


class NotFoundError(Exception):
    """The requested employee does not exist."""


class EmployeeService:
    """Orchestrates employee validation and persistence."""

    def __init__(self, repository: JsonEmployeeRepository, executor: Optional[BoundedExecutor] = None) -> None:
        self.repository = repository
        self.executor = executor

    # -------------------------------------- writes --------------------------------------
    def create_employee(self, employee: Employee) -> Employee:
        if employee is None:
            raise BusinessValidationError("Employee cannot be null")
        employee.validate()
        try:
            with self.repository.lock:
                if self.repository.exists_by_id(employee.id):
                    raise BusinessValidationError(f"Employee with ID {employee.id} already exists")
                saved = self.repository.save(employee)
        except DataAccessError as exc:
            logger.error("Failed to create employee %s: %s", employee.id, exc)
            raise ServiceError("Failed to create employee") from exc
        logger.info("Created employee %s", saved.id)
        return saved

    def create_employee_from_strings(
        self,
        id: Any,
        first_name: Optional[str],
        last_name: Optional[str],
        date_of_birth: Any,
        salary: Any,
        join_date: Any,
        department: Optional[str],
    ) -> Employee:
        employee = Employee.from_strings(id, first_name, last_name, date_of_birth, salary, join_date, department)
        return self.create_employee(employee)

    def update_employee(self, employee_id: int, changes: EmployeeChanges) -> Employee:
        with self.repository.lock:
            existing = self.get_employee_by_id(employee_id)
            merged = existing.apply(changes)
            try:
                updated = self.repository.update(merged)
            except EmployeeNotFoundError as exc:
                raise NotFoundError(f"Employee not found with ID: {employee_id}") from exc
            except DataAccessError as exc:
                logger.error("Failed to update employee %s: %s", employee_id, exc)
                raise ServiceError(f"Failed to update employee with ID: {employee_id}") from exc
        logger.info("Updated employee %s (%s)", employee_id, ", ".join(sorted(changes.supplied())) or "no changes")
        return updated

    def delete_employee(self, employee_id: int) -> None:
        try:
            self.repository.delete(employee_id)
        except EmployeeNotFoundError as exc:
            raise NotFoundError(f"Employee not found with ID: {employee_id}") from exc
        except DataAccessError as exc:
            logger.error("Failed to delete employee %s: %s", employee_id, exc)
            raise ServiceError(f"Failed to delete employee with ID: {employee_id}") from exc
        logger.info("Deleted employee %s", employee_id)

    # -------------------------------------- reads --------------------------------------
    def get_employee_by_id(self, employee_id: int) -> Employee:
        if employee_id <= 0:
            raise BusinessValidationError(f"Invalid employee ID: {employee_id}")
        try:
            return self.repository.find_by_id(employee_id)
        except EmployeeNotFoundError as exc:
            raise NotFoundError(f"Employee not found with ID: {employee_id}") from exc
        except DataAccessError as exc:
            logger.error("Failed to load employee %s: %s", employee_id, exc)
            raise ServiceError(f"Failed to retrieve employee with ID: {employee_id}") from exc

    def get_employees(
        self,
        name: Optional[str] = None,
        from_salary: Optional[float] = None,
        to_salary: Optional[float] = None,
    ) -> List[Employee]:
        """Search by name, else by salary range, else return everyone.

        A non-blank ``name`` takes priority over the salary bounds.
        """
        try:
            if name and name.strip():
                return self._search_by_name(name.strip())
            if from_salary is not None or to_salary is not None:
                return self._filter_by_salary(from_salary, to_salary)
            return self.repository.find_all()
        except DataAccessError as exc:
            logger.error("Failed to retrieve employees: %s", exc)
            raise ServiceError("Failed to retrieve employees") from exc

    def get_employees_async(
        self,
        name: Optional[str] = None,
        from_salary: Optional[float] = None,
        to_salary: Optional[float] = None,
    ) -> Future:
        if self.executor is None:
            raise RuntimeError("EmployeeService has no executor configured")
        return self.executor.submit(self.get_employees, name, from_salary, to_salary)

    def get_employees_by_department(self, department: Optional[str]) -> List[Employee]:
        if not department or not department.strip():
            raise BusinessValidationError("Department cannot be empty")
        try:
            return self.repository.find_by_department(department)
        except DataAccessError as exc:
            logger.error("Failed to retrieve employees by department: %s", exc)
            raise ServiceError("Failed to retrieve employees by department") from exc

    # -------------------------------------- helpers --------------------------------------
    def _search_by_name(self, name: str) -> List[Employee]:
        if len(name) < MIN_SEARCH_LENGTH:
            raise BusinessValidationError(f"Search term must be at least {MIN_SEARCH_LENGTH} characters")
        return self.repository.find_by_name_containing(name)

    def _filter_by_salary(self, from_salary: Optional[float], to_salary: Optional[float]) -> List[Employee]:
        if from_salary is not None and from_salary < 0:
            raise BusinessValidationError("Minimum salary cannot be negative")
        if to_salary is not None and to_salary < 0:
            raise BusinessValidationError("Maximum salary cannot be negative")
        if from_salary is not None and to_salary is not None and from_salary > to_salary:
            raise BusinessValidationError("Minimum salary cannot exceed maximum salary")
        return self.repository.find_by_salary_range(from_salary, to_salary)
