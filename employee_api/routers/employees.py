from __future__ import annotations

import asyncio
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response
from fastapi.concurrency import run_in_threadpool

from employee_api.core.executor import TaskRejectedError
from employee_api.domain.employees import BusinessValidationError, EmployeeChanges
from employee_api.schemas.employee import EmployeeCreate, EmployeeUpdate
from employee_api.services.employee_service import EmployeeService, NotFoundError, ServiceError

router = APIRouter(prefix="/api/employees", tags=["employees"])


def _get_employee_service(request: Request) -> EmployeeService:
    svc = getattr(getattr(request.app, "state", None), "employee_service", None)
    if not svc:
        raise RuntimeError("EmployeeService not configured")
    return svc


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, BusinessValidationError):
        return HTTPException(400, exc.message)
    if isinstance(exc, NotFoundError):
        return HTTPException(404, str(exc))
    if isinstance(exc, TaskRejectedError):
        return HTTPException(503, str(exc))
    return HTTPException(500, str(exc))


@router.post("", status_code=201)
def create_employee(payload: EmployeeCreate, request: Request):
    svc = _get_employee_service(request)
    try:
        employee = svc.create_employee_from_strings(
            payload.id,
            payload.first_name,
            payload.last_name,
            payload.date_of_birth,
            payload.salary,
            payload.join_date,
            payload.department,
        )
    except (BusinessValidationError, ServiceError) as exc:
        raise _http_error(exc)
    return employee.to_dict()


@router.get("")
def list_employees(
    request: Request,
    name: Optional[str] = None,
    min_salary: Optional[float] = Query(None, alias="minSalary"),
    max_salary: Optional[float] = Query(None, alias="maxSalary"),
):
    svc = _get_employee_service(request)
    try:
        employees = svc.get_employees(name, min_salary, max_salary)
    except (BusinessValidationError, ServiceError) as exc:
        raise _http_error(exc)
    return [e.to_dict() for e in employees]


@router.get("/async")
async def list_employees_async(
    request: Request,
    name: Optional[str] = None,
    min_salary: Optional[float] = Query(None, alias="minSalary"),
    max_salary: Optional[float] = Query(None, alias="maxSalary"),
):
    svc = _get_employee_service(request)
    try:
        # submitted from a worker thread: under caller_runs a saturated pool runs
        # the blocking read there instead of on the event loop
        future = await run_in_threadpool(svc.get_employees_async, name, min_salary, max_salary)
        employees = await asyncio.wrap_future(future)
    except (BusinessValidationError, ServiceError, TaskRejectedError) as exc:
        raise _http_error(exc)
    return [e.to_dict() for e in employees]


@router.get("/department/{department}")
def list_employees_by_department(department: str, request: Request):
    svc = _get_employee_service(request)
    try:
        employees = svc.get_employees_by_department(department)
    except (BusinessValidationError, ServiceError) as exc:
        raise _http_error(exc)
    return [e.to_dict() for e in employees]


@router.get("/{employee_id}")
def get_employee(employee_id: int, request: Request):
    svc = _get_employee_service(request)
    try:
        employee = svc.get_employee_by_id(employee_id)
    except (BusinessValidationError, NotFoundError, ServiceError) as exc:
        raise _http_error(exc)
    return employee.to_dict()


@router.put("/{employee_id}")
def update_employee(employee_id: int, payload: EmployeeUpdate, request: Request):
    svc = _get_employee_service(request)
    try:
        changes = EmployeeChanges.from_strings(**payload.model_dump(exclude_none=True))
        employee = svc.update_employee(employee_id, changes)
    except (BusinessValidationError, NotFoundError, ServiceError) as exc:
        raise _http_error(exc)
    return employee.to_dict()


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: int, request: Request):
    svc = _get_employee_service(request)
    try:
        svc.delete_employee(employee_id)
    except (NotFoundError, ServiceError) as exc:
        raise _http_error(exc)
    return Response(status_code=204)
