from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Garante que o pacote employee_api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from employee_api.core import config as core_config  # noqa: E402
from employee_api.domain.employees import Employee  # noqa: E402
from employee_api.repositories.json_storage import JsonEmployeeRepository  # noqa: E402
from employee_api.services.employee_service import EmployeeService  # noqa: E402


def make_employee(employee_id: int = 1, **overrides) -> Employee:
    values = {
        "id": employee_id,
        "first_name": "Maria",
        "last_name": "Silva",
        "date_of_birth": date(1985, 5, 20),
        "salary": 5000.0,
        "join_date": date(2010, 1, 15),
        "department": "Engineering",
    }
    values.update(overrides)
    return Employee(**values)


@pytest.fixture()
def employee_factory():
    return make_employee


@pytest.fixture()
def data_file(tmp_path) -> Path:
    return tmp_path / "data" / "employees.json"


@pytest.fixture()
def repo(data_file) -> JsonEmployeeRepository:
    return JsonEmployeeRepository(data_file)


@pytest.fixture()
def service(repo) -> EmployeeService:
    return EmployeeService(repo)


@pytest.fixture()
def env_settings(data_file, monkeypatch):
    """Aponta as settings para um arquivo temporário e limpa o cache."""
    monkeypatch.setenv("EMPLOYEE_DATA_FILE", str(data_file))
    monkeypatch.setenv("ASYNC_CORE_POOL_SIZE", "2")
    monkeypatch.setenv("ASYNC_MAX_POOL_SIZE", "4")
    monkeypatch.setenv("ASYNC_QUEUE_CAPACITY", "10")
    core_config.get_settings.cache_clear()
    yield core_config.get_settings()
    core_config.get_settings.cache_clear()
