#!/usr/bin/env python3
"""
Cadastrar um novo funcionario diretamente no arquivo JSON configurado.

Uso:
  python scripts/add_employee.py --id 7 --first-name Ana --last-name Souza \
      --dob 1990-04-12 --salary 4200.50 --join-date 2015-03-01 --department Engineering [--data-file data/employees.json]
"""
from __future__ import annotations

import argparse
import sys

from employee_api.core.config import get_settings
from employee_api.domain.employees import BusinessValidationError
from employee_api.repositories.json_storage import JsonEmployeeRepository
from employee_api.services.employee_service import EmployeeService


def main() -> None:
    ap = argparse.ArgumentParser(description="Cadastrar funcionario no arquivo JSON")
    ap.add_argument("--id", required=True, help="ID numerico positivo")
    ap.add_argument("--first-name", required=True)
    ap.add_argument("--last-name", required=True)
    ap.add_argument("--dob", required=True, help="Data de nascimento (yyyy-MM-dd)")
    ap.add_argument("--salary", required=True, help="Salario (ex.: 4200.50)")
    ap.add_argument("--join-date", required=True, help="Data de admissao (yyyy-MM-dd)")
    ap.add_argument("--department", required=True)
    ap.add_argument("--data-file", help="Arquivo JSON (default: EMPLOYEE_DATA_FILE)")
    args = ap.parse_args()

    data_file = args.data_file or get_settings().resolved_data_file
    service = EmployeeService(JsonEmployeeRepository(data_file))
    try:
        employee = service.create_employee_from_strings(
            args.id,
            args.first_name,
            args.last_name,
            args.dob,
            args.salary,
            args.join_date,
            args.department,
        )
    except BusinessValidationError as exc:
        raise SystemExit(f"Dados invalidos: {exc.message}")
    print("OK: funcionario cadastrado")
    print(f"  ID: {employee.id}")
    print(f"  Nome: {employee.first_name} {employee.last_name}")
    print(f"  Departamento: {employee.department}")
    print(f"  Salario: {employee.salary:.2f}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
