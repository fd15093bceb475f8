from __future__ import annotations

from datetime import date

import pytest

from employee_api.domain.employees import (
    BusinessValidationError,
    Employee,
    EmployeeChanges,
    shift_years,
)

TODAY = date(2024, 6, 15)


def _employee(**overrides) -> Employee:
    values = dict(
        id=1,
        first_name="Maria",
        last_name="Silva",
        date_of_birth=date(1985, 5, 20),
        salary=5000.0,
        join_date=date(2010, 1, 15),
        department="Engineering",
        today=TODAY,
    )
    values.update(overrides)
    return Employee(**values)


def test_valid_employee_round_trips_through_persisted_form():
    emp = _employee(first_name="  Maria ", department=" Sales ", salary=1234.5)
    data = emp.to_dict()

    assert data == {
        "id": 1,
        "firstName": "Maria",
        "lastName": "Silva",
        "dateOfBirth": "1985-05-20",
        "salary": 1234.5,
        "joinDate": "2010-01-15",
        "department": "Sales",
    }
    assert Employee.from_dict(data, today=TODAY) == emp
    assert Employee.from_dict(data, today=TODAY).to_dict() == data


def test_salary_is_rounded_to_cents():
    assert _employee(salary=1234.567).salary == 1234.57
    assert _employee(salary=10.005).salary == 10.01
    assert _employee(salary=0).salary == 0.0


@pytest.mark.parametrize("salary", [-0.01, -0.004, 1_000_000.01, 1_000_000.004])
def test_salary_out_of_bounds_is_rejected(salary):
    with pytest.raises(BusinessValidationError):
        _employee(salary=salary)


@pytest.mark.parametrize("salary", [1e26, 1e30, 1e300])
def test_huge_salary_is_rejected_as_over_limit(salary):
    with pytest.raises(BusinessValidationError, match="exceeds maximum limit"):
        _employee(salary=salary)
    with pytest.raises(BusinessValidationError, match="exceeds maximum limit"):
        Employee.from_strings(1, "Maria", "Silva", "1985-05-20", str(salary), "2010-01-15", "Sales", today=TODAY)


def test_salary_upper_bound_is_inclusive():
    assert _employee(salary=1_000_000).salary == 1_000_000.0


def test_exactly_eighteen_years_old_is_accepted():
    emp = _employee(date_of_birth=date(2006, 6, 15), join_date=date(2024, 6, 15))
    assert emp.date_of_birth == date(2006, 6, 15)


def test_one_day_short_of_eighteen_is_rejected():
    with pytest.raises(BusinessValidationError, match="at least 18 years old"):
        _employee(date_of_birth=date(2006, 6, 16), join_date=date(2024, 6, 15))


def test_join_date_before_eighteenth_birthday_is_rejected():
    with pytest.raises(BusinessValidationError, match="at join date"):
        _employee(date_of_birth=date(1990, 3, 10), join_date=date(2008, 3, 9))


def test_join_date_on_eighteenth_birthday_is_accepted():
    emp = _employee(date_of_birth=date(1990, 3, 10), join_date=date(2008, 3, 10))
    assert emp.join_date == date(2008, 3, 10)


def test_join_date_in_future_is_rejected():
    with pytest.raises(BusinessValidationError, match="future"):
        _employee(join_date=date(2024, 6, 16))


def test_leap_day_birthday_reaches_majority_on_feb_28():
    assert shift_years(date(2000, 2, 29), 18) == date(2018, 2, 28)
    emp = _employee(date_of_birth=date(2000, 2, 29), join_date=date(2018, 2, 28))
    assert emp.join_date == date(2018, 2, 28)


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("id", 0, "ID must be a positive number"),
        ("id", -3, "ID must be a positive number"),
        ("first_name", "A", "First name must be between 2 and 50 characters"),
        ("first_name", "   ", "First name is required"),
        ("last_name", "x" * 51, "Last name must be between 2 and 50 characters"),
        ("last_name", None, "Last name is required"),
        ("department", "  ", "Department is required"),
        ("date_of_birth", None, "Date of birth is required"),
        ("join_date", None, "Join date is required"),
    ],
)
def test_field_rules(field, value, message):
    with pytest.raises(BusinessValidationError) as excinfo:
        _employee(**{field: value})
    assert excinfo.value.message == message


def test_names_are_trimmed_before_length_check():
    emp = _employee(first_name="  Jo  ")
    assert emp.first_name == "Jo"


def test_employee_is_immutable():
    emp = _employee()
    with pytest.raises(AttributeError):
        emp.salary = 10  # type: ignore[misc]


def test_from_strings_parses_iso_dates_and_numeric_salary():
    emp = Employee.from_strings("7", "Ana", "Souza", "1990-04-12", "4200.505", "2015-03-01", "Finance", today=TODAY)
    assert emp.id == 7
    assert emp.date_of_birth == date(1990, 4, 12)
    assert emp.salary == 4200.51


@pytest.mark.parametrize("dob", ["12/04/1990", "1990-4-12", "1990-02-30", "", None])
def test_from_strings_rejects_malformed_dates(dob):
    with pytest.raises(BusinessValidationError, match="Invalid date format"):
        Employee.from_strings(7, "Ana", "Souza", dob, "4200", "2015-03-01", "Finance", today=TODAY)


@pytest.mark.parametrize("salary", ["abc", "", "nan", "inf", None, True])
def test_from_strings_rejects_malformed_salary(salary):
    with pytest.raises(BusinessValidationError, match="Invalid salary format"):
        Employee.from_strings(7, "Ana", "Souza", "1990-04-12", salary, "2015-03-01", "Finance", today=TODAY)


def test_from_dict_reports_missing_field():
    data = _employee().to_dict()
    del data["department"]
    with pytest.raises(BusinessValidationError, match="Missing field: department"):
        Employee.from_dict(data, today=TODAY)


def test_apply_overlays_only_supplied_fields():
    emp = _employee()
    updated = emp.apply(EmployeeChanges(last_name="Costa", salary=0.0), today=TODAY)

    assert updated.last_name == "Costa"
    assert updated.salary == 0.0
    assert updated.first_name == emp.first_name
    assert updated.department == emp.department
    assert emp.last_name == "Silva"


def test_apply_validates_the_merged_record_as_a_whole():
    emp = _employee(date_of_birth=date(1985, 5, 20), join_date=date(2010, 1, 15))
    # each value is fine alone; together the join date precedes the 18th birthday
    changes = EmployeeChanges(date_of_birth=date(1995, 1, 1), join_date=date(2012, 1, 1))
    with pytest.raises(BusinessValidationError, match="at join date"):
        emp.apply(changes, today=TODAY)


def test_apply_rejects_blank_strings_instead_of_ignoring_them():
    with pytest.raises(BusinessValidationError, match="Department is required"):
        _employee().apply(EmployeeChanges(department="   "), today=TODAY)


def test_changes_from_strings_parses_and_rejects_unknown_fields():
    changes = EmployeeChanges.from_strings(salary="3000", join_date="2011-02-03")
    assert changes.supplied() == {"salary": 3000.0, "join_date": date(2011, 2, 3)}
    assert EmployeeChanges().is_empty()

    with pytest.raises(BusinessValidationError, match="Unknown field"):
        EmployeeChanges.from_strings(nickname="Mari")


def test_validate_detects_drift_against_a_later_today():
    emp = _employee(join_date=date(2024, 6, 15))
    emp.validate(today=TODAY)
    with pytest.raises(BusinessValidationError, match="future"):
        emp.validate(today=date(2024, 6, 14))
