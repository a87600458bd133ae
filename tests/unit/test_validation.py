from __future__ import annotations

import pytest

from employee_directory.core.validation import (
    validate_employee_draft,
    validate_enum_membership,
    validate_login_draft,
    validate_signup_draft,
)
from employee_directory.models.auth import LoginDraft, SignupDraft
from employee_directory.models.employee import EmployeeDraft


def _valid_draft(**overrides) -> EmployeeDraft:
    values = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone_number": "555-0100",
        "department": "Engineering",
        "position": "Developer",
        "salary": "95000",
    }
    values.update(overrides)
    return EmployeeDraft(**values)


def test_valid_draft_has_no_errors():
    assert validate_employee_draft(_valid_draft()) == {}


def test_missing_first_name_reports_only_that_field():
    errors = validate_employee_draft(_valid_draft(first_name=""))
    assert errors == {"first_name": "First name is required"}


def test_whitespace_only_names_are_blank():
    errors = validate_employee_draft(_valid_draft(first_name="   ", last_name="\t"))
    assert errors["first_name"] == "First name is required"
    assert errors["last_name"] == "Last name is required"


def test_empty_draft_reports_every_required_field():
    errors = validate_employee_draft(EmployeeDraft())
    assert set(errors) == {
        "first_name",
        "last_name",
        "email",
        "phone_number",
        "department",
        "position",
        "salary",
    }
    assert errors["salary"] == "Salary is required"


@pytest.mark.parametrize("email", ["ada.example.com", "ada@example", "ada @example.com"])
def test_malformed_email_is_invalid(email):
    errors = validate_employee_draft(_valid_draft(email=email))
    assert errors == {"email": "Email is invalid"}


def test_short_email_shape_is_accepted():
    assert validate_employee_draft(_valid_draft(email="a@b.c")) == {}


def test_negative_salary_is_rejected():
    errors = validate_employee_draft(_valid_draft(salary="-5"))
    assert errors == {"salary": "Salary must be a positive number"}


@pytest.mark.parametrize("salary", ["0", "0.0", "1e3", "45000.75", " 1200 "])
def test_non_negative_salaries_are_accepted(salary):
    assert validate_employee_draft(_valid_draft(salary=salary)) == {}


@pytest.mark.parametrize("salary", ["abc", "12,000", "nan", "1_000"])
def test_unparseable_salary_is_rejected(salary):
    errors = validate_employee_draft(_valid_draft(salary=salary))
    assert errors == {"salary": "Salary must be a positive number"}


def test_department_presence_only_no_membership_check():
    assert validate_employee_draft(_valid_draft(department="Space Program")) == {}


def test_enum_membership_flags_unknown_values():
    errors = validate_enum_membership(_valid_draft(department="Space Program", position="Astronaut"))
    assert set(errors) == {"department", "position"}


def test_enum_membership_accepts_known_values():
    assert validate_enum_membership(_valid_draft(department="Customer Service", position="Associate")) == {}


def test_valid_signup_draft():
    draft = SignupDraft(username="ada", email="ada@example.com", password="secret1", confirm_password="secret1")
    assert validate_signup_draft(draft) == {}


def test_signup_length_rules():
    draft = SignupDraft(username="ad", email="ada@example.com", password="12345", confirm_password="12345")
    errors = validate_signup_draft(draft)
    assert errors == {
        "username": "Username must be at least 3 characters",
        "password": "Password must be at least 6 characters",
    }


def test_signup_password_mismatch():
    draft = SignupDraft(username="ada", email="ada@example.com", password="secret1", confirm_password="secret2")
    assert validate_signup_draft(draft) == {"confirm_password": "Passwords do not match"}


def test_signup_blank_passwords_do_not_count_as_mismatch():
    errors = validate_signup_draft(SignupDraft())
    assert errors == {
        "username": "Username is required",
        "email": "Email is required",
        "password": "Password is required",
    }


def test_login_requires_both_fields():
    assert validate_login_draft(LoginDraft()) == {
        "username": "Username is required",
        "password": "Password is required",
    }
    assert validate_login_draft(LoginDraft(username="ada", password="x")) == {}
