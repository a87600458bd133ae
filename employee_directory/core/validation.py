"""Field-level validation for employee, signup and login drafts.

Every rule runs on every call so the caller can show all problems at once.
An empty mapping means the draft is valid.
"""

from __future__ import annotations

import math
import re

from employee_directory.models.auth import LoginDraft, SignupDraft
from employee_directory.models.employee import Department, EmployeeDraft, Position

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def _is_valid_salary(value: str) -> bool:
    # float() allows digit-group underscores, the API does not
    if "_" in value:
        return False
    try:
        salary = float(value)
    except ValueError:
        return False
    return not math.isnan(salary) and salary >= 0


def validate_employee_draft(draft: EmployeeDraft) -> dict[str, str]:
    errors: dict[str, str] = {}

    if _is_blank(draft.first_name):
        errors["first_name"] = "First name is required"
    if _is_blank(draft.last_name):
        errors["last_name"] = "Last name is required"

    if _is_blank(draft.email):
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(draft.email):
        errors["email"] = "Email is invalid"

    if _is_blank(draft.phone_number):
        errors["phone_number"] = "Phone number is required"

    if not draft.department:
        errors["department"] = "Department is required"
    if not draft.position:
        errors["position"] = "Position is required"

    if _is_blank(draft.salary):
        errors["salary"] = "Salary is required"
    elif not _is_valid_salary(draft.salary):
        errors["salary"] = "Salary must be a positive number"

    return errors


def validate_enum_membership(draft: EmployeeDraft) -> dict[str, str]:
    """Reject department/position values outside the fixed sets."""
    errors: dict[str, str] = {}
    if draft.department and draft.department not in {d.value for d in Department}:
        errors["department"] = f"Unknown department: {draft.department}"
    if draft.position and draft.position not in {p.value for p in Position}:
        errors["position"] = f"Unknown position: {draft.position}"
    return errors


def validate_signup_draft(draft: SignupDraft) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not draft.username:
        errors["username"] = "Username is required"
    elif len(draft.username) < MIN_USERNAME_LENGTH:
        errors["username"] = f"Username must be at least {MIN_USERNAME_LENGTH} characters"

    if not draft.email:
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.search(draft.email):
        errors["email"] = "Email is invalid"

    if not draft.password:
        errors["password"] = "Password is required"
    elif len(draft.password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

    if draft.password != draft.confirm_password:
        errors["confirm_password"] = "Passwords do not match"

    return errors


def validate_login_draft(draft: LoginDraft) -> dict[str, str]:
    errors: dict[str, str] = {}
    if _is_blank(draft.username):
        errors["username"] = "Username is required"
    if not draft.password:
        errors["password"] = "Password is required"
    return errors
