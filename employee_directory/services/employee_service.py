"""Employee records over the directory REST API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit

from pydantic import ValidationError

from employee_directory.core.exceptions import DraftValidationError, RemoteFailureError
from employee_directory.core.validation import validate_employee_draft, validate_enum_membership
from employee_directory.models.employee import Employee, EmployeeDraft, SearchCriteria
from employee_directory.services.api_client import ApiClient

logger = logging.getLogger(__name__)

LIST_ERROR = "Failed to fetch employees. Please try again."
GET_ERROR = "Failed to fetch employee details. Please try again."
CREATE_ERROR = "Failed to create employee. Please try again."
UPDATE_ERROR = "Failed to update employee. Please try again."
DELETE_ERROR = "Failed to delete employee. Please try again."
SEARCH_ERROR = "Failed to search employees. Please try again."

EMPTY_SEARCH_MESSAGE = "Please select at least one search criteria."

UNEXPECTED_RESPONSE = "Unexpected response from server."


def resolve_picture_url(profile_picture: str | None, api_base_url: str) -> str | None:
    """Absolute URL for a stored picture; relative paths hang off the API host."""
    if not profile_picture:
        return None
    if profile_picture.startswith("http"):
        return profile_picture
    parts = urlsplit(api_base_url)
    path = parts.path.rstrip("/")
    if path.endswith("/api"):
        path = path[: -len("/api")]
    backend_url = urlunsplit((parts.scheme, parts.netloc, path, "", ""))
    if not profile_picture.startswith("/"):
        profile_picture = f"/{profile_picture}"
    return f"{backend_url}{profile_picture}"


class EmployeeService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def picture_url(self, profile_picture: str | None) -> str | None:
        return resolve_picture_url(profile_picture, self.api.base_url)

    async def list_employees(self) -> list[Employee]:
        data = await self.api.request("GET", "/employees", default_error=LIST_ERROR)
        return self._parse_list(data)

    async def get_employee(self, employee_id: str) -> Employee:
        data = await self.api.request("GET", self._record_path(employee_id), default_error=GET_ERROR)
        return self._parse_employee(data)

    async def create_employee(self, draft: EmployeeDraft) -> Employee:
        self._ensure_valid(draft)
        data = await self.api.request(
            "POST",
            "/employees",
            form=draft.to_form_fields(),
            files=self._picture_files(draft),
            default_error=CREATE_ERROR,
        )
        employee = self._parse_employee(data)
        logger.info("Created employee %s", employee.id)
        return employee

    async def update_employee(self, employee_id: str, draft: EmployeeDraft) -> Employee:
        """Full-record replace. The stored picture is kept unless the draft carries a new one."""
        self._ensure_valid(draft)
        data = await self.api.request(
            "PUT",
            self._record_path(employee_id),
            form=draft.to_form_fields(),
            files=self._picture_files(draft),
            default_error=UPDATE_ERROR,
        )
        employee = self._parse_employee(data)
        logger.info("Updated employee %s", employee_id)
        return employee

    async def delete_employee(self, employee_id: str) -> None:
        await self.api.request("DELETE", self._record_path(employee_id), default_error=DELETE_ERROR)
        logger.info("Deleted employee %s", employee_id)

    async def search_employees(self, criteria: SearchCriteria) -> list[Employee]:
        if criteria.is_empty:
            raise DraftValidationError({"criteria": EMPTY_SEARCH_MESSAGE}, EMPTY_SEARCH_MESSAGE)

        data = await self.api.request(
            "GET",
            "/employees/search",
            params=criteria.to_query_params(),
            default_error=SEARCH_ERROR,
        )
        return self._parse_list(data)

    @staticmethod
    def _record_path(employee_id: str) -> str:
        return f"/employees/{quote(str(employee_id), safe='')}"

    @staticmethod
    def _picture_files(draft: EmployeeDraft) -> dict[str, Any]:
        if draft.profile_picture is None:
            return {}
        return {"profilePicture": draft.profile_picture}

    @staticmethod
    def _ensure_valid(draft: EmployeeDraft) -> None:
        errors = validate_employee_draft(draft)
        for field, message in validate_enum_membership(draft).items():
            errors.setdefault(field, message)
        if errors:
            raise DraftValidationError(errors)

    def _parse_list(self, data: Any) -> list[Employee]:
        if not isinstance(data, list):
            raise RemoteFailureError(UNEXPECTED_RESPONSE)
        return [self._parse_employee(item) for item in data]

    @staticmethod
    def _parse_employee(data: Any) -> Employee:
        try:
            return Employee.model_validate(data)
        except ValidationError as e:
            record_id = data.get("_id", data.get("id")) if isinstance(data, dict) else None
            logger.error("Could not parse employee record %s: %s", record_id, e)
            raise RemoteFailureError(UNEXPECTED_RESPONSE) from e
