"""Employee models: parsed records, form drafts and search criteria."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from employee_directory.models.upload import ImageUpload


class Department(str, Enum):
    IT = "IT"
    HR = "HR"
    FINANCE = "Finance"
    MARKETING = "Marketing"
    SALES = "Sales"
    OPERATIONS = "Operations"
    ENGINEERING = "Engineering"
    CUSTOMER_SERVICE = "Customer Service"


class Position(str, Enum):
    MANAGER = "Manager"
    DEVELOPER = "Developer"
    DESIGNER = "Designer"
    ANALYST = "Analyst"
    COORDINATOR = "Coordinator"
    SPECIALIST = "Specialist"
    DIRECTOR = "Director"
    ASSOCIATE = "Associate"


class Employee(BaseModel):
    """Employee record as returned by the directory API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    phone_number: str = Field(alias="phoneNumber")
    department: Department
    position: Position
    salary: float
    date_of_joining: date | None = Field(default=None, alias="dateOfJoining")
    profile_picture: str | None = Field(default=None, alias="profilePicture")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("date_of_joining", mode="before")
    @classmethod
    def _strip_time(cls, value: Any) -> Any:
        # The API stores a full timestamp; only the calendar date matters.
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


def _format_salary(salary: float) -> str:
    if float(salary).is_integer():
        return str(int(salary))
    return str(salary)


class EmployeeDraft(BaseModel):
    """In-progress employee form. Values are kept as the user typed them."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone_number: str = Field(default="", alias="phoneNumber")
    department: str = ""
    position: str = ""
    salary: str = ""
    date_of_joining: str | None = Field(
        default_factory=lambda: date.today().isoformat(),
        alias="dateOfJoining",
    )
    profile_picture: ImageUpload | None = Field(default=None, alias="profilePicture")

    @classmethod
    def from_employee(cls, employee: Employee) -> EmployeeDraft:
        return cls(
            first_name=employee.first_name or "",
            last_name=employee.last_name or "",
            email=employee.email or "",
            phone_number=employee.phone_number or "",
            department=employee.department.value,
            position=employee.position.value,
            salary=_format_salary(employee.salary),
            date_of_joining=employee.date_of_joining.isoformat() if employee.date_of_joining else None,
        )

    def to_form_fields(self) -> dict[str, str]:
        """Scalar multipart fields keyed by wire name; unset values are left out."""
        data = self.model_dump(by_alias=True, exclude={"profile_picture"}, exclude_none=True)
        return {key: str(value) for key, value in data.items()}


class SearchCriteria(BaseModel):
    department: Department | None = None
    position: Position | None = None

    @field_validator("department", "position", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_empty(self) -> bool:
        return self.department is None and self.position is None

    def to_query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.department is not None:
            params["department"] = self.department.value
        if self.position is not None:
            params["position"] = self.position.value
        return params
