"""Add and edit employee screens."""

from __future__ import annotations

from abc import ABC, abstractmethod

from employee_directory.controllers.base import Navigator, Routes, ScreenController
from employee_directory.core.exceptions import DirectoryError
from employee_directory.core.session import SessionStore
from employee_directory.core.validation import validate_employee_draft
from employee_directory.models.employee import Department, EmployeeDraft, Position
from employee_directory.models.upload import ImageUpload
from employee_directory.services.employee_service import EmployeeService
from employee_directory.services.image_intake import ImageIntakeGuard, image_intake

SUBMIT = "submit"
LOAD = "load"

DEPARTMENTS = [d.value for d in Department]
POSITIONS = [p.value for p in Position]


class EmployeeFormController(ScreenController, ABC):
    """Shared form state for the add and edit screens; subclasses decide how to save."""

    def __init__(
        self,
        session: SessionStore,
        employees: EmployeeService,
        navigate: Navigator | None = None,
        intake: ImageIntakeGuard = image_intake,
    ) -> None:
        super().__init__(session, navigate)
        self.employees = employees
        self.intake = intake
        self.draft = EmployeeDraft()
        self.errors: dict[str, str] = {}
        self.preview: str | None = None

    @property
    def loading(self) -> bool:
        return self.is_busy(SUBMIT)

    def change(self, field: str, value: str) -> None:
        if field == "profile_picture":
            raise ValueError("Use choose_picture() to attach a profile picture")
        setattr(self.draft, field, value)
        self.errors.pop(field, None)
        self.error_message = ""

    def choose_picture(self, upload: ImageUpload) -> bool:
        decision = self.intake.accept_upload(upload)
        if not decision.accepted:
            self.error_message = decision.message or ""
            return False

        self.draft.profile_picture = decision.file
        self.preview = upload.to_data_uri()
        self.error_message = ""
        return True

    def validate(self) -> bool:
        self.errors = validate_employee_draft(self.draft)
        return not self.errors

    async def submit(self) -> bool:
        if self.is_busy(SUBMIT) or not self.validate():
            return False
        if not self.ensure_authenticated():
            return False

        self.error_message = ""
        with self._running(SUBMIT):
            try:
                await self._save()
            except DirectoryError as e:
                self._report(e)
                return False

        self.navigate(Routes.EMPLOYEES)
        return True

    def cancel(self) -> None:
        self.navigate(Routes.EMPLOYEES)

    @abstractmethod
    async def _save(self) -> None:
        ...


class AddEmployeeController(EmployeeFormController):
    async def _save(self) -> None:
        await self.employees.create_employee(self.draft)


class EditEmployeeController(EmployeeFormController):
    def __init__(
        self,
        session: SessionStore,
        employees: EmployeeService,
        employee_id: str,
        navigate: Navigator | None = None,
        intake: ImageIntakeGuard = image_intake,
    ) -> None:
        super().__init__(session, employees, navigate, intake)
        self.employee_id = employee_id
        self.current_picture: str | None = None

    @property
    def fetching(self) -> bool:
        return self.is_busy(LOAD)

    async def load(self) -> bool:
        if not self.ensure_authenticated():
            return False

        with self._running(LOAD):
            try:
                employee = await self.employees.get_employee(self.employee_id)
            except DirectoryError as e:
                self._report(e)
                return False

        self.draft = EmployeeDraft.from_employee(employee)
        self.errors = {}
        self.current_picture = self.employees.picture_url(employee.profile_picture)
        self.preview = self.current_picture
        return True

    async def _save(self) -> None:
        await self.employees.update_employee(self.employee_id, self.draft)
