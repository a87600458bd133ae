from __future__ import annotations

from employee_directory.controllers.base import Navigator, ScreenController
from employee_directory.core.exceptions import DirectoryError
from employee_directory.core.session import SessionStore
from employee_directory.models.employee import Employee
from employee_directory.services.employee_service import EmployeeService

LOAD = "load"


class ViewEmployeeController(ScreenController):
    def __init__(
        self,
        session: SessionStore,
        employees: EmployeeService,
        employee_id: str,
        navigate: Navigator | None = None,
    ) -> None:
        super().__init__(session, navigate)
        self.employees = employees
        self.employee_id = employee_id
        self.employee: Employee | None = None
        self.attempted = False

    @property
    def loading(self) -> bool:
        return self.is_busy(LOAD)

    @property
    def picture_url(self) -> str | None:
        if self.employee is None:
            return None
        return self.employees.picture_url(self.employee.profile_picture)

    @property
    def banner(self) -> str:
        if self.error_message:
            return self.error_message
        if self.employee is None and self.attempted and not self.loading:
            return "Employee not found"
        return ""

    async def load(self) -> bool:
        if not self.ensure_authenticated():
            return False

        with self._running(LOAD):
            try:
                self.employee = await self.employees.get_employee(self.employee_id)
            except DirectoryError as e:
                self.employee = None
                self._report(e)
                return False
            finally:
                self.attempted = True

        self.error_message = ""
        return True
