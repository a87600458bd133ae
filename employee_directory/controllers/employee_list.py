"""Employee list screen: load, refresh, delete with confirmation, logout."""

from __future__ import annotations

from employee_directory.controllers.auth import sign_out
from employee_directory.controllers.base import Confirm, Navigator, ScreenController
from employee_directory.core.exceptions import DirectoryError
from employee_directory.core.session import SessionStore
from employee_directory.models.employee import Employee
from employee_directory.services.auth_service import AuthService
from employee_directory.services.employee_service import EmployeeService

DELETE_CONFIRMATION = "Are you sure you want to delete this employee?"

LOAD = "load"


def _delete_action(employee_id: str) -> str:
    return f"delete:{employee_id}"


class EmployeeListController(ScreenController):
    def __init__(
        self,
        session: SessionStore,
        employees: EmployeeService,
        auth: AuthService,
        confirm: Confirm,
        navigate: Navigator | None = None,
    ) -> None:
        super().__init__(session, navigate)
        self.employees = employees
        self.auth = auth
        self.confirm = confirm
        self.items: list[Employee] = []

    @property
    def loading(self) -> bool:
        return self.is_busy(LOAD)

    def is_deleting(self, employee_id: str) -> bool:
        return self.is_busy(_delete_action(employee_id))

    def picture_url(self, employee: Employee) -> str | None:
        return self.employees.picture_url(employee.profile_picture)

    async def load(self) -> bool:
        if self.is_busy(LOAD) or not self.ensure_authenticated():
            return False

        with self._running(LOAD):
            try:
                self.items = await self.employees.list_employees()
            except DirectoryError as e:
                self._report(e)
                return False

        self.error_message = ""
        return True

    async def refresh(self) -> bool:
        return await self.load()

    async def delete(self, employee_id: str) -> bool:
        """Delete one row. Declining the confirmation ends the flow with no call made."""
        action = _delete_action(employee_id)
        if self.is_busy(action) or not self.ensure_authenticated():
            return False
        if not self.confirm(DELETE_CONFIRMATION):
            return False

        with self._running(action):
            try:
                await self.employees.delete_employee(employee_id)
            except DirectoryError as e:
                self._report(e)
                return False

        # Removed locally without a re-fetch; refresh() reconciles with the API.
        self.items = [item for item in self.items if item.id != employee_id]
        return True

    async def logout(self) -> None:
        await sign_out(self.session, self.auth, self.navigate)
