from __future__ import annotations

from pydantic import ValidationError

from employee_directory.controllers.auth import sign_out
from employee_directory.controllers.base import Navigator, ScreenController
from employee_directory.core.exceptions import DirectoryError
from employee_directory.core.session import SessionStore
from employee_directory.models.employee import Employee, SearchCriteria
from employee_directory.services.auth_service import AuthService
from employee_directory.services.employee_service import EMPTY_SEARCH_MESSAGE, EmployeeService

SEARCH = "search"

INVALID_CRITERIA_MESSAGE = "Please select a valid department or position."


class SearchEmployeeController(ScreenController):
    def __init__(
        self,
        session: SessionStore,
        employees: EmployeeService,
        auth: AuthService,
        navigate: Navigator | None = None,
    ) -> None:
        super().__init__(session, navigate)
        self.employees = employees
        self.auth = auth
        self.department = ""
        self.position = ""
        self.results: list[Employee] = []
        self.searched = False

    @property
    def loading(self) -> bool:
        return self.is_busy(SEARCH)

    def change(self, field: str, value: str) -> None:
        if field not in ("department", "position"):
            raise ValueError(f"Unknown search field: {field}")
        setattr(self, field, value)
        self.error_message = ""

    def criteria(self) -> SearchCriteria:
        return SearchCriteria(department=self.department, position=self.position)

    def picture_url(self, employee: Employee) -> str | None:
        return self.employees.picture_url(employee.profile_picture)

    async def search(self) -> bool:
        if self.is_busy(SEARCH):
            return False

        try:
            criteria = self.criteria()
        except ValidationError:
            self.error_message = INVALID_CRITERIA_MESSAGE
            return False

        if criteria.is_empty:
            self.error_message = EMPTY_SEARCH_MESSAGE
            return False
        if not self.ensure_authenticated():
            return False

        self.error_message = ""
        with self._running(SEARCH):
            try:
                self.results = await self.employees.search_employees(criteria)
            except DirectoryError as e:
                self._report(e)
                self.results = []
                self.searched = True
                return False

        self.searched = True
        return True

    def reset(self) -> None:
        self.department = ""
        self.position = ""
        self.results = []
        self.searched = False
        self.error_message = ""

    async def logout(self) -> None:
        await sign_out(self.session, self.auth, self.navigate)
