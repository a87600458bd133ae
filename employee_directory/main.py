from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from employee_directory.controllers.auth import LoginController, SignupController
from employee_directory.controllers.base import Confirm, Navigator
from employee_directory.controllers.employee_form import AddEmployeeController, EditEmployeeController
from employee_directory.controllers.employee_list import EmployeeListController
from employee_directory.controllers.employee_search import SearchEmployeeController
from employee_directory.controllers.employee_view import ViewEmployeeController
from employee_directory.core.config import Settings, settings
from employee_directory.core.session import CredentialStore, SessionStore
from employee_directory.services.api_client import ApiClient
from employee_directory.services.auth_service import AuthService
from employee_directory.services.employee_service import EmployeeService
from employee_directory.services.image_intake import ImageIntakeGuard

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(config: Settings) -> None:
    level = logging.DEBUG if config.DEBUG else getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


class DirectoryApp:
    """Wires settings, transport, services and the session store together."""

    def __init__(self, config: Settings) -> None:
        self.settings = config
        self.session = SessionStore(CredentialStore(config.SESSION_FILE))
        self.api = ApiClient()
        self.employees = EmployeeService(self.api)
        self.auth = AuthService(self.api)
        self.intake = ImageIntakeGuard(max_size=config.MAX_UPLOAD_BYTES)

    async def initialize(self) -> None:
        await self.api.initialize(self.settings, token_provider=lambda: self.session.token)
        logger.info("DirectoryApp started (authenticated=%s)", self.session.is_authenticated)

    async def close(self) -> None:
        await self.api.close()

    def employee_list(self, confirm: Confirm, navigate: Navigator | None = None) -> EmployeeListController:
        return EmployeeListController(self.session, self.employees, self.auth, confirm, navigate)

    def add_employee(self, navigate: Navigator | None = None) -> AddEmployeeController:
        return AddEmployeeController(self.session, self.employees, navigate, self.intake)

    def edit_employee(self, employee_id: str, navigate: Navigator | None = None) -> EditEmployeeController:
        return EditEmployeeController(self.session, self.employees, employee_id, navigate, self.intake)

    def view_employee(self, employee_id: str, navigate: Navigator | None = None) -> ViewEmployeeController:
        return ViewEmployeeController(self.session, self.employees, employee_id, navigate)

    def search_employees(self, navigate: Navigator | None = None) -> SearchEmployeeController:
        return SearchEmployeeController(self.session, self.employees, self.auth, navigate)

    def signup(self, navigate: Navigator | None = None) -> SignupController:
        return SignupController(self.session, self.auth, navigate)

    def login(self, navigate: Navigator | None = None) -> LoginController:
        return LoginController(self.session, self.auth, navigate)


@asynccontextmanager
async def lifespan(config: Settings = settings) -> AsyncIterator[DirectoryApp]:
    app = DirectoryApp(config)
    await app.initialize()
    try:
        yield app
    finally:
        await app.close()
