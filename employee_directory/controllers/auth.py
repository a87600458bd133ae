from __future__ import annotations

from employee_directory.controllers.base import Navigator, Routes, ScreenController
from employee_directory.core.exceptions import DirectoryError
from employee_directory.core.session import SessionStore
from employee_directory.core.validation import validate_login_draft, validate_signup_draft
from employee_directory.models.auth import LoginDraft, SignupDraft
from employee_directory.services.auth_service import AuthService

SUBMIT = "submit"


async def sign_out(session: SessionStore, auth: AuthService, navigate: Navigator) -> None:
    """Clear local state first; the remote call can fail without undoing it."""
    token = session.token
    session.logout()
    navigate(Routes.LOGIN)
    if token:
        await auth.logout(token)


class SignupController(ScreenController):
    def __init__(self, session: SessionStore, auth: AuthService, navigate: Navigator | None = None) -> None:
        super().__init__(session, navigate)
        self.auth = auth
        self.draft = SignupDraft()
        self.errors: dict[str, str] = {}

    @property
    def loading(self) -> bool:
        return self.is_busy(SUBMIT)

    def change(self, field: str, value: str) -> None:
        setattr(self.draft, field, value)
        self.errors.pop(field, None)
        self.error_message = ""

    def validate(self) -> bool:
        self.errors = validate_signup_draft(self.draft)
        return not self.errors

    async def submit(self) -> bool:
        if self.is_busy(SUBMIT) or not self.validate():
            return False

        self.error_message = ""
        with self._running(SUBMIT):
            try:
                new_session = await self.auth.signup(self.draft.credentials())
            except DirectoryError as e:
                self._report(e)
                return False

        self.session.signup(new_session)
        self.navigate(Routes.EMPLOYEES)
        return True


class LoginController(ScreenController):
    def __init__(self, session: SessionStore, auth: AuthService, navigate: Navigator | None = None) -> None:
        super().__init__(session, navigate)
        self.auth = auth
        self.draft = LoginDraft()
        self.errors: dict[str, str] = {}

    @property
    def loading(self) -> bool:
        return self.is_busy(SUBMIT)

    def change(self, field: str, value: str) -> None:
        setattr(self.draft, field, value)
        self.errors.pop(field, None)
        self.error_message = ""

    def validate(self) -> bool:
        self.errors = validate_login_draft(self.draft)
        return not self.errors

    async def submit(self) -> bool:
        if self.is_busy(SUBMIT) or not self.validate():
            return False

        self.error_message = ""
        with self._running(SUBMIT):
            try:
                new_session = await self.auth.login(self.draft.credentials())
            except DirectoryError as e:
                self._report(e)
                return False

        self.session.login(new_session)
        self.navigate(Routes.EMPLOYEES)
        return True
