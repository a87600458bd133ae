"""Shared screen-controller plumbing: banner errors, auth gating and in-flight actions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from employee_directory.core.exceptions import AuthenticationError, DirectoryError
from employee_directory.core.session import SessionStore

logger = logging.getLogger(__name__)

Navigator = Callable[[str], None]
Confirm = Callable[[str], bool]


class Routes:
    LOGIN = "/login"
    EMPLOYEES = "/employees"


def _stay(route: str) -> None:
    return None


class ScreenController:
    def __init__(self, session: SessionStore, navigate: Navigator | None = None) -> None:
        self.session = session
        self.navigate: Navigator = navigate or _stay
        self.error_message = ""
        self._in_flight: set[str] = set()

    def is_busy(self, action: str) -> bool:
        return action in self._in_flight

    @contextmanager
    def _running(self, action: str) -> Iterator[None]:
        self._in_flight.add(action)
        try:
            yield
        finally:
            self._in_flight.discard(action)

    def dismiss_error(self) -> None:
        self.error_message = ""

    def ensure_authenticated(self) -> bool:
        if self.session.is_authenticated:
            return True
        self.navigate(Routes.LOGIN)
        return False

    def _report(self, error: DirectoryError) -> None:
        self.error_message = error.message
        if isinstance(error, AuthenticationError) and self.session.is_authenticated:
            logger.warning("Session rejected by the API, signing out")
            self.session.logout()
            self.navigate(Routes.LOGIN)
