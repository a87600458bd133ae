"""Process-wide authentication state.

``SessionStore`` is either Unauthenticated or Authenticated. Only login,
signup and logout change it; each change swaps a single immutable
``Session`` reference under a lock, so readers never see a half-written
session. ``CredentialStore`` keeps the credential across restarts.
"""

from __future__ import annotations

import json
import logging
import threading
from enum import Enum
from pathlib import Path

from pydantic import ValidationError

from employee_directory.models.auth import Session, UserInfo

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class CredentialStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def load(self) -> Session | None:
        if not self.path.exists():
            return None
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return Session.model_validate(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None

    def save(self, session: Session) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(session.model_dump_json(), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not persist session to %s: %s", self.path, e)

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove session file %s: %s", self.path, e)


class SessionStore:
    def __init__(self, credentials: CredentialStore | None = None) -> None:
        self._credentials = credentials
        self._lock = threading.Lock()
        # A stored credential is trusted until a protected call is rejected.
        self._session: Session | None = credentials.load() if credentials else None
        if self._session is not None:
            logger.info("Restored session for %s", self._session.user.username)

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def state(self) -> AuthState:
        if self._session is None:
            return AuthState.UNAUTHENTICATED
        return AuthState.AUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def token(self) -> str | None:
        session = self._session
        return session.token if session else None

    @property
    def user(self) -> UserInfo | None:
        session = self._session
        return session.user if session else None

    def login(self, session: Session) -> None:
        self._begin(session)

    def signup(self, session: Session) -> None:
        self._begin(session)

    def logout(self) -> None:
        with self._lock:
            previous = self._session
            self._session = None
            if self._credentials:
                self._credentials.clear()
        if previous is not None:
            logger.info("Logged out %s", previous.user.username)

    def _begin(self, session: Session) -> None:
        with self._lock:
            self._session = session
            if self._credentials:
                self._credentials.save(session)
