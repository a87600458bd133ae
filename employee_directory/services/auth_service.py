"""Signup, login and logout against the directory API."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from employee_directory.core.exceptions import DirectoryError, RemoteFailureError
from employee_directory.models.auth import LoginCredentials, Session, SignupCredentials
from employee_directory.services.api_client import ApiClient

logger = logging.getLogger(__name__)

SIGNUP_ERROR = "Signup failed. Please try again."
LOGIN_ERROR = "Login failed. Please try again."


class AuthService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def signup(self, credentials: SignupCredentials) -> Session:
        data = await self.api.request(
            "POST",
            "/auth/signup",
            json_body=credentials.model_dump(),
            default_error=SIGNUP_ERROR,
        )
        session = self._parse_session(data)
        logger.info("Signed up user %s", session.user.username)
        return session

    async def login(self, credentials: LoginCredentials) -> Session:
        data = await self.api.request(
            "POST",
            "/auth/login",
            json_body=credentials.model_dump(),
            default_error=LOGIN_ERROR,
        )
        session = self._parse_session(data)
        logger.info("Logged in user %s", session.user.username)
        return session

    async def logout(self, token: str | None = None) -> bool:
        """Tell the API the token is done with. Failure only gets logged."""
        try:
            await self.api.request("POST", "/auth/logout", token=token)
        except DirectoryError as e:
            logger.warning("Remote logout failed: %s", e.message)
            return False
        return True

    @staticmethod
    def _parse_session(data: Any) -> Session:
        try:
            return Session.model_validate(data)
        except ValidationError as e:
            logger.error("Could not parse session response: %s", e)
            raise RemoteFailureError("Unexpected response from server.") from e
