from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date
from typing import Any

import pytest

from employee_directory.core.config import Settings
from employee_directory.core.exceptions import NotFoundError
from employee_directory.core.session import CredentialStore, SessionStore
from employee_directory.models.auth import Session, UserInfo
from employee_directory.models.upload import ImageUpload
from employee_directory.services.auth_service import AuthService
from employee_directory.services.employee_service import EmployeeService

TEST_API_BASE_URL = "http://localhost:5000/api"

SAMPLE_EMPLOYEES: list[dict[str, Any]] = [
    {
        "_id": "e1",
        "firstName": "Grace",
        "lastName": "Hopper",
        "email": "grace@example.com",
        "phoneNumber": "555-0101",
        "department": "IT",
        "position": "Manager",
        "salary": 120000,
        "dateOfJoining": "2019-05-01T00:00:00.000Z",
        "profilePicture": "/uploads/grace.png",
    },
    {
        "_id": "e2",
        "firstName": "Alan",
        "lastName": "Turing",
        "email": "alan@example.com",
        "phoneNumber": "555-0102",
        "department": "IT",
        "position": "Developer",
        "salary": 98000.5,
        "dateOfJoining": "2020-09-14T00:00:00.000Z",
        "profilePicture": None,
    },
    {
        "_id": "e3",
        "firstName": "Katherine",
        "lastName": "Johnson",
        "email": "katherine@example.com",
        "phoneNumber": "555-0103",
        "department": "Finance",
        "position": "Analyst",
        "salary": 87000,
        "dateOfJoining": "2018-01-08T00:00:00.000Z",
    },
    {
        "_id": "e4",
        "firstName": "Linus",
        "lastName": "Pauling",
        "email": "linus@example.com",
        "phoneNumber": "555-0104",
        "department": "IT",
        "position": "Manager",
        "salary": 110000,
        "dateOfJoining": "2022-11-30T00:00:00.000Z",
        "profilePicture": "https://cdn.example.com/linus.jpg",
    },
    {
        "_id": "e5",
        "firstName": "Hedy",
        "lastName": "Lamarr",
        "email": "hedy@example.com",
        "phoneNumber": "555-0105",
        "department": "Engineering",
        "position": "Manager",
        "salary": 130000,
        "dateOfJoining": "2017-04-21T00:00:00.000Z",
    },
]


@dataclass
class ApiCall:
    method: str
    path: str
    params: dict[str, str] | None
    json_body: Any
    form: dict[str, str] | None
    files: dict[str, ImageUpload] | None
    token: str | None


class FakeDirectoryApi:
    """In-memory stand-in for the directory REST API."""

    def __init__(self, records: list[dict[str, Any]] | None = None, base_url: str = TEST_API_BASE_URL) -> None:
        self.base_url = base_url
        self.records: dict[str, dict[str, Any]] = {r["_id"]: dict(r) for r in records or []}
        self.calls: list[ApiCall] = []
        self.failures: dict[tuple[str, str], Exception] = {}
        self.gate: asyncio.Event | None = None
        self._next_id = 100

    def fail(self, method: str, path: str, error: Exception) -> None:
        self.failures[(method, path)] = error

    def calls_to(self, method: str, path: str | None = None) -> list[ApiCall]:
        return [c for c in self.calls if c.method == method and (path is None or c.path == path)]

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json_body: Any = None,
        form: dict[str, str] | None = None,
        files: dict[str, ImageUpload] | None = None,
        token: str | None = None,
        default_error: str = "Request failed. Please try again.",
    ) -> Any:
        self.calls.append(
            ApiCall(
                method=method,
                path=path,
                params=dict(params) if params else None,
                json_body=json_body,
                form=dict(form) if form is not None else None,
                files=dict(files) if files else None,
                token=token,
            )
        )
        if self.gate is not None:
            await self.gate.wait()

        failure = self.failures.get((method, path))
        if failure is not None:
            raise failure

        if path.startswith("/auth/"):
            return self._auth(path, json_body or {})
        if path == "/employees":
            if method == "GET":
                return [dict(r) for r in self.records.values()]
            return self._save(None, form or {}, files or {})
        if path == "/employees/search":
            wanted = params or {}
            return [dict(r) for r in self.records.values() if all(r.get(k) == v for k, v in wanted.items())]

        employee_id = path.rsplit("/", 1)[-1]
        if employee_id not in self.records:
            raise NotFoundError("Employee not found", 404)
        if method == "GET":
            return dict(self.records[employee_id])
        if method == "PUT":
            return self._save(employee_id, form or {}, files or {})
        del self.records[employee_id]
        return {"message": "Employee deleted successfully"}

    def _save(self, employee_id: str | None, form: dict[str, str], files: dict[str, ImageUpload]) -> dict[str, Any]:
        if employee_id is None:
            self._next_id += 1
            employee_id = f"e{self._next_id}"
            record: dict[str, Any] = {"_id": employee_id, "profilePicture": None}
        else:
            record = self.records[employee_id]

        record.update(form)
        record["salary"] = float(form.get("salary", record.get("salary", 0)))
        record.setdefault("dateOfJoining", date.today().isoformat())
        if "profilePicture" in files:
            record["profilePicture"] = f"/uploads/{files['profilePicture'].filename}"

        self.records[employee_id] = record
        return dict(record)

    def _auth(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        if path == "/auth/logout":
            return {"message": "Logged out"}
        username = body.get("username", "")
        return {
            "token": f"token-{username}",
            "user": {"_id": "u1", "username": username, "email": body.get("email")},
        }


class RouteRecorder:
    def __init__(self) -> None:
        self.routes: list[str] = []

    def __call__(self, route: str) -> None:
        self.routes.append(route)

    @property
    def last(self) -> str | None:
        return self.routes[-1] if self.routes else None


def make_upload(size: int = 16, content_type: str = "image/png", filename: str = "photo.png") -> ImageUpload:
    return ImageUpload(filename=filename, content_type=content_type, content=b"\x89" * size)


@pytest.fixture
def fake_api() -> FakeDirectoryApi:
    return FakeDirectoryApi(SAMPLE_EMPLOYEES)


@pytest.fixture
def employee_service(fake_api) -> EmployeeService:
    return EmployeeService(fake_api)


@pytest.fixture
def auth_service(fake_api) -> AuthService:
    return AuthService(fake_api)


@pytest.fixture
def session_file(tmp_path):
    return tmp_path / "session.json"


@pytest.fixture
def test_settings(session_file) -> Settings:
    return Settings(API_BASE_URL=TEST_API_BASE_URL, SESSION_FILE=session_file)


@pytest.fixture
def active_session() -> Session:
    return Session(token="test-token", user=UserInfo(id="u1", username="tester", email="tester@example.com"))


@pytest.fixture
def session_store(session_file) -> SessionStore:
    return SessionStore(CredentialStore(session_file))


@pytest.fixture
def signed_in(session_store, active_session) -> SessionStore:
    session_store.login(active_session)
    return session_store


@pytest.fixture
def navigator() -> RouteRecorder:
    return RouteRecorder()


@pytest.fixture
def upload_factory():
    return make_upload


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
