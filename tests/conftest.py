import itertools
import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from task_fixtures.core.dependency_container import DependencyContainer
from task_fixtures.core.session import FixtureSession
from task_fixtures.settings import Settings

BASE_URL = "http://testserver"

FIXTURE_ENV_VARS = [
    "API_BASE_URL",
    "API_TIMEOUT_SECONDS",
    "TEST_USER_PASSWORD",
    "API_STATIC_TOKEN",
    "FIXTURE_TABLE_FILEPATH",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_fixture_env(monkeypatch):
    """AUTOUSE: Removes fixture settings a developer's .env may have loaded into the environment."""
    for env_var in FIXTURE_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)


class FakeTaskService:
    """In-memory stand-in for the task-management API, served through httpx.MockTransport.

    ``failures`` maps "METHOD /path" to a handler that replaces the normal
    behaviour for that route; it may return a response or raise.
    """

    def __init__(self, token: str = "fake-jwt-token"):
        self.token = token
        self.users: Dict[str, Dict[str, Any]] = {}
        self.tasks: Dict[int, Dict[str, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.failures: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self._user_ids = itertools.count(7)
        self._task_ids = itertools.count(42)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key in self.failures:
            return self.failures[key](request)

        if key == "POST /register":
            return self._register(json.loads(request.content))
        if key == "POST /login":
            return self._login(json.loads(request.content))
        if request.url.path.startswith("/tasks"):
            if request.headers.get("Authorization") != f"Bearer {self.token}":
                return httpx.Response(401, json={"error": "unauthorized"})
            if key == "POST /tasks":
                task_id = next(self._task_ids)
                self.tasks[task_id] = {"id": task_id, **json.loads(request.content)}
                return httpx.Response(201, json=self.tasks[task_id])
            if request.method == "DELETE":
                task_id = int(request.url.path.rsplit("/", 1)[-1])
                if self.tasks.pop(task_id, None) is None:
                    return httpx.Response(404, json={"error": "task not found"})
                return httpx.Response(200, json={"message": "deleted"})
        return httpx.Response(404, json={"error": "not found"})

    def _register(self, body: Dict[str, Any]) -> httpx.Response:
        if body["email"] in self.users:
            return httpx.Response(400, json={"error": "user already exists"})
        user = {"id": next(self._user_ids), "username": body["username"], "email": body["email"]}
        self.users[body["email"]] = {**user, "password": body["password"]}
        return httpx.Response(201, json=user)

    def _login(self, body: Dict[str, Any]) -> httpx.Response:
        user = self.users.get(body.get("email", ""))
        if user is None or user["password"] != body.get("password"):
            return httpx.Response(401, json={"error": "invalid credentials"})
        public_user = {k: v for k, v in user.items() if k != "password"}
        return httpx.Response(200, json={"token": self.token, "user": public_user})

    def calls(self, method: str, path_prefix: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path.startswith(path_prefix)]


@pytest.fixture
def fake_service() -> FakeTaskService:
    return FakeTaskService()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def container(settings: Settings, fake_service: FakeTaskService) -> DependencyContainer:
    """A real DependencyContainer whose HTTP clients talk to the fake service."""

    def http_client_factory(_settings: Settings) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(fake_service))

    return DependencyContainer(settings, http_client_factory=http_client_factory)


@pytest.fixture
def session() -> FixtureSession:
    """A session as it looks after a fully successful setup."""
    return FixtureSession(
        token="setup-token",
        user_id=7,
        task_id=42,
        username="dredd_test_1",
        email="dredd_test_1@test.com",
        password="test123456",
    )


@pytest.fixture
def make_raw_transaction() -> Callable[..., Dict[str, Any]]:
    """Builds a transaction mapping shaped like the ones Dredd hands to hooks."""

    def _make(
        name: str = "/tasks > Get user tasks > 200 > application/json",
        method: str = "GET",
        path: str = "/tasks",
        body: str = "",
        headers: Optional[Dict[str, str]] = None,
        status: str = "200",
    ) -> Dict[str, Any]:
        return {
            "name": name,
            "fullPath": path,
            "request": {
                "method": method,
                "uri": path,
                "headers": dict(headers or {"Content-Type": "application/json"}),
                "body": body,
            },
            "expected": {"statusCode": status, "headers": {}, "body": ""},
        }

    return _make
