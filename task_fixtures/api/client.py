import logging
from typing import Any, Dict

import httpx
from pydantic import ValidationError

from task_fixtures.api.datatypes import LoginResponse, RegisterRequest, TaskCreate, TaskRecord, UserCredentials
from task_fixtures.exceptions import ApiResponseError

logger = logging.getLogger(__name__)


class TaskApiClient:
    """Thin async client for the endpoints the fixtures call directly.

    Every method raises ApiResponseError when the service answers with a
    non-2xx status, and lets httpx.HTTPError propagate for transport failures.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client

    @staticmethod
    def _auth_headers(token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        raise ApiResponseError(
            f"{action} failed with status {response.status_code}",
            status_code=response.status_code,
            detail=response.text,
        )

    @staticmethod
    def _json(response: httpx.Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ApiResponseError(
                f"{action} returned a non-JSON body", status_code=response.status_code, detail=response.text
            ) from e

    async def register(self, request: RegisterRequest) -> Dict[str, Any]:
        logger.debug(f"Registering user '{request.username}'")
        response = await self.http_client.post("/register", json=request.model_dump())
        self._raise_for_status(response, "Registration")
        if not response.content:
            return {}
        return self._json(response, "Registration")

    async def login(self, credentials: UserCredentials) -> LoginResponse:
        logger.debug(f"Logging in as '{credentials.email}'")
        response = await self.http_client.post("/login", json=credentials.model_dump())
        self._raise_for_status(response, "Login")
        data = self._json(response, "Login")
        try:
            return LoginResponse.model_validate(data)
        except ValidationError as e:
            raise ApiResponseError(
                f"Login response did not match the expected shape: {e}",
                status_code=response.status_code,
                detail=response.text,
            ) from e

    async def create_task(self, token: str, task: TaskCreate) -> TaskRecord:
        response = await self.http_client.post("/tasks", json=task.model_dump(), headers=self._auth_headers(token))
        self._raise_for_status(response, "Task creation")
        if response.status_code != httpx.codes.CREATED:
            raise ApiResponseError(
                f"Task creation returned {response.status_code} instead of 201",
                status_code=response.status_code,
                detail=response.text,
            )
        data = self._json(response, "Task creation")
        try:
            return TaskRecord.model_validate(data)
        except ValidationError as e:
            raise ApiResponseError(
                f"Task creation response did not match the expected shape: {e}",
                status_code=response.status_code,
                detail=response.text,
            ) from e

    async def delete_task(self, token: str, task_id: int) -> None:
        response = await self.http_client.delete(f"/tasks/{task_id}", headers=self._auth_headers(token))
        self._raise_for_status(response, "Task deletion")
