# Sources of bearer tokens for the setup account.

import abc
import logging
import time
from typing import Callable, Optional

from task_fixtures.api.client import TaskApiClient
from task_fixtures.api.datatypes import LoginResponse, UserCredentials
from task_fixtures.exceptions import NoTokenError

logger = logging.getLogger(__name__)

# Tokens issued by the service live for 24 hours; refresh well before that.
DEFAULT_TOKEN_LIFETIME_SECONDS = 55 * 60


class TokenSource(abc.ABC):
    """Produces a bearer token (without the "Bearer " prefix)."""

    @abc.abstractmethod
    async def bearer_token(self, client: TaskApiClient) -> str:
        """
        Returns a bearer token, fetching one through ``client`` if needed.

        Raises:
            NoTokenError: If no token can be produced.
            ApiResponseError: If the service rejects the request for a token.
        """
        raise NotImplementedError


class StaticTokenSource(TokenSource):
    """Hands out a pre-issued token."""

    def __init__(self, token: str):
        if not token:
            raise NoTokenError("StaticTokenSource requires a non-empty token.")
        self.token = token

    async def bearer_token(self, client: TaskApiClient) -> str:
        return self.token


class LoginTokenSource(TokenSource):
    """Logs in with fixed credentials and caches the token for ``lifetime_seconds``.

    Attributes:
        credentials: Email and password of the account.
        last_response: The most recent successful login response, if any.
    """

    def __init__(
        self,
        credentials: UserCredentials,
        lifetime_seconds: float = DEFAULT_TOKEN_LIFETIME_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.credentials = credentials
        self.lifetime_seconds = lifetime_seconds
        self.clock = clock
        self.last_response: Optional[LoginResponse] = None
        self._token: Optional[str] = None
        self._expires_at: float = 0.0

    @property
    def user_id(self) -> Optional[int]:
        if self.last_response is None or self.last_response.user is None:
            return None
        return self.last_response.user.id

    async def bearer_token(self, client: TaskApiClient) -> str:
        if self._token and self.clock() < self._expires_at:
            return self._token

        logger.info(f"Requesting a new token for '{self.credentials.email}'")
        response = await client.login(self.credentials)
        self.last_response = response
        self._token = response.token
        self._expires_at = self.clock() + self.lifetime_seconds
        return self._token
