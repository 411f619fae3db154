# Defines the FixtureSession shared by every hook in a Dredd run.

from dataclasses import dataclass
from typing import Optional


@dataclass
class FixtureSession:
    """Holds the authenticated state built up during setup.

    Attributes:
        token: Bearer token returned by the login call (without the "Bearer " prefix).
        user_id: Identifier of the authenticated test user.
        task_id: Identifier of the task record seeded during setup.
        username: Username of the setup account.
        email: Email of the setup account.
        password: Password of the setup account.
    """

    token: Optional[str] = None
    user_id: Optional[int] = None
    task_id: Optional[int] = None

    # Credentials of the setup account, reused by the "login 200" fixture
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def bearer_value(self) -> Optional[str]:
        """Returns the Authorization header value for the held token, if any."""
        if not self.token:
            return None
        return f"Bearer {self.token}"
