from pydantic import Field

from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.core.unique import unique_token
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy


class UniqueUserBodyPolicy(FixturePolicy):
    """Replaces the body with a registration payload for a user that does not exist yet."""

    username_prefix: str = Field(default="test_user_")
    email_prefix: str = Field(default="test_")
    email_domain: str = Field(default="example.com")
    password: str = Field(default="password123")

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        token = unique_token()
        transaction.set_json_body(
            {
                "username": f"{self.username_prefix}{token}",
                "email": f"{self.email_prefix}{token}@{self.email_domain}",
                "password": self.password,
            }
        )
        return transaction
