from pydantic import Field

from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy

INVALID_BEARER_VALUE = "Bearer invalid_token_here"


class InvalidTokenPolicy(FixturePolicy):
    """Overrides the Authorization header with a token the service must reject (401 cases)."""

    header_value: str = Field(default=INVALID_BEARER_VALUE)

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        transaction.set_header("Authorization", self.header_value)
        return transaction
