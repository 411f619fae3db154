from typing import Any, Dict

from pydantic import Field

from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy


class ReplaceBodyPolicy(FixturePolicy):
    """Replaces the request body with a literal JSON payload.

    Used mostly to send deliberately invalid payloads for 400 cases.
    """

    body: Dict[str, Any] = Field(default_factory=dict)

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        transaction.set_json_body(self.body)
        return transaction
