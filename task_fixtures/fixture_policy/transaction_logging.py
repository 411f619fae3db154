from pydantic import Field

from task_fixtures.core.logging import sanitize_headers
from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy


class TransactionLoggingPolicy(FixturePolicy):
    """Logs the method, path, expected status and name of each transaction. Never mutates it."""

    log_headers: bool = Field(default=False)

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        expected = transaction.expected_status_code if transaction.expected_status_code is not None else "?"
        self.logger.info(f"{transaction.method} {transaction.full_path} - {expected}")
        self.logger.info(f"Hook name: {transaction.name}")
        if self.log_headers:
            self.logger.debug(f"Request headers: {sanitize_headers(transaction.headers)}")
        return transaction
