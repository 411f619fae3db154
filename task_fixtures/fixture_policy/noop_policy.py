from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy


class NoopFixturePolicy(FixturePolicy):
    """A policy that does nothing.

    Registered for the 404 cases so the placeholder id reaches the service
    unchanged and it reports "not found".
    """

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        """Simply returns the transaction unchanged."""
        return transaction
