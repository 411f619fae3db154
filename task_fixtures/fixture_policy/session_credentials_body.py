from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy


class SessionCredentialsBodyPolicy(FixturePolicy):
    """Replaces the body with the email and password of the account created during setup."""

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        if not session.email or not session.password:
            self.logger.warning(f"No setup account credentials held, leaving body of '{transaction.name}' unchanged")
            return transaction
        transaction.set_json_body({"email": session.email, "password": session.password})
        return transaction
