from pydantic import Field

from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy


class SeededTaskPathPolicy(FixturePolicy):
    """Points an id-scoped transaction at the task seeded during setup.

    The API description uses ``/tasks/1`` as the example path. The first
    occurrence of ``placeholder`` in the full path and the request URI is
    replaced by ``<collection_path>/<seeded id>``. Without a seeded task the
    transaction is left untouched.
    """

    placeholder: str = Field(default="/tasks/1")
    collection_path: str = Field(default="/tasks")

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        if session.task_id is None:
            self.logger.debug(f"No seeded task, keeping placeholder path for '{transaction.name}'")
            return transaction
        transaction.replace_path_segment(self.placeholder, f"{self.collection_path}/{session.task_id}")
        return transaction
