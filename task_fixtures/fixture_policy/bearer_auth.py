from typing import List

from pydantic import Field

from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy

DEFAULT_PROTECTED_PATHS = ["/tasks", "/logout"]
DEFAULT_EXEMPT_MARKERS = ["/public"]


class BearerAuthPolicy(FixturePolicy):
    """Injects the session's bearer token into transactions on protected paths.

    Matching is substring based: a path is protected when it contains any of
    ``protected_paths`` and none of ``exempt_markers``. Nothing happens while no
    token is held.
    """

    protected_paths: List[str] = Field(default_factory=lambda: list(DEFAULT_PROTECTED_PATHS))
    exempt_markers: List[str] = Field(default_factory=lambda: list(DEFAULT_EXEMPT_MARKERS))

    def is_protected(self, path: str) -> bool:
        if any(marker in path for marker in self.exempt_markers):
            return False
        return any(prefix in path for prefix in self.protected_paths)

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        bearer = session.bearer_value()
        if bearer is None:
            self.logger.debug(f"No token held, not authorizing '{transaction.name}' ({self.name})")
            return transaction
        if self.is_protected(transaction.full_path):
            transaction.set_header("Authorization", bearer)
        return transaction
