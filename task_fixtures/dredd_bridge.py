# Adapts FixtureController to the callbacks of the dredd_hooks handler.

import asyncio
import logging
from typing import Any, Callable, List, MutableMapping, Optional

from task_fixtures.controller import FixtureController
from task_fixtures.core.dependency_container import DependencyContainer
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.loader import load_fixture_table_from_file
from task_fixtures.fixtures.named_fixtures import NamedFixtures
from task_fixtures.settings import Settings

logger = logging.getLogger(__name__)

RawTransaction = MutableMapping[str, Any]


def build_controller(settings: Optional[Settings] = None) -> FixtureController:
    """Builds the controller for one Dredd run.

    Raises:
        FixtureLoadError: If FIXTURE_TABLE_FILEPATH points at an invalid table.
    """
    settings = settings or Settings()
    filepath = settings.get_fixture_table_filepath()
    if filepath:
        logger.info(f"Loading fixture table from {filepath}")
        named_fixtures = NamedFixtures(load_fixture_table_from_file(filepath))
    else:
        named_fixtures = NamedFixtures()
    return FixtureController(DependencyContainer(settings), named_fixtures=named_fixtures)


class DreddHookBridge:
    """Translates Dredd's raw callbacks into controller calls.

    Dredd aborts the whole run when a hook raises, so every callback logs
    unexpected errors and returns normally. Transaction callbacks work on a
    typed copy and write the changes back into Dredd's mapping.
    """

    def __init__(self, controller: FixtureController):
        self.controller = controller

    def before_all(self, transactions: List[RawTransaction]) -> None:
        logger.info(f"Starting Dredd API tests ({len(transactions)} transactions)")
        try:
            asyncio.run(self.controller.setup())
        except Exception:
            logger.exception("Fixture setup aborted unexpectedly, continuing without fixtures")

    def before_each(self, transaction: RawTransaction) -> None:
        self._apply(self.controller.before_each, transaction)

    def before_named(self, transaction: RawTransaction) -> None:
        self._apply(self.controller.before_named, transaction)

    def after_all(self, transactions: List[RawTransaction]) -> None:
        logger.info("Dredd API tests completed, cleaning up")
        try:
            asyncio.run(self.controller.teardown())
        except Exception:
            logger.exception("Fixture teardown aborted unexpectedly")

    @staticmethod
    def _apply(hook: Callable[[Transaction], Transaction], raw: RawTransaction) -> None:
        name = raw.get("name", "<unnamed>")
        try:
            transaction = hook(Transaction.from_dredd(raw))
            transaction.write_back(raw)
        except Exception:
            logger.exception(f"Fixture hook failed for '{name}', sending the transaction unchanged")
