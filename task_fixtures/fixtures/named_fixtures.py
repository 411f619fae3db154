"""The table of per-transaction fixtures, keyed by Dredd transaction name.

Dredd names a transaction ``<route> > <summary> > <status> > <content type>``.
"""

import logging
from typing import Dict, Iterator, Optional

from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy
from task_fixtures.fixture_policy.invalid_token import InvalidTokenPolicy
from task_fixtures.fixture_policy.noop_policy import NoopFixturePolicy
from task_fixtures.fixture_policy.replace_body import ReplaceBodyPolicy
from task_fixtures.fixture_policy.seeded_task_path import SeededTaskPathPolicy
from task_fixtures.fixture_policy.serial_policy import SerialFixturePolicy
from task_fixtures.fixture_policy.session_credentials_body import SessionCredentialsBodyPolicy
from task_fixtures.fixture_policy.unique_user_body import UniqueUserBodyPolicy

logger = logging.getLogger(__name__)

JSON = "application/json"

REGISTER_201 = f"/register > Register a new user > 201 > {JSON}"
REGISTER_400 = f"/register > Register a new user > 400 > {JSON}"
LOGIN_200 = f"/login > Login user > 200 > {JSON}"
LOGIN_401 = f"/login > Login user > 401 > {JSON}"
LOGOUT_401 = f"/logout > Logout user > 401 > {JSON}"
LIST_TASKS_401 = f"/tasks > Get user tasks > 401 > {JSON}"
CREATE_TASK_401 = f"/tasks > Create new task > 401 > {JSON}"
CREATE_TASK_400 = f"/tasks > Create new task > 400 > {JSON}"
GET_TASK_200 = f"/tasks/{{id}} > Get task by ID > 200 > {JSON}"
UPDATE_TASK_200 = f"/tasks/{{id}} > Update task > 200 > {JSON}"
DELETE_TASK_200 = f"/tasks/{{id}} > Delete task > 200 > {JSON}"
GET_TASK_401 = f"/tasks/{{id}} > Get task by ID > 401 > {JSON}"
UPDATE_TASK_400 = f"/tasks/{{id}} > Update task > 400 > {JSON}"
UPDATE_TASK_401 = f"/tasks/{{id}} > Update task > 401 > {JSON}"
DELETE_TASK_401 = f"/tasks/{{id}} > Delete task > 401 > {JSON}"
GET_TASK_404 = f"/tasks/{{id}} > Get task by ID > 404 > {JSON}"
UPDATE_TASK_404 = f"/tasks/{{id}} > Update task > 404 > {JSON}"
DELETE_TASK_404 = f"/tasks/{{id}} > Delete task > 404 > {JSON}"

INVALID_REGISTRATION_BODY = {"username": "", "email": "invalid-email", "password": "123"}
UNKNOWN_LOGIN_BODY = {"email": "nonexistent@test.com", "password": "wrong_password"}
EMPTY_TITLE_BODY = {"title": ""}


def _invalid_token_on_seeded_task(name: str) -> SerialFixturePolicy:
    return SerialFixturePolicy(policies=[InvalidTokenPolicy(), SeededTaskPathPolicy()], name=name)


def build_default_fixture_table() -> Dict[str, FixturePolicy]:
    """Returns a fresh copy of the built-in fixture table."""
    return {
        REGISTER_201: UniqueUserBodyPolicy(),
        REGISTER_400: ReplaceBodyPolicy(body=INVALID_REGISTRATION_BODY, name="InvalidRegistrationBody"),
        LOGIN_200: SessionCredentialsBodyPolicy(),
        LOGIN_401: ReplaceBodyPolicy(body=UNKNOWN_LOGIN_BODY, name="UnknownLoginBody"),
        LOGOUT_401: InvalidTokenPolicy(),
        LIST_TASKS_401: InvalidTokenPolicy(),
        CREATE_TASK_401: InvalidTokenPolicy(),
        CREATE_TASK_400: ReplaceBodyPolicy(body=EMPTY_TITLE_BODY, name="EmptyTitleBody"),
        GET_TASK_200: SeededTaskPathPolicy(),
        UPDATE_TASK_200: SeededTaskPathPolicy(),
        DELETE_TASK_200: SeededTaskPathPolicy(),
        GET_TASK_401: _invalid_token_on_seeded_task("InvalidTokenOnSeededTask"),
        UPDATE_TASK_400: SerialFixturePolicy(
            policies=[ReplaceBodyPolicy(body=EMPTY_TITLE_BODY, name="EmptyTitleBody"), SeededTaskPathPolicy()],
            name="EmptyTitleOnSeededTask",
        ),
        UPDATE_TASK_401: _invalid_token_on_seeded_task("InvalidTokenOnSeededTask"),
        DELETE_TASK_401: _invalid_token_on_seeded_task("InvalidTokenOnSeededTask"),
        GET_TASK_404: NoopFixturePolicy(),
        UPDATE_TASK_404: NoopFixturePolicy(),
        DELETE_TASK_404: NoopFixturePolicy(),
    }


class NamedFixtures:
    """Applies the fixture registered for a transaction's exact name."""

    def __init__(self, table: Optional[Dict[str, FixturePolicy]] = None):
        self.table = table if table is not None else build_default_fixture_table()

    def __contains__(self, transaction_name: str) -> bool:
        return transaction_name in self.table

    def __iter__(self) -> Iterator[str]:
        return iter(self.table)

    def __len__(self) -> int:
        return len(self.table)

    def get(self, transaction_name: str) -> Optional[FixturePolicy]:
        return self.table.get(transaction_name)

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        """Applies the fixture registered under ``transaction.name``, if any."""
        policy = self.table.get(transaction.name)
        if policy is None:
            logger.debug(f"No named fixture for '{transaction.name}'")
            return transaction
        logger.debug(f"Applying named fixture {policy.name} to '{transaction.name}'")
        return policy.apply(transaction, session)
