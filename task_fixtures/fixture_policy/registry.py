# Policy registry mapping policy names to classes.

from typing import Dict, Type

from .bearer_auth import BearerAuthPolicy
from .fixture_policy import FixturePolicy
from .invalid_token import InvalidTokenPolicy
from .noop_policy import NoopFixturePolicy
from .replace_body import ReplaceBodyPolicy
from .seeded_task_path import SeededTaskPathPolicy
from .serial_policy import SerialFixturePolicy
from .session_credentials_body import SessionCredentialsBodyPolicy
from .transaction_logging import TransactionLoggingPolicy
from .unique_user_body import UniqueUserBodyPolicy

# Registry mapping policy names (as used in fixture table files) to their classes
POLICY_NAME_TO_CLASS: Dict[str, Type["FixturePolicy"]] = {
    "BearerAuth": BearerAuthPolicy,
    "InvalidToken": InvalidTokenPolicy,
    "Noop": NoopFixturePolicy,
    "ReplaceBody": ReplaceBodyPolicy,
    "SeededTaskPath": SeededTaskPathPolicy,
    "Serial": SerialFixturePolicy,
    "SessionCredentialsBody": SessionCredentialsBodyPolicy,
    "TransactionLogging": TransactionLoggingPolicy,
    "UniqueUserBody": UniqueUserBodyPolicy,
}

POLICY_CLASS_TO_NAME: Dict[Type["FixturePolicy"], str] = {v: k for k, v in POLICY_NAME_TO_CLASS.items()}
