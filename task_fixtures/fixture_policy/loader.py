# Loads fixture policies and fixture tables from serialized data.

import json
import logging
from typing import Dict

from task_fixtures.fixture_policy.exceptions import FixtureLoadError
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy
from task_fixtures.fixture_policy.serialization import SerializedFixturePolicy

logger = logging.getLogger(__name__)


def load_policy(serialized_policy: SerializedFixturePolicy) -> FixturePolicy:
    """
    Instantiates a FixturePolicy from its serialized form.

    Raises:
        FixtureLoadError: If the type is unknown or the config is malformed.
    """
    # Import the policy registry here to avoid circular import
    from task_fixtures.fixture_policy.registry import POLICY_NAME_TO_CLASS

    policy_type = serialized_policy.type
    policy_config = serialized_policy.config

    if not isinstance(policy_type, str):
        raise FixtureLoadError(f"Policy 'type' must be a string, got: {type(policy_type)}")
    if not isinstance(policy_config, dict):
        raise FixtureLoadError(f"Policy 'config' must be a dictionary, got: {type(policy_config)}")

    policy_class = POLICY_NAME_TO_CLASS.get(policy_type)
    if policy_class is None:
        raise FixtureLoadError(
            f"Unknown policy type: '{policy_type}'. Available policies: {list(POLICY_NAME_TO_CLASS.keys())}"
        )

    instance = policy_class.from_serialized(policy_config)
    logger.debug(f"Loaded fixture policy: {instance.name} <{policy_type}>")
    return instance


def load_fixture_table(raw_table: object, source: str = "<memory>") -> Dict[str, FixturePolicy]:
    """
    Builds a named fixture table from a mapping of transaction name to serialized policy.

    Args:
        raw_table: Mapping of transaction name to ``{"type": ..., "config": {...}}``.
        source: Where the table came from, for error messages.

    Raises:
        FixtureLoadError: If the table or any entry is malformed.
    """
    if not isinstance(raw_table, dict):
        raise FixtureLoadError(f"Fixture table from {source} must be a dictionary, got {type(raw_table)}")

    table: Dict[str, FixturePolicy] = {}
    for transaction_name, entry in raw_table.items():
        if not isinstance(entry, dict):
            raise FixtureLoadError(f"Fixture for '{transaction_name}' in {source} must be a dictionary")
        policy_type = entry.get("type")
        policy_config = entry.get("config", {})
        if not isinstance(policy_type, str):
            raise FixtureLoadError(f"Fixture for '{transaction_name}' in {source} must contain a 'type' string")
        try:
            table[transaction_name] = load_policy(SerializedFixturePolicy(type=policy_type, config=policy_config))
        except FixtureLoadError as e:
            raise FixtureLoadError(f"Fixture for '{transaction_name}' in {source}: {e}") from e
    return table


def load_fixture_table_from_file(filepath: str) -> Dict[str, FixturePolicy]:
    """Load a named fixture table from a JSON file."""
    try:
        with open(filepath, "r") as f:
            raw_table = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FixtureLoadError(f"Could not read fixture table {filepath}: {e}") from e
    return load_fixture_table(raw_table, source=filepath)


def dump_fixture_table(table: Dict[str, FixturePolicy]) -> Dict[str, dict]:
    """Serializes a named fixture table to the structure ``load_fixture_table`` accepts."""
    return {name: policy.to_serialized_policy().to_dict() for name, policy in table.items()}
