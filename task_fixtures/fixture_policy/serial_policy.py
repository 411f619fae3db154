# Serial Policy that applies a sequence of other fixture policies.

import logging
from typing import Any, List, Optional, Sequence, cast

from pydantic import Field

from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.exceptions import FixtureLoadError
from task_fixtures.fixture_policy.fixture_policy import FixturePolicy
from task_fixtures.fixture_policy.serialization import SerializableDict, SerializedFixturePolicy

logger = logging.getLogger(__name__)


class SerialFixturePolicy(FixturePolicy):
    """
    A Fixture Policy that applies an ordered sequence of other policies.

    Used when one named transaction needs several adjustments, e.g. an invalid
    token together with the seeded task id.

    Attributes:
        policies (List[FixturePolicy]): The ordered member policies.
    """

    policies: List[FixturePolicy] = Field(default_factory=list)

    def __init__(self, policies: Sequence[FixturePolicy] = (), name: Optional[str] = None, **data: Any):
        if not policies:
            logger.warning(f"Initializing SerialFixturePolicy '{name}' with an empty policy list.")
        super().__init__(policies=list(policies), name=name, **data)

    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        """
        Applies the member policies in order.

        Raises:
            Exception: Propagates any exception raised by a member policy.
        """
        current = transaction
        for i, policy in enumerate(self.policies):
            self.logger.debug(
                f"[{transaction.name}] Applying policy {i + 1}/{len(self.policies)} in {self.name}: {policy.name}"
            )
            current = policy.apply(current, session)
        return current

    def __repr__(self) -> str:
        policy_reprs = [f"{p.name} <{p.__class__.__name__}>" for p in self.policies]
        return f"<{self.name}(policies=[{', '.join(policy_reprs)}])>"

    def serialize(self) -> SerializableDict:
        """Serializes the policy and its members.

        Returns:
            A dictionary with the policy name and a "policies" list, each entry
            holding the member's "type" and "config".
        """
        member_configs = [p.to_serialized_policy().to_dict() for p in self.policies]
        return cast(SerializableDict, {"name": self.name, "policies": member_configs})

    @classmethod
    def from_serialized(cls, config: SerializableDict) -> "SerialFixturePolicy":
        """
        Constructs a SerialFixturePolicy from serialized data, loading member policies.

        Raises:
            FixtureLoadError: If 'policies' is missing or not a list, or if loading a member fails.
        """
        # Import here to avoid circular imports
        from task_fixtures.fixture_policy.loader import load_policy

        member_data_list = config.get("policies")
        if member_data_list is None:
            raise FixtureLoadError("SerialFixturePolicy config missing 'policies' list (key not found).")
        if not isinstance(member_data_list, list):
            raise FixtureLoadError(f"SerialFixturePolicy 'policies' must be a list. Got {type(member_data_list)}")

        members = []
        for i, member_data in enumerate(member_data_list):
            if not isinstance(member_data, dict):
                raise FixtureLoadError(
                    f"Item at index {i} in SerialFixturePolicy 'policies' is not a dictionary. Got {type(member_data)}"
                )
            member_type = member_data.get("type")
            member_config = member_data.get("config", {})
            if not isinstance(member_type, str):
                raise FixtureLoadError(f"Member policy at index {i} is missing 'type' or it's not a string.")
            if not isinstance(member_config, dict):
                raise FixtureLoadError(f"Member policy at index {i} has a 'config' that is not a dictionary.")
            try:
                members.append(load_policy(SerializedFixturePolicy(type=member_type, config=member_config)))
            except FixtureLoadError as e:
                raise FixtureLoadError(f"Failed to load member policy at index {i} within SerialFixturePolicy: {e}") from e

        name_val = config.get("name")
        return cls(policies=members, name=str(name_val) if name_val is not None else None)
