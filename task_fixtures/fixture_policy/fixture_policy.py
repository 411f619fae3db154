# Interface for fixture policies applied to Dredd transactions.

import abc
import logging
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from task_fixtures.core.session import FixtureSession
from task_fixtures.core.transaction import Transaction
from task_fixtures.fixture_policy.exceptions import FixtureLoadError
from task_fixtures.fixture_policy.serialization import (
    SerializableDict,
    SerializableDictAdapter,
    SerializedFixturePolicy,
)

# Type variable for the policy classes
PolicyT = TypeVar("PolicyT", bound="FixturePolicy")


class FixturePolicy(BaseModel, abc.ABC):
    """Abstract Base Class for one adjustment applied to a transaction before Dredd sends it.

    Attributes:
        name (Optional[str]): A name for the policy instance, used for logging.
            Defaults to the class name.
        type (str): The registered type name, filled in from the registry.
    """

    name: Optional[str] = Field(default=None)
    type: str = Field(default="")
    logger: logging.Logger = Field(default_factory=lambda: logging.getLogger(__name__), exclude=True)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def get_policy_type_name(cls) -> str:
        """Get the canonical policy type name for serialization.

        Returns:
            The policy type name used in serialization.
        """
        # Import here to avoid circular imports
        from task_fixtures.fixture_policy.registry import POLICY_CLASS_TO_NAME

        policy_type = POLICY_CLASS_TO_NAME.get(cls)
        if policy_type is None:
            raise ValueError(f"{cls.__name__} is not registered in POLICY_CLASS_TO_NAME registry")
        return policy_type

    @model_validator(mode="before")
    @classmethod
    def fill_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            if not data.get("type"):
                data["type"] = cls.get_policy_type_name()
            if data.get("name") is None:
                data["name"] = cls.__name__
        return data

    @abc.abstractmethod
    def apply(self, transaction: Transaction, session: FixtureSession) -> Transaction:
        """
        Apply the policy to the transaction.

        Args:
            transaction: The transaction about to be sent. Mutated in place.
            session: The state built during setup. Read only.

        Returns:
            The (same) transaction.
        """
        raise NotImplementedError

    def serialize(self) -> SerializableDict:
        """Serialize the policy configuration (everything except the type)."""
        data = self.model_dump(mode="python", by_alias=True, exclude_none=True, exclude={"type"})
        return SerializableDictAdapter.validate_python(data)

    def to_serialized_policy(self) -> SerializedFixturePolicy:
        return SerializedFixturePolicy(type=self.type, config=self.serialize())

    @classmethod
    def from_serialized(cls: Type[PolicyT], config: SerializableDict) -> PolicyT:
        """
        Construct a policy of this class from its serialized configuration.

        Raises:
            FixtureLoadError: If the configuration does not validate.
        """
        try:
            validated = SerializableDictAdapter.validate_python(dict(config))
            return cls.model_validate(validated)
        except ValidationError as e:
            raise FixtureLoadError(f"Invalid configuration for {cls.__name__}: {e}", policy_name=cls.__name__) from e
