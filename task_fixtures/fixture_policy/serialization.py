# Serialization type definitions.

from dataclasses import dataclass
from typing import Any, List, TypeAlias, Union

from pydantic import TypeAdapter

# Define the base types that can be serialized
SerializablePrimitive = Union[str, float, int, bool]

# Define the recursive type for dictionaries
SerializableDict: TypeAlias = dict[str, Union[SerializablePrimitive, List[Any], dict[str, Any], None]]

SerializableDictAdapter = TypeAdapter(SerializableDict)


@dataclass
class SerializedFixturePolicy:
    """Represents the serialized form of a FixturePolicy.

    Attributes:
        type (str): The registered name of the policy type (e.g., "InvalidToken").
        config (SerializableDict): The parameters needed to reconstruct the policy instance.
    """

    type: str
    config: SerializableDict

    def to_dict(self) -> SerializableDict:
        return {"type": self.type, "config": self.config}
