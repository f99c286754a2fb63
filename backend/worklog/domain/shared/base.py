"""Base classes for domain value objects."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values).

    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict:
        """Dump with wire (camelCase) field names."""
        return self.model_dump(by_alias=True, mode="json")


class WireModel(BaseModel):
    """Mutable request/response model using camelCase wire names."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
    )
