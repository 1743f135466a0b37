"""Base classes for immutable value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel

T = TypeVar("T")


class ValueObject(BaseModel):
    """Immutable group of fields compared by value (e.g. a public profile)."""

    model_config = ConfigDict(frozen=True)


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around one primitive, serialized as that primitive.

    ``Handle("21CS001")`` dumps to ``"21CS001"`` and ``str()`` gives the raw
    value, so wrapped values can go straight into SQL parameters and claims.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
