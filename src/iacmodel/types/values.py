"""
Provenance-carrying value wrappers.

Every leaf field of the adapted domain model is one of these wrappers.
They are immutable and created once, at adaptation time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from iacmodel.types.metadata import Metadata, Provenance, Range

T = TypeVar("T")


@dataclass(frozen=True)
class Value(Generic[T]):
    """
    A scalar extracted from configuration together with its provenance.

    Attributes:
        value: The underlying value
        metadata: Provenance and source range
    """

    value: T
    metadata: Metadata

    @classmethod
    def explicit(cls, value: T, rng: Range, reference: str = "") -> Value[T]:
        """Wrap a value declared in source."""
        return cls(value, Metadata.explicit(rng, reference))

    @classmethod
    def default(cls, value: T, reference: str = "") -> Value[T]:
        """Wrap a schema default for an attribute absent on a present block."""
        return cls(value, Metadata.defaulted(reference))

    @classmethod
    def unmanaged(cls, value: T) -> Value[T]:
        """Wrap a placeholder value for a block that was never declared."""
        return cls(value, Metadata.unmanaged())

    @property
    def provenance(self) -> Provenance:
        return self.metadata.provenance

    @property
    def range(self) -> Range:
        return self.metadata.range

    @property
    def is_explicit(self) -> bool:
        return self.metadata.is_explicit

    @property
    def is_defaulted(self) -> bool:
        return self.metadata.is_defaulted

    @property
    def is_unmanaged(self) -> bool:
        return self.metadata.is_unmanaged

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "value": self.value,
            "provenance": self.provenance.value,
            "range": self.range.to_dict(),
        }


@dataclass(frozen=True)
class BoolValue(Value[bool]):
    """Boolean field."""

    def is_true(self) -> bool:
        return self.value is True

    def is_false(self) -> bool:
        return self.value is False


@dataclass(frozen=True)
class StringValue(Value[str]):
    """String field."""

    def is_empty(self) -> bool:
        return self.value == ""

    def equal_to(self, other: str, ignore_case: bool = False) -> bool:
        """Compare against a plain string."""
        if ignore_case:
            return self.value.lower() == other.lower()
        return self.value == other

    def is_one_of(self, *options: str) -> bool:
        return self.value in options


@dataclass(frozen=True)
class IntValue(Value[int]):
    """Integer field."""

    def less_than(self, other: int) -> bool:
        return self.value < other

    def greater_than(self, other: int) -> bool:
        return self.value > other
