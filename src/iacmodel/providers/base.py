"""
Base class for adapted domain entities.

Entities are frozen dataclasses whose leaves are provenance values.
The generic serialization here produces the output contract consumed by
policy engines: every leaf exposes its value, provenance and range.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from iacmodel.types import Metadata, Value


@dataclass(frozen=True)
class Entity:
    """Base for all domain entities."""

    metadata: Metadata

    @property
    def is_managed(self) -> bool:
        """Check if the entity was built from a declared block."""
        return not self.metadata.is_unmanaged

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {"metadata": self.metadata.to_dict()}
        for f in fields(self):
            if f.name == "metadata":
                continue
            result[f.name] = _serialize(getattr(self, f.name))
        return result


def _serialize(value: Any) -> Any:
    if isinstance(value, (Entity, Value)):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return value
