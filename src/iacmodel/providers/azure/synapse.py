"""Azure Synapse Analytics domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from iacmodel.providers.base import Entity
from iacmodel.types import BoolValue


@dataclass(frozen=True)
class Workspace(Entity):
    """
    A Synapse workspace.

    Attributes:
        enable_managed_virtual_network: Whether the workspace runs inside a
            managed virtual network
    """

    enable_managed_virtual_network: BoolValue = field(
        default_factory=lambda: BoolValue.unmanaged(False)
    )


@dataclass(frozen=True)
class Synapse:
    """All Synapse workspaces found in a scan."""

    workspaces: tuple[Workspace, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"workspaces": [w.to_dict() for w in self.workspaces]}
