"""Synapse adapter for iacmodel."""

from __future__ import annotations

from typing import Any

from iacmodel.adapters.base import Adapter
from iacmodel.providers.azure.synapse import Synapse, Workspace
from iacmodel.terraform import Block, ModuleSet
from iacmodel.types import BoolValue, Metadata

WORKSPACE_TYPE = "azurerm_synapse_workspace"


class SynapseAdapter(Adapter):
    """Adapts Synapse workspaces. Workspaces have no satellite resources."""

    family = "azure.synapse"
    primary_types = (WORKSPACE_TYPE,)

    def build(self, module_set: ModuleSet) -> Synapse:
        """Build the Synapse model."""
        return Synapse(
            workspaces=tuple(
                self._adapt_workspace(block)
                for block in module_set.resources_of_type(WORKSPACE_TYPE)
            )
        )

    def count(self, model: Any) -> int:
        return len(model.workspaces)

    def _adapt_workspace(self, block: Block) -> Workspace:
        try:
            return Workspace(
                metadata=block.metadata(),
                enable_managed_virtual_network=block.bool_value(
                    "managed_virtual_network_enabled", False
                ),
            )
        except Exception as e:
            self._degraded(block.address, e)
            return Workspace(
                metadata=Metadata.defaulted(block.address),
                enable_managed_virtual_network=BoolValue.default(
                    False, f"{block.address}.managed_virtual_network_enabled"
                ),
            )
