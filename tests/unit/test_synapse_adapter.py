"""Unit tests for the Synapse adapter."""

from __future__ import annotations

import pytest

from iacmodel.adapters import SynapseAdapter
from iacmodel.providers.azure import Synapse
from iacmodel.terraform import Block, Module, ModuleSet


@pytest.fixture
def adapter() -> SynapseAdapter:
    """Return a Synapse adapter."""
    return SynapseAdapter()


class TestSynapseAdapter:
    """Tests for SynapseAdapter."""

    def test_empty(self, adapter, modules):
        """Test configuration without workspaces."""
        synapse = adapter.adapt(modules('resource "azurerm_resource_group" "rg" {}\n'))
        assert isinstance(synapse, Synapse)
        assert synapse.workspaces == ()

    def test_managed_virtual_network_enabled(self, adapter, modules):
        """Test the managed virtual network flag is extracted."""
        source = (
            "\n"
            'resource "azurerm_synapse_workspace" "example" {\n'
            '  name                            = "example"\n'
            "  managed_virtual_network_enabled = true\n"
            "}\n"
        )
        workspace = adapter.adapt(modules(source)).workspaces[0]
        assert workspace.metadata.is_explicit
        assert workspace.metadata.range.start_line == 2
        assert workspace.metadata.range.end_line == 5
        assert workspace.enable_managed_virtual_network.value is True
        assert workspace.enable_managed_virtual_network.is_explicit
        assert workspace.enable_managed_virtual_network.range.start_line == 4

    def test_default(self, adapter, modules):
        """Test the flag defaults to false when absent."""
        source = 'resource "azurerm_synapse_workspace" "example" {\n  name = "example"\n}\n'
        workspace = adapter.adapt(modules(source)).workspaces[0]
        assert workspace.enable_managed_virtual_network.value is False
        assert workspace.enable_managed_virtual_network.is_defaulted

    def test_declaration_order(self, adapter, modules):
        """Test workspaces keep declaration order."""
        source = (
            'resource "azurerm_synapse_workspace" "b" {\n  managed_virtual_network_enabled = true\n}\n'
            'resource "azurerm_synapse_workspace" "a" {\n}\n'
        )
        workspaces = adapter.adapt(modules(source)).workspaces
        assert [w.metadata.reference for w in workspaces] == [
            "azurerm_synapse_workspace.b",
            "azurerm_synapse_workspace.a",
        ]
        assert [w.enable_managed_virtual_network.value for w in workspaces] == [True, False]

    def test_malformed_workspace_degrades(self, adapter):
        """Test a workspace that cannot be adapted degrades to defaults."""
        broken = Block(kind="resource", type_name="azurerm_synapse_workspace", label="w")
        synapse = adapter.adapt(ModuleSet([Module(path=".", blocks=(broken,))]))
        assert synapse.workspaces[0].metadata.is_defaulted
        assert synapse.workspaces[0].enable_managed_virtual_network.is_defaulted

    def test_to_dict(self, adapter, modules):
        """Test serialization exposes provenance per field."""
        source = 'resource "azurerm_synapse_workspace" "example" {\n}\n'
        data = adapter.adapt(modules(source)).to_dict()
        field = data["workspaces"][0]["enable_managed_virtual_network"]
        assert field["value"] is False
        assert field["provenance"] == "defaulted"
        assert data["workspaces"][0]["metadata"]["provenance"] == "explicit"
