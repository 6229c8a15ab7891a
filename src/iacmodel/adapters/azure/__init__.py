"""
Azure adapters for iacmodel.

Adapters:
    - StorageAdapter: storage accounts, network rules, containers
    - SynapseAdapter: Synapse workspaces
"""

from iacmodel.adapters.azure.storage import StorageAdapter
from iacmodel.adapters.azure.synapse import SynapseAdapter

__all__ = ["StorageAdapter", "SynapseAdapter"]
