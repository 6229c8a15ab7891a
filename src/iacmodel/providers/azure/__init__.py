"""
Azure domain models.

Typed, security-relevant views of Azure resources produced by the
adapters in iacmodel.adapters.azure.
"""

from iacmodel.providers.azure.storage import (
    PUBLIC_ACCESS_BLOB,
    PUBLIC_ACCESS_CONTAINER,
    PUBLIC_ACCESS_OFF,
    Account,
    Container,
    NetworkRule,
    QueueProperties,
    Storage,
)
from iacmodel.providers.azure.synapse import Synapse, Workspace

__all__ = [
    "Account",
    "Container",
    "NetworkRule",
    "QueueProperties",
    "Storage",
    "PUBLIC_ACCESS_OFF",
    "PUBLIC_ACCESS_BLOB",
    "PUBLIC_ACCESS_CONTAINER",
    "Synapse",
    "Workspace",
]
