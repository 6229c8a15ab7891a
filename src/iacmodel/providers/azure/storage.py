"""
Azure Storage domain model.

Security-relevant facts about storage accounts, as evaluated by policy
checks such as "storage accounts enforce HTTPS" or "containers are not
publicly readable".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from iacmodel.providers.base import Entity
from iacmodel.types import BoolValue, Metadata, StringValue

PUBLIC_ACCESS_OFF = "private"
PUBLIC_ACCESS_BLOB = "blob"
PUBLIC_ACCESS_CONTAINER = "container"


@dataclass(frozen=True)
class NetworkRule(Entity):
    """
    Network access rules for a storage account.

    Attributes:
        bypass: Traffic types allowed past the rules (e.g., "AzureServices")
        allow_by_default: True when the default action is "Allow"
    """

    bypass: tuple[StringValue, ...] = ()
    allow_by_default: BoolValue = field(default_factory=lambda: BoolValue.unmanaged(False))


@dataclass(frozen=True)
class QueueProperties(Entity):
    """Queue service settings of a storage account."""

    enable_logging: BoolValue = field(default_factory=lambda: BoolValue.unmanaged(False))


@dataclass(frozen=True)
class Container(Entity):
    """A blob container and its anonymous access level."""

    public_access: StringValue = field(
        default_factory=lambda: StringValue.unmanaged(PUBLIC_ACCESS_OFF)
    )

    def is_public(self) -> bool:
        return self.public_access.value in (PUBLIC_ACCESS_BLOB, PUBLIC_ACCESS_CONTAINER)


@dataclass(frozen=True)
class Account(Entity):
    """
    A storage account.

    Attributes:
        enforce_https: Whether only HTTPS traffic is accepted
        minimum_tls_version: Lowest TLS version accepted (e.g., "TLS1_2")
        network_rules: Nested rules followed by attached rule resources
        queue_properties: Queue service settings
        containers: Containers attached to this account
    """

    enforce_https: BoolValue = field(default_factory=lambda: BoolValue.unmanaged(False))
    minimum_tls_version: StringValue = field(default_factory=lambda: StringValue.unmanaged(""))
    network_rules: tuple[NetworkRule, ...] = ()
    queue_properties: QueueProperties = field(
        default_factory=lambda: QueueProperties(metadata=Metadata.unmanaged())
    )
    containers: tuple[Container, ...] = ()


@dataclass(frozen=True)
class Storage:
    """All storage accounts found in a scan."""

    accounts: tuple[Account, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"accounts": [a.to_dict() for a in self.accounts]}
