"""
Storage adapter for iacmodel.

Builds the Azure Storage model from azurerm_storage_account blocks and
the resources that configure an account from a separate declaration:
azurerm_storage_account_network_rules and azurerm_storage_container.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from iacmodel.adapters.base import Adapter, Orphanage
from iacmodel.observability.logging import get_logger
from iacmodel.providers.azure.storage import (
    PUBLIC_ACCESS_OFF,
    Account,
    Container,
    NetworkRule,
    QueueProperties,
    Storage,
)
from iacmodel.terraform import Block, ModuleSet, Resolution
from iacmodel.types import BoolValue, Metadata, StringValue

logger = get_logger("adapters.azure.storage")

ACCOUNT_TYPE = "azurerm_storage_account"
NETWORK_RULES_TYPE = "azurerm_storage_account_network_rules"
CONTAINER_TYPE = "azurerm_storage_container"

# Attributes a satellite may use to name its account, in priority order
ACCOUNT_REFERENCE_ATTRIBUTES = ("storage_account_id", "storage_account_name")


@dataclass
class _AccountBuilder:
    """Collects an account's fields and attachments before freezing."""

    metadata: Metadata
    enforce_https: BoolValue
    minimum_tls_version: StringValue
    queue_properties: QueueProperties
    network_rules: list[NetworkRule] = field(default_factory=list)
    containers: list[Container] = field(default_factory=list)

    @classmethod
    def unmanaged(cls) -> _AccountBuilder:
        return cls(
            metadata=Metadata.unmanaged(),
            enforce_https=BoolValue.unmanaged(False),
            minimum_tls_version=StringValue.unmanaged(""),
            queue_properties=QueueProperties(
                metadata=Metadata.unmanaged(),
                enable_logging=BoolValue.unmanaged(False),
            ),
        )

    @classmethod
    def defaulted(cls, reference: str) -> _AccountBuilder:
        return cls(
            metadata=Metadata.defaulted(reference),
            enforce_https=BoolValue.default(False, f"{reference}.enable_https_traffic_only"),
            minimum_tls_version=StringValue.default("", f"{reference}.min_tls_version"),
            queue_properties=_default_queue_properties(reference),
        )

    def attach(self, entity: NetworkRule | Container) -> None:
        if isinstance(entity, NetworkRule):
            self.network_rules.append(entity)
        else:
            self.containers.append(entity)

    def freeze(self) -> Account:
        return Account(
            metadata=self.metadata,
            enforce_https=self.enforce_https,
            minimum_tls_version=self.minimum_tls_version,
            network_rules=tuple(self.network_rules),
            queue_properties=self.queue_properties,
            containers=tuple(self.containers),
        )


class StorageAdapter(Adapter):
    """
    Adapts storage accounts, their network rules and containers.

    Network rules and containers declared as separate resources are
    attached to the account they reference. When that account is not
    declared, they are attached to an unmanaged placeholder account;
    satellites naming the same missing account share one placeholder.
    """

    family = "azure.storage"
    primary_types = (ACCOUNT_TYPE,)
    satellite_types = (NETWORK_RULES_TYPE, CONTAINER_TYPE)

    def build(self, module_set: ModuleSet) -> Storage:
        """Build the Storage model."""
        managed: list[_AccountBuilder] = []
        by_block: dict[Block, _AccountBuilder] = {}
        for block in module_set.resources_of_type(ACCOUNT_TYPE):
            builder = self._adapt_account(block)
            managed.append(builder)
            by_block[block] = builder

        orphanage: Orphanage[_AccountBuilder] = Orphanage(_AccountBuilder.unmanaged)
        for block in module_set.blocks_of_types(*self.satellite_types):
            if not block.is_resource:
                continue
            resolution = self._resolve_account(module_set, block)
            entity = self._adapt_satellite(block)

            target = by_block.get(resolution.block) if resolution.resolved else None
            if target is None:
                target, created = orphanage.adopt(resolution.key)
                if created:
                    logger.orphan_synthesized(self.family, resolution.key, block.address)
            target.attach(entity)

        accounts = [b.freeze() for b in managed]
        accounts.extend(b.freeze() for b in orphanage)
        return Storage(accounts=tuple(accounts))

    def count(self, model: Any) -> int:
        return len(model.accounts)

    def _adapt_account(self, block: Block) -> _AccountBuilder:
        try:
            return _AccountBuilder(
                metadata=block.metadata(),
                enforce_https=block.bool_value("enable_https_traffic_only", False),
                minimum_tls_version=block.string_value("min_tls_version", ""),
                queue_properties=self._adapt_queue_properties(block),
                network_rules=self._adapt_nested_rules(block),
            )
        except Exception as e:
            self._degraded(block.address, e)
            return _AccountBuilder.defaulted(block.address)

    def _adapt_nested_rules(self, block: Block) -> list[NetworkRule]:
        reference = f"{block.address}.network_rules"
        rules = []
        for nested in block.children_of_type("network_rules"):
            try:
                rules.append(adapt_network_rule(nested))
            except Exception as e:
                self._degraded(reference, e)
                rules.append(_degraded_network_rule(reference))
        return rules

    def _adapt_queue_properties(self, block: Block) -> QueueProperties:
        nested = block.child("queue_properties")
        if nested is None:
            logger.field_defaulted(
                f"{block.address}.queue_properties", False, "block not declared"
            )
            return _default_queue_properties(block.address)

        reference = f"{block.address}.queue_properties"
        try:
            logging_block = nested.child("logging")
            if logging_block is not None:
                enable_logging = BoolValue.explicit(
                    True, logging_block.range, f"{reference}.logging"
                )
            else:
                enable_logging = BoolValue.default(False, f"{reference}.logging")

            return QueueProperties(
                metadata=Metadata.explicit(nested.range, reference),
                enable_logging=enable_logging,
            )
        except Exception as e:
            self._degraded(reference, e)
            return _default_queue_properties(block.address)

    def _adapt_satellite(self, block: Block) -> NetworkRule | Container:
        try:
            if block.type_name == NETWORK_RULES_TYPE:
                return adapt_network_rule(block)
            return adapt_container(block)
        except Exception as e:
            self._degraded(block.address, e)
            if block.type_name == NETWORK_RULES_TYPE:
                return _degraded_network_rule(block.address)
            return _degraded_container(block.address)

    def _resolve_account(self, module_set: ModuleSet, block: Block) -> Resolution:
        """Resolve the first reference attribute that yields a target or a key."""
        for name in ACCOUNT_REFERENCE_ATTRIBUTES:
            attribute = block.get_attribute(name)
            if attribute is None:
                continue
            resolution = module_set.resolve(attribute.expression, ACCOUNT_TYPE, "name")
            if resolution.resolved or resolution.key is not None:
                return resolution
            logger.debug(f"{block.address}.{name}: reference is not usable, trying next")
        return Resolution()


def adapt_network_rule(block: Block) -> NetworkRule:
    """
    Build a NetworkRule from a nested network_rules block or a
    network rules resource.

    Args:
        block: Block declaring default_action and bypass

    Returns:
        NetworkRule whose metadata spans the block
    """
    action = block.string_value("default_action")
    if action.is_explicit:
        allow_by_default = BoolValue.explicit(
            action.value == "Allow", action.range, action.metadata.reference
        )
    else:
        allow_by_default = BoolValue.default(False, action.metadata.reference)

    return NetworkRule(
        metadata=block.metadata(),
        bypass=block.string_values("bypass"),
        allow_by_default=allow_by_default,
    )


def adapt_container(block: Block) -> Container:
    """Build a Container from an azurerm_storage_container block."""
    return Container(
        metadata=block.metadata(),
        public_access=block.string_value("container_access_type", PUBLIC_ACCESS_OFF),
    )


def _default_queue_properties(reference: str) -> QueueProperties:
    queue_reference = f"{reference}.queue_properties"
    return QueueProperties(
        metadata=Metadata.defaulted(queue_reference),
        enable_logging=BoolValue.default(False, f"{queue_reference}.logging"),
    )


def _degraded_network_rule(reference: str) -> NetworkRule:
    return NetworkRule(
        metadata=Metadata.defaulted(reference),
        allow_by_default=BoolValue.default(False, f"{reference}.default_action"),
    )


def _degraded_container(reference: str) -> Container:
    return Container(
        metadata=Metadata.defaulted(reference),
        public_access=StringValue.default(
            PUBLIC_ACCESS_OFF, f"{reference}.container_access_type"
        ),
    )
