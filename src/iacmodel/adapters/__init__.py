"""
Adapter framework for iacmodel.

An adapter turns a Module Set into the typed domain model of one
resource family. Adapters are registered in a static table keyed by
family name and may be run together, optionally in parallel, since
they only read the Module Set.

Adapters:
    - azure.storage: StorageAdapter
    - azure.synapse: SynapseAdapter
"""

from __future__ import annotations

from typing import Any

from iacmodel.adapters.azure import StorageAdapter, SynapseAdapter
from iacmodel.adapters.base import (
    AdapterRunner,
    Adapter,
    AdaptResult,
    Orphanage,
)
from iacmodel.exceptions import UnknownAdapterError
from iacmodel.terraform import ModuleSet

ADAPTER_REGISTRY: dict[str, type[Adapter]] = {
    StorageAdapter.family: StorageAdapter,
    SynapseAdapter.family: SynapseAdapter,
}


def list_adapter_names() -> list[str]:
    """
    List registered adapter families.

    Returns:
        Family names in registry order
    """
    return list(ADAPTER_REGISTRY)


def get_adapter(name: str) -> Adapter:
    """
    Create the adapter registered for a family.

    Args:
        name: Family name (e.g., "azure.storage")

    Returns:
        Adapter instance

    Raises:
        UnknownAdapterError: If no adapter is registered under name
    """
    adapter_class = ADAPTER_REGISTRY.get(name)
    if adapter_class is None:
        raise UnknownAdapterError(name, list_adapter_names())
    return adapter_class()


def get_adapters(names: list[str] | None = None) -> list[Adapter]:
    """
    Create adapters for the given families, or all of them.

    Adapters are returned in registry order whatever the order of names.

    Args:
        names: Families to include, or None for all

    Returns:
        List of adapter instances

    Raises:
        UnknownAdapterError: If a name is not registered
    """
    if names is None:
        return [adapter_class() for adapter_class in ADAPTER_REGISTRY.values()]

    for name in names:
        if name not in ADAPTER_REGISTRY:
            raise UnknownAdapterError(name, list_adapter_names())
    return [get_adapter(name) for name in ADAPTER_REGISTRY if name in names]


def adapt_all(
    module_set: ModuleSet,
    adapters: list[str] | None = None,
    parallel: bool = False,
    max_workers: int = 4,
) -> dict[str, Any]:
    """
    Run adapters over a Module Set and collect their models.

    Example:
        >>> models = adapt_all(load_source(source))
        >>> storage = models["azure.storage"]

    Args:
        module_set: Module Set to adapt
        adapters: Families to run, or None for all registered
        parallel: Run adapters in a thread pool
        max_workers: Maximum number of worker threads

    Returns:
        Mapping of family name to domain model, in registry order.
        Families whose adapter failed are omitted.

    Raises:
        InvalidModuleSetError: If module_set is not a ModuleSet
        UnknownAdapterError: If an adapter name is not registered
    """
    runner = AdapterRunner(get_adapters(adapters))
    results = runner.run_all(module_set, parallel=parallel, max_workers=max_workers)
    return {r.family: r.model for r in results if r.success}


__all__ = [
    # Base classes
    "Adapter",
    "AdapterRunner",
    "AdaptResult",
    "Orphanage",
    # Adapters
    "StorageAdapter",
    "SynapseAdapter",
    # Registry
    "ADAPTER_REGISTRY",
    "adapt_all",
    "get_adapter",
    "get_adapters",
    "list_adapter_names",
]
