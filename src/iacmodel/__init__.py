"""
iacmodel - typed security models from infrastructure-as-code.

Adapts parsed Terraform configuration into provider-specific domain
models whose every field records where it came from: declared in
source (with its exact line range), defaulted by the schema, or
synthesized for a resource that was never declared.

Example:
    >>> from iacmodel import adapt_all, load_source
    >>> models = adapt_all(load_source(source))
    >>> for account in models["azure.storage"].accounts:
    ...     print(account.enforce_https.value, account.enforce_https.range)
"""

__version__ = "0.1.0"

from iacmodel.adapters import (
    ADAPTER_REGISTRY,
    Adapter,
    AdapterRunner,
    AdaptResult,
    adapt_all,
    get_adapter,
    list_adapter_names,
)
from iacmodel.exceptions import (
    ConfigurationError,
    IaCModelError,
    InvalidModuleSetError,
    UnknownAdapterError,
)
from iacmodel.terraform import (
    Block,
    Module,
    ModuleSet,
    load_directory,
    load_file,
    load_path,
    load_source,
)
from iacmodel.types import (
    BoolValue,
    IntValue,
    Metadata,
    Provenance,
    Range,
    StringValue,
    Value,
)

__all__ = [
    "__version__",
    # Adapters
    "ADAPTER_REGISTRY",
    "Adapter",
    "AdapterRunner",
    "AdaptResult",
    "adapt_all",
    "get_adapter",
    "list_adapter_names",
    # Errors
    "ConfigurationError",
    "IaCModelError",
    "InvalidModuleSetError",
    "UnknownAdapterError",
    # Graph
    "Block",
    "Module",
    "ModuleSet",
    "load_directory",
    "load_file",
    "load_path",
    "load_source",
    # Values
    "BoolValue",
    "IntValue",
    "Metadata",
    "Provenance",
    "Range",
    "StringValue",
    "Value",
]
