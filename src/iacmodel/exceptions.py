"""
Exception types for iacmodel.

Adaptation itself degrades per field and per block instead of raising;
these exceptions cover the hard preconditions and caller mistakes only.
"""

from __future__ import annotations


class IaCModelError(Exception):
    """Base class for iacmodel errors."""

    pass


class InvalidModuleSetError(IaCModelError):
    """Raised when an adapter is handed a missing or malformed Module Set."""

    pass


class UnknownAdapterError(IaCModelError):
    """Raised when an adapter family is not in the registry."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown adapter: {name}. Available adapters: {', '.join(available)}"
        )


class ConfigurationError(IaCModelError):
    """Raised when an adaptation configuration is invalid."""

    pass
