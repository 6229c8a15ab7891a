"""
Observability for iacmodel.

Provides structured logging for adaptation runs.
"""

from iacmodel.observability.logging import (
    AdaptLogger,
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "AdaptLogger",
    "HumanReadableFormatter",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
]
