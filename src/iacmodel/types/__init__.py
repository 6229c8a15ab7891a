"""
Provenance value types for iacmodel.

Provides the location-carrying wrappers used by every field of the
adapted domain model.
"""

from iacmodel.types.metadata import Metadata, Provenance, Range
from iacmodel.types.values import BoolValue, IntValue, StringValue, Value

__all__ = [
    "BoolValue",
    "IntValue",
    "Metadata",
    "Provenance",
    "Range",
    "StringValue",
    "Value",
]
