"""Typed domain models, one subpackage per cloud provider."""

from iacmodel.providers.base import Entity

__all__ = ["Entity"]
