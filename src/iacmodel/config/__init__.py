"""
Configuration for iacmodel.

Adaptation settings loaded from JSON, YAML or environment variables.
"""

from iacmodel.config.adapt_config import (
    AdaptConfiguration,
    AdapterConfig,
    load_config_from_env,
)

__all__ = [
    "AdaptConfiguration",
    "AdapterConfig",
    "load_config_from_env",
]
