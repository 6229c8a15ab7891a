"""
Adaptation configuration for iacmodel.

Provides configuration management for adaptation runs: which adapter
families to run, whether to run them in parallel, and logging options.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from iacmodel.adapters import list_adapter_names
from iacmodel.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("human", "json")


@dataclass
class AdapterConfig:
    """Configuration for a specific adapter family."""

    name: str
    enabled: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "enabled": self.enabled}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdapterConfig:
        """Create from dictionary."""
        return cls(name=data["name"], enabled=data.get("enabled", True))


@dataclass
class AdaptConfiguration:
    """
    Complete adaptation configuration.

    Attributes:
        name: Configuration name
        adapters: Adapter families to run; empty means all registered
        parallel: Run adapters in a thread pool
        max_workers: Maximum number of worker threads
        log_level: Log level for the iacmodel logger
        log_format: Log output format (human, json)
    """

    name: str = "default"
    adapters: list[AdapterConfig] = field(default_factory=list)
    parallel: bool = False
    max_workers: int = 4
    log_level: str = "INFO"
    log_format: str = "human"

    def get_enabled_adapters(self) -> list[str]:
        """Get enabled adapter families in registry order."""
        if not self.adapters:
            return list_adapter_names()
        enabled = {a.name for a in self.adapters if a.enabled}
        return [name for name in list_adapter_names() if name in enabled]

    def validate(self) -> None:
        """
        Check the configuration for errors.

        Raises:
            ConfigurationError: If an adapter is unknown or a setting is out of range
        """
        known = list_adapter_names()
        for adapter in self.adapters:
            if adapter.name not in known:
                raise ConfigurationError(
                    f"Unknown adapter in configuration: {adapter.name}. "
                    f"Available adapters: {', '.join(known)}"
                )
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}")
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Invalid log format: {self.log_format}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "adapters": [a.to_dict() for a in self.adapters],
            "parallel": self.parallel,
            "max_workers": self.max_workers,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdaptConfiguration:
        """
        Create from dictionary and validate.

        Raises:
            ConfigurationError: If the data is malformed or invalid
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        try:
            config = cls(
                name=data.get("name", "default"),
                adapters=[AdapterConfig.from_dict(a) for a in data.get("adapters", [])],
                parallel=bool(data.get("parallel", False)),
                max_workers=int(data.get("max_workers", 4)),
                log_level=str(data.get("log_level", "INFO")),
                log_format=str(data.get("log_format", "human")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Malformed configuration: {e}") from e
        config.validate()
        return config

    @classmethod
    def from_json(cls, json_str: str) -> AdaptConfiguration:
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_file(cls, path: str) -> AdaptConfiguration:
        """
        Load configuration from a JSON or YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = os.path.expanduser(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.endswith(".json"):
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot parse configuration file {path}: {e}") from e
        return cls.from_dict(data or {})

    def save(self, path: str) -> None:
        """Save configuration to file (JSON or YAML by extension)."""
        path = os.path.expanduser(path)
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            if path.endswith(".json"):
                json.dump(self.to_dict(), f, indent=2)
            else:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False)


def load_config_from_env() -> AdaptConfiguration:
    """
    Load configuration from environment variables.

    Environment variables:
        IACMODEL_CONFIG_FILE: Path to configuration file
        IACMODEL_ADAPTERS: Comma-separated list of adapter families
        IACMODEL_PARALLEL: Run adapters in parallel (true/false)
        IACMODEL_MAX_WORKERS: Maximum number of worker threads
        IACMODEL_LOG_LEVEL: Log level
        IACMODEL_LOG_FORMAT: Log format (human, json)

    Returns:
        AdaptConfiguration instance

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    config_file = os.getenv("IACMODEL_CONFIG_FILE")
    if config_file and os.path.exists(config_file):
        return AdaptConfiguration.from_file(config_file)

    config = AdaptConfiguration()

    adapters_str = os.getenv("IACMODEL_ADAPTERS")
    if adapters_str:
        for name in adapters_str.split(","):
            if name.strip():
                config.adapters.append(AdapterConfig(name=name.strip()))

    parallel = os.getenv("IACMODEL_PARALLEL")
    if parallel:
        config.parallel = parallel.strip().lower() in ("1", "true", "yes")

    max_workers = os.getenv("IACMODEL_MAX_WORKERS")
    if max_workers:
        try:
            config.max_workers = int(max_workers)
        except ValueError as e:
            raise ConfigurationError(f"Invalid IACMODEL_MAX_WORKERS: {max_workers}") from e

    config.log_level = os.getenv("IACMODEL_LOG_LEVEL", config.log_level)
    config.log_format = os.getenv("IACMODEL_LOG_FORMAT", config.log_format)

    config.validate()
    return config
