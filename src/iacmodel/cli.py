"""
iacmodel CLI entry point.

This module provides the command-line interface for adapting Terraform
configuration into the typed domain model.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import fields
from typing import Any

from iacmodel import __version__
from iacmodel.adapters import ADAPTER_REGISTRY, adapt_all, list_adapter_names
from iacmodel.config import AdaptConfiguration, AdapterConfig, load_config_from_env
from iacmodel.exceptions import IaCModelError
from iacmodel.observability.logging import configure_logging
from iacmodel.providers.base import Entity
from iacmodel.terraform import load_path
from iacmodel.types import Value


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="iacmodel",
        description="Adapt Terraform configuration into a typed security model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"iacmodel {__version__}",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_adapt_parser(subparsers)

    subparsers.add_parser("adapters", help="List registered adapter families")

    return parser


def add_adapt_parser(subparsers: Any) -> None:
    """Add the adapt command parser."""
    adapt_parser = subparsers.add_parser(
        "adapt",
        help="Adapt a Terraform file or directory",
        description="Load Terraform configuration and print the adapted model.",
    )
    adapt_parser.add_argument(
        "path",
        help="Terraform file or directory",
    )
    adapt_parser.add_argument(
        "--adapters",
        help="Comma-separated list of adapter families to run (default: all)",
    )
    adapt_parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )
    adapt_parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run adapters in parallel",
    )
    adapt_parser.add_argument(
        "--config",
        help="Path to a JSON or YAML configuration file",
    )
    adapt_parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Do not descend into subdirectories",
    )


def cmd_adapt(args: argparse.Namespace) -> int:
    """Handle adapt command."""
    try:
        if getattr(args, "config", None):
            config = AdaptConfiguration.from_file(args.config)
        else:
            config = load_config_from_env()

        if getattr(args, "adapters", None):
            config.adapters = [
                AdapterConfig(name=name.strip())
                for name in args.adapters.split(",")
                if name.strip()
            ]
            config.validate()
        if getattr(args, "parallel", False):
            config.parallel = True
        if not getattr(args, "verbose", 0):
            configure_logging(level=config.log_level, format=config.log_format)
    except IaCModelError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        module_set = load_path(args.path, recursive=not getattr(args, "no_recursive", False))
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot load {args.path}: {e}", file=sys.stderr)
        return 1

    for module in module_set:
        for error in module.parse_errors:
            print(f"Warning: {error}", file=sys.stderr)

    models = adapt_all(
        module_set,
        adapters=config.get_enabled_adapters(),
        parallel=config.parallel,
        max_workers=config.max_workers,
    )

    output_format = getattr(args, "format", "text")
    if output_format == "json":
        print(json.dumps({family: model.to_dict() for family, model in models.items()}, indent=2))
    else:
        for family, model in models.items():
            print(family)
            for line in _render(model, indent=1):
                print(line)

    return 0


def cmd_adapters(args: argparse.Namespace) -> int:
    """Handle adapters command."""
    for name in list_adapter_names():
        adapter_class = ADAPTER_REGISTRY[name]
        types = ", ".join(adapter_class.primary_types + adapter_class.satellite_types)
        print(f"{name:<16} {types}")
    return 0


def _render(obj: Any, indent: int) -> list[str]:
    """Render a model as indented text, one field per line."""
    pad = "  " * indent
    lines: list[str] = []
    for f in fields(obj):
        if f.name == "metadata":
            continue
        value = getattr(obj, f.name)
        if isinstance(value, Value):
            lines.append(f"{pad}{f.name} = {value.value!r} {_describe(value.metadata)}")
        elif isinstance(value, Entity):
            lines.append(f"{pad}{f.name} {_describe(value.metadata)}")
            lines.extend(_render(value, indent + 1))
        elif isinstance(value, tuple):
            for index, item in enumerate(value):
                if isinstance(item, Value):
                    lines.append(
                        f"{pad}{f.name}[{index}] = {item.value!r} {_describe(item.metadata)}"
                    )
                else:
                    lines.append(f"{pad}{f.name}[{index}] {_describe(item.metadata)}")
                    lines.extend(_render(item, indent + 1))
    return lines


def _describe(metadata: Any) -> str:
    if metadata.is_explicit:
        return f"({metadata.provenance.value} {metadata.range})"
    return f"({metadata.provenance.value})"


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(level="DEBUG" if args.verbose > 1 else "INFO")

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "adapt": cmd_adapt,
        "adapters": cmd_adapters,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
