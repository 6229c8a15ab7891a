"""
Attribute expressions as handed over by the configuration parser.

Expressions arrive already evaluated where possible: literals, lists of
literals, references to other blocks (traversals) and markers for
anything the evaluator could not resolve.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from iacmodel.types import Range


@dataclass(frozen=True)
class Literal:
    """A literal scalar: string, bool, number or null."""

    value: Any
    range: Range = field(default_factory=Range.empty)


@dataclass(frozen=True)
class ListLiteral:
    """A list whose elements keep their own ranges."""

    items: tuple[Expression, ...]
    range: Range = field(default_factory=Range.empty)


@dataclass(frozen=True)
class Traversal:
    """
    A reference such as ``azurerm_storage_account.example.name``.

    Attributes:
        parts: Dotted path segments
        value: Evaluated value, or None when the evaluator could not resolve it
        range: Source range of the expression
    """

    parts: tuple[str, ...]
    value: Any = None
    range: Range = field(default_factory=Range.empty)

    @property
    def text(self) -> str:
        return ".".join(self.parts)

    @property
    def target(self) -> tuple[str, str] | None:
        """The ``(type, label)`` of the referenced block, if addressable."""
        parts = self.parts
        if parts and parts[0] == "data" and len(parts) >= 3:
            return (parts[1], parts[2])
        if len(parts) >= 2 and parts[0] not in _NON_BLOCK_ROOTS:
            return (parts[0], parts[1])
        return None

    @property
    def target_address(self) -> str:
        target = self.target
        if target is None:
            return self.text
        return f"{target[0]}.{target[1]}"


# Traversal roots that never name a resource block
_NON_BLOCK_ROOTS = frozenset({"var", "local", "module", "path", "terraform", "each", "count", "self"})


@dataclass(frozen=True)
class Unevaluated:
    """Marker for an expression the evaluator could not resolve."""

    text: str
    range: Range = field(default_factory=Range.empty)


Expression = Union[Literal, ListLiteral, Traversal, Unevaluated]


@dataclass(frozen=True)
class Attribute:
    """A ``name = expression`` pair inside a block."""

    name: str
    expression: Expression
    range: Range
