"""
Parsed configuration blocks.

A Block is one resource (or data source, or nested) declaration with its
attributes, nested blocks and source range. Blocks are read-only: the
parser builds them once and adapters only read them.

Attribute lookup returns a tagged result so every call site handles each
shape explicitly:

    Absent      attribute not declared
    Scalar      literal string/bool/number/null
    Sequence    list literal, elements keep their own ranges
    Reference   traversal to another block (may carry an evaluated value)
    Unresolved  expression the evaluator could not resolve
    Nested      nested block of that name
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Union

from iacmodel.terraform.expressions import (
    Attribute,
    Expression,
    ListLiteral,
    Literal,
    Traversal,
)
from iacmodel.types import BoolValue, IntValue, Metadata, Range, StringValue, Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Absent:
    name: str


@dataclass(frozen=True)
class Scalar:
    attribute: Attribute
    value: Any


@dataclass(frozen=True)
class Sequence:
    attribute: Attribute
    items: tuple[Expression, ...]


@dataclass(frozen=True)
class Reference:
    attribute: Attribute
    traversal: Traversal


@dataclass(frozen=True)
class Unresolved:
    attribute: Attribute
    text: str


@dataclass(frozen=True)
class Nested:
    block: Block


LookupResult = Union[Absent, Scalar, Sequence, Reference, Unresolved, Nested]


@dataclass(frozen=True, eq=False)
class Block:
    """
    A single configuration block.

    Identity is ``(type_name, label)``; the graph does not enforce
    uniqueness, so two blocks may share it. Blocks compare by object
    identity.

    Attributes:
        kind: Top-level keyword ("resource", "data", ...) or the nested block name
        type_name: Resource type (e.g., "azurerm_storage_account") or nested block name
        label: Resource label, empty for nested and singleton blocks
        attributes: Attributes in declaration order
        children: Nested blocks in declaration order
        range: Source range of the whole block
        module_path: Path of the module that declared the block
    """

    kind: str
    type_name: str
    label: str = ""
    attributes: tuple[Attribute, ...] = ()
    children: tuple[Block, ...] = ()
    range: Range = field(default_factory=Range.empty)
    module_path: str = ""

    @property
    def identity(self) -> tuple[str, str]:
        return (self.type_name, self.label)

    @property
    def address(self) -> str:
        """Return the block address (e.g., azurerm_storage_account.example)."""
        if self.kind == "data":
            return f"data.{self.type_name}.{self.label}"
        if self.label:
            return f"{self.type_name}.{self.label}"
        return self.type_name

    @property
    def is_resource(self) -> bool:
        return self.kind == "resource"

    def metadata(self) -> Metadata:
        """Explicit metadata spanning the whole block."""
        return Metadata.explicit(self.range, self.address)

    def get_attribute(self, name: str) -> Attribute | None:
        """Return the first attribute with the given name."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    def has_attribute(self, name: str) -> bool:
        return self.get_attribute(name) is not None

    def child(self, type_name: str) -> Block | None:
        """Return the first nested block of a type."""
        for block in self.children:
            if block.type_name == type_name:
                return block
        return None

    def children_of_type(self, type_name: str) -> list[Block]:
        """Return nested blocks of a type in declaration order."""
        return [b for b in self.children if b.type_name == type_name]

    def walk(self) -> Iterator[Block]:
        """Iterate over this block and every nested block, depth first."""
        yield self
        for block in self.children:
            yield from block.walk()

    def references(self) -> Iterator[Traversal]:
        """Iterate over the traversals in this block's own attributes."""
        for attribute in self.attributes:
            yield from _traversals(attribute.expression)

    def lookup(self, name: str) -> LookupResult:
        """
        Look up an attribute or nested block by name.

        Attributes win over nested blocks of the same name.
        """
        attribute = self.get_attribute(name)
        if attribute is not None:
            return _classify(attribute)
        nested = self.child(name)
        if nested is not None:
            return Nested(nested)
        return Absent(name)

    def lookup_path(self, path: str) -> LookupResult:
        """
        Look up a dotted path through nested blocks.

        Args:
            path: Dot-separated path (e.g., "queue_properties.logging.version")

        Returns:
            Lookup result for the final segment
        """
        parts = path.split(".")
        current = self
        for part in parts[:-1]:
            nested = current.child(part)
            if nested is None:
                return Absent(path)
            current = nested
        return current.lookup(parts[-1])

    def bool_value(self, name: str, default: bool = False) -> BoolValue:
        """Extract a boolean attribute, falling back to a schema default."""
        return self._extract(name, BoolValue, default, _as_bool)

    def string_value(self, name: str, default: str = "") -> StringValue:
        """Extract a string attribute, falling back to a schema default."""
        return self._extract(name, StringValue, default, _as_string)

    def int_value(self, name: str, default: int = 0) -> IntValue:
        """Extract an integer attribute, falling back to a schema default."""
        return self._extract(name, IntValue, default, _as_int)

    def string_values(self, name: str) -> tuple[StringValue, ...]:
        """
        Extract a list of strings, wrapping each element individually.

        Elements that are not strings are dropped. An absent or
        malformed attribute yields an empty tuple.
        """
        result = self.lookup(name)
        if isinstance(result, Absent):
            return ()
        if not isinstance(result, Sequence):
            logger.debug(f"{self.address}.{name}: expected a list, got {type(result).__name__}")
            return ()

        reference = f"{self.address}.{name}"
        values: list[StringValue] = []
        for item in result.items:
            candidate = _evaluated(item)
            converted = _as_string(candidate) if candidate is not None else None
            if converted is None:
                logger.debug(f"{reference}: skipping non-string list element")
                continue
            rng = item.range if not item.range.is_empty else result.attribute.range
            try:
                values.append(StringValue.explicit(converted, rng, reference))
            except ValueError as e:
                logger.warning(
                    f"{reference}: skipping list element without a source range: {e}"
                )
        return tuple(values)

    def _extract(
        self,
        name: str,
        wrapper: type[Value[Any]],
        default: Any,
        convert: Callable[[Any], Any],
    ) -> Any:
        reference = f"{self.address}.{name}"
        result = self.lookup(name)

        candidate: Any = None
        if isinstance(result, Scalar):
            candidate = result.value
        elif isinstance(result, Reference):
            candidate = result.traversal.value
        elif not isinstance(result, Absent):
            logger.debug(f"{reference}: cannot use {type(result).__name__} value, using default")
            return wrapper.default(default, reference)
        else:
            return wrapper.default(default, reference)

        converted = convert(candidate) if candidate is not None else None
        if converted is None:
            logger.debug(f"{reference}: type mismatch for {candidate!r}, using default")
            return wrapper.default(default, reference)
        try:
            return wrapper.explicit(converted, result.attribute.range, reference)
        except ValueError as e:
            logger.warning(f"{reference}: no usable source range, using default: {e}")
            return wrapper.default(default, reference)


def _classify(attribute: Attribute) -> LookupResult:
    expression = attribute.expression
    if isinstance(expression, Literal):
        return Scalar(attribute, expression.value)
    if isinstance(expression, ListLiteral):
        return Sequence(attribute, expression.items)
    if isinstance(expression, Traversal):
        return Reference(attribute, expression)
    return Unresolved(attribute, expression.text)


def _evaluated(expression: Expression) -> Any:
    if isinstance(expression, Literal):
        return expression.value
    if isinstance(expression, Traversal):
        return expression.value
    return None


def _traversals(expression: Expression) -> Iterator[Traversal]:
    if isinstance(expression, Traversal):
        yield expression
    elif isinstance(expression, ListLiteral):
        for item in expression.items:
            yield from _traversals(item)


# Conversions follow Terraform's automatic primitive type conversion
def _as_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def _as_string(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None
