"""
Modules and Module Sets: the read-only block graph.

A Module holds the blocks of one configuration unit. A ModuleSet holds
every module of a scan and answers global lookups, since a satellite
resource may reference a block declared in a different module.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from iacmodel.exceptions import InvalidModuleSetError
from iacmodel.terraform.block import Block
from iacmodel.terraform.expressions import Expression, Literal, Traversal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Module:
    """
    Blocks declared by one configuration unit.

    Attributes:
        path: Directory or file the blocks came from
        blocks: Top-level blocks in declaration order
        parse_errors: Errors the parser recovered from
    """

    path: str
    blocks: tuple[Block, ...] = ()
    parse_errors: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def blocks_of_type(self, type_name: str) -> list[Block]:
        """Return blocks of a type in declaration order."""
        return [b for b in self.blocks if b.type_name == type_name]

    def resources_of_type(self, type_name: str) -> list[Block]:
        """Return resource blocks (not data sources) of a type."""
        return [b for b in self.blocks if b.is_resource and b.type_name == type_name]

    def find(self, type_name: str, label: str) -> Block | None:
        """Return the first block with the given identity."""
        for block in self.blocks:
            if block.type_name == type_name and block.label == label:
                return block
        return None


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of resolving a satellite's target reference.

    Attributes:
        block: The resolved primary block, or None for an orphan
        key: Identifier shared by orphans that point at the same missing
            target; None when the reference is absent or unusable
    """

    block: Block | None = None
    key: str | None = None

    @property
    def resolved(self) -> bool:
        return self.block is not None


class ModuleSet:
    """
    All modules of one scan, in module-inclusion order.

    Lookups search every module and always return the first match in
    declaration order. The set is immutable; the name indexes it builds
    lazily are safe to share between threads.
    """

    def __init__(self, modules: Iterable[Module]) -> None:
        """
        Initialize the module set.

        Args:
            modules: Modules, root first

        Raises:
            InvalidModuleSetError: If modules is None or holds a non-Module
        """
        if modules is None:
            raise InvalidModuleSetError("Module set requires a sequence of modules, got None")

        module_list = tuple(modules)
        for module in module_list:
            if not isinstance(module, Module):
                raise InvalidModuleSetError(
                    f"Module set entries must be Module instances, got {type(module).__name__}"
                )

        self._modules = module_list
        self._by_identity: dict[tuple[str, str], list[Block]] = {}
        for block in self.blocks():
            self._by_identity.setdefault(block.identity, []).append(block)

        self._name_indexes: dict[tuple[str, str], Mapping[str, Block]] = {}
        self._lock = threading.Lock()

    @property
    def modules(self) -> tuple[Module, ...]:
        return self._modules

    @property
    def root(self) -> Module | None:
        return self._modules[0] if self._modules else None

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def blocks(self) -> Iterator[Block]:
        """Iterate over every top-level block of every module."""
        for module in self._modules:
            yield from module.blocks

    def blocks_of_type(self, type_name: str) -> list[Block]:
        """Return blocks of a type concatenated across modules."""
        return [b for b in self.blocks() if b.type_name == type_name]

    def resources_of_type(self, type_name: str) -> list[Block]:
        """Return resource blocks of a type concatenated across modules."""
        return [b for b in self.blocks() if b.is_resource and b.type_name == type_name]

    def blocks_of_types(self, *type_names: str) -> list[Block]:
        """Return blocks of any of the given types, in global declaration order."""
        wanted = set(type_names)
        return [b for b in self.blocks() if b.type_name in wanted]

    def find(self, type_name: str, label: str, kind: str | None = None) -> Block | None:
        """
        Return the first block with the given identity across all modules.

        Args:
            type_name: Block type
            label: Block label
            kind: Restrict to a block kind ("resource", "data", ...)

        Returns:
            First matching block in declaration order, or None
        """
        for block in self._by_identity.get((type_name, label), ()):
            if kind is None or block.kind == kind:
                return block
        return None

    def name_index(self, type_name: str, attribute: str = "name") -> Mapping[str, Block]:
        """
        Map identifying-attribute values to blocks of a type.

        Only resource blocks with a literal (or evaluated) string value
        are indexed. Under duplicate names the first declaration wins.
        The index is built once and shared, so it is returned read-only.

        Args:
            type_name: Block type to index
            attribute: Identifying attribute (e.g., "name")

        Returns:
            Read-only mapping of attribute value to block
        """
        key = (type_name, attribute)
        with self._lock:
            index = self._name_indexes.get(key)
            if index is None:
                names: dict[str, Block] = {}
                for block in self.resources_of_type(type_name):
                    value = _string_of(block, attribute)
                    if value is not None:
                        names.setdefault(value, block)
                index = MappingProxyType(names)
                self._name_indexes[key] = index
            return index

    def resolve_traversal(self, traversal: Traversal) -> Block | None:
        """Return the block a traversal points at, if it exists."""
        target = traversal.target
        if target is None:
            return None
        kind = "data" if traversal.parts[0] == "data" else "resource"
        return self.find(target[0], target[1], kind=kind)

    def resolve(
        self,
        expression: Expression | None,
        target_type: str,
        name_attribute: str = "name",
    ) -> Resolution:
        """
        Resolve a reference expression to a block of ``target_type``.

        Structural references are tried first. A structural hit on a block
        of another type counts as unresolved. A structural miss falls back
        to the name index when the traversal carries an evaluated string;
        a string literal goes straight to the name index.

        Args:
            expression: The satellite's reference expression, or None
            target_type: Required type of the target block
            name_attribute: Identifying attribute for name matching

        Returns:
            Resolution with the target block, or the orphan key
        """
        if isinstance(expression, Traversal):
            target = self.resolve_traversal(expression)
            if target is not None:
                if target.type_name == target_type:
                    return Resolution(block=target, key=target.address)
                logger.debug(
                    f"Reference {expression.text} targets {target.type_name}, "
                    f"expected {target_type}"
                )
                return Resolution(key=expression.target_address)
            if isinstance(expression.value, str):
                return self._resolve_name(expression.value, target_type, name_attribute)
            return Resolution(key=expression.target_address)

        if isinstance(expression, Literal) and isinstance(expression.value, str):
            if not expression.value:
                return Resolution()
            return self._resolve_name(expression.value, target_type, name_attribute)

        return Resolution()

    def _resolve_name(self, name: str, target_type: str, name_attribute: str) -> Resolution:
        block = self.name_index(target_type, name_attribute).get(name)
        if block is not None:
            return Resolution(block=block, key=block.address)
        return Resolution(key=name)


def _string_of(block: Block, attribute: str) -> str | None:
    found = block.get_attribute(attribute)
    if found is None:
        return None
    expression = found.expression
    if isinstance(expression, (Literal, Traversal)) and isinstance(expression.value, str):
        return expression.value
    return None
