"""
Configuration graph for iacmodel.

Read-only view of parsed Terraform configuration: Blocks with their
attribute expressions and source ranges, Modules, and the Module Set
that answers cross-module lookups and reference resolution.
"""

from iacmodel.terraform.block import (
    Absent,
    Block,
    LookupResult,
    Nested,
    Reference,
    Scalar,
    Sequence,
    Unresolved,
)
from iacmodel.terraform.expressions import (
    Attribute,
    Expression,
    ListLiteral,
    Literal,
    Traversal,
    Unevaluated,
)
from iacmodel.terraform.loader import (
    build_module_set,
    load_directory,
    load_file,
    load_path,
    load_source,
)
from iacmodel.terraform.module import Module, ModuleSet, Resolution

__all__ = [
    # Graph
    "Block",
    "Module",
    "ModuleSet",
    "Resolution",
    # Expressions
    "Attribute",
    "Expression",
    "ListLiteral",
    "Literal",
    "Traversal",
    "Unevaluated",
    # Lookup results
    "Absent",
    "LookupResult",
    "Nested",
    "Reference",
    "Scalar",
    "Sequence",
    "Unresolved",
    # Loading
    "build_module_set",
    "load_directory",
    "load_file",
    "load_path",
    "load_source",
]
