"""
Source location and provenance metadata for extracted values.

Every value the adapters extract carries a Metadata record saying where it
came from (Explicit, Defaulted or Unmanaged) and, for explicit values, the
exact source lines it was declared on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Provenance(Enum):
    """Origin of an extracted value."""

    EXPLICIT = "explicit"  # Declared in source
    DEFAULTED = "defaulted"  # Block present, attribute absent
    UNMANAGED = "unmanaged"  # Owning block absent, synthesized placeholder


@dataclass(frozen=True)
class Range:
    """
    Source range of a block, attribute or list element.

    Attributes:
        filename: Path of the source file
        start_line: First line (1-indexed), 0 when empty
        end_line: Last line (1-indexed), 0 when empty
    """

    filename: str = ""
    start_line: int = 0
    end_line: int = 0

    @classmethod
    def empty(cls) -> Range:
        """Return the zero range used by non-explicit values."""
        return _EMPTY_RANGE

    @property
    def is_empty(self) -> bool:
        """Check if this range points nowhere."""
        return not self.filename and self.start_line == 0 and self.end_line == 0

    def covers(self, other: Range) -> bool:
        """Check if another range lies inside this one."""
        return (
            self.filename == other.filename
            and self.start_line <= other.start_line
            and other.end_line <= self.end_line
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "filename": self.filename,
            "start_line": self.start_line,
            "end_line": self.end_line,
        }

    def __str__(self) -> str:
        """Return a human-readable location string."""
        if self.is_empty:
            return "<unknown>"
        if self.end_line != self.start_line:
            return f"{self.filename}:{self.start_line}-{self.end_line}"
        return f"{self.filename}:{self.start_line}"


_EMPTY_RANGE = Range()


@dataclass(frozen=True)
class Metadata:
    """
    Provenance and location of a value or entity.

    A range is meaningful only for explicit metadata; defaulted and
    unmanaged metadata always carry the empty range.

    Attributes:
        range: Source range of the declaration
        provenance: Where the value came from
        reference: Address of the declaring block or attribute, if any
    """

    range: Range = field(default_factory=Range.empty)
    provenance: Provenance = Provenance.UNMANAGED
    reference: str = ""

    def __post_init__(self) -> None:
        if self.provenance is Provenance.EXPLICIT:
            rng = self.range
            if not rng.filename or rng.start_line < 1 or rng.end_line < rng.start_line:
                raise ValueError(f"Explicit metadata requires a valid range, got {rng!r}")
        elif not self.range.is_empty:
            raise ValueError(
                f"{self.provenance.value} metadata must carry an empty range"
            )

    @classmethod
    def explicit(cls, rng: Range, reference: str = "") -> Metadata:
        """Metadata for a value declared in source."""
        return cls(range=rng, provenance=Provenance.EXPLICIT, reference=reference)

    @classmethod
    def defaulted(cls, reference: str = "") -> Metadata:
        """Metadata for a schema default on a present block."""
        return cls(provenance=Provenance.DEFAULTED, reference=reference)

    @classmethod
    def unmanaged(cls) -> Metadata:
        """Metadata for a synthesized placeholder."""
        return _UNMANAGED

    @property
    def is_explicit(self) -> bool:
        return self.provenance is Provenance.EXPLICIT

    @property
    def is_defaulted(self) -> bool:
        return self.provenance is Provenance.DEFAULTED

    @property
    def is_unmanaged(self) -> bool:
        return self.provenance is Provenance.UNMANAGED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "provenance": self.provenance.value,
            "reference": self.reference,
            "range": self.range.to_dict(),
        }


_UNMANAGED = Metadata()
