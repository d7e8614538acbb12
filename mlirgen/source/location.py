"""
Source locations for mlirgen IR constructs.

A ``SourceLocation`` is a file name plus a start and end ``Position``.
Positions order by row first and column second, which is what ``combine``
relies on when merging two ranges.
"""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """A (row, column) point in a source file."""
    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.row}:{self.column}"


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a range in the source code an IR construct came from.

    Used for diagnostics and, when enabled, ``loc(...)`` annotations in the
    printed IR.
    """
    filename: str
    start: Position
    end: Position

    @classmethod
    def unknown(cls) -> "SourceLocation":
        return cls("<unknown>", Position(0, 0), Position(0, 0))

    @property
    def is_unknown(self) -> bool:
        return self == UNKNOWN_LOCATION

    def combine(self, other: "SourceLocation") -> "SourceLocation":
        """Smallest range covering both locations; keeps this file name."""
        return combine(self, other)

    def __str__(self) -> str:
        return f"{self.filename}:{self.start}-{self.end}"


UNKNOWN_LOCATION = SourceLocation.unknown()


def combine(a: SourceLocation, b: SourceLocation) -> SourceLocation:
    """
    Merge two locations into the smallest range covering both.

    Both locations are assumed to share a file name. This is not checked:
    the result always carries ``a.filename``.
    """
    return SourceLocation(a.filename, min(a.start, b.start), max(a.end, b.end))
