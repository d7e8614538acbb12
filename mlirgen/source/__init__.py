"""
mlirgen Source Location Package

Immutable source ranges attached to operations and modules. A location
records the file name and the (row, column) span an IR construct was
generated from, and two locations can be merged into the smallest range
covering both.
"""

from .location import Position, SourceLocation, UNKNOWN_LOCATION, combine

__all__ = [
    "Position",
    "SourceLocation",
    "UNKNOWN_LOCATION",
    "combine",
]
