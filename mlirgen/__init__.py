"""
mlirgen Package

Build MLIR-style IR programs in Python and print them in the generic textual
form, without linking against the native toolchain.

Architecture:
    mlirgen/
    ├── source/          # Source locations
    ├── ir/              # IR model, builder and validation
    └── printer/         # Generic-form printer and symbol tables

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .source import Position, SourceLocation, combine
from .ir import Module, Operation, Block, Region, OperationBuilder, BuildSession, numbered_ids
from .printer import IRPrinter, PrinterConfig, print_module

__all__ = [
    # Core classes
    "Module",
    "Operation",
    "Block",
    "Region",
    "OperationBuilder",
    "BuildSession",
    "numbered_ids",
    "IRPrinter",
    "PrinterConfig",
    "print_module",
    "Position",
    "SourceLocation",
    "combine",

    # Version info
    "__version__",
    "__license__",
]
