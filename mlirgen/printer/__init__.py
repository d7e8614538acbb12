"""
mlirgen Printer Package

Renders mlirgen modules to generic-form IR text for external tooling.

Key Features:
- Generic "operation call" syntax for every operation
- Operand types recovered by threading a per-block type environment
- Deterministic output (sorted attribute keys)
- Optional ``loc(...)`` annotations
- Symbol table collection for symbol-aware rendering
"""

from .config import PrinterConfig
from .printer import IRPrinter, print_module, render_attr_dict
from .symbol_table import SymbolTable, collect_symbols

__all__ = [
    "IRPrinter",
    "PrinterConfig",
    "print_module",
    "render_attr_dict",
    "SymbolTable",
    "collect_symbols",
]
