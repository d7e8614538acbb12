"""
Configuration for the mlirgen printer.
"""

from dataclasses import dataclass


@dataclass
class PrinterConfig:
    """Configuration parameters for ``IRPrinter``"""

    # Layout
    indent_width: int = 2

    # Location annotations are suppressed unless explicitly requested
    emit_locations: bool = False

    def __post_init__(self):
        if self.indent_width < 0:
            raise ValueError(f"indent_width must be non-negative, got {self.indent_width}")
