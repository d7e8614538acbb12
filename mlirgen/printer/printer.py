"""
Generic-form printer for mlirgen modules.

Renders a ``Module`` to the textual syntax external IR tooling consumes.
Every operation is printed in the generic "operation call" form::

    %0 = "arith.addi"(%a, %b) {attr = 1} : (i32, i32) -> i32

Operand types are not stored on operations, so the printer threads a type
environment through each block: operations see the block arguments and the
results of the operations before them, and the terminator sees the whole
body. Environments are never shared between blocks or regions.
"""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple, Union

from ..ir.ir_attrs import IRAttr
from ..ir.ir_nodes import ENTRY_BLOCK_LABEL, Block, Module, Operation, Region, TypedName
from ..ir.ir_types import IRType
from ..source import SourceLocation
from .config import PrinterConfig
from .symbol_table import SymbolTable, collect_symbols

logger = logging.getLogger(__name__)

TypeEnv = Dict[str, IRType]

MISSING_ATTR = "<missing>"
PROPERTIES_KEY = "callee"


def bind_results(env: TypeEnv, op: Operation) -> TypeEnv:
    """Return a new environment extended with the results of ``op``."""
    if not op.results:
        return env
    return {**env, **dict(op.results)}


def render_attr_dict(attrs: Mapping[str, IRAttr]) -> str:
    """
    Render an attribute dictionary with keys in sorted order.

    A dictionary holding a ``callee`` key is a properties dictionary and is
    wrapped in ``<{...}>`` instead of ``{...}``.
    """
    entries = []
    for key in sorted(attrs):
        attr = attrs.get(key)
        value = attr.render() if attr is not None else MISSING_ATTR
        entries.append(f"{key} = {value}")
    body = ", ".join(entries)
    if PROPERTIES_KEY in attrs:
        return f"<{{{body}}}>"
    return f"{{{body}}}"


def render_result_signature(results: Tuple[TypedName, ...]) -> str:
    """Single result type bare, otherwise a parenthesised tuple."""
    if len(results) == 1:
        return results[0][1].render()
    return f"({', '.join(t.render() for _, t in results)})"


def render_typed_names(pairs: Tuple[TypedName, ...]) -> str:
    return ", ".join(f"{name}: {ir_type.render()}" for name, ir_type in pairs)


class IRPrinter:
    """Render :class:`Module` instances into generic-form IR text."""

    def __init__(self, config: Optional[PrinterConfig] = None):
        self.config = config or PrinterConfig()
        self.symbols = SymbolTable()

    def print_module(self, module: Module) -> str:
        self.symbols = collect_symbols(module)
        logger.debug(
            "printing module with %d top-level operation(s), %d symbol(s)",
            len(module.operations), len(self.symbols),
        )

        parts: List[str] = ["module {\n"]
        env: TypeEnv = {}
        for op in module.operations:
            parts.append(self.print_operation(op, env, 1))
            env = bind_results(env, op)
        parts.append("}\n")
        return "".join(parts)

    def write(self, module: Module, output_path: Union[str, Path]) -> None:
        Path(output_path).write_text(self.print_module(module), "utf-8")

    def print_operation(self, op: Operation, env: TypeEnv, level: int) -> str:
        """Render one operation line (plus nested regions) at ``level``."""
        indent = self._indent(level)
        text = indent
        if op.results:
            text += ", ".join(name for name, _ in op.results) + " = "
        text += f'"{op.name}"({", ".join(op.operands)})'

        if op.regions:
            separator = f"{indent}}}, {{\n"
            regions = separator.join(self._print_region(r, level) for r in op.regions)
            text += f" ({{\n{regions}{indent}}})"

        if op.attrs:
            text += " " + render_attr_dict(op.attrs)

        operand_types = ", ".join(self._lookup(env, name) for name in op.operands)
        text += f" : ({operand_types}) -> {render_result_signature(op.results)}"

        if op.successors:
            text += " [" + " ".join(f"^{label}" for label in op.successors) + "]"

        text += self._render_location(op.location)
        return text + "\n"

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _indent(self, level: int) -> str:
        return " " * (self.config.indent_width * level)

    def _lookup(self, env: TypeEnv, name: str) -> str:
        ir_type = env.get(name)
        return ir_type.render() if ir_type is not None else ""

    def _print_region(self, region: Region, op_level: int) -> str:
        return "".join(
            self._print_block(label, block, op_level + 1)
            for label, block in region.iter_blocks()
        )

    def _print_block(self, label: str, block: Block, level: int) -> str:
        parts: List[str] = []
        if label != ENTRY_BLOCK_LABEL or block.args:
            parts.append(f"{self._indent(level)}^{label}({render_typed_names(block.args)}):\n")

        env: TypeEnv = dict(block.args)
        for op in block.body:
            parts.append(self.print_operation(op, env, level + 1))
            env = bind_results(env, op)
        parts.append(self.print_operation(block.terminator, env, level + 1))
        return "".join(parts)

    def _render_location(self, location: SourceLocation) -> str:
        if not self.config.emit_locations:
            return ""
        if location.is_unknown:
            return " loc(unknown)"
        start = location.start
        return f' loc("{location.filename}":{start.row}:{start.column})'


def print_module(module: Module, config: Optional[PrinterConfig] = None) -> str:
    """Render ``module`` to generic-form IR text."""
    return IRPrinter(config).print_module(module)


__all__ = [
    "IRPrinter", "print_module", "render_attr_dict", "bind_results",
    "MISSING_ATTR",
]
