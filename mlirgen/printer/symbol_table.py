"""
Symbol table collection for mlirgen modules.

Operations that define a symbol carry a ``sym_name`` string attribute
(``func.func``, ``memref.global``, ...). ``collect_symbols`` walks a whole
module depth-first, terminators and nested regions included, and maps each
symbol name to its defining operation.

The generic printer does not need symbols; the table is available for
symbol-aware rendering and for callers resolving ``SymbolRefAttr``s.
"""

import logging
from typing import Dict, Iterator, List, Optional

from ..ir.ir_attrs import StringAttr, SymbolRefAttr
from ..ir.ir_nodes import Module, Operation

logger = logging.getLogger(__name__)

SYMBOL_NAME_ATTR = "sym_name"


class SymbolTable:
    """Mapping from symbol name to the operation defining it."""

    def __init__(self):
        self._symbols: Dict[str, Operation] = {}

    def define(self, name: str, op: Operation):
        """Bind ``name`` to ``op``; a later definition replaces an earlier one."""
        if name in self._symbols:
            logger.debug("symbol @%s redefined by %s", name, op.id)
        self._symbols[name] = op

    def lookup(self, name: str) -> Optional[Operation]:
        return self._symbols.get(name)

    def resolve(self, ref: SymbolRefAttr) -> Optional[Operation]:
        """Resolve a symbol reference attribute to its defining operation."""
        return self.lookup(ref.name)

    def names(self) -> List[str]:
        return sorted(self._symbols)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __getitem__(self, name: str) -> Operation:
        return self._symbols[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)


def collect_symbols(module: Module) -> SymbolTable:
    """Collect every ``sym_name``-carrying operation of ``module``."""
    table = SymbolTable()
    for op in module.walk():
        attr = op.attrs.get(SYMBOL_NAME_ATTR)
        if isinstance(attr, StringAttr):
            table.define(attr.value, op)
    return table
