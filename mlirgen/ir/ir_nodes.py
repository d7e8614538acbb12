"""
mlirgen IR structure nodes.

Defines the generic structures every IR program is built from. An
``Operation`` may own ``Region``s, a region owns ``Block``s, and a block owns
operations, so arbitrarily nested programs hang off a single ``Module``.
All nodes are immutable once constructed.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from ..source import SourceLocation, UNKNOWN_LOCATION
from .ir_attrs import IRAttr
from .ir_types import IRType


ENTRY_BLOCK_LABEL = "bb0"

# (name, type) pair used for operation results and block arguments
TypedName = Tuple[str, IRType]


def _typed_names(pairs: Iterable[TypedName]) -> Tuple[TypedName, ...]:
    return tuple((name, ir_type) for name, ir_type in pairs)


@dataclass(frozen=True)
class Operation:
    """
    A single IR operation in generic form.

    ``id`` is the SSA handle produced for this operation; ``operands`` name
    results of other operations (or block arguments) and ``results`` declare
    the values this operation defines.
    """
    name: str
    id: str
    operands: Tuple[str, ...] = ()
    results: Tuple[TypedName, ...] = ()
    attrs: Mapping[str, IRAttr] = field(default_factory=dict)
    regions: Tuple["Region", ...] = ()
    is_terminator: bool = False
    location: SourceLocation = UNKNOWN_LOCATION
    successors: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "operands", tuple(self.operands))
        object.__setattr__(self, "results", _typed_names(self.results))
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))
        object.__setattr__(self, "regions", tuple(self.regions))
        object.__setattr__(self, "successors", tuple(self.successors))

    def __hash__(self) -> int:
        return hash((
            self.name, self.id, self.operands, self.results,
            frozenset(self.attrs.items()), self.regions, self.is_terminator,
            self.location, self.successors,
        ))

    @property
    def dialect(self) -> str:
        """Dialect prefix of the name (``arith`` for ``arith.constant``)."""
        return self.name.split(".", 1)[0] if "." in self.name else ""

    @property
    def result_types(self) -> Tuple[IRType, ...]:
        return tuple(ir_type for _, ir_type in self.results)

    def get_attr(self, key: str, default: Optional[IRAttr] = None) -> Optional[IRAttr]:
        return self.attrs.get(key, default)

    def __str__(self) -> str:
        return f'{self.id} = "{self.name}"'


@dataclass(frozen=True)
class Block:
    """
    A basic block: typed arguments, body operations and one terminator.

    The terminator is kept apart from ``body`` and always comes last.
    """
    terminator: Operation
    body: Tuple[Operation, ...] = ()
    args: Tuple[TypedName, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "body", tuple(self.body))
        object.__setattr__(self, "args", _typed_names(self.args))

    @property
    def operations(self) -> Tuple[Operation, ...]:
        """Body followed by the terminator."""
        return self.body + (self.terminator,)


@dataclass(frozen=True)
class Region:
    """
    An entry block plus labelled additional blocks in declaration order.

    The entry block is implicitly labelled ``bb0``.
    """
    entry: Block
    blocks: Mapping[str, Block] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "blocks", MappingProxyType(dict(self.blocks)))

    def __hash__(self) -> int:
        return hash((self.entry, frozenset(self.blocks.items())))

    @property
    def labels(self) -> Tuple[str, ...]:
        return (ENTRY_BLOCK_LABEL,) + tuple(self.blocks)

    def iter_blocks(self) -> Iterator[Tuple[str, Block]]:
        """Yield ``(label, block)`` for the entry block and then the rest."""
        yield ENTRY_BLOCK_LABEL, self.entry
        yield from self.blocks.items()


@dataclass(frozen=True)
class Module:
    """Top-level IR module: the root owning every operation."""
    operations: Tuple[Operation, ...] = ()
    location: SourceLocation = UNKNOWN_LOCATION

    def __post_init__(self):
        object.__setattr__(self, "operations", tuple(self.operations))

    def walk(self) -> Iterator[Operation]:
        """Depth-first pre-order walk over every operation, terminators included."""
        for op in self.operations:
            yield from walk_operation(op)


def walk_operation(op: Operation) -> Iterator[Operation]:
    """Yield ``op`` and then every operation nested in its regions."""
    yield op
    for region in op.regions:
        for _, block in region.iter_blocks():
            for nested in block.operations:
                yield from walk_operation(nested)


__all__ = [
    "Operation", "Block", "Region", "Module", "TypedName",
    "ENTRY_BLOCK_LABEL", "walk_operation",
]
