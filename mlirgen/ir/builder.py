"""
Operation builder for the mlirgen IR.

``OperationBuilder`` collects the pieces of an operation through pure setter
calls and produces the finished ``Operation`` on ``build``. Identifiers come
from a caller-supplied generator ``environment -> (environment, id)`` that
is threaded through every build, so no global counter is involved.

``BuildSession`` owns the environment for one construction session and
threads it automatically.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, TypeVar

from ..source import SourceLocation, UNKNOWN_LOCATION
from .ir_attrs import IRAttr
from .ir_nodes import Operation, Region, TypedName
from .ir_types import IRType

logger = logging.getLogger(__name__)

Env = TypeVar("Env")
IdGenerator = Callable[[Any], Tuple[Any, str]]


def numbered_ids(prefix: str = "%") -> IdGenerator:
    """
    Return a generator whose environment is an integer counter.

    ``gen(0) == (1, "%0")``, ``gen(1) == (2, "%1")`` and so on.
    """
    def generate(counter: int) -> Tuple[int, str]:
        return counter + 1, f"{prefix}{counter}"
    return generate


@dataclass(frozen=True, eq=False)
class OperationBuilder:
    """
    Immutable builder for a single ``Operation``.

    Every ``with_*`` call returns a new builder; calling the same setter
    twice keeps only the last value. Builders compare by identity.
    """
    name: str
    generate_id: IdGenerator
    operands: Tuple[str, ...] = ()
    results: Tuple[TypedName, ...] = ()
    result_types: Tuple[IRType, ...] = ()
    attrs: Mapping[str, IRAttr] = field(default_factory=lambda: MappingProxyType({}))
    regions: Tuple[Region, ...] = ()
    is_terminator: bool = False
    location: SourceLocation = UNKNOWN_LOCATION
    successors: Tuple[str, ...] = ()

    def with_operands(self, operands: Iterable[str]) -> "OperationBuilder":
        return replace(self, operands=tuple(operands))

    def with_results(self, results: Iterable[TypedName]) -> "OperationBuilder":
        return replace(self, results=tuple(results), result_types=())

    def with_result_types(self, *types: IRType) -> "OperationBuilder":
        """Declare results named after the generated identifier."""
        return replace(self, result_types=tuple(types), results=())

    def with_attrs(self, attrs: Mapping[str, IRAttr]) -> "OperationBuilder":
        return replace(self, attrs=MappingProxyType(dict(attrs)))

    def with_regions(self, regions: Iterable[Region]) -> "OperationBuilder":
        return replace(self, regions=tuple(regions))

    def as_terminator(self, is_terminator: bool = True) -> "OperationBuilder":
        return replace(self, is_terminator=is_terminator)

    def with_loc(self, location: SourceLocation) -> "OperationBuilder":
        return replace(self, location=location)

    def with_successors(self, successors: Iterable[str]) -> "OperationBuilder":
        return replace(self, successors=tuple(successors))

    def build(self, env: Env) -> Tuple[Env, Operation]:
        """
        Generate an identifier and assemble the operation.

        Returns the updated environment, which must be used for the next
        build, and the operation. Nothing is validated.
        """
        env, op_id = self.generate_id(env)
        results = self.results
        if self.result_types:
            results = _results_for_id(op_id, self.result_types)
        op = Operation(
            name=self.name,
            id=op_id,
            operands=self.operands,
            results=results,
            attrs=self.attrs,
            regions=self.regions,
            is_terminator=self.is_terminator,
            location=self.location,
            successors=self.successors,
        )
        return env, op


def _results_for_id(op_id: str, types: Tuple[IRType, ...]) -> Tuple[TypedName, ...]:
    if len(types) == 1:
        return ((op_id, types[0]),)
    return tuple((f"{op_id}_{i}", t) for i, t in enumerate(types))


def operation(name: str, generate_id: IdGenerator) -> OperationBuilder:
    """Start building an operation called ``name``."""
    return OperationBuilder(name, generate_id)


class BuildSession:
    """
    Owns the identifier environment for one construction session.

    Each ``build`` consumes the current environment and stores the one the
    generator returns, so callers never hold a stale environment.
    """

    def __init__(self, generate_id: Optional[IdGenerator] = None, env: Any = 0):
        self.generate_id = generate_id or numbered_ids()
        self._env = env
        self.built = 0

    @property
    def env(self) -> Any:
        return self._env

    def op(self, name: str) -> OperationBuilder:
        """Start a builder bound to this session's generator."""
        return OperationBuilder(name, self.generate_id)

    def build(self, builder: OperationBuilder) -> Operation:
        self._env, op = builder.build(self._env)
        self.built += 1
        logger.debug("built %s as %s", op.name, op.id)
        return op


__all__ = [
    "OperationBuilder", "BuildSession", "IdGenerator", "numbered_ids", "operation",
]
