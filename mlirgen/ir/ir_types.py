"""
mlirgen IR value types.

Defines the fixed catalog of value types the IR model supports: integers,
floats, ``index``, memrefs, structs, opaque named types, function types and
ranked/unranked tensors. Every type knows how to render itself in the
generic textual syntax, so new variants can be added without touching the
printer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from .errors import IRTypeError


INTEGER_WIDTHS = (1, 8, 16, 32, 64)
FLOAT_WIDTHS = (32, 64)


# ============================================================================
# Dimensions
# ============================================================================

class Dim(ABC):
    """A single tensor/memref dimension."""

    @abstractmethod
    def render(self) -> str:
        pass

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class StaticDim(Dim):
    """Dimension with a known, non-negative extent."""
    extent: int

    def __post_init__(self):
        if self.extent < 0:
            raise IRTypeError(f"static dimension must be non-negative, got {self.extent}")

    def render(self) -> str:
        return str(self.extent)


@dataclass(frozen=True)
class DynamicDim(Dim):
    """Dimension whose extent is only known at runtime."""

    def render(self) -> str:
        return "*"


DimLike = Union[Dim, int, None]


def as_dim(value: DimLike) -> Dim:
    """Coerce ``int`` to a static dimension and ``None`` to a dynamic one."""
    if isinstance(value, Dim):
        return value
    if value is None:
        return DynamicDim()
    return StaticDim(value)


def _dims(values: Iterable[DimLike]) -> Tuple[Dim, ...]:
    return tuple(as_dim(v) for v in values)


def _shape_prefix(dims: Sequence[Dim]) -> str:
    return "".join(f"{d.render()}x" for d in dims)


# ============================================================================
# Types
# ============================================================================

class IRType(ABC):
    """Base class for IR value types."""

    @abstractmethod
    def render(self) -> str:
        """Render the type in the generic textual syntax."""
        pass

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class IntegerType(IRType):
    """Signless fixed-width integer (``i1`` .. ``i64``)."""
    width: int

    def __post_init__(self):
        if self.width not in INTEGER_WIDTHS:
            raise IRTypeError(f"unsupported integer width: {self.width}")

    def render(self) -> str:
        return f"i{self.width}"


@dataclass(frozen=True)
class FloatType(IRType):
    """IEEE float (``f32`` or ``f64``)."""
    width: int

    def __post_init__(self):
        if self.width not in FLOAT_WIDTHS:
            raise IRTypeError(f"unsupported float width: {self.width}")

    def render(self) -> str:
        return f"f{self.width}"


@dataclass(frozen=True)
class IndexType(IRType):
    """Target-sized integer used for indexing."""

    def render(self) -> str:
        return "index"


@dataclass(frozen=True)
class MemRefType(IRType):
    """Reference to a region of memory with a shape and element type."""
    dims: Tuple[Dim, ...]
    element_type: IRType

    def __init__(self, dims: Iterable[DimLike], element_type: IRType):
        object.__setattr__(self, "dims", _dims(dims))
        object.__setattr__(self, "element_type", element_type)

    @property
    def rank(self) -> int:
        return len(self.dims)

    def render(self) -> str:
        return f"memref<{_shape_prefix(self.dims)}{self.element_type.render()}>"


@dataclass(frozen=True)
class StructType(IRType):
    """Anonymous aggregate of ordered field types."""
    fields: Tuple[IRType, ...]

    def __init__(self, fields: Iterable[IRType]):
        object.__setattr__(self, "fields", tuple(fields))

    def render(self) -> str:
        return f"struct<{', '.join(f.render() for f in self.fields)}>"


@dataclass(frozen=True)
class NamedType(IRType):
    """Opaque dialect type referred to by name, e.g. ``!llvm.ptr``."""
    name: str

    def render(self) -> str:
        return f"!{self.name}"


@dataclass(frozen=True)
class FunctionType(IRType):
    """Function signature: ordered inputs and ordered results."""
    inputs: Tuple[IRType, ...]
    results: Tuple[IRType, ...]

    def __init__(self, inputs: Iterable[IRType], results: Iterable[IRType]):
        object.__setattr__(self, "inputs", tuple(inputs))
        object.__setattr__(self, "results", tuple(results))

    def render(self) -> str:
        ins = ", ".join(t.render() for t in self.inputs)
        outs = ", ".join(t.render() for t in self.results)
        return f"({ins}) -> ({outs})"


@dataclass(frozen=True)
class RankedTensorType(IRType):
    """Tensor with a known rank."""
    dims: Tuple[Dim, ...]
    element_type: IRType

    def __init__(self, dims: Iterable[DimLike], element_type: IRType):
        object.__setattr__(self, "dims", _dims(dims))
        object.__setattr__(self, "element_type", element_type)

    @property
    def rank(self) -> int:
        return len(self.dims)

    @property
    def static_shape(self) -> Optional[Tuple[int, ...]]:
        """Extents of all dimensions, or None if any is dynamic."""
        if any(isinstance(d, DynamicDim) for d in self.dims):
            return None
        return tuple(d.extent for d in self.dims)

    def render(self) -> str:
        return f"tensor<{_shape_prefix(self.dims)}{self.element_type.render()}>"


@dataclass(frozen=True)
class UnrankedTensorType(IRType):
    """Tensor of unknown rank."""
    element_type: IRType

    def render(self) -> str:
        return f"tensor<*x{self.element_type.render()}>"


I1 = IntegerType(1)
I8 = IntegerType(8)
I16 = IntegerType(16)
I32 = IntegerType(32)
I64 = IntegerType(64)
F32 = FloatType(32)
F64 = FloatType(64)
INDEX = IndexType()


__all__ = [
    "Dim", "StaticDim", "DynamicDim", "as_dim",
    "IRType", "IntegerType", "FloatType", "IndexType", "MemRefType",
    "StructType", "NamedType", "FunctionType", "RankedTensorType",
    "UnrankedTensorType",
    "I1", "I8", "I16", "I32", "I64", "F32", "F64", "INDEX",
    "INTEGER_WIDTHS", "FLOAT_WIDTHS",
]
