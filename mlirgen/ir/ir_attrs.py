"""
mlirgen IR attributes.

Attributes carry constant metadata on operations: strings, booleans,
numbers, types, arrays, dense float literals, symbol references, symbol
visibility and unit (presence-only) markers. Like types, each attribute
renders itself.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import IRAttributeError
from .ir_types import IRType, RankedTensorType, F64


def format_float(value: float) -> str:
    """
    Fixed six-decimal formatting with an explicit leading minus sign.

    The sign is applied after rounding, so values that round to zero print
    as ``0.000000``.
    """
    text = f"{abs(value):.6f}"
    if value < 0 and text.strip("0.") != "":
        return "-" + text
    return text


def _finite(value) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise IRAttributeError(f"float attribute value must be finite, got {value}")
    return value


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class IRAttr(ABC):
    """Base class for IR attributes."""

    @abstractmethod
    def render(self) -> str:
        """Render the attribute value in the generic textual syntax."""
        pass

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class StringAttr(IRAttr):
    value: str

    def render(self) -> str:
        return _quote(self.value)


@dataclass(frozen=True)
class BoolAttr(IRAttr):
    value: bool

    def render(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class IntegerAttr(IRAttr):
    """Integer constant, optionally typed (``42`` or ``42 : i32``)."""
    value: int
    type: Optional[IRType] = None

    def render(self) -> str:
        if self.type is None:
            return str(int(self.value))
        return f"{int(self.value)} : {self.type.render()}"


@dataclass(frozen=True)
class FloatAttr(IRAttr):
    """Float constant, optionally typed (``1.500000`` or ``1.500000 : f32``)."""
    value: float
    type: Optional[IRType] = None

    def __post_init__(self):
        _finite(self.value)

    def render(self) -> str:
        if self.type is None:
            return format_float(self.value)
        return f"{format_float(self.value)} : {self.type.render()}"


@dataclass(frozen=True)
class TypeAttr(IRAttr):
    """A type used as a value, e.g. ``function_type`` on ``func.func``."""
    type: IRType

    def render(self) -> str:
        return self.type.render()


@dataclass(frozen=True)
class ArrayAttr(IRAttr):
    """Ordered list of attributes."""
    elements: Tuple[IRAttr, ...]
    element_type: Optional[IRType] = None

    def __init__(self, elements: Iterable[IRAttr], element_type: Optional[IRType] = None):
        object.__setattr__(self, "elements", tuple(elements))
        object.__setattr__(self, "element_type", element_type)

    def render(self) -> str:
        return f"[{', '.join(e.render() for e in self.elements)}]"


DensePayload = Union[float, Tuple["DensePayload", ...]]


def _freeze_payload(payload) -> DensePayload:
    if isinstance(payload, np.ndarray):
        payload = payload.tolist()
    if isinstance(payload, (list, tuple)):
        return tuple(_freeze_payload(p) for p in payload)
    return _finite(payload)


def render_payload(payload: DensePayload) -> str:
    """Render a scalar or nested aggregate payload of a dense literal."""
    if isinstance(payload, tuple):
        return f"[{', '.join(render_payload(p) for p in payload)}]"
    return format_float(payload)


def payload_shape(payload: DensePayload) -> Optional[Tuple[int, ...]]:
    """
    Shape implied by a nested payload, or None if it is ragged.

    A scalar payload has shape ``()``.
    """
    if not isinstance(payload, tuple):
        return ()
    if not payload:
        return (0,)
    inner = [payload_shape(p) for p in payload]
    if any(s is None for s in inner) or len(set(inner)) != 1:
        return None
    return (len(payload),) + inner[0]


@dataclass(frozen=True)
class DenseAttr(IRAttr):
    """
    Dense floating-point literal: ``dense<PAYLOAD> : TYPE``.

    The declared type and the payload structure are not cross-checked here;
    ``IRValidator`` reports mismatches when asked to.
    """
    type: IRType
    payload: DensePayload

    def __init__(self, type: IRType, payload):
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "payload", _freeze_payload(payload))

    @classmethod
    def from_array(cls, array, element_type: IRType = F64) -> "DenseAttr":
        """Build a dense literal from anything ``numpy.asarray`` accepts."""
        data = np.asarray(array, dtype=np.float64)
        tensor_type = RankedTensorType(data.shape, element_type)
        return cls(tensor_type, data.tolist())

    def to_array(self) -> np.ndarray:
        return np.asarray(self.payload, dtype=np.float64)

    def render(self) -> str:
        return f"dense<{render_payload(self.payload)}> : {self.type.render()}"


@dataclass(frozen=True)
class SymbolRefAttr(IRAttr):
    """Reference to a symbol, e.g. ``@main``."""
    name: str

    def render(self) -> str:
        return f"@{self.name}"


class Visibility(Enum):
    """Symbol visibility levels."""
    PUBLIC = "public"
    PRIVATE = "private"
    NESTED = "nested"


@dataclass(frozen=True)
class VisibilityAttr(IRAttr):
    visibility: Visibility

    def render(self) -> str:
        return _quote(self.visibility.value)


@dataclass(frozen=True)
class UnitAttr(IRAttr):
    """Presence-only marker."""

    def render(self) -> str:
        return "unit"


__all__ = [
    "IRAttr", "StringAttr", "BoolAttr", "IntegerAttr", "FloatAttr",
    "TypeAttr", "ArrayAttr", "DenseAttr", "SymbolRefAttr", "Visibility",
    "VisibilityAttr", "UnitAttr",
    "DensePayload", "format_float", "render_payload", "payload_shape",
]
