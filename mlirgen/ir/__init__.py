"""
mlirgen Intermediate Representation Package

In-memory model of an MLIR-style program in generic form: a closed catalog
of value types and attributes, and the operation/block/region/module
structures that nest them. Values are immutable once built.

Key Features:
- Structural value types (integers, floats, index, memref, tensor, struct,
  function and opaque named types)
- Attributes including dense float literals built from numpy arrays
- Pure operation builder threading a caller-supplied id generator
- Opt-in validation reporting diagnostics with source locations
"""

from .ir_types import *
from .ir_attrs import *
from .ir_nodes import *
from .builder import OperationBuilder, BuildSession, IdGenerator, numbered_ids, operation
from .errors import Diagnostic, IRAttributeError, IRError, IRTypeError, IRValidationError
from .validator import IRValidator, ValidationResult, validate_module

__all__ = [
    # Types
    "Dim", "StaticDim", "DynamicDim", "as_dim",
    "IRType", "IntegerType", "FloatType", "IndexType", "MemRefType",
    "StructType", "NamedType", "FunctionType", "RankedTensorType",
    "UnrankedTensorType",
    "I1", "I8", "I16", "I32", "I64", "F32", "F64", "INDEX",

    # Attributes
    "IRAttr", "StringAttr", "BoolAttr", "IntegerAttr", "FloatAttr",
    "TypeAttr", "ArrayAttr", "DenseAttr", "SymbolRefAttr", "Visibility",
    "VisibilityAttr", "UnitAttr", "format_float",

    # Structure
    "Operation", "Block", "Region", "Module", "ENTRY_BLOCK_LABEL",

    # Builder
    "OperationBuilder", "BuildSession", "IdGenerator", "numbered_ids", "operation",

    # Validation and errors
    "IRValidator", "ValidationResult", "validate_module",
    "Diagnostic", "IRAttributeError", "IRError", "IRTypeError", "IRValidationError",
]
