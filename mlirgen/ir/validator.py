"""
Opt-in structural validation for mlirgen modules.

The printer renders any model it is given. ``IRValidator`` is a separate
pass for callers who want to catch mistakes before handing text to external
tooling. It follows the printer's SSA scoping: each block sees its own
arguments and the results of earlier operations in the same block, nothing
else.

Checks:
- operands must be bound in the block's accumulated environment
- result names must not rebind a name already in scope
- body operations are not terminators, the terminator is flagged as one
- successor labels must name a block of the enclosing region
- dense literal payloads must match their ranked tensor type
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import Diagnostic, IRValidationError, error, warning
from .ir_attrs import ArrayAttr, DenseAttr, IRAttr, payload_shape
from .ir_nodes import Block, Module, Operation, Region
from .ir_types import IRType, RankedTensorType

logger = logging.getLogger(__name__)

TypeEnv = Dict[str, IRType]


@dataclass
class ValidationResult:
    """Results of validating a module."""
    module: Module
    errors: List[Diagnostic] = field(default_factory=list)
    warnings: List[Diagnostic] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if validation found any errors."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if validation found any warnings."""
        return len(self.warnings) > 0

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return self.errors + self.warnings


class IRValidator:
    """Walks a module and collects diagnostics without modifying it."""

    def __init__(self):
        self._errors: List[Diagnostic] = []
        self._warnings: List[Diagnostic] = []

    def validate(self, module: Module) -> ValidationResult:
        self._errors = []
        self._warnings = []

        env: TypeEnv = {}
        for op in module.operations:
            env = self._check_operation(op, env, labels=None)

        result = ValidationResult(module, list(self._errors), list(self._warnings))
        logger.debug(
            "validated module: %d error(s), %d warning(s)",
            len(result.errors), len(result.warnings),
        )
        return result

    def _report(self, diagnostic: Diagnostic):
        if diagnostic.is_error:
            self._errors.append(diagnostic)
        else:
            self._warnings.append(diagnostic)

    # ------------------------------------------------------------------
    # structure
    # ------------------------------------------------------------------
    def _check_region(self, region: Region):
        labels = region.labels
        for _, block in region.iter_blocks():
            self._check_block(block, labels)

    def _check_block(self, block: Block, labels: Tuple[str, ...]):
        env: TypeEnv = {}
        for name, ir_type in block.args:
            if name in env:
                self._report(error(
                    f"block argument '{name}' is declared twice",
                    block.terminator.location, "E002",
                ))
            env = {**env, name: ir_type}

        for op in block.body:
            if op.is_terminator:
                self._report(warning(
                    f"'{op.name}' is marked as a terminator but is not last in its block",
                    op.location, "W001",
                ))
            env = self._check_operation(op, env, labels)

        terminator = block.terminator
        if not terminator.is_terminator:
            self._report(warning(
                f"'{terminator.name}' ends a block but is not marked as a terminator",
                terminator.location, "W002",
                help_text="build it with as_terminator()",
            ))
        self._check_operation(terminator, env, labels)

    def _check_operation(self, op: Operation, env: TypeEnv,
                         labels: Optional[Tuple[str, ...]]) -> TypeEnv:
        for operand in op.operands:
            if operand not in env:
                self._report(error(
                    f"operand '{operand}' of '{op.name}' is not defined in this block",
                    op.location, "E001",
                ))

        for label in op.successors:
            if labels is None or label not in labels:
                self._report(error(
                    f"successor '^{label}' of '{op.name}' is not a block of the enclosing region",
                    op.location, "E003",
                ))

        for key in sorted(op.attrs):
            self._check_attr(op, key, op.attrs[key])

        for region in op.regions:
            self._check_region(region)

        for name, ir_type in op.results:
            if name in env:
                self._report(error(
                    f"result '{name}' of '{op.name}' redefines a value already in scope",
                    op.location, "E002",
                ))
            env = {**env, name: ir_type}
        return env

    # ------------------------------------------------------------------
    # attributes
    # ------------------------------------------------------------------
    def _check_attr(self, op: Operation, key: str, attr: IRAttr):
        if isinstance(attr, ArrayAttr):
            for element in attr.elements:
                self._check_attr(op, key, element)
        elif isinstance(attr, DenseAttr):
            self._check_dense(op, key, attr)

    def _check_dense(self, op: Operation, key: str, attr: DenseAttr):
        shape = payload_shape(attr.payload)
        if shape is None:
            self._report(error(
                f"dense literal '{key}' on '{op.name}' has a ragged payload",
                op.location, "E004",
            ))
            return
        if not isinstance(attr.type, RankedTensorType):
            return
        declared = attr.type.static_shape
        # scalar payloads are splats
        if declared is None or shape == ():
            return
        if shape != declared:
            self._report(error(
                f"dense literal '{key}' on '{op.name}' has payload shape {list(shape)} "
                f"but its type declares {list(declared)}",
                op.location, "E004",
            ))


def validate_module(module: Module, strict: bool = False) -> ValidationResult:
    """
    Validate ``module``; with ``strict`` raise ``IRValidationError`` on errors.
    """
    result = IRValidator().validate(module)
    if strict and result.has_errors():
        raise IRValidationError(result.diagnostics)
    return result


__all__ = ["IRValidator", "ValidationResult", "validate_module"]
