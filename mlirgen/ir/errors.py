"""
Error handling for the mlirgen IR model.

Provides diagnostics with source location information for the opt-in
validation pass, and the exceptions raised when a model value is built
outside the supported type catalog.
"""

from typing import Optional, List
from dataclasses import dataclass

from ..source import SourceLocation


@dataclass
class Diagnostic:
    """A validation finding (error, warning) attached to a location."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class IRError(Exception):
    """Base class for all mlirgen IR exceptions."""
    pass


class IRTypeError(IRError):
    """Raised when a type is constructed outside the supported catalog."""
    pass


class IRAttributeError(IRError):
    """Raised when an attribute holds a value the textual form cannot express."""
    pass


class IRValidationError(IRError):
    """
    Exception raised by strict validation when the module has errors.

    Carries every diagnostic the validator produced, warnings included.
    """

    def __init__(self, diagnostics: List[Diagnostic]):
        self.diagnostics = list(diagnostics)
        errors = [d for d in self.diagnostics if d.is_error]
        super().__init__(f"IR validation failed with {len(errors)} error(s)")

    def __str__(self) -> str:
        header = super().__str__()
        return header + "\n" + "".join(str(d) for d in self.diagnostics if d.is_error)


def error(message: str, location: SourceLocation, code: str,
          help_text: Optional[str] = None) -> Diagnostic:
    """Create an error diagnostic."""
    return Diagnostic(message, location, "error", code, help_text)


def warning(message: str, location: SourceLocation, code: str,
            help_text: Optional[str] = None) -> Diagnostic:
    """Create a warning diagnostic."""
    return Diagnostic(message, location, "warning", code, help_text)
