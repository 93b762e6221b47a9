"""Localizing exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
``str(error)`` is the literal diagnostic message so it can be reported
verbatim to the invoking build pipeline; use ``error.diagnostic.format_error()``
for the compiler-style rendering.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = [
    "DeclarationSyntaxError",
    "FormatSpecifierError",
    "LocalizingError",
    "MacroExpansionError",
]


class LocalizingError(Exception):
    """Base exception for all Localizing errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizingError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def code(self) -> DiagnosticCode | None:
        """Diagnostic code, when the error carries a diagnostic."""
        return self.diagnostic.code if self.diagnostic is not None else None


class MacroExpansionError(LocalizingError):
    """Expansion of one annotated declaration failed.

    Fatal to the current declaration only: no partial declarations are
    emitted for it, other declarations in the same source still expand.
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MacroExpansionError.

        Args:
            message: Error message string OR Diagnostic object
        """
        super().__init__(message)

    def with_context(
        self,
        *,
        span: SourceSpan | None = None,
        declaration: str | None = None,
        case_name: str | None = None,
    ) -> "MacroExpansionError":
        """Return an error of the same type with location context filled in."""
        if self.diagnostic is None:
            return self
        enriched = self.diagnostic.with_context(
            span=span, declaration=declaration, case_name=case_name
        )
        error = type(self)(enriched)
        error.__cause__ = self.__cause__
        return error


class FormatSpecifierError(MacroExpansionError):
    """A default value carries unusable printf-style format specifiers.

    Raised for mixed explicit/implicit indices, index gaps and conversions
    that cannot be mapped to a parameter type.
    """


class DeclarationSyntaxError(LocalizingError):
    """Source text could not be read as a declaration tree.

    The diagnostic span points at the offending position.
    """
