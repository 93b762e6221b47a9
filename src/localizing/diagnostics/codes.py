"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Diagnostic codes with unique identifiers.

    Organized by category:
        1000-1999: Expansion errors (macro target and argument problems)
        2000-2999: Format specifier errors (default value validation)
        3000-3999: Syntax errors (declaration reader failures)
        4000-4999: Warnings (advisory, never block generation)
    """

    # Expansion errors (1000-1999)
    APPLIES_ONLY_TO_ENUMERATIONS = 1001
    NO_STRINGS_ENUM_FOUND = 1002
    PARSER_ERROR = 1003
    INVALID_SEPARATOR = 1004

    # Format specifier errors (2000-2999)
    MISSING_INDEX_CONSISTENCY = 2001
    INDEX_OUT_OF_RANGE = 2002
    UNKNOWN_SPECIFIER = 2003

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_TOKEN = 3002
    UNTERMINATED_LITERAL = 3003
    NESTING_DEPTH_EXCEEDED = 3004
    SOURCE_TOO_LARGE = 3005

    # Warnings (4000-4999)
    SEPARATOR_DEFAULT_CHANGING = 4001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for diagnostic reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attached to the macro invocation (or to the offending source position for
    syntax errors). Carries enough context for both humans and build tools.

    Attributes:
        code: Unique diagnostic code
        message: Literal message text reported to the build pipeline
        span: Source location (None when no source text is involved)
        hint: Suggestion for fixing the problem
        declaration: Name of the annotated declaration being expanded
        case_name: Key-enumeration case whose default value failed
        specifier: Offending format specifier text
        severity: Diagnostic severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    declaration: str | None = None
    case_name: str | None = None
    specifier: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return the literal diagnostic message."""
        return self.message

    @property
    def is_warning(self) -> bool:
        """True for advisory diagnostics that do not block generation."""
        return self.severity == "warning"

    def with_context(
        self,
        *,
        span: SourceSpan | None = None,
        declaration: str | None = None,
        case_name: str | None = None,
    ) -> "Diagnostic":
        """Return a copy enriched with location context.

        Fields already set on this diagnostic are kept; only missing context
        is filled in.
        """
        return Diagnostic(
            code=self.code,
            message=self.message,
            span=self.span or span,
            hint=self.hint,
            declaration=self.declaration or declaration,
            case_name=self.case_name or case_name,
            specifier=self.specifier,
            severity=self.severity,
        )

    def format_error(self) -> str:
        """Format diagnostic like a compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[NO_STRINGS_ENUM_FOUND]: @LocalizedStrings requires your enum contain ...
              --> line 1, column 1
              = declaration: L
              = help: Add a nested `enum Strings: String` or pass stringsEnum:

        Returns:
            Formatted diagnostic
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
