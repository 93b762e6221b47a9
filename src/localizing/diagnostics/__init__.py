"""Diagnostic system for Localizing errors and warnings.

Provides structured diagnostics with codes, spans and hints, rendered
compiler-style, single-line, or as JSON for tooling.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    DeclarationSyntaxError,
    FormatSpecifierError,
    LocalizingError,
    MacroExpansionError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DeclarationSyntaxError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FormatSpecifierError",
    "LocalizingError",
    "MacroExpansionError",
    "OutputFormat",
    "SourceSpan",
]
