"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        color: Enable ANSI color codes (for terminal output)
        filename: Shown in location lines when set

    Example:
        >>> from localizing.diagnostics import ErrorTemplate
        >>> formatter = DiagnosticFormatter()
        >>> print(formatter.format(ErrorTemplate.parser_error()))
        error[PARSER_ERROR]: Parser error
          = help: Write the macro with parentheses, e.g. @LocalizedStrings()

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.parser_error()))
        PARSER_ERROR: Parser error
    """

    output_format: OutputFormat = OutputFormat.RUST
    color: bool = False
    filename: str | None = None

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines (one per line for JSON)."""
        separator = "\n" if self.output_format is OutputFormat.JSON else "\n\n"
        return separator.join(self.format(d) for d in diagnostics)

    def _location(self, diagnostic: Diagnostic) -> str | None:
        if diagnostic.span is None:
            return self.filename
        where = f"line {diagnostic.span.line}, column {diagnostic.span.column}"
        if self.filename:
            return f"{self.filename}:{diagnostic.span.line}:{diagnostic.span.column}"
        return where

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in compiler style.

        Example output:
            warning[SEPARATOR_DEFAULT_CHANGING]: The default separator is changing ...
              --> line 1, column 1
              = help: Add separator: "_" (or ".") to the macro arguments
        """
        severity = diagnostic.severity
        if self.color:
            color = "1;31" if severity == "error" else "1;33"  # Bold red / bold yellow
            severity_str = f"\033[{color}m{severity}\033[0m"
        else:
            severity_str = severity

        parts = [f"{severity_str}[{diagnostic.code.name}]: {diagnostic.message}"]

        location = self._location(diagnostic)
        if location:
            parts.append(f"  --> {location}")

        if diagnostic.declaration:
            parts.append(f"  = declaration: {diagnostic.declaration}")

        if diagnostic.case_name:
            parts.append(f"  = case: {diagnostic.case_name}")

        if diagnostic.specifier:
            parts.append(f"  = specifier: {diagnostic.specifier}")

        if diagnostic.hint:
            parts.append(f"  = help: {diagnostic.hint}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            PARSER_ERROR: Parser error
        """
        message = diagnostic.message.replace("\n", " ")
        location = self._location(diagnostic)
        if location and diagnostic.span is not None:
            return f"{location}: {diagnostic.code.name}: {message}"
        return f"{diagnostic.code.name}: {message}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "PARSER_ERROR", "code_value": 1003, "message": "Parser error", ...}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": diagnostic.message,
            "severity": diagnostic.severity,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if self.filename:
            data["file"] = self.filename

        if diagnostic.declaration:
            data["declaration"] = diagnostic.declaration

        if diagnostic.case_name:
            data["case"] = diagnostic.case_name

        if diagnostic.specifier:
            data["specifier"] = diagnostic.specifier

        if diagnostic.hint:
            data["hint"] = diagnostic.hint

        return json.dumps(data, ensure_ascii=False)
