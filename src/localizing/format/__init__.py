"""Format specifier analysis for default values.

Python 3.13+.
"""

from .specifiers import (
    CONVERSIONS,
    FormatSpecifier,
    argument_types,
    has_format_specifiers,
    parse_format_specifiers,
    resolve_arg_type,
    resolve_arguments,
    scan_format_specifiers,
)

__all__ = [
    "CONVERSIONS",
    "FormatSpecifier",
    "argument_types",
    "has_format_specifiers",
    "parse_format_specifiers",
    "resolve_arg_type",
    "resolve_arguments",
    "scan_format_specifiers",
]
