"""Hypothesis strategies for Localizing property-based testing.

Usage:
    from tests.strategies import case_names, implicit_format_texts
    from tests.strategies.swift import render_annotated_enum
"""

from .swift import (
    MAPPED_SPECIFIERS,
    SAFE_TEXT_CHARS,
    SWIFT_RESERVED_WORDS,
    case_names,
    explicit_format_texts,
    implicit_format_texts,
    key_enum_cases,
    plain_texts,
    render_annotated_enum,
    swift_identifiers,
)

__all__ = [
    "MAPPED_SPECIFIERS",
    "SAFE_TEXT_CHARS",
    "SWIFT_RESERVED_WORDS",
    "case_names",
    "explicit_format_texts",
    "implicit_format_texts",
    "key_enum_cases",
    "plain_texts",
    "render_annotated_enum",
    "swift_identifiers",
]
