"""Swift declaration reading.

Provides the declaration tree, the reader and source rewriting helpers.
Only the subset of Swift needed to locate annotated enumerations is read;
everything else is kept as opaque text.

Python 3.13+.
"""

from .ast import (
    Attribute,
    Declaration,
    EnumCaseDecl,
    EnumCaseElement,
    LabeledArgument,
    OtherDecl,
    SourceFile,
    Span,
    TypeDecl,
    de_escape,
)
from .cursor import Cursor, LineOffsetCache, ParseError, ParseResult
from .parser import DeclarationParser
from .rewriter import TextEdit, apply_edits

__all__ = [
    "Attribute",
    "Cursor",
    "Declaration",
    "DeclarationParser",
    "EnumCaseDecl",
    "EnumCaseElement",
    "LabeledArgument",
    "LineOffsetCache",
    "OtherDecl",
    "ParseError",
    "ParseResult",
    "SourceFile",
    "Span",
    "TextEdit",
    "TypeDecl",
    "apply_edits",
    "de_escape",
    "parse",
]


def parse(source: str) -> SourceFile:
    """Read Swift source with default limits.

    Raises:
        DeclarationSyntaxError: On malformed or oversized input
    """
    return DeclarationParser().parse(source)
