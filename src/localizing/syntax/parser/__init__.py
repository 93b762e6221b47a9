"""Swift declaration reader.

Module Organization:
- core.py: DeclarationParser class and parse() entry point
- primitives.py: Identifiers, string literals, balanced expression text
- whitespace.py: Whitespace and comment skipping
- rules.py: Grammar rules (attributes, type declarations, cases)

Public API:
    DeclarationParser: Main reader class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from localizing.syntax.parser.core import DeclarationParser
from localizing.syntax.parser.rules import ParseContext

__all__ = ["DeclarationParser", "ParseContext"]
