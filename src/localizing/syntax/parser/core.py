"""Core declaration reader implementation.

This module provides the DeclarationParser class that reads Swift source into
the tree defined in :mod:`localizing.syntax.ast`.

Architecture:
    The reader uses the immutable cursor pattern
    (:class:`~localizing.syntax.cursor.Cursor`). Each rule in
    :mod:`~localizing.syntax.parser.rules` returns a
    :class:`~localizing.syntax.cursor.ParseResult` with the node and the new
    cursor position, or raises DeclarationSyntaxError.

Security:
    Includes configurable input size and nesting depth limits.

See Also:
    - :mod:`localizing.syntax.ast` - Tree node definitions
    - :mod:`localizing.syntax.parser.rules` - Grammar rules
"""

import logging

from localizing.constants import MAX_NESTING_DEPTH, MAX_SOURCE_SIZE
from localizing.diagnostics import DeclarationSyntaxError, ErrorTemplate
from localizing.syntax.ast import Declaration, SourceFile
from localizing.syntax.cursor import Cursor
from localizing.syntax.parser.rules import ParseContext, parse_declaration
from localizing.syntax.parser.whitespace import skip_trivia

__all__ = ["DeclarationParser"]

logger = logging.getLogger(__name__)


class DeclarationParser:
    """Swift declaration reader using the immutable cursor pattern.

    Security:
    - Configurable max_source_size rejects oversized inputs
    - Configurable max_nesting_depth rejects deeply nested type declarations

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MB)
        max_nesting_depth: Maximum allowed type nesting depth (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize reader with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum source size (default: 10 MB).
                            Set to 0 to disable the size limit.
            max_nesting_depth: Maximum type declaration nesting depth (default: 100).
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_NESTING_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed type declaration nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> SourceFile:
        """Read Swift source into a SourceFile.

        Args:
            source: Swift file content

        Returns:
            SourceFile with the top-level declarations in source order

        Raises:
            DeclarationSyntaxError: If the source is too large, too deeply
                nested, or structurally malformed (unbalanced braces,
                unterminated literals or comments)

        Example:
            >>> tree = DeclarationParser().parse("enum L { case a }")
            >>> tree.declarations[0].name
            'L'
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            raise DeclarationSyntaxError(
                ErrorTemplate.source_too_large(len(source), self._max_source_size)
            )

        cursor = Cursor(source, 0)
        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        declarations: list[Declaration] = []

        while True:
            cursor = skip_trivia(cursor)
            if cursor.is_eof:
                break
            if cursor.current == ";":
                cursor = cursor.advance()
                continue
            if cursor.current in ")]}":
                raise DeclarationSyntaxError(
                    ErrorTemplate.unexpected_token(
                        cursor.current, "declaration", cursor.source_span(cursor.pos + 1)
                    )
                )
            result = parse_declaration(cursor, context)
            declarations.append(result.value)
            cursor = result.cursor

        logger.debug("Read %d top-level declaration(s)", len(declarations))
        return SourceFile(declarations=tuple(declarations))
