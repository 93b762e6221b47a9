"""Whitespace and comment handling for the declaration reader.

Trivia is everything between tokens that carries no meaning for the tree:
spaces, tabs, line endings, ``// line`` comments and ``/* block */``
comments. Block comments nest, as they do in Swift.
"""

from localizing.diagnostics import DeclarationSyntaxError, ErrorTemplate
from localizing.syntax.cursor import Cursor

__all__ = ["skip_block_comment", "skip_trivia", "skip_inline_trivia"]


def skip_block_comment(cursor: Cursor) -> Cursor:
    """Skip a (possibly nested) block comment starting at ``/*``.

    Args:
        cursor: Positioned on the opening ``/*``

    Returns:
        Cursor after the matching ``*/``

    Raises:
        DeclarationSyntaxError: If the comment is never closed
    """
    start = cursor
    depth = 0
    while not cursor.is_eof:
        if cursor.starts_with("/*"):
            depth += 1
            cursor = cursor.advance(2)
        elif cursor.starts_with("*/"):
            depth -= 1
            cursor = cursor.advance(2)
            if depth == 0:
                return cursor
        else:
            cursor = cursor.advance()

    raise DeclarationSyntaxError(
        ErrorTemplate.unterminated_literal("block comment", start.source_span(start.pos + 2))
    )


def skip_trivia(cursor: Cursor) -> Cursor:
    """Skip whitespace, line endings and comments.

    Example:
        >>> skip_trivia(Cursor("  // note\\n  enum", 0)).current
        'e'
    """
    while True:
        cursor = cursor.skip_whitespace()
        if cursor.starts_with("//"):
            cursor = cursor.skip_to_line_end()
        elif cursor.starts_with("/*"):
            cursor = skip_block_comment(cursor)
        else:
            return cursor


def skip_inline_trivia(cursor: Cursor) -> Cursor:
    """Skip spaces, tabs and block comments without crossing a line ending.

    A ``//`` comment is skipped up to (not including) the line ending.
    """
    while True:
        cursor = cursor.skip_spaces()
        if cursor.starts_with("//"):
            return cursor.skip_to_line_end()
        if cursor.starts_with("/*"):
            cursor = skip_block_comment(cursor)
        else:
            return cursor
