"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern for zero-`None` parsing.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - No `str | None` anywhere - type safety by design
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (O(n) only for errors)

Line Ending Support:
    - LF (Unix, \\n) and CRLF (Windows, \\r\\n): Supported (\\n is the line delimiter)
    - CR-only (Classic Mac, \\r): NOT supported for line numbering
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from localizing.diagnostics import ErrorTemplate, SourceSpan

__all__ = ["Cursor", "LineOffsetCache", "ParseError", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("enum", 0)
        >>> cursor.current
        'e'
        >>> cursor.advance().current
        'n'
        >>> cursor.current  # Original unchanged (immutability)
        'e'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns None ONLY when peeking beyond EOF. Use for lookahead:
        `if cursor.peek(1) == '/':`
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing cursor.

        May return fewer characters near EOF.
        """
        return self.source[self.pos : self.pos + n]

    def starts_with(self, text: str) -> bool:
        """Check whether the source continues with text at the current position."""
        return self.source.startswith(text, self.pos)

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise."""
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def skip_spaces(self) -> "Cursor":
        """Skip spaces and tabs on the current line."""
        c = self
        while not c.is_eof and c.current in (" ", "\t"):
            c = c.advance()
        return c

    def skip_whitespace(self) -> "Cursor":
        """Skip whitespace characters (space, tab, newline, carriage return)."""
        c = self
        while not c.is_eof and c.current in (" ", "\t", "\n", "\r"):
            c = c.advance()
        return c

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character (not consumed)."""
        cursor = self
        while not cursor.is_eof and cursor.current not in ("\n", "\r"):
            cursor = cursor.advance()
        return cursor

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting.

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)

    def source_span(self, end_pos: int | None = None) -> SourceSpan:
        """Build a SourceSpan from the current position to end_pos."""
        line, col = self.compute_line_col()
        end = self.pos if end_pos is None else max(end_pos, self.pos)
        return SourceSpan(start=self.pos, end=end, line=line, column=col)


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in one pass, then answers lookups with a
    binary search. Use when converting many offsets of the same source, such
    as every attribute span found by the macro driver.

    Example:
        >>> cache = LineOffsetCache("abc\\ndef\\nghi")
        >>> cache.get_line_col(0)
        (1, 1)
        >>> cache.get_line_col(4)  # 'd' in "def"
        (2, 1)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        """Build line offset cache from source."""
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get (line, column) for position, both 1-indexed."""
        pos = max(0, min(pos, self._source_len))

        # Line number = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)

    def span(self, start: int, end: int) -> SourceSpan:
        """Build a SourceSpan for the [start, end) range."""
        line, col = self.get_line_col(start)
        return SourceSpan(start=start, end=end, line=line, column=col)


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Parser result containing parsed value and new cursor position.

    Every reader rule has the signature
    ``def parse_foo(cursor: Cursor) -> ParseResult[Foo] | None``
    or raises DeclarationSyntaxError for unrecoverable input.
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseError:
    """Parse error with location and context.

    Example:
        >>> error = ParseError("Expected '}'", Cursor("enum L {", 8))
        >>> error.format_error()
        "1:9: Expected '}'"
    """

    message: str
    cursor: Cursor
    expected: tuple[str, ...] = field(default_factory=tuple)

    def format_error(self) -> str:
        """Format error with line:column."""
        line, col = self.cursor.compute_line_col()
        error_msg = f"{line}:{col}: {self.message}"

        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with source context and a caret under the error column.

        Args:
            context_lines: Number of lines to show before/after error

        Returns:
            Multi-line formatted error with context
        """
        line, col = self.cursor.compute_line_col()
        lines = self.cursor.source.split("\n")

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])
            if i == line:
                pointer = " " * (len(line_num_str) + col - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)
