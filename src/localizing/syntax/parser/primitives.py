"""Primitive parsing utilities for the declaration reader.

Low-level scanners for identifiers, string literals and balanced expression
text. Expressions are never interpreted: the reader only needs their exact
source text and where they end.
"""

import re

from localizing.diagnostics import DeclarationSyntaxError, ErrorTemplate
from localizing.syntax.cursor import Cursor, ParseResult
from localizing.syntax.parser.whitespace import skip_block_comment

__all__ = [
    "decode_string_literal",
    "is_identifier_char",
    "is_identifier_start",
    "is_simple_string_literal",
    "parse_identifier",
    "scan_expression",
    "skip_balanced",
    "skip_string_literal",
]

_OPENERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
_CLOSERS: frozenset[str] = frozenset(_OPENERS.values())

# Single-line, non-raw literal without interpolation: "..." with plain escapes.
_SIMPLE_LITERAL = re.compile(r'"(?:[^"\\\n\r]|\\[^(\n\r])*"')

_ESCAPES: dict[str, str] = {
    "0": "\0",
    "\\": "\\",
    "t": "\t",
    "n": "\n",
    "r": "\r",
    '"': '"',
    "'": "'",
}

_UNICODE_ESCAPE = re.compile(r"u\{([0-9a-fA-F]{1,8})\}")


def is_identifier_start(ch: str) -> bool:
    """Check if character can start an identifier (letter or underscore)."""
    return ch.isalpha() or ch == "_"


def is_identifier_char(ch: str) -> bool:
    """Check if character can continue an identifier."""
    return ch.isalnum() or ch == "_"


def parse_identifier(cursor: Cursor) -> ParseResult[str] | None:
    """Parse an identifier, plain or backtick-escaped.

    The escaped form is returned with its backticks so that generated
    declarations can reuse the name as written.

    Examples:
        key1 -> "key1"
        `class` -> "`class`"

    Returns:
        ParseResult with the identifier text, or None if not an identifier
    """
    if cursor.is_eof:
        return None

    start = cursor
    if cursor.current == "`":
        cursor = cursor.advance()
        if cursor.is_eof or not is_identifier_start(cursor.current):
            return None
        while not cursor.is_eof and is_identifier_char(cursor.current):
            cursor = cursor.advance()
        if cursor.is_eof or cursor.current != "`":
            return None
        cursor = cursor.advance()
        return ParseResult(start.slice_to(cursor.pos), cursor)

    if not is_identifier_start(cursor.current):
        return None
    cursor = cursor.advance()
    while not cursor.is_eof and is_identifier_char(cursor.current):
        cursor = cursor.advance()
    return ParseResult(start.slice_to(cursor.pos), cursor)


def _unterminated(start: Cursor, kind: str = "string literal") -> DeclarationSyntaxError:
    return DeclarationSyntaxError(
        ErrorTemplate.unterminated_literal(kind, start.source_span(start.pos + 1))
    )


def skip_string_literal(cursor: Cursor) -> Cursor:
    """Skip a string literal starting at ``"`` or at the ``#`` of a raw literal.

    Handles escapes, ``\\(...)`` interpolation (including nested literals),
    multi-line ``\"\"\"`` literals and raw ``#"..."#`` literals.

    Returns:
        Cursor after the closing delimiter

    Raises:
        DeclarationSyntaxError: If the literal is never closed
    """
    start = cursor
    hashes = 0
    while not cursor.is_eof and cursor.current == "#":
        hashes += 1
        cursor = cursor.advance()

    if cursor.is_eof or cursor.current != '"':
        raise _unterminated(start)

    multiline = cursor.starts_with('"""')
    delimiter = ('"""' if multiline else '"') + "#" * hashes
    escape = "\\" + "#" * hashes
    cursor = cursor.advance(3 if multiline else 1)

    while not cursor.is_eof:
        if cursor.starts_with(delimiter):
            return cursor.advance(len(delimiter))
        if cursor.starts_with(escape):
            cursor = cursor.advance(len(escape))
            if cursor.is_eof:
                break
            if cursor.current == "(":
                closed = scan_expression(cursor.advance(), stops=")").cursor.expect(")")
                if closed is None:
                    break
                cursor = closed
                continue
            cursor = cursor.advance()
            continue
        if not multiline and cursor.current in ("\n", "\r"):
            break
        cursor = cursor.advance()

    raise _unterminated(start)


def scan_expression(cursor: Cursor, stops: str) -> ParseResult[str]:
    """Scan expression text up to a stop character at nesting depth zero.

    Brackets, string literals and comments are skipped as units, so stop
    characters inside them do not end the expression. An unmatched closing
    bracket also ends the expression (it belongs to the enclosing construct).

    Args:
        cursor: Start of the expression
        stops: Characters that end the expression at depth zero

    Returns:
        ParseResult with the whitespace-trimmed text (trailing comments
        excluded); the cursor is left ON the stop character (or at EOF)

    Raises:
        DeclarationSyntaxError: On unterminated literals or comments
    """
    start = cursor
    end = cursor.pos
    expected: list[str] = []
    while not cursor.is_eof:
        ch = cursor.current
        if not expected and (ch in stops or ch in _CLOSERS):
            break
        if ch == '"' or (ch == "#" and cursor.peek(1) in ('"', "#")):
            cursor = skip_string_literal(cursor)
            end = cursor.pos
            continue
        if cursor.starts_with("//"):
            cursor = cursor.skip_to_line_end()
            continue
        if cursor.starts_with("/*"):
            cursor = skip_block_comment(cursor)
            continue
        if ch in _OPENERS:
            expected.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if ch != expected[-1]:
                raise DeclarationSyntaxError(
                    ErrorTemplate.unexpected_token(
                        ch, f"'{expected[-1]}'", cursor.source_span(cursor.pos + 1)
                    )
                )
            expected.pop()
        cursor = cursor.advance()
        if not ch.isspace():
            end = cursor.pos

    if expected:
        raise DeclarationSyntaxError(ErrorTemplate.unexpected_eof(cursor.pos))

    return ParseResult(start.slice_to(end).strip(), cursor)


def skip_balanced(cursor: Cursor) -> Cursor:
    """Skip one bracketed group starting at ``(``, ``[`` or ``{``.

    Returns:
        Cursor after the matching closing bracket

    Raises:
        DeclarationSyntaxError: If the group is not closed properly
    """
    close = _OPENERS[cursor.current]
    inner = scan_expression(cursor.advance(), stops="").cursor
    if inner.is_eof or inner.current != close:
        found = "EOF" if inner.is_eof else inner.current
        raise DeclarationSyntaxError(
            ErrorTemplate.unexpected_token(found, f"'{close}'", inner.source_span(inner.pos + 1))
        )
    return inner.advance()


def is_simple_string_literal(text: str) -> bool:
    """Check if text is a single-line, non-raw string literal without interpolation.

    Example:
        >>> is_simple_string_literal('"."')
        True
        >>> is_simple_string_literal("sep")
        False
        >>> is_simple_string_literal('"\\\\(sep)"')
        False
    """
    return _SIMPLE_LITERAL.fullmatch(text) is not None


def decode_string_literal(text: str) -> str:
    """Decode the value of a simple, multi-line or raw string literal.

    Surrounding quotes are removed and escapes (``\\n``, ``\\"``,
    ``\\u{1F600}``, ...) are decoded. Interpolations are kept verbatim.
    Text that is not a quoted literal is returned unchanged.

    Example:
        >>> decode_string_literal('"Say \\\\"hi\\\\""')
        'Say "hi"'
    """
    hashes = len(text) - len(text.lstrip("#"))
    if hashes:
        # Raw literals take their body verbatim
        delimiter = "#" * hashes
        inner = text[hashes:-hashes] if text.endswith(delimiter) else text
        if inner.startswith('"""') and inner.endswith('"""') and len(inner) >= 6:
            return inner[3:-3].removeprefix("\n").rstrip(" \t").removesuffix("\n")
        if len(inner) >= 2 and inner.startswith('"') and inner.endswith('"'):
            return inner[1:-1]
        return text

    if text.startswith('"""') and text.endswith('"""') and len(text) >= 6:
        body = text[3:-3]
        # Multi-line literals drop the line breaks after/before the delimiters
        body = body.removeprefix("\n").removeprefix("\r\n")
        last_newline = body.rfind("\n")
        if last_newline >= 0 and not body[last_newline + 1 :].strip():
            indent = body[last_newline + 1 :]
            lines = body[:last_newline].split("\n")
            body = "\n".join(line.removeprefix(indent) for line in lines)
    elif len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        body = text[1:-1]
    else:
        return text

    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 >= len(body):
            out.append(ch)
            i += 1
            continue
        nxt = body[i + 1]
        if nxt == "\n":  # line continuation
            i += 2
            continue
        if nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
            i += 2
            continue
        unicode_match = _UNICODE_ESCAPE.match(body, i + 1)
        if unicode_match is not None:
            scalar = int(unicode_match.group(1), 16)
            # Out-of-range and surrogate values are not Unicode scalars; kept verbatim
            if scalar > 0x10FFFF or 0xD800 <= scalar <= 0xDFFF:
                out.append(body[i : unicode_match.end()])
            else:
                out.append(chr(scalar))
            i = unicode_match.end()
            continue
        out.append(ch)
        i += 1
    return "".join(out)
