"""Source rewriting for expanded declarations.

The macro driver never re-serializes the tree: expansion output is the
original source with two kinds of edits applied per annotated declaration.

- The macro attribute is removed together with the blank space before it.
- Generated members are appended to the declaration body, separated by
  blank lines and indented like the existing members.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from localizing.syntax.ast import Span, TypeDecl

__all__ = [
    "TextEdit",
    "apply_edits",
    "attribute_removal",
    "line_indent",
    "member_indent",
    "member_insertion",
]


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace source[start:end] with replacement."""

    start: int
    end: int
    replacement: str


def apply_edits(source: str, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits to source.

    Raises:
        ValueError: If two edits overlap
    """
    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end))
    parts: list[str] = []
    pos = 0
    for edit in ordered:
        if edit.start < pos:
            msg = f"Overlapping edits at offset {edit.start}"
            raise ValueError(msg)
        parts.append(source[pos : edit.start])
        parts.append(edit.replacement)
        pos = edit.end
    parts.append(source[pos:])
    return "".join(parts)


def line_indent(source: str, pos: int) -> str:
    """Return the leading whitespace of the line containing pos."""
    line_start = source.rfind("\n", 0, pos) + 1
    end = line_start
    while end < len(source) and source[end] in (" ", "\t"):
        end += 1
    return source[line_start:end]


def attribute_removal(source: str, span: Span) -> TextEdit:
    """Build the edit that removes an attribute from its declaration.

    Whitespace between the previous content and the attribute is dropped,
    as is the rest of the attribute's line when nothing else follows it.

    Example:
        >>> src = "let a = 1\\n\\n@M()\\nenum L {}"
        >>> apply_edits(src, [attribute_removal(src, Span(11, 15))])
        'let a = 1\\nenum L {}'
    """
    before = span.start
    while before > 0 and source[before - 1] in (" ", "\t", "\n", "\r"):
        before -= 1

    after = span.end
    while after < len(source) and source[after] in (" ", "\t"):
        after += 1
    if source.startswith("\r\n", after):
        after += 2
    elif source.startswith("\n", after):
        after += 1

    if before == 0:
        replacement = ""
    elif after > span.end and source[after - 1] == "\n":
        replacement = "\n"
    else:
        replacement = "\n" + line_indent(source, span.start)
    return TextEdit(before, after, replacement)


def member_indent(source: str, decl: TypeDecl, indent: str) -> str:
    """Indentation used for members of decl.

    Taken from the first member that starts its own line, otherwise the
    declaration's own indentation plus one indent unit.
    """
    for member in decl.members:
        if member.span is None:
            continue
        line_start = source.rfind("\n", 0, member.span.start) + 1
        prefix = source[line_start : member.span.start]
        if not prefix.strip():
            return prefix
    anchor = decl.span.start if decl.span is not None else 0
    return line_indent(source, anchor) + indent


def _indent_block(text: str, indent: str) -> str:
    return "\n".join(indent + line if line else line for line in text.split("\n"))


def member_insertion(
    source: str, decl: TypeDecl, members: Sequence[str], indent: str
) -> TextEdit:
    """Build the edit that appends rendered members before the closing brace.

    Args:
        source: Original source text
        decl: Declaration receiving the members (body_span must be set)
        members: Rendered declarations, unindented, possibly multi-line
        indent: Indent unit used when the body has no member to copy from

    Raises:
        ValueError: If the declaration has no body span
    """
    if decl.body_span is None:
        msg = f"Declaration {decl.name!r} has no body span"
        raise ValueError(msg)

    close = decl.body_span.end - 1
    head_end = close
    while head_end > decl.body_span.start + 1 and source[head_end - 1] in (" ", "\t", "\n", "\r"):
        head_end -= 1

    inner = member_indent(source, decl, indent)
    closing_line_start = source.rfind("\n", 0, close) + 1
    closing_prefix = source[closing_line_start:close]
    if closing_prefix.strip():
        closing_prefix = line_indent(source, decl.span.start if decl.span else close)

    blocks = "\n\n".join(_indent_block(member, inner) for member in members)
    separator = "\n" if head_end == decl.body_span.start + 1 else "\n\n"
    return TextEdit(head_end, close + 1, f"{separator}{blocks}\n{closing_prefix}}}")
