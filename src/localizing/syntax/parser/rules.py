"""Grammar rules for the declaration reader.

Reads just enough Swift to locate annotated enumerations:

    declaration   := attribute* modifier* (type-decl | case-decl | other-decl)
    attribute     := "@" identifier ( "(" argument ("," argument)* ")" )?
    argument      := (identifier ":")? expression
    type-decl     := ("enum" | "struct" | "class" | "actor" | "protocol" | "extension")
                     type-name generic? (":" inheritance)? "{" declaration* "}"
    case-decl     := "case" case-element ("," case-element)*
    case-element  := identifier ("(" ... ")")? ("=" expression)?
    other-decl    := anything up to a line end or ";" at nesting depth zero

Expressions are captured as text; bodies of functions, properties and
closures are skipped as balanced blocks.
"""

import logging
from dataclasses import dataclass

from localizing.diagnostics import DeclarationSyntaxError, ErrorTemplate
from localizing.enums import DeclarationKind
from localizing.syntax.ast import (
    Attribute,
    Declaration,
    EnumCaseDecl,
    EnumCaseElement,
    LabeledArgument,
    OtherDecl,
    Span,
    TypeDecl,
)
from localizing.syntax.cursor import Cursor, ParseResult
from localizing.syntax.parser.primitives import (
    parse_identifier,
    scan_expression,
    skip_balanced,
)
from localizing.syntax.parser.whitespace import skip_inline_trivia, skip_trivia

__all__ = [
    "ParseContext",
    "parse_argument_list",
    "parse_attribute",
    "parse_case_decl",
    "parse_declaration",
    "parse_members",
]

logger = logging.getLogger(__name__)

_TYPE_KEYWORDS: dict[str, DeclarationKind] = {
    "enum": DeclarationKind.ENUM,
    "struct": DeclarationKind.STRUCT,
    "class": DeclarationKind.CLASS,
    "actor": DeclarationKind.ACTOR,
    "protocol": DeclarationKind.PROTOCOL,
    "extension": DeclarationKind.EXTENSION,
}

_MODIFIERS: frozenset[str] = frozenset({
    "private",
    "fileprivate",
    "internal",
    "public",
    "open",
    "package",
    "static",
    "final",
    "indirect",
    "nonisolated",
    "override",
    "required",
    "convenience",
    "lazy",
    "weak",
    "unowned",
    "mutating",
    "nonmutating",
    "dynamic",
    "optional",
    "distributed",
})

# `class` followed by one of these is a modifier (class func, class var), not a type.
_CLASS_MEMBER_KEYWORDS: frozenset[str] = frozenset({
    "func",
    "var",
    "let",
    "subscript",
    "override",
    "final",
    "private",
    "fileprivate",
    "internal",
    "public",
    "open",
})


@dataclass(slots=True)
class ParseContext:
    """Mutable nesting state for one parse() call.

    Attributes:
        max_nesting_depth: Maximum allowed type declaration nesting
        depth: Current nesting depth
    """

    max_nesting_depth: int
    depth: int = 0


def _expected(cursor: Cursor, expected: str) -> DeclarationSyntaxError:
    found = "EOF" if cursor.is_eof else cursor.current
    return DeclarationSyntaxError(
        ErrorTemplate.unexpected_token(found, expected, cursor.source_span(cursor.pos + 1))
    )


def parse_argument_list(cursor: Cursor) -> ParseResult[tuple[LabeledArgument, ...]]:
    """Parse a parenthesized argument list starting at ``(``.

    Returns:
        ParseResult with the arguments; cursor after ``)``

    Raises:
        DeclarationSyntaxError: On unbalanced or empty arguments
    """
    cursor = cursor.advance()  # (
    cursor = skip_trivia(cursor)
    arguments: list[LabeledArgument] = []

    if not cursor.is_eof and cursor.current == ")":
        return ParseResult((), cursor.advance())

    while True:
        start = cursor
        label: str | None = None
        ident = parse_identifier(cursor)
        if ident is not None:
            after = skip_trivia(ident.cursor)
            if not after.is_eof and after.current == ":" and after.peek(1) != ":":
                label = ident.value
                cursor = skip_trivia(after.advance())

        expr = scan_expression(cursor, stops=",)")
        if not expr.value:
            raise _expected(expr.cursor, "argument expression")
        arguments.append(
            LabeledArgument(
                label=label,
                expression=expr.value,
                span=Span(start.pos, expr.cursor.pos),
            )
        )

        cursor = expr.cursor
        if cursor.is_eof:
            raise _expected(cursor, "')'")
        if cursor.current == ")":
            return ParseResult(tuple(arguments), cursor.advance())
        if cursor.current != ",":
            raise _expected(cursor, "',' or ')'")
        cursor = skip_trivia(cursor.advance())


def parse_attribute(cursor: Cursor) -> ParseResult[Attribute]:
    """Parse an attribute starting at ``@``.

    The argument list is optional; ``@objc`` has none, ``@LocalizedStrings()``
    has an empty one. The two are distinguished (None vs. empty tuple).
    """
    start = cursor
    name = parse_identifier(cursor.advance())
    if name is None:
        raise _expected(cursor.advance(), "attribute name")
    cursor = name.cursor

    # Qualified attribute names such as @MainActor or @Module.Macro
    while cursor.peek() == "." and (nxt := parse_identifier(cursor.advance())) is not None:
        name = ParseResult(f"{name.value}.{nxt.value}", nxt.cursor)
        cursor = nxt.cursor

    arguments: tuple[LabeledArgument, ...] | None = None
    if not cursor.is_eof and cursor.current == "(":
        parsed = parse_argument_list(cursor)
        arguments = parsed.value
        cursor = parsed.cursor

    return ParseResult(Attribute(name.value, arguments, Span(start.pos, cursor.pos)), cursor)


def parse_case_decl(cursor: Cursor, start: Cursor | None = None) -> ParseResult[EnumCaseDecl]:
    """Parse the elements after a ``case`` keyword.

    Raw values are captured as expression text, associated value lists are
    skipped. The declaration span begins at start (the first attribute or
    modifier) when given.
    """
    start = start or cursor
    elements: list[EnumCaseElement] = []

    while True:
        cursor = skip_trivia(cursor)
        name = parse_identifier(cursor)
        if name is None:
            raise _expected(cursor, "case name")
        element_start = cursor.pos
        cursor = skip_inline_trivia(name.cursor)

        if not cursor.is_eof and cursor.current == "(":
            cursor = skip_inline_trivia(skip_balanced(cursor))

        raw_value: str | None = None
        if not cursor.is_eof and cursor.current == "=":
            cursor = skip_inline_trivia(cursor.advance())
            expr = scan_expression(cursor, stops=",;\n\r")
            if not expr.value:
                raise _expected(expr.cursor, "raw value")
            raw_value = expr.value
            cursor = skip_inline_trivia(expr.cursor)

        elements.append(EnumCaseElement(name.value, raw_value, Span(element_start, cursor.pos)))

        if cursor.is_eof or cursor.current != ",":
            return ParseResult(
                EnumCaseDecl(tuple(elements), Span(start.pos, cursor.pos)), cursor
            )
        cursor = cursor.advance()


def _parse_type_name(cursor: Cursor) -> ParseResult[str]:
    """Parse a (possibly qualified) type name: Foo, Foo.Bar, `Type`."""
    name = parse_identifier(cursor)
    if name is None:
        raise _expected(cursor, "type name")
    text = name.value
    cursor = name.cursor
    while cursor.peek() == "." and (nxt := parse_identifier(cursor.advance())) is not None:
        text = f"{text}.{nxt.value}"
        cursor = nxt.cursor
    return ParseResult(text, cursor)


def _skip_generic_clause(cursor: Cursor) -> Cursor:
    """Skip ``<...>`` after a type name, if present."""
    if cursor.is_eof or cursor.current != "<":
        return cursor
    depth = 0
    while not cursor.is_eof:
        if cursor.current == "<":
            depth += 1
        elif cursor.current == ">":
            depth -= 1
            if depth == 0:
                return cursor.advance()
        cursor = cursor.advance()
    raise _expected(cursor, "'>'")


def _parse_type_decl(
    cursor: Cursor,
    kind: DeclarationKind,
    start: Cursor,
    attributes: tuple[Attribute, ...],
    modifiers: tuple[str, ...],
    ctx: ParseContext,
) -> ParseResult[TypeDecl]:
    """Parse a type declaration after its keyword."""
    if ctx.depth >= ctx.max_nesting_depth:
        raise DeclarationSyntaxError(
            ErrorTemplate.nesting_depth_exceeded(
                ctx.max_nesting_depth, start.source_span(cursor.pos)
            )
        )

    name = _parse_type_name(skip_trivia(cursor))
    cursor = skip_trivia(_skip_generic_clause(name.cursor))

    inheritance: tuple[str, ...] = ()
    if not cursor.is_eof and cursor.current == ":":
        clause = scan_expression(cursor.advance(), stops="{")
        text = clause.value.split(" where ", 1)[0]
        inheritance = tuple(part.strip() for part in text.split(",") if part.strip())
        cursor = clause.cursor
    elif cursor.starts_with("where"):
        cursor = scan_expression(cursor, stops="{").cursor

    if cursor.is_eof or cursor.current != "{":
        raise _expected(cursor, "'{'")
    body_start = cursor.pos

    ctx.depth += 1
    members = parse_members(cursor.advance(), ctx)
    ctx.depth -= 1

    cursor = members.cursor
    if cursor.is_eof:
        raise _expected(cursor, "'}'")
    cursor = cursor.advance()  # }

    decl = TypeDecl(
        kind=kind,
        name=name.value,
        attributes=attributes,
        modifiers=modifiers,
        inheritance=inheritance,
        members=members.value,
        span=Span(start.pos, cursor.pos),
        body_span=Span(body_start, cursor.pos),
    )
    logger.debug("Read %s %s with %d member(s)", kind, name.value, len(decl.members))
    return ParseResult(decl, cursor)


def _parse_other_decl(
    cursor: Cursor,
    start: Cursor,
    attributes: tuple[Attribute, ...],
    modifiers: tuple[str, ...],
) -> ParseResult[OtherDecl]:
    """Capture an unmodelled declaration up to its end of line or ``;``."""
    expr = scan_expression(cursor, stops=";\n\r")
    cursor = expr.cursor
    if cursor.pos == start.pos:
        raise _expected(cursor, "declaration")
    return ParseResult(
        OtherDecl(
            text=start.slice_to(cursor.pos).strip(),
            attributes=attributes,
            modifiers=modifiers,
            span=Span(start.pos, cursor.pos),
        ),
        cursor,
    )


def parse_declaration(cursor: Cursor, ctx: ParseContext) -> ParseResult[Declaration]:
    """Parse one declaration with its attributes and modifiers.

    Raises:
        DeclarationSyntaxError: On malformed input
    """
    start = cursor
    attributes: list[Attribute] = []
    while not cursor.is_eof and cursor.current == "@":
        attr = parse_attribute(cursor)
        attributes.append(attr.value)
        cursor = skip_trivia(attr.cursor)

    modifiers: list[str] = []
    while True:
        ident = parse_identifier(cursor)
        if ident is None:
            break
        word = ident.value
        if word == "class":
            following = parse_identifier(skip_trivia(ident.cursor))
            if following is None or following.value not in _CLASS_MEMBER_KEYWORDS:
                break
        elif word not in _MODIFIERS:
            break
        modifiers.append(word)
        cursor = ident.cursor
        if cursor.peek() == "(":  # private(set)
            cursor = skip_balanced(cursor)
        cursor = skip_trivia(cursor)

    keyword = parse_identifier(cursor)
    if keyword is not None and keyword.value in _TYPE_KEYWORDS:
        return _parse_type_decl(
            keyword.cursor,
            _TYPE_KEYWORDS[keyword.value],
            start,
            tuple(attributes),
            tuple(modifiers),
            ctx,
        )
    if keyword is not None and keyword.value == "case":
        return parse_case_decl(keyword.cursor, start)

    return _parse_other_decl(cursor, start, tuple(attributes), tuple(modifiers))


def parse_members(cursor: Cursor, ctx: ParseContext) -> ParseResult[tuple[Declaration, ...]]:
    """Parse declarations until the closing ``}`` of a body.

    Returns:
        ParseResult with the members; cursor ON the closing ``}``

    Raises:
        DeclarationSyntaxError: If EOF is reached before ``}``
    """
    members: list[Declaration] = []
    while True:
        cursor = skip_trivia(cursor)
        if cursor.is_eof:
            raise _expected(cursor, "'}'")
        if cursor.current == "}":
            return ParseResult(tuple(members), cursor)
        if cursor.current == ";":
            cursor = cursor.advance()
            continue
        decl = parse_declaration(cursor, ctx)
        members.append(decl.value)
        cursor = decl.cursor
