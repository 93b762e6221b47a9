"""Declaration tree node definitions.

The minimal tree the macro works on: attributes with labeled arguments,
type declarations with members, and enum cases with optional raw values.
Everything else in the source is kept as opaque declarations.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeAlias

from localizing.enums import DeclarationKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "de_escape",
    # Attributes
    "LabeledArgument",
    "Attribute",
    # Declarations
    "EnumCaseElement",
    "EnumCaseDecl",
    "TypeDecl",
    "OtherDecl",
    "SourceFile",
    # Type aliases
    "Declaration",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Attributes:
        start: Starting character offset (inclusive)
        end: Ending character offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


def de_escape(name: str) -> str:
    """Strip identifier escaping (surrounding backticks) from a name.

    Example:
        >>> de_escape("`class`")
        'class'
        >>> de_escape("key1")
        'key1'
    """
    if len(name) > 2 and name.startswith("`") and name.endswith("`"):
        return name[1:-1]
    return name


# ============================================================================
# ATTRIBUTES
# ============================================================================


@dataclass(frozen=True, slots=True)
class LabeledArgument:
    """One argument of an attribute: ``label: expression`` or ``expression``.

    Attributes:
        label: Argument label, None for unlabeled arguments
        expression: Expression source text, whitespace-trimmed
    """

    label: str | None
    expression: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class Attribute:
    """Attribute such as ``@LocalizedStrings(prefix: "about")``.

    Attributes:
        name: Attribute name without the leading ``@``
        arguments: Argument list; None when written without parentheses
        span: Location from ``@`` to the closing parenthesis
    """

    name: str
    arguments: tuple[LabeledArgument, ...] | None = None
    span: Span | None = None

    def argument(self, label: str) -> LabeledArgument | None:
        """Return the first argument with the given label."""
        for arg in self.arguments or ():
            if arg.label == label:
                return arg
        return None


# ============================================================================
# DECLARATIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class EnumCaseElement:
    """One element of a case declaration.

    Attributes:
        name: Name as written (may be backtick-escaped, e.g. "`class`")
        raw_value: Raw value expression text (e.g. '"Hello"'), None if absent
    """

    name: str
    raw_value: str | None = None
    span: Span | None = None

    @property
    def bare_name(self) -> str:
        """Name with identifier escaping removed."""
        return de_escape(self.name)


@dataclass(frozen=True, slots=True)
class EnumCaseDecl:
    """``case a = "x", b`` - one or more elements."""

    elements: tuple[EnumCaseElement, ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class OtherDecl:
    """Declaration the reader does not model (let, var, func, import, ...)."""

    text: str
    attributes: tuple[Attribute, ...] = ()
    modifiers: tuple[str, ...] = ()
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class TypeDecl:
    """enum, struct, class, actor, protocol or extension declaration.

    Attributes:
        kind: Introducing keyword
        name: Declared (or extended) type name
        attributes: Attributes written before the declaration
        modifiers: Modifiers such as private, public, indirect
        inheritance: Inheritance clause entries (e.g. ("String",))
        members: Parsed body members in source order
        span: Whole declaration including attributes
        body_span: From ``{`` to ``}`` inclusive
    """

    kind: DeclarationKind
    name: str
    attributes: tuple[Attribute, ...] = ()
    modifiers: tuple[str, ...] = ()
    inheritance: tuple[str, ...] = ()
    members: tuple["Declaration", ...] = field(default_factory=tuple)
    span: Span | None = None
    body_span: Span | None = None

    @property
    def is_enum(self) -> bool:
        """True for enum declarations."""
        return self.kind is DeclarationKind.ENUM

    def attribute(self, name: str) -> Attribute | None:
        """Return the first attached attribute with the given name."""
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def nested_types(self) -> Iterator["TypeDecl"]:
        """Iterate over nested type declarations."""
        for member in self.members:
            if isinstance(member, TypeDecl):
                yield member

    def nested_enum(self, name: str) -> "TypeDecl | None":
        """Return the nested enumeration with the given name, if any."""
        for member in self.nested_types():
            if member.is_enum and member.name == name:
                return member
        return None

    def case_elements(self) -> Iterator[EnumCaseElement]:
        """Iterate over all case elements in declaration order."""
        for member in self.members:
            if isinstance(member, EnumCaseDecl):
                yield from member.elements


Declaration: TypeAlias = TypeDecl | EnumCaseDecl | OtherDecl


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Root node containing all top-level declarations."""

    declarations: tuple[Declaration, ...]

    def walk_types(self) -> Iterator[TypeDecl]:
        """Iterate over every type declaration, depth-first, in source order."""
        stack: list[Declaration] = list(reversed(self.declarations))
        while stack:
            decl = stack.pop()
            if isinstance(decl, TypeDecl):
                yield decl
                stack.extend(reversed(decl.members))
