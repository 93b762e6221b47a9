"""Macro argument extraction and key building.

Turns the labeled arguments of ``@LocalizedStrings(...)`` into a
GenerationRequest and builds localization keys from it.

Recognized labels are ``prefix``, ``separator``, ``table``, ``bundle`` and
``stringsEnum``. Unlabeled arguments and unknown labels are ignored. Values
are kept as expression source text: ``prefix``, ``separator`` and
``stringsEnum`` have their surrounding quotes removed, ``table`` and
``bundle`` are passed through to the generated lookup untouched.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from localizing.constants import (
    DEFAULT_BUNDLE,
    DEFAULT_STRINGS_ENUM,
    DEFAULT_TABLE,
)
from localizing.diagnostics import ErrorTemplate, MacroExpansionError
from localizing.syntax.ast import LabeledArgument, de_escape
from localizing.syntax.parser.primitives import is_simple_string_literal

__all__ = [
    "RECOGNIZED_LABELS",
    "GenerationRequest",
    "build_key",
    "extract_parameters",
    "quote",
    "remove_quotes",
]

RECOGNIZED_LABELS: frozenset[str] = frozenset(
    {"prefix", "separator", "table", "bundle", "stringsEnum"}
)

_QUOTED = re.compile(r'^"(.*)"$', re.DOTALL)


def remove_quotes(text: str) -> str:
    """Strip one pair of surrounding double quotes, if present.

    Escapes inside the literal are left as written.

    Example:
        >>> remove_quotes('"about"')
        'about'
        >>> remove_quotes("about")
        'about'
    """
    match = _QUOTED.match(text)
    return match.group(1) if match else text


def quote(text: str) -> str:
    """Wrap text in double quotes."""
    return f'"{text}"'


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Parameters of one macro invocation.

    Attributes:
        prefix: Key prefix without quotes, None when not supplied
        separator: Separator without quotes, None when not supplied
        table: Table expression text, None when not supplied
        bundle: Bundle expression text, None when not supplied
        strings_enum: Name of the key-enumeration, None when not supplied
    """

    prefix: str | None = None
    separator: str | None = None
    table: str | None = None
    bundle: str | None = None
    strings_enum: str | None = None

    @property
    def warns_implicit_separator(self) -> bool:
        """True when a prefix is given without an explicit separator."""
        return self.prefix is not None and self.separator is None

    def resolved_table(self) -> str:
        """Table expression, ``nil`` when not supplied."""
        return self.table if self.table is not None else DEFAULT_TABLE

    def resolved_bundle(self) -> str:
        """Bundle expression, ``.main`` when not supplied."""
        return self.bundle if self.bundle is not None else DEFAULT_BUNDLE

    def resolved_strings_enum(self) -> str:
        """Key-enumeration name, ``Strings`` when not supplied."""
        return self.strings_enum if self.strings_enum is not None else DEFAULT_STRINGS_ENUM


def extract_parameters(arguments: Iterable[LabeledArgument]) -> GenerationRequest:
    """Build a GenerationRequest from an attribute's argument list.

    When a label repeats, the last occurrence wins.

    Raises:
        MacroExpansionError: INVALID_SEPARATOR if ``separator`` is not a
            simple quoted string literal

    Example:
        >>> request = extract_parameters([LabeledArgument("prefix", '"about"')])
        >>> request.prefix
        'about'
    """
    values: dict[str, str] = {}
    for argument in arguments:
        if argument.label in RECOGNIZED_LABELS:
            values[argument.label] = argument.expression

    separator = values.get("separator")
    if separator is not None and not is_simple_string_literal(separator):
        raise MacroExpansionError(ErrorTemplate.invalid_separator(separator))

    prefix = values.get("prefix")
    strings_enum = values.get("stringsEnum")
    return GenerationRequest(
        prefix=remove_quotes(prefix) if prefix is not None else None,
        separator=remove_quotes(separator) if separator is not None else None,
        table=values.get("table"),
        bundle=values.get("bundle"),
        strings_enum=remove_quotes(strings_enum) if strings_enum is not None else None,
    )


def build_key(request: GenerationRequest, name: str, default_separator: str) -> str:
    """Build the (unquoted) localization key for a case name.

    The separator is only inserted when a prefix is present.

    Example:
        >>> build_key(GenerationRequest(prefix="about", separator="."), "key1", "_")
        'about.key1'
        >>> build_key(GenerationRequest(), "`class`", "_")
        'class'
    """
    bare = de_escape(name)
    if request.prefix is None:
        return bare
    separator = request.separator if request.separator is not None else default_separator
    return f"{request.prefix}{separator}{bare}"
