"""Printf-style format specifier parsing for default values.

Scans a default value for specifiers such as ``%@``, ``%ld`` or ``%2$@``,
resolves which call argument each one refers to, validates the indexing, and
infers the parameter type of every argument. The resulting type list becomes
the parameter list of a generated formatting function.

Pipeline:
    scan_format_specifiers()   text -> specifiers in order of appearance
    resolve_arguments()        sort by index, collapse duplicates, check 1..N
    argument_types()           both of the above plus the type table

Indexing rules:
    - The first specifier decides whether indices are explicit (``%1$@``) or
      implicit (``%@``, numbered by appearance). Every other specifier must
      agree.
    - Several specifiers may reference the same explicit index; they collapse
      to one argument. The text-order first of them decides the type.
    - After de-duplication the indices must read 1, 2, ..., N.

``%%`` is an escaped percent sign, never a specifier. A space is not
accepted as a flag so that prose like ``"50% off"`` is not read as ``% o``.

Python 3.13+. Zero external dependencies.
"""

import logging
import re
from dataclasses import dataclass

from localizing.diagnostics import ErrorTemplate, FormatSpecifierError
from localizing.enums import ArgType

__all__ = [
    "CONVERSIONS",
    "FormatSpecifier",
    "argument_types",
    "has_format_specifiers",
    "parse_format_specifiers",
    "resolve_arg_type",
    "resolve_arguments",
    "scan_format_specifiers",
]

logger = logging.getLogger(__name__)

# Conversion characters recognized by the scanner. Recognition is wider than
# the type table: %s, %p, %n, %d (without l) etc. are found and then rejected
# as unknown instead of being silently treated as literal text.
CONVERSIONS: str = "diuoxXfFeEgGaAcspn@"

_SPECIFIER_PATTERN = re.compile(
    r"%(?:"
    r"(?P<escape>%)"
    r"|(?:(?P<index>\d+)\$)?"
    r"(?P<flags>[-+#0']*)"
    r"(?P<width>\d+|\*)?"
    r"(?:\.(?P<precision>\d+|\*))?"
    r"(?P<length>hh|h|ll|l|q|L|z|t|j)?"
    rf"(?P<conversion>[{re.escape(CONVERSIONS)}])"
    r")"
)

# (length modifier, conversion) -> parameter type.
# Combinations missing here are rejected with UNKNOWN_SPECIFIER.
_TYPE_TABLE: dict[tuple[str, str], ArgType] = {
    ("", "c"): ArgType.CHARACTER,
    ("", "i"): ArgType.INT16,
    ("", "x"): ArgType.INT16,
    ("", "o"): ArgType.INT16,
    ("h", "i"): ArgType.INT16,
    ("h", "x"): ArgType.INT16,
    ("h", "o"): ArgType.INT16,
    ("h", "u"): ArgType.UINT16,
    ("l", "i"): ArgType.INT,
    ("l", "x"): ArgType.INT,
    ("l", "o"): ArgType.INT,
    ("l", "d"): ArgType.INT,
    ("ll", "i"): ArgType.INT,
    ("ll", "x"): ArgType.INT,
    ("ll", "o"): ArgType.INT,
    ("ll", "d"): ArgType.INT,
    ("l", "u"): ArgType.UINT,
    ("ll", "u"): ArgType.UINT,
    ("", "f"): ArgType.DOUBLE,
    ("", "e"): ArgType.DOUBLE,
    ("", "g"): ArgType.DOUBLE,
    ("", "a"): ArgType.DOUBLE,
    ("", "@"): ArgType.STRING,
}


@dataclass(frozen=True, slots=True)
class FormatSpecifier:
    """One printf-style specifier found in a default value.

    Attributes:
        text: Specifier exactly as written (e.g. "%2$ld")
        argument_index: 1-based index of the call argument it consumes
        explicit: True when the index was written as ``N$``
        length_modifier: Length modifier ("" when absent)
        conversion: Conversion character
        position: Character offset of the ``%`` in the scanned text
    """

    text: str
    argument_index: int
    explicit: bool
    length_modifier: str
    conversion: str
    position: int = 0

    @property
    def type_key(self) -> str:
        """Length modifier and conversion, e.g. "lu" (used in diagnostics)."""
        return self.length_modifier + self.conversion

    @property
    def arg_type(self) -> ArgType:
        """Parameter type consumed by this specifier.

        Raises:
            FormatSpecifierError: If the combination has no mapped type
        """
        return resolve_arg_type(self.length_modifier, self.conversion, self.text)


def resolve_arg_type(length_modifier: str, conversion: str, text: str | None = None) -> ArgType:
    """Map a length modifier and conversion to a parameter type.

    Args:
        length_modifier: "" or one of h, l, ll (others are never mapped)
        conversion: Conversion character
        text: Specifier as written, reported in the diagnostic

    Returns:
        Parameter type for the combination

    Raises:
        FormatSpecifierError: UNKNOWN_SPECIFIER for unmapped combinations

    Example:
        >>> resolve_arg_type("", "@")
        <ArgType.STRING: 'String'>
        >>> resolve_arg_type("l", "u")
        <ArgType.UINT: 'UInt'>
    """
    arg_type = _TYPE_TABLE.get((length_modifier, conversion))
    if arg_type is None:
        raise FormatSpecifierError(
            ErrorTemplate.unknown_specifier(text or f"%{length_modifier}{conversion}")
        )
    return arg_type


def scan_format_specifiers(text: str) -> tuple[FormatSpecifier, ...]:
    """Find all specifiers in text, in order of appearance.

    Assigns argument indices (explicit ``N$`` or appearance order) and
    enforces that explicit and implicit indexing are not mixed.

    Args:
        text: Default value (without surrounding quotes)

    Returns:
        Specifiers in order of appearance; empty when there are none

    Raises:
        FormatSpecifierError: MISSING_INDEX_CONSISTENCY on mixed indexing,
            UNKNOWN_SPECIFIER for a "*" width or precision

    Example:
        >>> [s.argument_index for s in scan_format_specifiers("%2$@ and %1$@")]
        [2, 1]
        >>> scan_format_specifiers("100%% plain")
        ()
    """
    found: list[FormatSpecifier] = []
    explicit_mode: bool | None = None

    for match in _SPECIFIER_PATTERN.finditer(text):
        if match.group("escape"):
            continue

        # A "*" width or precision consumes its own call argument
        if "*" in (match.group("width"), match.group("precision")):
            raise FormatSpecifierError(ErrorTemplate.unknown_specifier(match.group(0)))

        index_text = match.group("index")
        explicit = index_text is not None

        if explicit_mode is None:
            explicit_mode = explicit
        elif explicit != explicit_mode:
            raise FormatSpecifierError(ErrorTemplate.missing_index_consistency(match.group(0)))

        index = int(index_text) if explicit else len(found) + 1
        found.append(
            FormatSpecifier(
                text=match.group(0),
                argument_index=index,
                explicit=explicit,
                length_modifier=match.group("length") or "",
                conversion=match.group("conversion"),
                position=match.start(),
            )
        )

    return tuple(found)


def resolve_arguments(
    specifiers: tuple[FormatSpecifier, ...],
) -> tuple[FormatSpecifier, ...]:
    """Collapse specifiers to one per argument and verify dense indexing.

    Args:
        specifiers: Output of scan_format_specifiers()

    Returns:
        One specifier per argument, ordered by argument index

    Raises:
        FormatSpecifierError: INDEX_OUT_OF_RANGE when indices do not read 1..N
    """
    # sorted() is stable: among duplicates the text-order first comes first
    ordered = sorted(specifiers, key=lambda spec: spec.argument_index)

    resolved: list[FormatSpecifier] = []
    for spec in ordered:
        if resolved and resolved[-1].argument_index == spec.argument_index:
            continue
        expected = len(resolved) + 1
        if spec.argument_index != expected:
            raise FormatSpecifierError(
                ErrorTemplate.index_out_of_range(spec.argument_index, expected)
            )
        resolved.append(spec)

    return tuple(resolved)


def parse_format_specifiers(text: str) -> tuple[FormatSpecifier, ...]:
    """Scan and resolve specifiers: one validated specifier per argument.

    Args:
        text: Default value (without surrounding quotes)

    Returns:
        One specifier per argument, ordered by argument index

    Raises:
        FormatSpecifierError: On mixed indexing or index gaps
    """
    return resolve_arguments(scan_format_specifiers(text))


def argument_types(text: str) -> tuple[ArgType, ...]:
    """Infer the formatting function parameter types for a default value.

    Args:
        text: Default value (without surrounding quotes)

    Returns:
        One type per argument in index order; empty for plain text

    Raises:
        FormatSpecifierError: On mixed indexing, index gaps or unknown specifiers

    Example:
        >>> argument_types("%1$@ with color %2$@")
        (<ArgType.STRING: 'String'>, <ArgType.STRING: 'String'>)
        >>> argument_types("Hello")
        ()
    """
    resolved = parse_format_specifiers(text)
    types = tuple(spec.arg_type for spec in resolved)
    if types:
        logger.debug("Inferred %d argument(s) from %r: %s", len(types), text, types)
    return types


def has_format_specifiers(text: str) -> bool:
    """Check whether text contains at least one (non-escaped) specifier.

    Does not validate indexing or types.
    """
    return any(not match.group("escape") for match in _SPECIFIER_PATTERN.finditer(text))
