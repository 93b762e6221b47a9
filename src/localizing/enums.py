"""Enumerations for Localizing type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum

__all__ = [
    "ArgType",
    "DeclarationKind",
    "GenerationMode",
]


class GenerationMode(StrEnum):
    """Shape of the generated resource lookup call.

    StrEnum provides automatic string conversion: str(GenerationMode.CURRENT) == "current"
    """

    CURRENT = "current"
    """String(localized: key, defaultValue: value[, table:][, bundle:][, comment:])"""

    LEGACY = "legacy"
    """NSLocalizedString(key, tableName:, bundle:, value:, comment:)"""


class ArgType(StrEnum):
    """Semantic parameter type inferred from a format specifier.

    The value is the type name written into generated function signatures.
    """

    CHARACTER = "CChar"
    """%c"""

    INT16 = "Int16"
    """%i, %x, %o, %hi, %hx, %ho"""

    UINT16 = "UInt16"
    """%hu"""

    INT = "Int"
    """%li, %lx, %lo, %ld and the ll variants"""

    UINT = "UInt"
    """%lu, %llu"""

    DOUBLE = "Double"
    """%f, %e, %g, %a"""

    STRING = "String"
    """%@"""


class DeclarationKind(StrEnum):
    """Keyword introducing a declaration in the declaration tree."""

    ENUM = "enum"
    STRUCT = "struct"
    CLASS = "class"
    ACTOR = "actor"
    PROTOCOL = "protocol"
    EXTENSION = "extension"
    OTHER = "other"
