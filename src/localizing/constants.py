"""Shared constants for Localizing.

Centralized defaults used by the argument extractor, the declaration
synthesizer and the source reader. Placing them here avoids circular imports
and provides a single source of truth.

Constants are grouped by domain:
- Macro defaults: Values assumed when a macro argument is omitted
- Lookup defaults: Argument values omitted from generated lookups
- Rendering: Names used in generated code
- Input limits: DoS prevention via size constraints

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Macro defaults
    "MACRO_NAME",
    "DEFAULT_STRINGS_ENUM",
    "LEGACY_SEPARATOR",
    "DOT_SEPARATOR",
    "DEFAULT_SEPARATOR",
    # Lookup defaults
    "DEFAULT_TABLE",
    "DEFAULT_BUNDLE",
    "DEFAULT_BUNDLE_ALIASES",
    "DEFAULT_COMMENT",
    # Rendering
    "TEMP_VARIABLE",
    "ARGUMENT_PREFIX",
    "DEFAULT_INDENT",
    "CATALOG_DEFAULT_TABLE",
    "CATALOG_VERSION",
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_NESTING_DEPTH",
]

# ============================================================================
# MACRO DEFAULTS
# ============================================================================

# Attribute name recognized by the source reader and the macro driver.
MACRO_NAME: str = "LocalizedStrings"

# Name of the nested key-enumeration when `stringsEnum:` is not supplied.
DEFAULT_STRINGS_ENUM: str = "Strings"

# Separator used by the 0.9.x series. Scheduled to become DOT_SEPARATOR in 1.0.0;
# the advisory diagnostic tells users to pin the separator explicitly.
LEGACY_SEPARATOR: str = "_"
DOT_SEPARATOR: str = "."
DEFAULT_SEPARATOR: str = LEGACY_SEPARATOR

# ============================================================================
# LOOKUP DEFAULTS
# ============================================================================

# Expression text compared verbatim against macro arguments. A lookup argument
# equal to its default is left out of CURRENT-mode output.
DEFAULT_TABLE: str = "nil"
DEFAULT_BUNDLE: str = ".main"
DEFAULT_BUNDLE_ALIASES: frozenset[str] = frozenset({".main", "Bundle.main"})
DEFAULT_COMMENT: str = '""'

# ============================================================================
# RENDERING
# ============================================================================

# Local binding that holds the looked-up template inside formatting functions.
TEMP_VARIABLE: str = "temp"

# Formatting function parameters are named arg1, arg2, ...
ARGUMENT_PREFIX: str = "arg"

DEFAULT_INDENT: str = "    "

# String catalog name used for the `nil` table (Xcode's default catalog).
CATALOG_DEFAULT_TABLE: str = "Localizable"
CATALOG_VERSION: str = "1.0"

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum source size in characters accepted by the declaration reader (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# Maximum declaration nesting depth accepted by the declaration reader.
MAX_NESTING_DEPTH: int = 100
