"""Localizing - generate localized string lookups from Swift key enumerations.

Expands ``@LocalizedStrings`` enums: every case of the nested ``Strings``
enum becomes a ``static let`` resource lookup, or a ``static func`` taking
typed arguments when its default value carries printf-style specifiers.

Public API:
    expand_source - Expand every annotated declaration in a Swift source
    ExpansionOptions - Lookup shape, default separator, indentation
    LocalizedStringsMacro - Single-declaration macro entry point
    argument_types - Parameter types inferred from a default value
    parse_swift - Read Swift source into a declaration tree

Exceptions:
    LocalizingError - Base exception class
    MacroExpansionError - Expansion of one declaration failed
    FormatSpecifierError - Unusable format specifiers in a default value
    DeclarationSyntaxError - Source could not be read

Submodules:
    localizing.syntax - Declaration tree, reader, source rewriting
    localizing.format - Format specifier analysis
    localizing.expansion - Argument extraction, synthesis, macro driver
    localizing.catalog - String Catalog (.xcstrings) export (Babel extra)
    localizing.diagnostics - Diagnostic codes, templates, formatter
"""

from .diagnostics import (
    DeclarationSyntaxError,
    FormatSpecifierError,
    LocalizingError,
    MacroExpansionError,
)
from .enums import ArgType, GenerationMode
from .expansion import ExpansionOptions, ExpansionReport, LocalizedStringsMacro, expand_source
from .format import argument_types
from .syntax import parse as parse_swift

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("localizing")
except PackageNotFoundError:
    # Development mode: package not installed yet
    # Run: uv sync
    __version__ = "0.0.0+dev"

__all__ = [
    "ArgType",
    "DeclarationSyntaxError",
    "ExpansionOptions",
    "ExpansionReport",
    "FormatSpecifierError",
    "GenerationMode",
    "LocalizedStringsMacro",
    "LocalizingError",
    "MacroExpansionError",
    "__version__",
    "argument_types",
    "expand_source",
    "parse_swift",
]
