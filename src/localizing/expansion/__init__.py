"""``@LocalizedStrings`` expansion.

Module Organization:
- options.py: ExpansionOptions configuration
- arguments.py: Macro argument extraction and key building
- declarations.py: Generated members and their rendering
- synthesizer.py: Key case -> generated member mapping
- macro.py: Macro entry point and whole-source driver

Python 3.13+.
"""

from .arguments import GenerationRequest, build_key, extract_parameters, remove_quotes
from .declarations import (
    ConstantBinding,
    FormattingFunction,
    GeneratedDeclaration,
    ResourceLookup,
)
from .macro import (
    ExpansionContext,
    ExpansionReport,
    ExpansionResult,
    LocalizedStringsMacro,
    expand_source,
    find_macro_attribute,
)
from .options import ExpansionOptions
from .synthesizer import synthesize, synthesize_case, synthesize_cases

__all__ = [
    "ConstantBinding",
    "ExpansionContext",
    "ExpansionOptions",
    "ExpansionReport",
    "ExpansionResult",
    "FormattingFunction",
    "GeneratedDeclaration",
    "GenerationRequest",
    "LocalizedStringsMacro",
    "ResourceLookup",
    "build_key",
    "expand_source",
    "extract_parameters",
    "find_macro_attribute",
    "remove_quotes",
    "synthesize",
    "synthesize_case",
    "synthesize_cases",
]
