"""Declaration synthesizer.

Maps every case of the key-enumeration to one generated member:

1. Resolve the key-enumeration (``Strings`` or ``stringsEnum:``) among the
   annotated enum's nested enums.
2. Build the key from prefix, separator and the de-escaped case name.
3. Take the raw value literal as default value, or the quoted de-escaped
   name when the case has none.
4. Parse format specifiers in the default value: none gives a
   ConstantBinding, otherwise a FormattingFunction typed per argument.

Any failure aborts synthesis for the whole declaration.

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Iterable

from localizing.diagnostics import ErrorTemplate, FormatSpecifierError, MacroExpansionError
from localizing.expansion.arguments import GenerationRequest, build_key, quote
from localizing.expansion.declarations import (
    ConstantBinding,
    FormattingFunction,
    GeneratedDeclaration,
    ResourceLookup,
)
from localizing.expansion.options import ExpansionOptions
from localizing.format import argument_types
from localizing.syntax.ast import EnumCaseElement, TypeDecl

__all__ = ["synthesize", "synthesize_case", "synthesize_cases"]

logger = logging.getLogger(__name__)


def synthesize_case(
    request: GenerationRequest,
    case: EnumCaseElement,
    options: ExpansionOptions,
) -> GeneratedDeclaration:
    """Generate the member for a single key case.

    Raises:
        FormatSpecifierError: If the default value has unusable specifiers
            (the diagnostic names the case)
    """
    key = build_key(request, case.name, options.default_separator)
    default_value = case.raw_value if case.raw_value is not None else quote(case.bare_name)
    lookup = ResourceLookup(
        key=quote(key),
        default_value=default_value,
        table=request.resolved_table(),
        bundle=request.resolved_bundle(),
    )

    try:
        parameters = argument_types(default_value)
    except FormatSpecifierError as e:
        raise e.with_context(case_name=case.bare_name) from e

    if not parameters:
        return ConstantBinding(name=case.name, lookup=lookup)
    return FormattingFunction(name=case.name, lookup=lookup, parameters=parameters)


def synthesize_cases(
    request: GenerationRequest,
    cases: Iterable[EnumCaseElement],
    options: ExpansionOptions,
) -> tuple[GeneratedDeclaration, ...]:
    """Generate one member per case, in case order."""
    return tuple(synthesize_case(request, case, options) for case in cases)


def synthesize(
    request: GenerationRequest,
    declaration: TypeDecl,
    options: ExpansionOptions,
) -> tuple[GeneratedDeclaration, ...]:
    """Generate the members for an annotated declaration.

    Raises:
        MacroExpansionError: APPLIES_ONLY_TO_ENUMERATIONS when the declaration
            is not an enum, NO_STRINGS_ENUM_FOUND when the key-enumeration is
            missing, or a FormatSpecifierError for a bad default value
    """
    if not declaration.is_enum:
        raise MacroExpansionError(
            ErrorTemplate.applies_only_to_enumerations(str(declaration.kind))
        )

    strings_enum = request.resolved_strings_enum()
    key_enum = declaration.nested_enum(strings_enum)
    if key_enum is None:
        raise MacroExpansionError(ErrorTemplate.no_strings_enum_found(strings_enum))

    generated = synthesize_cases(request, key_enum.case_elements(), options)
    logger.debug(
        "Synthesized %d member(s) for %s from %s", len(generated), declaration.name, strings_enum
    )
    return generated
