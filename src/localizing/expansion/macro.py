"""``@LocalizedStrings`` macro driver.

Two entry points:

- LocalizedStringsMacro.expansion() expands one annotated declaration and
  reports diagnostics to an ExpansionContext, the way a compiler plugin is
  driven by its host.
- expand_source() reads a whole Swift source, expands every annotated
  declaration independently, and returns the expanded source together with
  per-declaration results.

A failed declaration keeps its attribute and body unchanged and records its
error; the other declarations still expand.

Python 3.13+. Zero external dependencies.
"""

import logging
from dataclasses import dataclass, field

from localizing.constants import MACRO_NAME
from localizing.diagnostics import Diagnostic, ErrorTemplate, MacroExpansionError, SourceSpan
from localizing.expansion.arguments import GenerationRequest, extract_parameters
from localizing.expansion.declarations import GeneratedDeclaration
from localizing.expansion.options import ExpansionOptions
from localizing.expansion.synthesizer import synthesize
from localizing.syntax.ast import Attribute, Span, TypeDecl
from localizing.syntax.cursor import LineOffsetCache
from localizing.syntax.parser import DeclarationParser
from localizing.syntax.rewriter import (
    TextEdit,
    apply_edits,
    attribute_removal,
    member_insertion,
)

__all__ = [
    "ExpansionContext",
    "ExpansionReport",
    "ExpansionResult",
    "LocalizedStringsMacro",
    "expand_source",
    "find_macro_attribute",
]

logger = logging.getLogger(__name__)


def find_macro_attribute(declaration: TypeDecl) -> Attribute | None:
    """Return the ``@LocalizedStrings`` attribute, module-qualified or not."""
    for attribute in declaration.attributes:
        if attribute.name.rsplit(".", 1)[-1] == MACRO_NAME:
            return attribute
    return None


@dataclass(slots=True)
class ExpansionContext:
    """Collects diagnostics emitted while expanding one declaration.

    Attributes:
        lines: Offset-to-line lookup for the expanded source; spans are
            left empty when None
        diagnostics: Diagnostics in emission order
    """

    lines: LineOffsetCache | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def location(self, span: Span | None) -> SourceSpan | None:
        """Convert a tree span to a SourceSpan."""
        if span is None or self.lines is None:
            return None
        return self.lines.span(span.start, span.end)

    def diagnose(self, diagnostic: Diagnostic, node: Span | None = None) -> None:
        """Record a diagnostic attached to node."""
        self.diagnostics.append(diagnostic.with_context(span=self.location(node)))

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.is_warning)


class LocalizedStringsMacro:
    """Member macro generating localized string lookups from a Strings enum."""

    @staticmethod
    def expansion(
        attribute: Attribute,
        declaration: TypeDecl,
        context: ExpansionContext,
        options: ExpansionOptions | None = None,
    ) -> tuple[GeneratedDeclaration, ...]:
        """Expand one annotated declaration.

        Args:
            attribute: The macro attribute
            declaration: Declaration the attribute is attached to
            context: Receives advisory diagnostics
            options: Expansion configuration (defaults when None)

        Returns:
            Generated members in key-enumeration case order

        Raises:
            MacroExpansionError: If the declaration cannot be expanded; the
                diagnostic is attached to the attribute
        """
        options = options or ExpansionOptions()
        try:
            request = LocalizedStringsMacro._request(attribute, declaration)

            if options.warn_implicit_separator and request.warns_implicit_separator:
                context.diagnose(ErrorTemplate.separator_default_changing(), attribute.span)
                logger.info(
                    "%s: prefix without separator, using %r",
                    declaration.name,
                    options.default_separator,
                )

            return synthesize(request, declaration, options)
        except MacroExpansionError as e:
            raise e.with_context(
                span=context.location(attribute.span), declaration=declaration.name
            ) from e

    @staticmethod
    def _request(attribute: Attribute, declaration: TypeDecl) -> GenerationRequest:
        if not declaration.is_enum:
            raise MacroExpansionError(
                ErrorTemplate.applies_only_to_enumerations(str(declaration.kind))
            )
        if attribute.arguments is None:
            raise MacroExpansionError(ErrorTemplate.parser_error())
        return extract_parameters(attribute.arguments)


@dataclass(frozen=True, slots=True)
class ExpansionResult:
    """Outcome of expanding one annotated declaration.

    Attributes:
        declaration: Name of the annotated declaration
        span: Location of the macro attribute
        members: Generated members (empty on failure)
        rendered: Members rendered for the configured mode, unindented
        diagnostics: Errors and warnings attached to this declaration
        error: The failure, None on success
    """

    declaration: str
    span: SourceSpan | None
    members: tuple[GeneratedDeclaration, ...] = ()
    rendered: tuple[str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    error: MacroExpansionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class ExpansionReport:
    """Expanded source plus per-declaration results."""

    source: str
    expanded: str
    results: tuple[ExpansionResult, ...]

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """All diagnostics, in declaration order."""
        return tuple(d for result in self.results for d in result.diagnostics)

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if not d.is_warning)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.is_warning)

    @property
    def succeeded(self) -> bool:
        """True when every annotated declaration expanded."""
        return all(result.ok for result in self.results)


def expand_source(
    source: str,
    options: ExpansionOptions | None = None,
    *,
    parser: DeclarationParser | None = None,
) -> ExpansionReport:
    """Expand every ``@LocalizedStrings`` declaration in source.

    Args:
        source: Swift source text
        options: Expansion configuration (defaults when None)
        parser: Declaration reader to use (default limits when None)

    Returns:
        ExpansionReport with the expanded text and one result per annotated
        declaration, in source order

    Raises:
        DeclarationSyntaxError: If the source cannot be read

    Example:
        >>> report = expand_source('@LocalizedStrings()\\nenum L {\\n    enum Strings {\\n        case hi\\n    }\\n}\\n')
        >>> print(report.expanded)
        enum L {
            enum Strings {
                case hi
            }
        <BLANKLINE>
            static let hi = String(localized: "hi", defaultValue: "hi")
        }
        <BLANKLINE>
    """
    options = options or ExpansionOptions()
    tree = (parser or DeclarationParser()).parse(source)
    lines = LineOffsetCache(source)

    results: list[ExpansionResult] = []
    edits: list[TextEdit] = []
    for declaration in tree.walk_types():
        attribute = find_macro_attribute(declaration)
        if attribute is None:
            continue

        context = ExpansionContext(lines=lines)
        span = context.location(attribute.span)
        try:
            members = LocalizedStringsMacro.expansion(attribute, declaration, context, options)
        except MacroExpansionError as e:
            logger.debug("Expansion of %s failed: %s", declaration.name, e)
            diagnostics = list(context.diagnostics)
            if e.diagnostic is not None:
                diagnostics.append(e.diagnostic)
            results.append(
                ExpansionResult(
                    declaration=declaration.name,
                    span=span,
                    diagnostics=tuple(diagnostics),
                    error=e,
                )
            )
            continue

        rendered = tuple(member.render(options.mode, options.indent) for member in members)
        if attribute.span is not None:
            edits.append(attribute_removal(source, attribute.span))
        if rendered:
            edits.append(member_insertion(source, declaration, rendered, options.indent))
        results.append(
            ExpansionResult(
                declaration=declaration.name,
                span=span,
                members=members,
                rendered=rendered,
                diagnostics=tuple(context.diagnostics),
            )
        )
        logger.debug("Expanded %s into %d member(s)", declaration.name, len(members))

    return ExpansionReport(
        source=source, expanded=apply_edits(source, edits), results=tuple(results)
    )
