"""Diagnostic message templates.

Centralized message templates for testable, consistent diagnostics.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized diagnostic message templates.

    All diagnostic messages are created here. NO f-strings in exception
    constructors! The message strings of the expansion errors are reported
    verbatim to the build pipeline, so they must not change.
    """

    _MACRO = "@LocalizedStrings"

    # ------------------------------------------------------------------
    # Expansion errors
    # ------------------------------------------------------------------

    @staticmethod
    def applies_only_to_enumerations(kind: str | None = None) -> Diagnostic:
        """Macro attached to something other than an enumeration.

        Args:
            kind: Keyword of the declaration the macro was attached to

        Returns:
            Diagnostic for APPLIES_ONLY_TO_ENUMERATIONS
        """
        hint = "Attach the macro to an enum declaration"
        if kind:
            hint = f"Attach the macro to an enum declaration, not a {kind}"
        return Diagnostic(
            code=DiagnosticCode.APPLIES_ONLY_TO_ENUMERATIONS,
            message=f"{ErrorTemplate._MACRO} only applies only to enumerations",
            hint=hint,
        )

    @staticmethod
    def no_strings_enum_found(strings_enum: str) -> Diagnostic:
        """Nested key-enumeration missing.

        Args:
            strings_enum: Name that was looked up

        Returns:
            Diagnostic for NO_STRINGS_ENUM_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.NO_STRINGS_ENUM_FOUND,
            message=f"{ErrorTemplate._MACRO} requires your enum contain an embedded Strings enum",
            hint=f"Add a nested `enum {strings_enum}: String` or pass stringsEnum:",
        )

    @staticmethod
    def parser_error() -> Diagnostic:
        """Attribute has no parseable argument list.

        Returns:
            Diagnostic for PARSER_ERROR
        """
        return Diagnostic(
            code=DiagnosticCode.PARSER_ERROR,
            message="Parser error",
            hint=f"Write the macro with parentheses, e.g. {ErrorTemplate._MACRO}()",
        )

    @staticmethod
    def invalid_separator(expression: str) -> Diagnostic:
        """Separator argument is not a simple string literal.

        Args:
            expression: Expression text passed as separator

        Returns:
            Diagnostic for INVALID_SEPARATOR
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_SEPARATOR,
            message="@LocalizedString requires its parameters to be a simple String value",
            hint=f'Replace `{expression}` with a quoted literal such as "."',
        )

    # ------------------------------------------------------------------
    # Format specifier errors
    # ------------------------------------------------------------------

    @staticmethod
    def missing_index_consistency(specifier: str) -> Diagnostic:
        """Explicit and implicit positional indices mixed.

        Args:
            specifier: First specifier that disagreed with the others

        Returns:
            Diagnostic for MISSING_INDEX_CONSISTENCY
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_INDEX_CONSISTENCY,
            message="Format specifiers must either all use positional indices (%1$@) or none",
            hint="Number every specifier (%1$@, %2$d, ...) or none of them",
            specifier=specifier,
        )

    @staticmethod
    def index_out_of_range(index: int, expected: int) -> Diagnostic:
        """Positional indices are not dense from 1.

        Args:
            index: Index found
            expected: Index that should have appeared at this position

        Returns:
            Diagnostic for INDEX_OUT_OF_RANGE
        """
        return Diagnostic(
            code=DiagnosticCode.INDEX_OUT_OF_RANGE,
            message="Positional format indices must run from 1 to N without gaps",
            hint=f"Found index {index} where index {expected} was expected",
            specifier=f"%{index}$",
        )

    @staticmethod
    def unknown_specifier(specifier: str) -> Diagnostic:
        """Conversion cannot be mapped to a parameter type.

        Args:
            specifier: Specifier as written, e.g. "%lf"

        Returns:
            Diagnostic for UNKNOWN_SPECIFIER
        """
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_SPECIFIER,
            message=f"Unknown format specifier: {specifier}",
            hint="Supported: %@, %c, %i/%x/%o, %hu, %ld/%li/%lx/%lo, %lu, %f/%e/%g/%a",
            specifier=specifier,
        )

    # ------------------------------------------------------------------
    # Syntax errors
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Source ended inside a declaration.

        Args:
            position: Character offset where EOF was reached

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected EOF at position {position}",
        )

    @staticmethod
    def unexpected_token(found: str, expected: str, span: SourceSpan) -> Diagnostic:
        """Reader found something other than what the grammar requires.

        Args:
            found: Text found at the error position
            expected: Description of what was expected
            span: Error location

        Returns:
            Diagnostic for UNEXPECTED_TOKEN
        """
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_TOKEN,
            message=f"Expected {expected} but found {found!r}",
            span=span,
        )

    @staticmethod
    def unterminated_literal(kind: str, span: SourceSpan) -> Diagnostic:
        """String literal or block comment never closed.

        Args:
            kind: "string literal" or "block comment"
            span: Location of the opening delimiter

        Returns:
            Diagnostic for UNTERMINATED_LITERAL
        """
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_LITERAL,
            message=f"Unterminated {kind}",
            span=span,
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, span: SourceSpan) -> Diagnostic:
        """Declarations nested deeper than the reader allows.

        Args:
            max_depth: The configured limit
            span: Location of the declaration that crossed the limit

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Maximum declaration nesting depth ({max_depth}) exceeded",
            span=span,
        )

    @staticmethod
    def source_too_large(size: int, max_size: int) -> Diagnostic:
        """Source exceeds the reader size limit.

        Args:
            size: Source size in characters
            max_size: Configured limit

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=f"Source size ({size} characters) exceeds limit ({max_size})",
        )

    # ------------------------------------------------------------------
    # Warnings
    # ------------------------------------------------------------------

    @staticmethod
    def separator_default_changing() -> Diagnostic:
        """Prefix given without an explicit separator.

        Returns:
            Warning diagnostic for SEPARATOR_DEFAULT_CHANGING
        """
        msg = (
            "The default separator is changing from '_' to '.' as of version 1.0.0.\n"
            "If you wish to keep using the underscore as a separator, it is suggested\n"
            "that you add an explicit separator argument to the @LocalizedStrings macro."
        )
        return Diagnostic(
            code=DiagnosticCode.SEPARATOR_DEFAULT_CHANGING,
            message=msg,
            hint='Add separator: "_" (or ".") to the macro arguments',
            severity="warning",
        )
