"""Tests for the @LocalizedStrings macro driver.

Tests for ``localizing.expansion.macro``:

- ``expand_source``: Whole-source expansion, attribute removal, member insertion
- ``LocalizedStringsMacro.expansion``: Single declaration entry point
- ``ExpansionContext``: Diagnostic collection and locations
- ``ExpansionReport``: Aggregated results
"""

from __future__ import annotations

import textwrap

import pytest
from hypothesis import event, given

from localizing.diagnostics import DiagnosticCode, MacroExpansionError
from localizing.enums import ArgType, GenerationMode
from localizing.expansion import (
    ConstantBinding,
    ExpansionContext,
    ExpansionOptions,
    FormattingFunction,
    LocalizedStringsMacro,
    expand_source,
    find_macro_attribute,
)
from localizing.syntax import LineOffsetCache, TypeDecl, parse
from tests.strategies import key_enum_cases, render_annotated_enum


def swift(text: str) -> str:
    """Dedent a triple-quoted Swift snippet and drop the surrounding newlines."""
    return textwrap.dedent(text).strip("\n")


def annotated(source: str) -> TypeDecl:
    """Return the first declaration carrying the macro attribute."""
    for decl in parse(source).walk_types():
        if find_macro_attribute(decl) is not None:
            return decl
    msg = "no annotated declaration"
    raise AssertionError(msg)


SEPARATOR_WARNING = (
    "The default separator is changing from '_' to '.' as of version 1.0.0.\n"
    "If you wish to keep using the underscore as a separator, it is suggested\n"
    "that you add an explicit separator argument to the @LocalizedStrings macro."
)

# ============================================================================
# REFERENCE EXPANSIONS
# ============================================================================


class TestReferenceExpansions:
    """Complete expansions of representative annotated enums."""

    def test_prefix_with_separator(self) -> None:
        """Prefix and separator build dotted keys; %@ becomes a function."""
        source = swift("""
            @LocalizedStrings(prefix: "about", separator: ".")
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3 = "String arg: %@"
                }
            }
        """)
        expected = swift("""
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3 = "String arg: %@"
                }

                static let key1 = String(localized: "about.key1", defaultValue: "Localized value 1")

                static let key2 = String(localized: "about.key2", defaultValue: "Localized value 2")

                static func key3(_ arg1: String) -> String {
                    let temp = String(localized: "about.key3", defaultValue: "String arg: %@")
                    return String(format: temp, arg1)
                }
            }
        """)
        report = expand_source(source)

        assert report.expanded == expected
        assert report.succeeded
        assert report.diagnostics == ()

    def test_table(self) -> None:
        """A table argument is passed through to every lookup."""
        source = swift("""
            @LocalizedStrings(table: "tbl")
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                }
            }
        """)
        expected = swift("""
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                }

                static let key1 = String(localized: "key1", defaultValue: "Localized value 1", table: "tbl")

                static let key2 = String(localized: "key2", defaultValue: "Localized value 2", table: "tbl")
            }
        """)

        assert expand_source(source).expanded == expected

    def test_default_raw_value(self) -> None:
        """A case without raw value uses its own name as default value."""
        source = swift("""
            @LocalizedStrings()
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3
                }
            }
        """)
        expected = swift("""
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3
                }

                static let key1 = String(localized: "key1", defaultValue: "Localized value 1")

                static let key2 = String(localized: "key2", defaultValue: "Localized value 2")

                static let key3 = String(localized: "key3", defaultValue: "key3")
            }
        """)

        assert expand_source(source).expanded == expected

    def test_strings_enum_name(self) -> None:
        """stringsEnum selects a differently named key-enumeration."""
        source = swift("""
            @LocalizedStrings(stringsEnum: "Values")
            enum L {
                private enum Values: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3
                }
            }
        """)
        expected = swift("""
            enum L {
                private enum Values: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3
                }

                static let key1 = String(localized: "key1", defaultValue: "Localized value 1")

                static let key2 = String(localized: "key2", defaultValue: "Localized value 2")

                static let key3 = String(localized: "key3", defaultValue: "key3")
            }
        """)

        assert expand_source(source).expanded == expected

    def test_multiline_attribute_with_dotted_prefix(self) -> None:
        """An attribute spanning two lines is removed completely."""
        source = swift("""
            @LocalizedStrings(prefix: "Screens.MainScreen",
                              separator: ".")
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3
                }
            }
        """)
        expected = swift("""
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3
                }

                static let key1 = String(localized: "Screens.MainScreen.key1", defaultValue: "Localized value 1")

                static let key2 = String(localized: "Screens.MainScreen.key2", defaultValue: "Localized value 2")

                static let key3 = String(localized: "Screens.MainScreen.key3", defaultValue: "key3")
            }
        """)

        assert expand_source(source).expanded == expected

    def test_main_bundle_is_omitted(self) -> None:
        """bundle: .main equals the default and is left out."""
        source = swift("""
            @LocalizedStrings(bundle: .main)
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key3
                }
            }
        """)
        expected = swift("""
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key3
                }

                static let key1 = String(localized: "key1", defaultValue: "Localized value 1")

                static let key3 = String(localized: "key3", defaultValue: "key3")
            }
        """)

        assert expand_source(source).expanded == expected

    def test_other_bundle_and_surrounding_declarations(self) -> None:
        """A bundle expression is passed through; other code is untouched."""
        source = swift("""
            @objc class SomeClass: NSObject { }
            let bundle = Bundle(for: SomeClass.self)

            @LocalizedStrings(bundle: bundle)
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3
                }
            }
        """)
        expected = swift("""
            @objc class SomeClass: NSObject { }
            let bundle = Bundle(for: SomeClass.self)
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                    case key3
                }

                static let key1 = String(localized: "key1", defaultValue: "Localized value 1", bundle: bundle)

                static let key2 = String(localized: "key2", defaultValue: "Localized value 2", bundle: bundle)

                static let key3 = String(localized: "key3", defaultValue: "key3", bundle: bundle)
            }
        """)

        assert expand_source(source).expanded == expected

    def test_reserved_words(self) -> None:
        """Escaped names keep their backticks; keys use the bare name."""
        source = swift("""
            @LocalizedStrings(bundle: .main)
            enum L {
                private enum Strings: String {
                    case `class` = "Localized value 1"
                    case `associatedtype` = "Localized value 2"
                    case key3
                }
            }
        """)
        expected = swift("""
            enum L {
                private enum Strings: String {
                    case `class` = "Localized value 1"
                    case `associatedtype` = "Localized value 2"
                    case key3
                }

                static let `class` = String(localized: "class", defaultValue: "Localized value 1")

                static let `associatedtype` = String(localized: "associatedtype", defaultValue: "Localized value 2")

                static let key3 = String(localized: "key3", defaultValue: "key3")
            }
        """)

        assert expand_source(source).expanded == expected

    def test_separator_warning(self) -> None:
        """A prefix without separator uses '_' and warns at the attribute."""
        source = swift("""
            @LocalizedStrings(prefix: "about", table: "tbl")
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                }
            }
        """)
        expected = swift("""
            enum L {
                private enum Strings: String {
                    case key1 = "Localized value 1"
                    case key2 = "Localized value 2"
                }

                static let key1 = String(localized: "about_key1", defaultValue: "Localized value 1", table: "tbl")

                static let key2 = String(localized: "about_key2", defaultValue: "Localized value 2", table: "tbl")
            }
        """)
        report = expand_source(source)

        assert report.expanded == expected
        assert report.succeeded
        (warning,) = report.warnings
        assert warning.code is DiagnosticCode.SEPARATOR_DEFAULT_CHANGING
        assert warning.message == SEPARATOR_WARNING
        assert warning.severity == "warning"
        assert warning.span is not None
        assert (warning.span.line, warning.span.column) == (1, 1)


# ============================================================================
# SEPARATOR ADVISORY
# ============================================================================


class TestSeparatorAdvisory:
    """When the separator-default warning is (not) emitted."""

    CASES = """
        enum L {
            enum Strings: String {
                case a
                case b
                case c
            }
        }
    """

    def _source(self, arguments: str) -> str:
        return f"@LocalizedStrings({arguments})\n" + swift(self.CASES)

    def test_emitted_once_per_declaration(self) -> None:
        """Many cases still produce a single warning."""
        report = expand_source(self._source('prefix: "p"'))
        assert len(report.warnings) == 1

    def test_not_emitted_with_separator(self) -> None:
        """An explicit separator silences the advisory."""
        report = expand_source(self._source('prefix: "p", separator: "_"'))
        assert report.warnings == ()

    def test_not_emitted_without_prefix(self) -> None:
        """Without a prefix no separator is used."""
        report = expand_source(self._source('separator: "."'))
        assert report.warnings == ()
        assert 'String(localized: "a"' in report.expanded

    def test_disabled_by_option(self) -> None:
        """warn_implicit_separator=False suppresses the advisory."""
        options = ExpansionOptions(warn_implicit_separator=False)
        report = expand_source(self._source('prefix: "p"'), options)
        assert report.warnings == ()
        assert '"p_a"' in report.expanded

    def test_configured_default_separator(self) -> None:
        """default_separator replaces '_' but the advisory is still given."""
        options = ExpansionOptions(default_separator=".")
        report = expand_source(self._source('prefix: "p"'), options)
        assert '"p.a"' in report.expanded
        assert len(report.warnings) == 1

    def test_one_warning_per_annotated_declaration(self) -> None:
        """Two annotated enums in one file warn independently."""
        source = self._source('prefix: "p"') + "\n\n" + self._source('prefix: "q"')
        report = expand_source(source)
        assert len(report.warnings) == 2
        assert [w.span.line for w in report.warnings if w.span] == [1, 10]


# ============================================================================
# EXPANSION ERRORS
# ============================================================================


class TestExpansionErrors:
    """Failures leave the declaration untouched and report a diagnostic."""

    def test_struct_is_rejected(self) -> None:
        """The macro only applies to enumerations."""
        source = swift("""
            @LocalizedStrings()
            struct L {
                enum Strings: String {
                    case a
                }
            }
        """)
        report = expand_source(source)

        assert not report.succeeded
        assert report.expanded == source
        (error,) = report.errors
        assert error.code is DiagnosticCode.APPLIES_ONLY_TO_ENUMERATIONS
        assert error.message == "@LocalizedStrings only applies only to enumerations"
        assert error.declaration == "L"

    def test_missing_strings_enum(self) -> None:
        """An enum without a Strings enum cannot be expanded."""
        source = swift("""
            @LocalizedStrings()
            enum L {
                enum Values: String {
                    case a
                }
            }
        """)
        (error,) = expand_source(source).errors
        assert error.code is DiagnosticCode.NO_STRINGS_ENUM_FOUND
        assert error.message == (
            "@LocalizedStrings requires your enum contain an embedded Strings enum"
        )

    def test_strings_enum_must_be_an_enum(self) -> None:
        """A struct named Strings is not a key-enumeration."""
        source = swift("""
            @LocalizedStrings()
            enum L {
                struct Strings {
                }
            }
        """)
        (error,) = expand_source(source).errors
        assert error.code is DiagnosticCode.NO_STRINGS_ENUM_FOUND

    def test_attribute_without_parentheses(self) -> None:
        """@LocalizedStrings without an argument list is a parser error."""
        source = swift("""
            @LocalizedStrings
            enum L {
                enum Strings: String {
                    case a
                }
            }
        """)
        (error,) = expand_source(source).errors
        assert error.code is DiagnosticCode.PARSER_ERROR
        assert error.message == "Parser error"

    def test_non_literal_separator(self) -> None:
        """The separator must be a simple string literal."""
        source = swift("""
            @LocalizedStrings(prefix: "p", separator: sep)
            enum L {
                enum Strings: String {
                    case a
                }
            }
        """)
        report = expand_source(source)
        (error,) = report.errors
        assert error.code is DiagnosticCode.INVALID_SEPARATOR
        assert error.message == (
            "@LocalizedString requires its parameters to be a simple String value"
        )
        assert report.warnings == ()

    def test_format_error_names_case(self) -> None:
        """Specifier errors identify the offending case and abort the declaration."""
        source = swift("""
            @LocalizedStrings()
            enum L {
                enum Strings: String {
                    case good = "Fine"
                    case bad = "%1$@ and %@"
                }
            }
        """)
        report = expand_source(source)
        (result,) = report.results

        assert not result.ok
        assert result.members == ()
        assert report.expanded == source
        (error,) = report.errors
        assert error.code is DiagnosticCode.MISSING_INDEX_CONSISTENCY
        assert error.case_name == "bad"
        assert error.span is not None
        assert error.span.line == 1

    def test_failure_is_isolated(self) -> None:
        """Other annotated declarations still expand."""
        source = swift("""
            @LocalizedStrings()
            struct Broken {
            }

            @LocalizedStrings()
            enum L {
                enum Strings: String {
                    case a
                }
            }
        """)
        report = expand_source(source)

        assert [r.ok for r in report.results] == [False, True]
        assert report.expanded.startswith("@LocalizedStrings()\nstruct Broken {\n}\nenum L {")
        assert 'static let a = String(localized: "a", defaultValue: "a")' in report.expanded

    def test_expansion_raises_with_location(self) -> None:
        """The single-declaration entry point raises with span and declaration."""
        source = swift("""
            @LocalizedStrings()
            enum L {
            }
        """)
        decl = annotated(source)
        attribute = find_macro_attribute(decl)
        assert attribute is not None
        context = ExpansionContext(lines=LineOffsetCache(source))

        with pytest.raises(MacroExpansionError) as exc_info:
            LocalizedStringsMacro.expansion(attribute, decl, context)

        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.declaration == "L"
        assert diagnostic.span is not None
        assert diagnostic.span.start == 0


# ============================================================================
# SINGLE DECLARATION ENTRY POINT
# ============================================================================


class TestLocalizedStringsMacro:
    """LocalizedStringsMacro.expansion() and ExpansionContext."""

    SOURCE = swift("""
        @LocalizedStrings(prefix: "shop", separator: ".")
        enum L {
            enum Strings: String {
                case title = "Shop"
                case items = "%2$ld items in %1$@"
            }
        }
    """)

    def test_members_in_case_order(self) -> None:
        """One member per case, constants and functions as inferred."""
        decl = annotated(self.SOURCE)
        attribute = find_macro_attribute(decl)
        assert attribute is not None

        members = LocalizedStringsMacro.expansion(attribute, decl, ExpansionContext())

        assert [m.name for m in members] == ["title", "items"]
        assert isinstance(members[0], ConstantBinding)
        assert isinstance(members[1], FormattingFunction)
        assert members[1].parameters == (ArgType.STRING, ArgType.INT)
        assert members[1].lookup.key == '"shop.items"'

    def test_context_without_lines_has_no_spans(self) -> None:
        """Diagnostics are recorded without location when no lines are known."""
        source = self.SOURCE.replace(', separator: "."', "")
        decl = annotated(source)
        attribute = find_macro_attribute(decl)
        assert attribute is not None
        context = ExpansionContext()

        LocalizedStringsMacro.expansion(attribute, decl, context)

        (warning,) = context.warnings
        assert warning.span is None

    def test_qualified_attribute_name(self) -> None:
        """A module-qualified attribute is recognized."""
        source = swift("""
            @Localizing.LocalizedStrings()
            enum L {
                enum Strings {
                    case a
                }
            }
        """)
        report = expand_source(source)
        assert report.succeeded
        assert report.expanded.startswith("enum L {")

    def test_unrelated_attributes_are_kept(self) -> None:
        """Only the macro attribute is removed."""
        source = swift("""
            @MainActor
            @LocalizedStrings()
            public enum L {
                enum Strings {
                    case a
                }
            }
        """)
        report = expand_source(source)
        assert report.expanded.startswith("@MainActor\npublic enum L {")


# ============================================================================
# SOURCE REWRITING
# ============================================================================


class TestSourceRewriting:
    """Placement of generated members in the expanded source."""

    def test_nested_annotated_enum(self) -> None:
        """Members follow the indentation of the nested body."""
        source = swift("""
            struct Outer {
                @LocalizedStrings()
                enum L {
                    enum Strings {
                        case a
                    }
                }
            }
        """)
        expected = swift("""
            struct Outer {
                enum L {
                    enum Strings {
                        case a
                    }

                    static let a = String(localized: "a", defaultValue: "a")
                }
            }
        """)
        assert expand_source(source).expanded == expected

    def test_empty_strings_enum_removes_attribute_only(self) -> None:
        """No cases, no members; the attribute still disappears."""
        source = swift("""
            @LocalizedStrings()
            enum L {
                enum Strings {
                }
            }
        """)
        report = expand_source(source)
        assert report.succeeded
        assert report.expanded == source.removeprefix("@LocalizedStrings()\n")

    def test_multiple_elements_per_case(self) -> None:
        """case a, b = "B" declares two keys."""
        source = swift("""
            @LocalizedStrings()
            enum L {
                enum Strings: String {
                    case a, b = "B" // trailing note
                }
            }
        """)
        report = expand_source(source)
        assert 'static let a = String(localized: "a", defaultValue: "a")' in report.expanded
        assert 'static let b = String(localized: "b", defaultValue: "B")' in report.expanded

    def test_existing_members_are_preserved(self) -> None:
        """Hand-written members stay; generated ones are appended after them."""
        source = swift("""
            @LocalizedStrings()
            enum L {
                enum Strings: String {
                    case a
                }

                static func helper() -> Int {
                    return 1
                }
            }
        """)
        expanded = expand_source(source).expanded
        helper = expanded.index("static func helper()")
        generated = expanded.index("static let a")
        assert helper < generated
        assert expanded.endswith('defaultValue: "a")\n}')

    def test_rendered_members_are_unindented(self) -> None:
        """ExpansionResult.rendered holds the members without body indentation."""
        report = expand_source(TestLocalizedStringsMacro.SOURCE)
        (result,) = report.results
        assert result.rendered[0] == (
            'static let title = String(localized: "shop.title", defaultValue: "Shop")'
        )
        assert result.rendered[1].splitlines()[0] == (
            "static func items(_ arg1: String, _ arg2: Int) -> String {"
        )

    def test_source_without_annotations(self) -> None:
        """Nothing to expand leaves the source as is."""
        source = "enum L {\n    case a\n}\n"
        report = expand_source(source)
        assert report.expanded == source
        assert report.results == ()
        assert report.succeeded


# ============================================================================
# GENERATION MODES
# ============================================================================


class TestLegacyMode:
    """NSLocalizedString output."""

    def test_constant_and_function(self) -> None:
        """Every lookup argument is written out."""
        source = swift("""
            @LocalizedStrings(prefix: "about", separator: ".", table: "tbl")
            enum L {
                enum Strings: String {
                    case key1 = "Value"
                    case key2 = "Hi %@"
                }
            }
        """)
        options = ExpansionOptions(mode=GenerationMode.LEGACY)
        expanded = expand_source(source, options).expanded

        assert (
            '    static let key1 = NSLocalizedString("about.key1", tableName: "tbl", '
            'bundle: .main, value: "Value", comment: "")'
        ) in expanded
        assert (
            '        let temp = NSLocalizedString("about.key2", tableName: "tbl", '
            'bundle: .main, value: "Hi %@", comment: "")'
        ) in expanded
        assert "        return String(format: temp, arg1)" in expanded

    def test_tab_indent_unit(self) -> None:
        """Function bodies use the configured indent unit."""
        source = swift("""
            @LocalizedStrings()
            enum L {
                enum Strings: String {
                    case greet = "Hi %@"
                }
            }
        """)
        options = ExpansionOptions(indent="\t")
        expanded = expand_source(source, options).expanded
        assert "\n    \tlet temp = " in expanded


# ============================================================================
# PROPERTIES
# ============================================================================


class TestExpansionProperties:
    """Properties over generated key enumerations."""

    @given(cases=key_enum_cases())
    def test_one_constant_per_case(self, cases: list[tuple[str, str | None]]) -> None:
        """Plain defaults produce exactly one constant per case, in order."""
        event(f"cases={len(cases)}")
        report = expand_source(render_annotated_enum(cases))
        (result,) = report.results

        assert result.ok
        assert [m.name for m in result.members] == [name for name, _ in cases]
        assert all(isinstance(m, ConstantBinding) for m in result.members)

    @given(cases=key_enum_cases())
    def test_keys_are_prefixed_bare_names(self, cases: list[tuple[str, str | None]]) -> None:
        """Keys are prefix + separator + name without backticks."""
        report = expand_source(render_annotated_enum(cases, 'prefix: "p", separator: "."'))
        (result,) = report.results

        for member, (name, value) in zip(result.members, cases, strict=True):
            bare = name.strip("`")
            assert member.lookup.key == f'"p.{bare}"'
            expected_default = f'"{value}"' if value is not None else f'"{bare}"'
            assert member.lookup.default_value == expected_default

    @given(cases=key_enum_cases())
    def test_expansion_keeps_source_text(self, cases: list[tuple[str, str | None]]) -> None:
        """Everything but the attribute survives unchanged at the start."""
        source = render_annotated_enum(cases)
        expanded = expand_source(source).expanded
        body = source.removeprefix("@LocalizedStrings()\n")
        head = body[: body.rindex("}")].rstrip()
        assert expanded.startswith(head)
