"""Tests for String Catalog (.xcstrings) export."""

from __future__ import annotations

import json
import logging
import textwrap
from pathlib import Path

import pytest
from babel.core import UnknownLocaleError

from localizing.catalog import (
    build_string_catalog,
    catalog_table_name,
    dump_string_catalog,
    write_string_catalogs,
)
from localizing.enums import ArgType
from localizing.expansion import ConstantBinding, FormattingFunction, ResourceLookup, expand_source

SOURCE = textwrap.dedent("""\
    @LocalizedStrings(prefix: "about", separator: ".")
    enum About {
        enum Strings: String {
            case title = "About \\"Us\\""
            case greeting = "Hello %@"
        }
    }

    @LocalizedStrings(table: "Errors")
    enum Errors {
        enum Strings: String {
            case network
        }
    }

    @LocalizedStrings()
    struct Broken {
    }
""")


class TestCatalogTableName:
    """Table expressions to catalog names."""

    def test_default_table(self) -> None:
        """nil is the Localizable catalog."""
        assert catalog_table_name("nil") == "Localizable"

    def test_literal(self) -> None:
        """Literals are decoded."""
        assert catalog_table_name('"Errors"') == "Errors"

    def test_expression(self) -> None:
        """Non-literal tables have no catalog."""
        assert catalog_table_name("Tables.name") is None

    @pytest.mark.parametrize(
        "literal", ['"Sub/Table"', '"../escaped"', '"/abs"', '""', '"."', '"a\\\\b"']
    )
    def test_not_a_file_name(self, literal: str) -> None:
        """Literals that are not a plain file name have no catalog."""
        assert catalog_table_name(literal) is None


class TestBuildStringCatalog:
    """Catalog construction from expansion results."""

    def test_from_report(self) -> None:
        """One catalog per table; failed declarations contribute nothing."""
        catalogs = build_string_catalog(expand_source(SOURCE), "en")

        assert list(catalogs) == ["Errors", "Localizable"]
        localizable = catalogs["Localizable"]
        assert localizable["sourceLanguage"] == "en"
        assert localizable["version"] == "1.0"
        assert set(localizable["strings"]) == {"about.title", "about.greeting"}
        unit = localizable["strings"]["about.title"]["localizations"]["en"]["stringUnit"]
        assert unit == {"state": "translated", "value": 'About "Us"'}
        assert localizable["strings"]["about.title"]["extractionState"] == "manual"
        assert catalogs["Errors"]["strings"]["network"]["localizations"]["en"]["stringUnit"][
            "value"
        ] == "network"

    def test_format_templates_kept(self) -> None:
        """Formatting functions export their template unchanged."""
        catalogs = build_string_catalog(expand_source(SOURCE), "en")
        entry = catalogs["Localizable"]["strings"]["about.greeting"]
        assert entry["localizations"]["en"]["stringUnit"]["value"] == "Hello %@"

    def test_language_canonicalized(self) -> None:
        """POSIX codes are written as BCP-47 tags."""
        members = [ConstantBinding("a", ResourceLookup('"a"', '"A"'))]
        catalog = build_string_catalog(members, "pt_BR")["Localizable"]
        assert catalog["sourceLanguage"] == "pt-BR"
        assert "pt-BR" in catalog["strings"]["a"]["localizations"]

    def test_unknown_language(self) -> None:
        """Unknown source languages are rejected."""
        with pytest.raises(UnknownLocaleError):
            build_string_catalog([], "xx")

    def test_non_literal_table_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Members with an expression table are skipped with a warning."""
        members = [
            ConstantBinding("a", ResourceLookup('"a"', '"A"', table="tableName")),
            FormattingFunction("b", ResourceLookup('"b"', '"%@"'), (ArgType.STRING,)),
        ]
        with caplog.at_level(logging.WARNING, logger="localizing.catalog.xcstrings"):
            catalogs = build_string_catalog(members, "en")
        assert list(catalogs["Localizable"]["strings"]) == ["b"]
        assert "not a string literal" in caplog.text

    def test_redefined_key_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """The last definition of a key wins, with a warning when values differ."""
        members = [
            ConstantBinding("a", ResourceLookup('"k"', '"first"')),
            ConstantBinding("b", ResourceLookup('"k"', '"second"')),
        ]
        with caplog.at_level(logging.WARNING, logger="localizing.catalog.xcstrings"):
            catalogs = build_string_catalog(members, "en")
        unit = catalogs["Localizable"]["strings"]["k"]["localizations"]["en"]["stringUnit"]
        assert unit["value"] == "second"
        assert "redefined" in caplog.text

    def test_path_like_table_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Tables that would leave the output directory are skipped with a warning."""
        members = [
            ConstantBinding("a", ResourceLookup('"a"', '"A"', table='"Sub/Table"')),
            ConstantBinding("b", ResourceLookup('"b"', '"B"', table='"../escaped"')),
            ConstantBinding("c", ResourceLookup('"c"', '"C"')),
        ]
        with caplog.at_level(logging.WARNING, logger="localizing.catalog.xcstrings"):
            catalogs = build_string_catalog(members, "en")
        assert list(catalogs) == ["Localizable"]
        assert caplog.text.count("naming a catalog file") == 2

    def test_invalid_unicode_escape_kept(self) -> None:
        """An escape beyond U+10FFFF is exported as written."""
        members = [ConstantBinding("a", ResourceLookup('"a"', '"x\\u{110000}"'))]
        catalog = build_string_catalog(members, "en")["Localizable"]
        unit = catalog["strings"]["a"]["localizations"]["en"]["stringUnit"]
        assert unit["value"] == "x\\u{110000}"


class TestSerialization:
    """JSON layout and files."""

    def test_dump_layout(self) -> None:
        """Xcode style: two-space indent, ' : ' separators, sorted keys."""
        members = [ConstantBinding("a", ResourceLookup('"a"', '"Ä"'))]
        text = dump_string_catalog(build_string_catalog(members, "de")["Localizable"])
        assert text.startswith('{\n  "sourceLanguage" : "de",\n  "strings" : {')
        assert '"value" : "Ä"' in text
        assert json.loads(text)["version"] == "1.0"

    def test_write(self, tmp_path: Path) -> None:
        """One file per catalog, newline-terminated."""
        catalogs = build_string_catalog(expand_source(SOURCE), "en")
        paths = write_string_catalogs(catalogs, tmp_path / "out")
        assert [p.name for p in paths] == ["Errors.xcstrings", "Localizable.xcstrings"]
        content = paths[1].read_text(encoding="utf-8")
        assert content.endswith("}\n")
        assert json.loads(content)["strings"]["about.title"]
