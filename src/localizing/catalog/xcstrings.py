"""String catalog (.xcstrings) export.

Builds one String Catalog document per lookup table from the members
generated by an expansion, so that keys and default values written in the
key-enumeration can be handed to translators without running Xcode's
extraction:

    {
      "sourceLanguage" : "en",
      "strings" : {
        "about.key1" : {
          "extractionState" : "manual",
          "localizations" : {
            "en" : {
              "stringUnit" : {
                "state" : "translated",
                "value" : "Localized value 1"
              }
            }
          }
        }
      },
      "version" : "1.0"
    }

The ``nil`` table is Xcode's default ``Localizable`` catalog. Members whose
table is not a string literal, or whose value is not a plain file name,
cannot be assigned to a catalog and are skipped with a warning.

Requires the optional ``babel`` extra to validate the source language.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, TypeAlias

from localizing.constants import CATALOG_DEFAULT_TABLE, CATALOG_VERSION, DEFAULT_TABLE
from localizing.core.babel_compat import require_babel
from localizing.expansion import ExpansionReport, GeneratedDeclaration
from localizing.locale_utils import canonical_language_tag
from localizing.syntax.parser.primitives import decode_string_literal, is_simple_string_literal

__all__ = [
    "CATALOG_EXTENSION",
    "build_string_catalog",
    "catalog_table_name",
    "dump_string_catalog",
    "write_string_catalogs",
]

logger = logging.getLogger(__name__)

CATALOG_EXTENSION: str = ".xcstrings"

StringCatalog: TypeAlias = dict[str, Any]


def catalog_table_name(table: str) -> str | None:
    """Catalog name for a table expression.

    None when the table is not a literal or its value cannot serve as a
    file name (empty, or containing a path component).

    Example:
        >>> catalog_table_name("nil")
        'Localizable'
        >>> catalog_table_name('"tbl"')
        'tbl'
        >>> catalog_table_name("tableName") is None
        True
        >>> catalog_table_name('"../tbl"') is None
        True
    """
    if table == DEFAULT_TABLE:
        return CATALOG_DEFAULT_TABLE
    if not is_simple_string_literal(table):
        return None
    name = decode_string_literal(table)
    if not name or Path(name).name != name or any(ch in name for ch in "\\\0"):
        return None
    return name


def _entry(language: str, value: str, comment: str) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "extractionState": "manual",
        "localizations": {
            language: {"stringUnit": {"state": "translated", "value": value}},
        },
    }
    if comment:
        entry["comment"] = comment
    return entry


def build_string_catalog(
    report: ExpansionReport | Iterable[GeneratedDeclaration],
    source_language: str,
) -> dict[str, StringCatalog]:
    """Build String Catalog documents from generated members.

    Args:
        report: Expansion report (members of successful declarations are
            used) or the generated members themselves
        source_language: Development language, BCP-47 or POSIX form

    Returns:
        Mapping of catalog name to catalog document, sorted by name

    Raises:
        BabelImportError: If Babel is not installed
        babel.core.UnknownLocaleError: If the source language is not recognized
        ValueError: If the source language is malformed
    """
    require_babel("build_string_catalog")
    language = canonical_language_tag(source_language)

    if isinstance(report, ExpansionReport):
        members: Iterable[GeneratedDeclaration] = (
            member for result in report.results for member in result.members
        )
    else:
        members = report

    catalogs: dict[str, StringCatalog] = {}
    for member in members:
        lookup = member.lookup
        table = catalog_table_name(lookup.table)
        if table is None:
            logger.warning(
                "Skipping %s: table %s is not a string literal naming a catalog file",
                member.name,
                lookup.table,
            )
            continue

        key = decode_string_literal(lookup.key)
        value = decode_string_literal(lookup.default_value)
        strings = catalogs.setdefault(
            table,
            {"sourceLanguage": language, "strings": {}, "version": CATALOG_VERSION},
        )["strings"]

        previous = strings.get(key)
        if previous is not None:
            old = previous["localizations"][language]["stringUnit"]["value"]
            if old != value:
                logger.warning(
                    "Key %r in %s redefined: %r replaces %r", key, table, value, old
                )
        strings[key] = _entry(language, value, decode_string_literal(lookup.comment))

    logger.debug("Built %d catalog(s) for %s", len(catalogs), language)
    return dict(sorted(catalogs.items()))


def dump_string_catalog(catalog: StringCatalog) -> str:
    """Serialize a catalog the way Xcode writes it (sorted keys, `` : ``)."""
    return json.dumps(
        catalog, indent=2, sort_keys=True, ensure_ascii=False, separators=(",", " : ")
    )


def write_string_catalogs(catalogs: Mapping[str, StringCatalog], directory: Path) -> list[Path]:
    """Write each catalog to ``<directory>/<name>.xcstrings``.

    Returns:
        Written paths, in catalog order
    """
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, catalog in catalogs.items():
        path = directory / f"{name}{CATALOG_EXTENSION}"
        path.write_text(dump_string_catalog(catalog) + "\n", encoding="utf-8")
        logger.debug("Wrote %s", path)
        written.append(path)
    return written
