"""Command-line interface for ``@LocalizedStrings`` expansion.

Usage:
    localizing expand Sources/L.swift
    localizing expand --mode legacy --separator . Sources/L.swift -o L.expanded.swift
    localizing catalog Sources/L.swift --source-language en -o Resources/

Exit Codes:
    0   Every annotated declaration expanded
    1   At least one declaration failed to expand (diagnostics on stderr)
    2   Input could not be read (missing file, syntax error, bad arguments)

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from localizing.catalog import (
    build_string_catalog,
    dump_string_catalog,
    write_string_catalogs,
)
from localizing.constants import DEFAULT_SEPARATOR
from localizing.core.babel_compat import (
    BabelImportError,
    get_unknown_locale_error,
    is_babel_available,
)
from localizing.diagnostics import (
    DeclarationSyntaxError,
    DiagnosticFormatter,
    OutputFormat,
)
from localizing.enums import GenerationMode
from localizing.expansion import ExpansionOptions, ExpansionReport, expand_source
from localizing.locale_utils import get_system_locale
from localizing.syntax.cursor import Cursor, ParseError

__all__ = ["build_parser", "main"]

logger = logging.getLogger("localizing")

EXIT_OK = 0
EXIT_EXPANSION_FAILED = 1
EXIT_INPUT_ERROR = 2

_EPILOG = """
Examples:
  # Print the expanded source:
  localizing expand Sources/App/L.swift

  # Legacy NSLocalizedString output with "." as default separator:
  localizing expand --mode legacy --separator . Sources/App/L.swift

  # Diagnostics as JSON lines for editors and CI:
  localizing expand --format json Sources/App/L.swift

  # Write Localizable.xcstrings (and one catalog per extra table):
  localizing catalog Sources/App/L.swift --source-language en -o Resources/
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="localizing",
        description="Expand @LocalizedStrings enums into localized string lookups.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="Swift source file ('-' reads stdin)")
    common.add_argument(
        "--mode",
        choices=[mode.value for mode in GenerationMode],
        default=GenerationMode.CURRENT.value,
        help="Lookup call shape (default: current)",
    )
    common.add_argument(
        "--separator",
        default=DEFAULT_SEPARATOR,
        help=f"Separator used when a prefix has none (default: {DEFAULT_SEPARATOR!r})",
    )
    common.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Diagnostic output format (default: rust)",
    )
    common.add_argument(
        "--no-separator-warning",
        action="store_true",
        help="Do not warn about prefixes without an explicit separator",
    )

    expand = subparsers.add_parser(
        "expand", parents=[common], help="Print or write the expanded source"
    )
    expand.add_argument("-o", "--output", type=Path, help="Write expanded source to file")

    catalog = subparsers.add_parser(
        "catalog", parents=[common], help="Export String Catalog (.xcstrings) documents"
    )
    catalog.add_argument(
        "--source-language",
        help="Development language, e.g. en or pt-BR (default: system locale)",
    )
    catalog.add_argument(
        "-o", "--output", type=Path, help="Directory receiving <table>.xcstrings files"
    )
    return parser


def _read_source(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8")


def _report_syntax_error(error: DeclarationSyntaxError, source: str, filename: str) -> None:
    diagnostic = error.diagnostic
    position = diagnostic.span.start if diagnostic and diagnostic.span else len(source)
    parse_error = ParseError(str(error), Cursor(source, min(position, len(source))))
    print(f"{filename}: {parse_error.format_with_context()}", file=sys.stderr)


def _expand(args: argparse.Namespace) -> tuple[ExpansionReport | None, int]:
    filename = "<stdin>" if args.file == "-" else args.file
    try:
        source = _read_source(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"[ERROR] Cannot read {filename}: {e}", file=sys.stderr)
        return None, EXIT_INPUT_ERROR

    try:
        options = ExpansionOptions(
            mode=GenerationMode(args.mode),
            default_separator=args.separator,
            warn_implicit_separator=not args.no_separator_warning,
        )
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return None, EXIT_INPUT_ERROR

    try:
        report = expand_source(source, options)
    except DeclarationSyntaxError as e:
        _report_syntax_error(e, source, filename)
        return None, EXIT_INPUT_ERROR

    if report.diagnostics:
        formatter = DiagnosticFormatter(
            output_format=OutputFormat(args.format), filename=filename
        )
        print(formatter.format_all(report.diagnostics), file=sys.stderr)

    logger.debug(
        "%s: %d declaration(s), %d error(s), %d warning(s)",
        filename,
        len(report.results),
        len(report.errors),
        len(report.warnings),
    )
    return report, EXIT_OK if report.succeeded else EXIT_EXPANSION_FAILED


def _run_expand(args: argparse.Namespace) -> int:
    report, status = _expand(args)
    if report is None:
        return status
    if args.output is not None:
        args.output.write_text(report.expanded, encoding="utf-8")
    else:
        sys.stdout.write(report.expanded)
    return status


def _run_catalog(args: argparse.Namespace) -> int:
    if not is_babel_available():
        print(f"[ERROR] {BabelImportError('localizing catalog')}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    report, status = _expand(args)
    if report is None:
        return status

    language = args.source_language or get_system_locale()
    try:
        catalogs = build_string_catalog(report, language)
    except (get_unknown_locale_error(), ValueError) as e:
        print(f"[ERROR] Invalid source language {language!r}: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if args.output is not None:
        for path in write_string_catalogs(catalogs, args.output):
            print(path)
    else:
        for name, catalog in catalogs.items():
            print(f"// {name}.xcstrings")
            print(dump_string_catalog(catalog))
    return status


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "catalog":
        return _run_catalog(args)
    return _run_expand(args)


if __name__ == "__main__":
    sys.exit(main())
