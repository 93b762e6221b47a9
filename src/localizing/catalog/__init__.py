"""String catalog export.

Python 3.13+.
"""

from .xcstrings import (
    CATALOG_EXTENSION,
    build_string_catalog,
    catalog_table_name,
    dump_string_catalog,
    write_string_catalogs,
)

__all__ = [
    "CATALOG_EXTENSION",
    "build_string_catalog",
    "catalog_table_name",
    "dump_string_catalog",
    "write_string_catalogs",
]
