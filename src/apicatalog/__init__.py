"""Read-only index of documented API types grouped by package."""

from .errors import CatalogError, CatalogParseError, TypeNotFoundError
from .loader import from_mapping, load, loads
from .schema import TYPE_KINDS, CatalogRoot, CatalogSummary, TypeDescriptor, TypeKind
from .writer import dump, dumps, dumps_script, export_table

__all__ = [
    "CatalogError",
    "CatalogParseError",
    "TypeNotFoundError",
    "from_mapping",
    "load",
    "loads",
    "TYPE_KINDS",
    "CatalogRoot",
    "CatalogSummary",
    "TypeDescriptor",
    "TypeKind",
    "dump",
    "dumps",
    "dumps_script",
    "export_table",
]
