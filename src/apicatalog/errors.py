"""Exceptions raised while loading and querying API catalogs."""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class CatalogError(Exception):
    """Base class for catalog errors."""


class CatalogParseError(CatalogError, ValueError):
    """Raised when a catalog document does not match the expected schema."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self.source = source
        self.errors = list(errors or [])
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class TypeNotFoundError(CatalogError, KeyError):
    """Raised when a type is not present in the catalog."""

    def __init__(self, package_name: str, name: str) -> None:
        self.package_name = package_name
        self.name = name
        super().__init__(f"{package_name}.{name}")

    def __str__(self) -> str:
        return f"Type {self.package_name}.{self.name} not found in catalog"
