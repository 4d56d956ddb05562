"""Pydantic models describing the API catalog schema."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_validator,
)

from .errors import TypeNotFoundError


TypeKind = Literal["Class", "AbstractClass"]
TYPE_KINDS: Tuple[str, ...] = ("Class", "AbstractClass")


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


class TypeDescriptor(BaseModel):
    """A declared type (class or abstract class) and the package owning it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    package_name: str = Field(alias="packageName")
    kind: TypeKind = Field(alias="type")
    modifiers: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("modifiers")
    @classmethod
    def freeze_modifiers(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return _freeze(value)

    @field_serializer("modifiers")
    def serialize_modifiers(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return _thaw(value)

    def __hash__(self) -> int:
        return hash((self.package_name, self.name, self.kind))

    @property
    def key(self) -> Tuple[str, str]:
        return (self.package_name, self.name)

    @property
    def qualified_name(self) -> str:
        if not self.package_name:
            return self.name
        return f"{self.package_name}.{self.name}"

    @property
    def is_abstract(self) -> bool:
        return self.kind == "AbstractClass"

    def as_record(self) -> Dict[str, Any]:
        """Return a JSON-serialisable mapping using the catalog field names."""

        return self.model_dump(by_alias=True, mode="json")


class CatalogRoot(BaseModel):
    """Read-only snapshot of the documentation index.

    Collections are stored as tuples so a loaded catalog cannot be changed in
    place. Validation accepts two context flags:

    ``enforce_unique`` (default ``True``)
        reject catalogs declaring the same ``(packageName, name)`` twice.
    ``strict_references`` (default ``False``)
        reject catalogs whose types name a package missing from ``packages``.
    """

    model_config = ConfigDict(frozen=True)

    docs: Tuple[Any, ...]
    modules: Tuple[Any, ...]
    packages: Tuple[str, ...]
    types: Tuple[TypeDescriptor, ...]

    @model_validator(mode="after")
    def check_consistency(self, info: ValidationInfo) -> "CatalogRoot":
        context = info.context or {}
        if context.get("enforce_unique", True):
            seen = set()
            for descriptor in self.types:
                if descriptor.key in seen:
                    raise ValueError(f"duplicate type {descriptor.qualified_name!r}")
                seen.add(descriptor.key)
        if context.get("strict_references", False):
            undeclared = self.undeclared_packages()
            if undeclared:
                raise ValueError(f"types reference undeclared packages: {', '.join(undeclared)}")
        return self

    def lookup_type(self, package_name: str, name: str) -> Optional[TypeDescriptor]:
        """Return the descriptor for ``package_name.name`` or ``None``."""

        for descriptor in self.types:
            if descriptor.package_name == package_name and descriptor.name == name:
                return descriptor
        return None

    def require_type(self, package_name: str, name: str) -> TypeDescriptor:
        descriptor = self.lookup_type(package_name, name)
        if descriptor is None:
            raise TypeNotFoundError(package_name, name)
        return descriptor

    def list_types_in_package(self, package_name: str) -> Tuple[TypeDescriptor, ...]:
        """Return the types owned by ``package_name`` in catalog order."""

        return tuple(descriptor for descriptor in self.types if descriptor.package_name == package_name)

    def list_types(
        self, kind: Optional[str] = None, package_name: Optional[str] = None
    ) -> Tuple[TypeDescriptor, ...]:
        if kind is not None and kind not in TYPE_KINDS:
            raise ValueError(f"kind must be one of {list(TYPE_KINDS)}; got {kind!r}")
        return tuple(
            descriptor
            for descriptor in self.types
            if (kind is None or descriptor.kind == kind)
            and (package_name is None or descriptor.package_name == package_name)
        )

    def undeclared_packages(self) -> List[str]:
        """Return package names used by types but absent from ``packages``."""

        declared = set(self.packages)
        missing: List[str] = []
        for descriptor in self.types:
            if descriptor.package_name not in declared and descriptor.package_name not in missing:
                missing.append(descriptor.package_name)
        return missing

    def as_record(self) -> Dict[str, Any]:
        """Return a JSON-serialisable mapping using the catalog field names."""

        return self.model_dump(by_alias=True, mode="json")


class CatalogSummary(BaseModel):
    """Aggregate counts over a catalog."""

    total_types: int
    total_packages: int
    kinds: Dict[str, int]
    packages: Dict[str, int]
    undeclared_packages: List[str] = Field(default_factory=list)

    @classmethod
    def from_root(cls, root: CatalogRoot) -> "CatalogSummary":
        kinds: Dict[str, int] = {kind: 0 for kind in TYPE_KINDS}
        packages: Dict[str, int] = {name: 0 for name in root.packages}
        for descriptor in root.types:
            kinds[descriptor.kind] = kinds.get(descriptor.kind, 0) + 1
            packages[descriptor.package_name] = packages.get(descriptor.package_name, 0) + 1
        return cls(
            total_types=len(root.types),
            total_packages=len(root.packages),
            kinds=kinds,
            packages=packages,
            undeclared_packages=root.undeclared_packages(),
        )
