"""
Declaration data models.

Models for the per-file import/export declarations supplied by the host
bundler, and for the import edges derived from them.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError


class DeclarationType(str, Enum):
    """Kinds of module declarations reported by the host."""

    IMPORT = "ImportDeclaration"
    DYNAMIC_IMPORT = "DynamicImport"
    EXPORT_NAMED = "ExportNamedDeclaration"
    EXPORT_ALL = "ExportAllDeclaration"


class DeclareKind(str, Enum):
    """Whether a declaration carries values or only types."""

    VALUE = "value"
    TYPE = "type"


class ImportSpecifier(BaseModel):
    """One binding introduced by an import statement."""

    type: str = Field(description="ImportDefaultSpecifier, ImportNamespaceSpecifier or ImportSpecifier")
    local: Optional[str] = Field(default=None, description="Local binding name")
    imported: Optional[str] = Field(default=None, description="Name exported by the source module")

    class Config:
        frozen = True


class ExportSpecifier(BaseModel):
    """One name re-exported by an export declaration."""

    type: str = Field(description="ExportDefaultSpecifier, ExportNamespaceSpecifier or ExportSpecifier")
    local: Optional[str] = Field(default=None, description="Name taken from the source module")
    exported: Optional[str] = Field(default=None, description="Name exposed to importers")

    class Config:
        frozen = True


class ImportDeclaration(BaseModel):
    """A static `import ... from "source"` statement."""

    type: DeclarationType = DeclarationType.IMPORT
    source: str
    specifiers: list[ImportSpecifier] = Field(default_factory=list)
    import_kind: DeclareKind = Field(default=DeclareKind.VALUE, alias="importKind")

    class Config:
        frozen = True
        populate_by_name = True


class DynamicImport(BaseModel):
    """A dynamic `import("source")` expression."""

    type: DeclarationType = DeclarationType.DYNAMIC_IMPORT
    source: str

    class Config:
        frozen = True


class ExportNamedDeclaration(BaseModel):
    """An `export { a, b } from "source"` statement (source may be absent)."""

    type: DeclarationType = DeclarationType.EXPORT_NAMED
    source: Optional[str] = None
    specifiers: list[ExportSpecifier] = Field(default_factory=list)
    export_kind: DeclareKind = Field(default=DeclareKind.VALUE, alias="exportKind")

    class Config:
        frozen = True
        populate_by_name = True


class ExportAllDeclaration(BaseModel):
    """An `export * from "source"` statement."""

    type: DeclarationType = DeclarationType.EXPORT_ALL
    source: str

    class Config:
        frozen = True


Declaration = Union[
    ImportDeclaration,
    DynamicImport,
    ExportNamedDeclaration,
    ExportAllDeclaration,
]

_DECLARATION_MODELS: dict[str, type[BaseModel]] = {
    DeclarationType.IMPORT.value: ImportDeclaration,
    DeclarationType.DYNAMIC_IMPORT.value: DynamicImport,
    DeclarationType.EXPORT_NAMED.value: ExportNamedDeclaration,
    DeclarationType.EXPORT_ALL.value: ExportAllDeclaration,
}


def parse_declaration(raw: Any) -> Optional[Declaration]:
    """
    Build a declaration model from a host record.

    Args:
        raw: A declaration model or a dict as produced by the host.

    Returns:
        The parsed declaration, or None when the record has an unknown
        type or is missing required fields.
    """
    if isinstance(raw, tuple(_DECLARATION_MODELS.values())):
        return raw
    if not isinstance(raw, dict):
        return None

    declaration_type = raw.get("type")
    if not isinstance(declaration_type, str):
        return None

    model = _DECLARATION_MODELS.get(declaration_type)
    if model is None:
        return None

    try:
        return model.model_validate(raw)
    except ValidationError:
        return None


class ImportEdge(BaseModel):
    """One import statement's contribution to the file-import graph."""

    source: str = Field(description="Raw import specifier")
    local_bindings: tuple[str, ...] = Field(
        default=(),
        description="Local names bound by the statement, in source order",
    )

    class Config:
        frozen = True
