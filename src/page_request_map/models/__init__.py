"""
Data models for Page Request Map.

This package contains Pydantic models for representing API descriptors,
host declarations, import edges, and resolution reports.
"""

from page_request_map.models.descriptor import (
    ApiDescriptor,
    ServiceGroupMap,
    dedupe_descriptors,
)
from page_request_map.models.declaration import (
    Declaration,
    DeclarationType,
    DeclareKind,
    DynamicImport,
    ExportAllDeclaration,
    ExportNamedDeclaration,
    ExportSpecifier,
    ImportDeclaration,
    ImportEdge,
    ImportSpecifier,
    parse_declaration,
)
from page_request_map.models.report import (
    PageEntry,
    PageRequestReport,
)

__all__ = [
    # Descriptor models
    "ApiDescriptor",
    "ServiceGroupMap",
    "dedupe_descriptors",
    # Declaration models
    "Declaration",
    "DeclarationType",
    "DeclareKind",
    "DynamicImport",
    "ExportAllDeclaration",
    "ExportNamedDeclaration",
    "ExportSpecifier",
    "ImportDeclaration",
    "ImportEdge",
    "ImportSpecifier",
    "parse_declaration",
    # Report models
    "PageEntry",
    "PageRequestReport",
]
