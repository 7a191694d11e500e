"""
Parser package for Page Request Map.

This package contains modules for:
- Service descriptor extraction (text patterns over service sources)
- Declaration map loading (JSON / YAML host output)
"""

from page_request_map.parser.declaration_loader import (
    DeclarationLoader,
    DeclarationLoadError,
)
from page_request_map.parser.service_extractor import (
    ServiceExtractor,
    extract_descriptors,
)

__all__ = [
    "DeclarationLoader",
    "DeclarationLoadError",
    "ServiceExtractor",
    "extract_descriptors",
]
