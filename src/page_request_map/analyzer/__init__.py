"""
Analyzer package for Page Request Map.

This package contains modules for:
- Import specifier resolution to files on disk
- File-import graph construction from host declarations
- Memoized reachability from page entries to service APIs
- Page request map assembly and pass orchestration
"""

from page_request_map.analyzer.import_graph import ImportGraph
from page_request_map.analyzer.page_request import PageRequestResolver
from page_request_map.analyzer.path_resolver import ModulePathResolver
from page_request_map.analyzer.reachability import ReachabilityResolver

__all__ = [
    "ImportGraph",
    "ModulePathResolver",
    "PageRequestResolver",
    "ReachabilityResolver",
]
