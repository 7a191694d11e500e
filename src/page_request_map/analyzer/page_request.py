"""
Page request resolver - maps page entries to the APIs they use.

This module combines service extraction, the import graph, path
resolution and reachability into one resolution pass:

1. Extracts API descriptors from the services directory
2. Builds the import graph from the host's declaration map
3. Resolves every page entry depth-first
4. Assembles the page request map and discards all pass caches
"""

import logging
import os
import time
from pathlib import Path
from typing import Any, Optional, Union

from page_request_map.analyzer.assembler import assemble_page_entries
from page_request_map.analyzer.import_graph import ImportGraph
from page_request_map.analyzer.path_resolver import ModulePathResolver, to_identity
from page_request_map.analyzer.reachability import ReachabilityResolver
from page_request_map.config import Config
from page_request_map.models.descriptor import ServiceGroupMap
from page_request_map.models.report import PageRequestReport
from page_request_map.parser.service_extractor import ServiceExtractor

logger = logging.getLogger(__name__)


class PageRequestResolver:
    """
    Compute the page request map for a front-end project.

    One instance lives as long as the host build session. Every call to
    create_page_request_map() is an independent pass: the import graph is
    rebuilt, and the path and reachability caches are discarded when the
    pass ends.

    The service map is re-extracted at the start of every pass unless
    ``resolver.refresh_services`` is off, in which case the host calls
    invalidate_services() when service files change.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        src_root: Optional[Union[Path, str]] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            config: Optional configuration object.
            src_root: Source tree root; overrides ``project.src_root``.
        """
        self.config = config or Config()
        root = src_root if src_root is not None else self.config.project.src_root
        self.src_root: Optional[str] = to_identity(os.path.abspath(str(root))) if root else None

        # These are lazily initialized
        self._service_map: Optional[ServiceGroupMap] = None
        self._path_resolver: Optional[ModulePathResolver] = None
        self._graph: Optional[ImportGraph] = None

    @property
    def service_map(self) -> ServiceGroupMap:
        """Get the service group map, extracting it if needed."""
        if self._service_map is None:
            if self.src_root is None:
                return {}
            extractor = ServiceExtractor(
                src_root=Path(self.src_root),
                services_dir=self.config.project.services_dir,
                extensions=self.config.resolver.extensions,
            )
            self._service_map = extractor.extract()
        return self._service_map

    def invalidate_services(self) -> None:
        """Forget the extracted service map; the next pass re-extracts it."""
        self._service_map = None

    @property
    def path_resolver(self) -> ModulePathResolver:
        """Get the module path resolver, initializing if needed."""
        if self._path_resolver is None:
            self._path_resolver = ModulePathResolver(
                src_root=self.src_root or "",
                alias=self.config.project.alias,
                extensions=self.config.resolver.extensions,
            )
        return self._path_resolver

    @property
    def graph(self) -> ImportGraph:
        """Get the import graph, initializing if needed."""
        if self._graph is None:
            self._graph = ImportGraph(
                src_root=self.src_root or "",
                alias=self.config.project.alias,
                follow_dynamic_imports=self.config.resolver.follow_dynamic_imports,
                follow_reexports=self.config.resolver.follow_reexports,
            )
        return self._graph

    def create_page_request_map(
        self,
        file_imports: Optional[dict[str, Optional[list[Any]]]],
    ) -> PageRequestReport:
        """
        Run one resolution pass.

        Args:
            file_imports: Absolute file path -> declaration records, as
                supplied by the host bundler.

        Returns:
            The report for this pass. Without a source root or a
            declaration map the report is empty and carries an error.
        """
        start_time = time.perf_counter()

        if self.src_root is None:
            return PageRequestReport(errors=["No source root configured"])
        if file_imports is None:
            return PageRequestReport(
                src_root=self.src_root,
                errors=["No declaration map supplied"],
            )

        if self.config.resolver.refresh_services:
            self.invalidate_services()
        service_map = self.service_map

        project = self.config.project
        graph = self.graph.build(file_imports)
        reachability = ReachabilityResolver(
            graph=graph,
            path_resolver=self.path_resolver,
            service_map=service_map,
            services_dir=project.services_dir,
        )

        warnings: list[str] = []
        try:
            results = [
                (file_id, reachability.resolve(file_id))
                for file_id in graph.entries(
                    pages_dir=project.pages_dir,
                    page_extensions=self.config.resolver.page_extensions,
                )
            ]
            for candidate, matches in self.path_resolver.ambiguities.items():
                shown = ", ".join(graph.display_identity(m) for m in matches)
                warnings.append(
                    f"Ambiguous import {graph.display_identity(candidate)} matches {len(matches)} files: {shown}"
                )
        finally:
            self.path_resolver.clear_cache()
            reachability.clear_cache()

        entries = assemble_page_entries(
            results,
            alias=project.alias,
            pages_dir=project.pages_dir,
        )
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "page request map built in %d ms (%d pages, %d files)",
            duration_ms,
            len(entries),
            len(graph),
        )

        return PageRequestReport(
            src_root=self.src_root,
            entries=entries,
            total_files=len(graph),
            service_groups=len(service_map),
            duration_ms=duration_ms,
            warnings=warnings,
        )
