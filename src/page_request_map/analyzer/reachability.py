"""
Reachability resolution over the file-import graph.

Walks import edges depth-first from a file until it reaches service
modules, and collects the API descriptors bound along the way.
"""

import logging
from pathlib import Path
from typing import Union

from page_request_map.analyzer.import_graph import ImportGraph
from page_request_map.analyzer.path_resolver import ModulePathResolver, to_identity
from page_request_map.models.declaration import ImportEdge
from page_request_map.models.descriptor import (
    ApiDescriptor,
    ServiceGroupMap,
    dedupe_descriptors,
)

logger = logging.getLogger(__name__)


class ReachabilityResolver:
    """
    Memoized depth-first resolution of the APIs a file depends on.

    Each file moves through unvisited -> in progress -> memoized. A file
    that is reached again while still in progress (an import cycle)
    contributes an empty list to that visit; files finished inside the
    cycle keep the partial result they computed.

    Output order is first discovery in a left-to-right, depth-first walk
    of import edges; later duplicates by (method, url) are dropped.
    """

    def __init__(
        self,
        graph: ImportGraph,
        path_resolver: ModulePathResolver,
        service_map: ServiceGroupMap,
        services_dir: str = "services",
    ) -> None:
        """
        Initialize the resolver.

        Args:
            graph: The import graph of the current pass.
            path_resolver: Resolver for import specifiers.
            service_map: Group name -> function name -> descriptor.
            services_dir: Name of the services directory under the source root.
        """
        self.graph = graph
        self.path_resolver = path_resolver
        self.service_map = service_map
        self.services_root = to_identity(f"{path_resolver.src_root}/{services_dir}")
        self._memo: dict[str, list[ApiDescriptor]] = {}
        self._in_progress: set[str] = set()
        self._cycles: list[str] = []

    def resolve(self, file_path: Union[Path, str]) -> list[ApiDescriptor]:
        """
        Get the deduplicated APIs a file transitively depends on.

        Args:
            file_path: Absolute path or display identity of the file.

        Returns:
            Descriptors in first-discovery order.
        """
        file_id = self.graph.display_identity(file_path)

        memoized = self._memo.get(file_id)
        if memoized is not None:
            return list(memoized)

        if file_id in self._in_progress:
            logger.debug("Import cycle reaches %s again", file_id)
            self._cycles.append(file_id)
            return []

        origin = self.graph.absolute_identity(file_id)
        collected: list[ApiDescriptor] = []

        self._in_progress.add(file_id)
        try:
            for edge in self.graph.edges(file_id):
                collected.extend(self._resolve_edge(origin, edge))
        finally:
            self._in_progress.discard(file_id)

        result = dedupe_descriptors(collected)
        self._memo[file_id] = result
        return list(result)

    def _resolve_edge(self, origin: str, edge: ImportEdge) -> list[ApiDescriptor]:
        """Collect the descriptors contributed by one import edge."""
        target = self.path_resolver.join_relative(origin, edge.source)

        group = self.service_group(target)
        if group is not None:
            return self.lookup_services(group, edge.local_bindings)

        if not self.path_resolver.is_local(edge.source):
            return []

        collected: list[ApiDescriptor] = []
        for candidate in self.path_resolver.normalize(target):
            collected.extend(self.resolve(candidate))
        return collected

    def service_group(self, target: str) -> str | None:
        """
        Get the service group a resolved import target belongs to.

        Args:
            target: Absolute path of the import target.

        Returns:
            The path segment right after the services root, or None when
            the target is not inside a service group.
        """
        prefix = f"{self.services_root}/"
        if not target.startswith(prefix):
            return None
        group = target[len(prefix):].split("/", 1)[0]
        return group or None

    def lookup_services(
        self,
        group: str,
        bindings: tuple[str, ...],
    ) -> list[ApiDescriptor]:
        """
        Look up imported names in a service group.

        Names that are not API functions of the group are ignored.

        Args:
            group: Service group name.
            bindings: Local names bound by the import.

        Returns:
            Descriptors of the names found, in binding order.
        """
        functions = self.service_map.get(group)
        if not functions:
            return []
        return [functions[name] for name in bindings if name in functions]

    @property
    def cycles(self) -> list[str]:
        """Files that were reached again while still being resolved."""
        return list(self._cycles)

    def clear_cache(self) -> None:
        """Drop memoized results and traversal state."""
        self._memo.clear()
        self._in_progress.clear()
        self._cycles.clear()
