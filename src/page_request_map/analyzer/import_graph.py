"""
File-import graph construction.

Builds the adjacency structure the reachability resolver walks: file
display identity -> ordered import edges, restricted to local value
imports. The graph is rebuilt from scratch for every resolution pass.
"""

import logging
import re
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Union

from page_request_map.analyzer.path_resolver import to_identity
from page_request_map.models.declaration import (
    Declaration,
    DeclareKind,
    DynamicImport,
    ExportAllDeclaration,
    ExportNamedDeclaration,
    ImportDeclaration,
    ImportEdge,
    parse_declaration,
)

logger = logging.getLogger(__name__)

# npm-style package names: react, lodash/fp, @ant-design/icons
BARE_SPECIFIER_RE = re.compile(r"^@?[a-zA-Z]")


def is_bare_specifier(source: str) -> bool:
    """Check whether an import source names an installed package."""
    return bool(BARE_SPECIFIER_RE.match(source))


class ImportGraph:
    """
    Per-file import edges keyed by display identity.

    Display identities replace the source root with the alias token
    (``<src>/pages/A.tsx`` -> ``@/pages/A.tsx``); files outside the source
    root keep their absolute identity.
    """

    def __init__(
        self,
        src_root: Union[Path, str],
        alias: str = "@",
        follow_dynamic_imports: bool = False,
        follow_reexports: bool = False,
    ) -> None:
        """
        Initialize an empty graph.

        Args:
            src_root: Absolute path of the source tree root.
            alias: Token that stands for the source root.
            follow_dynamic_imports: Keep dynamic import() targets as edges.
            follow_reexports: Keep `export ... from` sources as edges.
        """
        self.src_root = to_identity(src_root)
        self.alias = alias
        self.follow_dynamic_imports = follow_dynamic_imports
        self.follow_reexports = follow_reexports
        self._edges: dict[str, list[ImportEdge]] = {}
        self._skipped = 0

    def display_identity(self, file_path: Union[Path, str]) -> str:
        """
        Convert an absolute file path into its display identity.

        Display identities pass through unchanged.
        """
        identity = str(file_path).replace("\\", "/")
        if identity == self.alias or identity.startswith(f"{self.alias}/"):
            return identity

        identity = to_identity(identity)
        if identity == self.src_root:
            return self.alias
        if identity.startswith(f"{self.src_root}/"):
            return self.alias + identity[len(self.src_root):]
        return identity

    def absolute_identity(self, file_id: str) -> str:
        """Convert a display identity back into an absolute file identity."""
        if file_id == self.alias:
            return self.src_root
        if file_id.startswith(f"{self.alias}/"):
            return self.src_root + file_id[len(self.alias):]
        return to_identity(file_id)

    def clear(self) -> None:
        """Remove all files and edges."""
        self._edges.clear()
        self._skipped = 0

    def build(self, file_imports: dict[str, Optional[list[Any]]]) -> "ImportGraph":
        """
        Build the graph from a host declaration map.

        Any previous contents are discarded first.

        Args:
            file_imports: Absolute file path -> declaration records.

        Returns:
            Self for method chaining.
        """
        self.clear()

        for file_path, declarations in file_imports.items():
            self._edges[self.display_identity(file_path)] = self.project(declarations or [])

        if self._skipped:
            logger.debug("Skipped %d malformed declarations", self._skipped)
        return self

    def project(self, declarations: Iterable[Any]) -> list[ImportEdge]:
        """
        Project one file's declarations onto import edges.

        Args:
            declarations: Raw records or declaration models, in source order.

        Returns:
            Edges for the local imports, in source order.
        """
        edges: list[ImportEdge] = []
        for raw in declarations:
            declaration = parse_declaration(raw)
            if declaration is None:
                self._skipped += 1
                continue
            edge = self._edge_for(declaration)
            if edge is not None:
                edges.append(edge)
        return edges

    def _edge_for(self, declaration: Declaration) -> Optional[ImportEdge]:
        """Build the edge for a declaration, or None if it is not followed."""
        if not declaration.source or is_bare_specifier(declaration.source):
            return None

        if isinstance(declaration, ImportDeclaration):
            if declaration.import_kind == DeclareKind.TYPE:
                return None
            bindings = tuple(s.local for s in declaration.specifiers if s.local)
            return ImportEdge(source=declaration.source, local_bindings=bindings)

        if isinstance(declaration, DynamicImport):
            if not self.follow_dynamic_imports:
                return None
            return ImportEdge(source=declaration.source)

        if isinstance(declaration, ExportNamedDeclaration):
            if not self.follow_reexports or declaration.export_kind == DeclareKind.TYPE:
                return None
            bindings = tuple(s.local for s in declaration.specifiers if s.local)
            return ImportEdge(source=declaration.source, local_bindings=bindings)

        if isinstance(declaration, ExportAllDeclaration):
            if not self.follow_reexports:
                return None
            return ImportEdge(source=declaration.source)

        return None

    def edges(self, file_path: Union[Path, str]) -> list[ImportEdge]:
        """
        Get the import edges of a file.

        Args:
            file_path: Absolute path or display identity.

        Returns:
            The file's edges; empty for files outside the supplied graph.
        """
        return list(self._edges.get(self.display_identity(file_path), []))

    def entries(
        self,
        pages_dir: str = "pages",
        page_extensions: Iterable[str] = (".tsx",),
    ) -> list[str]:
        """
        Find the page entry files.

        Args:
            pages_dir: Directory under the source root that holds pages.
            page_extensions: Extensions that mark a page component.

        Returns:
            Display identities of page entries, in declaration-map order.
        """
        prefix = f"{self.alias}/{pages_dir}/"
        extensions = tuple(page_extensions)
        return [
            file_id
            for file_id in self._edges
            if file_id.startswith(prefix) and file_id.endswith(extensions)
        ]

    @property
    def files(self) -> list[str]:
        """Display identities of all files in the graph."""
        return list(self._edges)

    def __len__(self) -> int:
        """Return the number of files in the graph."""
        return len(self._edges)

    def __iter__(self) -> Iterator[str]:
        """Iterate over display identities."""
        return iter(self._edges)

    def __contains__(self, file_path: object) -> bool:
        """Check if a file (absolute path or display identity) is in the graph."""
        if not isinstance(file_path, (str, Path)):
            return False
        return self.display_identity(file_path) in self._edges
