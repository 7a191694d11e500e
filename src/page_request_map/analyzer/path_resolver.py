"""
Module path resolution.

Turns raw JS/TS import specifiers into concrete file identities on disk,
following the bundler conventions the analyzed projects rely on: alias-rooted
specifiers, relative specifiers, omitted extensions and directory indexes.
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".jsx", ".js", ".tsx", ".ts")


def to_identity(path: Union[Path, str]) -> str:
    """
    Convert a path into a file identity.

    Identities are normalized, use forward slashes, and carry no trailing
    separator, so they compare equal for the same file.
    """
    return os.path.normpath(str(path)).replace("\\", "/")


class ModulePathResolver:
    """
    Resolve import specifiers to candidate files.

    Resolution never fails: anything that cannot be matched on disk
    resolves to an empty candidate list. Results are memoized for one
    resolution pass and must be dropped with clear_cache() afterwards,
    because files may be added or removed between builds.
    """

    def __init__(
        self,
        src_root: Union[Path, str],
        alias: str = "@",
        extensions: Optional[list[str]] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            src_root: Absolute path of the source tree root.
            alias: Token that stands for the source root (e.g. "@").
            extensions: Recognized extensions, in lookup order.
        """
        self.src_root = to_identity(os.path.abspath(str(src_root)))
        self.alias = alias
        self.extensions = tuple(extensions or DEFAULT_EXTENSIONS)

        self._rooted_re = re.compile(rf"^(?:{re.escape(alias)})?[/\\]")
        ext_pattern = "|".join(re.escape(ext) for ext in self.extensions)
        self._index_re = re.compile(rf"^index(?:{ext_pattern})$")

        self._cache: dict[str, list[str]] = {}
        self._ambiguities: dict[str, list[str]] = {}

    def is_rooted(self, specifier: str) -> bool:
        """Check whether a specifier is alias-rooted or root-absolute."""
        return bool(self._rooted_re.match(specifier))

    def is_local(self, specifier: str) -> bool:
        """Check whether a specifier points into the project rather than a package."""
        return specifier.startswith(".") or self.is_rooted(specifier)

    def resolve_alias(self, specifier: str) -> str:
        """
        Rewrite a rooted specifier into an absolute path under the source root.

        Args:
            specifier: Raw import specifier.

        Returns:
            The absolute path for rooted specifiers, the specifier unchanged
            otherwise.
        """
        if not self.is_rooted(specifier):
            return specifier
        remainder = self._rooted_re.sub("", specifier, count=1)
        return to_identity(os.path.join(self.src_root, remainder))

    def join_relative(self, origin: str, specifier: str) -> str:
        """
        Join a relative specifier against the directory of the importing file.

        Args:
            origin: File identity of the importing file.
            specifier: Raw import specifier.

        Returns:
            The joined path, or the result of resolve_alias() for
            non-relative specifiers.
        """
        if specifier.startswith("."):
            return to_identity(os.path.join(os.path.dirname(origin), specifier))
        return self.resolve_alias(specifier)

    def normalize(self, candidate: str) -> list[str]:
        """
        Map a path candidate to the files it can refer to.

        Args:
            candidate: Absolute path, possibly without extension or pointing
                at a directory.

        Returns:
            Matching file identities. More than one entry means the
            candidate is ambiguous; callers must treat the result as a set.
        """
        if not candidate:
            return []

        cached = self._cache.get(candidate)
        if cached is not None:
            return list(cached)

        matches = self._normalize(candidate)
        self._cache[candidate] = matches

        if len(matches) > 1:
            self._ambiguities[candidate] = list(matches)
            logger.warning(
                "Ambiguous import %s matches %d files: %s",
                candidate,
                len(matches),
                ", ".join(matches),
            )

        return list(matches)

    def _normalize(self, candidate: str) -> list[str]:
        """Uncached body of normalize()."""
        extension = os.path.splitext(os.path.basename(candidate))[1]

        if not os.path.exists(candidate):
            if extension:
                logger.debug("Dead import: %s", candidate)
                return []
            return [
                match
                for added in self.extensions
                for match in self.normalize(candidate + added)
            ]

        if os.path.isfile(candidate):
            return [candidate] if extension in self.extensions else []

        if os.path.isdir(candidate):
            try:
                children = os.listdir(candidate)
            except OSError as e:
                logger.debug("Cannot list %s: %s", candidate, e)
                return []
            index_files = sorted(
                (name for name in children if self._index_re.match(name)),
                key=lambda name: self.extensions.index(os.path.splitext(name)[1]),
            )
            return [
                match
                for name in index_files
                for match in self.normalize(to_identity(os.path.join(candidate, name)))
            ]

        return []

    def resolve(self, origin: str, specifier: str) -> list[str]:
        """
        Resolve a specifier as imported from a given file.

        Args:
            origin: File identity of the importing file.
            specifier: Raw import specifier.

        Returns:
            Matching file identities (possibly empty).
        """
        return self.normalize(self.join_relative(origin, specifier))

    @property
    def ambiguities(self) -> dict[str, list[str]]:
        """Candidates that matched more than one file during this pass."""
        return dict(self._ambiguities)

    def clear_cache(self) -> None:
        """Drop all memoized resolutions and ambiguity records."""
        self._cache.clear()
        self._ambiguities.clear()
