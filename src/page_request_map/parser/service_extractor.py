"""
Service descriptor extraction using text patterns.

This module recovers API descriptors from service source files without
parsing them. It understands one narrow source shape:

    export async function getUser(id: string) {
      return request<User>(`/api/user/${id}`, {
        method: 'GET',
      });
    }

Anything that does not match that shape yields no descriptor.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from page_request_map.models.descriptor import ApiDescriptor, ServiceGroupMap

logger = logging.getLogger(__name__)

# Quoted strings are matched first so `/*` or `//` inside a URL is kept
_COMMENT_OR_STRING_RE = re.compile(
    r"""(?P<string>'(?:\\.|[^'\\\n])*'|"(?:\\.|[^"\\\n])*"|`(?:\\.|[^`\\])*`)"""
    r"|/\*.*?\*/|//[^\n]*",
    re.DOTALL,
)
_EXPORT_SPLIT_RE = re.compile(r"\bexport\s+")

_FUNCTION_RE = re.compile(r"\bfunction\s*\*?\s*([A-Za-z_$][\w$]*)\s*(?:<[^>]*>)?\s*\(")
_METHOD_RE = re.compile(r"\bmethod\s*:\s*(['\"`])(\w+)\1")
_URL_RE = re.compile(
    r"[\w$.]*request[\w$.]*\s*(?:<[^()]*?>)?\s*\(\s*(['\"`])(.*?)\1",
    re.IGNORECASE,
)


def strip_comments(source: str) -> str:
    """Remove block and line comments from JS/TS source text, keeping string literals."""
    return _COMMENT_OR_STRING_RE.sub(lambda match: match.group("string") or "", source)


def extract_descriptors(source: str) -> dict[str, ApiDescriptor]:
    """
    Extract API descriptors from the text of one service file.

    Args:
        source: Service file contents.

    Returns:
        Mapping of function name to descriptor. Later definitions of the
        same name replace earlier ones.
    """
    descriptors: dict[str, ApiDescriptor] = {}

    for fragment in _EXPORT_SPLIT_RE.split(strip_comments(source)):
        descriptor = _descriptor_from_fragment(fragment)
        if descriptor is not None:
            descriptors[descriptor.name] = descriptor

    return descriptors


def _descriptor_from_fragment(fragment: str) -> Optional[ApiDescriptor]:
    """Build a descriptor from one export fragment, or None if incomplete."""
    function_match = _FUNCTION_RE.search(fragment)
    method_match = _METHOD_RE.search(fragment)
    url_match = _URL_RE.search(fragment)

    if not function_match or not method_match or not url_match:
        return None

    return ApiDescriptor(
        name=function_match.group(1),
        method=method_match.group(2),
        url=url_match.group(2),
    )


class ServiceExtractor:
    """
    Build the service group map for a source tree.

    Every immediate subdirectory of the services directory is a group;
    every recognized source file directly inside a group contributes
    its descriptors to that group.
    """

    def __init__(
        self,
        src_root: Path,
        services_dir: str = "services",
        extensions: Optional[list[str]] = None,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            src_root: Root of the source tree.
            services_dir: Name of the services directory under the root.
            extensions: Recognized source file extensions.
        """
        self.services_path = Path(src_root) / services_dir
        self.extensions = tuple(extensions or [".jsx", ".js", ".tsx", ".ts"])

    def _is_service_file(self, file_path: Path) -> bool:
        """Check whether a file inside a group holds service functions."""
        if not file_path.is_file() or file_path.name.endswith(".d.ts"):
            return False
        return file_path.suffix in self.extensions

    def extract_group(self, group_path: Path) -> dict[str, ApiDescriptor]:
        """
        Extract all descriptors of a single group directory.

        Args:
            group_path: Path to the group directory.

        Returns:
            Mapping of function name to descriptor for the group.
        """
        functions: dict[str, ApiDescriptor] = {}

        for file_path in sorted(group_path.iterdir()):
            if not self._is_service_file(file_path):
                continue
            try:
                source = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("Skipping unreadable service file %s: %s", file_path, e)
                continue
            functions.update(extract_descriptors(source))

        return functions

    def extract(self) -> ServiceGroupMap:
        """
        Extract the service group map.

        Returns:
            Mapping of group name to its function descriptors. Empty when
            the services directory does not exist.
        """
        if not self.services_path.is_dir():
            logger.debug("No services directory at %s", self.services_path)
            return {}

        service_map: ServiceGroupMap = {}
        for group_path in sorted(self.services_path.iterdir()):
            if group_path.is_dir():
                service_map[group_path.name] = self.extract_group(group_path)

        logger.debug(
            "Extracted %d service functions in %d groups",
            sum(len(group) for group in service_map.values()),
            len(service_map),
        )
        return service_map
